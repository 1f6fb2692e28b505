from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import viewsets, filters
from rest_framework.permissions import IsAuthenticated

from core.permissions import ReadOnlyOrManager
from core.responses import APIResponse
from apps.audit.utils import log_capacity_warning
from .models import Assignment
from .serializers import AssignmentSerializer, AssignmentWithCapacitySerializer
from .services import check_capacity


class AssignmentViewSet(viewsets.ModelViewSet):
    """
    Read: managers see every assignment, engineers only their own.
    Write: managers. Over-allocation is reported in the response, never blocked.
    """
    queryset = Assignment.objects.select_related("engineer", "engineer__user", "project").all()
    serializer_class = AssignmentSerializer
    permission_classes = [IsAuthenticated & ReadOnlyOrManager]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter, filters.SearchFilter]
    filterset_fields = ["engineer", "project"]
    ordering_fields = ["start_date", "end_date", "allocation_percentage"]
    search_fields = ["engineer__user__name", "engineer__user__email", "project__name", "role"]

    def get_queryset(self):
        qs = super().get_queryset()
        u = self.request.user
        if getattr(u, "role", "") == "MANAGER":
            return qs
        # ENGINEER: only their own
        return qs.filter(engineer__user=u)

    def _check(self, serializer, instance=None):
        data = serializer.validated_data
        engineer = data.get("engineer", getattr(instance, "engineer", None))
        return check_capacity(
            engineer,
            data.get("allocation_percentage", getattr(instance, "allocation_percentage", 0)),
            data.get("start_date", getattr(instance, "start_date", None)),
            data.get("end_date", getattr(instance, "end_date", None)),
            exclude=getattr(instance, "pk", None),
        )

    @extend_schema(responses={201: AssignmentWithCapacitySerializer})
    def create(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        check = self._check(ser)
        obj = ser.save()
        if check.over_allocated:
            log_capacity_warning(request, obj, check)
        data = {**AssignmentSerializer(obj).data, "capacity": check.as_dict()}
        return APIResponse.created(data, check.message if check.over_allocated else "Assignment created")

    @extend_schema(responses={200: AssignmentWithCapacitySerializer})
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        ser = self.get_serializer(instance, data=request.data, partial=partial)
        ser.is_valid(raise_exception=True)
        check = self._check(ser, instance)
        obj = ser.save()
        if check.over_allocated:
            log_capacity_warning(request, obj, check)
        data = {**AssignmentSerializer(obj).data, "capacity": check.as_dict()}
        return APIResponse.success(data, check.message if check.over_allocated else "Assignment updated")
