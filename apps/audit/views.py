from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, OpenApiParameter
from rest_framework import viewsets, filters
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from core.permissions import IsManager
from core.responses import APIResponse
from .models import AuditLog
from .serializers import AuditLogSerializer


class AuditLogViewSet(viewsets.ReadOnlyModelViewSet):
    """Audit journal, managers only."""
    queryset = AuditLog.objects.select_related("actor").all().order_by("-created_at")
    serializer_class = AuditLogSerializer
    permission_classes = [IsAuthenticated & IsManager]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ["action", "object_type", "object_id", "actor"]
    search_fields = ["object_type", "user_agent", "ip", "actor__email"]
    ordering_fields = ["created_at", "actor", "action"]

    @extend_schema(
        parameters=[OpenApiParameter("engineer", int, description="EngineerProfile id")],
        responses=AuditLogSerializer(many=True),
    )
    @action(detail=False, methods=["get"], url_path="capacity-warnings")
    def capacity_warnings(self, request):
        """Assignment writes that pushed an engineer over capacity, newest first."""
        qs = self.get_queryset().filter(action=AuditLog.ActionType.CAPACITY_WARNING)
        engineer = request.query_params.get("engineer")
        if engineer:
            if not engineer.isdigit():
                return APIResponse.validation_error({"engineer": ["expected an integer id"]})
            qs = qs.filter(diff_json__engineer=int(engineer))
        return APIResponse.success(AuditLogSerializer(qs, many=True).data)
