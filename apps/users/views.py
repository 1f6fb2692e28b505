from django.conf import settings
from django.shortcuts import get_object_or_404
from django.utils.dateparse import parse_date
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, OpenApiParameter

from rest_framework import viewsets, mixins, status, filters, views
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken

from core.permissions import IsEngineer, IsOwnProfileOrManager
from core.responses import APIResponse
from core.schemas import CapacitySnapshotSerializer
from apps.assignments.services import current_allocations, engineer_snapshot
from .models import EngineerProfile
from .serializers import (
    UserRegistrationSerializer, UserSerializer,
    EngineerProfileSerializer, EngineerProfileUpdateSerializer,
)
from .seed import create_seed_data


def _tokens_for(user) -> dict:
    refresh = RefreshToken.for_user(user)
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


def _query_date(request, *names):
    """First present query param among names, parsed as a date; raises ValueError on bad format."""
    for name in names:
        raw = request.query_params.get(name)
        if raw:
            parsed = parse_date(raw)
            if parsed is None:
                raise ValueError(f"{name}: expected YYYY-MM-DD, got '{raw}'")
            return parsed
    return None


# -------- Authentication / registration --------
class AuthViewSet(viewsets.ViewSet):
    permission_classes = [AllowAny]

    @action(detail=False, methods=["post"])
    def register(self, request):
        ser = UserRegistrationSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = ser.save()
        return Response(
            {"user": UserSerializer(user).data, **_tokens_for(user)},
            status=status.HTTP_201_CREATED
        )

    @action(detail=False, methods=["get"], permission_classes=[IsAuthenticated])
    def profile(self, request):
        data = UserSerializer(request.user).data
        prof = EngineerProfile.objects.filter(user=request.user).first()
        if prof:
            cap = EngineerProfileSerializer(prof, context={"request": request}).data
            data["current_allocation"] = cap["current_allocation"]
            data["available_capacity"] = cap["available_capacity"]
        return Response({"user": data})


# -------- Engineers --------
class EngineerProfileViewSet(mixins.ListModelMixin,
                             mixins.RetrieveModelMixin,
                             mixins.UpdateModelMixin,
                             viewsets.GenericViewSet):
    """
    Read: every authenticated user.
    Update: the engineer themselves or a manager.
    """
    queryset = EngineerProfile.objects.select_related("user").all()
    serializer_class = EngineerProfileSerializer
    permission_classes = [IsAuthenticated, IsOwnProfileOrManager]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ["seniority", "user__department"]
    search_fields = ["user__name", "user__email", "skills"]
    ordering_fields = ["max_capacity", "seniority", "user__name"]

    def get_serializer_class(self):
        if self.action in ("update", "partial_update"):
            return EngineerProfileUpdateSerializer
        return EngineerProfileSerializer

    def list(self, request, *args, **kwargs):
        qs = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(qs)
        rows = page if page is not None else list(qs)
        ctx = {**self.get_serializer_context(), "allocations": current_allocations(rows)}
        data = EngineerProfileSerializer(rows, many=True, context=ctx).data
        if page is not None:
            return self.get_paginated_response(data)
        return Response(data)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        ser = EngineerProfileUpdateSerializer(instance, data=request.data, partial=partial)
        ser.is_valid(raise_exception=True)
        ser.save()
        return Response(EngineerProfileSerializer(instance, context=self.get_serializer_context()).data)

    @extend_schema(
        parameters=[
            OpenApiParameter("start_date", str, description="YYYY-MM-DD", required=True),
            OpenApiParameter("end_date", str, description="YYYY-MM-DD", required=True),
        ],
        responses=CapacitySnapshotSerializer,
    )
    @action(detail=True, methods=["get"])
    def capacity(self, request, pk=None):
        """Allocated/available capacity of the engineer over a date range."""
        engineer = self.get_object()
        try:
            start = _query_date(request, "start_date", "startDate")
            end = _query_date(request, "end_date", "endDate")
        except ValueError as e:
            return APIResponse.validation_error({"date": [str(e)]})
        # InvalidDateRange for a missing or reversed range goes to the exception handler
        snap = engineer_snapshot(engineer, start, end)
        return APIResponse.success(snap.as_dict())

    @action(detail=False, methods=["get"], permission_classes=[IsAuthenticated, IsEngineer])
    def me(self, request):
        """The calling engineer's own profile with current capacity."""
        engineer = get_object_or_404(self.get_queryset(), user=request.user)
        return Response(EngineerProfileSerializer(engineer, context=self.get_serializer_context()).data)

    @action(detail=True, methods=["get"])
    def assignments(self, request, pk=None):
        from apps.assignments.serializers import AssignmentSerializer
        engineer = self.get_object()
        qs = engineer.assignments.select_related("project", "engineer__user").order_by("start_date")
        return APIResponse.success(AssignmentSerializer(qs, many=True).data)


# -------- Development data --------
class SeedDataView(views.APIView):
    """POST /api/v1/seed/: demo data, only with DEBUG on"""
    permission_classes = [AllowAny]

    def post(self, request):
        if not getattr(settings, "DEBUG", False):
            return APIResponse.not_found()
        summary = create_seed_data()
        return APIResponse.created(summary, "Seed data created")
