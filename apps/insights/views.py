from drf_spectacular.utils import extend_schema, OpenApiParameter
from django.utils.dateparse import parse_date
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from core.permissions import IsManager
from core.responses import APIResponse
from .serializers import UtilizationSerializer, TeamOverviewSerializer
from .services import team_utilization, team_overview

AS_OF = OpenApiParameter("as_of", str, description="YYYY-MM-DD, defaults to today")


class AnalyticsViewSet(viewsets.ViewSet):
    """Team utilization and planning analytics, managers only."""
    permission_classes = [IsAuthenticated & IsManager]

    def _as_of(self, request):
        raw = request.query_params.get("as_of")
        if not raw:
            return None, None
        parsed = parse_date(raw)
        if parsed is None:
            return None, APIResponse.validation_error({"as_of": ["expected YYYY-MM-DD"]})
        return parsed, None

    @extend_schema(parameters=[AS_OF], responses=UtilizationSerializer(many=True))
    @action(detail=False, methods=["get"])
    def utilization(self, request):
        on, error = self._as_of(request)
        if error:
            return error
        return APIResponse.success(UtilizationSerializer(team_utilization(on), many=True).data)

    @extend_schema(parameters=[AS_OF], responses=TeamOverviewSerializer)
    @action(detail=False, methods=["get"])
    def overview(self, request):
        on, error = self._as_of(request)
        if error:
            return error
        return APIResponse.success(team_overview(on))
