from django_filters.rest_framework import DjangoFilterBackend
from django_fsm import TransitionNotAllowed
from drf_spectacular.utils import extend_schema, OpenApiExample
from rest_framework import viewsets, filters
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, SAFE_METHODS
from rest_framework.response import Response

from core.permissions import IsManager, IsProjectManager
from core.json_payloads import SKILLS_TEMPLATE, SKILLS_SCHEMA
from core.responses import APIResponse
from core.schemas import PayloadTemplatesResponseSerializer
from apps.insights.services import rank_candidates_for_project
from .models import Project
from .serializers import ProjectSerializer, ProjectCandidateSerializer


class ProjectViewSet(viewsets.ModelViewSet):
    queryset = Project.objects.select_related("manager").all()
    serializer_class = ProjectSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter, filters.SearchFilter]
    filterset_fields = ["status", "manager"]
    ordering_fields = ["start_date", "end_date", "created_at", "name"]
    search_fields = ["name", "description"]

    def get_permissions(self):
        if self.action == "candidates":
            return [IsAuthenticated(), IsManager()]
        # SAFE: every authenticated user
        if self.request.method in SAFE_METHODS:
            return [IsAuthenticated()]
        # UNSAFE: managers, and only on their own projects
        return [IsAuthenticated(), IsManager(), IsProjectManager()]

    def perform_create(self, serializer):
        serializer.save(manager=self.request.user)

    def _transition(self, request, name: str):
        obj = self.get_object()
        try:
            getattr(obj, name)()
            obj.save()
        except TransitionNotAllowed:
            return APIResponse.error(f"Cannot {name} a project in status '{obj.status}'", code=400)
        return APIResponse.success(ProjectSerializer(obj).data, obj.status)

    # FSM actions
    @action(detail=True, methods=["post"])
    def start(self, request, pk=None):
        return self._transition(request, "start")

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):
        return self._transition(request, "complete")

    @extend_schema(responses=ProjectCandidateSerializer(many=True))
    @action(detail=True, methods=["get"])
    def candidates(self, request, pk=None):
        """Engineers ranked by skill match, with their free capacity over the project window."""
        project = self.get_object()
        rows = rank_candidates_for_project(project)
        return APIResponse.success(ProjectCandidateSerializer(rows, many=True).data)

    @extend_schema(
        summary="JSON-schema and suggested values for required_skills",
        responses={200: PayloadTemplatesResponseSerializer},
        examples=[
            OpenApiExample(
                "Skills template",
                value={"version": 1, "schema": SKILLS_SCHEMA, "templates": {"available": ["Python", "React"]}},
                response_only=True,
            )
        ],
    )
    @action(detail=False, methods=["get"], url_path="skill-templates")
    def skill_templates(self, request):
        return Response(SKILLS_TEMPLATE)
