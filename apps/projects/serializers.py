from rest_framework import serializers

from core.json_payloads import SKILLS_SCHEMA
from core.validators import validate_json_payload, validate_date_range, normalize_skills
from .models import Project


class ProjectSerializer(serializers.ModelSerializer):
    manager_name = serializers.CharField(source="manager.display_name", read_only=True, default=None)
    manager_email = serializers.EmailField(source="manager.email", read_only=True, default=None)
    assigned_engineers = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = ["id", "name", "description", "start_date", "end_date", "required_skills",
                  "team_size", "status", "manager", "manager_name", "manager_email",
                  "assigned_engineers", "created_at", "updated_at"]
        read_only_fields = ["status", "manager", "created_at", "updated_at"]

    def get_assigned_engineers(self, obj) -> int:
        return obj.assignments.values("engineer").distinct().count()

    def validate_required_skills(self, value):
        validate_json_payload(SKILLS_SCHEMA, value, path="required_skills")
        return normalize_skills(value)

    def validate(self, attrs):
        return validate_date_range(attrs, self.instance)


class ProjectCandidateSerializer(serializers.Serializer):
    engineer_id = serializers.IntegerField()
    name = serializers.CharField()
    seniority = serializers.CharField()
    skills = serializers.ListField(child=serializers.CharField())
    matching_skills = serializers.ListField(child=serializers.CharField())
    skill_match = serializers.FloatField()
    max_capacity = serializers.IntegerField()
    allocated = serializers.IntegerField()
    available = serializers.IntegerField()
