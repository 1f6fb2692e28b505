from rest_framework import serializers

from core.schemas import CapacityCheckSerializer
from core.validators import validate_date_range
from .models import Assignment


class AssignmentSerializer(serializers.ModelSerializer):
    engineer_name = serializers.CharField(source="engineer.name", read_only=True)
    engineer_email = serializers.EmailField(source="engineer.user.email", read_only=True)
    project_name = serializers.CharField(source="project.name", read_only=True)
    project_status = serializers.CharField(source="project.status", read_only=True)

    class Meta:
        model = Assignment
        fields = ["id", "engineer", "engineer_name", "engineer_email",
                  "project", "project_name", "project_status",
                  "allocation_percentage", "start_date", "end_date", "role",
                  "created_at", "updated_at"]
        read_only_fields = ["created_at", "updated_at"]
        extra_kwargs = {
            "allocation_percentage": {
                "min_value": 1, "max_value": 100,
                "error_messages": {
                    "min_value": "Allocation must be at least %(limit_value)s%%",
                    "max_value": "Allocation cannot exceed %(limit_value)s%%",
                },
            },
        }

    def validate(self, attrs):
        return validate_date_range(attrs, self.instance)


class AssignmentWithCapacitySerializer(AssignmentSerializer):
    """Schema of create/update responses: the assignment plus the capacity check."""
    capacity = CapacityCheckSerializer(read_only=True)

    class Meta(AssignmentSerializer.Meta):
        fields = AssignmentSerializer.Meta.fields + ["capacity"]
