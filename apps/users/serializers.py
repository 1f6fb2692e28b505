from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password as run_password_validators
from django.core.exceptions import ValidationError as DjangoValidationError

from core.json_payloads import SKILLS_SCHEMA
from core.validators import validate_json_payload, normalize_skills
from .models import EngineerProfile

User = get_user_model()


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Register an engineer or a manager; engineer fields are optional"""
    password = serializers.CharField(write_only=True)
    role = serializers.ChoiceField(choices=User.UserRole.choices, default=User.UserRole.ENGINEER)

    skills = serializers.JSONField(required=False, default=list)
    seniority = serializers.ChoiceField(choices=EngineerProfile.Seniority.choices, required=False)
    max_capacity = serializers.IntegerField(required=False, min_value=0, max_value=100)

    class Meta:
        model = User
        fields = ["email", "name", "password", "role", "department", "skills", "seniority", "max_capacity"]

    def validate_password(self, value):
        try:
            run_password_validators(value)
        except DjangoValidationError as e:
            raise serializers.ValidationError(list(e.messages))
        return value

    def validate_skills(self, value):
        validate_json_payload(SKILLS_SCHEMA, value, path="skills")
        return normalize_skills(value)

    def create(self, validated_data):
        profile_fields = {k: validated_data.pop(k) for k in ["skills", "seniority", "max_capacity"]
                          if k in validated_data}
        user = User.objects.create_user(
            email=validated_data["email"],
            password=validated_data["password"],
            name=validated_data.get("name", ""),
            role=validated_data.get("role", User.UserRole.ENGINEER),
            department=validated_data.get("department", ""),
        )
        if user.role == User.UserRole.ENGINEER:
            # profile is created by the post_save signal
            prof = user.engineer_profile
            for k, v in profile_fields.items():
                setattr(prof, k, v)
            prof.save()
        return user


class UserSerializer(serializers.ModelSerializer):
    engineer_id = serializers.IntegerField(source="engineer_profile.id", read_only=True, default=None)
    skills = serializers.JSONField(source="engineer_profile.skills", read_only=True, default=None)
    seniority = serializers.CharField(source="engineer_profile.seniority", read_only=True, default=None)
    max_capacity = serializers.IntegerField(source="engineer_profile.max_capacity", read_only=True, default=None)

    class Meta:
        model = User
        fields = ["id", "email", "name", "role", "department",
                  "engineer_id", "skills", "seniority", "max_capacity", "date_joined"]
        read_only_fields = fields


class EngineerProfileSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source="user.display_name", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)
    department = serializers.CharField(source="user.department", read_only=True)
    current_allocation = serializers.SerializerMethodField()
    available_capacity = serializers.SerializerMethodField()

    class Meta:
        model = EngineerProfile
        fields = ["id", "user", "name", "email", "department", "skills", "seniority",
                  "max_capacity", "current_allocation", "available_capacity"]
        read_only_fields = fields

    def _allocated(self, obj) -> int:
        # views pass {engineer_id: allocated} to avoid a query per row
        allocations = self.context.get("allocations")
        if allocations is None:
            from apps.assignments.services import current_allocations
            allocations = current_allocations([obj])
        return allocations.get(obj.pk, 0)

    def get_current_allocation(self, obj) -> int:
        return self._allocated(obj)

    def get_available_capacity(self, obj) -> int:
        from apps.capacity.services import available_capacity
        return available_capacity(obj, self._allocated(obj))


class EngineerProfileUpdateSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source="user.name", required=False, allow_blank=True)
    department = serializers.CharField(source="user.department", required=False, allow_blank=True)

    class Meta:
        model = EngineerProfile
        fields = ["name", "department", "skills", "seniority", "max_capacity"]

    def validate_skills(self, value):
        validate_json_payload(SKILLS_SCHEMA, value, path="skills")
        return normalize_skills(value)

    def update(self, instance, validated_data):
        user_data = validated_data.pop("user", {})
        if user_data:
            for k, v in user_data.items():
                setattr(instance.user, k, v)
            instance.user.save(update_fields=list(user_data.keys()))
        return super().update(instance, validated_data)
