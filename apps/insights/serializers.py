from rest_framework import serializers


class UtilizationSerializer(serializers.Serializer):
    engineer_id = serializers.IntegerField()
    name = serializers.CharField()
    seniority = serializers.CharField()
    skills = serializers.ListField(child=serializers.CharField())
    max_capacity = serializers.IntegerField()
    current_allocation = serializers.IntegerField()
    available = serializers.IntegerField()
    utilization_percentage = serializers.FloatField()
    is_over_allocated = serializers.BooleanField()


class KPISerializer(serializers.Serializer):
    average_utilization = serializers.FloatField()
    over_allocated_engineers = serializers.IntegerField()
    under_utilized_engineers = serializers.IntegerField()
    project_completion_rate = serializers.FloatField()
    active_project_count = serializers.IntegerField()
    average_skill_match = serializers.FloatField()
    total_team_capacity = serializers.IntegerField()
    total_allocated_capacity = serializers.IntegerField()


class TeamOverviewSerializer(serializers.Serializer):
    as_of = serializers.DateField()
    utilization = UtilizationSerializer(many=True)
    project_status = serializers.JSONField()
    skills = serializers.JSONField()
    seniority = serializers.JSONField()
    assignment_efficiency = serializers.JSONField()
    kpis = KPISerializer()
