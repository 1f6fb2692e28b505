from rest_framework import serializers


class PayloadTemplatesResponseSerializer(serializers.Serializer):
    version = serializers.IntegerField()
    schema = serializers.JSONField()
    templates = serializers.JSONField()


class CapacitySnapshotSerializer(serializers.Serializer):
    engineer_id = serializers.IntegerField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    max_capacity = serializers.IntegerField()
    allocated = serializers.IntegerField()
    available = serializers.IntegerField()
    is_over_allocated = serializers.BooleanField()


class CapacityCheckSerializer(serializers.Serializer):
    max_capacity = serializers.IntegerField()
    allocated = serializers.IntegerField()
    available = serializers.IntegerField()
    proposed = serializers.IntegerField()
    total = serializers.IntegerField()
    over_allocated = serializers.BooleanField()
    message = serializers.CharField()
