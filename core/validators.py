# core/validators.py
from jsonschema import Draft7Validator, ValidationError as JSONSchemaError


def validate_json_payload(schema: dict, value, *, path="payload"):
    """
    Raises serializers.ValidationError when the value does not match schema.
    """
    try:
        Draft7Validator(schema).validate(value if value is not None else [])
    except JSONSchemaError as e:
        loc = " → ".join([str(p) for p in e.path]) or path
        msg = f"{loc}: {e.message}"
        from rest_framework import serializers
        raise serializers.ValidationError({path: msg})
    return value


def normalize_skills(value) -> list:
    """Strip whitespace and drop case-insensitive duplicates, keeping first spelling and order."""
    seen = set()
    out = []
    for skill in value or []:
        s = skill.strip()
        if s.lower() in seen:
            continue
        seen.add(s.lower())
        out.append(s)
    return out


def validate_date_range(attrs: dict, instance=None, start="start_date", end="end_date"):
    from rest_framework import serializers
    start_value = attrs.get(start, getattr(instance, start, None))
    end_value = attrs.get(end, getattr(instance, end, None))
    if start_value and end_value and end_value < start_value:
        raise serializers.ValidationError({end: "End date cannot be before start date"})
    return attrs
