import json

from django.contrib.contenttypes.models import ContentType
from django.core.serializers.json import DjangoJSONEncoder
from django.db import connection
from django.db.utils import ProgrammingError, OperationalError

from .models import AuditLog


def _contenttypes_ready() -> bool:
    """django_content_type must exist (matters while migrating)."""
    try:
        return 'django_content_type' in connection.introspection.table_names()
    except (ProgrammingError, OperationalError):
        return False


def _object_type(obj) -> str:
    if _contenttypes_ready():
        try:
            ct = ContentType.objects.get_for_model(obj.__class__)
            return f"{ct.app_label}.{ct.model}"
        except (ProgrammingError, OperationalError, LookupError):
            pass
    return obj._meta.label_lower


def _jsonable(payload):
    """Dates and decimals become strings."""
    if payload is None:
        return None
    return json.loads(json.dumps(payload, cls=DjangoJSONEncoder))


def request_meta(request) -> tuple:
    """(ip, user agent) of a request"""
    ip = request.META.get("HTTP_X_FORWARDED_FOR") or request.META.get("REMOTE_ADDR")
    if ip and "," in ip:
        ip = ip.split(",")[0].strip()
    return ip, request.META.get("HTTP_USER_AGENT", "")


def log_event(*, actor, action: str, obj=None, object_type: str = None, object_id=None,
              diff_json=None, ip=None, user_agent: str = ""):
    """
    Write one AuditLog row and return it.
    action: 'CREATE'|'UPDATE'|'DELETE'|'VIEW'|'CAPACITY_WARNING'
    obj: model instance (optional), fills object_type/object_id
    """
    if obj is not None:
        object_type = object_type or _object_type(obj)
        object_id = object_id if object_id is not None else obj.pk

    return AuditLog.objects.create(
        actor=actor if getattr(actor, "id", None) else None,
        action=action,
        object_type=object_type or "",
        object_id=str(object_id) if object_id is not None else None,
        diff_json=_jsonable(diff_json),
        ip=ip,
        user_agent=(user_agent or "")[:500],
    )


def log_capacity_warning(request, assignment, check):
    """An assignment write that left its engineer over capacity."""
    ip, ua = request_meta(request)
    return log_event(
        actor=request.user,
        action=AuditLog.ActionType.CAPACITY_WARNING,
        obj=assignment,
        diff_json={
            "engineer": assignment.engineer_id,
            "project": assignment.project_id,
            "start_date": assignment.start_date,
            "end_date": assignment.end_date,
            **check.as_dict(),
        },
        ip=ip, user_agent=ua,
    )
