import sys
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
from django.forms.models import model_to_dict
from django.conf import settings

from .utils import log_event

AUDIT_EXCLUDE_MODELS = getattr(settings, "AUDIT_EXCLUDE_MODELS", set())
AUDIT_SKIP_DURING_MIGRATIONS = getattr(settings, "AUDIT_SKIP_DURING_MIGRATIONS", True)
# never copied into diff_json
AUDIT_REDACTED_FIELDS = ["password"]


def _skip_now() -> bool:
    if not getattr(settings, "AUDIT_ENABLED", True):
        return True
    # tables may not exist yet while migrating
    if not AUDIT_SKIP_DURING_MIGRATIONS:
        return False
    argv = " ".join(sys.argv)
    return (" migrate" in argv) or (" makemigrations" in argv) or (" loaddata" in argv)


def _model_label(instance):
    m = instance.__class__
    return f"{m._meta.app_label}.{m._meta.model_name}"


def _snapshot(instance):
    fields = [f.name for f in instance._meta.concrete_fields if f.name not in AUDIT_REDACTED_FIELDS]
    return model_to_dict(instance, fields=fields)


@receiver(post_save)
def audit_post_save(sender, instance, created, raw=False, **kwargs):
    if raw or _skip_now():
        return
    label = _model_label(instance)
    if label in AUDIT_EXCLUDE_MODELS or label == "audit.auditlog":
        return

    log_event(
        actor=None,
        action="CREATE" if created else "UPDATE",
        obj=instance,
        diff_json={"after": _snapshot(instance)}
    )


@receiver(post_delete)
def audit_post_delete(sender, instance, **kwargs):
    if _skip_now():
        return
    label = _model_label(instance)
    if label in AUDIT_EXCLUDE_MODELS or label == "audit.auditlog":
        return

    log_event(
        actor=None,
        action="DELETE",
        obj=instance,
        diff_json={"before": _snapshot(instance)}
    )
