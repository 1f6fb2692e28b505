import json

from django.contrib import admin
from django.utils.html import format_html
from django.urls import reverse
from django.core.serializers.json import DjangoJSONEncoder

from .models import AuditLog


def _pretty_json(data):
    return json.dumps(data, ensure_ascii=False, indent=2, cls=DjangoJSONEncoder)


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ("id", "created_at", "action", "actor_link", "object_type", "object_id", "short_diff", "ip")
    list_filter = ("action", "object_type", "created_at")
    search_fields = ("actor__email", "object_type", "object_id", "ip")
    date_hierarchy = "created_at"
    ordering = ("-created_at",)
    list_per_page = 50

    readonly_fields = ("created_at", "action", "actor", "object_type", "object_id", "ip", "user_agent", "diff_pretty")
    fieldsets = (
        (None, {"fields": ("created_at", "action", "actor")}),
        ("Object", {"fields": ("object_type", "object_id")}),
        ("Client", {"fields": ("ip", "user_agent")}),
        ("Changes", {"fields": ("diff_pretty",)}),
    )

    # read-only journal
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description="User")
    def actor_link(self, obj: AuditLog):
        if obj.actor_id:
            url = reverse("admin:users_customuser_change", args=[obj.actor_id])
            return format_html('<a href="{}">{}</a>', url, obj.actor.email)
        return "—"

    @admin.display(description="Diff")
    def short_diff(self, obj: AuditLog):
        if not obj.diff_json:
            return "—"
        text = _pretty_json(obj.diff_json)
        return text[:140] + "…" if len(text) > 140 else text

    @admin.display(description="diff_json")
    def diff_pretty(self, obj: AuditLog):
        if not obj.diff_json:
            return "—"
        return format_html("<pre style='white-space:pre-wrap;margin:0'>{}</pre>", _pretty_json(obj.diff_json))
