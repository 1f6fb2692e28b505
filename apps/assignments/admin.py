from django.contrib import admin
from .models import Assignment


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = ("id", "engineer", "project", "allocation_percentage", "start_date", "end_date", "role")
    list_filter = ("project", "start_date")
    search_fields = ("engineer__user__email", "engineer__user__name", "project__name", "role")
    autocomplete_fields = ("engineer", "project")
    fieldsets = (
        ("Engineer and project", {
            "fields": ("engineer", "project", "role")
        }),
        ("Allocation", {
            "fields": ("allocation_percentage", "start_date", "end_date")
        }),
    )
