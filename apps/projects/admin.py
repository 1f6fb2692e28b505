from django.contrib import admin
from django import forms
from django_json_widget.widgets import JSONEditorWidget

from .models import Project


class ProjectForm(forms.ModelForm):
    class Meta:
        model = Project
        fields = "__all__"
        widgets = {
            "required_skills": JSONEditorWidget(options={"mode": "code", "modes": ["tree", "code"]}),
        }


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    form = ProjectForm
    list_display = ("id", "name", "status", "start_date", "end_date", "team_size", "manager")
    list_filter = ("status",)
    search_fields = ("name", "description", "manager__email")
    autocomplete_fields = ("manager",)
    readonly_fields = ("status", "created_at", "updated_at")
