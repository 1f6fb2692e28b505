from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django import forms
from django_json_widget.widgets import JSONEditorWidget

from .models import CustomUser, EngineerProfile


@admin.register(CustomUser)
class UserAdmin(DjangoUserAdmin):
    model = CustomUser
    list_display = ("id", "email", "name", "role", "department", "is_active", "last_login")
    list_filter = ("role", "is_active", "department")
    ordering = ("id",)
    search_fields = ("email", "name")
    fieldsets = (
        (None, {"fields": ("email", "password", "role")}),
        ("Profile", {"fields": ("name", "department")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",),
                "fields": ("email", "password1", "password2", "role", "name", "department")}),
    )
    # no username field
    readonly_fields = ("last_login", "date_joined")


class EngineerProfileForm(forms.ModelForm):
    class Meta:
        model = EngineerProfile
        fields = "__all__"
        widgets = {
            "skills": JSONEditorWidget(options={"mode": "code", "modes": ["tree", "code"]}),
        }


@admin.register(EngineerProfile)
class EngineerProfileAdmin(admin.ModelAdmin):
    form = EngineerProfileForm
    list_display = ("id", "user", "seniority", "max_capacity")
    list_filter = ("seniority",)
    search_fields = ("user__email", "user__name")
    autocomplete_fields = ("user",)
