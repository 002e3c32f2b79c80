"""Admin configuration for action models."""

from django.contrib import admin
from django.db import models as db_models
from django_json_widget.widgets import JSONEditorWidget

from apps.actions.models import ActionConnector


@admin.register(ActionConnector)
class ActionConnectorAdmin(admin.ModelAdmin):
    """Admin for ActionConnector model."""

    list_display = [
        "name",
        "action_type",
        "is_active",
        "created_at",
        "updated_at",
    ]
    formfield_overrides = {db_models.JSONField: {"widget": JSONEditorWidget}}
    list_filter = ["action_type", "is_active"]
    search_fields = ["name", "description"]
    readonly_fields = ["created_at", "updated_at"]

    fieldsets = [
        (
            None,
            {
                "fields": ["name", "action_type", "is_active", "description"],
            },
        ),
        (
            "Configuration",
            {
                "fields": ["config"],
            },
        ),
        (
            "Secrets",
            {
                "fields": ["secrets"],
                "classes": ["collapse"],
            },
        ),
        (
            "Timestamps",
            {
                "fields": ["created_at", "updated_at"],
                "classes": ["collapse"],
            },
        ),
    ]
