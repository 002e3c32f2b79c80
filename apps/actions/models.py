"""
Action connector models.

A connector is a named, stored configuration (plus secrets) for an action type.
Executions themselves are not persisted.
"""

from django.db import models


class ActionConnector(models.Model):
    """
    Stored configuration for an action type (e.g., a Rundeck job wired to PagerDuty).

    Alert sources fire a connector by name and supply only the per-alert params.
    """

    name = models.CharField(
        max_length=100,
        unique=True,
        help_text="Unique name for this connector (e.g., 'restart-web', 'clear-disk').",
    )
    action_type = models.CharField(
        max_length=50,
        db_index=True,
        default=".rundeck",
        help_text="Registered action type id (e.g., '.rundeck').",
    )
    config = models.JSONField(
        default=dict,
        blank=True,
        help_text="Action type configuration (e.g., rundeckBaseUrl, rundeckJobId).",
    )
    secrets = models.JSONField(
        default=dict,
        blank=True,
        help_text="Action type secrets (e.g., rundeckApiToken, pdApiKey, slackWebhookUrl).",
    )
    is_active = models.BooleanField(
        default=True,
        db_index=True,
        help_text="Whether this connector can be fired.",
    )
    description = models.TextField(
        blank=True,
        default="",
        help_text="Description of what this connector does.",
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
    )
    updated_at = models.DateTimeField(
        auto_now=True,
    )

    class Meta:
        ordering = ["name"]

    def __str__(self):
        status = "active" if self.is_active else "inactive"
        return f"{self.name} ({self.action_type}) [{status}]"
