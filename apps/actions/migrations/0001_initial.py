from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ActionConnector",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        help_text="Unique name for this connector (e.g., 'restart-web', 'clear-disk').",
                        max_length=100,
                        unique=True,
                    ),
                ),
                (
                    "action_type",
                    models.CharField(
                        db_index=True,
                        default=".rundeck",
                        help_text="Registered action type id (e.g., '.rundeck').",
                        max_length=50,
                    ),
                ),
                (
                    "config",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="Action type configuration (e.g., rundeckBaseUrl, rundeckJobId).",
                    ),
                ),
                (
                    "secrets",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="Action type secrets (e.g., rundeckApiToken, pdApiKey, slackWebhookUrl).",
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        db_index=True,
                        default=True,
                        help_text="Whether this connector can be fired.",
                    ),
                ),
                (
                    "description",
                    models.TextField(
                        blank=True,
                        default="",
                        help_text="Description of what this connector does.",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
    ]
