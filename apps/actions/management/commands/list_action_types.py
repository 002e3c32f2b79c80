"""
Management command to list registered action types and their inputs.

Usage:
    python manage.py list_action_types
    python manage.py list_action_types --verbose
"""

from django.core.management.base import BaseCommand

from apps.actions.action_types import ACTION_TYPE_REGISTRY, get_action_type


class Command(BaseCommand):
    help = "List registered action types and their config, secrets and params keys"

    def add_arguments(self, parser):
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show config, secrets and params keys",
        )

    def handle(self, *args, **options):
        verbose = options.get("verbose", False)

        self.stdout.write(self.style.SUCCESS("Registered Action Types"))
        self.stdout.write("-" * 60)

        for type_id in ACTION_TYPE_REGISTRY:
            info = get_action_type(type_id).describe()
            self.stdout.write(f"\n{self.style.WARNING(type_id)} ({info['name']})")
            self.stdout.write(f"  {info['description']}")

            if verbose:
                for part in ("config", "secrets", "params"):
                    self.stdout.write(f"  {part.capitalize()}:")
                    for key in info[part]:
                        self.stdout.write(f"    - {key}")

        self.stdout.write("\n" + "-" * 60)
        self.stdout.write("\nUsage examples:")
        self.stdout.write('  python manage.py run_action restart-web --alert-name "High CPU"')
        self.stdout.write(
            "  python manage.py run_action --base-url https://rundeck.example.com "
            "--job-id abc-123 --api-token xyz --slack-webhook-url https://hooks.slack.com/..."
        )
