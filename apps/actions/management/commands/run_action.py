"""
Management command to fire an action from the command line.

Usage:
    python manage.py run_action restart-web --alert-name "High CPU on web-1"
    python manage.py run_action restart-web --dedup-key 8f2c... --job-params '{"options": {"host": "web-1"}}'
    python manage.py run_action --base-url https://rundeck.example.com --job-id abc-123 \\
        --api-token xyz --slack-webhook-url https://hooks.slack.com/services/...
"""

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from apps.actions.action_types.rundeck import DEFAULT_API_VERSION, RundeckActionType
from apps.actions.services import ActionService


class Command(BaseCommand):
    help = "Fire a stored action connector, or an ad-hoc Rundeck action built from CLI options"

    def add_arguments(self, parser):
        parser.add_argument(
            "connector",
            nargs="?",
            default=None,
            type=str,
            help="Name of a stored ActionConnector (omit to build a Rundeck action from options)",
        )
        parser.add_argument(
            "--action-id",
            type=str,
            help="Correlation id used in logs and error messages (default: connector name or 'cli')",
        )

        # Params
        parser.add_argument("--dedup-key", type=str, help="PagerDuty incident dedup key")
        parser.add_argument("--alert-name", type=str, help="Alert name for the Slack message")
        parser.add_argument(
            "--job-params",
            type=str,
            help="Rundeck job params as JSON string (e.g. '{\"options\": {...}}')",
        )

        # Ad-hoc Rundeck config/secrets
        parser.add_argument("--base-url", type=str, help="Rundeck base URL")
        parser.add_argument(
            "--api-version",
            type=int,
            default=DEFAULT_API_VERSION,
            help=f"Rundeck API version (default: {DEFAULT_API_VERSION})",
        )
        parser.add_argument("--job-id", type=str, help="Rundeck job id")
        parser.add_argument("--headers", type=str, help="Extra HTTP headers as JSON object")
        parser.add_argument("--api-token", type=str, help="Rundeck API token")
        parser.add_argument("--pd-api-key", type=str, help="PagerDuty REST API key")
        parser.add_argument("--slack-webhook-url", type=str, help="Slack incoming webhook URL")

    def handle(self, *args, **options):
        params = {
            "dedupKey": options.get("dedup_key"),
            "alertName": options.get("alert_name"),
            "jobParams": self._load_json(options.get("job_params"), "--job-params"),
        }

        service = ActionService()
        connector = options.get("connector")

        if connector:
            action_id = options.get("action_id") or connector
            self.stdout.write(f"Firing connector {connector} (action {action_id})...")
            result = service.execute_connector(connector, params, action_id)
        else:
            if not options.get("base_url") or not options.get("job_id"):
                raise CommandError(
                    "Either a connector name or --base-url and --job-id must be provided"
                )
            action_id = options.get("action_id") or "cli"
            self.stdout.write(f"Firing ad-hoc rundeck action (action {action_id})...")
            result = service.execute(
                RundeckActionType.id,
                self._build_config(options),
                self._build_secrets(options),
                params,
                action_id,
            )

        self.stdout.write(json.dumps(result.to_dict(), indent=2, default=str))

        if not result.is_ok:
            raise CommandError(result.message or "Action failed")

        self.stdout.write(self.style.SUCCESS("Action executed successfully"))

    def _load_json(self, raw: str | None, flag: str) -> Any:
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise CommandError(f"Invalid JSON for {flag}: {e}")

    def _build_config(self, options: dict[str, Any]) -> dict[str, Any]:
        return {
            "rundeckBaseUrl": options.get("base_url"),
            "rundeckApiVersion": options.get("api_version"),
            "rundeckJobId": options.get("job_id"),
            "headers": self._load_json(options.get("headers"), "--headers"),
        }

    def _build_secrets(self, options: dict[str, Any]) -> dict[str, Any]:
        return {
            "rundeckApiToken": options.get("api_token"),
            "pdApiKey": options.get("pd_api_key"),
            "slackWebhookUrl": options.get("slack_webhook_url"),
        }
