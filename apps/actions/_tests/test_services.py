"""Tests for ActionService."""

from unittest.mock import patch

import pytest
from django.test import SimpleTestCase

from apps.actions.action_types import ActionResult
from apps.actions.models import ActionConnector
from apps.actions.services import ActionService

EXECUTOR = "apps.actions.action_types.rundeck.RundeckActionType.execute"


class ActionServiceExecuteTests(SimpleTestCase):
    """ActionService.execute with explicit config, no DB."""

    def setUp(self):
        self.service = ActionService()
        self.config = {"rundeckBaseUrl": "https://rundeck.example.com", "rundeckJobId": "job-1"}
        self.secrets = {"rundeckApiToken": "tok"}

    def test_passes_validated_options_to_executor(self):
        with patch(EXECUTOR, return_value=ActionResult.ok({"id": 1})) as mock_execute:
            result = self.service.execute(
                ".rundeck", self.config, self.secrets, {"dedupKey": "dk"}, "a-1"
            )

        self.assertEqual(result.to_dict(), {"status": "ok", "data": {"id": 1}})
        options = mock_execute.call_args[0][0]
        self.assertEqual(options.action_id, "a-1")
        self.assertEqual(options.config.job_id, "job-1")
        self.assertEqual(options.config.api_version, 24)
        self.assertEqual(options.secrets.api_token, "tok")
        self.assertEqual(options.params.dedup_key, "dk")

    def test_validation_error_becomes_error_result(self):
        with patch(EXECUTOR) as mock_execute:
            result = self.service.execute(".rundeck", self.config, {}, None, "a-1")

        mock_execute.assert_not_called()
        self.assertEqual(result.status, "error")
        self.assertIn('"a-1"', result.message)
        self.assertIn("secrets", result.message)
        self.assertIn("rundeckApiToken", result.message)

    def test_unknown_action_type(self):
        result = self.service.execute(".missing", {}, {}, {}, "a-1")
        self.assertEqual(result.status, "error")
        self.assertIn("Unknown action type", result.message)

    def test_unexpected_exception_is_captured(self):
        with patch(EXECUTOR, side_effect=RuntimeError("kaboom")):
            with self.assertLogs("apps.actions.services", level="ERROR"):
                result = self.service.execute(".rundeck", self.config, self.secrets, {}, "a-1")

        self.assertEqual(result.status, "error")
        self.assertIn("kaboom", result.message)
        self.assertIn("a-1", result.message)


@pytest.mark.django_db
class TestActionServiceConnectors:
    def test_execute_connector_uses_stored_config(self, connector):
        with patch(EXECUTOR, return_value=ActionResult.ok({})) as mock_execute:
            result = ActionService().execute_connector("restart-web", {"alertName": "CPU"})

        assert result.is_ok
        options = mock_execute.call_args[0][0]
        assert options.action_id == "restart-web"
        assert options.config.base_url == "https://rundeck.example.com"
        assert options.params.alert_name == "CPU"

    def test_explicit_action_id(self, connector):
        with patch(EXECUTOR, return_value=ActionResult.ok({})) as mock_execute:
            ActionService().execute_connector("restart-web", {}, action_id="alert-9")

        assert mock_execute.call_args[0][0].action_id == "alert-9"

    def test_missing_connector(self):
        result = ActionService().execute_connector("nope")
        assert result.status == "error"
        assert 'Action connector "nope" not found' in result.message

    def test_inactive_connector(self, connector):
        ActionConnector.objects.filter(pk=connector.pk).update(is_active=False)

        with patch(EXECUTOR) as mock_execute:
            result = ActionService().execute_connector("restart-web")

        mock_execute.assert_not_called()
        assert result.status == "error"
