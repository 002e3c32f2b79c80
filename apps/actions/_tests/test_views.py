"""Tests for the actions views."""

import json
from unittest.mock import MagicMock, patch

from django.test import Client, TestCase, override_settings
from django.urls import reverse

from apps.actions.action_types import ActionResult
from apps.actions.models import ActionConnector

EXECUTE_CONNECTOR = "apps.actions.services.ActionService.execute_connector"


class ActionExecuteViewTests(TestCase):
    """Tests for POST/GET /actions/execute/<connector>/."""

    def setUp(self):
        self.client = Client()
        self.url = reverse("actions:execute", kwargs={"connector": "restart-web"})
        ActionConnector.objects.create(
            name="restart-web",
            config={"rundeckBaseUrl": "https://rundeck.example.com", "rundeckJobId": "job-1"},
            secrets={"rundeckApiToken": "tok"},
        )

    def _post(self, payload):
        return self.client.post(
            self.url, data=json.dumps(payload), content_type="application/json"
        )

    def test_ok_result_returns_200(self):
        with patch(EXECUTE_CONNECTOR, return_value=ActionResult.ok({"id": 7})) as mock_exec:
            response = self._post({"action_id": "alert-1", "params": {"alertName": "CPU"}})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok", "data": {"id": 7}})
        mock_exec.assert_called_once_with("restart-web", {"alertName": "CPU"}, "alert-1")

    def test_action_id_defaults_to_connector(self):
        with patch(EXECUTE_CONNECTOR, return_value=ActionResult.ok({})) as mock_exec:
            self._post({})

        mock_exec.assert_called_once_with("restart-web", {}, "restart-web")

    def test_error_result_returns_502(self):
        with patch(EXECUTE_CONNECTOR, return_value=ActionResult.error("job failed")):
            response = self._post({"params": {}})

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json(), {"status": "error", "message": "job failed"})

    def test_invalid_json(self):
        response = self.client.post(self.url, data="not json", content_type="application/json")
        self.assertEqual(response.status_code, 400)

    def test_non_object_payload(self):
        response = self._post(["a"])
        self.assertEqual(response.status_code, 400)

    @override_settings(ACTIONS_ASYNC_EXECUTION=True, CELERY_TASK_ALWAYS_EAGER=False)
    def test_async_execution_queues_task(self):
        with patch("apps.actions.tasks.execute_connector_action") as mock_task:
            mock_task.delay.return_value = MagicMock(id="task-123")
            response = self._post({"action_id": "alert-1", "params": {"dedupKey": "dk"}})

        self.assertEqual(response.status_code, 202)
        self.assertEqual(response.json(), {"status": "queued", "task_id": "task-123"})
        mock_task.delay.assert_called_once_with("restart-web", {"dedupKey": "dk"}, "alert-1")

    @override_settings(ACTIONS_ASYNC_EXECUTION=True, CELERY_TASK_ALWAYS_EAGER=False)
    def test_async_enqueue_failure_falls_back_to_sync(self):
        with patch("apps.actions.tasks.execute_connector_action") as mock_task:
            mock_task.delay.side_effect = ConnectionError("broker down")
            with patch(EXECUTE_CONNECTOR, return_value=ActionResult.ok({})) as mock_exec:
                response = self._post({})

        self.assertEqual(response.status_code, 200)
        mock_exec.assert_called_once()

    def test_get_health_check(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")


class ActionTypesViewTests(TestCase):
    def setUp(self):
        self.client = Client()

    def test_list(self):
        response = self.client.get(reverse("actions:types"))
        self.assertEqual(response.status_code, 200)
        ids = [t["id"] for t in response.json()["action_types"]]
        self.assertIn(".rundeck", ids)

    def test_detail(self):
        response = self.client.get(reverse("actions:type_detail", kwargs={"type_id": ".rundeck"}))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["action_type"]["name"], "rundeck")

    def test_unknown_type(self):
        response = self.client.get(reverse("actions:type_detail", kwargs={"type_id": ".nope"}))
        self.assertEqual(response.status_code, 404)
