"""Celery tasks for firing actions in the background.

Actions are fire-once: the task is not retried, since a retry would trigger the
Rundeck job a second time.
"""

from __future__ import annotations

from typing import Any

from celery import shared_task


@shared_task
def execute_connector_action(
    connector_name: str,
    params: dict[str, Any] | None = None,
    action_id: str | None = None,
) -> dict[str, Any]:
    """Fire a stored connector and return the result as a dict."""
    from apps.actions.services import ActionService

    result = ActionService().execute_connector(connector_name, params, action_id)
    return result.to_dict()
