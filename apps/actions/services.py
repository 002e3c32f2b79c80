"""Action execution service.

Single entry point used by the HTTP views, the Celery task and the management
commands. Resolves what to run (a stored ActionConnector or an explicit action
type), validates the inputs against the action type's schemas, and runs the
executor.

The service never raises: unknown connectors, validation failures and
unexpected executor exceptions all come back as ``ActionResult.error``.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from apps.actions.action_types import (
    ActionExecutorOptions,
    ActionResult,
    ActionValidationError,
    get_action_type,
)
from apps.actions.models import ActionConnector

logger = logging.getLogger(__name__)


class ActionService:
    """Validate and execute actions.

    Args:
        executor_logger: Logger handed to action executors. Defaults to the
            ``apps.actions`` logger.
    """

    def __init__(self, executor_logger: Optional[logging.Logger] = None):
        self.executor_logger = executor_logger or logging.getLogger("apps.actions")

    def execute(
        self,
        type_id: str,
        config: Optional[Mapping[str, Any]],
        secrets: Optional[Mapping[str, Any]],
        params: Optional[Mapping[str, Any]],
        action_id: str,
    ) -> ActionResult:
        """Validate raw inputs for ``type_id`` and run its executor."""
        try:
            action_type = get_action_type(type_id, self.executor_logger)
        except ValueError as e:
            logger.warning(f"Cannot execute action {action_id}: {e}")
            return ActionResult.error(f'error executing action "{action_id}": {e}')

        try:
            valid_config, valid_secrets, valid_params = action_type.validate(
                config, secrets, params
            )
        except ActionValidationError as e:
            logger.warning(f"Validation failed for action {action_id}: {e}")
            return ActionResult.error(f'error validating action "{action_id}": {e}')

        options = ActionExecutorOptions(
            action_id=action_id,
            config=valid_config,
            secrets=valid_secrets,
            params=valid_params,
        )

        try:
            return action_type.execute(options)
        except Exception as e:
            logger.exception(f"Unexpected error executing action {action_id}")
            return ActionResult.error(
                f'an unexpected error occurred in action "{action_id}": {e}'
            )

    def execute_connector(
        self,
        name: str,
        params: Optional[Mapping[str, Any]] = None,
        action_id: Optional[str] = None,
    ) -> ActionResult:
        """Fire the active connector called ``name`` with per-alert ``params``.

        ``action_id`` defaults to the connector name.
        """
        action_id = action_id or name
        connector = ActionConnector.objects.filter(name=name, is_active=True).first()
        if connector is None:
            logger.warning(f"Action connector {name} not found or inactive")
            return ActionResult.error(
                f'Action connector "{name}" not found or inactive (action "{action_id}")'
            )

        return self.execute(
            connector.action_type,
            connector.config,
            connector.secrets,
            params,
            action_id,
        )
