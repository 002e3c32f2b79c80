"""
Action types that can be fired by alert actions.
"""

import logging

from apps.actions.action_types.base import (
    ActionExecutorOptions,
    ActionResult,
    ActionValidationError,
    BaseActionType,
)
from apps.actions.action_types.rundeck import RundeckActionType

__all__ = [
    "ActionExecutorOptions",
    "ActionResult",
    "ActionValidationError",
    "BaseActionType",
    "RundeckActionType",
    "ACTION_TYPE_REGISTRY",
    "BUILTIN_ACTION_TYPES",
    "register_action_type",
    "get_action_type",
]

# Registered at app startup (ActionsConfig.ready)
BUILTIN_ACTION_TYPES: tuple[type[BaseActionType], ...] = (RundeckActionType,)

# Registry of action types keyed by their id (e.g. ".rundeck")
ACTION_TYPE_REGISTRY: dict[str, type[BaseActionType]] = {}


def register_action_type(action_type_cls: type[BaseActionType]) -> None:
    """
    Register an action type class under its id.

    Raises:
        ValueError: If another action type is already registered with the same id.
    """
    if action_type_cls.id in ACTION_TYPE_REGISTRY:
        raise ValueError(f"Action type {action_type_cls.id} is already registered")
    ACTION_TYPE_REGISTRY[action_type_cls.id] = action_type_cls


def get_action_type(type_id: str, logger: logging.Logger | None = None) -> BaseActionType:
    """
    Get an action type instance by id.

    Args:
        type_id: Action type id (e.g., ".rundeck").
        logger: Logger the executor reports to. Defaults to the app logger.

    Returns:
        Action type instance bound to the logger.

    Raises:
        ValueError: If the action type id is not registered.
    """
    if type_id not in ACTION_TYPE_REGISTRY:
        raise ValueError(
            f"Unknown action type: {type_id}. Available: {', '.join(ACTION_TYPE_REGISTRY.keys())}"
        )
    return ACTION_TYPE_REGISTRY[type_id](logger or logging.getLogger("apps.actions"))
