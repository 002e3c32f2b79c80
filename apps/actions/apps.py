"""Django app configuration for the actions app."""

import logging

from django.apps import AppConfig

logger = logging.getLogger("apps.actions")


class ActionsConfig(AppConfig):
    """Configuration for the Alert Actions app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.actions"
    verbose_name = "Alert Actions"

    def ready(self):
        from apps.actions.action_types import (
            ACTION_TYPE_REGISTRY,
            BUILTIN_ACTION_TYPES,
            register_action_type,
        )

        for action_type_cls in BUILTIN_ACTION_TYPES:
            if action_type_cls.id in ACTION_TYPE_REGISTRY:
                continue
            register_action_type(action_type_cls)
            logger.info(f"registered action type: {action_type_cls.id}")
