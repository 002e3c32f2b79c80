"""Tests for the action type registry."""

import logging
from unittest.mock import patch

from django.test import SimpleTestCase

from apps.actions.action_types import (
    ACTION_TYPE_REGISTRY,
    RundeckActionType,
    get_action_type,
    register_action_type,
)


class ActionTypeRegistryTests(SimpleTestCase):
    def test_rundeck_registered_on_startup(self):
        self.assertIs(ACTION_TYPE_REGISTRY[".rundeck"], RundeckActionType)

    def test_get_action_type_binds_logger(self):
        logger = logging.getLogger("test.registry")
        action_type = get_action_type(".rundeck", logger)
        self.assertIsInstance(action_type, RundeckActionType)
        self.assertIs(action_type.logger, logger)

    def test_get_action_type_default_logger(self):
        action_type = get_action_type(".rundeck")
        self.assertEqual(action_type.logger.name, "apps.actions")

    def test_unknown_action_type(self):
        with self.assertRaises(ValueError) as ctx:
            get_action_type(".missing")
        self.assertIn(".rundeck", str(ctx.exception))

    def test_duplicate_registration_rejected(self):
        with self.assertRaises(ValueError):
            register_action_type(RundeckActionType)

    def test_register_new_type(self):
        class EchoActionType(RundeckActionType):
            id = ".echo"
            name = "echo"

        with patch.dict(ACTION_TYPE_REGISTRY, clear=False):
            register_action_type(EchoActionType)
            self.assertIs(ACTION_TYPE_REGISTRY[".echo"], EchoActionType)

        self.assertNotIn(".echo", ACTION_TYPE_REGISTRY)
