"""Shared test fixtures for the actions app."""

import pytest

from apps.actions.models import ActionConnector

RUNDECK_CONFIG = {
    "rundeckBaseUrl": "https://rundeck.example.com",
    "rundeckApiVersion": 24,
    "rundeckJobId": "job-1",
    "headers": {},
}

RUNDECK_SECRETS = {
    "rundeckApiToken": "rd-token",
    "pdApiKey": "pd-key",
    "slackWebhookUrl": "https://hooks.slack.com/services/T00/B00/xxx",
}


@pytest.fixture
def rundeck_config():
    return dict(RUNDECK_CONFIG)


@pytest.fixture
def rundeck_secrets():
    return dict(RUNDECK_SECRETS)


@pytest.fixture
def connector(db):
    """An active Rundeck connector."""
    return ActionConnector.objects.create(
        name="restart-web",
        action_type=".rundeck",
        config=dict(RUNDECK_CONFIG),
        secrets=dict(RUNDECK_SECRETS),
    )
