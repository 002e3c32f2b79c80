"""Rundeck action type.

Triggers a Rundeck job, then reports the execution link either as a note on the
PagerDuty incident matching ``dedupKey`` or, when no dedup key is given, as a
Slack webhook message.

Config:
{
    "rundeckBaseUrl": "https://rundeck.example.com",
    "rundeckApiVersion": 24,
    "rundeckJobId": "c1b2...",
    "headers": {"X-Forwarded-User": "alerting"}
}

Secrets:
{
    "rundeckApiToken": "...",
    "pdApiKey": "...",           # optional
    "slackWebhookUrl": "..."     # optional
}

Params:
{
    "dedupKey": "...",           # PagerDuty incident key, optional
    "alertName": "...",          # Slack message text, optional
    "jobParams": {"options": {...}}
}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import urlencode

from django.conf import settings

from apps.actions.action_types.base import (
    ActionExecutorOptions,
    ActionResult,
    BaseActionType,
    Schema,
    integer,
    nullable_object,
    nullable_string,
    nullable_string_mapping,
    required_string,
    uri,
)
from apps.actions.http import HttpRequestError, HttpResponse, request_json

DEFAULT_API_VERSION = 24

RUNDECK_AUTH_HEADER = "X-Rundeck-Auth-Token"
PAGERDUTY_ACCEPT = "application/vnd.pagerduty+json;version=2"

# Used in messages when the job response carries no permalink.
MISSING_LINK = "(no execution link)"


@dataclass(frozen=True)
class RundeckConfig(Schema):
    base_url: str
    job_id: str
    api_version: int = DEFAULT_API_VERSION
    headers: dict[str, str] = field(default_factory=dict)

    keys = ("rundeckBaseUrl", "rundeckApiVersion", "rundeckJobId", "headers")

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "RundeckConfig":
        return cls(
            base_url=uri(raw, "rundeckBaseUrl"),
            api_version=integer(raw, "rundeckApiVersion", DEFAULT_API_VERSION),
            job_id=required_string(raw, "rundeckJobId"),
            headers=nullable_string_mapping(raw, "headers"),
        )

    @property
    def executions_url(self) -> str:
        base = self.base_url[:-1] if self.base_url.endswith("/") else self.base_url
        return f"{base}/api/{self.api_version}/job/{self.job_id}/executions"


@dataclass(frozen=True)
class RundeckSecrets(Schema):
    api_token: str = field(repr=False)
    pd_api_key: str | None = field(default=None, repr=False)
    slack_webhook_url: str | None = field(default=None, repr=False)

    keys = ("rundeckApiToken", "pdApiKey", "slackWebhookUrl")

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "RundeckSecrets":
        return cls(
            api_token=required_string(raw, "rundeckApiToken"),
            pd_api_key=nullable_string(raw, "pdApiKey"),
            slack_webhook_url=nullable_string(raw, "slackWebhookUrl"),
        )


@dataclass(frozen=True)
class RundeckParams(Schema):
    dedup_key: str | None = None
    alert_name: str | None = None
    job_params: dict[str, Any] | None = None

    keys = ("dedupKey", "alertName", "jobParams")

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "RundeckParams":
        return cls(
            dedup_key=nullable_string(raw, "dedupKey"),
            alert_name=nullable_string(raw, "alertName"),
            job_params=nullable_object(raw, "jobParams"),
        )


def job_triggered_text(execution_link: str) -> str:
    return f"Rundeck job for the alert is triggered. Link: {execution_link}"


def error_result(action_id: str, message: str) -> ActionResult:
    return ActionResult.error(
        f'Invalid Response: an error occurred in action "{action_id}" calling a job: {message}'
    )


def error_slack_result(action_id: str, message: str) -> ActionResult:
    return ActionResult.error(
        f'Invalid Response: an error occurred in action "{action_id}": {message}'
    )


def error_pagerduty_result(action_id: str, message: str) -> ActionResult:
    return ActionResult.error(
        f'An error occurred while calling PagerDuty API in action "{action_id}": {message}'
    )


def _rundeck_error_message(e: HttpRequestError) -> str:
    # Rundeck error bodies look like {"error": true, "message": "..."}
    if isinstance(e.data, dict) and e.data.get("message"):
        return str(e.data["message"])
    return e.message


def _pagerduty_error_message(e: HttpRequestError) -> str:
    # PagerDuty error bodies look like {"error": {"code": 2001, "message": "..."}}
    if e.has_response:
        error = e.data.get("error") if isinstance(e.data, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return f"{e.status} {error['message']}"
    return e.message


def _slack_error_message(e: HttpRequestError) -> str:
    # Slack answers errors in plain text, e.g. "invalid_token" or "no_service"
    if e.has_response and e.text:
        return f"{e.status} {e.text.strip()}"
    return e.message


def execute_rundeck_job(
    config: RundeckConfig, secrets: RundeckSecrets, params: RundeckParams
) -> HttpResponse:
    # The auth token goes last so config headers can never override it.
    headers = {**config.headers, RUNDECK_AUTH_HEADER: secrets.api_token}
    return request_json(
        "POST", config.executions_url, payload=params.job_params or {}, headers=headers
    )


def _pagerduty_headers(config: RundeckConfig, secrets: RundeckSecrets) -> dict[str, str]:
    return {
        **config.headers,
        "Accept": PAGERDUTY_ACCEPT,
        "Authorization": f"Token token={secrets.pd_api_key or ''}",
    }


def _pagerduty_url(path: str) -> str:
    base = getattr(settings, "PAGERDUTY_API_URL", "https://api.pagerduty.com").rstrip("/")
    return f"{base}{path}"


def get_pagerduty_incident_list(
    config: RundeckConfig, secrets: RundeckSecrets, dedup_key: str
) -> list[dict[str, Any]]:
    query = urlencode({"date_range": "all", "incident_key": dedup_key})
    response = request_json(
        "GET",
        _pagerduty_url(f"/incidents?{query}"),
        headers=_pagerduty_headers(config, secrets),
    )
    incidents = response.data.get("incidents") if isinstance(response.data, dict) else None
    return list(incidents or [])


def add_note_to_pagerduty_incident(
    config: RundeckConfig, secrets: RundeckSecrets, incident_id: str, execution_link: str
) -> HttpResponse:
    note = {"note": {"content": job_triggered_text(execution_link)}}
    return request_json(
        "POST",
        _pagerduty_url(f"/incidents/{incident_id}/notes"),
        payload=note,
        headers=_pagerduty_headers(config, secrets),
    )


def send_slack_message(webhook_url: str, alert_name: str | None, execution_link: str) -> None:
    """Post to a Slack incoming webhook.

    Raises:
        HttpRequestError: on transport failure, non-2xx status, or a body other than "ok"
    """
    message: dict[str, Any] = {"attachments": [{"text": job_triggered_text(execution_link)}]}
    if alert_name is not None:
        message["text"] = alert_name

    response = request_json("POST", webhook_url, payload=message)
    if response.text.strip() != "ok":
        raise HttpRequestError(
            f"unexpected Slack response: {response.text}",
            status=response.status,
            text=response.text,
        )


def executor(logger: logging.Logger, options: ActionExecutorOptions) -> ActionResult:
    """Trigger the Rundeck job and report its link to PagerDuty or Slack."""
    action_id = options.action_id
    config: RundeckConfig = options.config
    secrets: RundeckSecrets = options.secrets
    params: RundeckParams = options.params

    try:
        rundeck_response = execute_rundeck_job(config, secrets, params)
    except HttpRequestError as e:
        message = _rundeck_error_message(e)
        logger.warning(f"Error on {action_id} rundeck action: {message}")
        return error_result(action_id, message)

    rundeck_data = rundeck_response.data
    permalink = rundeck_data.get("permalink") if isinstance(rundeck_data, dict) else None
    execution_link = permalink or MISSING_LINK

    if not params.dedup_key:
        if not secrets.slack_webhook_url:
            message = "Neither of dedupKey nor slackWebhookUrl are provided, failed to send message."
            logger.warning(f"Error on {action_id} rundeck action: {message}")
            return error_slack_result(action_id, message)

        try:
            send_slack_message(secrets.slack_webhook_url, params.alert_name, execution_link)
        except HttpRequestError as e:
            message = f"an error occurred while calling slack webhook: {_slack_error_message(e)}"
            logger.warning(f"Error on {action_id} rundeck action: {message}")
            return error_slack_result(action_id, message)

        logger.info(f'Sending message to Slack succeeded in rundeck action "{action_id}".')
        return ActionResult.ok(rundeck_data)

    try:
        incidents = get_pagerduty_incident_list(config, secrets, params.dedup_key)
    except HttpRequestError as e:
        message = _pagerduty_error_message(e)
        logger.warning(
            f"error on {action_id} rundeck action: "
            f"an error occurred while calling pager duty API: {message}"
        )
        return error_pagerduty_result(action_id, message)

    logger.info(f'Retrieving PagerDuty incident list succeeded in rundeck action "{action_id}".')

    if not incidents:
        message = f'PagerDuty incident list requested by dedupKey, "{params.dedup_key}", is empty.'
        logger.warning(f"error on {action_id} rundeck action: {message}")
        return error_pagerduty_result(action_id, message)

    # Last listed, not necessarily the most recent: ordering is PagerDuty's.
    incident = incidents[-1]
    incident_id = incident.get("id") if isinstance(incident, dict) else None
    if not incident_id:
        message = f'PagerDuty incident requested by dedupKey, "{params.dedup_key}", has no id.'
        logger.warning(f"error on {action_id} rundeck action: {message}")
        return error_pagerduty_result(action_id, message)

    try:
        add_note_to_pagerduty_incident(config, secrets, str(incident_id), execution_link)
    except HttpRequestError as e:
        message = _pagerduty_error_message(e)
        logger.warning(
            f"error on {action_id} rundeck action: "
            f"an error occurred while calling pager duty API: {message}"
        )
        return error_pagerduty_result(action_id, message)

    logger.info(
        f'Calling PagerDuty "create a note API" step succeeded in rundeck action "{action_id}"'
    )
    logger.info(
        f'response from rundeck action "{action_id}": '
        f"[HTTP {rundeck_response.status}] {rundeck_response.reason}"
    )
    return ActionResult.ok(rundeck_data)


class RundeckActionType(BaseActionType):
    """Run a Rundeck job and report the execution to PagerDuty or Slack."""

    id = ".rundeck"
    name = "rundeck"
    description = "Trigger a Rundeck job and annotate the PagerDuty incident or notify Slack"

    config_schema = RundeckConfig
    secrets_schema = RundeckSecrets
    params_schema = RundeckParams

    def execute(self, options: ActionExecutorOptions) -> ActionResult:
        return executor(self.logger, options)
