"""JSON-over-HTTP helper shared by action types.

Wraps ``urllib.request`` and raises a single :class:`HttpRequestError` for
both non-2xx responses and transport failures, so callers can build one error
message from either.

Public API:
- HttpResponse
- HttpRequestError
- request_json
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any

from django.conf import settings

logger = logging.getLogger(__name__)

USER_AGENT = "RundeckAction/1.0"


@dataclass
class HttpResponse:
    """Successful (2xx) response with the body decoded from JSON when possible."""

    status: int
    reason: str
    data: Any = None
    text: str = ""


class HttpRequestError(Exception):
    """A request failed, either with a non-2xx status or before a response arrived.

    ``status`` is None for transport failures (DNS, refused connection, timeout).
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        reason: str = "",
        data: Any = None,
        text: str = "",
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.reason = reason
        self.data = data
        self.text = text

    @property
    def has_response(self) -> bool:
        return self.status is not None


def _host(url: str) -> str:
    # Webhook URLs carry their secret in the path; only the host is reported.
    return urllib.parse.urlsplit(url).netloc or "<invalid url>"


def _decode(body: bytes) -> tuple[Any, str]:
    text = body.decode("utf-8", errors="replace") if body else ""
    if not text:
        return None, text
    try:
        return json.loads(text), text
    except json.JSONDecodeError:
        return None, text


def request_json(
    method: str,
    url: str,
    payload: Any = None,
    headers: dict[str, str] | None = None,
    timeout: float | None = None,
) -> HttpResponse:
    """Send a request with an optional JSON body and return the decoded response.

    Args:
        method: HTTP method ("GET", "POST", ...)
        url: Absolute URL
        payload: JSON-serializable body; omitted when None
        headers: Extra request headers, applied over the defaults
        timeout: Seconds; defaults to settings.ACTIONS_HTTP_TIMEOUT

    Raises:
        HttpRequestError: on non-2xx status or transport failure
    """
    if timeout is None:
        timeout = getattr(settings, "ACTIONS_HTTP_TIMEOUT", 30)

    request_headers = {
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
    }
    data = None
    if payload is not None:
        data = json.dumps(payload).encode("utf-8")
        request_headers["Content-Type"] = "application/json"
    request_headers.update(headers or {})

    try:
        request = urllib.request.Request(
            url,
            data=data,
            headers=request_headers,
            method=method.upper(),
        )
        with urllib.request.urlopen(request, timeout=timeout) as response:
            body_data, body_text = _decode(response.read())
            return HttpResponse(
                status=response.getcode(),
                reason=getattr(response, "reason", "") or "",
                data=body_data,
                text=body_text,
            )
    except urllib.error.HTTPError as e:
        body_data, body_text = _decode(e.read() if e.fp else b"")
        logger.debug(f"{method.upper()} {_host(url)} failed with HTTP {e.code}")
        raise HttpRequestError(
            f"Request failed with status code {e.code}",
            status=e.code,
            reason=str(e.reason or ""),
            data=body_data,
            text=body_text,
        ) from e
    except urllib.error.URLError as e:
        raise HttpRequestError(f"Failed to connect to {_host(url)}: {e.reason}") from e
    except (ValueError, http.client.HTTPException) as e:
        # Message may embed the full URL; report the exception type only.
        raise HttpRequestError(
            f"Invalid request to {_host(url)}: {type(e).__name__}"
        ) from None
    except OSError as e:
        raise HttpRequestError(f"Failed to connect to {_host(url)}: {e}") from e
