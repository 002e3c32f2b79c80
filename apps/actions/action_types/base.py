"""Base action type and data structures for action execution.

An action type bundles the schemas for its config, secrets and params with an
executor that performs the action. Executors always return an ActionResult;
they never raise to the caller.

Public API:
- ActionResult
- ActionExecutorOptions
- ActionValidationError
- BaseActionType
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping
from urllib.parse import urlsplit


class ActionValidationError(ValueError):
    """Raised when config, secrets or params do not match an action type's schema."""


@dataclass(frozen=True)
class ActionResult:
    """Outcome of an action execution.

    Exactly one shape is produced: ``ok`` with ``data`` or ``error`` with ``message``.
    """

    status: str  # "ok" or "error"
    data: Any = None
    message: str | None = None

    @classmethod
    def ok(cls, data: Any) -> "ActionResult":
        return cls(status="ok", data=data)

    @classmethod
    def error(cls, message: str) -> "ActionResult":
        return cls(status="error", message=message)

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"

    def to_dict(self) -> dict[str, Any]:
        if self.is_ok:
            return {"status": "ok", "data": self.data}
        return {"status": "error", "message": self.message}


@dataclass(frozen=True)
class ActionExecutorOptions:
    """Validated inputs for a single execution."""

    action_id: str
    config: Any
    secrets: Any
    params: Any


class Schema(ABC):
    """A value object that can be built from a raw dict."""

    # Wire keys accepted by from_dict, used for listings and error messages.
    keys: ClassVar[tuple[str, ...]] = ()

    @classmethod
    @abstractmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "Schema":
        """Validate ``raw`` and build the value object."""


class BaseActionType(ABC):
    """Abstract base class for action types."""

    id: str = ".base"
    name: str = "base"
    description: str = ""

    config_schema: type[Schema]
    secrets_schema: type[Schema]
    params_schema: type[Schema]

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def validate(
        self,
        config: Mapping[str, Any] | None,
        secrets: Mapping[str, Any] | None,
        params: Mapping[str, Any] | None,
    ) -> tuple[Schema, Schema, Schema]:
        """Validate raw inputs against this type's schemas.

        Raises:
            ActionValidationError: prefixed with the part that failed
                ("config", "secrets" or "params")
        """
        parts = (
            ("config", self.config_schema, config),
            ("secrets", self.secrets_schema, secrets),
            ("params", self.params_schema, params),
        )
        validated = []
        for part, schema, raw in parts:
            try:
                validated.append(schema.from_dict(raw))
            except ActionValidationError as e:
                raise ActionValidationError(
                    f"error validating action type {part}: {e}"
                ) from e
        return validated[0], validated[1], validated[2]

    @abstractmethod
    def execute(self, options: ActionExecutorOptions) -> ActionResult:
        """Run the action and return its result."""

    def describe(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "config": list(self.config_schema.keys),
            "secrets": list(self.secrets_schema.keys),
            "params": list(self.params_schema.keys),
        }


def _mapping(raw: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ActionValidationError(f"expected an object, got {type(raw).__name__}")
    return raw


def required_string(raw: Mapping[str, Any] | None, key: str) -> str:
    value = _mapping(raw).get(key)
    if value is None:
        raise ActionValidationError(f"[{key}]: expected value of type [string] but got [undefined]")
    if not isinstance(value, str):
        raise ActionValidationError(
            f"[{key}]: expected value of type [string] but got [{type(value).__name__}]"
        )
    if not value:
        raise ActionValidationError(f"[{key}]: value must not be empty")
    return value


def nullable_string(raw: Mapping[str, Any] | None, key: str) -> str | None:
    value = _mapping(raw).get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ActionValidationError(
            f"[{key}]: expected value of type [string] but got [{type(value).__name__}]"
        )
    return value


def nullable_string_mapping(raw: Mapping[str, Any] | None, key: str) -> dict[str, str]:
    value = _mapping(raw).get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ActionValidationError(
            f"[{key}]: expected value of type [object] but got [{type(value).__name__}]"
        )
    for k, v in value.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise ActionValidationError(f"[{key}.{k}]: expected value of type [string]")
    return dict(value)


def nullable_object(raw: Mapping[str, Any] | None, key: str) -> dict[str, Any] | None:
    value = _mapping(raw).get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ActionValidationError(
            f"[{key}]: expected value of type [object] but got [{type(value).__name__}]"
        )
    return dict(value)


def integer(raw: Mapping[str, Any] | None, key: str, default: int) -> int:
    value = _mapping(raw).get(key)
    if value is None:
        return default
    # bool is an int subclass but never a valid version
    if isinstance(value, bool):
        raise ActionValidationError(f"[{key}]: expected value of type [number] but got [bool]")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ActionValidationError(
        f"[{key}]: expected value of type [number] but got [{type(value).__name__}]"
    )


def uri(raw: Mapping[str, Any] | None, key: str) -> str:
    """Absolute http(s) URI. Single-label hosts (e.g. ``http://rundeck:4440``) are allowed."""
    value = required_string(raw, key)
    parts = urlsplit(value)
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise ActionValidationError(f"[{key}]: value must be a valid URI")
    return value
