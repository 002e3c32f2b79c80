"""Environment helpers used by config/settings.py.

Local runs can keep action settings (PAGERDUTY_API_URL,
ACTIONS_HTTP_TIMEOUT, CELERY_BROKER_URL, ...) in a .env file at the project
root; .env.dev is layered on top when DJANGO_ENV=dev. Process env vars win.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


def _should_load_dev_env() -> bool:
    return os.environ.get("DJANGO_ENV", "").lower() in {"dev", "development", "local"}


def load_env(base_dir: Path | None = None) -> None:
    """Load .env files into the process environment. Safe to call multiple times.

    Args:
        base_dir: Project root directory. Defaults to config/..
    """
    if base_dir is None:
        base_dir = Path(__file__).resolve().parent.parent

    load_dotenv(base_dir / ".env", override=False)

    if _should_load_dev_env():
        load_dotenv(base_dir / ".env.dev", override=False)


def env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_list(name: str, default: str = "") -> list[str]:
    return [item.strip() for item in os.environ.get(name, default).split(",") if item.strip()]
