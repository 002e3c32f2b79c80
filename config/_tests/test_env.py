"""Tests for the environment helpers."""

import os

from config.env import env_bool, env_list, load_env


def test_env_bool(monkeypatch):
    monkeypatch.setenv("ACTIONS_ASYNC_EXECUTION", "Yes")
    assert env_bool("ACTIONS_ASYNC_EXECUTION") is True

    monkeypatch.setenv("ACTIONS_ASYNC_EXECUTION", "0")
    assert env_bool("ACTIONS_ASYNC_EXECUTION", True) is False

    monkeypatch.delenv("ACTIONS_ASYNC_EXECUTION")
    assert env_bool("ACTIONS_ASYNC_EXECUTION", True) is True


def test_env_list_skips_blanks(monkeypatch):
    monkeypatch.setenv("DJANGO_ALLOWED_HOSTS", " a.example.com, ,b.example.com ")
    assert env_list("DJANGO_ALLOWED_HOSTS") == ["a.example.com", "b.example.com"]


def test_load_env_layers_dev_file_without_overriding(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("ACTIONS_HTTP_TIMEOUT=10\nPAGERDUTY_API_URL=https://pd.one\n")
    (tmp_path / ".env.dev").write_text("PAGERDUTY_API_URL=https://pd.dev\n")
    monkeypatch.setenv("DJANGO_ENV", "dev")
    monkeypatch.setenv("ACTIONS_HTTP_TIMEOUT", "5")
    # setenv first so the value loaded from the file is removed on teardown
    monkeypatch.setenv("PAGERDUTY_API_URL", "unset")
    monkeypatch.delenv("PAGERDUTY_API_URL")

    load_env(tmp_path)

    assert os.environ["ACTIONS_HTTP_TIMEOUT"] == "5"
    assert os.environ["PAGERDUTY_API_URL"] == "https://pd.one"
