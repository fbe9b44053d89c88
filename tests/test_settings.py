import json
import logging
import sys

import pytest

from logging_config import JSONFormatter, setup_logging
from settings import Settings, build_client, load_settings

ENV_VARS = (
    "OPENROUTER_API_KEY",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "RESUME_LLM_MODEL",
    "RESUME_EMBEDDING_MODEL",
    "ATS_ENABLE_SEMANTIC",
    "ATS_ENABLE_AI",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_without_environment(clean_env):
    settings = load_settings()
    assert settings.api_key is None
    assert not settings.has_credentials
    assert settings.base_url == "https://openrouter.ai/api/v1"
    assert settings.embedding_model == "text-embedding-3-small"
    assert settings.enable_semantic and settings.enable_ai
    assert settings.log_level == "INFO"


def test_environment_overrides(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("RESUME_LLM_MODEL", "openai/gpt-4o-mini")
    clean_env.setenv("ATS_ENABLE_SEMANTIC", "false")
    clean_env.setenv("ATS_ENABLE_AI", "0")
    clean_env.setenv("LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.api_key == "sk-test"
    assert settings.llm_model == "openai/gpt-4o-mini"
    assert settings.enable_semantic is False
    assert settings.enable_ai is False
    assert settings.log_level == "DEBUG"


def test_openrouter_key_takes_precedence(clean_env):
    clean_env.setenv("OPENROUTER_API_KEY", "or-key")
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    assert load_settings().api_key == "or-key"


def test_build_client_without_key_is_none():
    assert build_client(Settings(api_key=None)) is None


def test_build_client_sends_attribution_headers():
    client = build_client(Settings(api_key="test-key", http_referer="https://example.test", app_title="ATS"))
    assert client is not None
    assert client.default_headers["HTTP-Referer"] == "https://example.test"
    assert client.default_headers["X-Title"] == "ATS"


def test_json_formatter_emits_one_object_per_record():
    record = logging.LogRecord("ats", logging.WARNING, __file__, 10, "score=%d", (42,), None)
    payload = json.loads(JSONFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "ats"
    assert payload["message"] == "score=42"
    assert payload["location"].startswith("test_settings.")
    assert "exception" not in payload


def test_json_formatter_includes_exception_text():
    try:
        raise RuntimeError("provider down")
    except RuntimeError:
        record = logging.LogRecord("ats", logging.ERROR, __file__, 20, "failed", (), sys.exc_info())
    payload = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: provider down" in payload["exception"]


def test_setup_logging_accepts_level_names():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        assert setup_logging("debug").level == logging.DEBUG
        assert setup_logging("not-a-level").level == logging.INFO
        assert len(root.handlers) == 1
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
