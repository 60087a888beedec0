"""Tests for environment-backed settings."""

from __future__ import annotations

from typing import Any

import pytest

from DialogDesk.utils import config

ENV_VARS = [
    "DIALOGDESK_MODE",
    "ENABLE_LOCAL_AI",
    "ENABLE_SPEECH_TO_TEXT",
    "ENABLE_LLM_FALLBACK",
    "SPEECH_TIMEOUT",
    "HELPDESK_VERIFY_TLS",
    "HF_TOKEN",
    "HUGGINGFACE_HUB_TOKEN",
    "LLM_MAX_TOKENS",
    "HELPDESK_CHECK_USER_URL",
    "HELPDESK_AUTH_TIMEOUT",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: Any) -> Any:
    monkeypatch.setattr(config, "load_dotenv", lambda *args, **kwargs: False)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config.load_settings.cache_clear()
    yield
    config.load_settings.cache_clear()


def test_defaults() -> None:
    settings = config.load_settings()
    assert settings.mode == "debug"
    assert settings.debug
    assert not settings.features.local_ai
    assert not settings.features.speech_to_text
    assert not settings.features.llm_fallback
    assert settings.local_ai.speech_to_text_url == "http://localhost:8338/update/"
    assert settings.local_ai.speech_timeout == 60.0
    assert settings.helpdesk.verify_tls
    assert settings.helpdesk.check_user_url == "https://127.0.0.1:8001/api/check-user"
    assert settings.helpdesk.auth_timeout == 10.0
    assert settings.llm.max_tokens == 512
    assert settings.llm.token is None


def test_env_overrides(monkeypatch: Any) -> None:
    monkeypatch.setenv("DIALOGDESK_MODE", "Production")
    monkeypatch.setenv("ENABLE_LOCAL_AI", "yes")
    monkeypatch.setenv("ENABLE_LLM_FALLBACK", "1")
    monkeypatch.setenv("SPEECH_TIMEOUT", "12.5")
    monkeypatch.setenv("HELPDESK_VERIFY_TLS", "false")
    monkeypatch.setenv("HUGGINGFACE_HUB_TOKEN", "hf_test")
    monkeypatch.setenv("HELPDESK_CHECK_USER_URL", "https://helpdesk.local/api/check-user")
    settings = config.load_settings()
    assert settings.mode == "production"
    assert not settings.debug
    assert settings.features.local_ai
    assert settings.features.llm_fallback
    assert settings.local_ai.speech_timeout == 12.5
    assert not settings.helpdesk.verify_tls
    assert settings.llm.token == "hf_test"
    assert settings.helpdesk.check_user_url == "https://helpdesk.local/api/check-user"


def test_bad_number_raises(monkeypatch: Any) -> None:
    monkeypatch.setenv("LLM_MAX_TOKENS", "many")
    with pytest.raises(RuntimeError):
        config.load_settings()


def test_settings_are_cached(monkeypatch: Any) -> None:
    first = config.load_settings()
    monkeypatch.setenv("DIALOGDESK_MODE", "production")
    assert config.load_settings() is first
