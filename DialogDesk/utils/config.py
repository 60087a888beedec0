"""Environment and configuration loader for DialogDesk."""

from dataclasses import dataclass
from functools import lru_cache
import os
from typing import Optional

from dotenv import load_dotenv

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _get_env(name: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """Fetch an environment variable with optional default and required enforcement."""
    value = os.getenv(name, default)
    if required and (value is None or value == ""):
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _get_flag(name: str, default: bool = False) -> bool:
    value = _get_env(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUE_VALUES


def _get_float(name: str, default: float) -> float:
    value = _get_env(name)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {name} must be a number, got '{value}'") from exc


@dataclass
class FeatureFlags:
    local_ai: bool
    speech_to_text: bool
    llm_fallback: bool


@dataclass
class LocalAISettings:
    speech_to_text_url: str
    text_processing_url: str
    speech_timeout: float
    text_timeout: float


@dataclass
class LLMSettings:
    model: str
    token: Optional[str]
    max_tokens: int
    temperature: float


@dataclass
class HelpdeskSettings:
    tickets_url: str
    timeout: float
    verify_tls: bool
    check_user_url: str = "https://127.0.0.1:8001/api/check-user"
    auth_timeout: float = 10.0


@dataclass
class Settings:
    mode: str
    features: FeatureFlags
    local_ai: LocalAISettings
    llm: LLMSettings
    helpdesk: HelpdeskSettings
    log_dir: str
    log_level: str

    @property
    def debug(self) -> bool:
        return self.mode != "production"


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load environment-backed settings once and cache the result."""
    load_dotenv()
    mode = (_get_env("DIALOGDESK_MODE", "debug") or "debug").strip().lower()
    features = FeatureFlags(
        local_ai=_get_flag("ENABLE_LOCAL_AI"),
        speech_to_text=_get_flag("ENABLE_SPEECH_TO_TEXT"),
        llm_fallback=_get_flag("ENABLE_LLM_FALLBACK"),
    )
    local_ai = LocalAISettings(
        speech_to_text_url=_get_env("SPEECH_TO_TEXT_URL", "http://localhost:8338/update/") or "",
        text_processing_url=_get_env("TEXT_PROCESSING_URL", "http://localhost:8339/process/") or "",
        speech_timeout=_get_float("SPEECH_TIMEOUT", 60.0),
        text_timeout=_get_float("TEXT_TIMEOUT", 30.0),
    )
    llm = LLMSettings(
        model=_get_env("LLM_MODEL", "Qwen/Qwen2-72B-Instruct") or "",
        token=_get_env("HF_TOKEN") or _get_env("HUGGINGFACE_HUB_TOKEN"),
        max_tokens=int(_get_float("LLM_MAX_TOKENS", 512)),
        temperature=_get_float("LLM_TEMPERATURE", 0.2),
    )
    helpdesk = HelpdeskSettings(
        tickets_url=_get_env("HELPDESK_TICKETS_URL", "https://127.0.0.1:8001/api") or "",
        timeout=_get_float("HELPDESK_TIMEOUT", 15.0),
        verify_tls=_get_flag("HELPDESK_VERIFY_TLS", default=True),
        check_user_url=_get_env("HELPDESK_CHECK_USER_URL", "https://127.0.0.1:8001/api/check-user") or "",
        auth_timeout=_get_float("HELPDESK_AUTH_TIMEOUT", 10.0),
    )
    return Settings(
        mode=mode,
        features=features,
        local_ai=local_ai,
        llm=llm,
        helpdesk=helpdesk,
        log_dir=_get_env("DIALOGDESK_LOG_DIR", "logs") or "logs",
        log_level=_get_env("DIALOGDESK_LOG_LEVEL", "INFO") or "INFO",
    )


__all__ = [
    "Settings",
    "FeatureFlags",
    "LocalAISettings",
    "LLMSettings",
    "HelpdeskSettings",
    "load_settings",
]
