"""Environment-driven configuration for the ATS scorer."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from openai import OpenAI

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"


def _env_flag(name: str, default: bool = True) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    http_referer: str = "Local"
    app_title: str = "Resume ATS Scorer"
    llm_model: Optional[str] = None
    embedding_model: str = DEFAULT_EMBEDDING_MODEL
    enable_semantic: bool = True
    enable_ai: bool = True
    log_level: str = "INFO"

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)


def load_settings() -> Settings:
    """Read settings from the process environment (and ``.env`` if present)."""
    return Settings(
        api_key=os.getenv("OPENROUTER_API_KEY") or os.getenv("OPENAI_API_KEY") or None,
        base_url=os.getenv("OPENAI_BASE_URL", DEFAULT_BASE_URL),
        http_referer=os.getenv("LLM_HTTP_REFERER", "Local"),
        app_title=os.getenv("LLM_APP_TITLE", "Resume ATS Scorer"),
        llm_model=os.getenv("RESUME_LLM_MODEL") or None,
        embedding_model=os.getenv("RESUME_EMBEDDING_MODEL", DEFAULT_EMBEDDING_MODEL),
        enable_semantic=_env_flag("ATS_ENABLE_SEMANTIC"),
        enable_ai=_env_flag("ATS_ENABLE_AI"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def build_client(settings: Settings) -> Optional[OpenAI]:
    """OpenAI-compatible client, or ``None`` when no credential is configured.

    A missing key is not an error: the pipeline then runs in rule-only mode.
    """
    if not settings.has_credentials:
        logger.info("No OPENROUTER_API_KEY or OPENAI_API_KEY set; running in rule-based mode.")
        return None

    headers = {
        "HTTP-Referer": settings.http_referer,
        "X-Title": settings.app_title,
    }
    try:
        client = OpenAI(api_key=settings.api_key, base_url=settings.base_url, default_headers=headers)
    except Exception as exc:  # pragma: no cover - best effort logging
        logger.exception("Failed to initialize OpenAI-compatible client: %s", exc)
        return None
    logger.info("Initialized OpenAI-compatible client for base_url=%s", settings.base_url)
    return client
