"""
config.py
=========
Environment-driven settings for the plant-care chat backend.

Values come from the process environment (a project-root ``.env`` is loaded
by main.py first).  Surrounding whitespace and quotes are stripped.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple


class ConfigurationError(ValueError):
    """Raised when an environment value cannot be used."""


def _clean_env(name: str, default: str = "") -> str:
    value = os.getenv(name, default)
    return value.strip().strip('"').strip("'")


@dataclass(frozen=True)
class Settings:
    ollama_base_url: str = "http://localhost:11434"
    chat_model: str = "tinyllama"
    embed_model: str = "nomic-embed-text"
    timeout_seconds: float = 60.0
    top_k: int = 3
    plant_data_path: Optional[str] = None
    cors_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"


def load_settings() -> Settings:
    defaults = Settings()
    origins = tuple(
        item.strip() for item in _clean_env("CORS_ORIGINS", "*").split(",") if item.strip()
    )
    return Settings(
        ollama_base_url = _clean_env("OLLAMA_BASE_URL", defaults.ollama_base_url).rstrip("/"),
        chat_model      = _clean_env("OLLAMA_CHAT_MODEL", defaults.chat_model),
        embed_model     = _clean_env("OLLAMA_EMBED_MODEL", defaults.embed_model),
        timeout_seconds = _positive("OLLAMA_TIMEOUT_SECONDS", float, defaults.timeout_seconds),
        top_k           = _positive("RAG_TOP_K", int, defaults.top_k),
        plant_data_path = _clean_env("PLANT_DATA_PATH") or None,
        cors_origins    = origins or defaults.cors_origins,
        log_level       = _clean_env("LOG_LEVEL", defaults.log_level).upper(),
    )


def _positive(name: str, cast, default):
    raw = _clean_env(name)
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value
