"""
config/settings.py — Runtime Settings

Two sources, merged by pydantic-settings:
  - config.yaml for structure and defaults (history cap, model, timeouts, logging)
  - the environment / .env for the API key (GOOGLE_API_KEY, or GEMINI_API_KEY)

Field validators reject bad values at load time. validate_all() runs the
startup checks a validator can't express, chiefly "is there a key at all",
and raises ConfigError listing everything that is wrong at once.

The YAML path comes from, in order: the load_settings() argument, the
SHIM_CONFIG environment variable, then config/config.yaml.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from exceptions import ConfigError

__all__ = [
    "AgentConfig",
    "ConfigError",
    "LLMConfig",
    "LoggingConfig",
    "Settings",
    "ToolsConfig",
    "WebSearchToolConfig",
    "get_settings",
    "load_settings",
]

API_KEY_HELP_URL = "https://makersuite.google.com/app/apikey"
DEFAULT_CONFIG_PATH = Path("config/config.yaml")
CONFIG_ENV_VAR = "SHIM_CONFIG"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ─────────────────────────────────────────────────────────────────────────────
# Sections
# ─────────────────────────────────────────────────────────────────────────────

class AgentConfig(BaseModel):
    max_history_pairs: int = Field(default=5, ge=1)


class LLMConfig(BaseModel):
    base_url: str = "https://generativelanguage.googleapis.com/v1"
    model: str = "gemini-1.5-pro"
    timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def _no_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class WebSearchToolConfig(BaseModel):
    live: bool = False
    max_results: int = Field(default=5, ge=1, le=10)
    timeout_seconds: float = Field(default=15.0, gt=0)


class ToolsConfig(BaseModel):
    web_search: WebSearchToolConfig = Field(default_factory=WebSearchToolConfig)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    log_dir: Path = Path("./data/logs")
    max_file_size_mb: int = Field(default=10, ge=1)
    backup_count: int = Field(default=5, ge=0)
    console_output: bool = False
    json_format: bool = True

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return v.upper()


# ─────────────────────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────────────────────

class Settings(BaseSettings):
    """
    Resolved runtime settings.

    Precedence: init kwargs (the YAML sections) > environment > .env > defaults.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    google_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_API_KEY", "GEMINI_API_KEY", "google_api_key"),
    )

    agent: AgentConfig = Field(default_factory=AgentConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("google_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v).strip() or None

    def logging_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for observability.logger.setup_logging()."""
        cfg = self.logging
        return {
            "level": cfg.level,
            "log_dir": cfg.log_dir,
            "json_format": cfg.json_format,
            "console_output": cfg.console_output,
            "max_bytes": cfg.max_file_size_mb * 1024 * 1024,
            "backup_count": cfg.backup_count,
        }

    def problems(self) -> list[str]:
        """Startup problems that field validation can't catch. Empty means OK."""
        found: list[str] = []
        if not self.google_api_key:
            found.append(
                "Please set the GOOGLE_API_KEY environment variable with your "
                f"Google Cloud API key. You can get one from: {API_KEY_HELP_URL}"
            )
        if not self.llm.model.strip():
            found.append("llm.model must not be empty.")
        if not self.llm.base_url.startswith(("http://", "https://")):
            found.append(f"llm.base_url '{self.llm.base_url}' must start with http:// or https://.")
        return found

    def validate_all(self) -> None:
        """Raise ConfigError listing every problem found by problems()."""
        found = self.problems()
        if not found:
            return
        listing = "\n".join(f"  {i}. {p}" for i, p in enumerate(found, start=1))
        raise ConfigError(
            f"Startup failed: {len(found)} configuration problem(s) found:\n\n"
            f"{listing}\n\n"
            "Fix them in config/config.yaml or your .env file and restart."
        )


# ─────────────────────────────────────────────────────────────────────────────
# Loading
# ─────────────────────────────────────────────────────────────────────────────

_SECTIONS = frozenset(Settings.model_fields) - {"google_api_key"}

_singleton: Optional[Settings] = None
_singleton_lock = threading.Lock()


def _config_path(config_path: str | Path | None) -> Path:
    if config_path is not None:
        return Path(config_path)
    from_env = os.environ.get(CONFIG_ENV_VAR)
    return Path(from_env) if from_env else DEFAULT_CONFIG_PATH


def _read_sections(path: Path) -> dict[str, Any]:
    """YAML sections Settings knows about; a missing or empty file gives {}."""
    if not path.is_file():
        return {}
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be a mapping, got {type(raw).__name__}")
    return {k: v for k, v in raw.items() if k in _SECTIONS}


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Build Settings from YAML plus environment and make it the process-wide instance."""
    global _singleton
    settings = Settings(**_read_sections(_config_path(config_path)))
    with _singleton_lock:
        _singleton = settings
    return settings


def get_settings() -> Settings:
    """The instance from the last load_settings(), loading defaults on first use."""
    with _singleton_lock:
        current = _singleton
    return current if current is not None else load_settings()
