"""
Configuration management for spanset.

Configuration is loaded from:
1. Environment variables (highest priority), e.g. SPANSET_ENGINE__FAST_PATHS=false
2. spanset.yaml file
3. Default values (lowest priority)
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml


class EngineSettings(BaseSettings):
    """Span algebra engine behavior."""

    # Degenerate raw pairs (a == b) are dropped by default. Strict mode
    # rejects them with InvalidBoundError instead.
    strict_degenerate: bool = False
    # Disjoint/empty operand shortcuts. Results are identical either way.
    fast_paths: bool = True


class ExportSettings(BaseSettings):
    """Default field names used when exporting spans as records."""

    start_key: str = "from"
    end_key: str = "to"

    @field_validator("start_key", "end_key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("record keys must be non-empty")
        return v

    @model_validator(mode="after")
    def validate_distinct(self) -> "ExportSettings":
        if self.start_key == self.end_key:
            raise ValueError(
                f"start_key and end_key must differ (both are {self.start_key!r})"
            )
        return self


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    json_format: bool = False
    file: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class Settings(BaseSettings):
    """Main settings class that combines all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="SPANSET_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    engine: EngineSettings = Field(default_factory=EngineSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # YAML values arrive as init kwargs; environment must win over them.
        return env_settings, init_settings, dotenv_settings, file_secret_settings


def load_yaml_config(path: Path | None = None) -> dict:
    """Load configuration from YAML file."""
    if path is None:
        candidates = [
            Path("spanset.yaml"),
            Path("config/spanset.yaml"),
            Path.home() / ".config" / "spanset" / "spanset.yaml",
        ]
        for candidate in candidates:
            if candidate.exists():
                path = candidate
                break

    if path and path.exists():
        with open(path) as f:
            return yaml.safe_load(f) or {}

    return {}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    yaml_config = load_yaml_config()
    return Settings(**yaml_config)


def reload_settings() -> Settings:
    """Force reload of settings (clears cache)."""
    get_settings.cache_clear()
    return get_settings()
