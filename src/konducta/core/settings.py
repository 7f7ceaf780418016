"""
Centralized settings for konducta.

Manifesto:
    One validated, cached settings object holds everything a run needs to
    know about its environment: where the working data lives, which git
    projects can be reset, which companies take part and which stages are on
    by default. CLI flags layer on top of it in :mod:`konducta.options`.

Examples:
    ``KONDUCTA_STAGES__UPLOAD=false`` disables uploads by default;
    ``konducta run --stage upload`` turns it back on for a single run.

Tags:
    konducta, configuration, settings, pydantic, caching

Doc-Types:
    api-reference
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from konducta.options import StageToggles


class ProjectSettings(BaseModel):
    """A git project that can be reset before a run."""

    url: str
    path: Path


class KonductaSettings(BaseSettings):
    """konducta configuration.

    All fields can be set via ``KONDUCTA_*`` environment variables (e.g.
    ``KONDUCTA_DATA_DIR=/srv/konducta``), nested fields with ``__``
    (``KONDUCTA_STAGES__UPLOAD=false``), or through a ``.env`` file. Mapping
    and list fields take JSON.
    """

    model_config = SettingsConfigDict(
        env_prefix="KONDUCTA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    # ── Storage ──────────────────────────────────────────────────
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".konducta" / "data",
        description="Working directory wiped after an upload run",
    )

    # ── Git ──────────────────────────────────────────────────────
    dev_branch: str = Field(default="dev")
    projects: dict[str, ProjectSettings] = Field(default_factory=dict)

    # ── Companies ────────────────────────────────────────────────
    sources: list[str] = Field(
        default_factory=list,
        description="Registered source names to run; empty runs every registered source",
    )
    products: dict[str, list[str]] = Field(default_factory=dict)

    # ── Stages ───────────────────────────────────────────────────
    stages: StageToggles = Field(default_factory=StageToggles)

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}")
        return value

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in {"console", "json"}:
            raise ValueError(f"unknown log format {value!r}")
        return value


@lru_cache(maxsize=1)
def get_settings() -> KonductaSettings:
    """Return the cached settings instance."""
    return KonductaSettings()


def clear_settings_cache() -> None:
    """Drop the cached settings (for testing)."""
    get_settings.cache_clear()
