"""Core primitives shared by every konducta module: errors and settings."""

from konducta.core.errors import (
    CompanyNotFoundError,
    ConfigError,
    DataStoreError,
    ErrorCategory,
    ErrorContext,
    GitError,
    InvalidConfigError,
    KonductaError,
)
from konducta.core.settings import KonductaSettings, ProjectSettings, clear_settings_cache, get_settings

__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "KonductaError",
    "ConfigError",
    "InvalidConfigError",
    "CompanyNotFoundError",
    "GitError",
    "DataStoreError",
    "KonductaSettings",
    "ProjectSettings",
    "get_settings",
    "clear_settings_cache",
]
