"""
Structured error types for konducta.

Errors raised by konducta's own collaborators carry a category, a context
record and the chained cause so that a failed run can be logged with enough
detail to tell a broken git checkout from a misconfigured vendor.

Manifesto:
    - **Typed Error Hierarchy:** One subclass per collaborator that can fail
    - **Rich Context:** Errors carry project, company and stage metadata
    - **Error Chaining:** The original exception is kept as ``cause``
    - **Fail Fast:** The bot never catches these; a failed run aborts

Architecture:
    ::

        ┌──────────────────────────────────────────────────────┐
        │                    KonductaError                     │
        │        (category, context, cause)                    │
        ├──────────────────────────────────────────────────────┤
        │  ConfigError          GitError        DataStoreError │
        │  (CONFIG)             (GIT)           (STORAGE)      │
        │       │                                              │
        │  InvalidConfigError                                  │
        │  CompanyNotFoundError                                │
        └──────────────────────────────────────────────────────┘

Usage:
    from konducta.core.errors import GitError

    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        raise GitError("checkout failed", cause=e).with_context(project="konducta_data")

Tags:
    error-handling, exception-hierarchy, error-context, konducta

Doc-Types:
    api-reference
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and log routing."""

    CONFIG = "CONFIG"
    GIT = "GIT"
    STORAGE = "STORAGE"
    COMPANY = "COMPANY"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only the fields relevant to the failure need to be set; anything that has
    no dedicated field ends up in ``metadata``.
    """

    run_id: int | None = None
    company: str | None = None
    stage: str | None = None
    project: str | None = None
    path: str | None = None
    command: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["run_id", "company", "stage", "project", "path", "command"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class KonductaError(Exception):
    """
    Base exception for all konducta errors.

    Subclasses set ``default_category`` so callers never have to pass it.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> KonductaError:
        """
        Add context to this error (fluent API).

        Usage:
            raise GitError("Failed").with_context(project="carrier_vuln_tests")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(KonductaError):
    """Configuration error. The run cannot start until it is fixed."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


class CompanyNotFoundError(ConfigError):
    """A configured source or vendor is not registered."""

    default_category = ErrorCategory.COMPANY

    def __init__(self, kind: str, name: str, available: list[str] | None = None):
        self.kind = kind
        self.name = name
        self.available = available or []
        message = f"{kind.capitalize()} '{name}' not found"
        if self.available:
            message += f". Available: {', '.join(self.available)}"
        super().__init__(message)


# =============================================================================
# COLLABORATOR ERRORS
# =============================================================================


class GitError(KonductaError):
    """A git command against a configured project failed."""

    default_category = ErrorCategory.GIT


class DataStoreError(KonductaError):
    """The working data directory could not be read or wiped."""

    default_category = ErrorCategory.STORAGE


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "KonductaError",
    "ConfigError",
    "InvalidConfigError",
    "CompanyNotFoundError",
    "GitError",
    "DataStoreError",
]
