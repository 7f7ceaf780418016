"""Company registry for registering and discovering sources and vendors.

Manifesto:
    Companies live in their own packages. A central registry lets the run
    context look them up by configured name without import-time coupling.

Companies register through the decorators below. Installed packages expose
their company modules under the ``konducta.companies`` entry-point group;
those modules are imported once, lazily, on first lookup.

Tags:
    konducta, registry, company-discovery, lookup

Doc-Types:
    api-reference
"""

from collections.abc import Callable
from importlib.metadata import entry_points
from typing import TypeVar

from konducta.companies.base import Source, Vendor
from konducta.core.errors import CompanyNotFoundError
from konducta.framework.logging import get_logger

logger = get_logger(__name__)

ENTRY_POINT_GROUP = "konducta.companies"

S = TypeVar("S", bound=type[Source])
V = TypeVar("V", bound=type[Vendor])

# Global company registries
_sources: dict[str, type[Source]] = {}
_vendors: dict[str, type[Vendor]] = {}
_loaded: bool = False


def register_source(name: str) -> Callable[[S], S]:
    """Decorator to register a source class."""

    def decorator(cls: S) -> S:
        if name in _sources:
            raise ValueError(f"Source '{name}' is already registered")
        cls.name = name
        _sources[name] = cls
        logger.debug("source_registered", name=name, cls=cls.__name__)
        return cls

    return decorator


def register_vendor(name: str) -> Callable[[V], V]:
    """Decorator to register a vendor class."""

    def decorator(cls: V) -> V:
        if name in _vendors:
            raise ValueError(f"Vendor '{name}' is already registered")
        cls.name = name
        _vendors[name] = cls
        logger.debug("vendor_registered", name=name, cls=cls.__name__)
        return cls

    return decorator


def _ensure_loaded() -> None:
    """Import entry-point company modules once."""
    global _loaded
    if not _loaded:
        _loaded = True
        _load_companies()


def get_source(name: str) -> type[Source]:
    """Get a source class by name."""
    _ensure_loaded()
    if name not in _sources:
        raise CompanyNotFoundError("source", name, sorted(_sources))
    return _sources[name]


def get_vendor(name: str) -> type[Vendor]:
    """Get a vendor class by name."""
    _ensure_loaded()
    if name not in _vendors:
        raise CompanyNotFoundError("vendor", name, sorted(_vendors))
    return _vendors[name]


def list_sources() -> list[str]:
    """Registered source names, in registration order."""
    _ensure_loaded()
    return list(_sources)


def list_vendors() -> list[str]:
    """Registered vendor names, in registration order."""
    _ensure_loaded()
    return list(_vendors)


def clear_registry(*, mark_loaded: bool = False) -> None:
    """Clear registry (for testing).

    ``mark_loaded`` stops later lookups from importing entry points.
    """
    global _loaded
    _sources.clear()
    _vendors.clear()
    _loaded = mark_loaded


def _load_companies() -> None:
    """Import every module registered under the ``konducta.companies`` group."""
    for ep in entry_points(group=ENTRY_POINT_GROUP):
        ep.load()
        logger.debug("company_module_loaded", entry_point=ep.name, value=ep.value)
    logger.debug("company_registry_loaded", sources=len(_sources), vendors=len(_vendors))
