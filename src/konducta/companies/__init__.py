"""Companies: the sources and vendors a run dispatches stages to."""

from konducta.companies.base import Company, Source, Vendor
from konducta.companies.registry import (
    clear_registry,
    get_source,
    get_vendor,
    list_sources,
    list_vendors,
    register_source,
    register_vendor,
)

__all__ = [
    "Company",
    "Source",
    "Vendor",
    "register_source",
    "register_vendor",
    "get_source",
    "get_vendor",
    "list_sources",
    "list_vendors",
    "clear_registry",
]
