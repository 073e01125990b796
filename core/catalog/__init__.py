"""
Catalog data model: listings, complexes, collections and snapshots.
"""

from core.catalog.models import (
    AutoRules,
    CatalogEntry,
    CatalogRecord,
    CatalogSnapshot,
    Category,
    CollectionDefinition,
    CollectionItemRef,
    CollectionMode,
    Complex,
    EntryKind,
    Listing,
    RecordStatus,
)
from core.catalog.repository import CatalogRepository

__all__ = [
    "AutoRules",
    "CatalogEntry",
    "CatalogRecord",
    "CatalogSnapshot",
    "Category",
    "CollectionDefinition",
    "CollectionItemRef",
    "CollectionMode",
    "Complex",
    "EntryKind",
    "Listing",
    "RecordStatus",
    # Read-only storage
    "CatalogRepository",
]
