"""
Collection Engine

Resolves editorial collections (manual pointer lists or declarative auto
rules) into ordered catalog entries.
"""

from .resolver import (
    KIND_ACCESSORS,
    CollectionResolver,
    KindAccessors,
    resolve_collection_items,
)
from .preview import (
    DEFAULT_PREVIEW_LIMIT,
    MAX_PREVIEW_LIMIT,
    CollectionPreview,
    ManualItemsReport,
    clean_manual_items,
    preview_auto_rules,
    validate_manual_items,
)

__all__ = [
    # Resolver
    "KIND_ACCESSORS",
    "CollectionResolver",
    "KindAccessors",
    "resolve_collection_items",
    # Admin helpers
    "DEFAULT_PREVIEW_LIMIT",
    "MAX_PREVIEW_LIMIT",
    "CollectionPreview",
    "ManualItemsReport",
    "clean_manual_items",
    "preview_auto_rules",
    "validate_manual_items",
]
