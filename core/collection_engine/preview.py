"""
Admin helpers around collection resolution: rule previews and manual
pointer validation.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import List, Optional

from core.catalog.models import (
    AutoRules,
    CatalogEntry,
    CatalogSnapshot,
    CollectionDefinition,
    CollectionMode,
)
from core.collection_engine.resolver import resolve_collection_items

DEFAULT_PREVIEW_LIMIT = 12
MAX_PREVIEW_LIMIT = 100


@dataclass
class CollectionPreview:
    """First page of an ad-hoc auto rule resolution."""
    items: List[CatalogEntry]
    total: int

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "total": self.total,
        }


@dataclass
class ManualItemsReport:
    """Validation outcome for a manual collection's pointers."""
    total_items: int
    valid_items: int
    invalid_items: List[str] = field(default_factory=list)

    @property
    def has_invalid(self) -> bool:
        return bool(self.invalid_items)

    def to_dict(self) -> dict:
        return {
            "totalItems": self.total_items,
            "validItems": self.valid_items,
            "invalidItems": list(self.invalid_items),
        }


def preview_auto_rules(
    rules: AutoRules,
    snapshot: CatalogSnapshot,
    limit: int = DEFAULT_PREVIEW_LIMIT,
) -> CollectionPreview:
    """
    Resolve rules as if they belonged to an auto collection.

    Args:
        rules: Rules being edited in the admin
        snapshot: Catalog snapshot
        limit: Page size, clamped to 1..100

    Returns:
        CollectionPreview with the first ``limit`` items and the total count
    """
    limit = max(1, min(int(limit), MAX_PREVIEW_LIMIT))
    draft = CollectionDefinition(
        id="preview",
        slug="preview",
        title="preview",
        mode=CollectionMode.AUTO,
        auto_rules=rules,
    )
    items = resolve_collection_items(draft, snapshot)
    return CollectionPreview(items=items[:limit], total=len(items))


def _is_resolvable(snapshot: CatalogSnapshot, kind, ref_id: str) -> bool:
    record = snapshot.find(kind, ref_id)
    return record is not None and record.is_active


def validate_manual_items(
    collection: CollectionDefinition,
    snapshot: CatalogSnapshot,
) -> Optional[ManualItemsReport]:
    """
    Report manual pointers whose targets are missing or not active.

    Returns:
        ManualItemsReport, or None for collections that are not manual
    """
    if collection.mode != CollectionMode.MANUAL:
        return None

    valid = [
        item for item in collection.items
        if _is_resolvable(snapshot, item.kind, item.ref_id)
    ]
    invalid = [item.ref_id for item in collection.items if item not in valid]

    return ManualItemsReport(
        total_items=len(collection.items),
        valid_items=len(valid),
        invalid_items=invalid,
    )


def clean_manual_items(
    collection: CollectionDefinition,
    snapshot: CatalogSnapshot,
) -> CollectionDefinition:
    """Return a copy of a manual collection without unresolvable pointers."""
    if collection.mode != CollectionMode.MANUAL:
        return collection
    items = [
        item for item in collection.items
        if _is_resolvable(snapshot, item.kind, item.ref_id)
    ]
    return dataclasses.replace(collection, items=items)
