"""
Collection Resolver

Turns a collection definition plus a catalog snapshot into an ordered list
of typed catalog entries:
- Manual mode: pointers in curation order, active targets only
- Auto mode: rule filters over active records, newest first

Auto filters run in a fixed order and each one only narrows the set:
1. Category (listings only)
2. Bedrooms (listings only)
3. Price min / max (listing price, complex price_from)
4. Area min / max (listing area_total, complex area_from)
5. District (case-insensitive exact)
6. Metro (match any)
7. Free text (title, district, metro names)

A record whose price or area is absent passes that filter. Category and
bedrooms must match exactly; a record without them is excluded. Rules with
an unreadable stored value match nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from core.catalog.models import (
    AutoRules,
    CatalogEntry,
    CatalogRecord,
    CatalogSnapshot,
    CollectionDefinition,
    CollectionMode,
    EntryKind,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Per-kind Field Accessors
# =============================================================================

Accessor = Callable[[CatalogRecord], object]


@dataclass(frozen=True)
class KindAccessors:
    """
    Field accessors for one entry kind.

    None means the kind has no such field and the filter does not apply.
    """
    price: Accessor
    area: Accessor
    category: Optional[Accessor] = None
    bedrooms: Optional[Accessor] = None


KIND_ACCESSORS: dict[EntryKind, KindAccessors] = {
    EntryKind.LISTING: KindAccessors(
        price=lambda r: r.price,
        area=lambda r: r.area_total,
        category=lambda r: r.category,
        bedrooms=lambda r: r.bedrooms,
    ),
    EntryKind.COMPLEX: KindAccessors(
        price=lambda r: r.price_from,
        area=lambda r: r.area_from,
    ),
}


# =============================================================================
# Resolver
# =============================================================================


class CollectionResolver:
    """
    Resolves collections against a catalog snapshot.

    Stateless; one instance can serve any number of requests.
    """

    def __init__(self, accessors: Optional[dict[EntryKind, KindAccessors]] = None):
        """
        Initialise resolver.

        Args:
            accessors: Per-kind field accessor table (default: KIND_ACCESSORS)
        """
        self._accessors = accessors or KIND_ACCESSORS

    def resolve(
        self,
        collection: CollectionDefinition,
        snapshot: CatalogSnapshot,
    ) -> List[CatalogEntry]:
        """
        Resolve a collection into catalog entries.

        Args:
            collection: The collection definition
            snapshot: Catalog snapshot to resolve against

        Returns:
            Ordered entries; empty when nothing matches or auto rules are missing
        """
        if collection.mode == CollectionMode.MANUAL:
            entries = self.resolve_manual(collection, snapshot)
        else:
            entries = self.resolve_auto(collection.auto_rules, snapshot)

        logger.debug(
            "Resolved collection %s (%s): %d entries",
            collection.id, collection.mode.value, len(entries),
        )
        return entries

    def resolve_manual(
        self,
        collection: CollectionDefinition,
        snapshot: CatalogSnapshot,
    ) -> List[CatalogEntry]:
        """Follow manual pointers in order, dropping missing or inactive targets."""
        entries = []
        for item in collection.items:
            record = snapshot.find(item.kind, item.ref_id)
            if record is None or not record.is_active:
                continue
            entries.append(CatalogEntry(kind=item.kind, ref=record))
        return entries

    def resolve_auto(
        self,
        rules: Optional[AutoRules],
        snapshot: CatalogSnapshot,
    ) -> List[CatalogEntry]:
        """Apply auto rules to active records of the target kind, newest first."""
        if rules is None:
            return []
        if not rules.is_satisfiable:
            logger.debug("Auto rules with unreadable %s match nothing", ", ".join(rules.unreadable))
            return []

        accessors = self._accessors[rules.kind]
        records = [r for r in snapshot.records(rules.kind) if r.is_active]

        for predicate in self._build_predicates(rules, accessors):
            records = [r for r in records if predicate(r)]

        # list.sort is stable: equal timestamps keep snapshot order
        records.sort(key=lambda r: r.updated_at or "", reverse=True)

        return [CatalogEntry(kind=rules.kind, ref=r) for r in records]

    def _build_predicates(
        self,
        rules: AutoRules,
        accessors: KindAccessors,
    ) -> List[Callable[[CatalogRecord], bool]]:
        """Build the active filters in their fixed order."""
        predicates: List[Callable[[CatalogRecord], bool]] = []

        if rules.category is not None and accessors.category is not None:
            predicates.append(
                lambda r: accessors.category(r) == rules.category
            )

        if rules.bedrooms is not None and accessors.bedrooms is not None:
            predicates.append(
                lambda r: accessors.bedrooms(r) == rules.bedrooms
            )

        if rules.price_min is not None:
            predicates.append(
                lambda r: _not_applicable_or(accessors.price(r), lambda v: v >= rules.price_min)
            )
        if rules.price_max is not None:
            predicates.append(
                lambda r: _not_applicable_or(accessors.price(r), lambda v: v <= rules.price_max)
            )

        if rules.area_min is not None:
            predicates.append(
                lambda r: _not_applicable_or(accessors.area(r), lambda v: v >= rules.area_min)
            )
        if rules.area_max is not None:
            predicates.append(
                lambda r: _not_applicable_or(accessors.area(r), lambda v: v <= rules.area_max)
            )

        if rules.district:
            district = rules.district.lower()
            predicates.append(lambda r: (r.district or "").lower() == district)

        if rules.metro:
            wanted = set(rules.metro)
            predicates.append(lambda r: any(station in wanted for station in r.metro))

        if rules.q:
            predicates.append(lambda r: _matches_query(r, rules.q.lower()))

        return predicates


def _not_applicable_or(value, check: Callable[[object], bool]) -> bool:
    """Absent values skip the filter; present values must pass ``check``."""
    if value is None:
        return True
    return check(value)


def _matches_query(record: CatalogRecord, query: str) -> bool:
    """Case-insensitive substring match on title, district or metro names."""
    if query in (record.title or "").lower():
        return True
    if query in (record.district or "").lower():
        return True
    return any(query in station.lower() for station in record.metro)


# =============================================================================
# Module-level API
# =============================================================================

_default_resolver = CollectionResolver()


def resolve_collection_items(
    collection: CollectionDefinition,
    snapshot: CatalogSnapshot,
) -> List[CatalogEntry]:
    """Resolve a collection with the default resolver."""
    return _default_resolver.resolve(collection, snapshot)
