"""
Catalog data model shared by the collection and landing engines.

Records are built from persisted/feed-sourced mappings through tolerant
``from_dict`` constructors: malformed optional fields become None instead of
raising, so downstream engines can treat them as "not applicable".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from utils.coercion import (
    safe_list,
    to_count,
    to_finite_number,
    to_int,
    to_text,
    to_text_list,
)


class EntryKind(Enum):
    """Catalog entry discriminant."""
    LISTING = "listing"
    COMPLEX = "complex"

    @classmethod
    def from_string(cls, value: Any) -> Optional["EntryKind"]:
        """Convert string to EntryKind, case-insensitive. "property" is an alias of listing."""
        if isinstance(value, EntryKind):
            return value
        if not isinstance(value, str):
            return None
        normalised = value.lower().strip()
        if normalised == "property":
            return cls.LISTING
        for member in cls:
            if member.value == normalised:
                return member
        return None


class RecordStatus(Enum):
    """
    Publication status of a catalog record.

    Only ACTIVE records are ever surfaced.
    """
    ACTIVE = "active"
    HIDDEN = "hidden"
    ARCHIVED = "archived"

    @classmethod
    def from_string(cls, value: Any) -> "RecordStatus":
        """Convert string to RecordStatus. Unknown values are treated as hidden."""
        if isinstance(value, RecordStatus):
            return value
        if isinstance(value, str):
            normalised = value.lower().strip()
            for member in cls:
                if member.value == normalised:
                    return member
        return cls.HIDDEN


class Category(Enum):
    """Listing market category."""
    NEWBUILD = "newbuild"
    SECONDARY = "secondary"
    RENT = "rent"

    @classmethod
    def from_string(cls, value: Any) -> Optional["Category"]:
        """Convert string to Category, case-insensitive."""
        if isinstance(value, Category):
            return value
        if not isinstance(value, str):
            return None
        normalised = value.lower().strip()
        for member in cls:
            if member.value == normalised:
                return member
        return None


@dataclass
class Listing:
    """A single lot (apartment) from the feed."""

    id: str
    title: str = ""
    category: Optional[Category] = None
    bedrooms: Optional[float] = None
    price: Optional[float] = None
    area_total: Optional[float] = None
    floors_total: Optional[int] = None
    district: str = ""
    metro: list = field(default_factory=list)
    images: list = field(default_factory=list)
    status: RecordStatus = RecordStatus.ACTIVE
    description: str = ""
    complex_id: Optional[str] = None
    updated_at: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    @classmethod
    def from_dict(cls, data: dict) -> "Listing":
        """Build a listing from a persisted record, coercing feed noise."""
        return cls(
            id=str(data.get("id", "")),
            title=to_text(data.get("title")) or "",
            category=Category.from_string(data.get("category")),
            bedrooms=to_count(data.get("bedrooms")),
            price=to_finite_number(data.get("price")),
            area_total=to_finite_number(data.get("area_total")),
            floors_total=to_int(data.get("floors_total")),
            district=to_text(data.get("district")) or "",
            metro=to_text_list(data.get("metro")),
            images=to_text_list(data.get("images")),
            status=RecordStatus.from_string(data.get("status")),
            description=to_text(data.get("description")) or "",
            complex_id=to_text(data.get("complex_id")),
            updated_at=to_text(data.get("updated_at")) or "",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category.value if self.category else None,
            "bedrooms": self.bedrooms,
            "price": self.price,
            "area_total": self.area_total,
            "floors_total": self.floors_total,
            "district": self.district,
            "metro": list(self.metro),
            "images": list(self.images),
            "status": self.status.value,
            "description": self.description,
            "complex_id": self.complex_id,
            "updated_at": self.updated_at,
        }


@dataclass
class Complex:
    """A residential complex (new-build project) from the feed."""

    id: str
    title: str = ""
    district: str = ""
    metro: list = field(default_factory=list)
    price_from: Optional[float] = None
    area_from: Optional[float] = None
    images: list = field(default_factory=list)
    status: RecordStatus = RecordStatus.ACTIVE
    description: str = ""
    building_class: Optional[str] = None
    finish_type: Optional[str] = None
    handover_date: Optional[str] = None
    developer: Optional[str] = None
    geo_lat: Optional[float] = None
    geo_lon: Optional[float] = None
    # Stored landing configuration, raw (canonical or legacy shape)
    landing: Optional[dict] = None
    updated_at: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    @property
    def has_coordinates(self) -> bool:
        return self.geo_lat is not None and self.geo_lon is not None

    @classmethod
    def from_dict(cls, data: dict) -> "Complex":
        """Build a complex from a persisted record, coercing feed noise."""
        landing = data.get("landing")
        return cls(
            id=str(data.get("id", "")),
            title=to_text(data.get("title")) or "",
            district=to_text(data.get("district")) or "",
            metro=to_text_list(data.get("metro")),
            price_from=to_finite_number(data.get("price_from")),
            area_from=to_finite_number(data.get("area_from")),
            images=to_text_list(data.get("images")),
            status=RecordStatus.from_string(data.get("status")),
            description=to_text(data.get("description")) or "",
            building_class=to_text(data.get("class", data.get("building_class"))),
            finish_type=to_text(data.get("finish_type")),
            handover_date=to_text(data.get("handover_date")),
            developer=to_text(data.get("developer")),
            geo_lat=to_finite_number(data.get("geo_lat")),
            geo_lon=to_finite_number(data.get("geo_lon")),
            landing=dict(landing) if isinstance(landing, dict) else None,
            updated_at=to_text(data.get("updated_at")) or "",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "district": self.district,
            "metro": list(self.metro),
            "price_from": self.price_from,
            "area_from": self.area_from,
            "images": list(self.images),
            "status": self.status.value,
            "description": self.description,
            "class": self.building_class,
            "finish_type": self.finish_type,
            "handover_date": self.handover_date,
            "developer": self.developer,
            "geo_lat": self.geo_lat,
            "geo_lon": self.geo_lon,
            "updated_at": self.updated_at,
        }


CatalogRecord = Union[Listing, Complex]


@dataclass(frozen=True)
class CatalogEntry:
    """
    Tagged catalog reference.

    ``kind`` is the explicit discriminant; ``ref`` is the full record.
    """
    kind: EntryKind
    ref: CatalogRecord

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "ref": self.ref.to_dict()}


@dataclass(frozen=True)
class CollectionItemRef:
    """Pointer from a manual collection to a catalog record."""
    kind: EntryKind
    ref_id: str

    @classmethod
    def from_dict(cls, data: dict) -> Optional["CollectionItemRef"]:
        kind = EntryKind.from_string(data.get("type", data.get("kind")))
        ref_id = to_text(data.get("ref_id"))
        if kind is None or ref_id is None:
            return None
        return cls(kind=kind, ref_id=ref_id)

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "ref_id": self.ref_id}


class CollectionMode(Enum):
    """How a collection gets its members."""
    MANUAL = "manual"
    AUTO = "auto"

    @classmethod
    def from_string(cls, value: Any) -> "CollectionMode":
        """Unknown modes are treated as manual."""
        if isinstance(value, CollectionMode):
            return value
        if isinstance(value, str) and value.lower().strip() == "auto":
            return cls.AUTO
        return cls.MANUAL


# Stored rule keys are camelCase; snake_case is accepted too
_RULE_KEY_ALIASES = {
    "price_min": ("price_min", "priceMin"),
    "price_max": ("price_max", "priceMax"),
    "area_min": ("area_min", "areaMin"),
    "area_max": ("area_max", "areaMax"),
}


def _pick(data: dict, keys: tuple) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True)
class AutoRules:
    """
    Declarative membership rules of an auto collection.

    ``unreadable`` lists rule keys whose stored value was present but could
    not be parsed (e.g. an unknown category). Such rules match nothing.
    """

    kind: EntryKind
    category: Optional[Category] = None
    bedrooms: Optional[float] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    area_min: Optional[float] = None
    area_max: Optional[float] = None
    district: Optional[str] = None
    metro: tuple = ()
    q: Optional[str] = None
    unreadable: tuple = ()

    @property
    def is_satisfiable(self) -> bool:
        return not self.unreadable

    @classmethod
    def from_dict(cls, data: dict) -> Optional["AutoRules"]:
        """Parse stored rules; returns None when the target kind is unknown."""
        kind = EntryKind.from_string(data.get("type", data.get("kind")))
        if kind is None:
            return None

        raw = {
            "category": data.get("category"),
            "bedrooms": data.get("bedrooms"),
        }
        for field_name, keys in _RULE_KEY_ALIASES.items():
            raw[field_name] = _pick(data, keys)

        parsed = {
            "category": Category.from_string(raw["category"]),
            "bedrooms": to_count(raw["bedrooms"]),
            "price_min": to_finite_number(raw["price_min"]),
            "price_max": to_finite_number(raw["price_max"]),
            "area_min": to_finite_number(raw["area_min"]),
            "area_max": to_finite_number(raw["area_max"]),
        }
        unreadable = tuple(
            name for name, value in parsed.items()
            if value is None and not _is_blank(raw[name])
        )

        return cls(
            kind=kind,
            district=to_text(data.get("district")),
            metro=tuple(to_text_list(data.get("metro"))),
            q=to_text(data.get("q")),
            unreadable=unreadable,
            **parsed,
        )

    def to_dict(self) -> dict:
        data = {"type": self.kind.value}
        if self.category is not None:
            data["category"] = self.category.value
        for key, value in (
            ("bedrooms", self.bedrooms),
            ("priceMin", self.price_min),
            ("priceMax", self.price_max),
            ("areaMin", self.area_min),
            ("areaMax", self.area_max),
            ("district", self.district),
            ("q", self.q),
        ):
            if value is not None:
                data[key] = value
        if self.metro:
            data["metro"] = list(self.metro)
        return data


@dataclass
class CollectionDefinition:
    """An editorial collection: manual pointer list or auto rules."""

    id: str
    mode: CollectionMode = CollectionMode.MANUAL
    items: list = field(default_factory=list)
    auto_rules: Optional[AutoRules] = None
    slug: str = ""
    title: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "CollectionDefinition":
        items = []
        for raw in safe_list(data.get("items")):
            if isinstance(raw, dict):
                ref = CollectionItemRef.from_dict(raw)
                if ref is not None:
                    items.append(ref)
        rules = data.get("auto_rules")
        return cls(
            id=str(data.get("id", "")),
            mode=CollectionMode.from_string(data.get("mode")),
            items=items,
            auto_rules=AutoRules.from_dict(rules) if isinstance(rules, dict) else None,
            slug=to_text(data.get("slug")) or "",
            title=to_text(data.get("title")) or "",
            updated_at=to_text(data.get("updated_at")) or "",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "mode": self.mode.value,
            "items": [item.to_dict() for item in self.items],
            "auto_rules": self.auto_rules.to_dict() if self.auto_rules else None,
            "updated_at": self.updated_at,
        }


@dataclass
class CatalogSnapshot:
    """Read-only view of the catalog at request time."""

    listings: list = field(default_factory=list)
    complexes: list = field(default_factory=list)
    collections: list = field(default_factory=list)

    def records(self, kind: EntryKind) -> list:
        """All records of one kind, in snapshot order."""
        return self.listings if kind == EntryKind.LISTING else self.complexes

    def find(self, kind: EntryKind, ref_id: str) -> Optional[CatalogRecord]:
        """First record of ``kind`` with the given id, or None."""
        for record in self.records(kind):
            if record.id == ref_id:
                return record
        return None

    def find_collection(self, collection_id: str) -> Optional[CollectionDefinition]:
        for collection in self.collections:
            if collection.id == collection_id or (collection.slug and collection.slug == collection_id):
                return collection
        return None

    def listings_for_complex(self, complex_id: str) -> list:
        """Listings linked to a complex, any status."""
        return [item for item in self.listings if item.complex_id == complex_id]

    @classmethod
    def from_dict(cls, data: dict) -> "CatalogSnapshot":
        return cls(
            listings=[
                Listing.from_dict(item)
                for item in safe_list(data.get("properties", data.get("listings")))
                if isinstance(item, dict)
            ],
            complexes=[
                Complex.from_dict(item)
                for item in safe_list(data.get("complexes"))
                if isinstance(item, dict)
            ],
            collections=[
                CollectionDefinition.from_dict(item)
                for item in safe_list(data.get("collections"))
                if isinstance(item, dict)
            ],
        )
