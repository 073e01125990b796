"""
Landing configuration data model.

The canonical form rendered on a complex detail page. Stored copies of this
structure are plain JSON mappings; ``to_dict`` produces that mapping and the
normalizer accepts it back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class LandingTag:
    """Short label chip above the hero."""
    id: str
    label: str

    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label}


@dataclass(frozen=True)
class LandingFact:
    """Highlight fact card."""
    id: str
    title: str
    value: str
    subtitle: Optional[str] = None
    image: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"id": self.id, "title": self.title, "value": self.value}
        if self.subtitle is not None:
            data["subtitle"] = self.subtitle
        if self.image is not None:
            data["image"] = self.image
        return data


@dataclass(frozen=True)
class LandingFeature:
    """Feature ticker entry, usually tied to a FeaturePreset."""
    id: str
    title: str
    image: Optional[str] = None
    preset_key: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"id": self.id, "title": self.title}
        if self.image is not None:
            data["image"] = self.image
        if self.preset_key is not None:
            data["preset_key"] = self.preset_key
        return data


@dataclass(frozen=True)
class LandingPlanItem:
    """
    Floor-plan bucket: all active listings sharing a bedroom count.

    Derived from live listings on every read; never authoritative in storage.
    """
    id: str
    name: str
    price: str
    area: str
    variants: int = 0
    bedrooms: Optional[float] = None
    note: Optional[str] = None
    preview_image: Optional[str] = None
    preview_images: tuple = ()

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "area": self.area,
            "variants": self.variants,
            "preview_images": list(self.preview_images),
        }
        for key, value in (
            ("bedrooms", self.bedrooms),
            ("note", self.note),
            ("preview_image", self.preview_image),
        ):
            if value is not None:
                data[key] = value
        return data


@dataclass
class LandingPlans:
    """Floor-plan block."""
    title: str
    description: str
    cta_label: str
    items: List[LandingPlanItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "cta_label": self.cta_label,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass
class LandingConfig:
    """Canonical landing configuration for a residential complex."""
    accent_color: str
    surface_color: str
    plans: LandingPlans
    enabled: bool = True
    hero_image: Optional[str] = None
    preview_photo_label: Optional[str] = None
    cta_label: Optional[str] = None
    tags: List[LandingTag] = field(default_factory=list)
    facts: List[LandingFact] = field(default_factory=list)
    feature_ticker: List[LandingFeature] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialise to the stored/API JSON shape."""
        data = {
            "enabled": self.enabled,
            "accent_color": self.accent_color,
            "surface_color": self.surface_color,
            "tags": [tag.to_dict() for tag in self.tags],
            "facts": [fact.to_dict() for fact in self.facts],
            "feature_ticker": [feature.to_dict() for feature in self.feature_ticker],
            "plans": self.plans.to_dict(),
        }
        for key, value in (
            ("hero_image", self.hero_image),
            ("preview_photo_label", self.preview_photo_label),
            ("cta_label", self.cta_label),
        ):
            if value is not None:
                data[key] = value
        return data
