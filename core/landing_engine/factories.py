"""
Element factories for landing content.

Each factory takes a partial mapping (stored JSON, possibly incomplete or
malformed) and returns a complete element with neutral defaults. Missing ids
are derived from the element's position and content, so normalizing the same
input twice yields the same ids.
"""

from __future__ import annotations

import hashlib
from typing import Any, Optional

from core.landing_engine.models import (
    LandingFact,
    LandingFeature,
    LandingPlanItem,
    LandingTag,
)
from core.landing_engine.presets import LandingPresets
from utils.coercion import safe_list, safe_mapping, to_count, to_int, to_text
from utils.formatting import PRICE_ON_REQUEST

DEFAULT_TAG_LABEL = "Новостройка"
DEFAULT_FACT_TITLE = "Факт"
DEFAULT_FACT_VALUE = "По запросу"
DEFAULT_FEATURE_TITLE = "Фишка"
DEFAULT_PLAN_NAME = "Планировка"
DEFAULT_PLAN_AREA = "от 0 м²"


def make_id(prefix: str, *parts: Any) -> str:
    """Content-derived identifier: ``<prefix>_<10 hex chars>``."""
    digest = hashlib.sha256(
        "|".join("" if p is None else str(p) for p in parts).encode("utf-8")
    ).hexdigest()[:10]
    return f"{prefix}_{digest}"


def _id_or_derived(value: Any, prefix: str, *parts: Any) -> str:
    text = to_text(value) if isinstance(value, str) else None
    if text is None and isinstance(value, (int, float)) and not isinstance(value, bool):
        text = str(value)
    return text or make_id(prefix, *parts)


def create_tag(partial: Any, index: int = 0) -> LandingTag:
    data = safe_mapping(partial)
    label = to_text(data.get("label")) or DEFAULT_TAG_LABEL
    return LandingTag(
        id=_id_or_derived(data.get("id"), "tag", index, label),
        label=label,
    )


def create_fact(partial: Any, index: int = 0) -> LandingFact:
    data = safe_mapping(partial)
    title = to_text(data.get("title")) or DEFAULT_FACT_TITLE
    value = to_text(data.get("value")) or DEFAULT_FACT_VALUE
    return LandingFact(
        id=_id_or_derived(data.get("id"), "fact", index, title, value),
        title=title,
        value=value,
        subtitle=to_text(data.get("subtitle")),
        image=to_text(data.get("image")),
    )


def resolve_feature_preset_key(
    partial: Any,
    presets: LandingPresets,
) -> Optional[str]:
    """
    Resolve the preset key of a feature ticker entry.

    Priority:
    1. Stored preset key that names a known preset
    2. Title equal (case-insensitive) to a known preset title
    3. Image equal to a known preset image
    4. Stored preset key as-is, even if unknown
    5. None
    """
    data = safe_mapping(partial)
    raw_key = to_text(data.get("preset_key"))

    by_key = presets.preset_by_key(raw_key)
    if by_key:
        return by_key.key

    by_title = presets.preset_by_title(to_text(data.get("title")))
    if by_title:
        return by_title.key

    by_image = presets.preset_by_image(to_text(data.get("image")))
    if by_image:
        return by_image.key

    return raw_key


def create_feature(partial: Any, presets: LandingPresets, index: int = 0) -> LandingFeature:
    """
    Build a feature entry, back-filling title and image from its preset.

    A stored image that looks like a floor plan is replaced by the preset
    image; floor plans belong to the plans block.
    """
    data = safe_mapping(partial)
    raw_key = to_text(data.get("preset_key"))
    raw_title = to_text(data.get("title"))
    preset = presets.preset_by_key(raw_key) or presets.preset_by_title(raw_title)

    raw_image = to_text(data.get("image"))
    preset_image = preset.image if preset else None
    if presets.is_plan_image(raw_image):
        image = preset_image
    else:
        image = raw_image or preset_image

    title = raw_title or (preset.title if preset else None) or DEFAULT_FEATURE_TITLE
    preset_key = raw_key or (preset.key if preset else None)

    return LandingFeature(
        id=_id_or_derived(data.get("id"), "feature", index, title, preset_key),
        title=title,
        image=image,
        preset_key=preset_key,
    )


def create_plan_item(partial: Any) -> LandingPlanItem:
    data = safe_mapping(partial)
    name = to_text(data.get("name")) or DEFAULT_PLAN_NAME
    bedrooms = to_count(data.get("bedrooms"))
    variants = to_int(data.get("variants"))
    previews = tuple(
        text for text in (to_text(item) for item in safe_list(data.get("preview_images")))
        if text
    )
    return LandingPlanItem(
        id=_id_or_derived(data.get("id"), "plan", bedrooms, name),
        name=name,
        price=to_text(data.get("price")) or PRICE_ON_REQUEST,
        area=to_text(data.get("area")) or DEFAULT_PLAN_AREA,
        variants=variants if variants is not None else 0,
        bedrooms=bedrooms,
        note=to_text(data.get("note")),
        preview_image=to_text(data.get("preview_image")),
        preview_images=previews,
    )
