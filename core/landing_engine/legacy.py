"""
Legacy landing adapter.

Older landing content was stored as a list of typed blocks:

    {"blocks": [{"type": "overview", "bullets": [...]},
                {"type": "gallery", "images": [...], "image": "..."},
                {"type": "cta", "title": "..."}],
     "accent_color": ..., "surface_color": ..., "hero_image": ..., "enabled": ...}

This module detects that shape and migrates it once into a canonical
mapping. The result then goes through the regular canonical merge, so no
legacy field is special-cased anywhere else.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from core.catalog.models import Complex
from core.landing_engine.factories import DEFAULT_FACT_TITLE, DEFAULT_FEATURE_TITLE
from core.landing_engine.models import LandingConfig
from core.landing_engine.presets import LandingPresets
from utils.coercion import safe_list, safe_mapping, to_text

logger = logging.getLogger(__name__)

LEGACY_TAG_LIMIT = 4
LEGACY_FACT_LIMIT = 12
LEGACY_FEATURE_LIMIT = 12
# Facts beyond this position get the generic "details" title
LEGACY_BORROWED_TITLES = 6
LEGACY_DETAILS_TITLE = "Детали"


def is_legacy_landing(value: Any) -> bool:
    """True for the block-list shape."""
    return isinstance(value, dict) and isinstance(value.get("blocks"), list)


def _find_block(blocks: list, block_type: str) -> dict:
    for block in blocks:
        if isinstance(block, dict) and to_text(block.get("type")) == block_type:
            return block
    return {}


def migrate_legacy_landing(
    legacy: dict,
    complex_: Complex,
    fallback: LandingConfig,
    presets: LandingPresets,
) -> dict:
    """
    Convert a legacy block-list landing into a canonical mapping.

    Args:
        legacy: Stored legacy landing
        complex_: The complex it belongs to
        fallback: Auto-derived config, source of borrowed fact titles
        presets: Preset tables

    Returns:
        Canonical mapping; fields the legacy shape cannot provide are left
        out so the canonical merge falls back to auto values.
    """
    blocks = safe_list(legacy.get("blocks"))
    overview = _find_block(blocks, "overview")
    gallery = _find_block(blocks, "gallery")
    cta = _find_block(blocks, "cta")

    bullets = [line for line in safe_list(overview.get("bullets")) if isinstance(line, str)]
    tags = [{"label": line} for line in bullets[:LEGACY_TAG_LIMIT]]

    facts = []
    for index, line in enumerate(bullets[:LEGACY_FACT_LIMIT]):
        if index < LEGACY_BORROWED_TITLES:
            title = fallback.facts[index].title if index < len(fallback.facts) else DEFAULT_FACT_TITLE
        else:
            title = LEGACY_DETAILS_TITLE
        facts.append({"title": title, "value": line, "image": presets.fact_image(index)})

    defaults = presets.default_feature_titles
    features = []
    gallery_images = [url for url in safe_list(gallery.get("images")) if isinstance(url, str)]
    for index, image in enumerate(gallery_images[:LEGACY_FEATURE_LIMIT]):
        preset = presets.preset_at(index)
        if preset is not None:
            features.append({"preset_key": preset.key, "title": preset.title, "image": image})
        else:
            title = defaults[index] if index < len(defaults) else DEFAULT_FEATURE_TITLE
            features.append({"title": title, "image": image})

    hero_image = (
        to_text(legacy.get("hero_image"))
        or to_text(gallery.get("image"))
        or (complex_.images[0] if complex_.images else None)
    )

    migrated = {
        "accent_color": legacy.get("accent_color"),
        "surface_color": legacy.get("surface_color"),
        "hero_image": hero_image,
        "cta_label": cta.get("title"),
        "tags": tags,
        "facts": facts,
        "feature_ticker": features,
    }
    if isinstance(legacy.get("enabled"), bool):
        migrated["enabled"] = legacy["enabled"]

    logger.debug(
        "Migrated legacy landing for complex %s: %d tags, %d facts, %d features",
        complex_.id, len(tags), len(facts), len(features),
    )
    return migrated


def coerce_stored_landing(value: Any) -> Optional[dict]:
    """Stored landing as a mapping, or None when absent/unusable."""
    if isinstance(value, LandingConfig):
        return value.to_dict()
    if isinstance(value, dict):
        return safe_mapping(value)
    return None
