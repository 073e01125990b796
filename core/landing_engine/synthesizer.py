"""
Landing Synthesizer

Builds the landing configuration of a residential complex:
- build_auto: everything derived from feed data
- normalize: merge a stored configuration (canonical or legacy) over the
  auto-derived one

Floor-plan buckets are recomputed from live listings on every call and
never taken from stored input.
"""

from __future__ import annotations

from typing import Any, List, Optional

from core.catalog.models import Complex, Listing
from core.landing_engine.derivation import (
    MAX_LANDING_FACTS,
    build_auto_facts,
    build_auto_features,
    build_auto_tags,
)
from core.landing_engine.factories import (
    create_fact,
    create_feature,
    create_tag,
    resolve_feature_preset_key,
)
from core.landing_engine.legacy import (
    coerce_stored_landing,
    is_legacy_landing,
    migrate_legacy_landing,
)
from core.landing_engine.models import LandingConfig, LandingPlans
from core.landing_engine.plans import infer_plan_items
from core.landing_engine.presets import DEFAULT_PRESETS, LandingPresets
from utils.coercion import safe_list, safe_mapping, to_text

DEFAULT_ACCENT = "#C2A87A"
DEFAULT_SURFACE = "#071520"
DEFAULT_CTA_LABEL = "Старт продаж"
DEFAULT_PLANS_DESCRIPTION = (
    "Выберите формат квартиры и откройте все доступные предложения в каталоге."
)
DEFAULT_PLANS_CTA_LABEL = "Все планировки"

MAX_TAGS = 12
MAX_FEATURES = 20


class LandingSynthesizer:
    """
    Derives and normalizes landing configurations.

    Holds only the immutable preset tables; safe to share between threads.
    """

    def __init__(self, presets: Optional[LandingPresets] = None):
        """
        Initialise synthesizer.

        Args:
            presets: Preset tables (default: built-in catalog)
        """
        self.presets = presets or DEFAULT_PRESETS

    def build_auto(self, complex_: Complex, listings: List[Listing]) -> LandingConfig:
        """Derive a complete landing configuration from feed data alone."""
        return LandingConfig(
            enabled=True,
            accent_color=DEFAULT_ACCENT,
            surface_color=DEFAULT_SURFACE,
            hero_image=complex_.images[0] if complex_.images else None,
            cta_label=DEFAULT_CTA_LABEL,
            tags=build_auto_tags(complex_),
            facts=build_auto_facts(complex_, listings, self.presets),
            feature_ticker=build_auto_features(complex_, self.presets),
            plans=LandingPlans(
                title=f"Планировки в {complex_.title}",
                description=DEFAULT_PLANS_DESCRIPTION,
                cta_label=DEFAULT_PLANS_CTA_LABEL,
                items=infer_plan_items(complex_, listings, self.presets),
            ),
        )

    def normalize(
        self,
        existing: Any,
        complex_: Complex,
        listings: List[Listing],
    ) -> LandingConfig:
        """
        Merge a stored landing configuration over the auto-derived one.

        Args:
            existing: Stored config (mapping or LandingConfig), legacy block
                shape accepted; None for complexes without authored content
            complex_: The complex
            listings: Listings linked to the complex (any status)

        Returns:
            Canonical LandingConfig
        """
        auto = self.build_auto(complex_, listings)
        stored = coerce_stored_landing(existing)
        if stored is None:
            return auto

        if is_legacy_landing(stored):
            stored = migrate_legacy_landing(stored, complex_, auto, self.presets)

        return self._merge_canonical(stored, auto)

    def infer_feature_preset_key(self, feature: Any) -> Optional[str]:
        """Resolve the preset key of a feature ticker entry."""
        if hasattr(feature, "to_dict"):
            feature = feature.to_dict()
        return resolve_feature_preset_key(feature, self.presets)

    def _merge_canonical(self, stored: dict, auto: LandingConfig) -> LandingConfig:
        """Explicit non-empty values win; plan items are always auto."""
        tags = [
            create_tag(item, index)
            for index, item in enumerate(safe_list(stored.get("tags")))
        ][:MAX_TAGS]

        facts = []
        for index, item in enumerate(safe_list(stored.get("facts"))[:MAX_LANDING_FACTS]):
            data = safe_mapping(item)
            data["image"] = to_text(data.get("image")) or self.presets.fact_image(index)
            facts.append(create_fact(data, index))

        features = []
        for index, item in enumerate(safe_list(stored.get("feature_ticker"))[:MAX_FEATURES]):
            data = safe_mapping(item)
            data["preset_key"] = resolve_feature_preset_key(data, self.presets)
            features.append(create_feature(data, self.presets, index))

        plans = safe_mapping(stored.get("plans"))
        enabled = stored.get("enabled")

        return LandingConfig(
            enabled=enabled if isinstance(enabled, bool) else auto.enabled,
            accent_color=to_text(stored.get("accent_color")) or auto.accent_color,
            surface_color=to_text(stored.get("surface_color")) or auto.surface_color,
            hero_image=to_text(stored.get("hero_image")) or auto.hero_image,
            preview_photo_label=to_text(stored.get("preview_photo_label")) or auto.preview_photo_label,
            cta_label=to_text(stored.get("cta_label")) or auto.cta_label,
            tags=tags or auto.tags,
            facts=facts or auto.facts,
            feature_ticker=features or auto.feature_ticker,
            plans=LandingPlans(
                title=to_text(plans.get("title")) or auto.plans.title,
                description=to_text(plans.get("description")) or auto.plans.description,
                cta_label=to_text(plans.get("cta_label")) or auto.plans.cta_label,
                items=auto.plans.items,
            ),
        )


# =============================================================================
# Module-level API
# =============================================================================

_default_synthesizer = LandingSynthesizer()


def build_auto_landing_config(complex_: Complex, listings: List[Listing]) -> LandingConfig:
    """Derive a landing configuration with the built-in presets."""
    return _default_synthesizer.build_auto(complex_, listings)


def normalize_landing_config(
    existing: Any,
    complex_: Complex,
    listings: List[Listing],
) -> LandingConfig:
    """Normalize a stored landing configuration with the built-in presets."""
    return _default_synthesizer.normalize(existing, complex_, listings)


def infer_feature_preset_key(feature: Any) -> Optional[str]:
    """Resolve a feature's preset key against the built-in presets."""
    return _default_synthesizer.infer_feature_preset_key(feature)
