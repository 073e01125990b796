"""
Landing Engine

Synthesizes the landing configuration of a residential complex (tags,
highlight facts, feature ticker, floor-plan summary) from feed data and
merges stored or legacy authored content over it.
"""

from .models import (
    LandingConfig,
    LandingFact,
    LandingFeature,
    LandingPlanItem,
    LandingPlans,
    LandingTag,
)
from .presets import (
    DEFAULT_PRESETS,
    FACT_IMAGE_PRESETS,
    FEATURE_KEYWORDS,
    LANDING_FEATURE_PRESETS,
    FeatureKeyword,
    FeaturePreset,
    LandingPresets,
    Landmark,
)
from .derivation import MAX_LANDING_FACTS
from .legacy import is_legacy_landing, migrate_legacy_landing
from .synthesizer import (
    LandingSynthesizer,
    build_auto_landing_config,
    infer_feature_preset_key,
    normalize_landing_config,
)

__all__ = [
    # Models
    "LandingConfig",
    "LandingFact",
    "LandingFeature",
    "LandingPlanItem",
    "LandingPlans",
    "LandingTag",
    # Presets
    "DEFAULT_PRESETS",
    "FACT_IMAGE_PRESETS",
    "FEATURE_KEYWORDS",
    "LANDING_FEATURE_PRESETS",
    "FeatureKeyword",
    "FeaturePreset",
    "LandingPresets",
    "Landmark",
    "MAX_LANDING_FACTS",
    # Legacy adapter
    "is_legacy_landing",
    "migrate_legacy_landing",
    # Synthesizer
    "LandingSynthesizer",
    "build_auto_landing_config",
    "infer_feature_preset_key",
    "normalize_landing_config",
]
