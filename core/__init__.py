"""
Catalog Curation Engine - Core Business Logic

Two pure, side-effect-free components over the real-estate catalog:
1. Collection Engine: manual/auto collections -> ordered catalog entries
2. Landing Engine: complex + listings (+ stored content) -> landing config

Both read only their arguments and immutable preset tables.
"""

from .catalog import (
    AutoRules,
    CatalogEntry,
    CatalogRepository,
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

# Collection Engine
from .collection_engine import (
    CollectionResolver,
    preview_auto_rules,
    resolve_collection_items,
    validate_manual_items,
    clean_manual_items,
)

# Landing Engine
from .landing_engine import (
    LandingConfig,
    LandingPresets,
    LandingSynthesizer,
    build_auto_landing_config,
    infer_feature_preset_key,
    normalize_landing_config,
)

__all__ = [
    # Catalog
    "AutoRules",
    "CatalogEntry",
    "CatalogRepository",
    "CatalogSnapshot",
    "Category",
    "CollectionDefinition",
    "CollectionItemRef",
    "CollectionMode",
    "Complex",
    "EntryKind",
    "Listing",
    "RecordStatus",
    # Collection Engine
    "CollectionResolver",
    "preview_auto_rules",
    "resolve_collection_items",
    "validate_manual_items",
    "clean_manual_items",
    # Landing Engine
    "LandingConfig",
    "LandingPresets",
    "LandingSynthesizer",
    "build_auto_landing_config",
    "infer_feature_preset_key",
    "normalize_landing_config",
]
