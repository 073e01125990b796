"""
Landing Presets - Versionable Content Tables

Constant tables that drive landing synthesis:
- Feature presets (canonical key/title/image triples)
- Fact background image rotation
- Description keyword -> feature title regex table
- Reference landmark for the distance fact

All tables are immutable and bundled into a LandingPresets value that is
injected into the synthesizer, so a catalog can be extended without
touching the algorithms.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final, Iterable, Optional, Pattern

from utils.coercion import to_text


@dataclass(frozen=True)
class FeaturePreset:
    """Canonical feature ticker entry."""
    key: str
    title: str
    image: str

    @classmethod
    def from_dict(cls, data: dict) -> Optional["FeaturePreset"]:
        key = to_text(data.get("key"))
        title = to_text(data.get("title"))
        image = to_text(data.get("image"))
        if not key or not title or not image:
            return None
        return cls(key=key, title=title, image=image)

    def to_dict(self) -> dict:
        return {"key": self.key, "title": self.title, "image": self.image}


@dataclass(frozen=True)
class FeatureKeyword:
    """Description pattern that implies a feature title."""
    title: str
    pattern: Pattern[str]


@dataclass(frozen=True)
class Landmark:
    """Reference point for the distance fact."""
    title: str
    lat: float
    lon: float


# =============================================================================
# Default Tables
# =============================================================================

_UNSPLASH = "https://images.unsplash.com/"

FACT_IMAGE_PRESETS: Final[tuple[str, ...]] = (
    _UNSPLASH + "photo-1515263487990-61b07816b324?auto=format&fit=crop&w=1200&q=80",
    _UNSPLASH + "photo-1512917774080-9991f1c4c750?auto=format&fit=crop&w=1200&q=80",
    _UNSPLASH + "photo-1616046229478-9901c5536a45?auto=format&fit=crop&w=1200&q=80",
    _UNSPLASH + "photo-1484154218962-a197022b5858?auto=format&fit=crop&w=1200&q=80",
    _UNSPLASH + "photo-1600566753190-17f0baa2a6c3?auto=format&fit=crop&w=1200&q=80",
    _UNSPLASH + "photo-1565182999561-18d7dc61c393?auto=format&fit=crop&w=1200&q=80",
    _UNSPLASH + "photo-1616486029423-aaa4789e8c9a?auto=format&fit=crop&w=1200&q=80",
    _UNSPLASH + "photo-1494526585095-c41746248156?auto=format&fit=crop&w=1200&q=80",
)

LANDING_FEATURE_PRESETS: Final[tuple[FeaturePreset, ...]] = (
    FeaturePreset("panoramic", "Панорамное остекление",
                  _UNSPLASH + "photo-1493666438817-866a91353ca9?auto=format&fit=crop&w=600&q=80"),
    FeaturePreset("concierge", "Консьерж-сервис",
                  _UNSPLASH + "photo-1551882547-ff40c63fe5fa?auto=format&fit=crop&w=600&q=80"),
    FeaturePreset("market", "Маркет",
                  _UNSPLASH + "photo-1542838132-92c53300491e?auto=format&fit=crop&w=600&q=80"),
    FeaturePreset("restaurant", "Ресторан",
                  _UNSPLASH + "photo-1559339352-11d035aa65de?auto=format&fit=crop&w=600&q=80"),
    FeaturePreset("beauty", "Салон красоты",
                  _UNSPLASH + "photo-1521590832167-7bcbfaa6381f?auto=format&fit=crop&w=600&q=80"),
    FeaturePreset("lounge", "Лаунж-пространство",
                  _UNSPLASH + "photo-1617104551722-3b2d51366416?auto=format&fit=crop&w=600&q=80"),
    FeaturePreset("cafe", "Кафе",
                  _UNSPLASH + "photo-1495474472287-4d71bcdd2085?auto=format&fit=crop&w=600&q=80"),
    FeaturePreset("coworking", "Коворкинг",
                  _UNSPLASH + "photo-1497215842964-222b430dc094?auto=format&fit=crop&w=600&q=80"),
    FeaturePreset("kids", "Детские площадки",
                  _UNSPLASH + "photo-1596464716127-f2a82984de30?auto=format&fit=crop&w=600&q=80"),
    FeaturePreset("parking", "Подземный паркинг",
                  _UNSPLASH + "photo-1503376780353-7e6692767b70?auto=format&fit=crop&w=600&q=80"),
    FeaturePreset("yard", "Приватная территория",
                  _UNSPLASH + "photo-1523217582562-09d0def993a6?auto=format&fit=crop&w=600&q=80"),
    FeaturePreset("pet", "Площадка для питомцев",
                  _UNSPLASH + "photo-1548199973-03cce0bbc87b?auto=format&fit=crop&w=600&q=80"),
)

FEATURE_KEYWORDS: Final[tuple[FeatureKeyword, ...]] = (
    FeatureKeyword("Панорамное остекление", re.compile(r"панорам|вид|terrace|террас", re.IGNORECASE)),
    FeatureKeyword("Консьерж-сервис", re.compile(r"консьерж|concierge", re.IGNORECASE)),
    FeatureKeyword("Маркет", re.compile(r"маркет|магазин|retail", re.IGNORECASE)),
    FeatureKeyword("Ресторан", re.compile(r"ресторан|бар|dining", re.IGNORECASE)),
    FeatureKeyword("Салон красоты", re.compile(r"салон|spa|красот", re.IGNORECASE)),
    FeatureKeyword("Лаунж-пространство", re.compile(r"лаунж|lounge|клуб", re.IGNORECASE)),
    FeatureKeyword("Кафе", re.compile(r"кафе|coffee", re.IGNORECASE)),
    FeatureKeyword("Коворкинг", re.compile(r"коворкинг|coworking", re.IGNORECASE)),
    FeatureKeyword("Подземный паркинг", re.compile(r"паркинг|parking", re.IGNORECASE)),
    FeatureKeyword("Детские площадки", re.compile(r"детск|kids|playground", re.IGNORECASE)),
)

PARKING_PATTERN: Final = re.compile(r"паркинг|parking", re.IGNORECASE)

# Filenames/URLs that look like floor plans rather than photos
PLAN_IMAGE_PATTERN: Final = re.compile(r"plan|layout|preset|floor", re.IGNORECASE)

KREMLIN: Final = Landmark(title="До Кремля", lat=55.752023, lon=37.617499)

# How many leading presets form the default feature set
DEFAULT_FEATURE_COUNT: Final[int] = 8


# =============================================================================
# Preset Bundle
# =============================================================================


@dataclass(frozen=True)
class LandingPresets:
    """
    Immutable bundle of the tables a LandingSynthesizer works with.

    Use ``with_overrides`` to derive a catalog with admin-defined presets.
    """

    feature_presets: tuple[FeaturePreset, ...] = LANDING_FEATURE_PRESETS
    fact_images: tuple[str, ...] = FACT_IMAGE_PRESETS
    feature_keywords: tuple[FeatureKeyword, ...] = FEATURE_KEYWORDS
    parking_pattern: Pattern[str] = PARKING_PATTERN
    plan_image_pattern: Pattern[str] = PLAN_IMAGE_PATTERN
    landmark: Landmark = KREMLIN
    default_feature_count: int = DEFAULT_FEATURE_COUNT
    _by_key: dict = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Lookup index, built once; the dict is never mutated afterwards
        object.__setattr__(self, "_by_key", {p.key: p for p in self.feature_presets})

    @property
    def default_feature_titles(self) -> list[str]:
        return [p.title for p in self.feature_presets[: self.default_feature_count]]

    def fact_image(self, index: int) -> Optional[str]:
        """Rotating fact background by position."""
        if not self.fact_images:
            return None
        return self.fact_images[index % len(self.fact_images)]

    def preset_by_key(self, key: Optional[str]) -> Optional[FeaturePreset]:
        if not key:
            return None
        return self._by_key.get(key)

    def preset_by_title(self, title: Optional[str]) -> Optional[FeaturePreset]:
        name = (title or "").strip().lower()
        if not name:
            return None
        for preset in self.feature_presets:
            if preset.title.lower() == name:
                return preset
        return None

    def preset_by_image(self, image: Optional[str]) -> Optional[FeaturePreset]:
        if not image:
            return None
        for preset in self.feature_presets:
            if preset.image == image:
                return preset
        return None

    def preset_at(self, index: int) -> Optional[FeaturePreset]:
        if 0 <= index < len(self.feature_presets):
            return self.feature_presets[index]
        return None

    def is_plan_image(self, url: Optional[str]) -> bool:
        return bool(url and self.plan_image_pattern.search(url))

    def with_overrides(
        self,
        custom_presets: Iterable[FeaturePreset] = (),
        hidden_keys: Iterable[str] = (),
    ) -> "LandingPresets":
        """
        Derive a bundle with admin-defined presets.

        Custom presets replace built-ins with the same key (in place) or are
        appended. Hidden keys are removed from the catalog.
        """
        merged: dict[str, FeaturePreset] = {p.key: p for p in self.feature_presets}
        for preset in custom_presets:
            merged[preset.key] = preset
        hidden = set(hidden_keys)
        presets = tuple(p for key, p in merged.items() if key not in hidden)
        return LandingPresets(
            feature_presets=presets,
            fact_images=self.fact_images,
            feature_keywords=self.feature_keywords,
            parking_pattern=self.parking_pattern,
            plan_image_pattern=self.plan_image_pattern,
            landmark=self.landmark,
            default_feature_count=self.default_feature_count,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "LandingPresets":
        """
        Build from a stored overrides document:
        {"landing_feature_presets": [...], "hidden_landing_feature_preset_keys": [...]}
        """
        custom = []
        for raw in data.get("landing_feature_presets") or []:
            if isinstance(raw, dict):
                preset = FeaturePreset.from_dict(raw)
                if preset is not None:
                    custom.append(preset)
        hidden = [
            key for key in (data.get("hidden_landing_feature_preset_keys") or [])
            if isinstance(key, str)
        ]
        return cls().with_overrides(custom, hidden)


DEFAULT_PRESETS: Final = LandingPresets()
