"""
Auto-derivation of tags, facts and feature ticker from complex feed data.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from core.catalog.models import Complex, Listing
from core.landing_engine.factories import create_fact, create_feature, create_tag
from core.landing_engine.models import LandingFact, LandingFeature, LandingTag
from core.landing_engine.presets import LandingPresets
from utils.coercion import to_finite_number, unique_texts
from utils.formatting import (
    ON_REQUEST,
    format_area,
    format_distance_km,
    format_money,
)
from utils.geo import haversine_km

MAX_LANDING_FACTS = 12
MAX_AUTO_FEATURES = 12

DEFAULT_CLASS = "Премиум"
HANDOVER_UNKNOWN = "Уточняется"


def build_auto_tags(complex_: Complex) -> List[LandingTag]:
    """Class, district and first metro station, deduplicated."""
    labels = unique_texts([
        complex_.building_class or "",
        complex_.district or "",
        f"м. {complex_.metro[0]}" if complex_.metro else "",
    ])
    return [create_tag({"label": label}, index) for index, label in enumerate(labels)]


def _min_positive(values: Iterable) -> Optional[float]:
    result = None
    for value in values:
        number = to_finite_number(value)
        if number is None or number <= 0:
            continue
        if result is None or number < result:
            result = number
    return result


def build_auto_facts(
    complex_: Complex,
    listings: List[Listing],
    presets: LandingPresets,
) -> List[LandingFact]:
    """
    Highlight facts in fixed order, capped at MAX_LANDING_FACTS.

    Each fact gets a rotating background image by position.
    """
    active = [item for item in listings if item.is_active]
    max_floor = max((item.floors_total or 0 for item in active), default=0)

    price_from = complex_.price_from
    if price_from is None:
        price_from = _min_positive(item.price for item in active)
    area_from = complex_.area_from
    if area_from is None:
        area_from = _min_positive(item.area_total for item in active)

    cards = [
        ("Класс", complex_.building_class or DEFAULT_CLASS),
        ("Цена от", format_money(price_from)),
        ("Площадь от", format_area(area_from)),
        ("Этажность", str(max_floor) if max_floor > 0 else ON_REQUEST),
        ("Квартир всего / в продаже", f"{len(listings)} / {len(active)}"),
        ("Срок сдачи", complex_.handover_date or HANDOVER_UNKNOWN),
    ]

    if complex_.has_coordinates:
        landmark = presets.landmark
        distance = haversine_km(complex_.geo_lat, complex_.geo_lon, landmark.lat, landmark.lon)
        cards.append((landmark.title, format_distance_km(distance)))
    if complex_.metro:
        cards.append(("Ближайшее метро", complex_.metro[0]))
    if presets.parking_pattern.search(complex_.description or ""):
        cards.append(("Подземный паркинг", "Да"))
    if complex_.finish_type:
        cards.append(("Отделка", complex_.finish_type))

    return [
        create_fact({"title": title, "value": value, "image": presets.fact_image(index)}, index)
        for index, (title, value) in enumerate(cards[:MAX_LANDING_FACTS])
    ]


def infer_feature_titles(description: Optional[str], presets: LandingPresets) -> List[str]:
    """Keyword matches from the description followed by the default set."""
    text = (description or "").strip()
    defaults = presets.default_feature_titles
    if not text:
        return defaults[:MAX_AUTO_FEATURES]
    matched = [kw.title for kw in presets.feature_keywords if kw.pattern.search(text)]
    return unique_texts(matched + defaults, limit=MAX_AUTO_FEATURES)


def build_auto_features(complex_: Complex, presets: LandingPresets) -> List[LandingFeature]:
    features = []
    for index, title in enumerate(infer_feature_titles(complex_.description, presets)):
        preset = presets.preset_by_title(title)
        features.append(create_feature(
            {
                "preset_key": preset.key if preset else None,
                "title": preset.title if preset else title,
                "image": preset.image if preset else None,
            },
            presets,
            index,
        ))
    return features[:MAX_AUTO_FEATURES]
