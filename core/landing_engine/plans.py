"""
Floor-plan buckets.

Active listings of a complex are grouped by bedroom count. Buckets are
always computed from the live listings so prices and areas never drift from
the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from core.catalog.models import Complex, Listing
from core.landing_engine.factories import create_plan_item
from core.landing_engine.models import LandingPlanItem
from core.landing_engine.presets import LandingPresets
from utils.coercion import to_finite_number, unique_texts
from utils.formatting import bedrooms_label, format_area, format_money

MAX_PREVIEW_IMAGES = 12

# Bedroom counts shown when a complex has no active listings yet
PLACEHOLDER_BEDROOMS = (0, 1, 2, 3)


@dataclass
class _Bucket:
    variants: int = 0
    min_price: Optional[float] = None
    min_area: Optional[float] = None
    preview: Optional[str] = None
    previews: list = field(default_factory=list)


def collect_plan_preview_images(images: List[str], presets: LandingPresets) -> List[str]:
    """Plan-like images if any, otherwise all images; deduplicated and capped."""
    if not images:
        return []
    matched = [url for url in images if presets.is_plan_image(url)]
    return unique_texts(matched or images, limit=MAX_PREVIEW_IMAGES)


def _lower_min(current: Optional[float], value: Optional[float]) -> Optional[float]:
    # A zero minimum counts as unset so a real value can replace it
    if value is None:
        return current
    if not current or value < current:
        return value
    return current


def infer_plan_items(
    complex_: Complex,
    listings: List[Listing],
    presets: LandingPresets,
) -> List[LandingPlanItem]:
    """
    Build floor-plan buckets sorted by bedroom count.

    Listings that are not active or have no finite bedroom count are
    ignored. With no usable listings, four placeholder buckets (studio to
    three bedrooms) carry the complex-level price/area and zero variants.
    """
    grouped: dict[float, _Bucket] = {}

    for listing in listings:
        if not listing.is_active or listing.bedrooms is None:
            continue

        bucket = grouped.setdefault(listing.bedrooms, _Bucket())
        bucket.variants += 1
        bucket.min_price = _lower_min(bucket.min_price, to_finite_number(listing.price))
        bucket.min_area = _lower_min(bucket.min_area, to_finite_number(listing.area_total))

        previews = collect_plan_preview_images(listing.images, presets)
        for url in previews:
            if url not in bucket.previews:
                bucket.previews.append(url)

        if not bucket.preview:
            bucket.preview = previews[0] if previews else (listing.images[0] if listing.images else None)

    complex_price = to_finite_number(complex_.price_from)
    complex_area = to_finite_number(complex_.area_from)

    items = []
    for bedrooms in sorted(grouped):
        data = grouped[bedrooms]
        items.append(create_plan_item({
            "name": bedrooms_label(bedrooms),
            "price": format_money(data.min_price if data.min_price is not None else complex_price),
            "area": format_area(data.min_area if data.min_area is not None else complex_area),
            "variants": data.variants,
            "bedrooms": bedrooms,
            "preview_image": data.preview,
            "preview_images": data.previews[:MAX_PREVIEW_IMAGES],
            "note": f"Доступно {data.variants} вариантов",
        }))

    if items:
        return items

    return [
        create_plan_item({
            "name": bedrooms_label(bedrooms),
            "price": format_money(complex_price),
            "area": format_area(complex_area),
            "variants": 0,
            "bedrooms": bedrooms,
        })
        for bedrooms in PLACEHOLDER_BEDROOMS
    ]
