"""
Tests for merging stored landing content over auto-derived content.
"""

import pytest

from core.landing_engine import (
    DEFAULT_PRESETS,
    LANDING_FEATURE_PRESETS,
    LandingSynthesizer,
    build_auto_landing_config,
    infer_feature_preset_key,
    is_legacy_landing,
    normalize_landing_config,
)
from core.landing_engine.models import LandingFeature


@pytest.fixture
def synthesizer():
    return LandingSynthesizer()


@pytest.fixture
def listings(make_listing):
    return [
        make_listing(bedrooms=0, price=5_000_000, complex_id="riverside"),
        make_listing(bedrooms=1, price=6_000_000, complex_id="riverside"),
        make_listing(bedrooms=1, price=7_000_000, complex_id="riverside"),
    ]


@pytest.fixture
def legacy_landing():
    return {
        "accent_color": "#111111",
        "enabled": False,
        "blocks": [
            {
                "type": "overview",
                "bullets": [f"Пункт {i}" for i in range(1, 9)],
            },
            {
                "type": "gallery",
                "image": "https://cdn.example.com/riverside/gallery-hero.jpg",
                "images": [
                    "https://cdn.example.com/riverside/lobby.jpg",
                    "https://cdn.example.com/riverside/yard.jpg",
                    "https://cdn.example.com/riverside/floor-plan.jpg",
                ],
            },
            {"type": "cta", "title": "Записаться на показ"},
        ],
    }


def preset(key):
    return next(p for p in LANDING_FEATURE_PRESETS if p.key == key)


# =============================================================================
# Absent Input
# =============================================================================

class TestNormalizeAbsent:
    """Complexes without authored content."""

    def test_none_equals_auto(self, riverside_complex, listings):
        assert normalize_landing_config(None, riverside_complex, listings) == \
            build_auto_landing_config(riverside_complex, listings)

    @pytest.mark.parametrize("value", ["junk", 42, []])
    def test_unusable_input_equals_auto(self, synthesizer, riverside_complex, value):
        assert synthesizer.normalize(value, riverside_complex, []) == \
            synthesizer.build_auto(riverside_complex, [])

    def test_empty_mapping_equals_auto(self, synthesizer, riverside_complex, listings):
        assert synthesizer.normalize({}, riverside_complex, listings) == \
            synthesizer.build_auto(riverside_complex, listings)


# =============================================================================
# Idempotence
# =============================================================================

class TestIdempotence:
    """Normalizing a normalized config changes nothing."""

    def test_auto(self, synthesizer, riverside_complex, listings):
        first = synthesizer.normalize(None, riverside_complex, listings)
        second = synthesizer.normalize(first.to_dict(), riverside_complex, listings)
        assert second == first

    def test_legacy(self, synthesizer, riverside_complex, listings, legacy_landing):
        first = synthesizer.normalize(legacy_landing, riverside_complex, listings)
        second = synthesizer.normalize(first.to_dict(), riverside_complex, listings)
        assert second == first

    def test_canonical_without_ids(self, synthesizer, riverside_complex, listings):
        stored = {
            "tags": [{"label": "Клубный дом"}],
            "facts": [{"title": "Потолки", "value": "3,2 м"}],
            "feature_ticker": [{"title": "Кафе"}, {"title": "Винотека"}],
        }

        first = synthesizer.normalize(stored, riverside_complex, listings)
        again = synthesizer.normalize(stored, riverside_complex, listings)
        second = synthesizer.normalize(first.to_dict(), riverside_complex, listings)

        assert again == first
        assert second == first

    def test_config_object_is_accepted(self, synthesizer, riverside_complex, listings):
        first = synthesizer.normalize(None, riverside_complex, listings)
        assert synthesizer.normalize(first, riverside_complex, listings) == first


# =============================================================================
# Canonical Merge
# =============================================================================

class TestCanonicalMerge:
    """Explicit values win, empties fall back to auto."""

    def test_scalars(self, synthesizer, riverside_complex):
        config = synthesizer.normalize(
            {
                "accent_color": "#FF0000",
                "surface_color": "  ",
                "hero_image": "https://cdn.example.com/custom.jpg",
                "preview_photo_label": "Визуализация",
                "cta_label": "",
            },
            riverside_complex,
            [],
        )

        assert config.accent_color == "#FF0000"
        assert config.surface_color == "#071520"
        assert config.hero_image == "https://cdn.example.com/custom.jpg"
        assert config.preview_photo_label == "Визуализация"
        assert config.cta_label == "Старт продаж"

    @pytest.mark.parametrize("stored,expected", [
        ({"enabled": False}, False),
        ({"enabled": True}, True),
        ({"enabled": "no"}, True),
        ({}, True),
    ])
    def test_enabled(self, synthesizer, riverside_complex, stored, expected):
        assert synthesizer.normalize(stored, riverside_complex, []).enabled is expected

    def test_empty_lists_fall_back_to_auto(self, synthesizer, riverside_complex):
        auto = synthesizer.build_auto(riverside_complex, [])
        config = synthesizer.normalize(
            {"tags": [], "facts": [], "feature_ticker": []},
            riverside_complex,
            [],
        )

        assert config.tags == auto.tags
        assert config.facts == auto.facts
        assert config.feature_ticker == auto.feature_ticker

    def test_explicit_lists_replace_auto(self, synthesizer, riverside_complex):
        config = synthesizer.normalize(
            {"tags": [{"id": "t1", "label": "Клубный дом"}]},
            riverside_complex,
            [],
        )

        assert [(t.id, t.label) for t in config.tags] == [("t1", "Клубный дом")]

    def test_facts_get_rotating_images(self, synthesizer, riverside_complex):
        config = synthesizer.normalize(
            {"facts": [
                {"title": "Потолки", "value": "3,2 м"},
                {"title": "Лифты", "value": "Schindler", "image": "https://cdn.example.com/lift.jpg"},
            ]},
            riverside_complex,
            [],
        )

        assert config.facts[0].image == DEFAULT_PRESETS.fact_images[0]
        assert config.facts[1].image == "https://cdn.example.com/lift.jpg"

    def test_caps(self, synthesizer, riverside_complex):
        config = synthesizer.normalize(
            {
                "tags": [{"label": f"Тег {i}"} for i in range(15)],
                "facts": [{"title": f"Факт {i}", "value": str(i)} for i in range(15)],
                "feature_ticker": [{"title": f"Фишка {i}"} for i in range(25)],
            },
            riverside_complex,
            [],
        )

        assert len(config.tags) == 12
        assert len(config.facts) == 12
        assert len(config.feature_ticker) == 20
        assert config.facts[-1].title == "Факт 11"

    def test_plan_texts_are_editable(self, synthesizer, riverside_complex):
        config = synthesizer.normalize(
            {"plans": {"title": "Квартиры", "description": "", "cta_label": "Смотреть"}},
            riverside_complex,
            [],
        )

        assert config.plans.title == "Квартиры"
        assert config.plans.description == synthesizer.build_auto(riverside_complex, []).plans.description
        assert config.plans.cta_label == "Смотреть"


class TestPlanFreshness:
    """Floor-plan buckets always come from live listings."""

    def test_stored_items_are_ignored(self, synthesizer, riverside_complex, listings):
        stored = {"plans": {"items": [
            {"id": "stale", "name": "Пентхаус", "price": "1 ₽", "variants": 99, "bedrooms": 5},
        ]}}

        config = synthesizer.normalize(stored, riverside_complex, listings)

        assert [(i.bedrooms, i.variants) for i in config.plans.items] == [(0, 1), (1, 2)]

    def test_items_follow_listing_changes(self, synthesizer, riverside_complex, listings, make_listing):
        first = synthesizer.normalize(None, riverside_complex, listings)
        grown = listings + [make_listing(bedrooms=2, price=9_000_000, complex_id="riverside")]

        second = synthesizer.normalize(first.to_dict(), riverside_complex, grown)

        assert [i.bedrooms for i in second.plans.items] == [0, 1, 2]
        assert second.tags == first.tags


# =============================================================================
# Features
# =============================================================================

class TestFeatureMerge:
    """Preset resolution for stored feature entries."""

    def test_title_back_fills_key_and_image(self, synthesizer, riverside_complex):
        config = synthesizer.normalize({"feature_ticker": [{"title": "кафе"}]}, riverside_complex, [])
        feature = config.feature_ticker[0]

        assert feature.preset_key == "cafe"
        assert feature.image == preset("cafe").image
        assert feature.title == "кафе"

    def test_key_back_fills_title(self, synthesizer, riverside_complex):
        config = synthesizer.normalize({"feature_ticker": [{"preset_key": "pet"}]}, riverside_complex, [])
        feature = config.feature_ticker[0]

        assert feature.title == "Площадка для питомцев"
        assert feature.image == preset("pet").image

    def test_plan_like_image_is_replaced(self, synthesizer, riverside_complex):
        config = synthesizer.normalize(
            {"feature_ticker": [{"preset_key": "lounge", "image": "https://cdn.example.com/floor-3.png"}]},
            riverside_complex,
            [],
        )
        assert config.feature_ticker[0].image == preset("lounge").image

    def test_custom_image_is_kept(self, synthesizer, riverside_complex):
        config = synthesizer.normalize(
            {"feature_ticker": [{"preset_key": "lounge", "image": "https://cdn.example.com/lounge.jpg"}]},
            riverside_complex,
            [],
        )
        assert config.feature_ticker[0].image == "https://cdn.example.com/lounge.jpg"

    def test_unknown_feature_keeps_defaults(self, synthesizer, riverside_complex):
        config = synthesizer.normalize({"feature_ticker": [{"title": "Винотека"}]}, riverside_complex, [])
        feature = config.feature_ticker[0]

        assert feature.title == "Винотека"
        assert feature.preset_key is None
        assert feature.image is None


class TestInferFeaturePresetKey:
    """Preset key priority."""

    def test_known_key_wins(self):
        assert infer_feature_preset_key({"preset_key": "parking", "title": "Кафе"}) == "parking"

    def test_title_before_image(self):
        feature = {"title": "Кафе", "image": preset("market").image}
        assert infer_feature_preset_key(feature) == "cafe"

    def test_title_is_case_insensitive(self):
        assert infer_feature_preset_key({"title": " КОВОРКИНГ "}) == "coworking"

    def test_unknown_key_with_matching_title(self):
        assert infer_feature_preset_key({"preset_key": "old-cafe", "title": "Кафе"}) == "cafe"

    def test_image(self):
        assert infer_feature_preset_key({"image": preset("yard").image}) == "yard"

    def test_raw_key_kept_when_nothing_matches(self):
        assert infer_feature_preset_key({"preset_key": "wine", "title": "Винотека"}) == "wine"

    def test_nothing(self):
        assert infer_feature_preset_key({"title": "Винотека"}) is None
        assert infer_feature_preset_key(None) is None

    def test_accepts_feature_objects(self):
        feature = LandingFeature(id="f1", title="Маркет")
        assert infer_feature_preset_key(feature) == "market"


# =============================================================================
# Legacy Migration
# =============================================================================

class TestLegacyMigration:
    """Block-list landings."""

    def test_detection(self, legacy_landing):
        assert is_legacy_landing(legacy_landing)
        assert not is_legacy_landing({"tags": []})
        assert not is_legacy_landing({"blocks": "overview"})

    def test_tags_from_first_bullets(self, synthesizer, riverside_complex, listings, legacy_landing):
        config = synthesizer.normalize(legacy_landing, riverside_complex, listings)
        assert [t.label for t in config.tags] == ["Пункт 1", "Пункт 2", "Пункт 3", "Пункт 4"]

    def test_facts_borrow_auto_titles(self, synthesizer, riverside_complex, listings, legacy_landing):
        auto = synthesizer.build_auto(riverside_complex, listings)
        config = synthesizer.normalize(legacy_landing, riverside_complex, listings)

        assert [f.value for f in config.facts] == [f"Пункт {i}" for i in range(1, 9)]
        assert [f.title for f in config.facts[:6]] == [f.title for f in auto.facts[:6]]
        assert [f.title for f in config.facts[6:]] == ["Детали", "Детали"]
        assert config.facts[1].image == DEFAULT_PRESETS.fact_images[1]

    def test_gallery_images_become_features(self, synthesizer, riverside_complex, listings, legacy_landing):
        config = synthesizer.normalize(legacy_landing, riverside_complex, listings)
        features = config.feature_ticker

        assert [f.preset_key for f in features] == ["panoramic", "concierge", "market"]
        assert features[0].image == "https://cdn.example.com/riverside/lobby.jpg"
        assert features[1].title == "Консьерж-сервис"
        assert features[2].image == preset("market").image

    def test_scalars(self, synthesizer, riverside_complex, listings, legacy_landing):
        config = synthesizer.normalize(legacy_landing, riverside_complex, listings)

        assert config.hero_image == "https://cdn.example.com/riverside/gallery-hero.jpg"
        assert config.cta_label == "Записаться на показ"
        assert config.accent_color == "#111111"
        assert config.surface_color == "#071520"
        assert config.enabled is False

    def test_hero_falls_back_to_complex_image(self, synthesizer, riverside_complex):
        config = synthesizer.normalize({"blocks": []}, riverside_complex, [])

        assert config.hero_image == "https://cdn.example.com/riverside/hero.jpg"
        assert config.tags == synthesizer.build_auto(riverside_complex, []).tags

    def test_plans_are_live(self, synthesizer, riverside_complex, listings, legacy_landing):
        config = synthesizer.normalize(legacy_landing, riverside_complex, listings)
        assert [i.bedrooms for i in config.plans.items] == [0, 1]
