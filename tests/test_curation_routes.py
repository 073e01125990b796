"""
Tests for the curation HTTP API.
"""

import json

import pytest
from fastapi.testclient import TestClient

from core.landing_engine import LANDING_FEATURE_PRESETS
from utils.config import Config
from web.app import create_app


CATALOG = {
    "properties": [
        {
            "id": "A", "title": "Студия у парка", "category": "newbuild", "bedrooms": 0,
            "price": "5 000 000", "area_total": 24, "status": "active",
            "district": "Хамовники", "metro": ["Фрунзенская"],
            "complex_id": "riverside", "updated_at": "2024-01-01T00:00:00.000Z",
        },
        {
            "id": "B", "title": "Двушка с видом", "category": "newbuild", "bedrooms": 2,
            "price": 9_500_000, "area_total": 58, "status": "active",
            "district": "Хамовники", "metro": ["Фрунзенская"],
            "complex_id": "riverside", "updated_at": "2024-03-01T00:00:00.000Z",
        },
        {
            "id": "C", "title": "Архивная", "category": "secondary", "bedrooms": 2,
            "price": 8_000_000, "status": "archived",
            "complex_id": "riverside", "updated_at": "2024-04-01T00:00:00.000Z",
        },
    ],
    "complexes": [
        {
            "id": "riverside", "title": "Riverside", "status": "active",
            "district": "Хамовники", "metro": ["Фрунзенская"], "class": "Бизнес",
            "images": ["https://cdn.example.com/riverside/hero.jpg"],
            "landing": {"accent_color": "#123456", "tags": [{"id": "t1", "label": "Клубный дом"}]},
        },
        {"id": "hidden", "title": "Hidden", "status": "hidden"},
    ],
    "collections": [
        {
            "id": "col-manual", "slug": "best", "title": "Лучшее", "mode": "manual",
            "items": [
                {"type": "listing", "ref_id": "C"},
                {"type": "complex", "ref_id": "riverside"},
                {"type": "listing", "ref_id": "A"},
            ],
        },
        {
            "id": "col-auto", "slug": "two-bed", "title": "Двушки", "mode": "auto",
            "auto_rules": {"type": "property", "bedrooms": 2},
        },
    ],
}


@pytest.fixture
def client(tmp_path):
    (tmp_path / "catalog.json").write_text(json.dumps(CATALOG), encoding="utf-8")
    app = create_app(config=Config(data_dir=str(tmp_path)))
    return TestClient(app)


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


# =============================================================================
# Collections
# =============================================================================

class TestCollectionRoutes:
    """Collection resolution endpoints."""

    def test_manual_collection(self, client):
        response = client.get("/api/collections/col-manual/items")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        items = body["data"]["items"]
        assert [(i["type"], i["ref"]["id"]) for i in items] == [("complex", "riverside"), ("listing", "A")]

    def test_lookup_by_slug(self, client):
        response = client.get("/api/collections/two-bed/items")

        assert response.status_code == 200
        assert [i["ref"]["id"] for i in response.json()["data"]["items"]] == ["B"]

    def test_unknown_collection(self, client):
        response = client.get("/api/collections/nope/items")
        assert response.status_code == 404

    def test_preview(self, client):
        response = client.post(
            "/api/admin/collections/preview",
            json={"rules": {"type": "listing", "priceMax": 9_000_000}, "limit": 5},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 1
        assert data["items"][0]["ref"]["id"] == "A"

    def test_preview_rejects_bad_limit(self, client):
        response = client.post(
            "/api/admin/collections/preview",
            json={"rules": {"type": "listing"}, "limit": 0},
        )
        assert response.status_code == 422

    def test_preview_rejects_unknown_type(self, client):
        response = client.post("/api/admin/collections/preview", json={"rules": {"type": "garage"}})
        assert response.status_code == 422

    def test_validate_items(self, client):
        response = client.get("/api/admin/collections/col-manual/validate-items")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "totalItems": 3,
            "validItems": 2,
            "invalidItems": ["C"],
        }

    def test_validate_items_requires_manual_mode(self, client):
        response = client.get("/api/admin/collections/col-auto/validate-items")
        assert response.status_code == 404


# =============================================================================
# Landings
# =============================================================================

class TestLandingRoutes:
    """Landing endpoints."""

    def test_stored_landing_is_merged(self, client):
        response = client.get("/api/complexes/riverside/landing")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["accent_color"] == "#123456"
        assert data["tags"] == [{"id": "t1", "label": "Клубный дом"}]
        assert data["hero_image"] == "https://cdn.example.com/riverside/hero.jpg"
        assert [i["bedrooms"] for i in data["plans"]["items"]] == [0, 2]

    def test_unknown_complex(self, client):
        response = client.get("/api/complexes/nope/landing")
        assert response.status_code == 404

    def test_hidden_complex_is_still_served(self, client):
        response = client.get("/api/complexes/hidden/landing")
        assert response.status_code == 200

    def test_preview_draft(self, client):
        response = client.post(
            "/api/admin/complexes/riverside/landing/preview",
            json={"landing": {"blocks": [{"type": "cta", "title": "Узнать цены"}]}},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["cta_label"] == "Узнать цены"
        assert data["accent_color"] == "#C2A87A"

    def test_preview_without_draft_is_auto(self, client):
        response = client.post("/api/admin/complexes/riverside/landing/preview", json={})

        assert response.status_code == 200
        assert response.json()["data"]["cta_label"] == "Старт продаж"

    def test_presets(self, client):
        response = client.get("/api/admin/landing/presets")

        assert response.status_code == 200
        keys = [p["key"] for p in response.json()["data"]]
        assert keys == [p.key for p in LANDING_FEATURE_PRESETS]


class TestCustomPresetsFile:
    """Admin-defined presets on disk."""

    def test_overrides_are_loaded(self, tmp_path):
        (tmp_path / "catalog.json").write_text(json.dumps(CATALOG), encoding="utf-8")
        (tmp_path / "landing_presets.json").write_text(json.dumps({
            "landing_feature_presets": [
                {"key": "gym", "title": "Фитнес", "image": "https://cdn.example.com/gym.jpg"},
            ],
            "hidden_landing_feature_preset_keys": ["pet"],
        }), encoding="utf-8")
        client = TestClient(create_app(config=Config(data_dir=str(tmp_path))))

        keys = [p["key"] for p in client.get("/api/admin/landing/presets").json()["data"]]

        assert keys[-1] == "gym"
        assert "pet" not in keys

    def test_broken_file_falls_back_to_defaults(self, tmp_path):
        (tmp_path / "landing_presets.json").write_text("{not json", encoding="utf-8")
        client = TestClient(create_app(config=Config(data_dir=str(tmp_path))))

        keys = [p["key"] for p in client.get("/api/admin/landing/presets").json()["data"]]

        assert keys == [p.key for p in LANDING_FEATURE_PRESETS]
