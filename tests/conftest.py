"""
Shared fixtures: catalog record factories.
"""

from __future__ import annotations

import pytest

from core.catalog import Category, Complex, Listing, RecordStatus


@pytest.fixture
def make_listing():
    """Factory fixture for listings with sensible defaults."""
    counter = {"n": 0}

    def _create(
        id: str = None,
        bedrooms=1,
        price=10_000_000,
        area_total=40.0,
        status: RecordStatus = RecordStatus.ACTIVE,
        updated_at: str = "2024-01-01T00:00:00.000Z",
        **kwargs,
    ) -> Listing:
        counter["n"] += 1
        kwargs.setdefault("title", f"Квартира {counter['n']}")
        kwargs.setdefault("category", Category.NEWBUILD)
        kwargs.setdefault("district", "Хамовники")
        kwargs.setdefault("metro", ["Фрунзенская"])
        return Listing(
            id=id or f"L{counter['n']}",
            bedrooms=bedrooms,
            price=price,
            area_total=area_total,
            status=status,
            updated_at=updated_at,
            **kwargs,
        )

    return _create


@pytest.fixture
def make_complex():
    """Factory fixture for complexes with sensible defaults."""
    counter = {"n": 0}

    def _create(
        id: str = None,
        status: RecordStatus = RecordStatus.ACTIVE,
        updated_at: str = "2024-01-01T00:00:00.000Z",
        **kwargs,
    ) -> Complex:
        counter["n"] += 1
        kwargs.setdefault("title", f"ЖК {counter['n']}")
        kwargs.setdefault("district", "Хамовники")
        kwargs.setdefault("metro", ["Фрунзенская"])
        return Complex(
            id=id or f"C{counter['n']}",
            status=status,
            updated_at=updated_at,
            **kwargs,
        )

    return _create


@pytest.fixture
def riverside_complex(make_complex):
    """Fully populated complex used across landing tests."""
    return make_complex(
        id="riverside",
        title="Riverside",
        district="Хамовники",
        metro=["Фрунзенская", "Парк культуры"],
        images=["https://cdn.example.com/riverside/hero.jpg"],
        building_class="Бизнес",
        description="Панорамные окна, подземный паркинг и детский сад во дворе",
        handover_date="IV кв. 2026",
        finish_type="White box",
        geo_lat=55.752023,
        geo_lon=37.617499,
    )
