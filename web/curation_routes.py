"""
Curation Routes - Read-Only API over Collections and Landings

Routes:
- GET  /api/collections/{id}/items                  - Resolve a stored collection
- POST /api/admin/collections/preview               - Preview ad-hoc auto rules
- GET  /api/admin/collections/{id}/validate-items   - Check manual pointers
- GET  /api/complexes/{id}/landing                  - Normalized landing config
- POST /api/admin/complexes/{id}/landing/preview    - Normalize a draft config
- GET  /api/admin/landing/presets                   - Feature preset catalog

Authentication is handled by the outer API gateway.
"""

from __future__ import annotations

import logging
from typing import Any, List, Literal, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from core.catalog import AutoRules, CatalogRepository, CatalogSnapshot, Complex, EntryKind
from core.collection_engine import (
    MAX_PREVIEW_LIMIT,
    preview_auto_rules,
    resolve_collection_items,
    validate_manual_items,
)
from core.landing_engine import LandingSynthesizer


logger = logging.getLogger(__name__)


# =============================================================================
# Router Setup
# =============================================================================

router = APIRouter(prefix="/api", tags=["curation"])


# =============================================================================
# Request Models
# =============================================================================


class AutoRulesPayload(BaseModel):
    """Auto rules as edited in the admin rule builder."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["property", "listing", "complex"]
    category: Optional[Literal["newbuild", "secondary", "rent"]] = None
    bedrooms: Optional[float] = Field(None, ge=0)
    price_min: Optional[float] = Field(None, ge=0, alias="priceMin")
    price_max: Optional[float] = Field(None, ge=0, alias="priceMax")
    area_min: Optional[float] = Field(None, ge=0, alias="areaMin")
    area_max: Optional[float] = Field(None, ge=0, alias="areaMax")
    district: Optional[str] = None
    metro: List[str] = Field(default_factory=list)
    q: Optional[str] = None

    def to_rules(self) -> AutoRules:
        return AutoRules.from_dict(self.model_dump(by_alias=True, exclude_none=True))


class CollectionPreviewRequest(BaseModel):
    rules: AutoRulesPayload
    limit: Optional[int] = Field(None, ge=1, le=MAX_PREVIEW_LIMIT)


class LandingPreviewRequest(BaseModel):
    """Draft landing content; canonical or legacy block shape."""
    landing: Optional[dict[str, Any]] = None


# =============================================================================
# Dependencies
# =============================================================================


def get_snapshot(request: Request) -> CatalogSnapshot:
    repository: CatalogRepository = request.app.state.catalog_repository
    return repository.snapshot()


def get_synthesizer(request: Request) -> LandingSynthesizer:
    return request.app.state.landing_synthesizer


def require_complex(snapshot: CatalogSnapshot, complex_id: str) -> Complex:
    """
    Look up a complex by id.

    Raises HTTPException(404) if it does not exist. Hidden complexes are
    still served so admins can preview them.
    """
    complex_ = snapshot.find(EntryKind.COMPLEX, complex_id)
    if complex_ is None:
        raise HTTPException(status_code=404, detail="Complex not found")
    return complex_


# =============================================================================
# Collections
# =============================================================================


@router.get("/collections/{collection_id}/items")
async def collection_items(collection_id: str, request: Request):
    """Resolve a stored collection into catalog entries."""
    snapshot = get_snapshot(request)
    collection = snapshot.find_collection(collection_id)
    if collection is None:
        raise HTTPException(status_code=404, detail="Collection not found")

    items = resolve_collection_items(collection, snapshot)
    return {
        "success": True,
        "data": {
            "collection": collection.to_dict(),
            "items": [item.to_dict() for item in items],
        },
    }


@router.post("/admin/collections/preview")
async def collection_preview(payload: CollectionPreviewRequest, request: Request):
    """Preview the first page of an auto rule set."""
    snapshot = get_snapshot(request)
    limit = payload.limit or request.app.state.config.preview_limit
    preview = preview_auto_rules(payload.rules.to_rules(), snapshot, limit=limit)
    return {"success": True, "data": preview.to_dict()}


@router.get("/admin/collections/{collection_id}/validate-items")
async def collection_validate_items(collection_id: str, request: Request):
    """Report manual pointers whose targets are missing or inactive."""
    snapshot = get_snapshot(request)
    collection = snapshot.find_collection(collection_id)
    report = validate_manual_items(collection, snapshot) if collection else None
    if report is None:
        raise HTTPException(status_code=404, detail="Not found or not in manual mode")

    if report.has_invalid:
        logger.info(
            "Collection %s has %d dangling items",
            collection_id, len(report.invalid_items),
        )
    return {"success": True, "data": report.to_dict()}


# =============================================================================
# Landings
# =============================================================================


@router.get("/complexes/{complex_id}/landing")
async def complex_landing(complex_id: str, request: Request):
    """Normalized landing config of a complex, merged over auto content."""
    snapshot = get_snapshot(request)
    complex_ = require_complex(snapshot, complex_id)
    listings = snapshot.listings_for_complex(complex_.id)

    config = get_synthesizer(request).normalize(complex_.landing, complex_, listings)
    return {"success": True, "data": config.to_dict()}


@router.post("/admin/complexes/{complex_id}/landing/preview")
async def complex_landing_preview(
    complex_id: str,
    payload: LandingPreviewRequest,
    request: Request,
):
    """Normalize a draft landing config without storing it."""
    snapshot = get_snapshot(request)
    complex_ = require_complex(snapshot, complex_id)
    listings = snapshot.listings_for_complex(complex_.id)

    config = get_synthesizer(request).normalize(payload.landing, complex_, listings)
    return {"success": True, "data": config.to_dict()}


@router.get("/admin/landing/presets")
async def landing_presets(request: Request):
    """Feature preset catalog in effect."""
    presets = get_synthesizer(request).presets
    return {
        "success": True,
        "data": [preset.to_dict() for preset in presets.feature_presets],
    }
