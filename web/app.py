"""
FastAPI application for the curation engine.

Serves resolved collections and normalized complex landings to the site
and admin preview tooling. Configuration via environment variables.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.catalog import CatalogRepository
from core.landing_engine import DEFAULT_PRESETS, LandingPresets, LandingSynthesizer
from utils.config import Config
from web.curation_routes import router as curation_router


logger = logging.getLogger(__name__)

# =============================================================================
# Environment Configuration
# =============================================================================

# Production mode detection
IS_PRODUCTION = os.getenv("PRODUCTION", "").lower() == "true"

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",") if os.getenv("ALLOWED_ORIGINS") else []
if not ALLOWED_ORIGINS and not IS_PRODUCTION:
    # Development fallback only
    ALLOWED_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173"]


def load_landing_presets(path: Path) -> LandingPresets:
    """
    Load admin-defined feature presets, falling back to the built-in catalog.

    The file holds ``landing_feature_presets`` and
    ``hidden_landing_feature_preset_keys`` as exported by the admin.
    """
    if not path.exists():
        return DEFAULT_PRESETS
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load landing presets %s: %s", path, e)
        return DEFAULT_PRESETS
    if not isinstance(data, dict):
        logger.warning("Landing presets file %s is not a JSON object", path)
        return DEFAULT_PRESETS
    return LandingPresets.from_dict(data)


def create_app(
    config: Optional[Config] = None,
    repository: Optional[CatalogRepository] = None,
    synthesizer: Optional[LandingSynthesizer] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application config (default: from environment)
        repository: Catalog repository (default: JSON snapshot from config)
        synthesizer: Landing synthesizer (default: presets from config)
    """
    config = config or Config.load()

    app = FastAPI(
        title="Catalog Curation Engine",
        description="Collections and complex landing content for the real-estate catalog",
        version="0.1.0",
        docs_url=None if IS_PRODUCTION else "/docs",
        redoc_url=None if IS_PRODUCTION else "/redoc",
        openapi_url=None if IS_PRODUCTION else "/openapi.json",
        debug=config.debug and not IS_PRODUCTION,
    )

    app.state.config = config
    app.state.catalog_repository = repository or CatalogRepository(str(config.catalog_path))
    app.state.landing_synthesizer = synthesizer or LandingSynthesizer(
        load_landing_presets(config.landing_presets_path)
    )

    @app.get("/health", include_in_schema=False)
    def health():
        """Health endpoint. No dependencies, no IO."""
        return {"status": "healthy"}

    if ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    app.include_router(curation_router)

    return app
