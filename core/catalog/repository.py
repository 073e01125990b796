"""
Catalog Repository - Read-Only Snapshot Storage

Loads the catalog snapshot (listings, complexes, collections) produced by
the import pipeline from a JSON file. The curation engines never write;
this repository only reads and caches.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from core.catalog.models import CatalogSnapshot


logger = logging.getLogger(__name__)


# =============================================================================
# Repository
# =============================================================================


class CatalogRepository:
    """
    Read-only repository over a JSON catalog snapshot.

    The file is re-read when its modification time changes, so the import
    pipeline can replace it while the server is running.
    """

    def __init__(self, snapshot_path: Optional[str] = None):
        """
        Initialise repository.

        Args:
            snapshot_path: Optional path of the JSON snapshot file
        """
        self._snapshot_path = Path(snapshot_path) if snapshot_path else None
        self._snapshot = CatalogSnapshot()
        self._loaded_mtime: Optional[float] = None

    @classmethod
    def from_snapshot(cls, snapshot: CatalogSnapshot) -> "CatalogRepository":
        """Create a repository serving a fixed in-memory snapshot."""
        repository = cls()
        repository._snapshot = snapshot
        return repository

    def _load_from_file(self) -> None:
        """Load data from file."""
        if not self._snapshot_path or not self._snapshot_path.exists():
            return

        mtime = self._snapshot_path.stat().st_mtime
        if self._loaded_mtime == mtime:
            return

        try:
            data = json.loads(self._snapshot_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not load catalog snapshot %s: %s", self._snapshot_path, e)
            return

        if not isinstance(data, dict):
            logger.warning("Catalog snapshot %s is not a JSON object", self._snapshot_path)
            return

        self._snapshot = CatalogSnapshot.from_dict(data)
        self._loaded_mtime = mtime
        logger.info(
            "Loaded catalog snapshot: %d listings, %d complexes, %d collections",
            len(self._snapshot.listings),
            len(self._snapshot.complexes),
            len(self._snapshot.collections),
        )

    def snapshot(self) -> CatalogSnapshot:
        """Return the current snapshot, reloading the file if it changed."""
        self._load_from_file()
        return self._snapshot
