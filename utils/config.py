"""
Configuration management.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")

    # Data
    data_dir: str = field(default_factory=lambda: os.getenv("DATA_DIR", "./data"))
    catalog_file: str = field(default_factory=lambda: os.getenv("CATALOG_FILE", "catalog.json"))
    landing_presets_file: str = field(
        default_factory=lambda: os.getenv("LANDING_PRESETS_FILE", "landing_presets.json")
    )

    # Collections
    preview_limit: int = field(default_factory=lambda: int(os.getenv("PREVIEW_LIMIT", "12")))

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    @property
    def catalog_path(self) -> Path:
        """Absolute-or-relative path of the catalog snapshot file."""
        return Path(self.data_dir) / self.catalog_file

    @property
    def landing_presets_path(self) -> Path:
        """Path of the optional custom feature presets file."""
        return Path(self.data_dir) / self.landing_presets_file

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "data_dir": self.data_dir,
            "catalog_file": self.catalog_file,
            "landing_presets_file": self.landing_presets_file,
            "preview_limit": self.preview_limit,
        }
