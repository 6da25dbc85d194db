"""Photo Explorer application configuration.

Loads settings from a single YAML file, ``photo_explorer.settings.yaml``.

Lookup order for the settings file:
  * the ``settings_path`` argument to :func:`load_config`
  * the ``PHOTO_EXPLORER_SETTINGS`` environment variable
  * ``./photo_explorer.settings.yaml``
  * ``./config/photo_explorer.settings.yaml``

A missing file is not an error; every field has a default.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SETTINGS_FILENAME = "photo_explorer.settings.yaml"
SETTINGS_ENV_VAR  = "PHOTO_EXPLORER_SETTINGS"


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning("Config file not found: %s", path)
        return {}
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _default_settings_path() -> Path:
    env_path = os.environ.get(SETTINGS_ENV_VAR)
    if env_path:
        return Path(env_path)
    candidates = [Path(SETTINGS_FILENAME), Path("config") / SETTINGS_FILENAME]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return candidates[0]


def _base_dir_for(settings_path: Path) -> Path:
    """Directory that relative paths in the settings file are resolved from.

    A settings file kept in ``<project>/config/`` resolves from ``<project>``;
    anywhere else it resolves from the file's own directory.
    """
    settings_dir = settings_path.resolve().parent
    if settings_dir.name == "config":
        return settings_dir.parent
    return settings_dir


# ---------------------------------------------------------------------------
# Settings models
# ---------------------------------------------------------------------------


class ServerSettings(BaseModel):
    host:            str       = "0.0.0.0"
    port:            int       = 8080
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])


class StorageSettings(BaseModel):
    """Where uploads live and how they are processed."""
    upload_path:        str = "./uploads"
    thumbnail_size:     int = Field(100, gt=0)
    explorer_max_depth: int = Field(10, ge=1)
    worker_threads:     int = Field(4, ge=1)
    max_upload_bytes:   int = Field(20 * 1024 * 1024, gt=0)


class LoggingSettings(BaseModel):
    level: str = "info"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        if not isinstance(getattr(logging, value.upper(), None), int):
            raise ValueError(f"Unknown log level: {value}")
        return value.lower()


class AppConfig(BaseModel):
    server:  ServerSettings  = Field(default_factory=ServerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------

_config: Optional[AppConfig] = None


def load_config(settings_path: Optional[Path] = None) -> AppConfig:
    """Load settings into an *AppConfig*, resolving relative storage paths."""
    path = Path(settings_path) if settings_path else _default_settings_path()
    data = _load_yaml(path)

    config = AppConfig(**data)

    upload_path = Path(config.storage.upload_path).expanduser()
    if not upload_path.is_absolute():
        upload_path = _base_dir_for(path) / upload_path
    config.storage.upload_path = str(upload_path)

    logger.info(
        "Settings loaded from %s (server=%s:%s, upload_path=%s)",
        path,
        config.server.host,
        config.server.port,
        config.storage.upload_path,
    )
    return config


def get_config() -> AppConfig:
    """Return the process configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the cached configuration (for testing)."""
    global _config
    _config = None
