"""
Application settings (Pydantic).

Settings are loaded from `src/ecotrack/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `ECOTRACK_CONFIG_PATH` (replaces the packaged defaults)
- environment variables (`ECOTRACK_LOG_LEVEL`, `ECOTRACK_SEED_PATH`, `ECOTRACK_MAX_LIMIT`)
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from ecotrack.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `ecotrack.config`."""
    text = resources.files("ecotrack.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "EcoTrack"
    log_level: str = "INFO"


class StoreSettings(BaseModel):
    seed_path: str | None = None


class RecyclingSettings(BaseModel):
    max_limit: int | None = Field(default=None, ge=1)


class ScanSettings(BaseModel):
    recent_limit_default: int = Field(default=10, ge=1)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    recycling: RecyclingSettings = Field(default_factory=RecyclingSettings)
    scans: ScanSettings = Field(default_factory=ScanSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay the whitelisted environment variables onto the raw settings payload."""
    data = dict(data)

    log_level = os.getenv("ECOTRACK_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    seed_path = os.getenv("ECOTRACK_SEED_PATH")
    if seed_path:
        data.setdefault("store", {})["seed_path"] = seed_path

    max_limit = os.getenv("ECOTRACK_MAX_LIMIT")
    if max_limit:
        data.setdefault("recycling", {})["max_limit"] = int(max_limit)

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("ECOTRACK_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
