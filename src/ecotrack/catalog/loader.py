"""
Seed catalog loader.

The store starts from a JSON seed (default: the `seed.json` packaged next to this
module, or `store.seed_path` from settings). The file has four top-level lists:
`centers`, `products`, `scans` and `articles`. Scans and articles carry a relative
age (`daysAgo`) so demo data always looks recent; it is turned into an absolute UTC
timestamp when the store is built.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from importlib import resources
from pathlib import Path

from pydantic import Field

from ecotrack.core.env import resolve_project_path
from ecotrack.domain.models import CamelModel, ProductCreate, RecyclingCenterCreate


class SeedScan(CamelModel):
    """A demo scan; refers to its product by barcode since ids are assigned at load time."""

    barcode: str
    user_id: int | None = None
    days_ago: float = Field(default=0, ge=0)

    def scanned_at(self, now: datetime) -> datetime:
        return now - timedelta(days=self.days_ago)


class SeedArticle(CamelModel):
    title: str
    content: str
    category: str
    image_url: str | None = None
    read_time: int | None = Field(default=None, ge=0)
    days_ago: float = Field(default=0, ge=0)

    def created_at(self, now: datetime) -> datetime:
        return now - timedelta(days=self.days_ago)


class SeedCatalog(CamelModel):
    centers: list[RecyclingCenterCreate] = Field(default_factory=list)
    products: list[ProductCreate] = Field(default_factory=list)
    scans: list[SeedScan] = Field(default_factory=list)
    articles: list[SeedArticle] = Field(default_factory=list)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def load_seed(path: str | Path | None = None) -> SeedCatalog:
    """Load and validate a seed catalog (packaged default when `path` is None)."""
    if path is None:
        text = resources.files("ecotrack.catalog").joinpath("seed.json").read_text(encoding="utf-8")
    else:
        text = resolve_project_path(path).read_text(encoding="utf-8")
    return SeedCatalog.model_validate(json.loads(text))
