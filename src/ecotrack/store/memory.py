"""
In-memory store.

`MemoryStore` owns every record in plain `dict[int, ...]` maps keyed by auto-incremented
ids. It is built once (usually from the seed catalog) and handed to the query services
and API handlers explicitly; nothing reads it through module-level state.

Nothing here is durable or locked: data lives for the lifetime of the process and
concurrent writers are not coordinated.
"""

from __future__ import annotations

import logging
from datetime import datetime
from itertools import count
from typing import Callable, Iterator

from ecotrack.catalog.loader import SeedCatalog, load_seed, utc_now
from ecotrack.config.settings import Settings
from ecotrack.domain.models import (
    Article,
    Product,
    ProductCreate,
    RecyclingCenter,
    RecyclingCenterCreate,
    Scan,
    ScanCreate,
)

logger = logging.getLogger(__name__)


class DuplicateBarcodeError(ValueError):
    """Raised when a product is created with a barcode that is already stored."""


class UnknownProductError(ValueError):
    """Raised when a scan refers to a product id the store does not know."""


class MemoryStore:
    def __init__(self, *, clock: Callable[[], datetime] = utc_now):
        self._clock = clock
        self._centers: dict[int, RecyclingCenter] = {}
        self._products: dict[int, Product] = {}
        self._scans: dict[int, Scan] = {}
        self._articles: dict[int, Article] = {}

        self._center_ids: Iterator[int] = count(1)
        self._product_ids: Iterator[int] = count(1)
        self._scan_ids: Iterator[int] = count(1)
        self._article_ids: Iterator[int] = count(1)

    @classmethod
    def from_seed(cls, seed: SeedCatalog, *, clock: Callable[[], datetime] = utc_now) -> "MemoryStore":
        """Build a store populated from a validated seed catalog."""
        store = cls(clock=clock)
        now = clock()

        for center in seed.centers:
            store.add_center(center)

        for product in seed.products:
            store.create_product(product, created_at=now)

        for scan in seed.scans:
            product = store.get_product_by_barcode(scan.barcode)
            if product is None:
                logger.warning("Seed scan refers to unknown barcode %s; skipping.", scan.barcode)
                continue
            store._insert_scan(product_id=product.id, user_id=scan.user_id, scanned_at=scan.scanned_at(now))

        for article in seed.articles:
            article_id = next(store._article_ids)
            store._articles[article_id] = Article(
                id=article_id,
                title=article.title,
                content=article.content,
                category=article.category,
                image_url=article.image_url,
                read_time=article.read_time,
                created_at=article.created_at(now),
            )

        logger.info(
            "Seeded store: centers=%d products=%d scans=%d articles=%d",
            len(store._centers),
            len(store._products),
            len(store._scans),
            len(store._articles),
        )
        return store

    # Recycling centers

    def add_center(self, center: RecyclingCenterCreate) -> RecyclingCenter:
        center_id = next(self._center_ids)
        record = RecyclingCenter(id=center_id, **center.model_dump())
        self._centers[center_id] = record
        return record

    def list_all_centers(self) -> list[RecyclingCenter]:
        """All centers in creation order (a fresh list on every call)."""
        return list(self._centers.values())

    def get_center(self, center_id: int) -> RecyclingCenter | None:
        return self._centers.get(center_id)

    # Products

    def list_products(self) -> list[Product]:
        return list(self._products.values())

    def get_product(self, product_id: int) -> Product | None:
        return self._products.get(product_id)

    def get_product_by_barcode(self, barcode: str) -> Product | None:
        return next((p for p in self._products.values() if p.barcode == barcode), None)

    def search_products(self, query: str) -> list[Product]:
        """Case-insensitive substring match over product name or brand."""
        needle = query.casefold()
        return [
            p
            for p in self._products.values()
            if needle in p.name.casefold() or needle in p.brand.casefold()
        ]

    def create_product(self, product: ProductCreate, *, created_at: datetime | None = None) -> Product:
        if self.get_product_by_barcode(product.barcode) is not None:
            raise DuplicateBarcodeError(f"A product with barcode '{product.barcode}' already exists")
        product_id = next(self._product_ids)
        record = Product(id=product_id, created_at=created_at or self._clock(), **product.model_dump())
        self._products[product_id] = record
        return record

    # Scans

    def _insert_scan(self, *, product_id: int, user_id: int | None, scanned_at: datetime) -> Scan:
        scan_id = next(self._scan_ids)
        record = Scan(id=scan_id, user_id=user_id, product_id=product_id, scanned_at=scanned_at)
        self._scans[scan_id] = record
        return record

    def create_scan(self, scan: ScanCreate) -> Scan:
        if scan.product_id not in self._products:
            raise UnknownProductError(f"Unknown product id {scan.product_id}")
        return self._insert_scan(product_id=scan.product_id, user_id=scan.user_id, scanned_at=self._clock())

    def list_scans(self, user_id: int | None = None) -> list[Scan]:
        """Scans, most recent first (optionally for one user)."""
        scans = [s for s in self._scans.values() if user_id is None or s.user_id == user_id]
        return sorted(scans, key=lambda s: s.scanned_at, reverse=True)

    def recent_scanned_products(self, limit: int = 10) -> list[Product]:
        """Products from the most recent scans, each product listed once."""
        product_ids: list[int] = []
        for scan in self.list_scans():
            if scan.product_id not in product_ids:
                product_ids.append(scan.product_id)

        out: list[Product] = []
        for product_id in product_ids[: max(0, limit)]:
            product = self._products.get(product_id)
            if product is not None:
                out.append(product)
        return out

    # Articles

    def list_articles(self, category: str | None = None) -> list[Article]:
        """Articles, newest first. `None`, empty or "all" disables the category filter."""
        articles = list(self._articles.values())
        if category and category.casefold() != "all":
            wanted = category.casefold()
            articles = [a for a in articles if a.category.casefold() == wanted]
        return sorted(articles, key=lambda a: a.created_at, reverse=True)

    def get_article(self, article_id: int) -> Article | None:
        return self._articles.get(article_id)

    def stats(self) -> dict[str, int]:
        return {
            "centers": len(self._centers),
            "products": len(self._products),
            "scans": len(self._scans),
            "articles": len(self._articles),
        }


def build_store(settings: Settings) -> MemoryStore:
    """Create a store from the configured seed file (or the packaged seed)."""
    seed = load_seed(settings.store.seed_path)
    return MemoryStore.from_seed(seed)
