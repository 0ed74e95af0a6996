"""
API routes.

Endpoints:
- GET  `/api/recycling`: nearest recycling centers (`lat`, `lng`, optional `material`, `limit`).
- GET  `/api/recycling/materials`: distinct accepted materials (for the filter control).
- GET  `/api/recycling/{id}`: one center.
- GET  `/api/products`, `/api/products/search`, `/api/products/barcode/{barcode}`, `/api/products/{id}`
- POST `/api/products`
- GET  `/api/scans/recent`, POST `/api/scans`
- GET  `/api/articles`, `/api/articles/{id}`
- GET  `/api/health`

Errors use `{"detail": {"code": ..., "message": ...}}`; unexpected failures are turned
into 500 `INTERNAL_ERROR` by the handler registered in `ecotrack.api.app`.
"""

from __future__ import annotations

import logging
import math
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException

from ecotrack.config.settings import Settings, get_settings
from ecotrack.domain.models import (
    Article,
    Product,
    ProductCreate,
    RankedCenter,
    RecyclingCenter,
    Scan,
    ScanCreate,
)
from ecotrack.recycling.query import find_nearby_centers, get_center, list_distinct_materials
from ecotrack.store.memory import DuplicateBarcodeError, MemoryStore, UnknownProductError, build_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@lru_cache
def get_store() -> MemoryStore:
    """Process-wide store, built from the seed on first use."""
    return build_store(get_settings())


def _error(status_code: int, code: str, message: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"code": code, "message": message})


def _parse_coordinate(name: str, raw: str | None) -> float:
    if raw is None or not raw.strip():
        raise _error(400, "VALIDATION_ERROR", f"'{name}' is required")
    try:
        value = float(raw)
    except ValueError:
        raise _error(400, "VALIDATION_ERROR", f"'{name}' must be a number, got '{raw}'") from None
    if not math.isfinite(value):
        raise _error(400, "VALIDATION_ERROR", f"'{name}' must be a finite number")
    return value


def _effective_limit(limit: int | None, max_limit: int | None) -> int | None:
    if max_limit is None:
        return limit
    if limit is None or limit <= 0 or limit > max_limit:
        return max_limit
    return limit


@router.get("/health")
def get_health(
    store: MemoryStore = Depends(get_store), settings: Settings = Depends(get_settings)
) -> dict:
    return {"status": "ok", "app": settings.app.name, **store.stats()}


# Recycling centers


@router.get("/recycling", response_model=list[RankedCenter])
def get_nearby_centers(
    lat: str | None = None,
    lng: str | None = None,
    material: str | None = None,
    limit: int | None = None,
    store: MemoryStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> list[RankedCenter]:
    """Rank centers by distance from the caller (miles)."""
    user_lat = _parse_coordinate("lat", lat)
    user_lng = _parse_coordinate("lng", lng)
    return find_nearby_centers(
        store,
        user_lat,
        user_lng,
        material=material.strip() if material else None,
        limit=_effective_limit(limit, settings.recycling.max_limit),
    )


@router.get("/recycling/materials", response_model=list[str])
def get_materials(store: MemoryStore = Depends(get_store)) -> list[str]:
    return list_distinct_materials(store)


@router.get("/recycling/{center_id}", response_model=RecyclingCenter)
def get_recycling_center(center_id: int, store: MemoryStore = Depends(get_store)) -> RecyclingCenter:
    center = get_center(store, center_id)
    if center is None:
        raise _error(404, "NOT_FOUND", "Recycling center not found")
    return center


# Products


@router.get("/products", response_model=list[Product])
def get_products(store: MemoryStore = Depends(get_store)) -> list[Product]:
    return store.list_products()


@router.get("/products/search", response_model=list[Product])
def search_products(q: str | None = None, store: MemoryStore = Depends(get_store)) -> list[Product]:
    if not q or not q.strip():
        raise _error(400, "VALIDATION_ERROR", "Search query required")
    return store.search_products(q.strip())


@router.get("/products/barcode/{barcode}", response_model=Product)
def get_product_by_barcode(barcode: str, store: MemoryStore = Depends(get_store)) -> Product:
    product = store.get_product_by_barcode(barcode)
    if product is None:
        raise _error(404, "NOT_FOUND", "Product not found")
    return product


@router.get("/products/{product_id}", response_model=Product)
def get_product(product_id: int, store: MemoryStore = Depends(get_store)) -> Product:
    product = store.get_product(product_id)
    if product is None:
        raise _error(404, "NOT_FOUND", "Product not found")
    return product


@router.post("/products", response_model=Product, status_code=201)
def post_product(payload: ProductCreate, store: MemoryStore = Depends(get_store)) -> Product:
    try:
        product = store.create_product(payload)
    except DuplicateBarcodeError as e:
        raise _error(409, "CONFLICT", str(e)) from e
    logger.info("Created product id=%s barcode=%s", product.id, product.barcode)
    return product


# Scans


@router.get("/scans/recent", response_model=list[Product])
def get_recent_scans(
    limit: int | None = None,
    store: MemoryStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> list[Product]:
    """Most recently scanned products (each product once)."""
    return store.recent_scanned_products(limit if limit is not None else settings.scans.recent_limit_default)


@router.post("/scans", response_model=Scan, status_code=201)
def post_scan(payload: ScanCreate, store: MemoryStore = Depends(get_store)) -> Scan:
    try:
        return store.create_scan(payload)
    except UnknownProductError as e:
        raise _error(404, "NOT_FOUND", str(e)) from e


# Articles


@router.get("/articles", response_model=list[Article])
def get_articles(category: str | None = None, store: MemoryStore = Depends(get_store)) -> list[Article]:
    return store.list_articles(category)


@router.get("/articles/{article_id}", response_model=Article)
def get_article(article_id: int, store: MemoryStore = Depends(get_store)) -> Article:
    article = store.get_article(article_id)
    if article is None:
        raise _error(404, "NOT_FOUND", "Article not found")
    return article
