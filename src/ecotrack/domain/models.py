"""
Domain models (Pydantic).

These types are the contract between the store, the query services and the HTTP/CLI
boundaries. JSON uses camelCase keys (`acceptedMaterials`, `ecoScoreValue`, ...) while
Python code uses the snake_case field names; both are accepted on input.

Stored records (`RecyclingCenter`, `Product`, `Scan`, `Article`) are frozen. Values that
only make sense for one request, such as a center's distance from the caller, live on
separate projection types (`RankedCenter`) so they never leak back into the store.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _Record(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class RecyclingCenterCreate(CamelModel):
    """Insert shape for a recycling center (the store assigns the id)."""

    name: str = Field(..., min_length=1)
    address: str = ""
    latitude: float
    longitude: float
    accepted_materials: tuple[str, ...] = ()
    operating_hours: str | None = None

    @field_validator("accepted_materials", mode="before")
    @classmethod
    def _null_materials(cls, value: object) -> object:
        return () if value is None else value


class RecyclingCenter(_Record):
    """A stored drop-off location. Never carries a distance."""

    id: int
    name: str = Field(..., min_length=1)
    address: str = ""
    latitude: float
    longitude: float
    accepted_materials: tuple[str, ...] = ()
    operating_hours: str | None = None

    def accepts(self, material: str) -> bool:
        """Case-insensitive exact match against one accepted-material entry."""
        wanted = material.casefold()
        return any(m.casefold() == wanted for m in self.accepted_materials)


class RankedCenter(RecyclingCenter):
    """A center annotated with its distance (miles) from one query point."""

    distance: float = Field(..., ge=0)

    @classmethod
    def from_center(cls, center: RecyclingCenter, distance: float) -> "RankedCenter":
        # The stored center is already validated; copy its fields without re-validating.
        return cls.model_construct(**center.model_dump(), distance=distance)


class ProductCreate(CamelModel):
    """Insert shape for a product."""

    barcode: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    carbon_footprint: float | None = None
    materials: list[str] = Field(default_factory=list)
    recyclability: str | None = None
    eco_score: str | None = None
    eco_score_value: int | None = Field(default=None, ge=0, le=100)
    image_url: str | None = None

    @field_validator("barcode")
    @classmethod
    def _strip_barcode(cls, barcode: str) -> str:
        barcode = barcode.strip()
        if not barcode:
            raise ValueError("barcode must not be blank")
        return barcode


class Product(_Record):
    id: int
    barcode: str
    name: str
    brand: str
    carbon_footprint: float | None = None
    materials: tuple[str, ...] = ()
    recyclability: str | None = None
    eco_score: str | None = None
    eco_score_value: int | None = None
    image_url: str | None = None
    created_at: datetime


class ScanCreate(CamelModel):
    user_id: int | None = None
    product_id: int


class Scan(_Record):
    id: int
    user_id: int | None = None
    product_id: int
    scanned_at: datetime


class Article(_Record):
    id: int
    title: str
    content: str
    category: str
    image_url: str | None = None
    read_time: int | None = Field(default=None, ge=0)
    created_at: datetime
