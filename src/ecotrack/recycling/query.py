"""
Recycling-center proximity queries.

`find_nearby_centers` is the one ranking pipeline in the app:

    filter by material -> annotate with distance -> sort ascending -> truncate

It only reads the store and returns freshly built `RankedCenter` objects, so concurrent
requests never see each other's distances.
"""

from __future__ import annotations

import logging
from typing import Protocol

from ecotrack.core.geo import GeoPoint, haversine_miles
from ecotrack.domain.models import RankedCenter, RecyclingCenter

logger = logging.getLogger(__name__)


class CenterSource(Protocol):
    def list_all_centers(self) -> list[RecyclingCenter]: ...

    def get_center(self, center_id: int) -> RecyclingCenter | None: ...


def find_nearby_centers(
    store: CenterSource,
    lat: float,
    lng: float,
    material: str | None = None,
    limit: int | None = None,
) -> list[RankedCenter]:
    """Return centers nearest to (lat, lng), optionally only those accepting `material`.

    - `material` matches one accepted-material entry exactly, ignoring case.
    - Ties in distance keep store order (the sort is stable).
    - `limit` <= 0 (or None) means no cap.

    Inputs are assumed to be finite floats; callers validate user input first.
    """
    centers = store.list_all_centers()
    if material:
        centers = [c for c in centers if c.accepts(material)]

    origin = GeoPoint(lat=float(lat), lon=float(lng))
    ranked = [
        RankedCenter.from_center(c, haversine_miles(origin, GeoPoint(lat=c.latitude, lon=c.longitude)))
        for c in centers
    ]
    ranked.sort(key=lambda r: r.distance)

    if limit is not None and limit > 0:
        ranked = ranked[:limit]

    logger.debug(
        "Nearby centers lat=%s lng=%s material=%r limit=%s -> %d result(s)",
        lat,
        lng,
        material,
        limit,
        len(ranked),
    )
    return ranked


def list_distinct_materials(store: CenterSource) -> list[str]:
    """Every accepted material across all centers, first-seen order, exact-string dedupe."""
    seen: dict[str, None] = {}
    for center in store.list_all_centers():
        for m in center.accepted_materials:
            seen.setdefault(m, None)
    return list(seen)


def get_center(store: CenterSource, center_id: int) -> RecyclingCenter | None:
    return store.get_center(center_id)
