from __future__ import annotations
from dataclasses import dataclass
from math import atan2, cos, radians, sin, sqrt

"""
Geospatial helpers.

Distances use a spherical earth (mean radius in miles) rather than the WGS-84
ellipsoid, which is accurate enough for ranking nearby drop-off points.
"""

EARTH_RADIUS_MILES = 3958.8


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float


def haversine_miles(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in miles between two points."""
    lat1 = radians(a.lat)
    lon1 = radians(a.lon)
    lat2 = radians(b.lat)
    lon2 = radians(b.lon)

    # Subtract after converting: differences of huge degree values would overflow to inf.
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h just outside [0, 1] near antipodes; sqrt(1 - h) would go NaN.
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_MILES * 2 * atan2(sqrt(h), sqrt(1 - h))
