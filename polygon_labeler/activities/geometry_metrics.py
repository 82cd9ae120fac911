"""Geometry metrics for a single coordinate ring.

Computes the vertex centroid of a ring and its mean radius: the average
great-circle distance from each vertex to that centroid.  Not part of the
labelling pipeline; the HTTP entry point exposes it on request.

The centroid is the arithmetic mean of longitudes and latitudes, not an
area-weighted centroid, and is meaningless for rings that cross the
antimeridian.  Distances use the haversine formula on a sphere of radius
6,371,000 m.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from polygon_labeler.core.exceptions import InvalidInputError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("polygon_labeler.activities.geometry_metrics")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

EARTH_RADIUS_M = 6_371_000.0

METRES_PER_KILOMETRE = 1_000.0


def compute_centroid(coords: Sequence[Sequence[float]]) -> tuple[float, float]:
    """Return the arithmetic mean ``(lon, lat)`` of the ring's vertices.

    Raises:
        InvalidInputError: If *coords* is empty.
    """
    _validate_coords(coords, "centroid computation")
    n = len(coords)
    lon = sum(c[0] for c in coords) / n
    lat = sum(c[1] for c in coords) / n
    return (lon, lat)


def haversine_m(a: Sequence[float], b: Sequence[float]) -> float:
    """Great-circle distance in metres between two ``(lon, lat)`` points."""
    lon1, lat1 = a[0], a[1]
    lon2, lat2 = b[0], b[1]

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    h = min(1.0, h)
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def compute_mean_radius_km(coords: Sequence[Sequence[float]]) -> float:
    """Mean haversine distance from each vertex to the centroid, in kilometres.

    Raises:
        InvalidInputError: If *coords* is empty.
    """
    centroid = compute_centroid(coords)
    total_m = sum(haversine_m(c, centroid) for c in coords)
    radius_km = total_m / len(coords) / METRES_PER_KILOMETRE

    logger.debug(
        "Mean radius computed | vertices=%d | centroid=(%.6f, %.6f) | radius=%.3f km",
        len(coords),
        *centroid,
        radius_km,
    )
    return radius_km


def _validate_coords(coords: Sequence[Sequence[float]], context: str) -> None:
    """Raise ``InvalidInputError`` if *coords* is empty."""
    if not coords:
        msg = f"Empty coordinates: no coordinates provided for {context}"
        raise InvalidInputError(msg)
