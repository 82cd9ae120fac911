"""Shared constants for KML parsing."""

from __future__ import annotations

# Elements are matched by local name in any namespace (or none), so KML 2.2,
# 2.1 and namespace-less documents are read the same way.
#
# Outer ring chain:
# Placemark → Polygon → outerBoundaryIs → LinearRing → coordinates
PLACEMARK_TAG = "Placemark"
NAME_TAG = "name"
POLYGON_TAG = "Polygon"
OUTER_BOUNDARY_TAG = "outerBoundaryIs"
LINEAR_RING_TAG = "LinearRing"
COORDINATES_TAG = "coordinates"

OUTER_RING_PATH: tuple[str, ...] = (OUTER_BOUNDARY_TAG, LINEAR_RING_TAG, COORDINATES_TAG)
