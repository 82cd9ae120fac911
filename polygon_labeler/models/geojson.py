"""Pydantic schema for the parts of a GeoJSON feature the labeller reads.

Uploaded GeoJSON is loosely typed: ``properties`` may be missing or null,
``geometry`` may be null, and names may live under ``name``, ``Name`` or
``id``.  These models pin down the optional fields and the fixed priority
in which name candidates are tried.  Unknown keys are preserved so that
foreign members never fail validation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from polygon_labeler.core.constants import placeholder_name

POLYGON_GEOMETRY_TYPE = "Polygon"

# Property keys tried, in order, for the classification source.
NAME_SOURCE_KEYS: tuple[str, ...] = ("name", "Name", "id")
# Property keys tried, in order, for the displayed original name.
DISPLAY_NAME_KEYS: tuple[str, ...] = ("name", "Name")


class GeoJSONGeometry(BaseModel):
    """Geometry member of a feature.

    Attributes:
        type: GeoJSON geometry type (``"Polygon"``, ``"Point"``, ...).
        coordinates: Raw coordinate array; for a Polygon, a list of rings.
    """

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    coordinates: list[Any] | None = None

    @property
    def is_polygon(self) -> bool:
        return self.type == POLYGON_GEOMETRY_TYPE

    def outer_ring(self) -> list[Any]:
        """Return the first ring of a Polygon (holes are ignored)."""
        if not self.coordinates:
            return []
        ring = self.coordinates[0]
        return ring if isinstance(ring, list) else []


class GeoJSONFeature(BaseModel):
    """A single entry of a ``FeatureCollection``'s ``features`` array."""

    model_config = ConfigDict(extra="allow")

    type: str | None = "Feature"
    geometry: GeoJSONGeometry | None = None
    properties: dict[str, Any] | None = None

    def name_source(self, index: int) -> str:
        """Return the string the polygon is classified by.

        Tries ``name``, then ``Name``, then ``id``; falls back to
        ``"Polygon {index+1}"``.
        """
        return _first_present(self.properties, NAME_SOURCE_KEYS) or placeholder_name(index)

    def display_name(self, index: int) -> str:
        """Return the original name shown next to the label.

        Tries ``name``, then ``Name``; falls back to ``"Polygon {index+1}"``.
        """
        return _first_present(self.properties, DISPLAY_NAME_KEYS) or placeholder_name(index)


def _first_present(properties: dict[str, Any] | None, keys: tuple[str, ...]) -> str:
    """Return the first non-null, non-empty property among *keys* as a string."""
    if not properties:
        return ""
    for key in keys:
        value = properties.get(key)
        if value is None or isinstance(value, bool):
            continue
        text = str(value)
        if text:
            return text
    return ""
