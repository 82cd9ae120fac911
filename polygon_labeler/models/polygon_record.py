"""Data model for a labelled polygon.

A PolygonRecord is a single outer ring extracted from a GeoJSON feature
or a KML Placemark, together with its normalised label.  It is the output
of the ``parse_geojson`` / ``parse_kml`` activities and the unit handed to
the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class PolygonRecord:
    """A single labelled polygon.

    Attributes:
        id: Identifier unique within one processed file
            (``polygon-{i}`` for GeoJSON, ``polygon-{i}-{j}`` for KML).
        formatted_name: Canonical label, e.g. ``"Pol_Eco_0042_05012024"``.
        coordinates: Outer ring as list of ``(lon, lat)`` tuples, in the
            source's traversal order.
        original_name: Source-provided name, or ``"Polygon {i+1}"``.
    """

    id: str
    formatted_name: str
    coordinates: list[tuple[float, float]] = field(default_factory=list)
    original_name: str = ""

    def to_dict(self) -> dict[str, object]:
        """Serialise to a JSON-ready dict."""
        return {
            "id": self.id,
            "formatted_name": self.formatted_name,
            "coordinates": [list(c) for c in self.coordinates],
            "original_name": self.original_name,
        }


@dataclass(frozen=True, slots=True)
class EntryWarning:
    """A non-fatal failure of one archive entry.

    Attributes:
        entry_name: Name of the entry inside the archive.
        message: Why the entry was skipped.
    """

    entry_name: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"entry_name": self.entry_name, "message": self.message}


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Outcome of processing one uploaded file.

    Attributes:
        file_name: Name of the uploaded file.
        records: Polygons in extraction order.
        warnings: Archive entries that were skipped (always empty for GeoJSON).
    """

    file_name: str
    records: list[PolygonRecord] = field(default_factory=list)
    warnings: list[EntryWarning] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.records)
