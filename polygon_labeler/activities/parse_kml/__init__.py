"""KML parsing activity.

Parses one KML document and extracts each Placemark's polygons as
labelled outer rings.

The parsing pipeline is split into focused stages:
- **_tree**: lxml document parsing and a minimal element-tree view
- **_normalization**: ``<coordinates>`` text → ``(lon, lat)`` tuples
- **_lxml_parser**: the Placemark/Polygon walk that builds records

Supported KML structures:
- Single and multiple Placemarks, in any Folder/Document nesting
- Several Polygons per Placemark (e.g. inside MultiGeometry)
- KML 2.2, 2.1 or namespace-less documents

Not handled: inner boundaries (holes are ignored), geometry validity,
coordinate reference systems other than raw ``lon,lat``.

Graceful degradation: malformed coordinate tokens and Polygons missing
``outerBoundaryIs/LinearRing/coordinates`` are skipped; only a document
that is not XML at all raises ``FormatError``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from polygon_labeler.activities.parse_kml._lxml_parser import parse_with_lxml
from polygon_labeler.activities.parse_kml._normalization import parse_coordinates_text
from polygon_labeler.activities.parse_kml._tree import KmlNode, parse_document
from polygon_labeler.core.exceptions import FormatError

if TYPE_CHECKING:
    from datetime import date

    from polygon_labeler.models.polygon_record import PolygonRecord

logger = logging.getLogger("polygon_labeler.activities.parse_kml")

__all__ = [
    "FormatError",
    "KmlNode",
    "parse_coordinates_text",
    "parse_document",
    "parse_kml_text",
    "parse_with_lxml",
]


def parse_kml_text(
    kml_text: str | bytes,
    source_filename: str,
    *,
    today: date,
) -> list[PolygonRecord]:
    """Parse KML content and extract labelled polygons.

    Args:
        kml_text: KML document as decoded text (or raw bytes).
        source_filename: File (or archive entry) name; its first digit run
            becomes the branch number in every label.
        today: Date stamped into the labels.

    Returns:
        One ``PolygonRecord`` per readable Polygon, ids
        ``polygon-{placemark}-{polygon}``.  Empty list if the document
        contains no readable polygons.

    Raises:
        FormatError: If the content is empty or not well-formed XML.
    """
    logger.info("Parsing KML file: %s", source_filename)

    records = parse_with_lxml(kml_text, source_filename, today=today)

    logger.info(
        "Parsed %d polygon(s) from %s",
        len(records),
        source_filename,
    )
    return records
