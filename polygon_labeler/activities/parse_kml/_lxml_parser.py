"""lxml-based KML extractor.

Walks ``Placemark → Polygon → outerBoundaryIs → LinearRing → coordinates``
and turns every readable outer ring into a labelled ``PolygonRecord``.
Polygons with a missing link in that chain, blank coordinates, or no
parsable vertex are skipped; only an unparsable document is an error.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from polygon_labeler.activities.parse_kml._constants import (
    NAME_TAG,
    OUTER_RING_PATH,
    PLACEMARK_TAG,
    POLYGON_TAG,
)
from polygon_labeler.activities.parse_kml._normalization import parse_coordinates_text
from polygon_labeler.activities.parse_kml._tree import parse_document
from polygon_labeler.core.constants import RECORD_ID_PREFIX, placeholder_name
from polygon_labeler.models.polygon_record import PolygonRecord
from polygon_labeler.utils.labels import build_label, extract_branch_number

if TYPE_CHECKING:
    from datetime import date

    from polygon_labeler.activities.parse_kml._tree import KmlNode

logger = logging.getLogger("polygon_labeler.activities.parse_kml")


def parse_with_lxml(
    kml_text: str | bytes,
    source_filename: str,
    *,
    today: date,
) -> list[PolygonRecord]:
    """Extract labelled outer rings from KML content.

    Args:
        kml_text: Decoded KML text (or raw bytes).
        source_filename: Name the branch number is derived from.
        today: Date stamped into every label.

    Raises:
        FormatError: If the content cannot be parsed as XML.
    """
    root = parse_document(kml_text, source_filename)
    branch_number = extract_branch_number(source_filename)

    records: list[PolygonRecord] = []
    skipped = 0

    for idx, placemark in enumerate(root.iter(PLACEMARK_TAG)):
        name = _placemark_name(placemark, idx)
        label = build_label(name, branch_number, today)

        for poly_idx, polygon in enumerate(placemark.descendants(POLYGON_TAG)):
            coords = _outer_ring(polygon)
            if not coords:
                skipped += 1
                continue

            records.append(
                PolygonRecord(
                    id=f"{RECORD_ID_PREFIX}-{idx}-{poly_idx}",
                    formatted_name=label,
                    coordinates=coords,
                    original_name=name,
                )
            )

    if skipped:
        logger.debug(
            "Skipped %d polygon(s) without a readable outer ring in %s",
            skipped,
            source_filename,
        )

    return records


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _placemark_name(placemark: KmlNode, index: int) -> str:
    """Return the trimmed text of the first ``<name>`` descendant, or a placeholder."""
    name_node = placemark.first_descendant(NAME_TAG)
    name = name_node.text().strip() if name_node is not None else ""
    return name or placeholder_name(index)


def _outer_ring(polygon: KmlNode) -> list[tuple[float, float]]:
    """Return the parsed outer ring of a ``<Polygon>``, or ``[]`` if unreadable."""
    coordinates = polygon.find_path(OUTER_RING_PATH)
    if coordinates is None:
        return []
    text = coordinates.text().strip()
    if not text:
        return []
    return parse_coordinates_text(text)
