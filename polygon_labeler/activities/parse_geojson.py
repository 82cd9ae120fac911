"""GeoJSON parsing activity.

Extracts the outer ring of every ``Polygon`` feature in a GeoJSON
``FeatureCollection`` and labels it.

Only the top-level shape is validated: the document must be a JSON object
with a ``type`` and a ``features`` array.  Individual features that are
not Polygons, have no geometry, or carry a malformed ring are skipped
without failing the file.  Holes (rings after the first) are ignored.
"""

from __future__ import annotations

import json
import logging
import math
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as SchemaValidationError

from polygon_labeler.core.constants import RECORD_ID_PREFIX
from polygon_labeler.core.exceptions import FormatError
from polygon_labeler.models.geojson import GeoJSONFeature
from polygon_labeler.models.polygon_record import PolygonRecord
from polygon_labeler.utils.helpers import parse_decimal
from polygon_labeler.utils.labels import build_label, extract_branch_number

if TYPE_CHECKING:
    from datetime import date

logger = logging.getLogger("polygon_labeler.activities.parse_geojson")

INVALID_GEOJSON_MESSAGE = (
    'File is not a valid GeoJSON document. Check that it contains the "type" '
    'and "features" properties.'
)


def parse_geojson(
    raw_text: str,
    source_filename: str,
    *,
    today: date,
) -> list[PolygonRecord]:
    """Parse GeoJSON text and extract labelled polygons.

    Args:
        raw_text: The uploaded document, decoded.
        source_filename: Upload name; its first digit run becomes the
            branch number in every label.
        today: Date stamped into the labels.

    Returns:
        One ``PolygonRecord`` per Polygon feature with a non-empty outer
        ring, ids ``polygon-{feature index}``.  May be empty.

    Raises:
        FormatError: If the text is not JSON, not an object, or lacks
            ``type`` / ``features``.
    """
    logger.info("Parsing GeoJSON file: %s", source_filename)

    features = _load_features(raw_text, source_filename)
    branch_number = extract_branch_number(source_filename)

    records: list[PolygonRecord] = []
    for idx, raw_feature in enumerate(features):
        record = _feature_to_record(raw_feature, idx, branch_number, source_filename, today)
        if record is not None:
            records.append(record)

    logger.info(
        "Parsed %d polygon(s) from %d feature(s) in %s",
        len(records),
        len(features),
        source_filename,
    )
    return records


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_features(raw_text: str, source_filename: str) -> list[Any]:
    """Decode the document and return its ``features`` array.

    Raises:
        FormatError: On any structural problem with the top-level object.
    """
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        msg = f"{INVALID_GEOJSON_MESSAGE} ({source_filename}: not valid JSON: {exc})"
        raise FormatError(msg) from exc

    if not isinstance(data, dict) or not data.get("type") or "features" not in data:
        raise FormatError(INVALID_GEOJSON_MESSAGE)

    features = data["features"]
    if not isinstance(features, list):
        msg = f'{INVALID_GEOJSON_MESSAGE} ("features" must be an array in {source_filename})'
        raise FormatError(msg)
    return features


def _feature_to_record(
    raw_feature: Any,
    index: int,
    branch_number: str,
    source_filename: str,
    today: date,
) -> PolygonRecord | None:
    """Convert one feature to a record, or ``None`` if it yields no polygon."""
    try:
        feature = GeoJSONFeature.model_validate(raw_feature)
    except SchemaValidationError as exc:
        logger.warning(
            "Skipping malformed feature %d in %s: %s",
            index,
            source_filename,
            exc.errors()[0]["msg"] if exc.errors() else exc,
        )
        return None

    geometry = feature.geometry
    if geometry is None or not geometry.is_polygon:
        return None

    try:
        coords = ring_to_tuples(geometry.outer_ring())
    except FormatError as exc:
        logger.warning(
            "Skipping feature %d in %s: %s",
            index,
            source_filename,
            exc,
        )
        return None

    if not coords:
        return None

    return PolygonRecord(
        id=f"{RECORD_ID_PREFIX}-{index}",
        formatted_name=build_label(feature.name_source(index), branch_number, today),
        coordinates=coords,
        original_name=feature.display_name(index),
    )


def ring_to_tuples(raw_ring: list[Any]) -> list[tuple[float, float]]:
    """Convert a GeoJSON ring (list of positions) to ``(lon, lat)`` tuples.

    Drops altitude (third element) if present.  Order and duplicates are
    kept as given.

    Raises:
        FormatError: If any position is malformed.
    """
    coords: list[tuple[float, float]] = []
    for idx, c in enumerate(raw_ring):
        if not isinstance(c, list | tuple):
            msg = f"Malformed position at index {idx}: expected an array, got {type(c).__name__}"
            raise FormatError(msg)
        if len(c) < 2:
            msg = f"Malformed position at index {idx}: expected at least 2 elements, got {len(c)}"
            raise FormatError(msg)
        if isinstance(c[0], bool) or isinstance(c[1], bool):
            msg = f"Malformed position at index {idx}: booleans are not coordinates"
            raise FormatError(msg)
        lon = _position_value(c[0])
        lat = _position_value(c[1])
        if lon is None or lat is None:
            msg = (
                f"Malformed position at index {idx}: cannot convert to float "
                f"(lon={c[0]!r}, lat={c[1]!r})"
            )
            raise FormatError(msg)
        if not (math.isfinite(lon) and math.isfinite(lat)):
            msg = f"Malformed position at index {idx}: non-finite value (lon={lon}, lat={lat})"
            raise FormatError(msg)
        coords.append((lon, lat))
    return coords


def _position_value(value: Any) -> float | None:
    """Return a JSON number, or a numeric string read strictly, as ``float``."""
    if isinstance(value, str):
        return parse_decimal(value)
    if not isinstance(value, int | float):
        return None
    try:
        return float(value)
    except OverflowError:
        return None
