"""Shared pipeline constants, single source of truth.

Centralises the label format pieces, recognised file extensions and
placeholder strings used across the extractors, the file pipeline and
the HTTP entry point.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Label format: Pol_{type_code}_{branch}_{DDMMYYYY}
# ---------------------------------------------------------------------------

LABEL_PREFIX: str = "Pol"
"""Leading segment of every formatted polygon label."""

LABEL_SEPARATOR: str = "_"
"""Separator between label segments and between joined type tags."""

DEFAULT_BRANCH_NUMBER: str = "0000"
"""Branch number used when the source filename contains no digits."""

# ---------------------------------------------------------------------------
# Record identifiers and placeholder names
# ---------------------------------------------------------------------------

RECORD_ID_PREFIX: str = "polygon"
"""Prefix of record ids: ``polygon-{i}`` / ``polygon-{i}-{j}``."""

PLACEHOLDER_NAME_PREFIX: str = "Polygon"
"""Fallback display name prefix: ``Polygon {i+1}``."""

# ---------------------------------------------------------------------------
# Recognised extensions (matched case-insensitively)
# ---------------------------------------------------------------------------

GEOJSON_EXTENSION: str = ".json"
ARCHIVE_EXTENSION: str = ".zip"
KML_EXTENSION: str = ".kml"

SUPPORTED_UPLOAD_EXTENSIONS: tuple[str, ...] = (GEOJSON_EXTENSION, ARCHIVE_EXTENSION)
"""Extensions accepted as top-level uploads."""


def placeholder_name(index: int) -> str:
    """Return the 1-based fallback name for the zero-based *index*."""
    return f"{PLACEHOLDER_NAME_PREFIX} {index + 1}"
