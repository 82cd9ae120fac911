"""Text renderings of a coordinate ring for display and copy-paste.

The copy-ready form is a JSON-like array of ``[lon, lat]`` pairs with a
fixed number of decimals; the preview shows only the first few vertices.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFAULT_COPY_PRECISION = 6
DEFAULT_PREVIEW_PRECISION = 4
DEFAULT_PREVIEW_LIMIT = 3


def _format_pair(coord: Sequence[float], precision: int) -> str:
    return f"[{coord[0]:.{precision}f}, {coord[1]:.{precision}f}]"


def format_coordinates_for_copy(
    coords: Sequence[Sequence[float]],
    precision: int = DEFAULT_COPY_PRECISION,
) -> str:
    """Render the full ring as ``[[lon, lat], [lon, lat], ...]``.

    >>> format_coordinates_for_copy([(1, 2), (3.5, 4)], precision=1)
    '[[1.0, 2.0], [3.5, 4.0]]'
    """
    return "[" + ", ".join(_format_pair(c, precision) for c in coords) + "]"


def preview_coordinates(
    coords: Sequence[Sequence[float]],
    limit: int = DEFAULT_PREVIEW_LIMIT,
    precision: int = DEFAULT_PREVIEW_PRECISION,
) -> str:
    """Render the first *limit* vertices, noting how many were left out."""
    shown = ", ".join(_format_pair(c, precision) for c in coords[:limit])
    hidden = len(coords) - limit
    if hidden > 0:
        return f"{shown}... (+{hidden} points)"
    return shown


def summarise_count(count: int) -> str:
    """Return e.g. ``"1 polygon processed"`` or ``"3 polygons processed"``."""
    plural = "" if count == 1 else "s"
    return f"{count} polygon{plural} processed"
