"""KML coordinate text parsing.

A ``<coordinates>`` element holds whitespace-separated tuples of
``lon,lat[,alt]``.  Tokens that do not yield two finite numbers are
dropped without error, so a partially corrupt ring still produces the
vertices that can be read.
"""

from __future__ import annotations

from polygon_labeler.utils.helpers import parse_decimal

MIN_TUPLE_PARTS = 2


def parse_coordinates_text(text: str) -> list[tuple[float, float]]:
    """Parse KML coordinate text (``lon,lat,alt lon,lat,alt ...``) to (lon, lat) tuples.

    >>> parse_coordinates_text("1.0,2.0,0 3.0,4.0,0")
    [(1.0, 2.0), (3.0, 4.0)]
    >>> parse_coordinates_text("bad,data 1,2")
    [(1.0, 2.0)]
    """
    coords: list[tuple[float, float]] = []
    for token in text.split():
        parts = token.split(",")
        if len(parts) < MIN_TUPLE_PARTS:
            continue
        lon = parse_decimal(parts[0])
        lat = parse_decimal(parts[1])
        if lon is None or lat is None:
            continue
        coords.append((lon, lat))
    return coords
