"""Deterministic polygon label generation.

Every extracted polygon gets a label of the form::

    Pol_{type_code}_{branch}_{DDMMYYYY}

- ``type_code``: keyword tags found in the polygon's name, joined with
  ``_`` in the fixed order ``Eco``, ``Exp``, ``Rap``.  Empty when nothing
  matches, which yields a double underscore (``Pol__1234_01012024``).
- ``branch``: the first run of digits in the source filename, verbatim,
  or ``"0000"``.
- ``DDMMYYYY``: the calendar date supplied by the caller's clock.

Same inputs always produce the same label; the only time dependency is
the injected ``today`` argument.

Keywords are matched as substrings anywhere in the lower-cased name, so
``"Exponential"`` is tagged ``Exp``.  Whole-word matching is not applied.
"""

from __future__ import annotations

import re
import unicodedata
from typing import TYPE_CHECKING

from polygon_labeler.core.constants import (
    DEFAULT_BRANCH_NUMBER,
    LABEL_PREFIX,
    LABEL_SEPARATOR,
)

if TYPE_CHECKING:
    from datetime import date

# Known upload / entry extensions stripped before the digit search.
_EXTENSION_RE = re.compile(r"\.(json|zip|kml)$", re.IGNORECASE)
# ASCII digits only; ``\d`` would also match other Unicode decimals.
_DIGITS_RE = re.compile(r"[0-9]+")

# (tag, substrings) in priority order; order defines the type code.
TYPE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Eco", ("eco",)),
    ("Exp", ("exp",)),
    ("Rap", ("rap", "ráp")),
)


def extract_branch_number(filename: str) -> str:
    """Derive the branch number from a source filename.

    Strips one trailing ``.json``, ``.zip`` or ``.kml`` (any case) and
    returns the first run of ASCII digits, leading zeros included.

    Args:
        filename: Upload or archive-entry name (may include directories).

    Returns:
        A string of ASCII digits, or ``"0000"`` if there are none.
    """
    stem = _EXTENSION_RE.sub("", filename)
    match = _DIGITS_RE.search(stem)
    return match.group(0) if match else DEFAULT_BRANCH_NUMBER


def classify_polygon(name: str) -> str:
    """Return the type code for a polygon name.

    >>> classify_polygon("Polígono Eco Expresso")
    'Eco_Exp'
    >>> classify_polygon("sem padrão")
    ''
    """
    lowered = unicodedata.normalize("NFC", name).lower()
    tags = [
        tag
        for tag, needles in TYPE_KEYWORDS
        if any(needle in lowered for needle in needles)
    ]
    return LABEL_SEPARATOR.join(tags)


def format_polygon_name(
    original_name: str,
    branch_number: str,
    type_code: str,
    today: date,
) -> str:
    """Build the canonical label ``Pol_{type_code}_{branch_number}_{DDMMYYYY}``.

    ``original_name`` is not part of the label.
    """
    date_stamp = f"{today.day:02d}{today.month:02d}{today.year:04d}"
    return LABEL_SEPARATOR.join((LABEL_PREFIX, type_code, branch_number, date_stamp))


def build_label(name_source: str, branch_number: str, today: date) -> str:
    """Classify *name_source* and format its label in one step."""
    return format_polygon_name(name_source, branch_number, classify_polygon(name_source), today)
