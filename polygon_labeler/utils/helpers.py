"""Shared helper functions used across the extractors and the pipeline.

Centralises the wall-clock dependency: every label carries a date stamp,
and extractors receive that date through an injected clock so that
output is reproducible in tests.  Also holds the strict number parsing
shared by the KML and GeoJSON coordinate readers.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

if TYPE_CHECKING:
    from collections.abc import Callable

    Clock = Callable[[], date]


def local_today(timezone_name: str = "") -> date:
    """Return today's calendar date.

    Args:
        timezone_name: IANA zone name.  Empty means the process's local
            time zone.

    Returns:
        The current date in that zone.
    """
    if not timezone_name:
        return datetime.now().date()  # noqa: DTZ005
    return datetime.now(ZoneInfo(timezone_name)).date()


def make_clock(timezone_name: str = "") -> Clock:
    """Build a zero-argument clock returning ``local_today(timezone_name)``."""

    def _clock() -> date:
        return local_today(timezone_name)

    return _clock


def fixed_clock(day: date) -> Clock:
    """Build a clock that always returns *day*."""

    def _clock() -> date:
        return day

    return _clock


# Plain decimal literal: no underscores, no nan/inf, ASCII digits only.
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_decimal(text: str) -> float | None:
    """Parse *text* as a finite decimal number, or return ``None``.

    Stricter than ``float()``: digit separators (``1_0``), ``nan``,
    ``inf`` and non-ASCII digits are rejected.

    >>> parse_decimal("-46.6")
    -46.6
    >>> parse_decimal("1_0") is None
    True
    """
    if not _DECIMAL_RE.fullmatch(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None
