"""Shared pytest fixtures for the Polygon Labeler test suite."""

from __future__ import annotations

import io
import zipfile
from datetime import date

import pytest

# ---------------------------------------------------------------------------
# Clock fixtures
# ---------------------------------------------------------------------------

FIXED_DAY = date(2024, 1, 5)
FIXED_STAMP = "05012024"


@pytest.fixture()
def today() -> date:
    """A fixed label date: 5 January 2024 (stamp ``05012024``)."""
    return FIXED_DAY


# ---------------------------------------------------------------------------
# Sample KML documents
# ---------------------------------------------------------------------------

SINGLE_POLYGON_KML = """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <name>Branch 0042</name>
    <Placemark>
      <name>Entrega Eco</name>
      <Polygon>
        <outerBoundaryIs>
          <LinearRing>
            <coordinates>
              -46.60,-23.50,0 -46.59,-23.50,0
              -46.59,-23.49,0 -46.60,-23.50,0
            </coordinates>
          </LinearRing>
        </outerBoundaryIs>
      </Polygon>
    </Placemark>
  </Document>
</kml>
"""

MULTI_PLACEMARK_KML = """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Folder>
      <Placemark>
        <name>Zona Expressa Rápida</name>
        <MultiGeometry>
          <Polygon>
            <outerBoundaryIs><LinearRing>
              <coordinates>0,0 1,0 1,1 0,0</coordinates>
            </LinearRing></outerBoundaryIs>
            <innerBoundaryIs><LinearRing>
              <coordinates>0.2,0.2 0.3,0.2 0.3,0.3 0.2,0.2</coordinates>
            </LinearRing></innerBoundaryIs>
          </Polygon>
          <Polygon>
            <outerBoundaryIs><LinearRing>
              <coordinates>5,5 6,5 6,6 5,5</coordinates>
            </LinearRing></outerBoundaryIs>
          </Polygon>
        </MultiGeometry>
      </Placemark>
      <Placemark>
        <Polygon>
          <outerBoundaryIs><LinearRing>
            <coordinates>10,10 11,10 11,11 10,10</coordinates>
          </LinearRing></outerBoundaryIs>
        </Polygon>
      </Placemark>
    </Folder>
  </Document>
</kml>
"""

CORRUPT_KML = """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Placemark><name>Broken
"""


@pytest.fixture()
def single_polygon_kml() -> str:
    """One Placemark with one 4-point outer ring, named ``Entrega Eco``."""
    return SINGLE_POLYGON_KML


@pytest.fixture()
def multi_placemark_kml() -> str:
    """Two Placemarks: the first with two Polygons (one with a hole), the second unnamed."""
    return MULTI_PLACEMARK_KML


@pytest.fixture()
def corrupt_kml() -> str:
    """Truncated, not well-formed KML."""
    return CORRUPT_KML


# ---------------------------------------------------------------------------
# Archive builder
# ---------------------------------------------------------------------------


def build_zip(entries: dict[str, str | bytes]) -> bytes:
    """Build an in-memory ZIP archive from ``{name: content}``.

    Names ending in ``/`` become directory entries.
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries.items():
            if name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name), "")
            else:
                zf.writestr(name, content)
    return buf.getvalue()


@pytest.fixture()
def make_zip():
    """Return the ``build_zip`` helper."""
    return build_zip
