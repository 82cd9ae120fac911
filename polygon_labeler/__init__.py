"""Polygon Labeler.

Turns uploaded GeoJSON feature collections and ZIP archives of KML files
into a list of polygons, each with a normalised ``Pol_...`` label and its
outer coordinate ring, ready to be copied into downstream systems.
"""

__version__ = "0.1.0"
