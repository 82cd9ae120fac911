"""Extraction activities.

Each activity performs a single unit of work within the file pipeline:
- parse_geojson: Extract labelled polygons from a GeoJSON FeatureCollection
- parse_kml: Extract labelled polygons from one KML document
- extract_archive: Route the KML entries of a ZIP archive to parse_kml
- geometry_metrics: Centroid and mean radius of a ring (optional utility)
"""
