"""Data models and schemas.

Defines the data structures used throughout the pipeline:
- PolygonRecord: A labelled outer ring, the unit of output
- EntryWarning: A skipped archive entry
- ProcessResult: Everything produced for one uploaded file
- GeoJSONFeature / GeoJSONGeometry: Input schema for GeoJSON features
"""

from polygon_labeler.models.geojson import GeoJSONFeature, GeoJSONGeometry
from polygon_labeler.models.polygon_record import EntryWarning, PolygonRecord, ProcessResult

__all__ = [
    "EntryWarning",
    "GeoJSONFeature",
    "GeoJSONGeometry",
    "PolygonRecord",
    "ProcessResult",
]
