"""Data models and schemas.

Defines the data structures used throughout the package:
- Coordinate, Polygon, MultiPolygon (and the point/line types): the
  internal geometry representation decoded from WKT
- SplitReport: pydantic summary of a normalise-and-split run
- Payload TypedDicts: HTTP request/response contracts
"""

from wkt_antimeridian.models.geometry import (
    Coordinate,
    Geometry,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Ring,
)

__all__ = [
    "Coordinate",
    "Geometry",
    "LineString",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "Point",
    "Polygon",
    "Ring",
]
