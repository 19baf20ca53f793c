"""Geometry model → canonical WKT text.

Output follows the layout ``POLYGON ((x y, x y, ...))`` and
``MULTIPOLYGON (((...)), ((...)))``.  Ordinates that still carry their
source literal are written verbatim; computed ordinates are written as
integers when integral and with ``repr`` (shortest round-trip) otherwise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wkt_antimeridian.models.geometry import (
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wkt_antimeridian.models.geometry import Coordinate, Geometry

# Beyond this magnitude int() would print digits float cannot represent.
_MAX_EXACT_INTEGER = 2**53


def format_ordinate(value: float, text: str | None = None) -> str:
    """Format one ordinate, preferring its source literal."""
    if text is not None:
        return text
    if value.is_integer() and abs(value) < _MAX_EXACT_INTEGER:
        return str(int(value))
    return repr(value)


def _coordinate(coord: Coordinate) -> str:
    lon = format_ordinate(coord.lon, coord.lon_text)
    lat = format_ordinate(coord.lat, coord.lat_text)
    return f"{lon} {lat}"


def _sequence(coords: Iterable[Coordinate]) -> str:
    return "(" + ", ".join(_coordinate(c) for c in coords) + ")"


def _polygon_body(polygon: Polygon) -> str:
    if polygon.is_empty:
        return "EMPTY"
    return "(" + ", ".join(_sequence(ring) for ring in polygon.rings) + ")"


def _linestring_body(line: LineString) -> str:
    return "EMPTY" if line.is_empty else _sequence(line.coordinates)


def _point_body(point: Point) -> str:
    if point.coordinate is None:
        return "EMPTY"
    return f"({_coordinate(point.coordinate)})"


def to_wkt(geometry: Geometry) -> str:
    """Encode a geometry as canonical WKT text.

    Raises:
        TypeError: If *geometry* is not one of the model types.
    """
    if geometry.is_empty:
        return f"{geometry.geom_type.upper()} EMPTY"

    if isinstance(geometry, Point):
        return f"POINT {_point_body(geometry)}"
    if isinstance(geometry, LineString):
        return f"LINESTRING {_linestring_body(geometry)}"
    if isinstance(geometry, Polygon):
        return f"POLYGON {_polygon_body(geometry)}"
    if isinstance(geometry, MultiPoint):
        return "MULTIPOINT (" + ", ".join(_point_body(p) for p in geometry.points) + ")"
    if isinstance(geometry, MultiLineString):
        return "MULTILINESTRING (" + ", ".join(_linestring_body(ln) for ln in geometry.lines) + ")"
    if isinstance(geometry, MultiPolygon):
        return "MULTIPOLYGON (" + ", ".join(_polygon_body(p) for p in geometry.polygons) + ")"

    msg = f"Cannot encode {type(geometry).__name__} as WKT"
    raise TypeError(msg)
