"""Shared geometry algebra backed by shapely.

The splitter needs a handful of planar operations (ring orientation,
containment, area) and the tests need boundary extraction and
topological equality.  They are collected here so the rest of the
package depends on this module rather than on shapely directly.

Rings that cross the antimeridian are measured in *unwrapped* longitude
space: each vertex is shifted by a multiple of 360 so that no edge jumps
more than 180 degrees.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import shapely
from shapely.geometry import LinearRing, LineString, MultiLineString, MultiPoint, Point
from shapely.geometry import MultiPolygon as ShapelyMultiPolygon
from shapely.geometry import Polygon as ShapelyPolygon

from wkt_antimeridian.core.constants import HALF_TURN, LONGITUDE_PERIOD
from wkt_antimeridian.models import geometry as model

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

    from wkt_antimeridian.models.geometry import Geometry, Ring


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def _xy(coords: tuple[model.Coordinate, ...]) -> list[tuple[float, float]]:
    return [c.xy for c in coords]


def _polygon(polygon: model.Polygon) -> ShapelyPolygon:
    if polygon.is_empty:
        return ShapelyPolygon()
    return ShapelyPolygon(_xy(polygon.exterior), [_xy(hole) for hole in polygon.holes])


def to_shapely(geometry: Geometry) -> BaseGeometry:
    """Convert a model geometry to its shapely equivalent (no unwrapping).

    Raises:
        TypeError: If *geometry* is not one of the model types.
    """
    if isinstance(geometry, model.Point):
        return Point() if geometry.coordinate is None else Point(geometry.coordinate.xy)
    if isinstance(geometry, model.LineString):
        return LineString(_xy(geometry.coordinates))
    if isinstance(geometry, model.Polygon):
        return _polygon(geometry)
    if isinstance(geometry, model.MultiPoint):
        return MultiPoint([p.coordinate.xy for p in geometry.points if p.coordinate is not None])
    if isinstance(geometry, model.MultiLineString):
        lines = [_xy(line.coordinates) for line in geometry.lines if not line.is_empty]
        return MultiLineString(lines)
    if isinstance(geometry, model.MultiPolygon):
        return ShapelyMultiPolygon([_polygon(p) for p in geometry.polygons if not p.is_empty])

    msg = f"Cannot convert {type(geometry).__name__} to shapely"
    raise TypeError(msg)


# ---------------------------------------------------------------------------
# Capability operations
# ---------------------------------------------------------------------------


def area(geometry: Geometry) -> float:
    """Planar area in square degrees (zero for points and lines)."""
    return float(to_shapely(geometry).area)


def boundary(geometry: Geometry) -> BaseGeometry:
    """Topological boundary (rings become line strings)."""
    return to_shapely(geometry).boundary


def topologically_equal(a: Geometry, b: Geometry, *, grid_size: float = 0.0) -> bool:
    """Whether two geometries cover the same point set, regardless of
    vertex order, ring start point or polygon order.

    A non-zero *grid_size* snaps both geometries to that precision first,
    absorbing last-digit differences in interpolated coordinates.
    """
    left, right = to_shapely(a), to_shapely(b)
    if grid_size > 0:
        left = shapely.set_precision(left, grid_size)
        right = shapely.set_precision(right, grid_size)
    return bool(left.equals(right))


# ---------------------------------------------------------------------------
# Unwrapped ring measurements
# ---------------------------------------------------------------------------


def unwrap_ring(ring: Ring) -> list[tuple[float, float]]:
    """Return ring vertices with longitudes made continuous.

    The first vertex keeps its longitude; each following vertex is moved
    by a multiple of 360 so its step from the previous vertex is at most
    180 degrees.
    """
    if not ring:
        return []
    unwrapped = [ring[0].xy]
    for prev, cur in zip(ring, ring[1:], strict=False):
        delta = cur.lon - prev.lon
        if delta > HALF_TURN:
            delta -= LONGITUDE_PERIOD
        elif delta < -HALF_TURN:
            delta += LONGITUDE_PERIOD
        unwrapped.append((unwrapped[-1][0] + delta, cur.lat))
    return unwrapped


def is_ccw(ring: Ring) -> bool:
    """Whether the ring winds counter-clockwise in unwrapped space."""
    return bool(LinearRing(unwrap_ring(ring)).is_ccw)


def ring_area(ring: Ring) -> float:
    """Unsigned planar area enclosed by the unwrapped ring."""
    return float(ShapelyPolygon(unwrap_ring(ring)).area)


def unwrapped_area(geometry: Geometry) -> float:
    """Planar area of a polygonal geometry measured ring by ring.

    Each ring is unwrapped on its own, so the result does not depend on
    which side of the antimeridian a ring happens to start on.
    """
    if isinstance(geometry, model.Polygon):
        if geometry.is_empty:
            return 0.0
        return ring_area(geometry.exterior) - sum(ring_area(h) for h in geometry.holes)
    if isinstance(geometry, model.MultiPolygon):
        return sum(unwrapped_area(p) for p in geometry.polygons)
    return 0.0


def ring_contains(shell: Ring, ring: Ring) -> bool:
    """Whether *ring* lies inside *shell* (both in plain lon/lat space)."""
    inner = ShapelyPolygon(_xy(ring))
    return bool(ShapelyPolygon(_xy(shell)).contains(inner.representative_point()))
