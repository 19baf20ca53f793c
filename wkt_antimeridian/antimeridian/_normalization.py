"""Longitude normalisation into ``[-180, 180]``.

Responsibilities:
- Reduce a single longitude modulo 360 (``normalize_longitude``)
- Reduce a parsed coordinate exactly, on its decimal literal
- Map the reduction over every coordinate of a geometry

Longitudes already inside ``[-180, 180]`` are left alone, so ``180``
stays ``180``.  Values outside the range are reduced with
``((lon + 180) mod 360 + 360) mod 360 - 180``.
"""

from __future__ import annotations

import decimal
import math
from dataclasses import replace
from decimal import Decimal
from typing import TYPE_CHECKING

from wkt_antimeridian.core.constants import LONGITUDE_PERIOD, MAX_LONGITUDE, MIN_LONGITUDE
from wkt_antimeridian.core.exceptions import InvalidGeometryError
from wkt_antimeridian.models.geometry import (
    Coordinate,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from wkt_antimeridian.models.geometry import Geometry, Ring

_HALF = Decimal(LONGITUDE_PERIOD) / 2
_PERIOD = Decimal(LONGITUDE_PERIOD)

# Headroom over the literal length so the reduction never rounds.
_EXTRA_PRECISION = 8


def normalize_longitude(lon: float) -> float:
    """Map any finite longitude to its equivalent in ``[-180, 180]``."""
    if MIN_LONGITUDE <= lon <= MAX_LONGITUDE:
        return lon
    return ((lon + 180.0) % LONGITUDE_PERIOD + LONGITUDE_PERIOD) % LONGITUDE_PERIOD - 180.0


def _reduce_literal(text: str) -> str:
    """Reduce a longitude literal exactly, returning plain decimal text."""
    value = Decimal(text)
    with decimal.localcontext() as ctx:
        # Exponent literals such as ``1e40`` carry more integer digits than characters.
        ctx.prec = max(ctx.prec, max(value.adjusted(), 0) + len(text) + _EXTRA_PRECISION)
        # Decimal's remainder takes the sign of the dividend, hence the second pass.
        reduced = ((value + _HALF) % _PERIOD + _PERIOD) % _PERIOD - _HALF
    return format(reduced, "f")


def normalize_coordinate(coord: Coordinate) -> Coordinate:
    """Return *coord* with its longitude in ``[-180, 180]``.

    The same object is returned when no change is needed, which lets
    callers detect untouched geometries by identity.

    Raises:
        InvalidGeometryError: If the longitude is not finite.
    """
    if MIN_LONGITUDE <= coord.lon <= MAX_LONGITUDE:
        return coord
    if not math.isfinite(coord.lon):
        msg = f"Longitude {coord.lon} is not a finite number"
        raise InvalidGeometryError(msg, stage="normalize")

    if coord.lon_text is not None:
        text = _reduce_literal(coord.lon_text)
        return replace(coord, lon=float(text), lon_text=text)
    return replace(coord, lon=normalize_longitude(coord.lon))


def _map_sequence(
    coords: tuple[Coordinate, ...], fn: Callable[[Coordinate], Coordinate]
) -> tuple[Coordinate, ...]:
    mapped = tuple(fn(c) for c in coords)
    if all(new is old for new, old in zip(mapped, coords, strict=True)):
        return coords
    return mapped


def _map_polygon(polygon: Polygon, fn: Callable[[Coordinate], Coordinate]) -> Polygon:
    exterior = _map_sequence(polygon.exterior, fn)
    holes: tuple[Ring, ...] = tuple(_map_sequence(h, fn) for h in polygon.holes)
    if exterior is polygon.exterior and all(
        new is old for new, old in zip(holes, polygon.holes, strict=True)
    ):
        return polygon
    return Polygon(exterior, holes)


def _map_point(point: Point, fn: Callable[[Coordinate], Coordinate]) -> Point:
    if point.coordinate is None:
        return point
    coordinate = fn(point.coordinate)
    return point if coordinate is point.coordinate else Point(coordinate)


def _map_line(line: LineString, fn: Callable[[Coordinate], Coordinate]) -> LineString:
    coords = _map_sequence(line.coordinates, fn)
    return line if coords is line.coordinates else LineString(coords)


def _map_members(members: tuple, mapper: Callable, fn: Callable) -> tuple:
    mapped = tuple(mapper(m, fn) for m in members)
    if all(new is old for new, old in zip(mapped, members, strict=True)):
        return members
    return mapped


def map_coordinates(geometry: Geometry, fn: Callable[[Coordinate], Coordinate]) -> Geometry:
    """Apply *fn* to every coordinate, preserving identity where unchanged.

    Raises:
        TypeError: If *geometry* is not one of the model types.
    """
    if isinstance(geometry, Point):
        return _map_point(geometry, fn)
    if isinstance(geometry, LineString):
        return _map_line(geometry, fn)
    if isinstance(geometry, Polygon):
        return _map_polygon(geometry, fn)
    if isinstance(geometry, MultiPoint):
        points = _map_members(geometry.points, _map_point, fn)
        return geometry if points is geometry.points else MultiPoint(points)
    if isinstance(geometry, MultiLineString):
        lines = _map_members(geometry.lines, _map_line, fn)
        return geometry if lines is geometry.lines else MultiLineString(lines)
    if isinstance(geometry, MultiPolygon):
        polygons = _map_members(geometry.polygons, _map_polygon, fn)
        return geometry if polygons is geometry.polygons else MultiPolygon(polygons)

    msg = f"Cannot normalise {type(geometry).__name__}"
    raise TypeError(msg)


def normalize_geometry(geometry: Geometry) -> tuple[Geometry, bool]:
    """Normalise every longitude of *geometry*.

    Returns:
        ``(geometry, changed)`` where ``changed`` is ``False`` when the
        input is returned as-is.
    """
    normalized = map_coordinates(geometry, normalize_coordinate)
    return normalized, normalized is not geometry
