"""Value types for longitude/latitude geometries.

The geometry model is deliberately small: it carries exactly what the
antimeridian splitter needs (coordinate sequences and polygon structure)
plus the original WKT literal of every parsed ordinate, so that untouched
coordinates serialise back byte-for-byte.

All types are frozen dataclasses; operations build new values rather
than mutating inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A ``(lon, lat)`` pair in degrees.

    Attributes:
        lon: Longitude in degrees (periodic, period 360).
        lat: Latitude in degrees.
        lon_text: Longitude literal as written in the source WKT, or
            ``None`` for computed coordinates.
        lat_text: Latitude literal as written in the source WKT, or
            ``None`` for computed coordinates.
    """

    lon: float
    lat: float
    lon_text: str | None = field(default=None, compare=False)
    lat_text: str | None = field(default=None, compare=False)

    @property
    def xy(self) -> tuple[float, float]:
        return (self.lon, self.lat)


Ring = tuple[Coordinate, ...]
"""A closed loop of coordinates: first and last point are equal."""


@dataclass(frozen=True, slots=True)
class Point:
    geom_type: ClassVar[str] = "Point"

    coordinate: Coordinate | None = None

    @property
    def is_empty(self) -> bool:
        return self.coordinate is None


@dataclass(frozen=True, slots=True)
class LineString:
    geom_type: ClassVar[str] = "LineString"

    coordinates: tuple[Coordinate, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.coordinates


@dataclass(frozen=True, slots=True)
class Polygon:
    """One exterior ring plus zero or more interior rings (holes).

    Attributes:
        exterior: Exterior ring; empty for ``POLYGON EMPTY``.
        holes: Interior rings, each nested inside the exterior.
    """

    geom_type: ClassVar[str] = "Polygon"

    exterior: Ring = ()
    holes: tuple[Ring, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.exterior

    @property
    def rings(self) -> tuple[Ring, ...]:
        """Exterior followed by holes."""
        if self.is_empty:
            return ()
        return (self.exterior, *self.holes)


@dataclass(frozen=True, slots=True)
class MultiPoint:
    geom_type: ClassVar[str] = "MultiPoint"

    points: tuple[Point, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.points


@dataclass(frozen=True, slots=True)
class MultiLineString:
    geom_type: ClassVar[str] = "MultiLineString"

    lines: tuple[LineString, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True, slots=True)
class MultiPolygon:
    """An ordered sequence of polygons.

    Order carries no geometric meaning but is preserved so output is
    deterministic.
    """

    geom_type: ClassVar[str] = "MultiPolygon"

    polygons: tuple[Polygon, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.polygons


Geometry = Point | LineString | Polygon | MultiPoint | MultiLineString | MultiPolygon
