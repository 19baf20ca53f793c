"""Structural validation of decoded polygons.

Responsibilities:
- Ring closure and vertex counts
- Latitude bounds (WGS 84)

Run before splitting; normalisation alone does not require valid rings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wkt_antimeridian.core.constants import (
    MAX_LATITUDE,
    MIN_DISTINCT_VERTICES,
    MIN_LATITUDE,
    MIN_RING_VERTICES,
)
from wkt_antimeridian.core.exceptions import InvalidGeometryError

if TYPE_CHECKING:
    from wkt_antimeridian.models.geometry import Polygon, Ring


def validate_ring(ring: Ring, label: str = "ring") -> None:
    """Validate a ring is closed with enough distinct vertices.

    Raises:
        InvalidGeometryError: If the ring is unclosed, has fewer than
            4 points, fewer than 3 distinct points, or a latitude outside
            ``[-90, 90]``.
    """
    if len(ring) < MIN_RING_VERTICES:
        msg = (
            f"Polygon {label} has {len(ring)} point(s), need at least "
            f"{MIN_RING_VERTICES} (including closure)"
        )
        raise InvalidGeometryError(msg)

    if ring[0] != ring[-1]:
        msg = f"Polygon {label} is not closed: first point {ring[0].xy} != last point {ring[-1].xy}"
        raise InvalidGeometryError(msg)

    if len({c.xy for c in ring}) < MIN_DISTINCT_VERTICES:
        msg = f"Polygon {label} has fewer than {MIN_DISTINCT_VERTICES} distinct points"
        raise InvalidGeometryError(msg)

    for coord in ring:
        if not (MIN_LATITUDE <= coord.lat <= MAX_LATITUDE):
            msg = (
                f"Latitude {coord.lat} in polygon {label} is outside "
                f"[{MIN_LATITUDE}, {MAX_LATITUDE}]"
            )
            raise InvalidGeometryError(msg)


def validate_polygon(polygon: Polygon) -> None:
    """Validate every ring of a non-empty polygon.

    Raises:
        InvalidGeometryError: If any ring fails ``validate_ring``.
    """
    if polygon.is_empty:
        return
    validate_ring(polygon.exterior, "exterior ring")
    for index, hole in enumerate(polygon.holes):
        validate_ring(hole, f"interior ring {index}")
