"""Geometry rebuilding after a split, and multipolygon flattening.

Fragments produced by ``split_ring`` are stitched back into closed rings
per side.  From a fragment's exit point the boundary continues along the
meridian, keeping the polygon interior on the same hand as the exterior
ring's winding:

- counter-clockwise exterior: north along +180, south along -180
- clockwise exterior: south along +180, north along -180

The next fragment is the one whose entry is nearest in that direction.
A ring closes when that fragment is the one it started from.  Holes are
reversed where needed so they wind opposite to the exterior, which lets
crossing holes be stitched with the same rule.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wkt_antimeridian.antimeridian._splitter import Side, split_ring
from wkt_antimeridian.core.constants import MIN_RING_VERTICES
from wkt_antimeridian.core.exceptions import InvalidGeometryError
from wkt_antimeridian.core.geometry import is_ccw, ring_contains
from wkt_antimeridian.models.geometry import MultiPolygon, Polygon
from wkt_antimeridian.wkt import to_wkt

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wkt_antimeridian.antimeridian._splitter import Fragment
    from wkt_antimeridian.models.geometry import Coordinate, Ring

logger = logging.getLogger("wkt_antimeridian.antimeridian")


# ---------------------------------------------------------------------------
# Stitching
# ---------------------------------------------------------------------------


def _extend(points: list[Coordinate], coords: Iterable[Coordinate]) -> None:
    for coord in coords:
        if not points or points[-1] != coord:
            points.append(coord)


def _next_fragment(
    exit_point: Coordinate,
    first: Fragment,
    remaining: list[Fragment],
    *,
    north: bool,
) -> Fragment:
    """Nearest fragment entry along the meridian from *exit_point*.

    *first* is listed ahead of the others so a tie closes the ring.
    """

    def gap(fragment: Fragment) -> float:
        distance = fragment.entry.lat - exit_point.lat
        return distance if north else -distance

    candidates = [first, *(f for f in remaining if f.side is first.side)]
    ahead = [f for f in candidates if gap(f) >= 0]
    if not ahead:
        msg = (
            f"Cannot close ring along the {first.side.name.lower()} antimeridian "
            f"from latitude {exit_point.lat}; the polygon boundary is inconsistent"
        )
        raise InvalidGeometryError(msg, stage="split_polygon")
    return min(ahead, key=gap)


def stitch_fragments(fragments: list[Fragment], *, ccw: bool) -> list[Ring]:
    """Join side fragments into closed rings.

    Rings are returned in the order of their first fragment.  Each ring
    starts at the exit point that closes it, so it opens with the
    meridian segment leading back to its first fragment.

    Args:
        fragments: Fragments of the exterior followed by those of any
            crossing holes.
        ccw: Winding of the exterior ring.
    """
    remaining = list(fragments)
    rings: list[Ring] = []

    while remaining:
        first = remaining.pop(0)
        north = (first.side is Side.EAST) == ccw
        chain = list(first.coordinates)
        current = first
        while True:
            following = _next_fragment(current.exit, first, remaining, north=north)
            if following is first:
                break
            remaining.remove(following)
            _extend(chain, following.coordinates)
            current = following

        ring: list[Coordinate] = [chain[-1]]
        _extend(ring, chain)
        if len(ring) < MIN_RING_VERTICES:
            logger.debug("Dropping degenerate ring of %d point(s) on the meridian", len(ring))
            continue
        rings.append(tuple(ring))

    return rings


def _attach_holes(shells: list[Ring], holes: list[Ring]) -> list[Polygon]:
    buckets: list[list[Ring]] = [[] for _ in shells]
    for hole in holes:
        for index, shell in enumerate(shells):
            if ring_contains(shell, hole):
                buckets[index].append(hole)
                break
        else:
            msg = "Interior ring lies outside every polygon produced by the split"
            raise InvalidGeometryError(msg, stage="split_polygon")
    return [Polygon(shell, tuple(bucket)) for shell, bucket in zip(shells, buckets, strict=True)]


# ---------------------------------------------------------------------------
# Public operations
# ---------------------------------------------------------------------------


def split_polygon(polygon: Polygon) -> Polygon | MultiPolygon:
    """Split a normalised, validated polygon at the antimeridian.

    Returns:
        *polygon* itself when no ring crosses.  Otherwise the pieces: a
        single ``Polygon`` if only one has area, else a ``MultiPolygon``
        ordered by where each piece's first exterior fragment closes during the
        walk round the ring.

    Raises:
        InvalidGeometryError: If a ring wraps the globe or encloses a
            pole, a hole crosses while the exterior does not, or a hole
            cannot be placed in any piece.
    """
    if polygon.is_empty:
        return polygon

    exterior_fragments = split_ring(polygon.exterior)
    ccw = is_ccw(polygon.exterior)

    hole_fragments: list[Fragment] = []
    whole_holes: list[Ring] = []
    for hole in polygon.holes:
        fragments = split_ring(hole)
        if fragments is None:
            whole_holes.append(hole)
            continue
        if is_ccw(hole) == ccw:
            fragments = split_ring(tuple(reversed(hole))) or []
        hole_fragments.extend(fragments)

    if exterior_fragments is None:
        if hole_fragments:
            msg = "Interior ring crosses the antimeridian but the exterior ring does not"
            raise InvalidGeometryError(msg, stage="split_polygon")
        return polygon

    shells = stitch_fragments(exterior_fragments + hole_fragments, ccw=ccw)
    if not shells:
        msg = "Polygon collapses onto the antimeridian and encloses no area"
        raise InvalidGeometryError(msg, stage="split_polygon")

    pieces = _attach_holes(shells, whole_holes)
    logger.debug(
        "Polygon split | fragments=%d | pieces=%d | holes=%d",
        len(exterior_fragments) + len(hole_fragments),
        len(pieces),
        len(polygon.holes),
    )
    if len(pieces) == 1:
        return pieces[0]
    return MultiPolygon(tuple(pieces))


def merge_polygons(parts: Iterable[Polygon | MultiPolygon]) -> MultiPolygon:
    """Flatten split results into one multipolygon, keeping order."""
    polygons: list[Polygon] = []
    for part in parts:
        if isinstance(part, MultiPolygon):
            polygons.extend(part.polygons)
        else:
            polygons.append(part)
    return MultiPolygon(tuple(polygons))


def flatten_multipolygon(multipolygon: MultiPolygon) -> list[str]:
    """Return one ``POLYGON`` WKT string per member, in order.

    Coordinates keep their source text.
    """
    return [to_wkt(polygon) for polygon in multipolygon.polygons]
