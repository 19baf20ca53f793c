"""Antimeridian crossing detection and ring splitting.

A ring edge ``(p1, p2)`` crosses the antimeridian when its longitude
delta exceeds 180 degrees: the short way between the two vertices runs
through ±180 rather than across the map.  A negative delta leaves the
east side through +180, a positive delta leaves the west side through
-180.  The latitude at the meridian is interpolated linearly in
unwrapped longitude.

``split_ring`` walks the ring as a small state machine (side unknown,
east or west).  Each crossing closes the current fragment on the exit
meridian and opens the next one on the opposite meridian; the fragment
still open at the end of the ring is joined to the one opened at its
start.  Stitching the fragments back into closed rings happens in
``_rebuild``.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from wkt_antimeridian.core.constants import HALF_TURN, LONGITUDE_PERIOD
from wkt_antimeridian.core.exceptions import InvalidGeometryError
from wkt_antimeridian.models.geometry import Coordinate

if TYPE_CHECKING:
    from wkt_antimeridian.models.geometry import Ring

logger = logging.getLogger("wkt_antimeridian.antimeridian")


class Side(enum.Enum):
    """Half of the map bounded by the antimeridian, keyed by its meridian."""

    EAST = HALF_TURN
    WEST = -HALF_TURN

    @property
    def meridian(self) -> float:
        return self.value

    @property
    def opposite(self) -> Side:
        return Side.WEST if self is Side.EAST else Side.EAST


@dataclass(frozen=True, slots=True)
class CrossingSegment:
    """A ring edge that crosses the antimeridian.

    Attributes:
        start: Edge start vertex.
        end: Edge end vertex.
        leaving: Side the edge leaves.
        exit_point: Crossing point on the meridian of ``leaving``.
        entry_point: Same latitude on the opposite meridian.
    """

    start: Coordinate
    end: Coordinate
    leaving: Side
    exit_point: Coordinate
    entry_point: Coordinate


@dataclass(frozen=True, slots=True)
class Fragment:
    """Piece of a ring lying on one side, from meridian to meridian."""

    side: Side
    coordinates: tuple[Coordinate, ...]

    @property
    def entry(self) -> Coordinate:
        return self.coordinates[0]

    @property
    def exit(self) -> Coordinate:
        return self.coordinates[-1]

    @property
    def on_meridian(self) -> bool:
        """Whether every vertex lies on the meridian (no enclosed area)."""
        return all(abs(c.lon) == HALF_TURN for c in self.coordinates)


def is_crossing(p1: Coordinate, p2: Coordinate) -> bool:
    """Whether the edge ``p1 → p2`` crosses the antimeridian.

    A delta of exactly 180 degrees is ambiguous and is not treated as a
    crossing.
    """
    return abs(p2.lon - p1.lon) > HALF_TURN


def crossing_segment(p1: Coordinate, p2: Coordinate) -> CrossingSegment:
    """Locate where the crossing edge ``p1 → p2`` meets the antimeridian."""
    if p2.lon - p1.lon < 0:
        leaving = Side.EAST
        unwrapped_end = p2.lon + LONGITUDE_PERIOD
    else:
        leaving = Side.WEST
        unwrapped_end = p2.lon - LONGITUDE_PERIOD

    span = unwrapped_end - p1.lon
    t = (leaving.meridian - p1.lon) / span if span else 0.0

    # Reuse an endpoint latitude when the crossing sits on it so the
    # split points match the vertex exactly.
    if t <= 0.0 or p1.lat == p2.lat:
        lat, lat_text = p1.lat, p1.lat_text
    elif t >= 1.0:
        lat, lat_text = p2.lat, p2.lat_text
    else:
        lat, lat_text = p1.lat + t * (p2.lat - p1.lat), None

    return CrossingSegment(
        start=p1,
        end=p2,
        leaving=leaving,
        exit_point=Coordinate(leaving.meridian, lat, None, lat_text),
        entry_point=Coordinate(leaving.opposite.meridian, lat, None, lat_text),
    )


def find_crossings(ring: Ring) -> list[CrossingSegment]:
    """Return every antimeridian-crossing edge of *ring*, in order."""
    return [
        crossing_segment(p1, p2)
        for p1, p2 in zip(ring, ring[1:], strict=False)
        if is_crossing(p1, p2)
    ]


def _append(points: list[Coordinate], coord: Coordinate) -> None:
    if not points or points[-1] != coord:
        points.append(coord)


def split_ring(ring: Ring) -> list[Fragment] | None:
    """Cut a closed, normalised ring at every antimeridian crossing.

    Args:
        ring: Closed ring with every longitude in ``[-180, 180]``.

    Returns:
        ``None`` when no edge crosses.  Otherwise the fragments, each
        starting at its entry point and ending at its exit point on the
        same meridian, ordered by where they close during the walk (the
        fragment wrapping round the ring's start comes last).  Fragments
        lying entirely on the meridian are dropped.

    Raises:
        InvalidGeometryError: If crossings do not alternate direction,
            i.e. the ring encircles a pole or wraps round the globe.
    """
    side: Side | None = None
    head: list[Coordinate] | None = None
    current: list[Coordinate] = [ring[0]]
    fragments: list[Fragment] = []

    for p1, p2 in zip(ring, ring[1:], strict=False):
        if not is_crossing(p1, p2):
            _append(current, p2)
            continue

        crossing = crossing_segment(p1, p2)
        if side is not None and crossing.leaving is not side:
            msg = (
                f"Ring crosses the antimeridian twice in the same direction near "
                f"{p1.xy} -> {p2.xy}; rings that wrap the globe cannot be split"
            )
            raise InvalidGeometryError(msg, stage="split_polygon")

        _append(current, crossing.exit_point)
        if side is None:
            head = current
        else:
            fragments.append(Fragment(side, tuple(current)))
        side = crossing.leaving.opposite
        current = [crossing.entry_point]
        _append(current, p2)

    if side is None or head is None:
        return None

    if head[-1].lon != side.meridian:
        msg = (
            "Ring crosses the antimeridian an odd number of times; "
            "polygons enclosing a pole cannot be split"
        )
        raise InvalidGeometryError(msg, stage="split_polygon")

    # The ring is closed, so ``current`` ends where ``head`` begins.
    for coord in head[1:]:
        _append(current, coord)
    fragments.append(Fragment(side, tuple(current)))

    logger.debug("Ring split into %d fragment(s)", len(fragments))
    return [f for f in fragments if not f.on_meridian]
