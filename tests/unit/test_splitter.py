"""Tests for antimeridian crossing detection and ring splitting.

Covers:
- Crossing predicate, including the exact 180-degree delta
- Crossing latitude interpolation and endpoint reuse
- Ring → fragment state machine
- Rejection of pole-enclosing and globe-wrapping rings
"""

from __future__ import annotations

import pytest

from wkt_antimeridian.antimeridian import (
    Fragment,
    Side,
    crossing_segment,
    find_crossings,
    is_crossing,
    normalize_geometry,
    split_ring,
)
from wkt_antimeridian.core.exceptions import InvalidGeometryError
from wkt_antimeridian.models.geometry import Coordinate, Polygon
from wkt_antimeridian.wkt import parse_wkt


def _exterior(wkt: str) -> tuple[Coordinate, ...]:
    geometry, _ = normalize_geometry(parse_wkt(wkt))
    assert isinstance(geometry, Polygon)
    return geometry.exterior


def _ring(*points: tuple[float, float]) -> tuple[Coordinate, ...]:
    return tuple(Coordinate(x, y) for x, y in points)


# ---------------------------------------------------------------------------
# Side
# ---------------------------------------------------------------------------


class TestSide:
    def test_meridians(self) -> None:
        assert Side.EAST.meridian == 180.0
        assert Side.WEST.meridian == -180.0

    def test_opposite(self) -> None:
        assert Side.EAST.opposite is Side.WEST
        assert Side.WEST.opposite is Side.EAST


# ---------------------------------------------------------------------------
# Crossing detection
# ---------------------------------------------------------------------------


class TestIsCrossing:
    """An edge crosses when its longitude delta exceeds 180."""

    def test_short_way_across_meridian(self) -> None:
        assert is_crossing(Coordinate(170.0, 0.0), Coordinate(-170.0, 0.0))
        assert is_crossing(Coordinate(-170.0, 0.0), Coordinate(170.0, 0.0))

    def test_ordinary_edge(self) -> None:
        assert not is_crossing(Coordinate(-90.0, 0.0), Coordinate(90.0, 0.0))

    def test_exact_half_turn_is_not_crossing(self) -> None:
        assert not is_crossing(Coordinate(10.0, 0.0), Coordinate(-170.0, 0.0))
        assert not is_crossing(Coordinate(180.0, 5.0), Coordinate(0.0, 5.0))


class TestCrossingSegment:
    """Crossing point location."""

    def test_leaving_east(self) -> None:
        segment = crossing_segment(Coordinate(162.0, 70.0, "162", "70"), Coordinate(-134.0, 70.0))
        assert segment.leaving is Side.EAST
        assert segment.exit_point == Coordinate(180.0, 70.0)
        assert segment.entry_point == Coordinate(-180.0, 70.0)
        assert segment.exit_point.lat_text == "70"

    def test_leaving_west(self) -> None:
        segment = crossing_segment(Coordinate(-134.0, 26.0), Coordinate(162.0, 26.0))
        assert segment.leaving is Side.WEST
        assert segment.exit_point == Coordinate(-180.0, 26.0)
        assert segment.entry_point == Coordinate(180.0, 26.0)

    def test_interpolated_latitude_eastbound(self) -> None:
        segment = crossing_segment(
            Coordinate(167.422137, -37.935528), Coordinate(-173.149957, -49.494589)
        )
        assert segment.exit_point.lat == pytest.approx(-45.419004894866745, abs=1e-9)
        assert segment.exit_point.lat_text is None

    def test_interpolated_latitude_westbound(self) -> None:
        segment = crossing_segment(
            Coordinate(-176.051446, -24.815088), Coordinate(167.422137, -37.935528)
        )
        assert segment.leaving is Side.WEST
        assert segment.exit_point.lat == pytest.approx(-27.949873104584977, abs=1e-9)

    def test_midpoint(self) -> None:
        segment = crossing_segment(Coordinate(170.0, 0.0), Coordinate(-170.0, 10.0))
        assert segment.exit_point.lat == pytest.approx(5.0)

    def test_vertex_on_meridian_reuses_its_latitude(self) -> None:
        segment = crossing_segment(
            Coordinate(170.0, 0.0, "170", "0"), Coordinate(-180.0, 10.0, "-180", "10")
        )
        assert segment.exit_point == Coordinate(180.0, 10.0)
        assert segment.exit_point.lat_text == "10"

    def test_latitude_within_endpoint_range(self) -> None:
        segment = crossing_segment(Coordinate(179.0, -80.0), Coordinate(-100.0, 85.0))
        assert -80.0 <= segment.exit_point.lat <= 85.0


class TestFindCrossings:
    def test_none(self, non_crossing_wkt: str) -> None:
        assert find_crossings(_exterior(non_crossing_wkt)) == []

    def test_two(self, crossing_polygon_wkt: str) -> None:
        crossings = find_crossings(_exterior(crossing_polygon_wkt))
        assert [c.leaving for c in crossings] == [Side.EAST, Side.WEST]

    def test_four(self, notched_polygon_wkt: str) -> None:
        assert len(find_crossings(_exterior(notched_polygon_wkt))) == 4


# ---------------------------------------------------------------------------
# split_ring
# ---------------------------------------------------------------------------


class TestSplitRing:
    """Ring → side fragments."""

    def test_non_crossing_returns_none(self, non_crossing_wkt: str) -> None:
        assert split_ring(_exterior(non_crossing_wkt)) is None

    def test_two_fragments(self, crossing_polygon_wkt: str) -> None:
        fragments = split_ring(_exterior(crossing_polygon_wkt))
        assert fragments is not None
        west, east = fragments
        assert west.side is Side.WEST
        assert west.coordinates == _ring((-180, 70), (-134, 70), (-134, 26), (-180, 26))
        assert east.side is Side.EAST
        assert east.coordinates == _ring((180, 26), (162, 26), (162, 70), (180, 70))

    def test_fragments_start_and_end_on_their_meridian(self, notched_polygon_wkt: str) -> None:
        fragments = split_ring(_exterior(notched_polygon_wkt))
        assert fragments is not None
        assert [f.side for f in fragments] == [Side.WEST, Side.EAST, Side.WEST, Side.EAST]
        for fragment in fragments:
            assert fragment.entry.lon == fragment.side.meridian
            assert fragment.exit.lon == fragment.side.meridian

    def test_pole_enclosing_ring_rejected(self) -> None:
        ring = _ring((0, 80), (90, 80), (180, 80), (-90, 80), (0, 80))
        with pytest.raises(InvalidGeometryError, match="odd number") as exc_info:
            split_ring(ring)
        assert exc_info.value.stage == "split_polygon"

    def test_globe_wrapping_ring_rejected(self) -> None:
        ring = _ring(
            (0, 0), (100, 0), (-160, 0), (-60, 0), (40, 0), (140, 0), (-120, 5),
            (140, 10), (40, 10), (-60, 10), (-160, 10), (100, 10), (0, 10), (0, 0),
        )  # fmt: skip
        with pytest.raises(InvalidGeometryError, match="same direction"):
            split_ring(ring)


class TestFragment:
    def test_on_meridian(self) -> None:
        assert Fragment(Side.EAST, _ring((180, 0), (180, 10))).on_meridian
        assert not Fragment(Side.EAST, _ring((180, 0), (170, 5), (180, 10))).on_meridian
