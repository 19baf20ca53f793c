"""Shared pytest fixtures for the WKT antimeridian test suite."""

import pytest

from wkt_antimeridian.core.config import AntimeridianConfig

# ---------------------------------------------------------------------------
# Reference WKT fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def crossing_polygon_wkt() -> str:
    """Rectangle from 162°E eastward to 226°E (134°W), 26°N to 70°N."""
    return "POLYGON ((162 70, 226 70, 226 26, 162 26, 162 70))"


@pytest.fixture()
def crossing_polygon_split_wkt() -> str:
    """Expected split of ``crossing_polygon_wkt``: west piece first."""
    return (
        "MULTIPOLYGON (((-180 26, -180 70, -134 70, -134 26, -180 26)), "
        "((180 70, 180 26, 162 26, 162 70, 180 70)))"
    )


@pytest.fixture()
def negative_crossing_wkt() -> str:
    """Quadrilateral already in range whose first and last edges cross."""
    return (
        "POLYGON ((167.422137 -37.935528, -173.149957 -49.494589, "
        "-166.265735 -32.563561, -176.051446 -24.815088, 167.422137 -37.935528))"
    )


@pytest.fixture()
def negative_crossing_split_wkt() -> str:
    """Expected split of ``negative_crossing_wkt`` with interpolated latitudes."""
    return (
        "MULTIPOLYGON (((180 -27.949873104584977, 167.422137 -37.935528, "
        "180 -45.419004894866745, 180 -27.949873104584977)), "
        "((-180 -45.419004894866745, -173.149957 -49.494589, -166.265735 -32.563561, "
        "-176.051446 -24.815088, -180 -27.949873104584977, -180 -45.419004894866745)))"
    )


@pytest.fixture()
def non_crossing_wkt() -> str:
    """Triangle over North America."""
    return (
        "POLYGON ((-98.085938 42.55308, -113.90625 35.173808, "
        "-90 34.307144, -98.085938 42.55308))"
    )


@pytest.fixture()
def notched_polygon_wkt() -> str:
    """C-shaped polygon whose notch straddles the antimeridian (four crossings)."""
    return "POLYGON ((170 0, 190 0, 190 30, 170 30, 170 20, 185 20, 185 10, 170 10, 170 0))"


@pytest.fixture()
def default_config() -> AntimeridianConfig:
    """Configuration with every default applied."""
    return AntimeridianConfig()
