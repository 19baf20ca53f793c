"""Shared constants — single source of truth.

Centralises coordinate bounds, the antimeridian and ring size limits used
by the WKT codec and the splitter.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# WGS 84 coordinate bounds
# ---------------------------------------------------------------------------

MIN_LONGITUDE: float = -180.0
MAX_LONGITUDE: float = 180.0
MIN_LATITUDE: float = -90.0
MAX_LATITUDE: float = 90.0

LONGITUDE_PERIOD: int = 360
"""Longitude is periodic; values congruent modulo 360 are the same meridian."""

HALF_TURN: float = 180.0
"""An edge whose longitude delta exceeds this crosses the antimeridian."""

# ---------------------------------------------------------------------------
# Ring structure
# ---------------------------------------------------------------------------

MIN_RING_VERTICES: int = 4
"""Minimum vertices for a valid ring (3 distinct + closing point)."""

MIN_DISTINCT_VERTICES: int = 3
