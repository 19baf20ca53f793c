"""Text-preserving WKT codec.

- **_reader**: ``parse_wkt`` — recursive-descent decoder, keeps literals
- **_writer**: ``to_wkt`` — canonical encoder, reuses literals
- **_validation**: ring closure / vertex-count / latitude checks
"""

from __future__ import annotations

from wkt_antimeridian.core.exceptions import InvalidGeometryError, ParseError
from wkt_antimeridian.wkt._reader import parse_wkt
from wkt_antimeridian.wkt._validation import validate_polygon, validate_ring
from wkt_antimeridian.wkt._writer import format_ordinate, to_wkt

__all__ = [
    "InvalidGeometryError",
    "ParseError",
    "format_ordinate",
    "parse_wkt",
    "to_wkt",
    "validate_polygon",
    "validate_ring",
]
