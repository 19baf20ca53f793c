"""WKT text → geometry model.

A small recursive-descent reader for the 2D OGC WKT grammar
(``POINT``, ``LINESTRING``, ``POLYGON`` and their ``MULTI`` variants).
Every ordinate keeps the literal it was written with so the writer can
reproduce untouched coordinates exactly.

The reader checks syntax only.  Ring closure and vertex counts are
checked separately (``_validation``) because normalisation must accept
rings that splitting would reject.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from wkt_antimeridian.core.exceptions import ParseError
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

logger = logging.getLogger("wkt_antimeridian.wkt")

_TOKEN_RE = re.compile(
    r"""
    (?P<number>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)
    |(?P<word>[A-Za-z_]+)
    |(?P<punct>[(),])
    |(?P<space>\s+)
    """,
    re.VERBOSE,
)

_DIMENSION_TAGS = frozenset({"Z", "M", "ZM"})


@dataclass(frozen=True, slots=True)
class _Token:
    kind: str
    text: str
    position: int


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            msg = f"Unexpected character {text[pos]!r}"
            raise ParseError(msg, position=pos)
        kind = match.lastgroup or ""
        if kind != "space":
            tokens.append(_Token(kind, match.group(), pos))
        pos = match.end()
    return tokens


class _Reader:
    """Cursor over the token stream with one method per grammar rule."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._tokens = _tokenize(text)
        self._index = 0

    # -- token helpers -----------------------------------------------------

    def _peek(self) -> _Token | None:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _next(self, expected: str) -> _Token:
        token = self._peek()
        if token is None:
            msg = f"Unexpected end of WKT, expected {expected}"
            raise ParseError(msg, position=len(self._text))
        self._index += 1
        return token

    def _expect(self, punct: str) -> None:
        token = self._next(f"'{punct}'")
        if token.text != punct:
            msg = f"Expected '{punct}' but found {token.text!r}"
            raise ParseError(msg, position=token.position)

    def _at(self, punct: str) -> bool:
        token = self._peek()
        return token is not None and token.text == punct

    def _at_empty(self) -> bool:
        token = self._peek()
        if token is not None and token.kind == "word" and token.text.upper() == "EMPTY":
            self._index += 1
            return True
        return False

    def _delimited(self, item: Callable[[], object]) -> list:
        """Parse ``'(' item (',' item)* ')'``."""
        self._expect("(")
        items = [item()]
        while self._at(","):
            self._index += 1
            items.append(item())
        self._expect(")")
        return items

    # -- grammar -----------------------------------------------------------

    def read(self) -> Geometry:
        geometry = self._geometry()
        trailing = self._peek()
        if trailing is not None:
            msg = f"Unexpected trailing text {trailing.text!r}"
            raise ParseError(msg, position=trailing.position)
        return geometry

    def _geometry(self) -> Geometry:
        token = self._next("a geometry type")
        if token.kind != "word":
            msg = f"Expected a geometry type but found {token.text!r}"
            raise ParseError(msg, position=token.position)

        tag = token.text.upper()
        dimension = self._peek()
        if dimension is not None and dimension.text.upper() in _DIMENSION_TAGS:
            msg = f"Unsupported coordinate dimension {dimension.text!r}, only 2D WKT is accepted"
            raise ParseError(msg, position=dimension.position)

        if tag == "POINT":
            return Point() if self._at_empty() else Point(self._point_text())
        if tag == "LINESTRING":
            return LineString() if self._at_empty() else LineString(self._coordinate_sequence())
        if tag == "POLYGON":
            return Polygon() if self._at_empty() else self._polygon_text()
        if tag == "MULTIPOINT":
            if self._at_empty():
                return MultiPoint()
            return MultiPoint(tuple(self._delimited(self._multipoint_member)))
        if tag == "MULTILINESTRING":
            if self._at_empty():
                return MultiLineString()
            return MultiLineString(tuple(self._delimited(self._linestring_member)))
        if tag == "MULTIPOLYGON":
            if self._at_empty():
                return MultiPolygon()
            return MultiPolygon(tuple(self._delimited(self._polygon_member)))

        msg = f"Unsupported geometry type {token.text!r}"
        raise ParseError(msg, position=token.position)

    def _number(self) -> tuple[float, str]:
        token = self._next("a number")
        if token.kind != "number":
            msg = f"Expected a numeric ordinate but found {token.text!r}"
            raise ParseError(msg, position=token.position)
        value = float(token.text)
        if not math.isfinite(value):
            msg = f"Ordinate {token.text!r} is not a finite number"
            raise ParseError(msg, position=token.position)
        return value, token.text

    def _coordinate(self) -> Coordinate:
        lon, lon_text = self._number()
        lat, lat_text = self._number()
        trailing = self._peek()
        if trailing is not None and trailing.kind == "number":
            msg = f"Coordinate has more than two ordinates (found {trailing.text!r})"
            raise ParseError(msg, position=trailing.position)
        return Coordinate(lon, lat, lon_text, lat_text)

    def _coordinate_sequence(self) -> tuple[Coordinate, ...]:
        return tuple(self._delimited(self._coordinate))

    def _point_text(self) -> Coordinate:
        self._expect("(")
        coordinate = self._coordinate()
        self._expect(")")
        return coordinate

    def _polygon_text(self) -> Polygon:
        rings: list[Ring] = self._delimited(self._coordinate_sequence)
        return Polygon(rings[0], tuple(rings[1:]))

    def _multipoint_member(self) -> Point:
        if self._at_empty():
            return Point()
        # Both ``MULTIPOINT ((1 2), (3 4))`` and ``MULTIPOINT (1 2, 3 4)`` occur in the wild.
        if self._at("("):
            return Point(self._point_text())
        return Point(self._coordinate())

    def _linestring_member(self) -> LineString:
        if self._at_empty():
            return LineString()
        return LineString(self._coordinate_sequence())

    def _polygon_member(self) -> Polygon:
        if self._at_empty():
            return Polygon()
        return self._polygon_text()


def parse_wkt(text: str) -> Geometry:
    """Decode WKT text into the geometry model.

    Args:
        text: WKT string, e.g. ``"POLYGON ((170 33, 179 44, 101 55, 170 33))"``.

    Returns:
        The decoded geometry with source literals attached to every
        coordinate.

    Raises:
        ParseError: If the text is empty, has unbalanced parentheses,
            non-numeric ordinates, coordinates with other than two
            ordinates, or an unsupported geometry type.
    """
    if not isinstance(text, str) or not text.strip():
        msg = "WKT text is empty"
        raise ParseError(msg)
    geometry = _Reader(text).read()
    logger.debug("Parsed %s from %d characters of WKT", geometry.geom_type, len(text))
    return geometry
