"""Antimeridian normalisation and splitting for WKT geometries.

The pipeline is split into focused stages:
- **_normalization**: longitude reduction into ``[-180, 180]``
- **_splitter**: crossing-edge detection and ring → fragment state machine
- **_rebuild**: fragment stitching, hole re-attachment, flattening

Entry points work on WKT text; ``split_geometry`` exposes the same logic
on the decoded model.  Inputs that need no change come back as the
exact text (or object) that was passed in.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from wkt_antimeridian.antimeridian._normalization import (
    normalize_coordinate,
    normalize_geometry,
    normalize_longitude,
)
from wkt_antimeridian.antimeridian._rebuild import (
    flatten_multipolygon,
    merge_polygons,
    split_polygon,
    stitch_fragments,
)
from wkt_antimeridian.antimeridian._splitter import (
    CrossingSegment,
    Fragment,
    Side,
    crossing_segment,
    find_crossings,
    is_crossing,
    split_ring,
)
from wkt_antimeridian.core.config import AntimeridianConfig
from wkt_antimeridian.core.exceptions import InvalidGeometryError, SplitIntegrityError
from wkt_antimeridian.core.geometry import unwrapped_area
from wkt_antimeridian.models.geometry import MultiPolygon, Polygon
from wkt_antimeridian.models.report import SplitReport
from wkt_antimeridian.wkt import parse_wkt, to_wkt, validate_polygon

if TYPE_CHECKING:
    from wkt_antimeridian.models.geometry import Geometry

logger = logging.getLogger("wkt_antimeridian.antimeridian")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "CrossingSegment",
    "Fragment",
    "Side",
    "crossing_segment",
    "describe_split",
    "find_crossings",
    "flatten_multipolygon",
    "is_crossing",
    "merge_polygons",
    "normalize_coordinate",
    "normalize_geometry",
    "normalize_longitude",
    "normalize_wkt",
    "split_geometry",
    "split_polygon",
    "split_ring",
    "stitch_fragments",
    "unwrap_and_split_wkt",
    "wkt_multipoly_to_single_polygons",
]


def normalize_wkt(text: str) -> str:
    """Normalise every longitude in a WKT geometry into ``[-180, 180]``.

    No splitting is performed.  Returns *text* unchanged when every
    longitude is already in range.

    Raises:
        ParseError: If *text* is not well-formed WKT.
    """
    geometry = parse_wkt(text)
    normalized, changed = normalize_geometry(geometry)
    if not changed:
        return text
    result = to_wkt(normalized)
    logger.info("Normalised %s longitudes", geometry.geom_type)
    return result


def split_geometry(geometry: Geometry) -> Geometry:
    """Split the polygons of a normalised geometry at the antimeridian.

    Points and lines are returned as-is.  Multipolygon members are split
    individually and the pieces collected into one ``MultiPolygon``.

    Returns:
        *geometry* itself when nothing crosses.

    Raises:
        InvalidGeometryError: If a polygon ring is unclosed, too short,
            or cannot be split (see ``split_polygon``).
    """
    if isinstance(geometry, Polygon):
        validate_polygon(geometry)
        return split_polygon(geometry)

    if isinstance(geometry, MultiPolygon):
        for polygon in geometry.polygons:
            validate_polygon(polygon)
        parts = [split_polygon(p) for p in geometry.polygons]
        if all(part is polygon for part, polygon in zip(parts, geometry.polygons, strict=True)):
            return geometry
        return merge_polygons(parts)

    return geometry


def _verify_area(original: Geometry, result: Geometry, config: AntimeridianConfig) -> None:
    before = unwrapped_area(original)
    after = unwrapped_area(result)
    if not math.isclose(
        before, after, rel_tol=config.area_rel_tolerance, abs_tol=config.area_abs_tolerance
    ):
        msg = f"Split changed the enclosed area from {before!r} to {after!r} square degrees"
        raise SplitIntegrityError(msg)


def _unwrap_and_split(
    text: str, config: AntimeridianConfig | None
) -> tuple[Geometry, Geometry, bool, Geometry]:
    config = config or AntimeridianConfig()
    geometry = parse_wkt(text)
    normalized, changed = normalize_geometry(geometry)
    result = split_geometry(normalized)
    if result is not normalized and config.verify_area:
        _verify_area(geometry, result, config)
    return geometry, normalized, changed, result


def unwrap_and_split_wkt(text: str, *, config: AntimeridianConfig | None = None) -> str:
    """Normalise longitudes and split antimeridian-crossing polygons.

    Args:
        text: WKT geometry.
        config: Area-verification settings (defaults apply when omitted).

    Returns:
        ``POLYGON`` or ``MULTIPOLYGON`` WKT as appropriate, or *text*
        itself when no longitude changed and nothing crossed.

    Raises:
        ParseError: If *text* is not well-formed WKT.
        InvalidGeometryError: If a polygon is structurally invalid or
            cannot be split.
        SplitIntegrityError: If area verification is enabled and the
            split did not conserve area.
    """
    geometry, normalized, changed, result = _unwrap_and_split(text, config)
    if result is geometry:
        return text

    logger.info(
        "Unwrapped %s | normalised=%s | split=%s | output=%s",
        geometry.geom_type,
        changed,
        result is not normalized,
        result.geom_type,
    )
    return to_wkt(result)


def wkt_multipoly_to_single_polygons(text: str) -> list[str]:
    """Flatten a ``MULTIPOLYGON`` into one ``POLYGON`` WKT per member.

    No normalisation or splitting is applied; member order and
    coordinate text are preserved.  A ``POLYGON`` yields a one-item list.

    Raises:
        ParseError: If *text* is not well-formed WKT.
        InvalidGeometryError: If *text* is neither a polygon nor a
            multipolygon.
    """
    geometry = parse_wkt(text)
    if isinstance(geometry, MultiPolygon):
        return flatten_multipolygon(geometry)
    if isinstance(geometry, Polygon):
        return [to_wkt(geometry)]
    msg = f"Expected POLYGON or MULTIPOLYGON WKT, got {geometry.geom_type}"
    raise InvalidGeometryError(msg, stage="flatten")


def _count_crossings(geometry: Geometry) -> int:
    if isinstance(geometry, Polygon):
        return sum(len(find_crossings(ring)) for ring in geometry.rings)
    if isinstance(geometry, MultiPolygon):
        return sum(_count_crossings(p) for p in geometry.polygons)
    return 0


def describe_split(text: str, *, config: AntimeridianConfig | None = None) -> SplitReport:
    """Unwrap and split *text* like ``unwrap_and_split_wkt`` and summarise the run.

    Raises:
        ParseError, InvalidGeometryError, SplitIntegrityError: As for
            ``unwrap_and_split_wkt``.
    """
    geometry, normalized, changed, result = _unwrap_and_split(text, config)
    output_wkt = text if result is geometry else to_wkt(result)
    crossings = _count_crossings(normalized)

    if isinstance(result, MultiPolygon):
        polygon_count = len(result.polygons)
    elif isinstance(result, Polygon):
        polygon_count = 0 if result.is_empty else 1
    else:
        polygon_count = 0

    return SplitReport(
        input_wkt=text,
        output_wkt=output_wkt,
        input_type=geometry.geom_type,
        output_type=result.geom_type,
        normalized=changed,
        split=crossings > 0,
        crossing_count=crossings,
        polygon_count=polygon_count,
        input_area=unwrapped_area(geometry),
        output_area=unwrapped_area(result),
    )
