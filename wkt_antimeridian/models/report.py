"""Pydantic summary of a normalise-and-split run.

Returned by ``describe_split`` and by the HTTP split endpoint so callers
can see what happened to a geometry without re-parsing the output:
whether longitudes were normalised, how many antimeridian crossings were
found, and how the planar area compares before and after.

Areas are planar, in square degrees, measured ring by ring in unwrapped
longitude so they are comparable across the split.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Schema version for forward compatibility
SCHEMA_VERSION = "antimeridian-split-v1"


class SplitReport(BaseModel):
    """Outcome of ``unwrap_and_split_wkt`` for one input geometry.

    Attributes:
        schema_version: Report schema identifier.
        input_wkt: WKT as received.
        output_wkt: WKT after normalisation and splitting.
        input_type: Geometry type of the input (e.g. ``"Polygon"``).
        output_type: Geometry type of the output.
        normalized: Whether any longitude was moved into ``[-180, 180]``.
        split: Whether any polygon was cut at the antimeridian.
        crossing_count: Antimeridian-crossing edges across all rings.
        polygon_count: Polygons in the output (0 for non-polygonal input).
        input_area: Planar area of the input, square degrees.
        output_area: Planar area of the output, square degrees.
    """

    schema_version: str = SCHEMA_VERSION
    input_wkt: str
    output_wkt: str
    input_type: str
    output_type: str
    normalized: bool = False
    split: bool = False
    crossing_count: int = Field(default=0, ge=0)
    polygon_count: int = Field(default=0, ge=0)
    input_area: float = 0.0
    output_area: float = 0.0
