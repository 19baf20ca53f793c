"""WKT Antimeridian.

Normalises longitudes of WKT polygon geometries into [-180, 180] and
splits polygons that cross the antimeridian into non-crossing pieces
that preserve the original area.
"""

__version__ = "0.1.0"
