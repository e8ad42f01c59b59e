"""Planar geometry realization (shapely) and spatial indexing (rtree)."""

from .converter import (
    ARC_SEGMENTS,
    DrillGeometryConverter,
    GerberGeometryConverter,
    arc_to_coordinates,
    draw_radius,
)
from .spatial import SpatialIndex, expand_bounds

__all__ = [
    "ARC_SEGMENTS",
    "GerberGeometryConverter",
    "DrillGeometryConverter",
    "arc_to_coordinates",
    "draw_radius",
    "SpatialIndex",
    "expand_bounds",
]
