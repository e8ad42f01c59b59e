"""
Gerber and Excellon document model.

These are the documents the DRC core consumes. Lexing and parsing of the
RS-274X and Excellon formats is left to a parser library; the parser
fills these classes in.
"""

from ..units import Unit
from .drill import DrillDocument, DrillHit, DrillOperation, DrillSlot, Tool
from .gerber import (
    Aperture,
    Arc,
    BoundingBox,
    CircleAperture,
    Contour,
    ContourSegment,
    Draw,
    Flash,
    GerberDocument,
    GraphicsObject,
    MacroAperture,
    ObroundAperture,
    PolygonAperture,
    RectangleAperture,
    Region,
    object_bounding_box,
)

__all__ = [
    "Unit",
    # Gerber
    "GerberDocument",
    "BoundingBox",
    "Aperture",
    "CircleAperture",
    "RectangleAperture",
    "ObroundAperture",
    "PolygonAperture",
    "MacroAperture",
    "GraphicsObject",
    "Flash",
    "Draw",
    "Arc",
    "Region",
    "Contour",
    "ContourSegment",
    "object_bounding_box",
    # Drill
    "DrillDocument",
    "DrillOperation",
    "DrillHit",
    "DrillSlot",
    "Tool",
]
