"""
Conversion of Gerber graphics objects and drill operations to shapely
geometries in millimetres.

Every coordinate and aperture dimension is multiplied by the owning
document's unit factor exactly once, here. Downstream code never sees
native units.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from shapely.geometry import LineString, MultiPolygon, Point, Polygon, box
from shapely.geometry.base import BaseGeometry

from ..model import (
    Arc,
    CircleAperture,
    Contour,
    DrillDocument,
    DrillHit,
    DrillOperation,
    DrillSlot,
    Draw,
    Flash,
    GerberDocument,
    GraphicsObject,
    RectangleAperture,
    Region,
)
from ..model.gerber import Aperture

logger = logging.getLogger(__name__)

__all__ = [
    "ARC_SEGMENTS",
    "QUAD_SEGS",
    "CLOSED_ARC_TOLERANCE_MM",
    "GerberGeometryConverter",
    "DrillGeometryConverter",
    "arc_to_coordinates",
    "draw_radius",
]

# Segments per full circle for polygonised arcs
ARC_SEGMENTS = 32
# Buffer resolution (segments per quarter circle)
QUAD_SEGS = ARC_SEGMENTS // 4
# Start/end closer than this makes an arc a full circle
CLOSED_ARC_TOLERANCE_MM = 1e-4


def arc_to_coordinates(
    start_x: float,
    start_y: float,
    end_x: float,
    end_y: float,
    center_x: float,
    center_y: float,
    clockwise: bool,
) -> list[tuple[float, float]]:
    """Polygonise a circular arc, endpoints included.

    The sweep is the signed angular distance from start to end in the arc
    direction, in (0, 2*pi]. Coincident start and end make a full circle.
    The radius is taken from the start point.

    Returns:
        ``segments + 1`` points from start to end
    """
    start_angle = math.atan2(start_y - center_y, start_x - center_x)
    end_angle = math.atan2(end_y - center_y, end_x - center_x)
    radius = math.hypot(start_x - center_x, start_y - center_y)

    if clockwise:
        sweep = start_angle - end_angle
    else:
        sweep = end_angle - start_angle
    if sweep <= 0:
        sweep += 2 * math.pi

    if math.hypot(end_x - start_x, end_y - start_y) < CLOSED_ARC_TOLERANCE_MM:
        sweep = 2 * math.pi

    segments = max(8, round(sweep / (2 * math.pi) * ARC_SEGMENTS))
    direction = -1.0 if clockwise else 1.0

    coords = []
    for i in range(segments + 1):
        angle = start_angle + direction * sweep * i / segments
        coords.append((center_x + radius * math.cos(angle), center_y + radius * math.sin(angle)))
    return coords


def draw_radius(aperture: Aperture) -> float:
    """Stroke half-width of an aperture, in the aperture's units.

    Rectangles stroke with half their larger side, which over-approximates
    the swept area for diagonal draws. Other apertures have no usable
    stroke width and return 0.
    """
    if isinstance(aperture, CircleAperture):
        return aperture.diameter / 2
    if isinstance(aperture, RectangleAperture):
        return max(aperture.width, aperture.height) / 2
    return 0.0


class GerberGeometryConverter:
    """Realizes Gerber graphics objects as planar geometries in mm.

    Example::

        converter = GerberGeometryConverter()
        geometries = converter.convert(doc)
    """

    def convert(self, doc: GerberDocument) -> list[BaseGeometry]:
        """Convert every object of a document, in object order.

        Objects that produce no geometry (degenerate contours, empty
        results) are dropped.
        """
        factor = doc.unit_factor
        geometries = []
        for obj in doc.objects:
            geom = self.convert_object(obj, factor)
            if geom is not None and not geom.is_empty:
                geometries.append(geom)
        return geometries

    def convert_object(self, obj: GraphicsObject, unit_factor: float) -> Optional[BaseGeometry]:
        """Convert a single graphics object; None when it has no area or path."""
        if isinstance(obj, Flash):
            return self._convert_flash(obj, unit_factor)
        if isinstance(obj, Draw):
            return self._convert_draw(obj, unit_factor)
        if isinstance(obj, Arc):
            return self._convert_arc(obj, unit_factor)
        if isinstance(obj, Region):
            return self._convert_region(obj, unit_factor)
        return None

    def _convert_flash(self, flash: Flash, uf: float) -> BaseGeometry:
        x, y = flash.x * uf, flash.y * uf
        aperture = flash.aperture

        if isinstance(aperture, CircleAperture):
            return Point(x, y).buffer(aperture.diameter * uf / 2, quad_segs=QUAD_SEGS)
        if isinstance(aperture, RectangleAperture):
            hw, hh = aperture.width * uf / 2, aperture.height * uf / 2
            return box(x - hw, y - hh, x + hw, y + hh)

        # Macros, polygons and obrounds: disk covering the aperture extent.
        # Shape is lost, extent is kept for proximity checks.
        # TODO: realize obround and regular polygon flashes exactly
        bbox = aperture.bounding_box()
        radius = max(bbox.width, bbox.height) * uf / 2
        return Point(x, y).buffer(radius, quad_segs=QUAD_SEGS)

    def _convert_draw(self, draw: Draw, uf: float) -> BaseGeometry:
        line = LineString(
            [(draw.start_x * uf, draw.start_y * uf), (draw.end_x * uf, draw.end_y * uf)]
        )
        radius = draw_radius(draw.aperture) * uf
        return line.buffer(radius, quad_segs=QUAD_SEGS) if radius > 0 else line

    def _convert_arc(self, arc: Arc, uf: float) -> Optional[BaseGeometry]:
        coords = arc_to_coordinates(
            arc.start_x * uf,
            arc.start_y * uf,
            arc.end_x * uf,
            arc.end_y * uf,
            arc.center_x * uf,
            arc.center_y * uf,
            arc.clockwise,
        )
        if len(coords) < 2:
            return None
        line = LineString(coords)
        radius = draw_radius(arc.aperture) * uf
        return line.buffer(radius, quad_segs=QUAD_SEGS) if radius > 0 else line

    def _convert_region(self, region: Region, uf: float) -> Optional[BaseGeometry]:
        polygons = []
        for contour in region.contours:
            coords = _contour_coordinates(contour, uf)
            if len(coords) < 4:
                logger.debug(f"Discarding degenerate contour with {len(coords)} points")
                continue
            polygons.append(Polygon(coords))

        if not polygons:
            return None
        if len(polygons) == 1:
            return polygons[0]
        return MultiPolygon(polygons)


def _contour_coordinates(contour: Contour, uf: float) -> list[tuple[float, float]]:
    current = (contour.start_x * uf, contour.start_y * uf)
    coords = [current]

    for seg in contour.segments:
        end = (seg.x * uf, seg.y * uf)
        if seg.arc:
            arc = arc_to_coordinates(
                current[0],
                current[1],
                end[0],
                end[1],
                seg.center_x * uf,
                seg.center_y * uf,
                seg.clockwise,
            )
            # First point repeats the running position
            coords.extend(arc[1:])
        else:
            coords.append(end)
        current = end

    if coords[0] != coords[-1]:
        coords.append(coords[0])
    return coords


class DrillGeometryConverter:
    """Realizes drill hits as disks and slots as stadiums, in mm."""

    def convert(self, doc: DrillDocument) -> list[BaseGeometry]:
        factor = doc.unit_factor
        geometries = []
        for op in doc.operations:
            geom = self.convert_operation(op, factor)
            if geom is not None and not geom.is_empty:
                geometries.append(geom)
        return geometries

    def convert_operation(self, op: DrillOperation, unit_factor: float) -> Optional[BaseGeometry]:
        radius = op.tool.diameter * unit_factor / 2

        if isinstance(op, DrillHit):
            return Point(op.x * unit_factor, op.y * unit_factor).buffer(radius, quad_segs=QUAD_SEGS)
        if isinstance(op, DrillSlot):
            line = LineString(
                [
                    (op.start_x * unit_factor, op.start_y * unit_factor),
                    (op.end_x * unit_factor, op.end_y * unit_factor),
                ]
            )
            return line.buffer(radius, quad_segs=QUAD_SEGS)
        return None
