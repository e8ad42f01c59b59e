"""
In-memory Gerber document model.

A Gerber parser (or a test) fills a GerberDocument with apertures and
graphics objects. Coordinates and sizes are stored in the document's
declared unit; consumers convert with ``doc.unit_factor``.

Example::

    doc = GerberDocument(Unit.MM, file_function="Copper,L1,Top")
    d10 = doc.add_aperture(CircleAperture(10, 0.2))
    doc.add_object(Draw(0, 0, 10, 0, d10))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from ..units import Unit


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        """Width of the box."""
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        """Height of the box."""
        return self.max_y - self.min_y

    def union(self, other: BoundingBox) -> BoundingBox:
        """Return the bounding box containing both boxes."""
        return BoundingBox(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def translate(self, dx: float, dy: float) -> BoundingBox:
        """Return a new box translated by (dx, dy)."""
        return BoundingBox(self.min_x + dx, self.min_y + dy, self.max_x + dx, self.max_y + dy)

    @classmethod
    def from_center(cls, width: float, height: float) -> BoundingBox:
        """Create a box of the given size centred on the origin."""
        hw, hh = width / 2, height / 2
        return cls(-hw, -hh, hw, hh)


# Apertures


@dataclass(frozen=True)
class CircleAperture:
    """Standard circle aperture (C)."""

    code: int
    diameter: float

    @property
    def radius(self) -> float:
        return self.diameter / 2

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_center(self.diameter, self.diameter)


@dataclass(frozen=True)
class RectangleAperture:
    """Standard rectangle aperture (R)."""

    code: int
    width: float
    height: float

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_center(self.width, self.height)


@dataclass(frozen=True)
class ObroundAperture:
    """Standard obround aperture (O)."""

    code: int
    width: float
    height: float

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_center(self.width, self.height)


@dataclass(frozen=True)
class PolygonAperture:
    """Standard regular polygon aperture (P)."""

    code: int
    outer_diameter: float
    vertices: int
    rotation: float = 0.0

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_center(self.outer_diameter, self.outer_diameter)


@dataclass(frozen=True)
class MacroAperture:
    """Aperture instantiated from an aperture macro (AM).

    Primitives are not modelled; the parser supplies the extent of the
    expanded macro instead.
    """

    code: int
    name: str
    extent: BoundingBox

    def bounding_box(self) -> BoundingBox:
        return self.extent


Aperture = Union[CircleAperture, RectangleAperture, ObroundAperture, PolygonAperture, MacroAperture]


# Graphics objects


@dataclass(eq=False)
class Flash:
    """Aperture stamped at a point (D03)."""

    x: float
    y: float
    aperture: Aperture


@dataclass(eq=False)
class Draw:
    """Straight stroke from start to end (D01 in linear mode)."""

    start_x: float
    start_y: float
    end_x: float
    end_y: float
    aperture: Aperture


@dataclass(eq=False)
class Arc:
    """Circular stroke around a centre (D01 in G02/G03 mode)."""

    start_x: float
    start_y: float
    end_x: float
    end_y: float
    center_x: float
    center_y: float
    clockwise: bool
    aperture: Aperture


@dataclass(frozen=True)
class ContourSegment:
    """One segment of a region contour, ending at (x, y)."""

    x: float
    y: float
    arc: bool = False
    center_x: float = 0.0
    center_y: float = 0.0
    clockwise: bool = False

    @classmethod
    def line(cls, x: float, y: float) -> ContourSegment:
        """Straight segment to (x, y)."""
        return cls(x, y)

    @classmethod
    def arc_to(
        cls, x: float, y: float, center_x: float, center_y: float, clockwise: bool = False
    ) -> ContourSegment:
        """Circular segment to (x, y) around (center_x, center_y)."""
        return cls(x, y, True, center_x, center_y, clockwise)


@dataclass
class Contour:
    """Closed outline of a region, starting at (start_x, start_y)."""

    start_x: float
    start_y: float
    segments: list[ContourSegment] = field(default_factory=list)


@dataclass(eq=False)
class Region:
    """Filled area bounded by one or more contours (G36/G37)."""

    contours: list[Contour] = field(default_factory=list)


GraphicsObject = Union[Flash, Draw, Arc, Region]


def object_bounding_box(obj: GraphicsObject) -> Optional[BoundingBox]:
    """Bounding box of a graphics object in document units, stroke included."""
    if isinstance(obj, Flash):
        return obj.aperture.bounding_box().translate(obj.x, obj.y)

    if isinstance(obj, (Draw, Arc)):
        extent = obj.aperture.bounding_box()
        reach = max(extent.width, extent.height) / 2
        if isinstance(obj, Arc):
            radius = ((obj.start_x - obj.center_x) ** 2 + (obj.start_y - obj.center_y) ** 2) ** 0.5
            return BoundingBox(
                obj.center_x - radius - reach,
                obj.center_y - radius - reach,
                obj.center_x + radius + reach,
                obj.center_y + radius + reach,
            )
        return BoundingBox(
            min(obj.start_x, obj.end_x) - reach,
            min(obj.start_y, obj.end_y) - reach,
            max(obj.start_x, obj.end_x) + reach,
            max(obj.start_y, obj.end_y) + reach,
        )

    points = [(c.start_x, c.start_y) for c in obj.contours]
    points.extend((s.x, s.y) for c in obj.contours for s in c.segments)
    if not points:
        return None
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return BoundingBox(min(xs), min(ys), max(xs), max(ys))


class GerberDocument:
    """A single Gerber layer: unit, optional X2 file function, apertures, objects."""

    def __init__(self, unit: Unit = Unit.MM, file_function: Optional[str] = None):
        self.unit = unit
        self.file_function = file_function
        self._apertures: dict[int, Aperture] = {}
        self._objects: list[GraphicsObject] = []

    @property
    def unit_factor(self) -> float:
        """Multiplier turning document values into millimetres."""
        return self.unit.factor

    @property
    def apertures(self) -> dict[int, Aperture]:
        return dict(self._apertures)

    @property
    def objects(self) -> list[GraphicsObject]:
        return list(self._objects)

    def add_aperture(self, aperture: Aperture) -> Aperture:
        """Register an aperture under its D-code and return it."""
        self._apertures[aperture.code] = aperture
        return aperture

    def aperture(self, code: int) -> Aperture:
        """Look up an aperture by D-code.

        Raises:
            KeyError: If the D-code was never defined
        """
        try:
            return self._apertures[code]
        except KeyError:
            raise KeyError(f"Aperture D{code} is not defined") from None

    def add_object(self, obj: GraphicsObject) -> GraphicsObject:
        """Append a graphics object."""
        self._objects.append(obj)
        return obj

    def bounding_box(self) -> Optional[BoundingBox]:
        """Bounding box of all objects in document units, or None if empty."""
        result: Optional[BoundingBox] = None
        for obj in self._objects:
            box = object_bounding_box(obj)
            if box is None:
                continue
            result = box if result is None else result.union(box)
        return result

    def __len__(self) -> int:
        return len(self._objects)

    def __repr__(self) -> str:
        return (
            f"GerberDocument(unit={self.unit.value!r}, "
            f"file_function={self.file_function!r}, objects={len(self._objects)})"
        )
