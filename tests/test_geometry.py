"""Tests for shapely realization of Gerber and drill objects."""

import math

import pytest
from shapely.geometry import LineString, MultiPolygon, Polygon

from gerber_drc.geometry import (
    ARC_SEGMENTS,
    DrillGeometryConverter,
    GerberGeometryConverter,
    arc_to_coordinates,
    draw_radius,
)
from gerber_drc.model import (
    Arc,
    BoundingBox,
    CircleAperture,
    Contour,
    ContourSegment,
    DrillDocument,
    DrillHit,
    DrillSlot,
    Draw,
    Flash,
    MacroAperture,
    ObroundAperture,
    RectangleAperture,
    Region,
    Tool,
    Unit,
)

from conftest import gerber


@pytest.fixture
def converter():
    return GerberGeometryConverter()


class TestArcToCoordinates:
    """Tests for arc polygonisation."""

    def test_quarter_arc_counter_clockwise(self):
        coords = arc_to_coordinates(1, 0, 0, 1, 0, 0, clockwise=False)
        assert len(coords) == 8 + 1
        assert coords[0] == pytest.approx((1, 0))
        assert coords[-1] == pytest.approx((0, 1))
        # Every point stays on the circle
        for x, y in coords:
            assert math.hypot(x, y) == pytest.approx(1.0)

    def test_clockwise_takes_the_long_way(self):
        """Clockwise from (1, 0) to (0, 1) sweeps three quarters."""
        coords = arc_to_coordinates(1, 0, 0, 1, 0, 0, clockwise=True)
        assert len(coords) == 24 + 1
        assert coords[len(coords) // 2][1] < 0

    def test_coincident_endpoints_make_full_circle(self):
        coords = arc_to_coordinates(2, 0, 2, 0, 0, 0, clockwise=False)
        assert len(coords) == ARC_SEGMENTS + 1
        assert coords[0] == pytest.approx(coords[-1])

    def test_small_sweep_uses_minimum_segments(self):
        coords = arc_to_coordinates(1, 0, math.cos(0.1), math.sin(0.1), 0, 0, clockwise=False)
        assert len(coords) == 9


class TestDrawRadius:
    def test_circle(self):
        assert draw_radius(CircleAperture(10, 0.2)) == pytest.approx(0.1)

    def test_rectangle_uses_larger_side(self):
        assert draw_radius(RectangleAperture(11, 0.2, 0.6)) == pytest.approx(0.3)

    def test_other_apertures_have_no_stroke(self):
        assert draw_radius(ObroundAperture(12, 1.0, 2.0)) == 0.0


class TestFlashConversion:
    """Flashes become disks or boxes."""

    def test_circle_flash(self, converter):
        geom = converter.convert_object(Flash(5, 5, CircleAperture(10, 1.0)), 1.0)
        assert geom.bounds == pytest.approx((4.5, 4.5, 5.5, 5.5))
        # Polygonised disk is slightly smaller than the true circle
        assert geom.area == pytest.approx(math.pi * 0.25, rel=0.02)

    def test_rectangle_flash(self, converter):
        geom = converter.convert_object(Flash(0, 0, RectangleAperture(11, 2.0, 1.0)), 1.0)
        assert geom.bounds == pytest.approx((-1.0, -0.5, 1.0, 0.5))
        assert geom.area == pytest.approx(2.0)

    def test_macro_flash_falls_back_to_disk(self, converter):
        aperture = MacroAperture(12, "THERMAL", BoundingBox.from_center(2.0, 1.0))
        geom = converter.convert_object(Flash(0, 0, aperture), 1.0)
        assert geom.bounds == pytest.approx((-1.0, -1.0, 1.0, 1.0))

    def test_obround_flash_falls_back_to_disk(self, converter):
        geom = converter.convert_object(Flash(0, 0, ObroundAperture(13, 1.0, 3.0)), 1.0)
        assert geom.bounds == pytest.approx((-1.5, -1.5, 1.5, 1.5))

    def test_inch_factor_applied_once(self, converter):
        doc = gerber(Unit.INCH)
        aperture = doc.add_aperture(CircleAperture(10, 0.1))
        doc.add_object(Flash(1.0, 0.0, aperture))

        (geom,) = converter.convert(doc)
        assert geom.bounds == pytest.approx((25.4 - 1.27, -1.27, 25.4 + 1.27, 1.27))


class TestDrawConversion:
    """Draws are buffered by the aperture half-width."""

    def test_circle_draw(self, converter):
        geom = converter.convert_object(Draw(0, 0, 10, 0, CircleAperture(10, 0.2)), 1.0)
        assert geom.bounds == pytest.approx((-0.1, -0.1, 10.1, 0.1))

    def test_rectangle_draw_uses_larger_side(self, converter):
        geom = converter.convert_object(Draw(0, 0, 10, 0, RectangleAperture(11, 0.2, 0.4)), 1.0)
        assert geom.bounds == pytest.approx((-0.2, -0.2, 10.2, 0.2))

    def test_draw_without_stroke_width_is_a_line(self, converter):
        geom = converter.convert_object(Draw(0, 0, 10, 0, ObroundAperture(12, 1, 2)), 1.0)
        assert isinstance(geom, LineString)

    def test_arc_draw(self, converter):
        arc = Arc(1, 0, -1, 0, 0, 0, clockwise=False, aperture=CircleAperture(10, 0.2))
        geom = converter.convert_object(arc, 1.0)
        min_x, min_y, max_x, max_y = geom.bounds
        assert max_y == pytest.approx(1.1, abs=1e-3)
        assert min_y == pytest.approx(-0.1, abs=1e-3)


class TestRegionConversion:
    """Regions become polygons; degenerate contours are dropped."""

    def test_square_region(self, converter):
        contour = Contour(
            0, 0, [ContourSegment.line(2, 0), ContourSegment.line(2, 2), ContourSegment.line(0, 2)]
        )
        geom = converter.convert_object(Region([contour]), 1.0)
        assert isinstance(geom, Polygon)
        assert geom.area == pytest.approx(4.0)

    def test_region_with_arc_segment(self, converter):
        """A half-disk: straight edge plus a counter-clockwise arc back."""
        contour = Contour(
            -1, 0, [ContourSegment.line(1, 0), ContourSegment.arc_to(-1, 0, 0, 0, clockwise=False)]
        )
        geom = converter.convert_object(Region([contour]), 1.0)
        assert geom.area == pytest.approx(math.pi / 2, rel=0.02)

    def test_two_contours(self, converter):
        square = [ContourSegment.line(1, 0), ContourSegment.line(1, 1), ContourSegment.line(0, 1)]
        region = Region([Contour(0, 0, list(square)), Contour(5, 0, [
            ContourSegment.line(6, 0), ContourSegment.line(6, 1), ContourSegment.line(5, 1),
        ])])
        geom = converter.convert_object(region, 1.0)
        assert isinstance(geom, MultiPolygon)
        assert len(geom.geoms) == 2

    def test_degenerate_contour_discarded(self, converter):
        contour = Contour(0, 0, [ContourSegment.line(1, 0)])
        assert converter.convert_object(Region([contour]), 1.0) is None

    def test_document_drops_empty_results(self, converter):
        doc = gerber()
        doc.add_object(Region([Contour(0, 0, [])]))
        aperture = doc.add_aperture(CircleAperture(10, 1.0))
        doc.add_object(Flash(0, 0, aperture))
        assert len(converter.convert(doc)) == 1


class TestDrillConversion:
    """Hits become disks, slots become stadiums."""

    def test_hit(self):
        doc = DrillDocument()
        tool = doc.add_tool(Tool(1, 0.8))
        doc.add_operation(DrillHit(tool, 2, 3))
        (geom,) = DrillGeometryConverter().convert(doc)
        assert geom.bounds == pytest.approx((1.6, 2.6, 2.4, 3.4))

    def test_slot(self):
        doc = DrillDocument()
        tool = doc.add_tool(Tool(1, 1.0))
        doc.add_operation(DrillSlot(tool, 0, 0, 4, 0))
        (geom,) = DrillGeometryConverter().convert(doc)
        assert geom.bounds == pytest.approx((-0.5, -0.5, 4.5, 0.5))

    def test_inch_drill(self):
        doc = DrillDocument(Unit.INCH)
        tool = doc.add_tool(Tool(1, 0.04))
        doc.add_operation(DrillHit(tool, 1, 1))
        (geom,) = DrillGeometryConverter().convert(doc)
        assert geom.bounds[2] - geom.bounds[0] == pytest.approx(1.016)
