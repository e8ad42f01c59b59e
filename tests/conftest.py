"""Pytest fixtures and board builders for gerber-drc tests."""

import pytest

from gerber_drc.board import BoardInput
from gerber_drc.model import (
    CircleAperture,
    DrillDocument,
    DrillHit,
    Draw,
    Flash,
    GerberDocument,
    RectangleAperture,
    Tool,
    Unit,
)
from gerber_drc.rules import Constraint, ConstraintType, LayerSelector, Rule, RuleSet, Severity

# Minimal custom rules file exercising every form the builder reads
SAMPLE_DRU = """(version 1)
# Comment line
(rule "Minimum Trace Width (outer layer)"
    (constraint track_width (min 0.127mm))
    (constraint clearance (min 5mil))
    (layer outer)
    (condition "A.Type == 'track'"))

(rule "Hole Size"
    (constraint hole_size (min 0.15mm) (max 6.3mm)))

(rule "Net Clearance"
    (severity warning)
    (constraint clearance (min 0.2mm))
    (condition "A.Net != B.Net"))

(rule "No Buried Vias"
    (constraint disallow buried_via))
"""


def gerber(unit=Unit.MM, file_function=None):
    """Empty Gerber document."""
    return GerberDocument(unit, file_function=file_function)


def copper_with_draws(*draws, diameter=0.2, unit=Unit.MM):
    """Gerber document with circle-aperture draws given as (x1, y1, x2, y2)."""
    doc = GerberDocument(unit)
    aperture = doc.add_aperture(CircleAperture(10, diameter))
    for x1, y1, x2, y2 in draws:
        doc.add_object(Draw(x1, y1, x2, y2, aperture))
    return doc


def drill_with_hits(*hits, unit=Unit.MM):
    """Drill document with hits given as (diameter, x, y); one tool per diameter."""
    doc = DrillDocument(unit)
    tools = {}
    for diameter, x, y in hits:
        if diameter not in tools:
            tools[diameter] = doc.add_tool(Tool(len(tools) + 1, diameter))
        doc.add_operation(DrillHit(tools[diameter], x, y))
    return doc


def outline(width, height, line_width=0.1):
    """Edge.Cuts rectangle drawn as four strokes from (0, 0)."""
    doc = GerberDocument(Unit.MM, file_function="Profile,NP")
    aperture = doc.add_aperture(CircleAperture(10, line_width))
    corners = [(0, 0), (width, 0), (width, height), (0, height), (0, 0)]
    for (x1, y1), (x2, y2) in zip(corners, corners[1:]):
        doc.add_object(Draw(x1, y1, x2, y2, aperture))
    return doc


def pad_flash(doc, x, y, diameter, code=20):
    """Add a circular pad flash to a document."""
    aperture = doc.add_aperture(CircleAperture(code, diameter))
    return doc.add_object(Flash(x, y, aperture))


def rect_pad_flash(doc, x, y, width, height, code=30):
    """Add a rectangular pad flash to a document."""
    aperture = doc.add_aperture(RectangleAperture(code, width, height))
    return doc.add_object(Flash(x, y, aperture))


def single_rule(ctype, min_mm=None, max_mm=None, layer=None, condition=None,
                severity=Severity.ERROR, name="Test Rule"):
    """Rule set holding one rule with one constraint."""
    rule = Rule(
        name=name,
        severity=severity,
        layer=LayerSelector(layer) if layer is not None else None,
        condition=condition,
    )
    rule.add_constraint(Constraint(ctype, min_mm=min_mm, max_mm=max_mm))
    return RuleSet(version=1, rules=[rule])


@pytest.fixture
def board():
    """Empty board input."""
    return BoardInput()


@pytest.fixture
def thin_track_board():
    """F.Cu with one 0.1mm track."""
    return BoardInput().add_gerber_layer("F.Cu", copper_with_draws((0, 0, 10, 0), diameter=0.1))


@pytest.fixture
def track_rule_set():
    """Outer-layer track width rule conditioned on tracks."""
    return single_rule(
        ConstraintType.TRACK_WIDTH,
        min_mm=0.127,
        layer="outer",
        condition="A.Type == 'track'",
        name="Minimum Trace Width (outer layer)",
    )


@pytest.fixture
def sample_dru():
    return SAMPLE_DRU


@pytest.fixture
def dru_file(tmp_path):
    """SAMPLE_DRU written to a .kicad_dru file."""
    path = tmp_path / "board.kicad_dru"
    path.write_text(SAMPLE_DRU)
    return path
