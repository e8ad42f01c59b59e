"""Copper-to-board-edge clearance check."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...board import EDGE_CUTS
from ...geometry import GerberGeometryConverter, SpatialIndex
from ...rules.model import ConstraintType
from ..violation import Violation
from .base import DrcCheck
from .clearance import midpoint_between

if TYPE_CHECKING:
    from ...board import BoardInput
    from ...rules.model import Constraint, Rule


class EdgeClearanceCheck(DrcCheck):
    """Check the distance from copper to the ``Edge.Cuts`` outline.

    Boards without an outline layer produce no violations. Copper touching
    the outline (distance 0) is reported.
    """

    constraint_type = ConstraintType.EDGE_CLEARANCE
    name = "Edge Clearance"

    def __init__(self) -> None:
        self.converter = GerberGeometryConverter()

    def check(self, rule: Rule, constraint: Constraint, board: BoardInput) -> list[Violation]:
        violations: list[Violation] = []
        if constraint.min_mm is None:
            return violations

        min_clearance = constraint.min_mm

        edge_doc = board.get_layer(EDGE_CUTS)
        if edge_doc is None:
            return violations

        edges = self.converter.convert(edge_doc)
        if not edges:
            return violations

        edge_index = SpatialIndex()
        edge_index.insert_all(edges)

        for layer_name, doc in self.selected_copper_layers(rule, board):
            for copper in self.converter.convert(doc):
                for edge in edge_index.query_neighbors(copper, min_clearance):
                    distance = copper.distance(edge)
                    if 0 <= distance < min_clearance:
                        x, y = midpoint_between(copper, edge)
                        violations.append(
                            self.violation(
                                rule, constraint, "Edge clearance violation",
                                distance, min_clearance, x, y, layer_name,
                            )
                        )

        return violations
