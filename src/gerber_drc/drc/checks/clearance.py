"""Copper-to-copper clearance check."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shapely.ops import nearest_points

from ...geometry import GerberGeometryConverter, SpatialIndex
from ...rules.model import ConstraintType
from ..violation import Violation
from .base import DrcCheck

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

    from ...board import BoardInput
    from ...rules.model import Constraint, Rule

logger = logging.getLogger(__name__)


def midpoint_between(a: BaseGeometry, b: BaseGeometry) -> tuple[float, float]:
    """Midpoint of the closest points of two geometries."""
    p, q = nearest_points(a, b)
    return (p.x + q.x) / 2, (p.y + q.y) / 2


class ClearanceCheck(DrcCheck):
    """Check spacing between geometries on the same copper layer.

    Without a netlist every pair of separate shapes is treated as two
    conductors. Touching or overlapping shapes (distance 0) are the same
    copper as far as Gerber can tell and are not reported.
    """

    constraint_type = ConstraintType.CLEARANCE
    name = "Clearance"

    def __init__(self) -> None:
        self.converter = GerberGeometryConverter()

    def check(self, rule: Rule, constraint: Constraint, board: BoardInput) -> list[Violation]:
        violations: list[Violation] = []
        if constraint.min_mm is None:
            return violations

        min_clearance = constraint.min_mm

        for layer_name, doc in self.selected_copper_layers(rule, board):
            geometries = self.converter.convert(doc)
            if len(geometries) < 2:
                continue

            index = SpatialIndex()
            index.insert_all(geometries)

            for i, j in index.pairs_within(min_clearance):
                distance = geometries[i].distance(geometries[j])
                if 0 < distance < min_clearance:
                    x, y = midpoint_between(geometries[i], geometries[j])
                    violations.append(
                        self.violation(
                            rule, constraint, "Clearance violation",
                            distance, min_clearance, x, y, layer_name,
                        )
                    )

            logger.debug(f"Clearance on {layer_name}: {len(geometries)} geometries")

        return violations
