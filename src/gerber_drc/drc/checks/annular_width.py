"""Annular ring width check."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...model import CircleAperture, DrillHit, Flash, RectangleAperture
from ...rules.model import ConstraintType
from ..violation import Violation
from .base import DrcCheck

if TYPE_CHECKING:
    from ...board import BoardInput
    from ...model.gerber import Aperture
    from ...rules.model import Constraint, Rule

# Max offset between a hit and a flash centre, per axis
POSITION_TOLERANCE_MM = 0.01


def pad_diameter(aperture: Aperture) -> float:
    """Effective pad diameter in aperture units; 0 for shapes without one.

    Rectangles use their smaller side.
    """
    if isinstance(aperture, CircleAperture):
        return aperture.diameter
    if isinstance(aperture, RectangleAperture):
        return min(aperture.width, aperture.height)
    return 0.0


class AnnularWidthCheck(DrcCheck):
    """Check the copper ring left around each drill hit.

    A hit is matched to every flash on the selected copper layers whose
    centre lies within ``POSITION_TOLERANCE_MM`` on both axes; each match
    is checked separately.
    """

    constraint_type = ConstraintType.ANNULAR_WIDTH
    name = "Annular Width"

    def check(self, rule: Rule, constraint: Constraint, board: BoardInput) -> list[Violation]:
        violations: list[Violation] = []
        if constraint.min_mm is None:
            return violations

        layers = list(self.selected_copper_layers(rule, board))

        for drill in board.drill_files:
            duf = drill.unit_factor

            for op in drill.operations:
                if not isinstance(op, DrillHit):
                    continue

                drill_d = op.tool.diameter * duf
                hx, hy = op.x * duf, op.y * duf

                for layer_name, doc in layers:
                    guf = doc.unit_factor
                    for obj in doc.objects:
                        if not isinstance(obj, Flash):
                            continue
                        if (
                            abs(obj.x * guf - hx) > POSITION_TOLERANCE_MM
                            or abs(obj.y * guf - hy) > POSITION_TOLERANCE_MM
                        ):
                            continue

                        pad_d = pad_diameter(obj.aperture) * guf
                        if pad_d <= 0:
                            continue

                        # A drill wider than its pad leaves no ring at all
                        annular = max((pad_d - drill_d) / 2, 0.0)
                        if annular < constraint.min_mm:
                            violations.append(
                                self.violation(
                                    rule, constraint, "Annular width too small",
                                    annular, constraint.min_mm, hx, hy, layer_name,
                                )
                            )

        return violations
