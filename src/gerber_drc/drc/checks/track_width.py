"""Track width check."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...model import CircleAperture, Draw, RectangleAperture
from ...rules.model import ConstraintType
from ..condition import ConditionResult, evaluate_for_object
from ..violation import Violation
from .base import DrcCheck

if TYPE_CHECKING:
    from ...board import BoardInput
    from ...model.gerber import Aperture
    from ...rules.model import Constraint, Rule


def track_width(aperture: Aperture) -> float:
    """Stroke width of a draw, in aperture units; 0 when unknown.

    Rectangles use their smaller side.
    """
    if isinstance(aperture, CircleAperture):
        return aperture.diameter
    if isinstance(aperture, RectangleAperture):
        return min(aperture.width, aperture.height)
    return 0.0


class TrackWidthCheck(DrcCheck):
    """Check the width of every straight draw on the selected copper layers.

    This is the only check that narrows by object type: a rule conditioned
    on ``A.Type == 'track'`` applies to draws, one conditioned on pads
    applies to nothing here.
    """

    constraint_type = ConstraintType.TRACK_WIDTH
    name = "Track Width"

    def check(self, rule: Rule, constraint: Constraint, board: BoardInput) -> list[Violation]:
        violations = []

        for layer_name, doc in self.selected_copper_layers(rule, board):
            uf = doc.unit_factor

            for obj in doc.objects:
                if not isinstance(obj, Draw):
                    continue
                if evaluate_for_object(rule.condition, obj) != ConditionResult.APPLICABLE:
                    continue

                width = track_width(obj.aperture) * uf
                if width <= 0:
                    continue

                x = uf * (obj.start_x + obj.end_x) / 2
                y = uf * (obj.start_y + obj.end_y) / 2

                if constraint.min_mm is not None and width < constraint.min_mm:
                    violations.append(
                        self.violation(
                            rule, constraint, "Track width too small",
                            width, constraint.min_mm, x, y, layer_name,
                        )
                    )
                if constraint.max_mm is not None and width > constraint.max_mm:
                    violations.append(
                        self.violation(
                            rule, constraint, "Track width too large",
                            width, constraint.max_mm, x, y, layer_name,
                        )
                    )

        return violations
