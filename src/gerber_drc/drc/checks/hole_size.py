"""Drill hole size check."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...model import DrillHit, DrillSlot
from ...rules.model import ConstraintType
from ..violation import Violation
from .base import DrcCheck

if TYPE_CHECKING:
    from ...board import BoardInput
    from ...rules.model import Constraint, Rule


class HoleSizeCheck(DrcCheck):
    """Check tool diameters of every hit and slot against min/max.

    Holes go through the whole stack, so violations carry no layer.
    """

    constraint_type = ConstraintType.HOLE_SIZE
    name = "Hole Size"

    def check(self, rule: Rule, constraint: Constraint, board: BoardInput) -> list[Violation]:
        violations = []

        for drill in board.drill_files:
            uf = drill.unit_factor

            for op in drill.operations:
                diameter = op.tool.diameter * uf
                if isinstance(op, DrillHit):
                    x, y = op.x * uf, op.y * uf
                elif isinstance(op, DrillSlot):
                    cx, cy = op.center
                    x, y = cx * uf, cy * uf
                else:
                    continue

                if constraint.min_mm is not None and diameter < constraint.min_mm:
                    violations.append(
                        self.violation(
                            rule, constraint, "Hole size too small",
                            diameter, constraint.min_mm, x, y, None,
                        )
                    )
                if constraint.max_mm is not None and diameter > constraint.max_mm:
                    violations.append(
                        self.violation(
                            rule, constraint, "Hole size too large",
                            diameter, constraint.max_mm, x, y, None,
                        )
                    )

        return violations
