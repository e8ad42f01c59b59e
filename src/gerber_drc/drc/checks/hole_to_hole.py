"""Hole-to-hole spacing check."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from ...model import DrillHit
from ...rules.model import ConstraintType
from ..violation import Violation
from .base import DrcCheck

if TYPE_CHECKING:
    from ...board import BoardInput
    from ...rules.model import Constraint, Rule


def collect_hits(board: BoardInput) -> np.ndarray:
    """All drill hits across the board's drill files as an (N, 3) array.

    Columns are x, y and radius, in mm, in drill-file then operation order.
    Slots are not included.
    """
    rows = []
    for drill in board.drill_files:
        uf = drill.unit_factor
        for op in drill.operations:
            if isinstance(op, DrillHit):
                rows.append((op.x * uf, op.y * uf, op.tool.diameter * uf / 2))
    if not rows:
        return np.empty((0, 3), dtype=float)
    return np.asarray(rows, dtype=float)


class HoleToHoleCheck(DrcCheck):
    """Check the edge-to-edge spacing of every pair of drill hits.

    Overlapping holes (negative edge distance) are not reported here.
    """

    constraint_type = ConstraintType.HOLE_TO_HOLE
    name = "Hole to Hole"

    def check(self, rule: Rule, constraint: Constraint, board: BoardInput) -> list[Violation]:
        violations: list[Violation] = []
        if constraint.min_mm is None:
            return violations

        min_spacing = constraint.min_mm
        hits = collect_hits(board)

        # Row i is compared against every later hit, so pairs come out as
        # (i, j) with i < j in hit order.
        for i in range(len(hits) - 1):
            x1, y1, r1 = hits[i]
            rest = hits[i + 1 :]
            edge = np.hypot(rest[:, 0] - x1, rest[:, 1] - y1) - r1 - rest[:, 2]
            for k in np.flatnonzero((edge >= 0) & (edge < min_spacing)):
                x2, y2, _ = rest[k]
                violations.append(
                    self.violation(
                        rule, constraint, "Hole to hole spacing too small",
                        float(edge[k]), min_spacing,
                        float((x1 + x2) / 2), float((y1 + y2) / 2), None,
                    )
                )

        return violations
