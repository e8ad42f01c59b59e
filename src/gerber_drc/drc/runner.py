"""
DRC runner: dispatches each rule's constraints to the registered checks.

Example::

    from gerber_drc.drc import DrcRunner
    from gerber_drc.rules import pcbway

    report = DrcRunner.default().run(pcbway(), board)
    for v in report.errors:
        print(v)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional

from ..rules.model import ConstraintType, Rule, RuleSet, Severity
from .checks import DrcCheck, default_checks
from .condition import ConditionResult, evaluate
from .report import DrcReport

if TYPE_CHECKING:
    from ..board import BoardInput
    from .violation import Violation

logger = logging.getLogger(__name__)


class DrcRunner:
    """Holds one check per constraint kind and runs rule sets against boards.

    The runner never fails because of a rule. For each rule it either
    dispatches the constraints, records the rule as skipped (unsupported
    condition), or moves on (ignore severity, no check registered for a
    constraint kind).
    """

    def __init__(self, checks: Optional[Iterable[DrcCheck]] = None):
        self._checks: dict[ConstraintType, DrcCheck] = {}
        for check in checks or ():
            self.register_check(check)

    @classmethod
    def default(cls) -> DrcRunner:
        """Runner with all six built-in checks registered."""
        return cls(default_checks())

    def register_check(self, check: DrcCheck) -> DrcRunner:
        """Register a check for its constraint kind, replacing any earlier one."""
        self._checks[check.constraint_type] = check
        return self

    @property
    def checks(self) -> dict[ConstraintType, DrcCheck]:
        return dict(self._checks)

    def run(self, rule_set: RuleSet, board: BoardInput) -> DrcReport:
        """Evaluate every rule of a rule set against a board.

        Violations are reported in rule order, then constraint order, then
        each check's own iteration order.
        """
        violations: list[Violation] = []
        skipped: list[Rule] = []

        for rule in rule_set.rules:
            if rule.severity == Severity.IGNORE:
                continue

            if evaluate(rule.condition) == ConditionResult.UNSUPPORTED:
                logger.debug(f"Skipping rule {rule.name!r}: unsupported condition")
                skipped.append(rule)
                continue

            for constraint in rule.constraints:
                check = self._checks.get(constraint.type)
                if check is None:
                    continue
                violations.extend(check.check(rule, constraint, board))

        report = DrcReport(tuple(violations), tuple(skipped))
        logger.info(
            f"DRC finished: {report.violation_count} violations, "
            f"{len(report.skipped_rules)} rules skipped"
        )
        return report
