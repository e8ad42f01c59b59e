"""DRC report produced by a runner."""

from __future__ import annotations

from dataclasses import dataclass

from ..rules.model import Rule, Severity
from .violation import Violation


@dataclass(frozen=True)
class DrcReport:
    """Violations in the order they were found, plus the rules that were skipped.

    A rule is skipped when its condition cannot be evaluated from
    fabrication data alone (net names, plating, via/pad distinction).
    Reports are immutable once a runner returns them.
    """

    violations: tuple[Violation, ...] = ()
    skipped_rules: tuple[Rule, ...] = ()

    @property
    def violation_count(self) -> int:
        """Total number of violations."""
        return len(self.violations)

    @property
    def errors(self) -> list[Violation]:
        """Get only error-level violations."""
        return [v for v in self.violations if v.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Violation]:
        """Get only warning-level violations."""
        return [v for v in self.violations if v.severity == Severity.WARNING]

    @property
    def error_count(self) -> int:
        """Number of error-level violations."""
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        """Number of warning-level violations."""
        return len(self.warnings)

    @property
    def has_errors(self) -> bool:
        return any(v.severity == Severity.ERROR for v in self.violations)

    def by_rule(self, rule: Rule) -> list[Violation]:
        """Violations attributable to one rule."""
        return [v for v in self.violations if v.rule is rule]

    def summary(self) -> dict:
        """Generate a summary of the report."""
        by_constraint: dict[str, int] = {}
        for v in self.violations:
            key = v.constraint.type.value
            by_constraint[key] = by_constraint.get(key, 0) + 1
        return {
            "total_violations": self.violation_count,
            "errors": self.error_count,
            "warnings": self.warning_count,
            "skipped_rules": len(self.skipped_rules),
            "by_constraint": by_constraint,
        }

    def to_dict(self) -> dict:
        """Convert report to dictionary."""
        return {
            "violation_count": self.violation_count,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "violations": [v.to_dict() for v in self.violations],
            "skipped_rules": [
                {"name": r.name, "condition": r.condition} for r in self.skipped_rules
            ],
        }

    def __str__(self) -> str:
        lines = [
            "DRC Report:",
            f"  Violations: {self.violation_count} "
            f"({self.error_count} errors, {self.warning_count} warnings)",
            f"  Skipped rules: {len(self.skipped_rules)}",
        ]
        lines.extend(f"  - {v}" for v in self.violations)
        if self.skipped_rules:
            lines.append("  Skipped:")
            for rule in self.skipped_rules:
                entry = f"  - {rule.name}"
                if rule.condition is not None:
                    entry += f" (condition: {rule.condition})"
                lines.append(entry)
        return "\n".join(lines) + "\n"
