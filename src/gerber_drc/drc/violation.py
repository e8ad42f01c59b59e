"""DRC violation data structure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..rules.model import Constraint, Rule, Severity


@dataclass(frozen=True)
class Violation:
    """A single rule breach found on the board.

    Attributes:
        rule: The rule that was violated
        constraint: The constraint of that rule that failed
        severity: Inherited from the rule
        description: What went wrong, e.g. "Track width too small"
        measured_mm: Measured value, when the check has one
        required_mm: The limit the measurement was compared against
        x: Location in mm
        y: Location in mm
        layer: Canonical layer name, None for board-wide features (holes)
    """

    rule: Rule
    constraint: Constraint
    severity: Severity
    description: str
    measured_mm: Optional[float] = None
    required_mm: Optional[float] = None
    x: float = 0.0
    y: float = 0.0
    layer: Optional[str] = None

    @property
    def is_error(self) -> bool:
        """Check if this is an error (vs warning)."""
        return self.severity == Severity.ERROR

    @property
    def location(self) -> tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "rule": self.rule.name,
            "constraint": self.constraint.type.value,
            "severity": self.severity.value,
            "description": self.description,
            "measured_mm": self.measured_mm,
            "required_mm": self.required_mm,
            "x": self.x,
            "y": self.y,
            "layer": self.layer,
        }

    def __str__(self) -> str:
        text = f"[{self.severity}] {self.rule.name}: {self.description}"
        if self.measured_mm is not None and self.required_mm is not None:
            text += f" (measured={self.measured_mm:.4f}mm, required={self.required_mm:.4f}mm)"
        text += f" at ({self.x:.4f}, {self.y:.4f})"
        if self.layer is not None:
            text += f" on {self.layer}"
        return text
