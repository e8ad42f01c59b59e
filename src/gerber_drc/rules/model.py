"""
Rule model: rule sets, rules, constraints, severities and layer selectors.

A RuleSet is what both rule-file parsers produce and what the DRC runner
consumes. All constraint values are millimetres.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..board import is_inner_layer, is_outer_layer
from ..exceptions import ParseError
from ..sexp import SExp
from ..units import format_value


class Severity(Enum):
    """Rule severity. IGNORE rules are never dispatched."""

    ERROR = "error"
    WARNING = "warning"
    IGNORE = "ignore"

    @classmethod
    def from_string(cls, s: Optional[str]) -> Severity:
        """Parse a KiCad severity name; anything unrecognised is an error."""
        if s is None:
            return cls.ERROR
        s_lower = s.lower().strip()
        for severity in cls:
            if severity.value == s_lower:
                return severity
        return cls.ERROR

    def __str__(self) -> str:
        return self.name


class ConstraintType(Enum):
    """Constraint kinds, valued by their KiCad DRC names."""

    CLEARANCE = "clearance"
    TRACK_WIDTH = "track_width"
    HOLE_SIZE = "hole_size"
    HOLE_TO_HOLE = "hole_to_hole"
    EDGE_CLEARANCE = "edge_clearance"
    ANNULAR_WIDTH = "annular_width"
    SILK_CLEARANCE = "silk_clearance"
    TEXT_HEIGHT = "text_height"
    TEXT_THICKNESS = "text_thickness"
    VIA_DIAMETER = "via_diameter"
    HOLE_CLEARANCE = "hole_clearance"
    DISALLOW = "disallow"

    @classmethod
    def from_string(cls, s: str) -> ConstraintType:
        """Parse a KiCad constraint name.

        Raises:
            ParseError: If the name is not a known constraint kind
        """
        s_lower = s.lower().strip()
        for ctype in cls:
            if ctype.value == s_lower:
                return ctype
        raise ParseError(
            f"Unknown constraint type: {s!r}",
            context={"known": ", ".join(c.value for c in cls)},
        )


class LayerSelector:
    """Pattern matched against canonical layer names.

    - empty or missing: matches every layer
    - ``outer`` / ``inner`` (any case): outer or inner copper
    - containing ``?`` or ``*``: glob, dots literal, whole-name match
    - otherwise: exact name
    """

    def __init__(self, pattern: Optional[str]):
        self.pattern = (pattern or "").strip().strip("\"'")
        self._regex: Optional[re.Pattern[str]] = None
        if "?" in self.pattern or "*" in self.pattern:
            regex = "".join(
                "." if c == "?" else ".*" if c == "*" else re.escape(c) for c in self.pattern
            )
            self._regex = re.compile(regex)

    def matches(self, layer_name: str) -> bool:
        """Check whether a canonical layer name is selected."""
        if not self.pattern:
            return True

        keyword = self.pattern.lower()
        if keyword == "outer":
            return is_outer_layer(layer_name)
        if keyword == "inner":
            return is_inner_layer(layer_name)

        if self._regex is not None:
            return self._regex.fullmatch(layer_name) is not None
        return layer_name == self.pattern

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LayerSelector):
            return NotImplemented
        return self.pattern == other.pattern

    def __hash__(self) -> int:
        return hash(self.pattern)

    def __repr__(self) -> str:
        return f"LayerSelector({self.pattern!r})"

    def __str__(self) -> str:
        return self.pattern


@dataclass(frozen=True)
class Constraint:
    """A single constraint of a rule. Values are millimetres."""

    type: ConstraintType
    min_mm: Optional[float] = None
    max_mm: Optional[float] = None
    disallow: Optional[str] = None

    def describe(self) -> str:
        """Short human-readable form, e.g. ``track_width min 0.1270mm``."""
        if self.type == ConstraintType.DISALLOW:
            return f"disallow {self.disallow or ''}".strip()
        parts = [self.type.value]
        if self.min_mm is not None:
            parts.append(f"min {self.min_mm:.4f}mm")
        if self.max_mm is not None:
            parts.append(f"max {self.max_mm:.4f}mm")
        return " ".join(parts)

    def to_sexp(self, unit: str = "mm") -> SExp:
        """Serialize as a ``(constraint ...)`` form."""
        node = SExp.list("constraint", self.type.value)
        if self.type == ConstraintType.DISALLOW:
            if self.disallow:
                node.children.append(SExp.atom(self.disallow))
            return node
        if self.min_mm is not None:
            node.children.append(SExp.list("min", format_value(self.min_mm, unit)))
        if self.max_mm is not None:
            node.children.append(SExp.list("max", format_value(self.max_mm, unit)))
        return node

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "type": self.type.value,
            "min_mm": self.min_mm,
            "max_mm": self.max_mm,
            "disallow": self.disallow,
        }


@dataclass(eq=False)
class Rule:
    """A named rule: severity, optional layer selector and condition, constraints."""

    name: str
    severity: Severity = Severity.ERROR
    layer: Optional[LayerSelector] = None
    condition: Optional[str] = None
    constraints: list[Constraint] = field(default_factory=list)

    def add_constraint(self, constraint: Constraint) -> Rule:
        self.constraints.append(constraint)
        return self

    def applies_to_layer(self, layer_name: str) -> bool:
        """True when the rule has no layer selector or the selector matches."""
        return self.layer is None or self.layer.matches(layer_name)

    def to_sexp(self, unit: str = "mm") -> SExp:
        """Serialize as a ``(rule "name" ...)`` form."""
        node = SExp.list("rule", SExp.atom(self.name, quoted=True))
        if self.severity != Severity.ERROR:
            node.children.append(SExp.list("severity", self.severity.value))
        if self.layer is not None:
            node.children.append(SExp.list("layer", SExp.atom(self.layer.pattern, quoted=True)))
        if self.condition is not None:
            node.children.append(SExp.list("condition", SExp.atom(self.condition, quoted=True)))
        node.children.extend(c.to_sexp(unit) for c in self.constraints)
        return node

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "severity": self.severity.value,
            "layer": self.layer.pattern if self.layer is not None else None,
            "condition": self.condition,
            "constraints": [c.to_dict() for c in self.constraints],
        }


@dataclass
class RuleSet:
    """Ordered collection of rules with a format version."""

    version: int = 1
    rules: list[Rule] = field(default_factory=list)

    def add_rule(self, rule: Rule) -> RuleSet:
        self.rules.append(rule)
        return self

    def get(self, name: str) -> Optional[Rule]:
        """First rule with the given name, or None."""
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def by_constraint(self, ctype: ConstraintType) -> list[Rule]:
        """Rules that carry at least one constraint of the given kind."""
        return [r for r in self.rules if any(c.type == ctype for c in r.constraints)]

    def to_dru(self, unit: str = "mm") -> str:
        """Serialize to ``.kicad_dru`` text, one rule per line."""
        lines = [SExp.list("version", str(self.version)).to_string()]
        lines.extend(rule.to_sexp(unit).to_string() for rule in self.rules)
        return "\n".join(lines) + "\n"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "version": self.version,
            "rules": [r.to_dict() for r in self.rules],
        }

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)
