"""
Builder for KiCad custom DRC rule files (``.kicad_dru``).

Recognised top-level forms are ``(version N)`` and ``(rule "name" ...)``;
anything else is ignored. Inside a rule the builder reads
``(severity X)``, ``(layer X)``, ``(condition "...")`` and
``(constraint KIND ...)``.

Example::

    (version 1)
    (rule "Minimum Trace Width (outer layer)"
        (constraint track_width (min 0.127mm))
        (layer outer)
        (condition "A.Type == 'track'"))
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..exceptions import ParseError
from ..sexp import SExp, parse_all
from ..units import parse_value_mm
from .model import Constraint, ConstraintType, LayerSelector, Rule, RuleSet, Severity

logger = logging.getLogger(__name__)

__all__ = ["parse_dru", "load_dru"]


def parse_dru(text: str) -> RuleSet:
    """Parse ``.kicad_dru`` text into a rule set.

    Args:
        text: Rule file contents

    Returns:
        The parsed RuleSet, rules in file order

    Raises:
        ParseError: On malformed S-expressions, unknown constraint kinds
            or unparseable values
    """
    rule_set = RuleSet()

    for node in parse_all(text):
        if node.name == "version":
            rule_set.version = _parse_version(node)
        elif node.name == "rule":
            rule_set.add_rule(_build_rule(node))

    logger.debug(f"Parsed {len(rule_set)} rules (version {rule_set.version})")
    return rule_set


def load_dru(path: str | Path) -> RuleSet:
    """Load and parse a ``.kicad_dru`` file.

    Raises:
        FileNotFoundError: If the file does not exist
        ParseError: If the contents are invalid; the error carries the path
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rule file not found: {path}")

    try:
        return parse_dru(path.read_text(encoding="utf-8"))
    except ParseError as e:
        raise ParseError(
            e.message,
            context={**e.context, "file": str(path)},
            suggestions=e.suggestions,
            line=e.line,
            column=e.column,
        ) from e


def _parse_version(node: SExp) -> int:
    value = node.first_atom or ""
    try:
        return int(value)
    except ValueError:
        raise ParseError(f"Invalid version: {value!r}", line=node.line) from None


def _build_rule(node: SExp) -> Rule:
    rule = Rule(name=node.first_atom or "")

    for child in node.iter_lists():
        if child.name == "constraint":
            rule.add_constraint(_build_constraint(child))
        elif child.name == "severity":
            rule.severity = Severity.from_string(child.first_atom or "")
        elif child.name == "layer":
            rule.layer = LayerSelector(child.first_atom)
        elif child.name == "condition":
            rule.condition = child.first_atom

    return rule


def _build_constraint(node: SExp) -> Constraint:
    atoms = node.atoms
    if not atoms:
        raise ParseError("Constraint without a type", line=node.line)

    try:
        ctype = ConstraintType.from_string(atoms[0])
    except ParseError as e:
        raise ParseError(e.message, context=e.context, line=node.line) from None

    if ctype == ConstraintType.DISALLOW:
        # (constraint disallow buried_via)
        return Constraint(ctype, disallow=atoms[1] if len(atoms) > 1 else None)

    min_mm = max_mm = None
    for sub in node.iter_lists():
        # Unknown sub-forms such as (opt ...) are ignored
        if sub.name == "min":
            min_mm = parse_value_mm(sub.first_atom or "")
        elif sub.name == "max":
            max_mm = parse_value_mm(sub.first_atom or "")

    return Constraint(ctype, min_mm=min_mm, max_mm=max_mm)
