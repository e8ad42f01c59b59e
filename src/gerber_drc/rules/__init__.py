"""
Design rules: model, ``.kicad_dru`` / ``.kicad_pro`` parsers and the
bundled fab rule sets.

Usage:
    from gerber_drc.rules import get_rule_set, parse_dru

    rules = get_rule_set("pcbway")
    custom = parse_dru(Path("board.kicad_dru").read_text())
"""

from .builtin import (
    all_rule_sets,
    get_rule_set,
    list_rule_sets,
    load_rule_set,
    nextpcb,
    pcbway,
    resolve_rule_set,
)
from .dru import load_dru, parse_dru
from .model import Constraint, ConstraintType, LayerSelector, Rule, RuleSet, Severity
from .pro import load_pro, parse_pro

__all__ = [
    # Model
    "RuleSet",
    "Rule",
    "Constraint",
    "ConstraintType",
    "Severity",
    "LayerSelector",
    # Parsers
    "parse_dru",
    "load_dru",
    "parse_pro",
    "load_pro",
    "load_rule_set",
    # Built-ins
    "pcbway",
    "nextpcb",
    "all_rule_sets",
    "get_rule_set",
    "list_rule_sets",
    "resolve_rule_set",
]
