"""
Rule synthesis from KiCad project files (``.kicad_pro``).

Some fabs publish their limits as the plain ``min_*`` values of a KiCad
project's ``board.design_settings.rules`` block instead of custom DRC
rules. Each positive value becomes a single-constraint rule with no layer
selector and no condition.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..exceptions import ParseError
from .model import Constraint, ConstraintType, Rule, RuleSet

logger = logging.getLogger(__name__)

__all__ = ["PRO_RULE_KEYS", "parse_pro", "load_pro"]

# Project rule key -> constraint kind, in output order
PRO_RULE_KEYS: tuple[tuple[str, ConstraintType], ...] = (
    ("min_track_width", ConstraintType.TRACK_WIDTH),
    ("min_clearance", ConstraintType.CLEARANCE),
    ("min_through_hole_diameter", ConstraintType.HOLE_SIZE),
    ("min_hole_to_hole", ConstraintType.HOLE_TO_HOLE),
    ("min_copper_edge_clearance", ConstraintType.EDGE_CLEARANCE),
    ("min_via_annular_width", ConstraintType.ANNULAR_WIDTH),
    ("min_hole_clearance", ConstraintType.HOLE_CLEARANCE),
    ("min_text_height", ConstraintType.TEXT_HEIGHT),
    ("min_text_thickness", ConstraintType.TEXT_THICKNESS),
    ("min_silk_clearance", ConstraintType.SILK_CLEARANCE),
)


def parse_pro(content: str | bytes) -> RuleSet:
    """Synthesize a rule set from ``.kicad_pro`` JSON.

    A zero ``min_clearance`` falls back to the clearance of the first net
    class, since KiCad keeps the effective default there.

    Args:
        content: Project file contents (bytes are decoded as UTF-8)

    Returns:
        RuleSet with version 1. Missing sections yield an empty set.

    Raises:
        ParseError: If the input does not decode to the expected JSON objects
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Project file is not valid UTF-8: {e.reason} at byte {e.start}") from e

    try:
        root = json.loads(content)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e.msg}", line=e.lineno, column=e.colno) from e

    if not isinstance(root, dict):
        raise ParseError("Expected JSON object at root")

    rule_set = RuleSet(version=1)
    board = _section(root, "board", "board")
    settings = _section(board, "design_settings", "board.design_settings")
    rules = _section(settings, "rules", "board.design_settings.rules")
    if not rules:
        logger.debug("No board.design_settings.rules section")
        return rule_set

    clearance_fallback = _net_class_clearance(root)

    for key, ctype in PRO_RULE_KEYS:
        if rules.get(key) is None:
            continue
        value = _to_float(rules[key], key)

        if ctype == ConstraintType.CLEARANCE and value == 0.0 and clearance_fallback > 0:
            value = clearance_fallback

        if value <= 0.0:
            continue

        rule = Rule(name=format_rule_name(key))
        rule.add_constraint(Constraint(ctype, min_mm=value))
        rule_set.add_rule(rule)

    return rule_set


def load_pro(path: str | Path) -> RuleSet:
    """Load a ``.kicad_pro`` file and synthesize its rule set.

    Raises:
        FileNotFoundError: If the file does not exist
        ParseError: If the contents are invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Project file not found: {path}")

    try:
        return parse_pro(path.read_bytes())
    except ParseError as e:
        raise ParseError(
            e.message,
            context={**e.context, "file": str(path)},
            line=e.line,
            column=e.column,
        ) from e


def format_rule_name(key: str) -> str:
    """``min_track_width`` -> ``Min Track Width``."""
    stem = key[4:] if key.startswith("min_") else key
    return " ".join(["Min"] + [part[:1].upper() + part[1:] for part in stem.split("_")])


def _section(parent: dict[str, Any], key: str, path: str) -> dict[str, Any]:
    """Child object of a JSON object; empty when absent."""
    value = parent.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ParseError(f"Expected JSON object at {path}, got {type(value).__name__}")
    return value


def _net_class_clearance(root: dict[str, Any]) -> float:
    classes = _section(root, "net_settings", "net_settings").get("classes")
    if not classes:
        return 0.0
    if not isinstance(classes, list):
        raise ParseError(f"Expected JSON array at net_settings.classes, got {type(classes).__name__}")
    if not isinstance(classes[0], dict):
        raise ParseError(
            f"Expected JSON object at net_settings.classes[0], got {type(classes[0]).__name__}"
        )
    clearance = classes[0].get("clearance")
    return _to_float(clearance, "net_settings.classes[0].clearance") if clearance is not None else 0.0


def _to_float(value: Any, key: str) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            raise ParseError(f"Invalid numeric value for {key}: {value!r}") from None
    return 0.0
