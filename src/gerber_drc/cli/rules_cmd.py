"""
Rules command: parse a rule set and show what a DRC run would do with it.

Usage:
    gerber-drc rules                     List the configured rule set
    gerber-drc rules nextpcb             List a built-in rule set
    gerber-drc rules board.kicad_dru     List rules from a file
    gerber-drc rules pcbway --format json
"""

from __future__ import annotations

import json

from rich.console import Console
from rich.table import Table

from gerber_drc.drc import ConditionResult, default_checks, evaluate
from gerber_drc.rules import Rule, RuleSet, Severity, resolve_rule_set
from gerber_drc.units import UnitFormatter

RUNS = "runs"
SKIPPED = "skipped"
IGNORED = "ignored"


def rule_status(rule: Rule) -> str:
    """What the runner does with a rule: runs, skipped or ignored."""
    if rule.severity == Severity.IGNORE:
        return IGNORED
    if evaluate(rule.condition) == ConditionResult.UNSUPPORTED:
        return SKIPPED
    return RUNS


def describe_constraints(rule: Rule, fmt: UnitFormatter) -> str:
    """One line per constraint, with limits in the display units."""
    checked = {check.constraint_type for check in default_checks()}
    lines = []
    for c in rule.constraints:
        parts = [c.type.value]
        if c.disallow:
            parts.append(c.disallow)
        if c.min_mm is not None:
            parts.append(f"min {fmt.format(c.min_mm)}")
        if c.max_mm is not None:
            parts.append(f"max {fmt.format(c.max_mm)}")
        if c.type not in checked:
            parts.append("(not checked)")
        lines.append(" ".join(parts))
    return "\n".join(lines)


def run_rules(source: str, output_format: str, fmt: UnitFormatter) -> int:
    """Print the rules of a built-in name or rule file."""
    rule_set = resolve_rule_set(source)

    if output_format == "json":
        data = rule_set.to_dict()
        for rule_data, rule in zip(data["rules"], rule_set.rules):
            rule_data["status"] = rule_status(rule)
        print(json.dumps(data, indent=2))
        return 0

    _print_table(Console(), source, rule_set, fmt)
    return 0


def _print_table(console: Console, source: str, rule_set: RuleSet, fmt: UnitFormatter) -> None:
    table = Table(title=f"Rules: {source} (version {rule_set.version})")
    table.add_column("Rule", style="cyan")
    table.add_column("Severity")
    table.add_column("Layer")
    table.add_column("Constraints")
    table.add_column("Status")

    counts = {RUNS: 0, SKIPPED: 0, IGNORED: 0}
    for rule in rule_set.rules:
        status = rule_status(rule)
        counts[status] += 1
        style = {RUNS: "green", SKIPPED: "yellow", IGNORED: "dim"}[status]
        table.add_row(
            rule.name,
            str(rule.severity),
            rule.layer.pattern if rule.layer is not None else "",
            describe_constraints(rule, fmt),
            f"[{style}]{status}[/{style}]",
        )

    console.print(table)
    console.print(
        f"[dim]{len(rule_set)} rules: {counts[RUNS]} run, "
        f"{counts[SKIPPED]} skipped, {counts[IGNORED]} ignored[/dim]"
    )
