"""
Design rule checking against Gerber and Excellon data.

Usage:
    from gerber_drc.drc import DrcRunner
    from gerber_drc.rules import get_rule_set

    report = DrcRunner.default().run(get_rule_set("pcbway"), board)
    print(report)
"""

from .checks import (
    AnnularWidthCheck,
    ClearanceCheck,
    DrcCheck,
    EdgeClearanceCheck,
    HoleSizeCheck,
    HoleToHoleCheck,
    TrackWidthCheck,
    default_checks,
)
from .condition import ConditionResult, evaluate, evaluate_for_object, object_type
from .report import DrcReport
from .runner import DrcRunner
from .violation import Violation

__all__ = [
    "DrcRunner",
    "DrcReport",
    "Violation",
    # Conditions
    "ConditionResult",
    "evaluate",
    "evaluate_for_object",
    "object_type",
    # Checks
    "DrcCheck",
    "TrackWidthCheck",
    "HoleSizeCheck",
    "HoleToHoleCheck",
    "ClearanceCheck",
    "EdgeClearanceCheck",
    "AnnularWidthCheck",
    "default_checks",
]
