"""
Board profiler and manufacturing cost advisor.

Usage:
    from gerber_drc.advisor import CostAdvisor
    from gerber_drc.manufacturers import get_profile

    report = CostAdvisor(get_profile("nextpcb-2layer")).analyze(board)
    if report.has_optimizations:
        print(report)
"""

from .advisor import (
    CostAdvisor,
    CostAdvisorReport,
    OptimizationSuggestion,
    TierClassification,
    count_features_below,
)
from .profile import BoardProfile, FeatureBucket, build_distribution
from .scanner import (
    DEFAULT_HOLE_BOUNDARIES,
    DEFAULT_TRACE_BOUNDARIES,
    BoardProfileScanner,
)

__all__ = [
    "CostAdvisor",
    "CostAdvisorReport",
    "TierClassification",
    "OptimizationSuggestion",
    "count_features_below",
    "BoardProfile",
    "FeatureBucket",
    "build_distribution",
    "BoardProfileScanner",
    "DEFAULT_TRACE_BOUNDARIES",
    "DEFAULT_HOLE_BOUNDARIES",
]
