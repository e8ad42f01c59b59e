"""Geometric check implementations, one per constraint kind."""

from .annular_width import AnnularWidthCheck
from .base import DrcCheck
from .clearance import ClearanceCheck
from .edge_clearance import EdgeClearanceCheck
from .hole_size import HoleSizeCheck
from .hole_to_hole import HoleToHoleCheck
from .track_width import TrackWidthCheck

__all__ = [
    "DrcCheck",
    "TrackWidthCheck",
    "HoleSizeCheck",
    "HoleToHoleCheck",
    "ClearanceCheck",
    "EdgeClearanceCheck",
    "AnnularWidthCheck",
    "default_checks",
]


def default_checks() -> list[DrcCheck]:
    """One instance of every built-in check."""
    return [
        ClearanceCheck(),
        TrackWidthCheck(),
        HoleSizeCheck(),
        HoleToHoleCheck(),
        EdgeClearanceCheck(),
        AnnularWidthCheck(),
    ]
