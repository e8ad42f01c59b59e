"""
Board feature statistics: minimums, counts and size histograms.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

import numpy as np


@dataclass(frozen=True)
class FeatureBucket:
    """One histogram bucket covering [lower_mm, upper_mm).

    The last bucket of a distribution has ``upper_mm == math.inf``.
    """

    lower_mm: float
    upper_mm: float
    count: int
    label: str

    def to_dict(self) -> dict:
        return {
            "lower_mm": self.lower_mm,
            "upper_mm": None if math.isinf(self.upper_mm) else self.upper_mm,
            "count": self.count,
            "label": self.label,
        }


def build_distribution(
    measurements: Iterable[float], boundaries: Iterable[float]
) -> list[FeatureBucket]:
    """
    Bucket measurements between sorted boundary values.

    Buckets are ``[0, b0), [b0, b1), ..., [bN, inf)``; only buckets that
    received at least one measurement are returned.

    Args:
        measurements: Values in mm
        boundaries: Bucket edges in mm, any order, duplicates allowed

    Returns:
        Non-empty buckets in ascending order
    """
    values = np.asarray(list(measurements), dtype=float)
    if values.size == 0:
        return []

    edges = np.unique(np.asarray(list(boundaries), dtype=float))
    n = len(edges)
    if n == 0:
        return [FeatureBucket(0.0, math.inf, int(values.size), "all")]

    # Index of the first edge strictly greater than the value
    slots = np.searchsorted(edges, values, side="right")
    counts = np.bincount(slots, minlength=n + 1)

    buckets = []
    for i, count in enumerate(counts):
        if count == 0:
            continue
        lower = 0.0 if i == 0 else float(edges[i - 1])
        upper = math.inf if i == n else float(edges[i])
        if i == 0:
            label = f"< {edges[0]:.4f}mm"
        elif i == n:
            label = f">= {edges[-1]:.4f}mm"
        else:
            label = f"{edges[i - 1]:.4f}mm - {edges[i]:.4f}mm"
        buckets.append(FeatureBucket(lower, upper, int(count), label))

    return buckets


@dataclass
class BoardProfile:
    """Statistical profile of a board's manufacturing-relevant features.

    Clearance fields stay at None/0/[] unless clearance analysis ran and
    found at least one pair.
    """

    copper_layer_count: int = 0

    min_trace_width_mm: Optional[float] = None
    min_trace_width_layer: Optional[str] = None
    trace_count: int = 0
    trace_width_distribution: list[FeatureBucket] = field(default_factory=list)

    min_hole_size_mm: Optional[float] = None
    hole_count: int = 0
    hole_size_distribution: list[FeatureBucket] = field(default_factory=list)

    min_clearance_mm: Optional[float] = None
    min_clearance_layer: Optional[str] = None
    clearance_pair_count: int = 0
    clearance_distribution: list[FeatureBucket] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "copper_layer_count": self.copper_layer_count,
            "traces": {
                "min_width_mm": self.min_trace_width_mm,
                "min_width_layer": self.min_trace_width_layer,
                "count": self.trace_count,
                "distribution": [b.to_dict() for b in self.trace_width_distribution],
            },
            "holes": {
                "min_size_mm": self.min_hole_size_mm,
                "count": self.hole_count,
                "distribution": [b.to_dict() for b in self.hole_size_distribution],
            },
            "clearance": {
                "min_mm": self.min_clearance_mm,
                "min_layer": self.min_clearance_layer,
                "pair_count": self.clearance_pair_count,
                "distribution": [b.to_dict() for b in self.clearance_distribution],
            },
        }
