"""
Manufacturer cost-tier ladders.

A tier ladder lists a fab's pricing tiers from cheapest to most expensive,
each with the smallest trace, space and hole it supports. Dimensions are
in millimetres; None means the tier places no limit on that parameter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ManufacturingTier:
    """A single cost breakpoint.

    Attributes:
        name: Tier name, e.g. "Standard", "Advanced", "HDI"
        order: Position in the ladder, 0 = cheapest
        min_trace_width_mm: Smallest supported trace width, or None
        min_space_mm: Smallest supported copper-to-copper space, or None
        min_hole_size_mm: Smallest supported drill diameter, or None
        description: Human-readable summary
    """

    name: str
    order: int
    min_trace_width_mm: Optional[float] = None
    min_space_mm: Optional[float] = None
    min_hole_size_mm: Optional[float] = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Tier name must not be blank")
        if self.order < 0:
            raise ValueError("Tier order must be >= 0")

    def supports(
        self,
        min_trace_mm: Optional[float] = None,
        min_clearance_mm: Optional[float] = None,
        min_hole_mm: Optional[float] = None,
    ) -> bool:
        """True when every given measurement meets this tier's threshold."""
        checks = (
            (min_trace_mm, self.min_trace_width_mm),
            (min_clearance_mm, self.min_space_mm),
            (min_hole_mm, self.min_hole_size_mm),
        )
        return all(
            measured is None or threshold is None or measured >= threshold
            for measured, threshold in checks
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "order": self.order,
            "min_trace_width_mm": self.min_trace_width_mm,
            "min_space_mm": self.min_space_mm,
            "min_hole_size_mm": self.min_hole_size_mm,
            "description": self.description,
        }


@dataclass
class ManufacturerProfile:
    """A manufacturer's tier ladder, ordered from cheapest to most expensive."""

    name: str
    tiers: list[ManufacturingTier] = field(default_factory=list)
    id: str = ""

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Profile name must not be blank")
        if not self.tiers:
            raise ValueError("Profile must have at least one tier")
        self.tiers = list(self.tiers)

    def classify(
        self,
        min_trace_mm: Optional[float] = None,
        min_clearance_mm: Optional[float] = None,
        min_hole_mm: Optional[float] = None,
    ) -> ManufacturingTier:
        """
        Find the cheapest tier that accommodates the measured minimums.

        Parameters passed as None are not considered.

        Returns:
            The first tier supporting every given value, or the most
            expensive tier when none does
        """
        for tier in self.tiers:
            if tier.supports(min_trace_mm, min_clearance_mm, min_hole_mm):
                return tier
        return self.tiers[-1]

    def classify_trace(self, min_trace_mm: float) -> ManufacturingTier:
        return self.classify(min_trace_mm=min_trace_mm)

    def classify_clearance(self, min_clearance_mm: float) -> ManufacturingTier:
        return self.classify(min_clearance_mm=min_clearance_mm)

    def classify_hole(self, min_hole_mm: float) -> ManufacturingTier:
        return self.classify(min_hole_mm=min_hole_mm)

    def next_cheaper_tier(self, current: Optional[ManufacturingTier]) -> Optional[ManufacturingTier]:
        """The tier just below ``current`` in the ladder, or None at the cheapest."""
        if current is None:
            return None
        for i in range(1, len(self.tiers)):
            if self.tiers[i].order == current.order:
                return self.tiers[i - 1]
        return None

    def get_tier(self, name: str) -> Optional[ManufacturingTier]:
        """Look up a tier by name (case-insensitive)."""
        for tier in self.tiers:
            if tier.name.lower() == name.lower():
                return tier
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "tiers": [t.to_dict() for t in self.tiers],
        }
