"""
Manufacturing cost advisor.

Scans a board, classifies each parameter into the manufacturer's cost
tiers and points out the features that keep it from a cheaper tier.

Example::

    from gerber_drc.advisor import CostAdvisor
    from gerber_drc.config import Config
    from gerber_drc.manufacturers import get_profile

    report = CostAdvisor(get_profile("nextpcb-2layer")).analyze(board)
    print(report)

    # or with the project's .gerber-drc.toml
    report = CostAdvisor.from_config(Config.load()).analyze(board)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from ..exceptions import ConfigurationError
from .profile import BoardProfile, FeatureBucket
from .scanner import BoardProfileScanner

if TYPE_CHECKING:
    from ..board import BoardInput
    from ..config import Config
    from ..manufacturers import ManufacturerProfile, ManufacturingTier

logger = logging.getLogger(__name__)

TRACE_WIDTH = "Trace Width"
CLEARANCE = "Clearance"
HOLE_SIZE = "Hole Size"


@dataclass(frozen=True)
class TierClassification:
    """Tier a single parameter falls into.

    Attributes:
        parameter_name: "Trace Width", "Clearance" or "Hole Size"
        current_tier: Cheapest tier accommodating the measured minimum
        measured_min_mm: Smallest measured value
        tier_threshold_mm: The tier's limit for this parameter, or None
    """

    parameter_name: str
    current_tier: ManufacturingTier
    measured_min_mm: float
    tier_threshold_mm: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "parameter": self.parameter_name,
            "tier": self.current_tier.name,
            "measured_min_mm": self.measured_min_mm,
            "tier_threshold_mm": self.tier_threshold_mm,
        }


@dataclass(frozen=True)
class OptimizationSuggestion:
    """Features that, if widened, would let the board drop to a cheaper tier."""

    parameter_name: str
    current_tier: ManufacturingTier
    target_tier: ManufacturingTier
    current_min_mm: float
    target_min_mm: float
    features_below_target: int
    total_features: int
    impact: str

    def to_dict(self) -> dict:
        return {
            "parameter": self.parameter_name,
            "current_tier": self.current_tier.name,
            "target_tier": self.target_tier.name,
            "current_min_mm": self.current_min_mm,
            "target_min_mm": self.target_min_mm,
            "features_below_target": self.features_below_target,
            "total_features": self.total_features,
            "impact": self.impact,
        }


@dataclass
class CostAdvisorReport:
    """Board profile, tier classifications and optimization suggestions."""

    manufacturer: str
    board_profile: BoardProfile
    overall_tier: ManufacturingTier
    classifications: list[TierClassification] = field(default_factory=list)
    suggestions: list[OptimizationSuggestion] = field(default_factory=list)

    @property
    def has_optimizations(self) -> bool:
        return len(self.suggestions) > 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "manufacturer": self.manufacturer,
            "overall_tier": self.overall_tier.to_dict(),
            "board": self.board_profile.to_dict(),
            "classifications": [c.to_dict() for c in self.classifications],
            "suggestions": [s.to_dict() for s in self.suggestions],
        }

    def __str__(self) -> str:
        tier = self.overall_tier
        lines = [
            "Cost Advisor Report:",
            f"  Manufacturer: {self.manufacturer}",
            f"  Copper layers: {self.board_profile.copper_layer_count}",
            f"  Overall tier: {tier.name} ({tier.description})",
            "",
            "  Classifications:",
        ]
        for c in self.classifications:
            line = f"  - {c.parameter_name}: {c.current_tier.name} (measured min: {c.measured_min_mm:.4f}mm"
            if c.tier_threshold_mm is not None:
                line += f", tier threshold: {c.tier_threshold_mm:.4f}mm"
            lines.append(line + ")")

        lines.append("")
        if self.suggestions:
            lines.append("  Optimization suggestions:")
            for s in self.suggestions:
                lines.append(
                    f"  - {s.parameter_name}: {s.current_tier.name} -> {s.target_tier.name} "
                    f"(widen {s.features_below_target} of {s.total_features} features "
                    f"from {s.current_min_mm:.4f}mm to >= {s.target_min_mm:.4f}mm)"
                )
                lines.append(f"    Impact: {s.impact}")
        else:
            lines.append("  No optimization suggestions: board is already at the cheapest tier.")

        return "\n".join(lines) + "\n"


def count_features_below(distribution: list[FeatureBucket], threshold: float) -> int:
    """Count features in buckets below or straddling a threshold.

    A straddling bucket is counted in full since the histogram cannot tell
    where inside it each feature lies.
    """
    return sum(
        b.count for b in distribution if b.upper_mm <= threshold or b.lower_mm < threshold
    )


class CostAdvisor:
    """Classify a board into a manufacturer's cost tiers.

    Args:
        profile: Tier ladder to classify against
        clearance_analysis: Also measure and classify copper clearance
    """

    def __init__(
        self,
        profile: Optional[ManufacturerProfile] = None,
        clearance_analysis: bool = False,
    ):
        self.profile = profile
        self.clearance_analysis = clearance_analysis

    @classmethod
    def from_config(cls, config: Config) -> CostAdvisor:
        """Build an advisor from the ``[advisor]`` config section."""
        from ..manufacturers import resolve_profile

        return cls(
            resolve_profile(config.advisor.profile),
            clearance_analysis=config.advisor.clearance_analysis,
        )

    def analyze(self, board: BoardInput) -> CostAdvisorReport:
        """
        Scan, classify and suggest.

        Raises:
            ConfigurationError: If no manufacturer profile was supplied
        """
        if self.profile is None:
            raise ConfigurationError(
                "ManufacturerProfile must be set before analysis",
                suggestions=["Pass profile=get_profile('nextpcb-2layer')"],
            )
        profile = self.profile

        board_profile = BoardProfileScanner(
            clearance_analysis=self.clearance_analysis,
            tier_profile=profile,
        ).scan(board)

        classifications: list[TierClassification] = []
        if board_profile.trace_count > 0:
            tier = profile.classify_trace(board_profile.min_trace_width_mm)
            classifications.append(
                TierClassification(
                    TRACE_WIDTH, tier, board_profile.min_trace_width_mm, tier.min_trace_width_mm
                )
            )
        if board_profile.min_clearance_mm is not None:
            tier = profile.classify_clearance(board_profile.min_clearance_mm)
            classifications.append(
                TierClassification(CLEARANCE, tier, board_profile.min_clearance_mm, tier.min_space_mm)
            )
        if board_profile.hole_count > 0:
            tier = profile.classify_hole(board_profile.min_hole_size_mm)
            classifications.append(
                TierClassification(
                    HOLE_SIZE, tier, board_profile.min_hole_size_mm, tier.min_hole_size_mm
                )
            )

        overall = profile.tiers[0]
        for c in classifications:
            if c.current_tier.order > overall.order:
                overall = c.current_tier

        suggestions = [
            s for s in (self._suggest(c, board_profile) for c in classifications) if s is not None
        ]

        logger.info(
            f"Board classified as {overall.name} for {profile.name} "
            f"({len(suggestions)} suggestions)"
        )
        return CostAdvisorReport(
            manufacturer=profile.name,
            board_profile=board_profile,
            overall_tier=overall,
            classifications=classifications,
            suggestions=suggestions,
        )

    def _suggest(
        self, classification: TierClassification, board_profile: BoardProfile
    ) -> Optional[OptimizationSuggestion]:
        cheaper = self.profile.next_cheaper_tier(classification.current_tier)
        if cheaper is None:
            return None

        name = classification.parameter_name
        target = _threshold(cheaper, name) or 0.0
        if target <= 0:
            return None

        below = count_features_below(_distribution(board_profile, name), target)
        if below == 0:
            return None

        impact = (
            f"Widening {below} {name.lower()} feature{'' if below == 1 else 's'} "
            f"to >= {target:.4f}mm would drop from "
            f"{classification.current_tier.name} to {cheaper.name} tier"
        )
        return OptimizationSuggestion(
            parameter_name=name,
            current_tier=classification.current_tier,
            target_tier=cheaper,
            current_min_mm=classification.measured_min_mm,
            target_min_mm=target,
            features_below_target=below,
            total_features=_total(board_profile, name),
            impact=impact,
        )


def _threshold(tier: ManufacturingTier, parameter_name: str) -> Optional[float]:
    if parameter_name == TRACE_WIDTH:
        return tier.min_trace_width_mm
    if parameter_name == CLEARANCE:
        return tier.min_space_mm
    if parameter_name == HOLE_SIZE:
        return tier.min_hole_size_mm
    return None


def _distribution(board_profile: BoardProfile, parameter_name: str) -> list[FeatureBucket]:
    if parameter_name == TRACE_WIDTH:
        return board_profile.trace_width_distribution
    if parameter_name == CLEARANCE:
        return board_profile.clearance_distribution
    if parameter_name == HOLE_SIZE:
        return board_profile.hole_size_distribution
    return []


def _total(board_profile: BoardProfile, parameter_name: str) -> int:
    if parameter_name == TRACE_WIDTH:
        return board_profile.trace_count
    if parameter_name == CLEARANCE:
        return board_profile.clearance_pair_count
    if parameter_name == HOLE_SIZE:
        return board_profile.hole_count
    return 0
