"""
Board profile scanner.

Walks the copper layers and drill files of a board and gathers the
minimum trace width, hole size and (optionally) copper clearance, with
histograms bucketed at a manufacturer's tier thresholds.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ..board import is_copper_layer
from ..drc.checks.track_width import track_width
from ..geometry import GerberGeometryConverter, SpatialIndex
from ..model import Draw
from .profile import BoardProfile, build_distribution

if TYPE_CHECKING:
    from ..board import BoardInput
    from ..manufacturers import ManufacturerProfile

logger = logging.getLogger(__name__)

# 4, 5, 6 and 8 mil
DEFAULT_TRACE_BOUNDARIES = (0.1016, 0.127, 0.1524, 0.2032)
DEFAULT_HOLE_BOUNDARIES = (0.15, 0.2, 0.3)

# Smallest neighbour search distance for clearance analysis
MIN_CLEARANCE_SEARCH_MM = 0.5


class BoardProfileScanner:
    """Produce a BoardProfile from a board input.

    Args:
        clearance_analysis: Also measure copper-to-copper spacing. This runs
            a geometry pass over every copper layer and is off by default.
        tier_profile: Manufacturer profile whose tier thresholds become the
            histogram boundaries. Defaults are used when None.
    """

    def __init__(
        self,
        clearance_analysis: bool = False,
        tier_profile: Optional[ManufacturerProfile] = None,
    ):
        self.clearance_analysis = clearance_analysis
        self.tier_profile = tier_profile

    def scan(self, board: BoardInput) -> BoardProfile:
        profile = BoardProfile()
        profile.copper_layer_count = sum(1 for name in board.layers if is_copper_layer(name))

        self._scan_trace_widths(board, profile)
        self._scan_hole_sizes(board, profile)
        if self.clearance_analysis:
            self._scan_clearances(board, profile)

        logger.debug(
            f"Scanned board: {profile.trace_count} traces, {profile.hole_count} holes, "
            f"{profile.clearance_pair_count} clearance pairs"
        )
        return profile

    def trace_boundaries(self) -> list[float]:
        """Tier trace-width thresholds, or the defaults when none are set."""
        if self.tier_profile is not None:
            bounds = [
                t.min_trace_width_mm
                for t in self.tier_profile.tiers
                if t.min_trace_width_mm is not None
            ]
            if bounds:
                return bounds
        return list(DEFAULT_TRACE_BOUNDARIES)

    def hole_boundaries(self) -> list[float]:
        """Tier hole-size thresholds, or the defaults when none are set."""
        if self.tier_profile is not None:
            bounds = [
                t.min_hole_size_mm
                for t in self.tier_profile.tiers
                if t.min_hole_size_mm is not None
            ]
            if bounds:
                return bounds
        return list(DEFAULT_HOLE_BOUNDARIES)

    def clearance_search_distance(self) -> float:
        return max([MIN_CLEARANCE_SEARCH_MM, *self.trace_boundaries()])

    def _scan_trace_widths(self, board: BoardInput, profile: BoardProfile) -> None:
        widths: list[float] = []

        for layer_name, doc in board.copper_layers():
            uf = doc.unit_factor
            for obj in doc.objects:
                if not isinstance(obj, Draw):
                    continue
                width = track_width(obj.aperture) * uf
                if width <= 0:
                    continue
                widths.append(width)
                if profile.min_trace_width_mm is None or width < profile.min_trace_width_mm:
                    profile.min_trace_width_mm = width
                    profile.min_trace_width_layer = layer_name

        profile.trace_count = len(widths)
        profile.trace_width_distribution = build_distribution(widths, self.trace_boundaries())

    def _scan_hole_sizes(self, board: BoardInput, profile: BoardProfile) -> None:
        diameters = [
            op.tool.diameter * drill.unit_factor
            for drill in board.drill_files
            for op in drill.operations
        ]

        profile.hole_count = len(diameters)
        if diameters:
            profile.min_hole_size_mm = min(diameters)
        profile.hole_size_distribution = build_distribution(diameters, self.hole_boundaries())

    def _scan_clearances(self, board: BoardInput, profile: BoardProfile) -> None:
        converter = GerberGeometryConverter()
        search = self.clearance_search_distance()
        clearances: list[float] = []

        for layer_name, doc in board.copper_layers():
            geometries = converter.convert(doc)
            if len(geometries) < 2:
                continue

            index = SpatialIndex()
            index.insert_all(geometries)

            for i, j in index.pairs_within(search):
                distance = geometries[i].distance(geometries[j])
                if 0 < distance <= search:
                    clearances.append(distance)
                    if profile.min_clearance_mm is None or distance < profile.min_clearance_mm:
                        profile.min_clearance_mm = distance
                        profile.min_clearance_layer = layer_name

        profile.clearance_pair_count = len(clearances)
        profile.clearance_distribution = build_distribution(clearances, self.trace_boundaries())
