"""
Profiles command: show the manufacturer cost-tier ladders.

Usage:
    gerber-drc profiles                  List built-in profiles and the configured default
    gerber-drc profiles nextpcb-4layer   Show the tiers of one profile
    gerber-drc profiles ladder.yaml      Show a tier ladder from a YAML file
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from gerber_drc.manufacturers import (
    ManufacturerProfile,
    list_profiles,
    resolve_profile,
)
from gerber_drc.units import UnitFormatter


def run_profiles(profile_id: str | None, fmt: UnitFormatter, default_profile: str | None = None) -> int:
    console = Console()

    if profile_id is None:
        table = Table(title="Manufacturer Profiles")
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Tiers")
        for profile in list_profiles():
            table.add_row(profile.id, profile.name, ", ".join(t.name for t in profile.tiers))
        console.print(table)
        if default_profile:
            default = resolve_profile(default_profile)
            console.print(f"Default profile: {default.id} ({default.name})", highlight=False)
        return 0

    profile = resolve_profile(profile_id)
    _print_tiers(console, profile, fmt)
    return 0


def _print_tiers(console: Console, profile: ManufacturerProfile, fmt: UnitFormatter) -> None:
    table = Table(title=f"{profile.name} ({profile.id})")
    table.add_column("Order", justify="right")
    table.add_column("Tier", style="cyan")
    table.add_column("Min Trace", justify="right")
    table.add_column("Min Space", justify="right")
    table.add_column("Min Hole", justify="right")
    table.add_column("Description")

    for tier in profile.tiers:
        table.add_row(
            str(tier.order),
            tier.name,
            fmt.format_optional(tier.min_trace_width_mm),
            fmt.format_optional(tier.min_space_mm),
            fmt.format_optional(tier.min_hole_size_mm),
            tier.description,
        )

    console.print(table)
