"""
YAML loader for manufacturer tier ladders.

Example YAML format:
    id: nextpcb-2layer
    name: NextPCB 2-Layer
    tiers:
      - name: Standard
        order: 0
        min_trace_width_mm: 0.127
        min_space_mm: 0.127
        min_hole_size_mm: 0.3
        description: "Standard 2-layer"
      - name: HDI
        order: 1
        min_hole_size_mm: 0.15
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .base import ManufacturerProfile, ManufacturingTier

__all__ = ["load_profile", "profile_from_dict"]

_TIER_LIMITS = ("min_trace_width_mm", "min_space_mm", "min_hole_size_mm")


def load_profile(path: str | Path) -> ManufacturerProfile:
    """
    Load a tier ladder from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        ManufacturerProfile; its id defaults to the file stem

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the YAML or the ladder is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Profile file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Profile file must contain a YAML mapping: {path}")

    data.setdefault("id", path.stem)
    return profile_from_dict(data)


def profile_from_dict(data: dict[str, Any]) -> ManufacturerProfile:
    """Build a profile from parsed YAML data."""
    tiers_data = data.get("tiers", [])
    if not isinstance(tiers_data, list):
        raise ValueError("'tiers' must be a list")

    tiers = [_parse_tier(t, default_order=i) for i, t in enumerate(tiers_data)]
    return ManufacturerProfile(
        name=str(data.get("name", "")),
        tiers=tiers,
        id=str(data.get("id", "")),
    )


def _parse_tier(data: dict[str, Any], default_order: int) -> ManufacturingTier:
    """Parse a single tier from dict."""
    if not isinstance(data, dict):
        raise ValueError(f"Tier must be a dict, got {type(data)}")

    limits = {}
    for key in _TIER_LIMITS:
        value = data.get(key)
        limits[key] = float(value) if value is not None else None

    return ManufacturingTier(
        name=str(data.get("name", "")),
        order=int(data.get("order", default_order)),
        description=str(data.get("description", "")),
        **limits,
    )
