"""
Manufacturer Cost-Tier Profiles.

Tier ladders describe at which feature sizes a fab's price steps up. They
drive the cost advisor.

Built-in profiles:
- NextPCB 2-layer (nextpcb-2layer): Standard / Advanced / HDI
- NextPCB 4-layer (nextpcb-4layer): Standard / Advanced / Fine / HDI

Usage:
    from gerber_drc.manufacturers import get_profile, list_profiles

    profile = get_profile("nextpcb-2layer")
    tier = profile.classify(min_trace_mm=0.11, min_hole_mm=0.25)

    for p in list_profiles():
        print(f"{p.id}: {p.name}")
"""

from pathlib import Path

from .base import ManufacturerProfile, ManufacturingTier
from .loader import load_profile, profile_from_dict

__all__ = [
    # Base classes
    "ManufacturingTier",
    "ManufacturerProfile",
    # Functions
    "get_profile",
    "list_profiles",
    "get_profile_ids",
    "resolve_profile",
    "load_profile",
    "profile_from_dict",
    "nextpcb_2layer",
    "nextpcb_4layer",
]

DATA_DIR = Path(__file__).parent / "data"

_BUILTIN_IDS = ("nextpcb-2layer", "nextpcb-4layer")

# Loaded from DATA_DIR on first use
_PROFILES: dict[str, ManufacturerProfile] = {}

# Aliases for convenience
_ALIASES: dict[str, str] = {
    "nextpcb": "nextpcb-2layer",
    "nextpcb2": "nextpcb-2layer",
    "nextpcb_2layer": "nextpcb-2layer",
    "nextpcb4": "nextpcb-4layer",
    "nextpcb_4layer": "nextpcb-4layer",
}


def _builtin(profile_id: str) -> ManufacturerProfile:
    if profile_id not in _PROFILES:
        _PROFILES[profile_id] = load_profile(DATA_DIR / f"{profile_id}.yaml")
    return _PROFILES[profile_id]


def nextpcb_2layer() -> ManufacturerProfile:
    """NextPCB 2-layer ladder: Standard (5/5mil), Advanced (4/4mil), HDI."""
    return _builtin("nextpcb-2layer")


def nextpcb_4layer() -> ManufacturerProfile:
    """NextPCB 4-layer ladder: Standard (8/8mil), Advanced (6/6mil), Fine (4/4mil), HDI."""
    return _builtin("nextpcb-4layer")


def get_profile(profile_id: str) -> ManufacturerProfile:
    """
    Get a built-in tier profile by ID.

    Args:
        profile_id: Profile identifier (e.g., "nextpcb-2layer") or alias

    Returns:
        ManufacturerProfile for the given ID

    Raises:
        ValueError: If profile_id is not recognized
    """
    normalized = profile_id.lower().strip()

    if normalized in _ALIASES:
        normalized = _ALIASES[normalized]

    if normalized not in _BUILTIN_IDS:
        available = ", ".join(sorted(_BUILTIN_IDS))
        raise ValueError(f"Unknown profile: {profile_id!r}. Available: {available}")

    return _builtin(normalized)


def list_profiles() -> list[ManufacturerProfile]:
    """
    Get list of all built-in tier profiles.

    Returns:
        List of ManufacturerProfile objects
    """
    return [_builtin(profile_id) for profile_id in _BUILTIN_IDS]


def get_profile_ids() -> list[str]:
    """
    Get list of valid built-in profile IDs.

    Returns:
        List of profile ID strings
    """
    return sorted(_BUILTIN_IDS)


def resolve_profile(source: str | Path) -> ManufacturerProfile:
    """Resolve a built-in profile ID, alias or YAML path to a tier ladder."""
    if isinstance(source, Path) or str(source).endswith((".yaml", ".yml")):
        return load_profile(Path(source))
    return get_profile(source)
