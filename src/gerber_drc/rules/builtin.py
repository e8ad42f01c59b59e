"""
Bundled rule sets.

The rule files shipped in ``rules/data`` are parsed on first use and kept
for the life of the process. Callers must treat the returned rule sets as
read-only.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from ..exceptions import RuleSetNotFoundError
from .dru import load_dru
from .model import RuleSet
from .pro import load_pro

logger = logging.getLogger(__name__)

__all__ = [
    "DATA_DIR",
    "pcbway",
    "nextpcb",
    "all_rule_sets",
    "get_rule_set",
    "list_rule_sets",
    "load_rule_set",
    "resolve_rule_set",
]

DATA_DIR = Path(__file__).parent / "data"

# Global rule set cache
_rule_set_cache: dict[str, RuleSet] = {}


def _load_pcbway() -> RuleSet:
    return load_dru(DATA_DIR / "pcbway.kicad_dru")


def _load_nextpcb() -> RuleSet:
    return load_pro(DATA_DIR / "nextpcb.kicad_pro")


_LOADERS: dict[str, Callable[[], RuleSet]] = {
    "pcbway": _load_pcbway,
    "nextpcb": _load_nextpcb,
}


def _cached(name: str) -> RuleSet:
    if name not in _rule_set_cache:
        logger.debug(f"Loading built-in rule set {name}")
        _rule_set_cache[name] = _LOADERS[name]()
    return _rule_set_cache[name]


def pcbway() -> RuleSet:
    """PCBWay standard capabilities (custom DRC rules, 22 rules)."""
    return _cached("pcbway")


def nextpcb() -> RuleSet:
    """NextPCB simple rules synthesized from a KiCad project file."""
    return _cached("nextpcb")


def all_rule_sets() -> dict[str, RuleSet]:
    """All built-in rule sets keyed by name."""
    return {name: _cached(name) for name in _LOADERS}


def list_rule_sets() -> list[str]:
    """Names of the built-in rule sets."""
    return list(_LOADERS)


def get_rule_set(name: str) -> RuleSet:
    """
    Get a built-in rule set by name (case-insensitive).

    Raises:
        RuleSetNotFoundError: If no built-in rule set has that name
    """
    key = name.lower().strip()
    if key not in _LOADERS:
        raise RuleSetNotFoundError(
            f"Unknown built-in rule set: {name!r}",
            context={"available": ", ".join(_LOADERS)},
            suggestions=["Pass a path to a .kicad_dru or .kicad_pro file instead"],
        )
    return _cached(key)


_DRU_SUFFIXES = (".kicad_dru", ".dru")
_PRO_SUFFIXES = (".kicad_pro", ".json")


def load_rule_set(path: str | Path) -> RuleSet:
    """Load a rule file, picking the parser from the file suffix.

    ``.kicad_dru`` / ``.dru`` are read as S-expressions, ``.kicad_pro`` /
    ``.json`` as project JSON.

    Raises:
        FileNotFoundError: If the file does not exist
        RuleSetNotFoundError: If the suffix is not a known rule format
        ParseError: If the contents are invalid
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in _DRU_SUFFIXES:
        return load_dru(path)
    if suffix in _PRO_SUFFIXES:
        return load_pro(path)
    raise RuleSetNotFoundError(
        f"Unrecognised rule file type: {path.name}",
        context={"supported": ", ".join(_DRU_SUFFIXES + _PRO_SUFFIXES)},
    )


def resolve_rule_set(source: str | Path) -> RuleSet:
    """Resolve a built-in name or a rule file path to a rule set."""
    if isinstance(source, str) and source.lower().strip() in _LOADERS:
        return get_rule_set(source)
    return load_rule_set(source)
