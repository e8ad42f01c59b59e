"""
Units for gerber-drc.

Two concerns live here:

- Document units: every Gerber and drill document declares mm or inch.
  ``Unit.factor`` converts a document value to millimetres, and every
  measurement the checks compare is in millimetres.
- Rule values: ``parse_value_mm`` reads KiCad constraint values such as
  ``0.127mm``, ``5mil`` or ``0.01in``; ``format_value`` writes them back.

Display formatting (mm vs mils) for CLI output follows the usual
precedence: CLI flag > environment variable > config file > default (mm).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .exceptions import ParseError

if TYPE_CHECKING:
    from .config import Config

__all__ = [
    "Unit",
    "UnitSystem",
    "UnitFormatter",
    "MM_PER_MIL",
    "MM_PER_INCH",
    "parse_value_mm",
    "format_value",
    "get_unit_formatter",
]

# Conversion constants
MM_PER_MIL = 0.0254
MM_PER_INCH = 25.4

# Environment variable for display unit preference
UNITS_ENV_VAR = "GERBER_DRC_UNITS"


class Unit(Enum):
    """Coordinate unit declared by a Gerber or drill document."""

    MM = "mm"
    INCH = "inch"

    @property
    def factor(self) -> float:
        """Multiplier turning a value in this unit into millimetres."""
        if self is Unit.INCH:
            return MM_PER_INCH
        return 1.0

    def to_mm(self, value: float) -> float:
        """Convert a value in this unit to millimetres."""
        return value * self.factor

    @classmethod
    def from_string(cls, value: str) -> Unit:
        """Parse a unit from Gerber/Excellon spellings.

        Args:
            value: "mm", "MM", "METRIC", "in", "inch", "IN" or "INCH"

        Returns:
            The matching Unit

        Raises:
            ValueError: If the spelling is not recognised
        """
        normalized = value.lower().strip()
        if normalized in ("mm", "metric", "millimeter", "millimeters"):
            return cls.MM
        if normalized in ("in", "inch", "inches", "imperial"):
            return cls.INCH
        raise ValueError(f"Unknown unit: {value!r}")


# Constraint value suffixes and their mm multipliers
_VALUE_SUFFIXES: tuple[tuple[str, float], ...] = (
    ("mm", 1.0),
    ("mil", MM_PER_MIL),
    ("in", MM_PER_INCH),
)


def parse_value_mm(value: str) -> float:
    """Parse a KiCad DRC constraint value into millimetres.

    Args:
        value: Number with optional suffix: ``mm``, ``mil`` or ``in``.
            A bare number is taken as millimetres.

    Returns:
        The value in millimetres

    Raises:
        ParseError: If the numeric part cannot be parsed
    """
    text = value.strip()
    number, scale = text, 1.0
    for suffix, factor in _VALUE_SUFFIXES:
        if text.endswith(suffix):
            number, scale = text[: -len(suffix)], factor
            break

    try:
        return float(number) * scale
    except ValueError:
        raise ParseError(
            f"Invalid numeric value: {value!r}",
            suggestions=["Use a number with an optional mm, mil or in suffix"],
        ) from None


def format_value(value_mm: float, unit: str = "mm") -> str:
    """Format a millimetre value as a KiCad constraint value.

    Args:
        value_mm: Value in millimetres
        unit: Target suffix: "mm", "mil" or "in"

    Returns:
        String such as ``0.127mm`` or ``5mil``
    """
    for suffix, factor in _VALUE_SUFFIXES:
        if suffix == unit:
            return f"{value_mm / factor:.10g}{suffix}"
    raise ValueError(f"Unknown value unit: {unit!r}")


class UnitSystem(Enum):
    """Unit system for display output."""

    MM = "mm"
    MILS = "mils"

    @classmethod
    def from_string(cls, value: str | None) -> UnitSystem | None:
        """Parse a unit system from a string value.

        Args:
            value: String like "mm", "mils", "mil", or None

        Returns:
            UnitSystem or None if value is None or invalid
        """
        if value is None:
            return None
        value = value.lower().strip()
        if value in ("mm", "millimeters", "millimeter"):
            return cls.MM
        if value in ("mils", "mil", "thou"):
            return cls.MILS
        return None


@dataclass
class UnitFormatter:
    """Formatter for length values with configurable unit system.

    All internal values in gerber-drc are stored in mm.

    Examples:
        >>> fmt = UnitFormatter(UnitSystem.MM)
        >>> fmt.format(0.254)
        '0.2540 mm'

        >>> fmt = UnitFormatter(UnitSystem.MILS)
        >>> fmt.format(0.254)
        '10.0 mils'
    """

    system: UnitSystem
    precision_mm: int = 4
    precision_mils: int = 1

    def format(self, value_mm: float, include_unit: bool = True) -> str:
        """Format a mm value in the configured unit system."""
        if self.system == UnitSystem.MILS:
            value = value_mm / MM_PER_MIL
            if include_unit:
                return f"{value:.{self.precision_mils}f} mils"
            return f"{value:.{self.precision_mils}f}"

        if include_unit:
            return f"{value_mm:.{self.precision_mm}f} mm"
        return f"{value_mm:.{self.precision_mm}f}"

    def format_optional(self, value_mm: float | None) -> str:
        """Format a value that may be absent."""
        if value_mm is None:
            return "-"
        return self.format(value_mm)

    def format_coordinate(self, x_mm: float, y_mm: float) -> str:
        """Format a coordinate pair like "(1.2340, 5.6780) mm"."""
        if self.system == UnitSystem.MILS:
            x = x_mm / MM_PER_MIL
            y = y_mm / MM_PER_MIL
            return f"({x:.{self.precision_mils}f}, {y:.{self.precision_mils}f}) mils"
        return f"({x_mm:.{self.precision_mm}f}, {y_mm:.{self.precision_mm}f}) mm"

    @property
    def unit_name(self) -> str:
        """Get the unit name for this formatter."""
        return self.system.value


def get_unit_formatter(
    cli_units: str | None = None,
    config: Config | None = None,
) -> UnitFormatter:
    """Get a unit formatter based on precedence: CLI > env > config > default.

    Args:
        cli_units: Unit system from CLI flag (highest priority)
        config: Config object to read defaults.units from

    Returns:
        Configured UnitFormatter instance
    """
    system = UnitSystem.from_string(cli_units)

    if system is None:
        system = UnitSystem.from_string(os.environ.get(UNITS_ENV_VAR))

    if system is None and config is not None:
        system = UnitSystem.from_string(config.defaults.units)

    if system is None:
        system = UnitSystem.MM

    return UnitFormatter(system=system)
