"""
Applicability of KiCad rule conditions to fabrication data.

Gerber and Excellon files carry no netlist, no plating information and
no via/pad distinction, so most KiCad condition expressions cannot be
evaluated. This is a phrase classifier, not an expression engine: a
condition is applicable only when it is empty or refers to the object
type through a recognised phrase, and everything else is unsupported.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ..model import Draw, Flash, GraphicsObject, Region

__all__ = ["ConditionResult", "evaluate", "evaluate_for_object", "object_type"]


class ConditionResult(Enum):
    """Outcome of classifying a condition."""

    APPLICABLE = "applicable"
    NOT_APPLICABLE = "not_applicable"
    UNSUPPORTED = "unsupported"


# Phrases that need data Gerber does not carry, checked in order
_UNSUPPORTED_PHRASES: tuple[str, ...] = (
    # Nets and net classes
    "A.Net",
    "B.Net",
    "A.NetClass",
    "B.NetClass",
    # Plating
    "isPlated()",
    # Vias look like pads in Gerber
    "'via'",
    "'Via'",
    # Pad metadata
    "A.Pad_Type",
    "A.Fabrication_Property",
    "A.Hole_Size_X",
    "A.Hole_Size_Y",
    # Pairwise conditions
    "B.Type",
)

_TRACK_PHRASES = ("A.Type == 'track'",)
_PAD_PHRASES = ("A.Type == 'pad'", "A.Type == 'Pad'")


def _mentions(condition: str, phrases: tuple[str, ...]) -> bool:
    return any(phrase in condition for phrase in phrases)


def evaluate(condition: Optional[str]) -> ConditionResult:
    """Classify a condition independently of any object.

    Returns:
        APPLICABLE for an empty condition or a supported type test,
        UNSUPPORTED otherwise. Never NOT_APPLICABLE.
    """
    if not condition:
        return ConditionResult.APPLICABLE
    if _mentions(condition, _UNSUPPORTED_PHRASES):
        return ConditionResult.UNSUPPORTED
    if _mentions(condition, _TRACK_PHRASES) or _mentions(condition, _PAD_PHRASES):
        return ConditionResult.APPLICABLE
    return ConditionResult.UNSUPPORTED


def evaluate_for_object(condition: Optional[str], obj: GraphicsObject) -> ConditionResult:
    """Classify a condition for one graphics object.

    A supported type test narrows an applicable condition to objects of
    that type; anything else is returned as :func:`evaluate` decides.
    """
    result = evaluate(condition)
    if result != ConditionResult.APPLICABLE or not condition:
        return result

    kind = object_type(obj)
    if _mentions(condition, _TRACK_PHRASES):
        return ConditionResult.APPLICABLE if kind == "track" else ConditionResult.NOT_APPLICABLE
    if _mentions(condition, _PAD_PHRASES):
        return ConditionResult.APPLICABLE if kind == "pad" else ConditionResult.NOT_APPLICABLE
    return ConditionResult.APPLICABLE


def object_type(obj: GraphicsObject) -> str:
    """KiCad-style type of a graphics object.

    Straight draws are tracks, flashes are pads and regions are zones.
    Arcs report ``unknown``.
    """
    if isinstance(obj, Draw):
        return "track"
    if isinstance(obj, Flash):
        return "pad"
    if isinstance(obj, Region):
        return "zone"
    return "unknown"
