"""In-memory Excellon drill document model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..units import Unit


@dataclass(frozen=True)
class Tool:
    """Drill tool (T-number) with its diameter in document units."""

    number: int
    diameter: float


@dataclass(eq=False)
class DrillHit:
    """Single drilled hole at (x, y)."""

    tool: Tool
    x: float
    y: float


@dataclass(eq=False)
class DrillSlot:
    """Routed slot from start to end (G85 or G00/G01 routing)."""

    tool: Tool
    start_x: float
    start_y: float
    end_x: float
    end_y: float

    @property
    def center(self) -> tuple[float, float]:
        """Midpoint of the slot in document units."""
        return ((self.start_x + self.end_x) / 2, (self.start_y + self.end_y) / 2)


DrillOperation = Union[DrillHit, DrillSlot]


class DrillDocument:
    """An Excellon drill file: unit, tool table and ordered operations."""

    def __init__(self, unit: Unit = Unit.MM):
        self.unit = unit
        self._tools: dict[int, Tool] = {}
        self._operations: list[DrillOperation] = []

    @property
    def unit_factor(self) -> float:
        """Multiplier turning document values into millimetres."""
        return self.unit.factor

    @property
    def tools(self) -> dict[int, Tool]:
        return dict(self._tools)

    @property
    def operations(self) -> list[DrillOperation]:
        return list(self._operations)

    def add_tool(self, tool: Tool) -> Tool:
        """Register a tool under its number and return it."""
        self._tools[tool.number] = tool
        return tool

    def tool(self, number: int) -> Tool:
        """Look up a tool by number.

        Raises:
            KeyError: If the tool was never defined
        """
        try:
            return self._tools[number]
        except KeyError:
            raise KeyError(f"Tool T{number} is not defined") from None

    def add_operation(self, operation: DrillOperation) -> DrillOperation:
        """Append a hit or slot."""
        self._operations.append(operation)
        return operation

    def hits(self) -> list[DrillHit]:
        """Only the round hits, in file order."""
        return [op for op in self._operations if isinstance(op, DrillHit)]

    def __len__(self) -> int:
        return len(self._operations)

    def __repr__(self) -> str:
        return f"DrillDocument(unit={self.unit.value!r}, operations={len(self._operations)})"
