"""Base class for DRC checks.

A check implements one constraint kind. The runner hands it a rule, one
of that rule's constraints and the board; the check returns violations in
a deterministic order (layer insertion order, then object order).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterator, Optional

from ...board import is_copper_layer
from ..violation import Violation

if TYPE_CHECKING:
    from ...board import BoardInput
    from ...model import GerberDocument
    from ...rules.model import Constraint, ConstraintType, Rule


class DrcCheck(ABC):
    """Abstract base class for check implementations.

    Attributes:
        constraint_type: The constraint kind this check evaluates
        name: Human-readable name for the check
    """

    constraint_type: ConstraintType
    name: str = ""

    @abstractmethod
    def check(
        self,
        rule: Rule,
        constraint: Constraint,
        board: BoardInput,
    ) -> list[Violation]:
        """Evaluate one constraint of a rule against the board.

        Args:
            rule: The rule being evaluated; supplies severity and layer selector
            constraint: The constraint to evaluate (of ``constraint_type``)
            board: The board input, read-only

        Returns:
            Violations found, possibly empty
        """
        raise NotImplementedError

    @staticmethod
    def selected_copper_layers(rule: Rule, board: BoardInput) -> Iterator[tuple[str, GerberDocument]]:
        """Copper layers the rule's layer selector accepts, in insertion order."""
        for layer_name, doc in board.layers.items():
            if is_copper_layer(layer_name) and rule.applies_to_layer(layer_name):
                yield layer_name, doc

    @staticmethod
    def violation(
        rule: Rule,
        constraint: Constraint,
        description: str,
        measured_mm: Optional[float],
        required_mm: Optional[float],
        x: float,
        y: float,
        layer: Optional[str],
    ) -> Violation:
        """Build a violation carrying the rule's severity."""
        return Violation(
            rule=rule,
            constraint=constraint,
            severity=rule.severity,
            description=description,
            measured_mm=measured_mm,
            required_mm=required_mm,
            x=x,
            y=y,
            layer=layer,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(constraint_type={self.constraint_type.value!r})"
