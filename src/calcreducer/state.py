"""Calculator state snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

ERROR_DISPLAY = "Error"


class Phase(str, Enum):
    """The engine's explicit state machine phases."""

    IDLE = "idle"  # No pending operator, nothing typed since the last result
    PENDING_OPERATOR = "pending_operator"  # Operator chosen, second operand not started
    ACCUMULATING = "accumulating"  # Digits of an operand being typed
    ERROR = "error"


@dataclass(frozen=True)
class CalculatorState:
    """
    Immutable snapshot of the calculator.

    Every engine transition produces a new instance; nothing mutates an
    existing one. ``history`` is a tuple for the same reason.
    """

    display_value: str = "0"
    expression: str = ""
    first_operand: float | None = None
    operator: str | None = None
    waiting_for_second_operand: bool = False
    memory: float = 0.0
    history: tuple[str, ...] = ()
    is_error: bool = False

    @property
    def phase(self) -> Phase:
        if self.is_error:
            return Phase.ERROR
        if self.waiting_for_second_operand:
            return Phase.PENDING_OPERATOR
        if self.operator is not None or self.expression:
            return Phase.ACCUMULATING
        return Phase.IDLE

    def to_dict(self) -> dict[str, Any]:
        """Renderer view using the camelCase field names of the action protocol."""
        return {
            "displayValue": self.display_value,
            "expression": self.expression,
            "firstOperand": self.first_operand,
            "operator": self.operator,
            "waitingForSecondOperand": self.waiting_for_second_operand,
            "memory": self.memory,
            "history": list(self.history),
            "isError": self.is_error,
        }

    def __str__(self) -> str:
        return f"{self.expression or self.display_value} [{self.phase.value}]"


INITIAL_STATE = CalculatorState()
