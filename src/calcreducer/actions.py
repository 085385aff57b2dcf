"""The closed set of actions the engine understands.

Each action is a frozen dataclass tagged with its ``ActionType``.
Payloads are validated on construction, so an action that exists is
always well formed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

from calcreducer.exceptions import InvalidInputError
from calcreducer.validators import validate_digit, validate_history_entry, validate_operator


class ActionType(str, Enum):
    """Wire names of the engine actions."""

    INPUT_DIGIT = "INPUT_DIGIT"
    INPUT_DECIMAL = "INPUT_DECIMAL"
    HANDLE_OPERATOR = "HANDLE_OPERATOR"
    CALCULATE = "CALCULATE"
    CLEAR_ALL = "CLEAR_ALL"
    CLEAR_ENTRY = "CLEAR_ENTRY"
    BACKSPACE = "BACKSPACE"
    TOGGLE_SIGN = "TOGGLE_SIGN"
    APPLY_PERCENTAGE = "APPLY_PERCENTAGE"
    SQUARE = "SQUARE"
    SQUARE_ROOT = "SQUARE_ROOT"
    RECIPROCAL = "RECIPROCAL"
    MEMORY_STORE = "MEMORY_STORE"
    MEMORY_RECALL = "MEMORY_RECALL"
    MEMORY_ADD = "MEMORY_ADD"
    MEMORY_SUBTRACT = "MEMORY_SUBTRACT"
    MEMORY_CLEAR = "MEMORY_CLEAR"
    ADD_TO_HISTORY = "ADD_TO_HISTORY"
    CLEAR_HISTORY = "CLEAR_HISTORY"


@dataclass(frozen=True)
class InputDigit:
    digit: str
    type: ClassVar[ActionType] = ActionType.INPUT_DIGIT

    def __post_init__(self) -> None:
        validate_digit(self.digit)


@dataclass(frozen=True)
class InputDecimal:
    type: ClassVar[ActionType] = ActionType.INPUT_DECIMAL


@dataclass(frozen=True)
class HandleOperator:
    operator: str
    type: ClassVar[ActionType] = ActionType.HANDLE_OPERATOR

    def __post_init__(self) -> None:
        validate_operator(self.operator)


@dataclass(frozen=True)
class Calculate:
    type: ClassVar[ActionType] = ActionType.CALCULATE


@dataclass(frozen=True)
class ClearAll:
    type: ClassVar[ActionType] = ActionType.CLEAR_ALL


@dataclass(frozen=True)
class ClearEntry:
    type: ClassVar[ActionType] = ActionType.CLEAR_ENTRY


@dataclass(frozen=True)
class Backspace:
    type: ClassVar[ActionType] = ActionType.BACKSPACE


@dataclass(frozen=True)
class ToggleSign:
    type: ClassVar[ActionType] = ActionType.TOGGLE_SIGN


@dataclass(frozen=True)
class ApplyPercentage:
    type: ClassVar[ActionType] = ActionType.APPLY_PERCENTAGE


@dataclass(frozen=True)
class Square:
    type: ClassVar[ActionType] = ActionType.SQUARE


@dataclass(frozen=True)
class SquareRoot:
    type: ClassVar[ActionType] = ActionType.SQUARE_ROOT


@dataclass(frozen=True)
class Reciprocal:
    type: ClassVar[ActionType] = ActionType.RECIPROCAL


@dataclass(frozen=True)
class MemoryStore:
    type: ClassVar[ActionType] = ActionType.MEMORY_STORE


@dataclass(frozen=True)
class MemoryRecall:
    type: ClassVar[ActionType] = ActionType.MEMORY_RECALL


@dataclass(frozen=True)
class MemoryAdd:
    type: ClassVar[ActionType] = ActionType.MEMORY_ADD


@dataclass(frozen=True)
class MemorySubtract:
    type: ClassVar[ActionType] = ActionType.MEMORY_SUBTRACT


@dataclass(frozen=True)
class MemoryClear:
    type: ClassVar[ActionType] = ActionType.MEMORY_CLEAR


@dataclass(frozen=True)
class AddToHistory:
    entry: str
    type: ClassVar[ActionType] = ActionType.ADD_TO_HISTORY

    def __post_init__(self) -> None:
        validate_history_entry(self.entry)


@dataclass(frozen=True)
class ClearHistory:
    type: ClassVar[ActionType] = ActionType.CLEAR_HISTORY


Action = Union[
    InputDigit,
    InputDecimal,
    HandleOperator,
    Calculate,
    ClearAll,
    ClearEntry,
    Backspace,
    ToggleSign,
    ApplyPercentage,
    Square,
    SquareRoot,
    Reciprocal,
    MemoryStore,
    MemoryRecall,
    MemoryAdd,
    MemorySubtract,
    MemoryClear,
    AddToHistory,
    ClearHistory,
]

ACTION_CLASSES: dict[ActionType, type] = {
    cls.type: cls
    for cls in (
        InputDigit,
        InputDecimal,
        HandleOperator,
        Calculate,
        ClearAll,
        ClearEntry,
        Backspace,
        ToggleSign,
        ApplyPercentage,
        Square,
        SquareRoot,
        Reciprocal,
        MemoryStore,
        MemoryRecall,
        MemoryAdd,
        MemorySubtract,
        MemoryClear,
        AddToHistory,
        ClearHistory,
    )
}

# Actions whose single field carries the payload
_PAYLOAD_FIELDS: dict[ActionType, str] = {
    ActionType.INPUT_DIGIT: "digit",
    ActionType.HANDLE_OPERATOR: "operator",
    ActionType.ADD_TO_HISTORY: "entry",
}


def action_from_dict(data: dict[str, Any]) -> Action:
    """
    Build an action from its wire form ``{"type": ..., "payload": ...}``.

    Raises:
        InvalidInputError: If the type is unknown or the payload is
            missing or malformed
    """
    try:
        action_type = ActionType(data["type"])
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidInputError(data, "Unknown action type") from e

    cls = ACTION_CLASSES[action_type]
    field = _PAYLOAD_FIELDS.get(action_type)
    if field is None:
        return cls()
    if "payload" not in data:
        raise InvalidInputError(data, f"{action_type.value} requires a payload")
    return cls(data["payload"])


def action_to_dict(action: Action) -> dict[str, Any]:
    """Return the wire form of an action."""
    data: dict[str, Any] = {"type": action.type.value}
    field = _PAYLOAD_FIELDS.get(action.type)
    if field is not None:
        data["payload"] = getattr(action, field)
    return data
