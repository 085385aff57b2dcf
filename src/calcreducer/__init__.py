"""
Calculator engine: a pure reducer over keypad actions.

The engine interprets digits, operators, memory and scientific functions
into a display value, an expression trace, a memory register and a
bounded history. It never raises on input; out-of-domain arithmetic
(divide by zero, negative square root, reciprocal of zero) lands in an
error state that the next digit clears.

Example:
    >>> from calcreducer import INITIAL_STATE, InputDigit, SquareRoot, reduce
    >>> reduce(reduce(INITIAL_STATE, InputDigit("9")), SquareRoot()).display_value
    '3'
"""

from calcreducer.actions import (
    Action,
    ActionType,
    AddToHistory,
    ApplyPercentage,
    Backspace,
    Calculate,
    ClearAll,
    ClearEntry,
    ClearHistory,
    HandleOperator,
    InputDecimal,
    InputDigit,
    MemoryAdd,
    MemoryClear,
    MemoryRecall,
    MemoryStore,
    MemorySubtract,
    Reciprocal,
    Square,
    SquareRoot,
    ToggleSign,
    action_from_dict,
    action_to_dict,
)
from calcreducer.config import CalculatorSettings, settings
from calcreducer.core import Calculator
from calcreducer.engine import reduce, reduce_all
from calcreducer.exceptions import (
    CalculatorError,
    DomainError,
    InvalidInputError,
    UnknownKeyError,
)
from calcreducer.keymap import action_for_key, require_action, tokenize
from calcreducer.logging_config import configure_logging
from calcreducer.operations import (
    add,
    divide,
    format_number,
    multiply,
    parse_display,
    percent,
    power,
    reciprocal,
    round_result,
    square,
    square_root,
    subtract,
)
from calcreducer.state import INITIAL_STATE, CalculatorState, Phase

__all__ = [
    "INITIAL_STATE",
    "Action",
    "ActionType",
    "AddToHistory",
    "ApplyPercentage",
    "Backspace",
    "Calculate",
    "Calculator",
    "CalculatorError",
    "CalculatorSettings",
    "CalculatorState",
    "ClearAll",
    "ClearEntry",
    "ClearHistory",
    "DomainError",
    "HandleOperator",
    "InputDecimal",
    "InputDigit",
    "InvalidInputError",
    "MemoryAdd",
    "MemoryClear",
    "MemoryRecall",
    "MemoryStore",
    "MemorySubtract",
    "Phase",
    "Reciprocal",
    "Square",
    "SquareRoot",
    "ToggleSign",
    "UnknownKeyError",
    "action_for_key",
    "action_from_dict",
    "action_to_dict",
    "add",
    "configure_logging",
    "divide",
    "format_number",
    "multiply",
    "parse_display",
    "percent",
    "power",
    "reciprocal",
    "reduce",
    "reduce_all",
    "require_action",
    "round_result",
    "settings",
    "square",
    "square_root",
    "subtract",
    "tokenize",
]

__version__ = "0.1.0"
