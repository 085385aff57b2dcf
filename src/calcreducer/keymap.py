"""
Key bindings for host UIs.

Maps physical keys (as reported by keyboard events) and on-screen button
labels to engine actions. Digits, ``.``, the operator glyphs, Enter/``=``,
Backspace, Escape/``c`` and ``%`` follow the standard keyboard contract;
the bracketed button labels reach the actions that have no key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from calcreducer.actions import (
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
)
from calcreducer.exceptions import InvalidInputError, UnknownKeyError
from calcreducer.validators import DIGITS, OPERATORS

if TYPE_CHECKING:
    from calcreducer.actions import Action

KEY_ACTIONS: dict[str, Action] = {
    ".": InputDecimal(),
    "Enter": Calculate(),
    "=": Calculate(),
    "Backspace": Backspace(),
    "Escape": ClearAll(),
    "c": ClearAll(),
    "C": ClearAll(),
    "%": ApplyPercentage(),
    "Delete": ClearEntry(),
    "n": ToggleSign(),
}

BUTTON_ACTIONS: dict[str, Action] = {
    "CE": ClearEntry(),
    "+/-": ToggleSign(),
    "x²": Square(),
    "sqr": Square(),
    "√": SquareRoot(),
    "sqrt": SquareRoot(),
    "1/x": Reciprocal(),
    "MS": MemoryStore(),
    "MR": MemoryRecall(),
    "M+": MemoryAdd(),
    "M-": MemorySubtract(),
    "MC": MemoryClear(),
    "CH": ClearHistory(),
}


def action_for_key(key: str) -> Action | None:
    """Return the action bound to ``key``, or None if the key is unbound."""
    if key in DIGITS:
        return InputDigit(key)
    if key in OPERATORS:
        return HandleOperator(key)
    return KEY_ACTIONS.get(key) or BUTTON_ACTIONS.get(key)


def require_action(key: str) -> Action:
    """
    Return the action bound to ``key``.

    Raises:
        UnknownKeyError: If the key is unbound
    """
    action = action_for_key(key)
    if action is None:
        raise UnknownKeyError(key)
    return action


def tokenize(text: str) -> list[str]:
    """
    Split typed input into keys.

    Every non-space character is a key of its own; a name in square
    brackets is a single key (``"[Enter]"``, ``"[sqrt]"``).

    Examples:
        >>> tokenize("12+[sqrt]=")
        ['1', '2', '+', 'sqrt', '=']

    Raises:
        InvalidInputError: If a bracketed name is not closed
    """
    keys: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == "[":
            end = text.find("]", i + 1)
            if end == -1:
                raise InvalidInputError(text[i:], "Unterminated key name")
            keys.append(text[i + 1 : end])
            i = end + 1
            continue
        if not char.isspace():
            keys.append(char)
        i += 1
    return keys
