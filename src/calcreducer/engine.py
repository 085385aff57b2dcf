"""
The calculator reducer.

``reduce(state, action)`` is a pure transition function: it never raises,
never mutates ``state``, and returns ``state`` itself for actions it does
not recognise. Binary operators reduce left to right as they are entered,
calculator style, with no algebraic precedence.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any

import structlog

from calcreducer.actions import (
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
)
from calcreducer.exceptions import DomainError
from calcreducer.operations import (
    apply_operator,
    apply_unary,
    format_number,
    is_domain_error,
    parse_display,
    percent,
    reciprocal,
    square,
    square_root,
)
from calcreducer.state import ERROR_DISPLAY, INITIAL_STATE, CalculatorState

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from calcreducer.actions import Action

logger = structlog.get_logger()


# =============================================================================
# Helpers
# =============================================================================


def _append_history(
    history: tuple[str, ...], entry: str, limit: int | None
) -> tuple[str, ...]:
    history = (*history, entry)
    if limit is not None and len(history) > limit:
        history = history[len(history) - limit :]
    return history


def _enter_error(state: CalculatorState, error: DomainError) -> CalculatorState:
    logger.info("calculator.domain_error", error=str(error), display=state.display_value)
    return replace(
        INITIAL_STATE,
        display_value=ERROR_DISPLAY,
        is_error=True,
        memory=state.memory,
        history=state.history,
    )


def _reset(state: CalculatorState) -> CalculatorState:
    return replace(INITIAL_STATE, memory=state.memory, history=state.history)


def _fresh_entry(state: CalculatorState, text: str) -> CalculatorState:
    """Start a new calculation showing ``text``, keeping memory and history."""
    return replace(
        INITIAL_STATE,
        display_value=text,
        expression=text,
        memory=state.memory,
        history=state.history,
    )


def _retrace(state: CalculatorState, display: str) -> str:
    """Rewrite the operand at the tail of the expression as ``display``."""
    base = state.expression
    if state.display_value and base.endswith(state.display_value):
        base = base[: len(base) - len(state.display_value)]
    return base + display


def _enter_operand(state: CalculatorState, text: str) -> CalculatorState:
    """Show ``text`` as the current operand, starting the second operand if one is pending."""
    if state.waiting_for_second_operand:
        return replace(
            state,
            display_value=text,
            expression=state.expression + text,
            waiting_for_second_operand=False,
        )
    return replace(state, display_value=text, expression=_retrace(state, text))


# =============================================================================
# Entry
# =============================================================================


def _input_digit(
    state: CalculatorState, action: InputDigit, limit: int | None
) -> CalculatorState:
    digit = action.digit
    if state.is_error:
        return _fresh_entry(state, digit)
    if state.waiting_for_second_operand:
        return _enter_operand(state, digit)

    current = state.display_value
    if current == "0":
        display = digit
    elif current == "-0":
        display = "-" + digit
    else:
        display = current + digit
    return _enter_operand(state, display)


def _input_decimal(
    state: CalculatorState, action: InputDecimal, limit: int | None
) -> CalculatorState:
    if state.is_error:
        return _fresh_entry(state, "0.")
    if state.waiting_for_second_operand:
        return _enter_operand(state, "0.")
    if "." in state.display_value:
        return state
    return _enter_operand(state, state.display_value + ".")


def _backspace(
    state: CalculatorState, action: Backspace, limit: int | None
) -> CalculatorState:
    if state.is_error:
        return _reset(state)
    current = state.display_value
    if len(current) == 1:
        display = "0"
    else:
        display = current[:-1]
        if display in ("", "-"):
            display = "0"
    if display == current:
        return state
    return _enter_operand(state, display)


def _clear_entry(
    state: CalculatorState, action: ClearEntry, limit: int | None
) -> CalculatorState:
    if state.is_error:
        return _reset(state)
    if state.waiting_for_second_operand:
        return replace(state, display_value="0")
    return replace(state, display_value="0", expression=_retrace(state, ""))


def _clear_all(
    state: CalculatorState, action: ClearAll, limit: int | None
) -> CalculatorState:
    return _reset(state)


# =============================================================================
# Binary operators
# =============================================================================


def _handle_operator(
    state: CalculatorState, action: HandleOperator, limit: int | None
) -> CalculatorState:
    if state.is_error:
        return state
    op = action.operator

    # Operator substitution: the second operand has not been started
    if state.operator is not None and state.waiting_for_second_operand:
        expression = state.expression
        tail = f" {state.operator} "
        if expression.endswith(tail):
            expression = expression[: -len(tail)]
        else:
            expression = expression.rstrip()
        return replace(state, operator=op, expression=f"{expression} {op} ")

    value = parse_display(state.display_value)
    if is_domain_error(value):
        return _enter_error(state, DomainError(op, state.display_value))
    trace = _retrace(state, state.display_value)

    if state.first_operand is None or state.operator is None:
        return replace(
            state,
            first_operand=value,
            operator=op,
            waiting_for_second_operand=True,
            expression=f"{trace} {op} ",
        )

    result = apply_operator(state.operator, state.first_operand, value)
    if is_domain_error(result):
        return _enter_error(state, DomainError(state.operator, state.first_operand, value))
    return replace(
        state,
        display_value=format_number(result),
        first_operand=result,
        operator=op,
        waiting_for_second_operand=True,
        expression=f"{trace} {op} ",
    )


def _calculate(
    state: CalculatorState, action: Calculate, limit: int | None
) -> CalculatorState:
    if state.is_error or state.operator is None or state.first_operand is None:
        return state

    first = state.first_operand
    second = parse_display(state.display_value)
    if is_domain_error(second):
        return _enter_error(state, DomainError(state.operator, first, state.display_value))
    result = apply_operator(state.operator, first, second)
    if is_domain_error(result):
        return _enter_error(state, DomainError(state.operator, first, second))

    display = format_number(result)
    entry = f"{format_number(first)} {state.operator} {format_number(second)} = {display}"
    return replace(
        INITIAL_STATE,
        display_value=display,
        memory=state.memory,
        history=_append_history(state.history, entry, limit),
    )


# =============================================================================
# Unary operations
# =============================================================================


def _toggle_sign(
    state: CalculatorState, action: ToggleSign, limit: int | None
) -> CalculatorState:
    if state.is_error:
        return state
    value = parse_display(state.display_value)
    if is_domain_error(value):
        return _enter_error(state, DomainError("negate", state.display_value))
    if value == 0:
        return state
    return _enter_operand(state, format_number(-value))


def _unary(operation: Callable[[float], float]) -> Callable[..., CalculatorState]:
    def handler(state: CalculatorState, action: Any, limit: int | None) -> CalculatorState:
        if state.is_error:
            return state
        value = parse_display(state.display_value)
        if is_domain_error(value):
            return _enter_error(state, DomainError(operation.__name__, state.display_value))
        result = apply_unary(operation, value)
        if is_domain_error(result):
            return _enter_error(state, DomainError(operation.__name__, value))
        return _enter_operand(state, format_number(result))

    handler.__name__ = f"_{operation.__name__}"
    return handler


# =============================================================================
# Memory and history
# =============================================================================


def _memory_store(
    state: CalculatorState, action: MemoryStore, limit: int | None
) -> CalculatorState:
    if state.is_error:
        return state
    value = parse_display(state.display_value)
    if is_domain_error(value):
        return _enter_error(state, DomainError("store", state.display_value))
    return replace(state, memory=value)


def _memory_recall(
    state: CalculatorState, action: MemoryRecall, limit: int | None
) -> CalculatorState:
    if state.is_error:
        return state
    return _enter_operand(state, format_number(state.memory))


def _memory_update(op: str) -> Callable[..., CalculatorState]:
    def handler(state: CalculatorState, action: Any, limit: int | None) -> CalculatorState:
        if state.is_error:
            return state
        value = parse_display(state.display_value)
        if is_domain_error(value):
            return _enter_error(state, DomainError(op, state.memory, state.display_value))
        result = apply_operator(op, state.memory, value)
        if is_domain_error(result):
            logger.warning("calculator.memory_overflow", memory=state.memory, operator=op)
            return state
        return replace(state, memory=result)

    return handler


def _memory_clear(
    state: CalculatorState, action: MemoryClear, limit: int | None
) -> CalculatorState:
    if state.is_error:
        return state
    return replace(state, memory=0.0)


def _add_to_history(
    state: CalculatorState, action: AddToHistory, limit: int | None
) -> CalculatorState:
    if state.is_error:
        return state
    return replace(state, history=_append_history(state.history, action.entry, limit))


def _clear_history(
    state: CalculatorState, action: ClearHistory, limit: int | None
) -> CalculatorState:
    if state.is_error:
        return state
    return replace(state, history=())


_HANDLERS: dict[type, Callable[..., CalculatorState]] = {
    InputDigit: _input_digit,
    InputDecimal: _input_decimal,
    HandleOperator: _handle_operator,
    Calculate: _calculate,
    ClearAll: _clear_all,
    ClearEntry: _clear_entry,
    Backspace: _backspace,
    ToggleSign: _toggle_sign,
    ApplyPercentage: _unary(percent),
    Square: _unary(square),
    SquareRoot: _unary(square_root),
    Reciprocal: _unary(reciprocal),
    MemoryStore: _memory_store,
    MemoryRecall: _memory_recall,
    MemoryAdd: _memory_update("+"),
    MemorySubtract: _memory_update("-"),
    MemoryClear: _memory_clear,
    AddToHistory: _add_to_history,
    ClearHistory: _clear_history,
}


def reduce(
    state: CalculatorState, action: Action, *, history_limit: int | None = None
) -> CalculatorState:
    """
    Apply one action to a state and return the resulting state.

    Args:
        state: The current state
        action: Any engine action; other objects leave the state unchanged
        history_limit: Keep at most this many history entries (None = unbounded)

    Returns:
        The next state (``state`` itself when nothing changes)
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        logger.debug("calculator.ignored_action", action=repr(action))
        return state

    new_state = handler(state, action, history_limit)
    logger.debug(
        "calculator.transition",
        action=action.type.value,
        display=new_state.display_value,
        phase=new_state.phase.value,
    )
    return new_state


def reduce_all(
    state: CalculatorState, actions: Iterable[Action], *, history_limit: int | None = None
) -> CalculatorState:
    """Fold a sequence of actions over ``state``."""
    for action in actions:
        state = reduce(state, action, history_limit=history_limit)
    return state
