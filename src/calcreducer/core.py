"""Calculator session wrapping the reducer for a host UI."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

import structlog

from calcreducer.config import CalculatorSettings, settings
from calcreducer.engine import reduce
from calcreducer.exceptions import CalculatorError
from calcreducer.keymap import action_for_key, tokenize
from calcreducer.state import INITIAL_STATE, CalculatorState

if TYPE_CHECKING:
    from collections.abc import Callable

    from calcreducer.actions import Action

logger = structlog.get_logger()


class Calculator:
    """
    A calculator session: the current state plus the host-facing plumbing.

    The session owns no arithmetic. Every change goes through the pure
    reducer; the session keeps the latest state, notifies subscribers,
    and keeps earlier states for undo.

    Example:
        >>> calc = Calculator()
        >>> calc.type_keys("7+3*2=").display
        '20'
        >>> calc.undo().display
        '2'
    """

    def __init__(
        self,
        state: CalculatorState | None = None,
        *,
        config: CalculatorSettings | None = None,
    ) -> None:
        """
        Initialize a session.

        Args:
            state: Starting state (default: a fresh calculator)
            config: Settings to use instead of the environment-derived ones
        """
        self._config = config or settings
        self._state = state if state is not None else INITIAL_STATE
        self._undo: deque[CalculatorState] = deque(maxlen=self._config.undo_depth)
        self._listeners: list[Callable[[CalculatorState], None]] = []

    @property
    def state(self) -> CalculatorState:
        """Current state snapshot."""
        return self._state

    @property
    def display(self) -> str:
        return self._state.display_value

    @property
    def expression(self) -> str:
        return self._state.expression

    @property
    def memory(self) -> float:
        return self._state.memory

    @property
    def history(self) -> list[str]:
        """Completed calculations, oldest first."""
        return list(self._state.history)

    @property
    def is_error(self) -> bool:
        return self._state.is_error

    def dispatch(self, action: Action) -> Calculator:
        """Apply an action and notify subscribers if the state changed."""
        new_state = reduce(self._state, action, history_limit=self._config.history_limit)
        if new_state != self._state:
            self._undo.append(self._state)
            self._set_state(new_state)
        return self

    def press(self, key: str) -> Calculator:
        """Dispatch the action bound to ``key``; unbound keys are ignored."""
        action = action_for_key(key)
        if action is None:
            logger.debug("calculator.unbound_key", key=key)
            return self
        return self.dispatch(action)

    def type_keys(self, text: str) -> Calculator:
        """Press each key of ``text`` in order (see ``keymap.tokenize``)."""
        for key in tokenize(text):
            self.press(key)
        return self

    def subscribe(self, listener: Callable[[CalculatorState], None]) -> Callable[[], None]:
        """
        Call ``listener`` with every new state.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def undo(self) -> Calculator:
        """
        Restore the state before the last change.

        Raises:
            CalculatorError: If there is nothing to undo
        """
        if not self._undo:
            raise CalculatorError("Nothing to undo")
        self._set_state(self._undo.pop())
        return self

    def reset(self) -> Calculator:
        """Return to a fresh calculator, dropping memory, history and undo."""
        self._undo.clear()
        self._set_state(INITIAL_STATE)
        return self

    def copy(self) -> Calculator:
        """Create an independent session with the same state and undo stack."""
        new_calc = Calculator(self._state, config=self._config)
        new_calc._undo.extend(self._undo)
        return new_calc

    def _set_state(self, state: CalculatorState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def __repr__(self) -> str:
        return (
            f"Calculator(display={self._state.display_value!r}, "
            f"phase={self._state.phase.value}, history_len={len(self._state.history)})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Calculator):
            return NotImplemented
        return self._state == other._state

    def __hash__(self) -> int:
        return hash(self._state)
