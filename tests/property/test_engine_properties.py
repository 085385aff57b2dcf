"""
Property-based tests for the calculator reducer.

Random action sequences are fed to the engine, and the state invariants
are checked after every step with a Hypothesis state machine.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from hypothesis.stateful import RuleBasedStateMachine, invariant, rule

from calcreducer import (
    INITIAL_STATE,
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
    reduce,
    reduce_all,
)

digits = st.sampled_from("0123456789")
operators = st.sampled_from(["+", "-", "*", "/", "^"])

plain_actions = st.sampled_from(
    [
        InputDecimal(),
        Calculate(),
        ClearAll(),
        ClearEntry(),
        Backspace(),
        ToggleSign(),
        ApplyPercentage(),
        Square(),
        SquareRoot(),
        Reciprocal(),
        MemoryStore(),
        MemoryRecall(),
        MemoryAdd(),
        MemorySubtract(),
        MemoryClear(),
        ClearHistory(),
    ]
)

actions = st.one_of(
    digits.map(InputDigit),
    digits.map(InputDigit),
    operators.map(HandleOperator),
    plain_actions,
    st.sampled_from(["a", "b = 2"]).map(AddToHistory),
)

action_sequences = st.lists(actions, max_size=40)

# Actions that may leave the error state
EXITS_ERROR = (InputDigit, InputDecimal, ClearAll, ClearEntry, Backspace)


def check_invariants(state) -> None:
    if state.waiting_for_second_operand:
        assert state.operator is not None
    assert state.is_error == (state.display_value == "Error")
    assert state.display_value.count(".") <= 1
    assert state.display_value != ""


@pytest.mark.property
class TestReducerProperties:
    """Property-based tests for reduce."""

    @given(sequence=action_sequences)
    def test_invariants_hold(self, sequence):
        state = INITIAL_STATE
        for action in sequence:
            state = reduce(state, action)
            check_invariants(state)

    @given(sequence=action_sequences)
    def test_deterministic(self, sequence):
        assert reduce_all(INITIAL_STATE, sequence) == reduce_all(INITIAL_STATE, sequence)

    @given(sequence=action_sequences, junk=st.one_of(st.text(), st.integers(), st.none()))
    def test_unrecognized_action_is_identity(self, sequence, junk):
        state = reduce_all(INITIAL_STATE, sequence)
        assert reduce(state, junk) == state

    @given(sequence=action_sequences, action=st.sampled_from([ClearEntry(), Backspace()]))
    def test_entry_edits_keep_memory_and_history(self, sequence, action):
        state = reduce_all(INITIAL_STATE, sequence)
        after = reduce(state, action)
        assert after.memory == state.memory
        assert after.history == state.history

    @given(a=digits, b=digits, c=digits)
    def test_chaining_is_left_to_right(self, a, b, c):
        state = reduce_all(
            INITIAL_STATE,
            [InputDigit(a), HandleOperator("+"), InputDigit(b), HandleOperator("*"), InputDigit(c), Calculate()],
        )
        assert float(state.display_value) == (int(a) + int(b)) * int(c)

    @given(a=digits, b=digits, op=operators)
    def test_calculate_appends_at_most_one_entry(self, a, b, op):
        state = reduce_all(INITIAL_STATE, [InputDigit(a), HandleOperator(op), InputDigit(b)])
        after = reduce(state, Calculate())
        if after.is_error:
            assert after.history == state.history
        else:
            assert after.history == (*state.history, after.history[-1])

    @given(a=digits)
    def test_divide_by_zero_appends_nothing(self, a):
        state = reduce_all(
            INITIAL_STATE, [InputDigit(a), HandleOperator("/"), InputDigit("0"), Calculate()]
        )
        assert state.is_error
        assert state.history == ()

    @given(sequence=action_sequences, action=actions)
    def test_error_containment(self, sequence, action):
        prefix = reduce_all(INITIAL_STATE, sequence)
        state = reduce_all(
            prefix,
            [ClearAll(), InputDigit("1"), HandleOperator("/"), InputDigit("0"), Calculate()],
        )
        assert state.is_error
        assert state.memory == prefix.memory
        assert state.history == prefix.history

        after = reduce(state, action)
        if not isinstance(action, EXITS_ERROR):
            assert after is state
        assert after.memory == state.memory
        assert after.history == state.history

    @given(d=digits.filter(lambda d: d != "0"))
    def test_memory_survives_clear_all(self, d):
        state = reduce_all(INITIAL_STATE, [InputDigit(d), MemoryStore(), ClearAll(), MemoryRecall()])
        assert state.display_value == d


@pytest.mark.property
@pytest.mark.slow
class CalculatorStateMachine(RuleBasedStateMachine):
    """
    Stateful testing for the reducer.

    Generates random action sequences and checks the state invariants,
    history bookkeeping and error containment after every step.
    """

    def __init__(self) -> None:
        super().__init__()
        self.state = INITIAL_STATE

    def apply(self, action) -> None:
        before = self.state
        self.state = reduce(before, action)
        if before.is_error and not isinstance(action, EXITS_ERROR):
            assert self.state is before

    @invariant()
    def state_invariants(self) -> None:
        check_invariants(self.state)

    @rule(digit=digits)
    def digit(self, digit: str) -> None:
        self.apply(InputDigit(digit))

    @rule()
    def decimal(self) -> None:
        self.apply(InputDecimal())

    @rule(op=operators)
    def operator(self, op: str) -> None:
        self.apply(HandleOperator(op))

    @rule()
    def calculate(self) -> None:
        before = self.state
        self.apply(Calculate())
        pending = before.operator is not None and not before.is_error
        if pending and not self.state.is_error:
            assert len(self.state.history) == len(before.history) + 1
        else:
            assert self.state.history == before.history

    @rule(action=plain_actions)
    def plain(self, action) -> None:
        before = self.state
        self.apply(action)
        if not isinstance(action, (MemoryStore, MemoryAdd, MemorySubtract, MemoryClear)):
            assert self.state.memory == before.memory

    @rule()
    def clear_all(self) -> None:
        before = self.state
        self.apply(ClearAll())
        assert self.state.display_value == "0"
        assert self.state.memory == before.memory
        assert self.state.history == before.history


# Run the state machine as a pytest test
TestStateMachine = CalculatorStateMachine.TestCase
