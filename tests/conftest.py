"""Pytest configuration and shared fixtures."""

import os

import pytest
from hypothesis import Verbosity, settings

from calcreducer import INITIAL_STATE, reduce_all, require_action, tokenize

# Configure Hypothesis profiles
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

# Load profile from environment or default to "dev"
profile = os.environ.get("HYPOTHESIS_PROFILE", "dev")
settings.load_profile(profile)


@pytest.fixture
def keys():
    """Return a helper that presses a key sequence on a state and returns the result."""

    def run(text, state=INITIAL_STATE, history_limit=None):
        actions = [require_action(key) for key in tokenize(text)]
        return reduce_all(state, actions, history_limit=history_limit)

    return run


@pytest.fixture
def error_state(keys):
    """Provide a state in error after dividing by zero, with memory and history set."""
    state = keys("1+1=c5[MS]c")
    return keys("5/0=", state=state)


@pytest.fixture
def calculator():
    """Provide a fresh Calculator session with explicit settings."""
    from calcreducer import Calculator, CalculatorSettings

    return Calculator(config=CalculatorSettings(history_limit=100, undo_depth=50))
