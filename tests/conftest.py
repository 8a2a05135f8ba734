"""Pytest configuration and shared fixtures."""

import os

import pytest
from hypothesis import Verbosity, settings

# Configure Hypothesis profiles
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

# Load profile from environment or default to "dev"
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture
def engine():
    """Provide a CalculatorEngine with default limits."""
    from calcengine import CalculatorEngine

    return CalculatorEngine()


@pytest.fixture
def calculator():
    """Provide a fresh Calculator session."""
    from calcengine import Calculator

    return Calculator()


@pytest.fixture
def press(engine):
    """Run a space-separated key sequence from the initial state."""
    from calcengine import classify

    def _press(keys, state=None):
        actions = [classify(token) for token in keys.split()]
        return engine.run([a for a in actions if a is not None], state)

    return _press
