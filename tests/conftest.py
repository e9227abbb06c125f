"""Pytest configuration for spheretrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

from collections.abc import Iterable

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


class ScriptedRandom:
    """Random source replaying a fixed sequence of floats.

    Raises AssertionError when the script runs out, so tests also pin down
    how many draws a function makes.
    """

    def __init__(self, values: Iterable[float]) -> None:
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        assert self.calls < len(self._values), "ScriptedRandom ran out of values"
        value = self._values[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def scripted_random():
    """Factory for ScriptedRandom sources."""
    return ScriptedRandom


@pytest.fixture
def rng():
    """A seeded NumPy generator."""
    from spheretrace.core.sampling import make_rng

    return make_rng(seed=1234)
