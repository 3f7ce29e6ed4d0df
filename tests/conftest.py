"""Shared fixtures for the tiermem test suite."""

from __future__ import annotations

import pytest

from tests.fake_clock import FakeClock
from tiermem.engine import MemoryEngine
from tiermem.models import MemoryCapabilities


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_engine(clock: FakeClock):
    """Factory building an engine on the shared fake clock."""

    def _make(**caps: object) -> MemoryEngine:
        return MemoryEngine(MemoryCapabilities(**caps), clock=clock)

    return _make


@pytest.fixture
def engine(make_engine) -> MemoryEngine:
    return make_engine(short_term_capacity=10, long_term_capacity=10)
