"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; keep tests off any real database.
os.environ.setdefault("STORE_BACKEND", "memory")

import pytest

from counter_service.domain.entities.counter import Counter


class RecordingSleep:
    """Stand-in for asyncio.sleep that returns immediately and records delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class ZeroJitter:
    """RNG stub whose uniform() always picks the lower bound."""

    def uniform(self, a: float, b: float) -> float:
        return a


class MaxJitter:
    """RNG stub whose uniform() always picks the upper bound."""

    def uniform(self, a: float, b: float) -> float:
        return b


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def zero_jitter():
    return ZeroJitter()


@pytest.fixture
def max_jitter():
    return MaxJitter()


@pytest.fixture
def record_10():
    return Counter(id="global", value=10, version=1)
