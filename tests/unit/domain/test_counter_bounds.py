"""Tests for CounterBounds."""

import pytest

from counter_service.domain.errors import BoundaryError
from counter_service.domain.policies.bounds import (
    MAX_COUNTER_VALUE,
    MIN_COUNTER_VALUE,
    CounterBounds,
)


def test_default_range():
    b = CounterBounds()
    assert b.minimum == MIN_COUNTER_VALUE == 0
    assert b.maximum == MAX_COUNTER_VALUE == 1_000_000_000


def test_edges_are_inclusive():
    b = CounterBounds()
    assert b.contains(0)
    assert b.contains(1_000_000_000)
    assert not b.contains(-1)
    assert not b.contains(1_000_000_001)


def test_validate_returns_value_in_range():
    assert CounterBounds(0, 10).validate(7) == 7


def test_validate_raises_below_minimum():
    with pytest.raises(BoundaryError) as exc_info:
        CounterBounds(0, 10).validate(-1)
    assert exc_info.value.proposed == -1


def test_validate_raises_above_maximum():
    with pytest.raises(BoundaryError):
        CounterBounds(0, 10).validate(11)


def test_inverted_bounds_rejected():
    with pytest.raises(ValueError):
        CounterBounds(10, 0)


def test_single_point_range():
    b = CounterBounds(5, 5)
    assert b.contains(5)
    assert not b.contains(4)
    assert not b.contains(6)
