"""
test_allocation.py — Test suite for weighted allocation and split

================================================================================
TEST STRUCTURE
================================================================================

1. UNIT TESTS
   Deterministic cases: documented scenarios, remainder placement, errors.

2. PROPERTY-BASED TESTS (Hypothesis)
   Conservation must hold for ANY amount and ANY valid weight vector.

================================================================================
"""

import logging

import pytest
from hypothesis import given, settings, HealthCheck
from hypothesis import strategies as st

from intmoney import (
    Money,
    Currency,
    InvalidArgumentError,
    DivisionByZeroError,
    allocate_minor_units,
    split_minor_units,
)


def _total(parts):
    return sum(parts, Money.zero(parts[0].currency))


# ==============================================================================
# TEST HELPERS
# ==============================================================================

weights_strategy = st.lists(
    st.integers(min_value=0, max_value=1_000), min_size=1, max_size=50
).filter(lambda ws: sum(ws) > 0)


# ==============================================================================
# UNIT TESTS: allocate
# ==============================================================================

class TestAllocate:
    """Test for Money.allocate()."""

    def test_exact_proportions(self):
        assert Money(100).allocate([4, 6]) == [Money(40), Money(60)]

    def test_small_amount_uneven_weights(self):
        assert Money(5).allocate([3, 7]) == [Money(2), Money(3)]

    def test_remainder_goes_to_first_share(self):
        assert Money(100).allocate([1, 1, 1]) == [Money(34), Money(33), Money(33)]

    def test_remainder_front_loaded_in_input_order(self):
        assert Money(101).allocate([1, 1, 1]) == [Money(34), Money(34), Money(33)]

    def test_single_weight_returns_whole_amount(self):
        m = Money(12345, Currency.USD)
        assert m.allocate([1]) == [m]
        assert m.allocate([7]) == [m]

    def test_negative_amount(self):
        parts = Money(-100).allocate([1, 1, 1])

        assert parts == [Money(-34), Money(-33), Money(-33)]
        assert _total(parts) == Money(-100)

    def test_zero_amount(self):
        assert Money(0).allocate([1, 2, 3]) == [Money(0), Money(0), Money(0)]

    def test_zero_weight_gets_nothing(self):
        assert Money(100).allocate([0, 1]) == [Money(0), Money(100)]
        assert Money(5).allocate([0, 0, 3]) == [Money(0), Money(0), Money(5)]

    def test_more_parts_than_units(self):
        parts = Money(2).allocate([1, 1, 1, 1])
        assert parts == [Money(1), Money(1), Money(0), Money(0)]

    def test_shares_keep_currency(self):
        parts = Money(1000, Currency.EUR).allocate([1, 3])
        assert all(p.currency == Currency.EUR for p in parts)
        assert parts == [Money(250, Currency.EUR), Money(750, Currency.EUR)]

    def test_accepts_tuple_of_weights(self):
        assert Money(100).allocate((4, 6)) == [Money(40), Money(60)]

    def test_large_weight_vector(self):
        weights = list(range(1, 10_001))
        parts = Money(10_000_000 + 9_999).allocate(weights)

        assert len(parts) == 10_000
        assert _total(parts) == Money(10_009_999)

    def test_minor_unit_helper(self):
        assert allocate_minor_units(5, [3, 7]) == [2, 3]

    def test_remainder_shared_by_weight_not_per_share(self):
        # leftover units skip zero-weight shares and go to the first weighted one
        assert Money(3).allocate([0, 0, 1, 1]) == [Money(0), Money(0), Money(2), Money(1)]
        assert Money(-3).allocate([0, 0, 1, 1]) == [Money(0), Money(0), Money(-2), Money(-1)]


class TestAllocateErrors:
    """Malformed weights are rejected before any computation."""

    def test_empty_weights(self):
        with pytest.raises(InvalidArgumentError, match="parts cannot be empty"):
            Money(100).allocate([])

    def test_negative_weight(self):
        with pytest.raises(InvalidArgumentError, match="non-negative integers"):
            Money(100).allocate([-1, 2])

    def test_non_integer_weight(self):
        with pytest.raises(InvalidArgumentError, match="non-negative integers"):
            Money(100).allocate([1.5, 2])

        with pytest.raises(InvalidArgumentError):
            Money(100).allocate([True, 2])

    def test_zero_sum(self):
        with pytest.raises(InvalidArgumentError, match="greater than zero"):
            Money(100).allocate([0, 0])

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            Money(100).allocate([])


# ==============================================================================
# UNIT TESTS: split
# ==============================================================================

class TestSplit:
    """Test for Money.split()."""

    def test_split_one_returns_self(self):
        assert Money(10).split(1) == [Money(10)]

    def test_split_zero(self):
        assert Money(0).split(2) == [Money(0), Money(0)]

    def test_split_with_remainder(self):
        assert Money(11).split(2) == [Money(6), Money(5)]

    def test_split_matches_equal_weight_allocation(self):
        m = Money(2026_00, Currency.EUR)
        assert m.split(12) == m.allocate([1] * 12)

    def test_split_negative(self):
        assert _total(Money(-100).split(3)) == Money(-100)

    def test_split_non_positive(self):
        with pytest.raises(DivisionByZeroError):
            Money(100).split(0)

        with pytest.raises(DivisionByZeroError):
            Money(100).split(-1)

    def test_split_non_integer(self):
        with pytest.raises(InvalidArgumentError):
            Money(100).split(0.5)

    def test_split_errors_are_arithmetic(self):
        with pytest.raises(ArithmeticError):
            split_minor_units(100, 0)

    def test_rejected_split_logs_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="intmoney"):
            with pytest.raises(DivisionByZeroError):
                Money(100).split(0)
            with pytest.raises(InvalidArgumentError):
                Money(100).split(0.5)
        assert caplog.text.count("Rejected split") == 2


# ==============================================================================
# PROPERTY-BASED TESTS (Hypothesis)
# ==============================================================================

class TestAllocateProperties:
    """
    Property-based tests for allocate() and split().

    The defining property: no minor unit is ever created or lost.
    """

    @given(
        amount=st.integers(min_value=-10**12, max_value=10**12),
        weights=weights_strategy,
    )
    @settings(max_examples=1000, suppress_health_check=[HealthCheck.too_slow])
    def test_allocate_sum_equals_original(self, amount: int, weights: list):
        """
        PROPERTY: For any amount and valid weights:
            sum(allocate(amount, weights)) == amount
        """
        parts = Money(amount).allocate(weights)

        assert _total(parts) == Money(amount), f"{amount} / {weights} -> {parts}"

    @given(
        amount=st.integers(min_value=-10**9, max_value=10**9),
        weights=weights_strategy,
    )
    @settings(max_examples=500)
    def test_allocate_returns_one_share_per_weight(self, amount: int, weights: list):
        assert len(Money(amount).allocate(weights)) == len(weights)

    @given(
        amount=st.integers(min_value=0, max_value=10**9),
        weights=weights_strategy,
    )
    @settings(max_examples=500)
    def test_allocate_shares_within_one_unit_of_exact(self, amount: int, weights: list):
        """
        PROPERTY: every share is within one minor unit of its exact
        proportional value amount * w / sum(weights).
        """
        total = sum(weights)
        parts = Money(amount).allocate(weights)

        for part, w in zip(parts, weights):
            assert abs(part.amount * total - amount * w) <= total

    @given(
        amount=st.integers(min_value=-10**9, max_value=10**9),
        n=st.integers(min_value=1, max_value=100),
    )
    @settings(max_examples=500)
    def test_split_parts_differ_by_at_most_one(self, amount: int, n: int):
        values = [p.amount for p in Money(amount).split(n)]

        assert len(values) == n
        assert sum(values) == amount
        assert max(values) - min(values) <= 1

    @given(amount=st.integers(min_value=-10**9, max_value=10**9))
    @settings(max_examples=200)
    def test_allocate_single_weight_identity(self, amount: int):
        assert Money(amount).allocate([1]) == [Money(amount)]
