"""
Fee Determinism Conformance Tests

INVARIANT: Fee arithmetic is exact integer arithmetic, floored, and depends
only on (amount, rate).

    ∀ amount x >= 0, rate r in [0, MAX_FEE_RATE]:
        fee = ⌊x * r / 10000⌋
        fee + net = x
        fee <= x * r / 10000 < fee + 1
"""

from fractions import Fraction

from hypothesis import given, settings
from hypothesis import strategies as st

from feetoken import (
    compute_fee_split, BASIS_POINTS_DENOMINATOR, MAX_FEE_RATE, INITIAL_SUPPLY,
)

from tests.token_helpers import ADMIN, ALICE, DEPLOYER, make_token


amounts = st.integers(min_value=0, max_value=INITIAL_SUPPLY)
rates = st.integers(min_value=0, max_value=MAX_FEE_RATE)


class TestFeeDeterminismProperties:
    """Property-based fee arithmetic tests."""

    @given(amounts, rates)
    @settings(max_examples=300)
    def test_split_is_exact_floor(self, amount, rate):
        """
        PROPERTY: fee is the floor of the exact rational fee.
        """
        split = compute_fee_split(amount, rate)
        exact = Fraction(amount * rate, BASIS_POINTS_DENOMINATOR)
        assert split.fee + split.net == amount
        assert split.fee <= exact < split.fee + 1

    @given(amounts, rates)
    @settings(max_examples=100)
    def test_split_is_reproducible(self, amount, rate):
        """
        PROPERTY: The same inputs always give the same split.
        """
        assert compute_fee_split(amount, rate) == compute_fee_split(amount, rate)

    @given(amounts, amounts, rates)
    @settings(max_examples=200)
    def test_fee_is_monotonic_in_amount(self, a, b, rate):
        """
        PROPERTY: A larger amount never carries a smaller fee.
        """
        low, high = sorted((a, b))
        assert compute_fee_split(low, rate).fee <= compute_fee_split(high, rate).fee

    @given(amounts, rates, rates)
    @settings(max_examples=200)
    def test_fee_is_monotonic_in_rate(self, amount, r1, r2):
        """
        PROPERTY: A higher rate never carries a smaller fee.
        """
        low, high = sorted((r1, r2))
        assert compute_fee_split(amount, low).fee <= compute_fee_split(amount, high).fee

    @given(st.integers(min_value=1, max_value=10 ** 6), rates)
    @settings(max_examples=100)
    def test_quote_matches_execution(self, amount, rate):
        """
        PROPERTY: calculate_transfer_fee() predicts exactly what transfer() does.
        """
        token = make_token(fee_rate=rate)
        fee, net = token.calculate_transfer_fee(amount)
        token.transfer(DEPLOYER, ALICE, amount)
        assert (token.balance_of(ADMIN), token.balance_of(ALICE)) == (fee, net)


class TestFeeDeterminismExamples:
    """Explicit fee examples."""

    def test_reference_values(self):
        assert compute_fee_split(1000, 300).as_tuple() == (30, 970)
        assert compute_fee_split(1000, 1000).as_tuple() == (100, 900)
        assert compute_fee_split(9999, 1).as_tuple() == (0, 9999)
        assert compute_fee_split(10000, 1).as_tuple() == (1, 9999)

    def test_whole_supply(self):
        split = compute_fee_split(INITIAL_SUPPLY, 300)
        assert split.fee == 63942 * 10 ** 16
