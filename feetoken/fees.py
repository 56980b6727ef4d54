"""
fees.py - Transfer Fee Engine

This module provides fee computation for transfers:
1. compute_fee_split() - Pure function splitting an amount into (fee, net)
2. FeeSplit - Immutable result of a split
3. FeeSchedule - Holder of the configurable fee rate

Fees are charged in basis points (BASIS_POINTS_DENOMINATOR == 100%) and always
round down, so the sender never pays more than the stated rate:

    fee = floor(amount * rate / 10000)
    net = amount - fee
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from .core import (
    BASIS_POINTS_DENOMINATOR, MAX_FEE_RATE,
    FeeRateChanged, FeeRateTooHigh,
    check_amount,
)


@dataclass(frozen=True, slots=True)
class FeeSplit:
    """
    Fee/net decomposition of a transfer amount.

    Attributes:
        fee: Portion paid to the fee beneficiary.
        net: Portion delivered to the recipient.
    """
    fee: int
    net: int

    @property
    def amount(self) -> int:
        return self.fee + self.net

    def as_tuple(self) -> Tuple[int, int]:
        return self.fee, self.net


def compute_fee_split(amount: int, rate_bps: int) -> FeeSplit:
    """
    Split a transfer amount into fee and net.

    Pure function with no failure conditions for valid input: an amount of
    zero yields FeeSplit(0, 0).

    Args:
        amount: Requested transfer amount in base units
        rate_bps: Fee rate in basis points

    Returns:
        FeeSplit with fee + net == amount

    Example:
        compute_fee_split(1000, 300) -> FeeSplit(fee=30, net=970)
    """
    check_amount(amount)
    check_amount(rate_bps, "rate_bps")
    fee = amount * rate_bps // BASIS_POINTS_DENOMINATOR
    return FeeSplit(fee=fee, net=amount - fee)


class FeeSchedule:
    """
    The process-wide fee configuration of one token.

    The maximum rate is fixed at construction; the current rate changes only
    through set_rate().
    """

    def __init__(self, rate_bps: int, max_rate_bps: int = MAX_FEE_RATE):
        check_amount(max_rate_bps, "max_rate_bps")
        if max_rate_bps > BASIS_POINTS_DENOMINATOR:
            raise ValueError(
                f"max_rate_bps {max_rate_bps} exceeds {BASIS_POINTS_DENOMINATOR}"
            )
        self.max_rate = max_rate_bps
        self.rate = self._validated(rate_bps)

    def _validated(self, rate_bps: int) -> int:
        check_amount(rate_bps, "rate_bps")
        if rate_bps > self.max_rate:
            raise FeeRateTooHigh(rate_bps, self.max_rate)
        return rate_bps

    def set_rate(self, new_rate: int) -> FeeRateChanged:
        """
        Change the fee rate.

        Returns:
            FeeRateChanged record for the caller to emit

        Raises:
            FeeRateTooHigh: If new_rate exceeds the maximum
        """
        new_rate = self._validated(new_rate)
        old_rate, self.rate = self.rate, new_rate
        return FeeRateChanged(old_rate=old_rate, new_rate=new_rate)

    def rate_info(self) -> Tuple[int, int]:
        """Return (current_rate, maximum_rate)."""
        return self.rate, self.max_rate

    def split(self, amount: int) -> FeeSplit:
        return compute_fee_split(amount, self.rate)

    def __repr__(self) -> str:
        return f"FeeSchedule({self.rate}/{BASIS_POINTS_DENOMINATOR} bps, max {self.max_rate})"
