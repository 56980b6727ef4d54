"""
config.py - Token construction parameters

TokenConfig captures everything fixed when a FeeToken is created. Values are
validated once, in __post_init__, so FeeToken can trust them.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .core import (
    DECIMALS, INITIAL_SUPPLY, DEFAULT_FEE_RATE, MAX_FEE_RATE,
    is_null_address, check_amount,
)


@dataclass(frozen=True, slots=True)
class TokenConfig:
    """
    Immutable construction parameters for a FeeToken.

    Attributes:
        deployer: Account that receives the initial supply.
        initial_owner: Administrator after construction (defaults to deployer).
        address: The token's own address; recovery of this address is forbidden.
        name: Human-readable token name.
        symbol: Ticker symbol.
        initial_fee_rate: Starting fee rate in basis points.
        initial_supply: Units minted to the deployer.
        verbose: Print applied and rejected operations.
    """
    deployer: str
    initial_owner: Optional[str] = None
    address: str = "feetoken"
    name: str = "Fee Token"
    symbol: str = "FEE"
    initial_fee_rate: int = DEFAULT_FEE_RATE
    initial_supply: int = INITIAL_SUPPLY
    verbose: bool = False

    def __post_init__(self):
        if is_null_address(self.deployer):
            raise ValueError("deployer cannot be the null address")
        if self.initial_owner is None:
            object.__setattr__(self, 'initial_owner', self.deployer)
        elif is_null_address(self.initial_owner):
            raise ValueError("initial_owner cannot be the null address")
        if is_null_address(self.address):
            raise ValueError("token address cannot be the null address")
        if self.address in (self.deployer, self.initial_owner):
            raise ValueError("token address must differ from deployer and owner")
        if not self.name or not self.name.strip():
            raise ValueError("name cannot be empty")
        if not self.symbol or not self.symbol.strip():
            raise ValueError("symbol cannot be empty")
        check_amount(self.initial_fee_rate, "initial_fee_rate")
        if self.initial_fee_rate > MAX_FEE_RATE:
            raise ValueError(
                f"initial_fee_rate {self.initial_fee_rate} exceeds maximum {MAX_FEE_RATE}"
            )
        check_amount(self.initial_supply, "initial_supply")

    @property
    def decimals(self) -> int:
        return DECIMALS
