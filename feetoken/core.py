"""
Core types and pure functions for the fee token ledger.

This module provides the foundational data structures and protocols:
1. Constants: issuance parameters, fee limits, the null address
2. Protocols: LedgerView for read-only ledger access
3. Immutable data structures: Move and the emitted record types
4. Exceptions: LedgerError and domain-specific error types
5. Type aliases: Balances, MutationHook

All amounts are integers in base units. Nothing in this module mutates
ledger state.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Dict, Optional, Protocol, Set, runtime_checkable


# ============================================================================
# CONSTANTS
# ============================================================================

# Null identifier. Moves from it are issuance (mint), moves to it are
# destruction (burn). Both are exempt from the freeze check.
ZERO_ADDRESS = "0x" + "0" * 40

DECIMALS = 18
INITIAL_SUPPLY = 21314 * 10 ** DECIMALS

# Fee rates are expressed in basis points: 10000 == 100%.
BASIS_POINTS_DENOMINATOR = 10000
MAX_FEE_RATE = 1000
DEFAULT_FEE_RATE = 300

# An allowance of this size is treated as unlimited and never decremented.
MAX_ALLOWANCE = 2 ** 256 - 1


# ============================================================================
# TYPE ALIASES
# ============================================================================

# Mapping from account address to an integer amount.
Balances = Dict[str, int]


def is_null_address(address: Optional[str]) -> bool:
    """Return True for None, the empty string, or ZERO_ADDRESS."""
    return not address or address == ZERO_ADDRESS


def check_amount(amount: int, what: str = "amount") -> int:
    """
    Validate that an amount is a non-negative integer.

    bool is rejected even though it subclasses int.

    Raises:
        TypeError: If amount is not an int
        ValueError: If amount is negative
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"{what} must be int, got {type(amount).__name__}")
    if amount < 0:
        raise ValueError(f"{what} must be non-negative, got {amount}")
    return amount


def format_units(amount: int, decimals: int = DECIMALS) -> str:
    """
    Render a base-unit amount as a human-readable decimal string.

    Example:
        format_units(1_500_000_000_000_000_000) -> "1.5"
    """
    value = Decimal(amount).scaleb(-decimals).normalize()
    if value == value.to_integral_value():
        return str(int(value))
    return format(value, 'f')


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class LedgerView(Protocol):
    """
    Read-only interface to ledger balances.

    Mutation hooks, the freeze registry and tests use this to query balances
    without the ability to modify them. BalanceLedger implements it; FakeView
    in the test suite provides a minimal stand-in.
    """

    def balance_of(self, account: str) -> int:
        """Return the total balance of an account (0 if unseen)."""
        ...

    def total_supply(self) -> int:
        """Return the total issued supply."""
        ...

    def list_accounts(self) -> Set[str]:
        """Return every account that holds a non-zero balance."""
        ...


# ============================================================================
# CORE DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True, slots=True)
class Move:
    """
    A single balance mutation between two accounts.

    Attributes:
        amount: Base units transferred (non-negative int).
        source: Account debited, ZERO_ADDRESS for issuance.
        dest: Account credited, ZERO_ADDRESS for destruction.
    """
    amount: int
    source: str
    dest: str

    def __post_init__(self):
        check_amount(self.amount, "Move amount")
        if self.source is None or self.dest is None:
            raise ValueError("Move endpoints cannot be None")
        if self.is_mint and self.is_burn:
            raise ValueError("Move cannot both mint and burn")

    @property
    def is_mint(self) -> bool:
        return is_null_address(self.source)

    @property
    def is_burn(self) -> bool:
        return is_null_address(self.dest)

    def __repr__(self) -> str:
        return f"Move({self.amount}: {self.source}→{self.dest})"


# Mutation hooks observe every balance change before it is applied and raise
# a LedgerError to veto it.
MutationHook = Callable[[LedgerView, Move], None]


# ============================================================================
# EMITTED RECORDS
# ============================================================================

@dataclass(frozen=True, slots=True)
class Record:
    """Base class for records appended to the ledger's record log."""

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True, slots=True)
class Transfer(Record):
    source: str
    dest: str
    amount: int


@dataclass(frozen=True, slots=True)
class Approval(Record):
    owner: str
    spender: str
    amount: int


@dataclass(frozen=True, slots=True)
class TransferFeeCharged(Record):
    source: str
    amount: int


@dataclass(frozen=True, slots=True)
class FeeTransferred(Record):
    dest: str
    amount: int


@dataclass(frozen=True, slots=True)
class FeeRateChanged(Record):
    old_rate: int
    new_rate: int


@dataclass(frozen=True, slots=True)
class AddressFrozen(Record):
    account: str
    amount: int


@dataclass(frozen=True, slots=True)
class AddressUnfrozen(Record):
    account: str
    amount: int


@dataclass(frozen=True, slots=True)
class Paused(Record):
    account: str


@dataclass(frozen=True, slots=True)
class Unpaused(Record):
    account: str


@dataclass(frozen=True, slots=True)
class OwnershipTransferred(Record):
    previous_owner: str
    new_owner: str


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LedgerError(Exception):
    """Base exception for all ledger-related errors."""
    pass


class InvalidAddress(LedgerError):
    """Raised when the null identifier is supplied where a real account is required."""

    def __init__(self, address: Optional[str], role: str = "account"):
        self.address = address
        self.role = role
        super().__init__(f"invalid {role} address: {address!r}")


class InvalidAmount(LedgerError):
    """Raised when a zero amount is supplied to freeze or unfreeze."""

    def __init__(self, amount: int):
        self.amount = amount
        super().__init__(f"invalid amount: {amount}")


class ZeroTransfer(LedgerError):
    """Raised when a zero amount is supplied to a transfer."""

    def __init__(self):
        super().__init__("transfer amount must be greater than zero")


class InsufficientBalance(LedgerError):
    """Raised when a freeze exceeds the total balance or an unfreeze exceeds the frozen amount."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(f"requested {requested} exceeds available {available}")


class InsufficientUnfrozenBalance(LedgerError):
    """Raised when a transfer exceeds the sender's unfrozen balance."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(f"transfer of {requested} exceeds unfrozen balance {available}")


class FeeRateTooHigh(LedgerError):
    """Raised when a fee rate above the maximum is requested."""

    def __init__(self, requested: int, maximum: int):
        self.requested = requested
        self.maximum = maximum
        super().__init__(f"fee rate {requested} exceeds maximum {maximum}")


class SameOwner(LedgerError):
    """Raised when ownership is transferred to the current owner."""

    def __init__(self, owner: str):
        self.owner = owner
        super().__init__(f"{owner} is already the owner")


class NotOwner(LedgerError):
    """Raised when a non-owner calls an owner-only operation."""

    def __init__(self, caller: str):
        self.caller = caller
        super().__init__(f"{caller} is not the owner")


class OwnershipRenounceDisabled(LedgerError):
    """Raised on every attempt to renounce ownership."""

    MESSAGE = "Ownership renouncement is disabled"

    def __init__(self):
        super().__init__(self.MESSAGE)


class SelfRecoveryForbidden(LedgerError):
    """Raised when the owner tries to recover this token's own units."""

    MESSAGE = "Cannot recover own tokens"

    def __init__(self):
        super().__init__(self.MESSAGE)


class EnforcedPause(LedgerError):
    """Raised when a paused-gated operation runs while paused."""

    def __init__(self):
        super().__init__("operation not allowed while paused")


class ExpectedPause(LedgerError):
    """Raised when unpausing a token that is not paused."""

    def __init__(self):
        super().__init__("token is not paused")


class ReentrantCall(LedgerError):
    """Raised when a guarded entry point is entered while another is running."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"reentrant call to {operation}")


class InsufficientFunds(LedgerError):
    """Raised when a move would take an account's total balance below zero."""

    def __init__(self, account: str, balance: int, needed: int):
        self.account = account
        self.balance = balance
        self.needed = needed
        super().__init__(f"{account}: balance {balance} < needed {needed}")


class InsufficientAllowance(LedgerError):
    """Raised when a delegated spend exceeds the spender's allowance."""

    def __init__(self, spender: str, allowance: int, needed: int):
        self.spender = spender
        self.allowance = allowance
        self.needed = needed
        super().__init__(f"{spender}: allowance {allowance} < needed {needed}")
