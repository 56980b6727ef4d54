"""
token.py - Fee Token

FeeToken is the public face of the package. It composes the balance ledger,
freeze registry, fee schedule and access collaborators, and it is the only
place that sequences them.

Transfer pipeline (transfer / transfer_from):
    1. Pause gate and reentrancy guard
    2. Allowance spend (transfer_from only)
    3. Null-address and zero-amount checks
    4. Unfrozen-balance pre-check against the full requested amount
    5. Fee split
    6. Ledger move of the net amount to the recipient
    7. Ledger move of the fee to the owner, plus fee records

Steps 6 and 7 pass through the ledger's mutation hook, which re-checks the
unfrozen balance on its own. Every public operation is atomic: on failure the
ledger, registry and configuration are restored and no record is published.
Records of an applied operation are delivered after it has been applied, so
a subscriber that raises cannot undo it.
"""

from __future__ import annotations
from contextlib import contextmanager, nullcontext
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Protocol, Tuple
import threading

from .config import TokenConfig
from .controls import Ownership, PauseGate, ReentrancyGuard
from .core import (
    # Types
    OwnershipTransferred, TransferFeeCharged, FeeTransferred,
    # Constants
    ZERO_ADDRESS,
    # Exceptions
    InvalidAddress, ZeroTransfer, InsufficientUnfrozenBalance,
    SelfRecoveryForbidden,
    # Helper functions
    is_null_address, check_amount,
)
from .enforcement import freeze_enforcement_hook
from .fees import FeeSchedule
from .freeze import FreezeRegistry
from .ledger import BalanceLedger, LedgerCheckpoint


class RecoverableAsset(Protocol):
    """Any external asset the owner can pull stuck units out of."""

    address: str

    def transfer(self, caller: str, to: str, amount: int) -> bool:
        ...


@dataclass(frozen=True, slots=True)
class ContractInfo:
    name: str
    symbol: str
    decimals: int
    total_supply: int
    owner: str
    fee_rate: int


@dataclass(frozen=True, slots=True)
class _Checkpoint:
    ledger: LedgerCheckpoint
    frozen: Tuple[Tuple[str, int], ...]
    fee_rate: int
    owner: str
    paused: bool


class FeeToken:
    """
    Fungible token with a transfer fee and administrator-controlled freezes.

    Callers identify themselves explicitly: every operation that depends on
    who is calling takes a `caller` address as its first argument.

    Thread Safety:
        Every public operation runs under one re-entrant lock per token, so
        operations on a token are serialized. Nested calls from the same
        thread into transfer, transfer_from or recover_erc20 are rejected by
        the reentrancy guard.

    Example:
        token = FeeToken.deploy("deployer", initial_owner="admin")
        token.transfer("deployer", "alice", 1000)   # alice +970, admin +30
        token.freeze_address("admin", "alice", 500)
        token.available_balance_of("alice")         # 470
    """

    def __init__(self, config: TokenConfig):
        self.config = config
        self.address = config.address
        self.verbose = config.verbose
        self._lock = threading.RLock()

        self.ledger = BalanceLedger(config.symbol, verbose=config.verbose)
        self.freezes = FreezeRegistry(self.ledger)
        self.fees = FeeSchedule(config.initial_fee_rate)
        self.pause_gate = PauseGate()
        self.reentrancy = ReentrancyGuard()
        self.ownership = Ownership(config.deployer)

        # Installed before the first mint so no balance ever escapes it
        self.ledger.add_mutation_hook(freeze_enforcement_hook(self.freezes))

        self.ledger.emit(OwnershipTransferred(ZERO_ADDRESS, config.deployer))
        if config.initial_supply:
            self.ledger.mint(config.deployer, config.initial_supply)
        if config.initial_owner != config.deployer:
            self.ledger.emit(self.ownership.transfer(config.initial_owner))

    @classmethod
    def deploy(cls, deployer: str, initial_owner: Optional[str] = None, **kwargs: Any) -> FeeToken:
        """Create a token from keyword arguments (see TokenConfig)."""
        return cls(TokenConfig(deployer=deployer, initial_owner=initial_owner, **kwargs))

    # ========================================================================
    # ATOMICITY
    # ========================================================================

    def _checkpoint(self) -> _Checkpoint:
        return _Checkpoint(
            ledger=self.ledger.checkpoint(),
            frozen=self.freezes.checkpoint(),
            fee_rate=self.fees.rate,
            owner=self.ownership.owner,
            paused=self.pause_gate.paused,
        )

    def _rollback(self, cp: _Checkpoint) -> None:
        self.ledger.rollback(cp.ledger)
        self.freezes.rollback(cp.frozen)
        self.fees.rate = cp.fee_rate
        self.ownership.owner = cp.owner
        self.pause_gate.paused = cp.paused

    @contextmanager
    def _operation(self, label: str, guarded: bool = False) -> Iterator[None]:
        """
        Run one public operation: serialized, optionally reentrancy-guarded,
        all-or-nothing.

        Records emitted inside the block are delivered to subscribers only
        after the operation has been applied, still under the lock and guard.
        An exception from a subscriber propagates to the caller, but the
        operation stays applied.
        """
        guard = self.reentrancy.guard(label) if guarded else nullcontext()
        with self._lock, guard:
            cp = self._checkpoint()
            try:
                yield
            except Exception as exc:
                self._rollback(cp)
                if self.verbose:
                    print(f"✗ REJECTED {label}: {type(exc).__name__}: {exc}")
                raise
            if self.verbose:
                print(f"✓ APPLIED {label}")
            self.ledger.publish(cp.ledger.record_count)

    # ========================================================================
    # QUERIES
    # ========================================================================

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def symbol(self) -> str:
        return self.config.symbol

    @property
    def decimals(self) -> int:
        return self.config.decimals

    @property
    def owner(self) -> str:
        return self.ownership.owner

    @property
    def paused(self) -> bool:
        return self.pause_gate.paused

    def balance_of(self, account: str) -> int:
        with self._lock:
            return self.ledger.balance_of(account)

    def total_supply(self) -> int:
        with self._lock:
            return self.ledger.total_supply()

    def allowance(self, owner: str, spender: str) -> int:
        with self._lock:
            return self.ledger.allowance(owner, spender)

    def frozen_balance_of(self, account: str) -> int:
        with self._lock:
            return self.freezes.frozen_balance_of(account)

    def available_balance_of(self, account: str) -> int:
        with self._lock:
            return self.freezes.available_balance_of(account)

    def get_fee_rate_info(self) -> Tuple[int, int]:
        """Return (current_rate, maximum_rate) in basis points."""
        with self._lock:
            return self.fees.rate_info()

    def calculate_transfer_fee(self, amount: int) -> Tuple[int, int]:
        """Return (fee, net) for a transfer of amount at the current rate."""
        with self._lock:
            return self.fees.split(amount).as_tuple()

    def get_contract_info(self) -> ContractInfo:
        with self._lock:
            return ContractInfo(
                name=self.name,
                symbol=self.symbol,
                decimals=self.decimals,
                total_supply=self.ledger.total_supply(),
                owner=self.ownership.owner,
                fee_rate=self.fees.rate,
            )

    def verify_invariants(self) -> Dict[str, Any]:
        """
        Audit the token's two standing invariants.

        Returns:
            Dict with keys:
            - 'valid': bool - True if both invariants hold
            - 'conservation': Dict - BalanceLedger.verify_conservation() result
            - 'overfrozen': Dict[str, Tuple[int, int]] - account -> (frozen, balance)
              for every account whose frozen amount exceeds its balance
        """
        with self._lock:
            conservation = self.ledger.verify_conservation()
            overfrozen = {
                account: (frozen, self.ledger.balance_of(account))
                for account, frozen in sorted(self.freezes.frozen_accounts().items())
                if frozen > self.ledger.balance_of(account)
            }
            return {
                'valid': conservation['valid'] and not overfrozen,
                'conservation': conservation,
                'overfrozen': overfrozen,
            }

    # ========================================================================
    # TRANSFERS
    # ========================================================================

    def transfer(self, caller: str, to: str, amount: int) -> bool:
        """
        Transfer amount from caller to `to`, charging the current fee.

        Raises:
            EnforcedPause: If the token is paused
            ReentrantCall: If called from inside another guarded operation
            InvalidAddress: If caller or `to` is the null identifier
            ZeroTransfer: If amount is zero
            InsufficientUnfrozenBalance: If amount exceeds caller's unfrozen balance
        """
        with self._operation("transfer", guarded=True):
            self.pause_gate.require_not_paused()
            self._transfer_with_fee(caller, to, amount)
        return True

    def transfer_from(self, caller: str, source: str, to: str, amount: int) -> bool:
        """
        Transfer amount from source to `to` using caller's allowance.

        The full amount (fee included) is charged against the allowance.

        Raises:
            InsufficientAllowance: If caller's allowance over source is too small
            (plus everything transfer() raises)
        """
        with self._operation("transfer_from", guarded=True):
            self.pause_gate.require_not_paused()
            self.ledger.spend_allowance(source, caller, amount)
            self._transfer_with_fee(source, to, amount)
        return True

    def approve(self, caller: str, spender: str, amount: int) -> bool:
        """Allow spender to move up to amount of caller's units."""
        with self._operation("approve"):
            self.ledger.approve(caller, spender, amount)
        return True

    def _transfer_with_fee(self, source: str, to: str, amount: int) -> None:
        if is_null_address(source):
            raise InvalidAddress(source, "sender")
        if is_null_address(to):
            raise InvalidAddress(to, "receiver")
        check_amount(amount)
        if amount == 0:
            raise ZeroTransfer()

        # Full amount, not net: frozen units cannot pay the fee either
        available = self.freezes.available_balance_of(source)
        if amount > available:
            raise InsufficientUnfrozenBalance(amount, available)

        split = self.fees.split(amount)
        self.ledger.move(source, to, split.net)

        # A null beneficiary forfeits the fee: it stays with the sender
        beneficiary = self.ownership.owner
        if split.fee > 0 and not is_null_address(beneficiary):
            self.ledger.move(source, beneficiary, split.fee)
            self.ledger.emit(TransferFeeCharged(source, split.fee))
            self.ledger.emit(FeeTransferred(beneficiary, split.fee))

    # ========================================================================
    # ADMIN CONTROLS
    # ========================================================================

    def set_fee_rate(self, caller: str, rate: int) -> None:
        """
        Raises:
            NotOwner: If caller is not the owner
            FeeRateTooHigh: If rate exceeds MAX_FEE_RATE
        """
        with self._operation("set_fee_rate"):
            self.ownership.require_owner(caller)
            self.ledger.emit(self.fees.set_rate(rate))

    def freeze_address(self, caller: str, account: str, amount: int) -> None:
        """
        Raises:
            NotOwner: If caller is not the owner
            InvalidAddress, InvalidAmount, InsufficientBalance: See FreezeRegistry.freeze
        """
        with self._operation("freeze_address"):
            self.ownership.require_owner(caller)
            self.ledger.emit(self.freezes.freeze(account, amount))

    def unfreeze_address(self, caller: str, account: str, amount: int) -> None:
        with self._operation("unfreeze_address"):
            self.ownership.require_owner(caller)
            self.ledger.emit(self.freezes.unfreeze(account, amount))

    def pause(self, caller: str) -> None:
        with self._operation("pause"):
            self.ownership.require_owner(caller)
            self.ledger.emit(self.pause_gate.pause(caller))

    def unpause(self, caller: str) -> None:
        with self._operation("unpause"):
            self.ownership.require_owner(caller)
            self.ledger.emit(self.pause_gate.unpause(caller))

    def transfer_ownership(self, caller: str, new_owner: Optional[str]) -> None:
        """
        Raises:
            NotOwner: If caller is not the owner
            OwnershipRenounceDisabled: If new_owner is the null identifier
            SameOwner: If new_owner is already the owner
        """
        with self._operation("transfer_ownership"):
            self.ownership.require_owner(caller)
            self.ledger.emit(self.ownership.transfer(new_owner))

    def renounce_ownership(self, caller: str) -> None:
        """Always raises OwnershipRenounceDisabled, whoever the caller is."""
        with self._operation("renounce_ownership"):
            self.ownership.renounce()

    def recover_erc20(self, caller: str, asset: Optional[RecoverableAsset], amount: int) -> bool:
        """
        Send units of another asset held by this token's address to the owner.

        Raises:
            NotOwner: If caller is not the owner
            InvalidAddress: If asset is missing or has the null address
            SelfRecoveryForbidden: If asset is this token
            ReentrantCall: If the asset calls back into a guarded operation
            (plus whatever asset.transfer raises)
        """
        with self.reentrancy.guard("recover_erc20"):
            with self._operation("recover_erc20"):
                self.ownership.require_owner(caller)
                asset_address = getattr(asset, "address", None)
                if asset is None or is_null_address(asset_address):
                    raise InvalidAddress(asset_address, "asset")
                if asset is self or asset_address == self.address:
                    raise SelfRecoveryForbidden()
                check_amount(amount)
                owner = self.ownership.owner
            # The asset takes its own lock; this token's lock is not held here
            return asset.transfer(self.address, owner, amount)

    def __repr__(self) -> str:
        return (
            f"FeeToken({self.symbol} @ {self.address}, owner={self.ownership.owner}, "
            f"{self.fees!r}, paused={self.pause_gate.paused})"
        )
