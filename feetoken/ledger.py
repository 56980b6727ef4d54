"""
ledger.py - Base Balance Ledger

The BalanceLedger is the authoritative store of per-account total balances.
It is the only module that mutates balances, and every mutation goes through
a single choke point, _update(), which runs the installed mutation hooks
before touching state.

Key responsibilities:
    - Implements LedgerView protocol for safe read-only access by hooks
    - Issuance (mint), destruction (burn) and account-to-account moves
    - Allowance bookkeeping for delegated transfers
    - Append-only record log with post-commit delivery to subscribers
    - Checkpoint/rollback so callers can make multi-move operations atomic
"""

from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Set, Tuple

from .core import (
    # Types
    Move, Record, Transfer, Approval,
    Balances, MutationHook,
    # Constants
    MAX_ALLOWANCE, ZERO_ADDRESS,
    # Exceptions
    InvalidAddress, InsufficientFunds, InsufficientAllowance,
    # Helper functions
    is_null_address, check_amount,
)


Subscriber = Callable[[Record], None]


@dataclass(frozen=True, slots=True)
class LedgerCheckpoint:
    """Snapshot of everything a rollback has to restore."""
    balances: Tuple[Tuple[str, int], ...]
    allowances: Tuple[Tuple[Tuple[str, str], int], ...]
    total_supply: int
    record_count: int
    move_count: int


class BalanceLedger:
    """
    Single-asset balance ledger with a hookable mutation path.

    Design Principles:
        - One choke point: mint, burn and move all funnel into _update(), and
          _update() always runs every mutation hook first. A hook that raises
          vetoes the mutation before any state changes.
        - Hooks are append-only: they can be installed but never removed.
        - Records are facts: they are appended as mutations happen, and only
          delivered to subscribers once the caller publishes them.

    Thread Safety:
        Not thread-safe on its own. FeeToken serializes access with its lock.

    Example:
        ledger = BalanceLedger("main")
        ledger.mint("alice", 1000)
        ledger.move("alice", "bob", 250)
        ledger.balance_of("bob")  # 250
    """

    def __init__(self, name: str, verbose: bool = False):
        """
        Create a ledger.

        Args:
            name: Ledger identifier
            verbose: Print each committed move (default: False)
        """
        self.name = name
        self.verbose = verbose
        self.balances: Balances = defaultdict(int)
        self.allowances: Dict[Tuple[str, str], int] = {}
        self.records: List[Record] = []
        self.move_log: List[Move] = []
        self._total_supply = 0
        self._hooks: Tuple[MutationHook, ...] = ()
        self._subscribers: List[Subscriber] = []

    # ========================================================================
    # LedgerView PROTOCOL IMPLEMENTATION (read-only methods)
    # ========================================================================

    def balance_of(self, account: str) -> int:
        """Total balance of an account (0 for unseen accounts)."""
        return self.balances.get(account, 0)

    def total_supply(self) -> int:
        """Units currently in circulation."""
        return self._total_supply

    def list_accounts(self) -> Set[str]:
        """Accounts holding a non-zero balance."""
        return {a for a, bal in self.balances.items() if bal}

    def allowance(self, owner: str, spender: str) -> int:
        """Remaining amount spender may move on owner's behalf."""
        return self.allowances.get((owner, spender), 0)

    @property
    def hooks(self) -> Tuple[MutationHook, ...]:
        return self._hooks

    def verify_conservation(self) -> Dict[str, Any]:
        """
        Verify that the sum of all balances equals the total supply.

        Accounts are summed in sorted order for deterministic accumulation.

        Returns:
            Dict with keys:
            - 'valid': bool - True if the balances add up
            - 'supply': int - Recorded total supply
            - 'sum_of_balances': int - Sum over all accounts
            - 'negative_accounts': List[str] - Accounts below zero (must be empty)
        """
        total = sum(self.balances[a] for a in sorted(self.balances))
        negative = sorted(a for a, bal in self.balances.items() if bal < 0)
        return {
            'valid': total == self._total_supply and not negative,
            'supply': self._total_supply,
            'sum_of_balances': total,
            'negative_accounts': negative,
        }

    # ========================================================================
    # HOOKS AND RECORDS
    # ========================================================================

    def add_mutation_hook(self, hook: MutationHook) -> None:
        """
        Install a hook that runs before every balance mutation.

        Hooks receive this ledger as a LedgerView and the pending Move.
        Hooks cannot be removed once installed.
        """
        self._hooks = self._hooks + (hook,)

    def emit(self, record: Record) -> None:
        """Append a record to the log. Delivery waits for publish()."""
        self.records.append(record)

    def subscribe(self, callback: Subscriber) -> None:
        """Register a watcher that receives every published record."""
        self._subscribers.append(callback)

    def publish(self, start: int) -> None:
        """
        Deliver records[start:] to subscribers, in order.

        Called after the producing operation has been applied. An exception
        from a subscriber stops delivery of the remaining records and
        propagates; the applied state is kept.
        """
        for record in self.records[start:]:
            for callback in list(self._subscribers):
                callback(record)

    # ========================================================================
    # CHECKPOINTS
    # ========================================================================

    def checkpoint(self) -> LedgerCheckpoint:
        return LedgerCheckpoint(
            balances=tuple(self.balances.items()),
            allowances=tuple(self.allowances.items()),
            total_supply=self._total_supply,
            record_count=len(self.records),
            move_count=len(self.move_log),
        )

    def rollback(self, cp: LedgerCheckpoint) -> None:
        """Restore state captured by checkpoint(), discarding later records and moves."""
        self.balances = defaultdict(int, cp.balances)
        self.allowances = dict(cp.allowances)
        self._total_supply = cp.total_supply
        del self.records[cp.record_count:]
        del self.move_log[cp.move_count:]

    # ========================================================================
    # MUTATIONS
    # ========================================================================

    def mint(self, to: str, amount: int) -> None:
        """Issue new units to an account."""
        if is_null_address(to):
            raise InvalidAddress(to, "receiver")
        self._update(Move(amount, ZERO_ADDRESS, to))

    def burn(self, source: str, amount: int) -> None:
        """Destroy units held by an account."""
        if is_null_address(source):
            raise InvalidAddress(source, "sender")
        self._update(Move(amount, source, ZERO_ADDRESS))

    def move(self, source: str, to: str, amount: int) -> None:
        """
        Move units between two real accounts.

        Raises:
            InvalidAddress: If either endpoint is the null identifier
            InsufficientFunds: If source holds less than amount
            LedgerError: Whatever a mutation hook raises
        """
        if is_null_address(source):
            raise InvalidAddress(source, "sender")
        if is_null_address(to):
            raise InvalidAddress(to, "receiver")
        self._update(Move(amount, source, to))

    def approve(self, owner: str, spender: str, amount: int) -> None:
        """Set spender's allowance over owner's balance."""
        if is_null_address(owner):
            raise InvalidAddress(owner, "approver")
        if is_null_address(spender):
            raise InvalidAddress(spender, "spender")
        check_amount(amount)
        self.allowances[(owner, spender)] = amount
        self.emit(Approval(owner, spender, amount))

    def spend_allowance(self, owner: str, spender: str, amount: int) -> None:
        """
        Consume part of spender's allowance over owner's balance.

        An allowance of MAX_ALLOWANCE is treated as unlimited and left untouched.

        Raises:
            InsufficientAllowance: If the allowance is smaller than amount
        """
        check_amount(amount)
        current = self.allowance(owner, spender)
        if current == MAX_ALLOWANCE:
            return
        if current < amount:
            raise InsufficientAllowance(spender, current, amount)
        self.allowances[(owner, spender)] = current - amount

    def _update(self, move: Move) -> None:
        """
        Apply a single move. Every balance change in the ledger ends up here.

        1. Run every mutation hook (any of them may veto by raising)
        2. Debit the source, or grow supply for issuance
        3. Credit the destination, or shrink supply for destruction
        4. Record a Transfer and log the move
        """
        for hook in self._hooks:
            hook(self, move)

        if move.is_mint:
            self._total_supply += move.amount
        else:
            current = self.balances.get(move.source, 0)
            if current < move.amount:
                raise InsufficientFunds(move.source, current, move.amount)
            self.balances[move.source] = current - move.amount

        if move.is_burn:
            self._total_supply -= move.amount
        else:
            self.balances[move.dest] += move.amount

        self.emit(Transfer(move.source, move.dest, move.amount))
        self.move_log.append(move)

        if self.verbose:
            print(f"✓ {self.name}: {move!r}")
