"""
freeze.py - Freeze Registry

Holds the frozen amount of every account. A freeze is an administrative hold:
the units stay in the account's total balance, they just stop counting toward
what the account may move.

    available = max(total_balance - frozen, 0)

The registry owns frozen amounts and nothing else. Total balances are read
through a LedgerView and never written here.
"""

from __future__ import annotations
from typing import Dict, Tuple

from .core import (
    LedgerView, Balances,
    AddressFrozen, AddressUnfrozen,
    InvalidAddress, InvalidAmount, InsufficientBalance,
    is_null_address, check_amount,
)


class FreezeRegistry:
    """
    Per-account frozen amounts, keyed by the same address as the ledger.

    Invariant (checked on freeze, held by the enforcement hook afterwards):
        frozen_balance_of(a) <= view.balance_of(a) for every account a
    """

    def __init__(self, view: LedgerView):
        self.view = view
        self._frozen: Balances = {}

    def frozen_balance_of(self, account: str) -> int:
        return self._frozen.get(account, 0)

    def available_balance_of(self, account: str) -> int:
        """Total balance minus frozen amount, floored at zero."""
        total = self.view.balance_of(account)
        frozen = self.frozen_balance_of(account)
        return total - frozen if total > frozen else 0

    def frozen_accounts(self) -> Dict[str, int]:
        """Snapshot of every account with a non-zero frozen amount."""
        return {a: amt for a, amt in self._frozen.items() if amt}

    def _check_request(self, account: str, amount: int) -> None:
        if is_null_address(account):
            raise InvalidAddress(account)
        check_amount(amount)
        if amount == 0:
            raise InvalidAmount(amount)

    def freeze(self, account: str, amount: int) -> AddressFrozen:
        """
        Add amount to the account's frozen balance.

        Raises:
            InvalidAddress: If account is the null identifier
            InvalidAmount: If amount is zero
            InsufficientBalance: If the new frozen total exceeds the account's balance
        """
        self._check_request(account, amount)
        new_frozen = self.frozen_balance_of(account) + amount
        total = self.view.balance_of(account)
        if new_frozen > total:
            raise InsufficientBalance(new_frozen, total)
        self._frozen[account] = new_frozen
        return AddressFrozen(account=account, amount=amount)

    def unfreeze(self, account: str, amount: int) -> AddressUnfrozen:
        """
        Release amount from the account's frozen balance.

        Raises:
            InvalidAddress: If account is the null identifier
            InvalidAmount: If amount is zero
            InsufficientBalance: If amount exceeds what is currently frozen
        """
        self._check_request(account, amount)
        current = self.frozen_balance_of(account)
        if amount > current:
            raise InsufficientBalance(amount, current)
        remaining = current - amount
        if remaining:
            self._frozen[account] = remaining
        else:
            self._frozen.pop(account, None)
        return AddressUnfrozen(account=account, amount=amount)

    def cap(self, account: str, ceiling: int) -> int:
        """Lower the frozen amount to at most ceiling. Returns the amount released."""
        current = self.frozen_balance_of(account)
        if current <= ceiling:
            return 0
        if ceiling > 0:
            self._frozen[account] = ceiling
        else:
            self._frozen.pop(account, None)
        return current - ceiling

    # Checkpoints mirror BalanceLedger.checkpoint()/rollback()

    def checkpoint(self) -> Tuple[Tuple[str, int], ...]:
        return tuple(self._frozen.items())

    def rollback(self, cp: Tuple[Tuple[str, int], ...]) -> None:
        self._frozen = dict(cp)
