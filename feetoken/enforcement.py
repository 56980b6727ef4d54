"""
enforcement.py - Freeze Enforcement Hook

The ledger runs every installed mutation hook from its single mutation path,
so a hook installed here sees every balance change: transfers made by
FeeToken, delegated transfers, and any direct BalanceLedger.move() call.
FeeToken also pre-checks the full transfer amount before splitting it;
this hook checks each leg independently.
"""

from __future__ import annotations

from .core import LedgerView, Move, MutationHook, InsufficientUnfrozenBalance
from .freeze import FreezeRegistry


def freeze_enforcement_hook(registry: FreezeRegistry) -> MutationHook:
    """
    Build a mutation hook that rejects moves exceeding the sender's unfrozen balance.

    Mints are not checked. Burns are not checked either, but a burn that
    would leave the source below its frozen amount lowers the frozen amount to
    the remaining balance. Every other move recomputes the source's available
    balance from the ledger passed in, independently of any check made by the
    caller.

    Raises (from the returned hook):
        InsufficientUnfrozenBalance: If move.amount > available balance of move.source
    """

    def enforce_unfrozen_balance(view: LedgerView, move: Move) -> None:
        if move.is_mint:
            return
        total = view.balance_of(move.source)
        if move.is_burn:
            if move.amount <= total:
                registry.cap(move.source, total - move.amount)
            return
        frozen = registry.frozen_balance_of(move.source)
        available = total - frozen if total > frozen else 0
        if move.amount > available:
            raise InsufficientUnfrozenBalance(move.amount, available)

    return enforce_unfrozen_balance
