"""
controls.py - Access, pause and reentrancy collaborators

Small components FeeToken composes to gate its entry points:
1. Ownership - a single administrator identity
2. PauseGate - the paused / not-paused mode consulted by transfers
3. ReentrancyGuard - excludes nested calls to guarded entry points

Each mutator returns the record describing the change; the caller decides
when to emit it.
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, Optional
import threading

from .core import (
    OwnershipTransferred, Paused, Unpaused,
    InvalidAddress, NotOwner, SameOwner, OwnershipRenounceDisabled,
    EnforcedPause, ExpectedPause, ReentrantCall,
    is_null_address,
)


class Ownership:
    """
    Tracks the administrator of a token.

    Renouncement is not a separate capability: it is a transfer to no one,
    and transfers to no one are always rejected.
    """

    def __init__(self, owner: str):
        if is_null_address(owner):
            raise InvalidAddress(owner, "owner")
        self.owner = owner

    def require_owner(self, caller: str) -> None:
        if caller != self.owner:
            raise NotOwner(caller)

    def transfer(self, new_owner: Optional[str]) -> OwnershipTransferred:
        """
        Hand administratorship to new_owner.

        Raises:
            OwnershipRenounceDisabled: If new_owner is None or the null identifier
            SameOwner: If new_owner already owns the token
        """
        if is_null_address(new_owner):
            raise OwnershipRenounceDisabled()
        if new_owner == self.owner:
            raise SameOwner(new_owner)
        previous, self.owner = self.owner, new_owner
        return OwnershipTransferred(previous_owner=previous, new_owner=new_owner)

    def renounce(self) -> OwnershipTransferred:
        return self.transfer(None)


class PauseGate:
    """Boolean gate consulted at the start of transfer entry points."""

    def __init__(self, paused: bool = False):
        self.paused = paused

    def require_not_paused(self) -> None:
        if self.paused:
            raise EnforcedPause()

    def pause(self, account: str) -> Paused:
        self.require_not_paused()
        self.paused = True
        return Paused(account)

    def unpause(self, account: str) -> Unpaused:
        if not self.paused:
            raise ExpectedPause()
        self.paused = False
        return Unpaused(account)


class ReentrancyGuard:
    """
    Rejects entry into a guarded operation while another one is running on
    the same thread.

    Entries are tracked per thread. Other threads are serialized by the
    token's lock, so only a call made from inside a guarded operation (a
    record subscriber, an external asset's transfer) can trip the guard.
    """

    def __init__(self):
        self._local = threading.local()

    @property
    def entered(self) -> bool:
        """True if the calling thread is inside a guarded operation."""
        return getattr(self._local, 'active', None) is not None

    @contextmanager
    def guard(self, operation: str) -> Iterator[None]:
        if self.entered:
            raise ReentrantCall(operation)
        self._local.active = operation
        try:
            yield
        finally:
            self._local.active = None
