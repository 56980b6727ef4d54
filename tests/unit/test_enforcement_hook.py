"""
test_enforcement_hook.py - Unit tests for enforcement.py

The hook is tested both in isolation (FakeView) and installed in a ledger.
"""

import pytest

from feetoken import (
    Move, FreezeRegistry, freeze_enforcement_hook,
    InsufficientUnfrozenBalance, ZERO_ADDRESS,
)
from tests.fake_view import FakeView


@pytest.fixture
def view():
    return FakeView({"alice": 1000})


@pytest.fixture
def registry(view):
    registry = FreezeRegistry(view)
    registry.freeze("alice", 600)
    return registry


class TestHookInIsolation:

    def test_allows_move_within_available(self, view, registry):
        hook = freeze_enforcement_hook(registry)
        hook(view, Move(400, "alice", "bob"))

    def test_rejects_move_beyond_available(self, view, registry):
        hook = freeze_enforcement_hook(registry)
        with pytest.raises(InsufficientUnfrozenBalance) as exc_info:
            hook(view, Move(401, "alice", "bob"))
        assert (exc_info.value.requested, exc_info.value.available) == (401, 400)

    def test_mint_bypasses_check(self, view, registry):
        hook = freeze_enforcement_hook(registry)
        hook(view, Move(10 ** 30, ZERO_ADDRESS, "alice"))

    def test_burn_bypasses_check(self, view, registry):
        hook = freeze_enforcement_hook(registry)
        hook(view, Move(1000, "alice", ZERO_ADDRESS))
        assert registry.frozen_balance_of("alice") == 0

    def test_burn_within_available_keeps_freeze(self, view, registry):
        hook = freeze_enforcement_hook(registry)
        hook(view, Move(400, "alice", ZERO_ADDRESS))
        assert registry.frozen_balance_of("alice") == 600

    def test_burn_beyond_balance_leaves_freeze(self, view, registry):
        """The ledger rejects an overdraft burn; the hook releases nothing."""
        hook = freeze_enforcement_hook(registry)
        hook(view, Move(1001, "alice", ZERO_ADDRESS))
        assert registry.frozen_balance_of("alice") == 600

    def test_reads_balance_from_view_argument(self, registry):
        """The hook trusts the view it is handed, not a cached balance."""
        hook = freeze_enforcement_hook(registry)
        richer = FakeView({"alice": 5000})
        hook(richer, Move(4400, "alice", "bob"))
        with pytest.raises(InsufficientUnfrozenBalance):
            hook(richer, Move(4401, "alice", "bob"))

    def test_unfrozen_account_limited_by_balance(self, view):
        hook = freeze_enforcement_hook(FreezeRegistry(view))
        with pytest.raises(InsufficientUnfrozenBalance) as exc_info:
            hook(view, Move(1001, "alice", "bob"))
        assert exc_info.value.available == 1000


class TestHookInstalled:

    def test_ledger_move_is_checked(self, hooked_ledger):
        ledger, registry = hooked_ledger
        registry.freeze("alice", 900)
        with pytest.raises(InsufficientUnfrozenBalance):
            ledger.move("alice", "bob", 101)
        assert ledger.balance_of("alice") == 1000
        assert ledger.balance_of("bob") == 0

    def test_ledger_move_within_available(self, hooked_ledger):
        ledger, registry = hooked_ledger
        registry.freeze("alice", 900)
        ledger.move("alice", "bob", 100)
        assert ledger.balance_of("bob") == 100

    def test_second_move_sees_first(self, hooked_ledger):
        """Each move re-reads the balance left by the previous one."""
        ledger, registry = hooked_ledger
        registry.freeze("alice", 500)
        ledger.move("alice", "bob", 300)
        with pytest.raises(InsufficientUnfrozenBalance) as exc_info:
            ledger.move("alice", "bob", 201)
        assert exc_info.value.available == 200

    def test_mint_to_frozen_account(self, hooked_ledger):
        ledger, registry = hooked_ledger
        registry.freeze("alice", 1000)
        ledger.mint("alice", 50)
        assert registry.available_balance_of("alice") == 50

    def test_burn_into_frozen_amount_releases_it(self, hooked_ledger):
        ledger, registry = hooked_ledger
        registry.freeze("alice", 900)
        ledger.burn("alice", 500)
        assert ledger.balance_of("alice") == 500
        assert registry.frozen_balance_of("alice") == 500
        assert registry.available_balance_of("alice") == 0
