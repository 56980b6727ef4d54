"""
conftest.py - Shared pytest fixtures for feetoken tests

Provides common fixtures used across unit, conformance and functional tests:
- Tokens (fresh, funded, frozen)
- A bare balance ledger with the freeze hook installed
- A record collector subscribed to a token
"""

import pytest
from typing import List

from feetoken import BalanceLedger, FreezeRegistry, Record, freeze_enforcement_hook

from tests.token_helpers import ADMIN, ALICE, BOB, make_token, fund


@pytest.fixture
def token():
    """Fresh token: DEPLOYER holds the supply, ADMIN owns it, 3% fee."""
    return make_token()


@pytest.fixture
def funded_token(token):
    """Token where alice holds 1000 and bob holds 500."""
    fund(token, ALICE, 1000)
    fund(token, BOB, 500)
    return token


@pytest.fixture
def frozen_token(funded_token):
    """Funded token with 600 of alice's 1000 frozen."""
    funded_token.freeze_address(ADMIN, ALICE, 600)
    return funded_token


@pytest.fixture
def hooked_ledger():
    """Bare ledger + registry wired together the way FeeToken wires them."""
    ledger = BalanceLedger("test")
    registry = FreezeRegistry(ledger)
    ledger.add_mutation_hook(freeze_enforcement_hook(registry))
    ledger.mint(ALICE, 1000)
    return ledger, registry


@pytest.fixture
def collected(token) -> List[Record]:
    """List that receives every record the token publishes."""
    received: List[Record] = []
    token.ledger.subscribe(received.append)
    return received
