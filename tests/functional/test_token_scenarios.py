"""
test_token_scenarios.py - End-to-end token scenarios

Each test walks a token through a realistic sequence of operations and
checks balances, frozen amounts and the published record stream.
"""

import pytest

from feetoken import (
    FeeToken, format_units,
    Transfer, TransferFeeCharged, FeeTransferred, AddressFrozen, AddressUnfrozen,
    FeeRateChanged, OwnershipTransferred, Paused, Unpaused,
    InsufficientUnfrozenBalance, InsufficientBalance, EnforcedPause, NotOwner, FeeRateTooHigh,
    OwnershipRenounceDisabled,
    INITIAL_SUPPLY, DECIMALS,
)

from tests.token_helpers import DEPLOYER, ADMIN, ALICE, BOB, CAROL, make_token, fund


class TestReferenceScenarios:

    def test_three_percent_transfer(self):
        """Transfer 1000 at 300 bps: recipient +970, owner +30, sender -1000."""
        token = make_token(fee_rate=300)
        fund(token, ALICE, 1000)
        records = []
        token.ledger.subscribe(records.append)

        token.transfer(ALICE, BOB, 1000)

        assert token.balance_of(ALICE) == 0
        assert token.balance_of(BOB) == 970
        assert token.balance_of(ADMIN) == 30
        assert [r.name for r in records] == [
            "Transfer", "Transfer", "TransferFeeCharged", "FeeTransferred",
        ]

    def test_fully_frozen_account(self):
        """Balance 500 fully frozen: any transfer fails with available 0."""
        token = make_token()
        fund(token, BOB, 500)
        token.freeze_address(ADMIN, BOB, 500)

        for amount in (1, 250, 500):
            with pytest.raises(InsufficientUnfrozenBalance) as exc_info:
                token.transfer(BOB, CAROL, amount)
            assert (exc_info.value.requested, exc_info.value.available) == (amount, 0)
        assert token.balance_of(BOB) == 500

    def test_freeze_beyond_balance(self):
        """Freezing 600 of 500 fails and nothing is frozen."""
        token = make_token()
        fund(token, BOB, 500)
        with pytest.raises(InsufficientBalance):
            token.freeze_address(ADMIN, BOB, 600)
        assert token.frozen_balance_of(BOB) == 0

    def test_fee_rate_too_high_keeps_rate(self):
        token = make_token(fee_rate=300)
        with pytest.raises(FeeRateTooHigh):
            token.set_fee_rate(ADMIN, 1001)
        assert token.get_fee_rate_info() == (300, 1000)


class TestTokenLifecycle:

    def test_full_lifecycle(self):
        """Deploy, distribute, freeze, change fee, hand over and pause."""
        token = FeeToken.deploy(DEPLOYER, initial_owner=ADMIN)
        records = []
        token.ledger.subscribe(records.append)
        one = 10 ** DECIMALS

        assert token.balance_of(DEPLOYER) == INITIAL_SUPPLY
        assert format_units(token.total_supply()) == "21314"

        # Distribution pays fees to the owner
        token.transfer(DEPLOYER, ALICE, 100 * one)
        assert token.balance_of(ALICE) == 97 * one
        assert token.balance_of(ADMIN) == 3 * one

        # Compliance hold on most of alice's balance
        token.freeze_address(ADMIN, ALICE, 90 * one)
        assert token.available_balance_of(ALICE) == 7 * one
        with pytest.raises(InsufficientUnfrozenBalance):
            token.transfer(ALICE, BOB, 8 * one)

        # Fee cut to 1%
        token.set_fee_rate(ADMIN, 100)
        token.transfer(ALICE, BOB, 7 * one)
        assert token.balance_of(BOB) == 7 * one - 7 * one // 100

        # Administration moves to carol, who now collects fees
        token.transfer_ownership(ADMIN, CAROL)
        with pytest.raises(NotOwner):
            token.unfreeze_address(ADMIN, ALICE, 90 * one)
        token.unfreeze_address(CAROL, ALICE, 90 * one)
        token.transfer(ALICE, BOB, 10 * one)
        assert token.balance_of(CAROL) == 10 * one // 100

        # Emergency stop
        token.pause(CAROL)
        with pytest.raises(EnforcedPause):
            token.transfer(BOB, ALICE, 1)
        token.unpause(CAROL)

        # Nobody can walk away from the token
        with pytest.raises(OwnershipRenounceDisabled):
            token.renounce_ownership(CAROL)

        assert token.verify_invariants()['valid']
        assert [type(r) for r in records] == [
            Transfer, Transfer, TransferFeeCharged, FeeTransferred,
            AddressFrozen,
            FeeRateChanged,
            Transfer, Transfer, TransferFeeCharged, FeeTransferred,
            OwnershipTransferred,
            AddressUnfrozen,
            Transfer, Transfer, TransferFeeCharged, FeeTransferred,
            Paused,
            Unpaused,
        ]

    def test_partial_unfreeze_sequence(self):
        token = make_token()
        fund(token, ALICE, 1000)
        token.freeze_address(ADMIN, ALICE, 800)

        token.transfer(ALICE, BOB, 200)
        assert token.available_balance_of(ALICE) == 0

        token.unfreeze_address(ADMIN, ALICE, 300)
        assert token.available_balance_of(ALICE) == 300
        token.transfer(ALICE, BOB, 300)

        assert token.balance_of(ALICE) == 500
        assert token.frozen_balance_of(ALICE) == 500
        assert token.available_balance_of(ALICE) == 0

    def test_delegated_spending_chain(self):
        """alice lets carol spend for her; the allowance and freeze both bind."""
        token = make_token(fee_rate=0)
        fund(token, ALICE, 1000)
        token.approve(ALICE, CAROL, 600)
        token.freeze_address(ADMIN, ALICE, 500)

        token.transfer_from(CAROL, ALICE, BOB, 400)
        with pytest.raises(InsufficientUnfrozenBalance):
            token.transfer_from(CAROL, ALICE, BOB, 200)
        assert token.allowance(ALICE, CAROL) == 200

        token.unfreeze_address(ADMIN, ALICE, 500)
        token.transfer_from(CAROL, ALICE, BOB, 200)
        assert token.allowance(ALICE, CAROL) == 0
        assert token.balance_of(BOB) == 600
