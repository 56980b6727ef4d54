#!/usr/bin/env python3
"""
demo.py - Interactive Tutorial: Learn the Fee Token Step by Step

A walk through the fee-charging, freezable token. Each step builds on the
previous one. Press Enter to advance.

WHAT YOU'LL LEARN:
  1-3:   Foundation     - Deployment, the first fee, the record stream
  4-6:   Freezes        - Holding balances, rejected transfers, the hook
  7-9:   Administration - Fee changes, handover, pause, recovery
  10:    Audit          - Invariant checks

Run:
    python demo.py           # Interactive mode (press Enter for each step)
    python demo.py --quick   # Run all steps without pausing
"""

from dataclasses import dataclass
import sys

from feetoken import (
    # Token
    FeeToken,
    # Helpers
    format_units,
    # Exceptions
    LedgerError, InsufficientUnfrozenBalance,
    # Constants
    DECIMALS,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class DemoConfig:
    """Configuration for the tutorial. Modify these to experiment."""
    deployer: str = "deployer"
    admin: str = "admin"
    fee_rate: int = 300

    alice_allocation: int = 1000 * 10 ** DECIMALS
    alice_frozen: int = 600 * 10 ** DECIMALS
    new_fee_rate: int = 100


CONFIG = DemoConfig()

QUICK_MODE = "--quick" in sys.argv


def wait_for_enter():
    """Pause for user input unless in quick mode."""
    if not QUICK_MODE:
        input("\n[Press Enter to continue...]")


def step_header(number: int, title: str, objective: str):
    """Print a step header with learning objective."""
    print(f"\n{'='*70}")
    print(f"STEP {number}: {title}")
    print(f"{'='*70}")
    print(f"\nObjective: {objective}\n")


def section_header(text: str):
    print(f"\n--- {text} ---\n")


def show_balances(token: FeeToken, *accounts: str):
    for account in accounts:
        print(
            f"  {account:<10} balance={format_units(token.balance_of(account)):>12}"
            f"  frozen={format_units(token.frozen_balance_of(account)):>8}"
            f"  available={format_units(token.available_balance_of(account)):>12}"
        )


# ============================================================================
# PHASE 1: FOUNDATION (Steps 1-3)
# ============================================================================

def step_01_deploy():
    """Deploy a token and inspect its initial state."""
    step_header(1, "Deployment",
        "The whole supply starts with the deployer; the owner collects fees.")

    print(f">>> token = FeeToken.deploy({CONFIG.deployer!r}, initial_owner={CONFIG.admin!r}, "
          f"initial_fee_rate={CONFIG.fee_rate}, verbose=True)")
    token = FeeToken.deploy(
        CONFIG.deployer,
        initial_owner=CONFIG.admin,
        initial_fee_rate=CONFIG.fee_rate,
        verbose=True,
    )

    section_header("Contract Info")
    info = token.get_contract_info()
    print(f"Name:         {info.name} ({info.symbol})")
    print(f"Decimals:     {info.decimals}")
    print(f"Total supply: {format_units(info.total_supply)}")
    print(f"Owner:        {info.owner}")
    print(f"Fee rate:     {info.fee_rate} bps (max {token.get_fee_rate_info()[1]})")

    return token


def step_02_first_transfer(token: FeeToken):
    """A transfer splits into net and fee."""
    step_header(2, "The First Fee",
        "Every transfer pays floor(amount * rate / 10000) to the owner.")

    amount = CONFIG.alice_allocation
    fee, net = token.calculate_transfer_fee(amount)
    print(f"Quote for {format_units(amount)}: fee={format_units(fee)} net={format_units(net)}")

    print(f"\n>>> token.transfer({CONFIG.deployer!r}, 'alice', {format_units(amount)})")
    token.transfer(CONFIG.deployer, "alice", amount)

    section_header("Balances")
    show_balances(token, CONFIG.deployer, "alice", CONFIG.admin)
    return token


def step_03_records(token: FeeToken):
    """Subscribers receive one record per fact, after the operation succeeds."""
    step_header(3, "The Record Stream",
        "Watchers see Transfer, TransferFeeCharged and FeeTransferred records.")

    received = []
    token.ledger.subscribe(received.append)
    token.transfer("alice", "bob", 10 * 10 ** DECIMALS)

    section_header("Records")
    for record in received:
        print(f"  {record}")
    return token


# ============================================================================
# PHASE 2: FREEZES (Steps 4-6)
# ============================================================================

def step_04_freeze(token: FeeToken):
    step_header(4, "Freezing a Balance",
        "A freeze holds part of a balance in place without moving it.")

    print(f">>> token.freeze_address({CONFIG.admin!r}, 'alice', {format_units(CONFIG.alice_frozen)})")
    token.freeze_address(CONFIG.admin, "alice", CONFIG.alice_frozen)
    show_balances(token, "alice")
    return token


def step_05_rejected_transfer(token: FeeToken):
    step_header(5, "Rejected Transfers",
        "Transfers larger than the unfrozen balance fail and change nothing.")

    too_much = token.available_balance_of("alice") + 1
    try:
        token.transfer("alice", "bob", too_much)
    except InsufficientUnfrozenBalance as exc:
        print(f"Rejected as expected: requested={format_units(exc.requested)} "
              f"available={format_units(exc.available)}")
    show_balances(token, "alice", "bob")
    return token


def step_06_hook(token: FeeToken):
    step_header(6, "The Enforcement Hook",
        "The freeze check lives in the ledger itself, so no path skips it.")

    too_much = token.available_balance_of("alice") + 1
    print(">>> token.ledger.move('alice', 'bob', ...)   # bypassing FeeToken")
    try:
        token.ledger.move("alice", "bob", too_much)
    except InsufficientUnfrozenBalance as exc:
        print(f"Still rejected: {exc}")
    return token


# ============================================================================
# PHASE 3: ADMINISTRATION (Steps 7-9)
# ============================================================================

def step_07_fee_change(token: FeeToken):
    step_header(7, "Changing the Fee",
        "Only the owner changes the rate, and never above the maximum.")

    token.set_fee_rate(CONFIG.admin, CONFIG.new_fee_rate)
    print(f"New rate: {token.get_fee_rate_info()}")
    try:
        token.set_fee_rate(CONFIG.admin, 5000)
    except LedgerError as exc:
        print(f"Rejected: {exc}")
    return token


def step_08_ownership(token: FeeToken):
    step_header(8, "Ownership",
        "Ownership can move to a new administrator but never be renounced.")

    token.transfer_ownership(CONFIG.admin, "carol")
    print(f"Owner is now {token.owner}")
    try:
        token.renounce_ownership("carol")
    except LedgerError as exc:
        print(f"Rejected: {exc}")
    return token


def step_09_pause_and_recover(token: FeeToken):
    step_header(9, "Pause and Recovery",
        "Pausing stops transfers; stuck foreign tokens go back to the owner.")

    token.pause("carol")
    try:
        token.transfer("bob", "alice", 1)
    except LedgerError as exc:
        print(f"Rejected while paused: {exc}")
    token.unpause("carol")

    other = FeeToken.deploy("issuer", address="other", initial_supply=500, initial_fee_rate=0)
    other.transfer("issuer", token.address, 200)
    print(f"\nStuck at {token.address}: {other.balance_of(token.address)} units of {other.symbol}")
    token.recover_erc20("carol", other, 200)
    print(f"Recovered to carol: {other.balance_of('carol')}")
    return token


# ============================================================================
# PHASE 4: AUDIT (Step 10)
# ============================================================================

def step_10_audit(token: FeeToken):
    step_header(10, "Invariant Audit",
        "Balances add up to supply and no account is frozen beyond its balance.")

    result = token.verify_invariants()
    conservation = result['conservation']
    print(f"Supply:          {format_units(conservation['supply'])}")
    print(f"Sum of balances: {format_units(conservation['sum_of_balances'])}")
    print(f"Overfrozen:      {result['overfrozen'] or 'none'}")
    print(f"Valid:           {'✓' if result['valid'] else '✗'}")


def main():
    """Run the complete tutorial."""
    print("=" * 70)
    print("       FEE TOKEN - INTERACTIVE TUTORIAL")
    print("=" * 70)

    if QUICK_MODE:
        print("Running in QUICK mode (no pauses)")
    else:
        print("Running in INTERACTIVE mode (press Enter to advance)")

    wait_for_enter()

    token = step_01_deploy()
    for step in (
        step_02_first_transfer, step_03_records,
        step_04_freeze, step_05_rejected_transfer, step_06_hook,
        step_07_fee_change, step_08_ownership, step_09_pause_and_recover,
    ):
        wait_for_enter()
        token = step(token)

    wait_for_enter()
    step_10_audit(token)

    print("\n" + "=" * 70)
    print("       TUTORIAL COMPLETE!")
    print("=" * 70)
    print("""
    Next steps:
      - See feetoken/token.py for the transfer pipeline
      - Run tests: pytest tests/
    """)


if __name__ == "__main__":
    main()
