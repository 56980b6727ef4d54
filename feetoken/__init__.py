"""
feetoken - Fee-charging, freezable token ledger

A single-asset token ledger that takes a configurable fee on every transfer
and lets its administrator freeze part or all of an account's balance.

Usage:
    from feetoken import FeeToken

    token = FeeToken.deploy("deployer", initial_owner="admin", initial_fee_rate=300)

    # 3% fee goes to the owner
    token.transfer("deployer", "alice", 1000)
    token.balance_of("alice")    # 970
    token.balance_of("admin")    # 30

    # Freeze 500 of alice's 970: only 470 can move
    token.freeze_address("admin", "alice", 500)
    token.available_balance_of("alice")   # 470
"""

# Core types
from .core import (
    LedgerView,
    Move,
    MutationHook,
    Record,
    Transfer,
    Approval,
    TransferFeeCharged,
    FeeTransferred,
    FeeRateChanged,
    AddressFrozen,
    AddressUnfrozen,
    Paused,
    Unpaused,
    OwnershipTransferred,
    LedgerError,
    InvalidAddress,
    InvalidAmount,
    ZeroTransfer,
    InsufficientBalance,
    InsufficientUnfrozenBalance,
    FeeRateTooHigh,
    SameOwner,
    NotOwner,
    OwnershipRenounceDisabled,
    SelfRecoveryForbidden,
    EnforcedPause,
    ExpectedPause,
    ReentrantCall,
    InsufficientFunds,
    InsufficientAllowance,
    ZERO_ADDRESS,
    DECIMALS,
    INITIAL_SUPPLY,
    BASIS_POINTS_DENOMINATOR,
    MAX_FEE_RATE,
    DEFAULT_FEE_RATE,
    MAX_ALLOWANCE,
    is_null_address,
    format_units,
)

# Base ledger
from .ledger import BalanceLedger, LedgerCheckpoint

# Fee engine
from .fees import FeeSplit, FeeSchedule, compute_fee_split

# Freezes
from .freeze import FreezeRegistry
from .enforcement import freeze_enforcement_hook

# Access collaborators
from .controls import Ownership, PauseGate, ReentrancyGuard

# Token
from .config import TokenConfig
from .token import FeeToken, ContractInfo, RecoverableAsset

__all__ = [
    # Core
    'LedgerView', 'Move', 'MutationHook',
    'Record', 'Transfer', 'Approval', 'TransferFeeCharged', 'FeeTransferred',
    'FeeRateChanged', 'AddressFrozen', 'AddressUnfrozen', 'Paused', 'Unpaused',
    'OwnershipTransferred',
    'LedgerError', 'InvalidAddress', 'InvalidAmount', 'ZeroTransfer',
    'InsufficientBalance', 'InsufficientUnfrozenBalance', 'FeeRateTooHigh',
    'SameOwner', 'NotOwner', 'OwnershipRenounceDisabled', 'SelfRecoveryForbidden',
    'EnforcedPause', 'ExpectedPause', 'ReentrantCall',
    'InsufficientFunds', 'InsufficientAllowance',
    'ZERO_ADDRESS', 'DECIMALS', 'INITIAL_SUPPLY', 'BASIS_POINTS_DENOMINATOR',
    'MAX_FEE_RATE', 'DEFAULT_FEE_RATE', 'MAX_ALLOWANCE',
    'is_null_address', 'format_units',
    # Ledger
    'BalanceLedger', 'LedgerCheckpoint',
    # Fees
    'FeeSplit', 'FeeSchedule', 'compute_fee_split',
    # Freezes
    'FreezeRegistry', 'freeze_enforcement_hook',
    # Controls
    'Ownership', 'PauseGate', 'ReentrancyGuard',
    # Token
    'TokenConfig', 'FeeToken', 'ContractInfo', 'RecoverableAsset',
]

__version__ = '1.0.0'
