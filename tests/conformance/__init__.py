"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of a fee-charging, freezable token.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. freeze_invariant.py - Frozen amounts never exceed balances; frozen units never move
2. conservation.py - Transfers and fees neither create nor destroy units
3. atomicity.py - Every public operation is all-or-nothing
4. bypass_resistance.py - The freeze check holds on every mutation path
5. fee_determinism.py - Fee arithmetic is exact, floored and reproducible

These tests use hypothesis for property-based testing.
"""
