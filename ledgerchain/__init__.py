# MIT License
# Copyright (c) 2025 Hashborn

"""
LedgerChain

Append-only block ledger: accounts, fee-burning transfers, 10-transaction
blocks sealed with a Merkle root, and whole-chain validation.
"""

__version__ = "1.0.0"
