# MIT License
# Copyright (c) 2025 Hashborn

from enum import Enum
from typing import Optional

class TxStatus(str, Enum):
    PENDING = "pending"       # in the working block
    COMMITTED = "committed"   # in a sealed block

class LedgerError(Exception):
    """
    Base error for every ledger operation.

    Carries the failing operation and a human readable reason. The ledger
    state is unchanged whenever one of these is raised from a mutation.
    """
    code = "ledger_error"

    def __init__(self, operation: str, reason: str):
        super().__init__(f"{operation}: {reason}")
        self.operation = operation
        self.reason = reason

# --- Input validation ---

class InvalidAmount(LedgerError):
    code = "invalid_amount"

class InvalidFee(LedgerError):
    code = "invalid_fee"

class NoteTooLong(LedgerError):
    code = "note_too_long"

class InvalidTransaction(LedgerError):
    """Malformed field that is neither the amount nor the fee."""
    code = "invalid_transaction"

class DuplicateTransactionId(LedgerError):
    code = "duplicate_transaction_id"

# --- Account state ---

class AccountNotFound(LedgerError):
    code = "account_not_found"

class AccountAlreadyExists(LedgerError):
    code = "account_already_exists"

class InsufficientFunds(LedgerError):
    code = "insufficient_funds"

# --- Chain state ---

class NoCommittedBlock(LedgerError):
    code = "no_committed_block"

class BlockNotFound(LedgerError):
    code = "block_not_found"

# --- Integrity ---

class IntegrityError(LedgerError):
    """Chain already corrupted. Never recovered automatically."""
    code = "integrity_error"

    def __init__(self, operation: str, reason: str, block_number: Optional[int] = None):
        super().__init__(operation, reason)
        self.block_number = block_number

class HashInconsistent(IntegrityError):
    code = "hash_inconsistent"

class TransactionCountMismatch(IntegrityError):
    code = "transaction_count_mismatch"

class BalanceInvariantViolation(IntegrityError):
    code = "balance_invariant_violation"
