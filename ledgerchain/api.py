# MIT License
# Copyright (c) 2025 Hashborn

"""
Public operations of the ledger core.

Thin functions over Ledger, TransactionProcessor and ChainValidator, taking
the ledger explicitly. Used by the command processor and the RPC server.
"""

from typing import Dict, Optional
from pydantic import ValidationError
from .blockchain.core.accounts import Account
from .blockchain.core.ledger import Ledger, create_ledger, reset_ledger
from .blockchain.core.processor import TransactionProcessor, OPERATION as PROCESS_TRANSACTION
from .protocol.types.common import InvalidAmount, InvalidFee, InvalidTransaction, LedgerError
from .blockchain.consensus.chain_validator import ChainValidator
from .protocol.types.block import Block
from .protocol.types.tx import Transaction

__all__ = [
    'create_ledger',
    'reset_ledger',
    'create_account',
    'submit_transaction',
    'get_balance',
    'get_all_balances',
    'get_block',
    'get_transaction',
    'validate',
]

def create_account(ledger: Ledger, address: str) -> Account:
    return ledger.create_account(address)

def submit_transaction(ledger: Ledger, id: str, amount: int, fee: int, note: str,
                       payer_address: str, receiver_address: str) -> str:
    try:
        tx = Transaction(
            id=id,
            amount=amount,
            fee=fee,
            note=note,
            payer=payer_address,
            receiver=receiver_address,
        )
    except ValidationError as e:
        raise _field_error(e) from e
    return TransactionProcessor(ledger).submit(tx)

def _field_error(err: ValidationError) -> LedgerError:
    """Maps the first failing Transaction field onto a ledger error."""
    first = err.errors()[0]
    field = first["loc"][0] if first["loc"] else ""
    if field == "amount":
        return InvalidAmount(PROCESS_TRANSACTION, "Transaction Amount Must Be An Integer")
    if field == "fee":
        return InvalidFee(PROCESS_TRANSACTION, "Transaction Fee Must Be An Integer")
    return InvalidTransaction(PROCESS_TRANSACTION, f"Invalid {field}: {first['msg']}")

def get_balance(ledger: Ledger, address: str) -> int:
    return ledger.get_balance(address)

def get_all_balances(ledger: Ledger) -> Optional[Dict[str, int]]:
    return ledger.list_balances()

def get_block(ledger: Ledger, number: int) -> Block:
    return ledger.get_block(number)

def get_transaction(ledger: Ledger, id: str) -> Optional[Transaction]:
    """Returns None when no block holds the id."""
    return ledger.get_transaction(id)

def validate(ledger: Ledger, verify_hashes: bool = False):
    """Raises a LedgerError subclass when the chain is not valid."""
    ChainValidator(ledger).validate(verify_hashes=verify_hashes)
