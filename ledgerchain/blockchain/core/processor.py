# MIT License
# Copyright (c) 2025 Hashborn

import logging
from ...protocol.types.block import Block
from ...protocol.types.tx import Transaction
from ...protocol.types.common import (
    AccountNotFound,
    DuplicateTransactionId,
    InsufficientFunds,
    InvalidAmount,
    InvalidFee,
    LedgerError,
    NoteTooLong,
)
from ...protocol.crypto.hash import block_root
from ..observability import metrics
from .ledger import Ledger

logger = logging.getLogger(__name__)

OPERATION = "Process Transaction"

class TransactionProcessor:
    """
    Applies transactions to the ledger's working block and seals the block
    once it holds `block_size` transactions.

    Every submission runs as one critical section under the ledger lock, so
    no caller can observe a full but unsealed working block.
    """

    def __init__(self, ledger: Ledger):
        self.ledger = ledger
        self.config = ledger.config

    def submit(self, tx: Transaction) -> str:
        """
        Validates and applies a transaction. Returns its id.
        Raises a LedgerError subclass and leaves the ledger untouched on failure.
        """
        with self.ledger.lock:
            try:
                self._check(tx)
            except LedgerError as e:
                logger.warning(f"Reject tx {tx.id}: {e.reason}")
                metrics.record_rejection(e.code)
                raise

            self._apply(tx)

            block = self.ledger.working_block
            block.transactions.append(tx)
            metrics.record_transaction(tx)
            logger.debug(f"Tx {tx.id} applied to block {block.number} ({block.size}/{self.config.block_size})")

            if block.size == self.config.block_size:
                self._seal_and_roll(block)
            metrics.working_block_size.set(self.ledger.working_block.size)

        return tx.id

    def _check(self, tx: Transaction):
        cfg = self.config

        if tx.amount < 0 or tx.amount > cfg.max_supply:
            raise InvalidAmount(OPERATION, "Transaction Amount Is Out of Range")
        if tx.fee < cfg.min_fee:
            raise InvalidFee(OPERATION, f"Transaction Fee Must Be At Least {cfg.min_fee}")
        if len(tx.note) > cfg.max_note_length:
            raise NoteTooLong(OPERATION, f"Note Length Must Not Exceed {cfg.max_note_length} Chars")
        if self.ledger.has_transaction(tx.id):
            raise DuplicateTransactionId(OPERATION, "Transaction Id Must Be Unique")

        block = self.ledger.working_block
        payer = block.get_account(tx.payer)
        receiver = block.get_account(tx.receiver)
        if payer is None or receiver is None:
            missing = tx.payer if payer is None else tx.receiver
            raise AccountNotFound(OPERATION, f"Account {missing} Does Not Exist")

        if payer.balance < tx.amount + tx.fee:
            raise InsufficientFunds(OPERATION, "Payer Does Not Have Required Funds")

    def _apply(self, tx: Transaction):
        block = self.ledger.working_block
        payer = block.get_account(tx.payer)
        receiver = block.get_account(tx.receiver)

        # Fee leaves circulation
        payer.balance -= tx.amount + tx.fee
        receiver.balance += tx.amount

    def _seal_and_roll(self, block: Block):
        block.hash = block_root(self.ledger.seed, block.transactions)

        successor = Block(
            number=block.number + 1,
            previous_hash=block.hash,
            previous_number=block.number,
            accounts=block.clone_accounts(),
        )
        self.ledger.commit(block, successor)

        metrics.record_commit(block)
        logger.info(f"Block {block.number} committed. Hash: {block.hash[:8]}...")
