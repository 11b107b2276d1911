# MIT License
# Copyright (c) 2025 Hashborn

import logging
from ...protocol.crypto.hash import block_root
from ...protocol.types.common import (
    BalanceInvariantViolation,
    HashInconsistent,
    NoCommittedBlock,
    TransactionCountMismatch,
)
from ..core.ledger import Ledger

logger = logging.getLogger(__name__)

OPERATION = "Validate"

class ChainValidator:
    def __init__(self, ledger: Ledger):
        self.ledger = ledger
        self.config = ledger.config

    def validate(self, verify_hashes: bool = False):
        """
        Walks the committed chain in ascending order and fails on the first
        violation. Reads committed state only, never the working block.

        With verify_hashes, each block's Merkle root is also recomputed from
        the seed and its transactions.
        Raises a LedgerError subclass on failure.
        """
        with self.ledger.lock:
            blocks = self.ledger.committed_blocks()
            if not blocks:
                raise NoCommittedBlock(OPERATION, "No Block Has Been Committed")

            by_number = {block.number: block for block in blocks}
            total_fees = 0

            for block in blocks:
                # 1. Linkage Check
                if block.number != 1:
                    previous = by_number.get(block.previous_number)
                    if previous is None or block.previous_hash != previous.hash:
                        raise HashInconsistent(
                            OPERATION, f"Hash Is Inconsistent: {block.number}", block_number=block.number
                        )

                # 2. Transaction Count
                if block.size != self.config.block_size:
                    raise TransactionCountMismatch(
                        OPERATION,
                        f"Transaction Count Is Not {self.config.block_size} In Block: {block.number}",
                        block_number=block.number,
                    )

                # 3. Root Check
                if verify_hashes and block.hash != block_root(self.ledger.seed, block.transactions):
                    raise HashInconsistent(
                        OPERATION, f"Hash Does Not Match Transactions: {block.number}", block_number=block.number
                    )

                total_fees += block.total_fees

            # 4. Conservation
            total_balance = sum(acc.balance for acc in blocks[-1].accounts.values())
            if total_balance + total_fees != self.config.max_supply:
                raise BalanceInvariantViolation(
                    OPERATION,
                    f"Balance Does Not Add Up: {total_balance} + {total_fees} fees != {self.config.max_supply}",
                )

        logger.debug(f"Chain valid up to block {blocks[-1].number}")
