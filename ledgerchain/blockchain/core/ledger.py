# MIT License
# Copyright (c) 2025 Hashborn

from typing import Optional, List, Dict, Tuple
import logging
import threading
from ...protocol.types.block import Block
from ...protocol.types.tx import Transaction
from ...protocol.types.common import (
    AccountAlreadyExists,
    AccountNotFound,
    BlockNotFound,
    NoCommittedBlock,
)
from ...protocol.config.params import CURRENT_CONFIG, LedgerConfig
from .accounts import Account

logger = logging.getLogger(__name__)

class Ledger:
    """
    Committed block chain plus the single working block.

    Committed blocks are kept in insertion order, which is also numeric
    order. The working block is never part of the committed mapping and is
    always numbered one past the last committed block. A single re-entrant
    lock guards both.
    """

    def __init__(self, name: str, description: str, seed: str, config: Optional[LedgerConfig] = None):
        self.name = name
        self.description = description
        self._seed = seed
        self.config = config or CURRENT_CONFIG
        self._lock = threading.RLock()
        self._blocks: Dict[int, Block] = {}
        self._working_block = self._genesis_block()
        logger.info(f"Ledger '{name}' created (profile={self.config.profile})")

    def _genesis_block(self) -> Block:
        genesis = Block(number=1)
        genesis.add_account(Account(address=self.config.master_address, balance=self.config.max_supply))
        return genesis

    @property
    def seed(self) -> str:
        return self._seed

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def working_block(self) -> Block:
        return self._working_block

    @property
    def height(self) -> int:
        """Number of the last committed block, 0 when nothing is committed."""
        with self._lock:
            return self._working_block.number - 1

    @property
    def number_of_blocks(self) -> int:
        with self._lock:
            return len(self._blocks)

    def committed_blocks(self) -> List[Block]:
        """Committed blocks in ascending number order."""
        with self._lock:
            return list(self._blocks.values())

    # --- Blocks ---

    def get_block(self, number: int) -> Block:
        with self._lock:
            block = self._blocks.get(number)
        if block is None:
            raise BlockNotFound("Get Block", f"Block {number} Does Not Exist")
        return block

    def get_latest_block(self) -> Block:
        with self._lock:
            if not self._blocks:
                raise NoCommittedBlock("Get Latest Block", "No Block Has Been Committed")
            return self._blocks[self.height]

    def commit(self, sealed: Block, successor: Block):
        """
        Moves the sealed working block into the chain and installs its successor.
        Caller must hold the lock.
        """
        if sealed is not self._working_block:
            raise RuntimeError("Only the working block can be committed")
        if not sealed.is_sealed:
            raise RuntimeError(f"Block {sealed.number} has no hash")
        if successor.number != sealed.number + 1:
            raise RuntimeError(f"Invalid successor number: expected {sealed.number + 1}, got {successor.number}")

        self._blocks[sealed.number] = sealed
        self._working_block = successor

    # --- Transactions ---

    def find_transaction(self, tx_id: str) -> Optional[Tuple[Transaction, Optional[int]]]:
        """
        Looks a transaction up across committed blocks and the working block.
        Returns (transaction, block number) or (transaction, None) while pending.
        """
        with self._lock:
            for number, block in self._blocks.items():
                tx = block.find_transaction(tx_id)
                if tx is not None:
                    return tx, number
            tx = self._working_block.find_transaction(tx_id)
            if tx is not None:
                return tx, None
        return None

    def get_transaction(self, tx_id: str) -> Optional[Transaction]:
        found = self.find_transaction(tx_id)
        return found[0] if found else None

    def has_transaction(self, tx_id: str) -> bool:
        return self.find_transaction(tx_id) is not None

    def total_fees(self) -> int:
        """Fees burned by committed transactions."""
        with self._lock:
            return sum(block.total_fees for block in self._blocks.values())

    # --- Accounts ---

    def create_account(self, address: str) -> Account:
        with self._lock:
            if self._working_block.get_account(address) is not None:
                raise AccountAlreadyExists("Create Account", f"Account {address} Already Exists")
            account = Account(address=address)
            self._working_block.add_account(account)
            logger.debug(f"Account {address} added to block {self._working_block.number}")
        return account

    def get_balance(self, address: str) -> int:
        with self._lock:
            account = self.get_latest_block().get_account(address)
            if account is None:
                raise AccountNotFound("Get Account Balance", f"Account {address} Does Not Exist")
            return account.balance

    def list_balances(self) -> Optional[Dict[str, int]]:
        """Balances from the latest committed snapshot, None before the first commit."""
        with self._lock:
            if not self._blocks:
                return None
            return self.get_latest_block().balances()

    def __repr__(self) -> str:
        return f"Ledger(name={self.name!r}, height={self.height})"


# --- Process-wide instance ---

_instance: Optional[Ledger] = None
_instance_lock = threading.Lock()

def create_ledger(name: str, description: str, seed: str, config: Optional[LedgerConfig] = None) -> Ledger:
    """
    Returns the process-wide ledger, creating it on first call.
    Later calls ignore their arguments.
    """
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = Ledger(name, description, seed, config=config)
        elif (name, description, seed) != (_instance.name, _instance.description, _instance.seed):
            logger.debug(f"Ledger '{_instance.name}' already exists, ignoring create_ledger('{name}')")
        return _instance

def current_ledger() -> Optional[Ledger]:
    return _instance

def reset_ledger():
    """Discards the process-wide ledger."""
    global _instance
    with _instance_lock:
        _instance = None
