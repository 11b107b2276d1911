# MIT License
# Copyright (c) 2025 Hashborn

from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from .tx import Transaction
from ...blockchain.core.accounts import Account

class Block(BaseModel):
    number: int = Field(ge=1)           # 1 for genesis
    hash: str = ""                      # Merkle root once sealed
    previous_hash: str = ""             # "" for genesis
    previous_number: Optional[int] = None   # link to the prior committed block

    transactions: List[Transaction] = Field(default_factory=list)
    accounts: Dict[str, Account] = Field(default_factory=dict)

    @property
    def is_sealed(self) -> bool:
        return bool(self.hash)

    @property
    def size(self) -> int:
        return len(self.transactions)

    @property
    def total_fees(self) -> int:
        return sum(tx.fee for tx in self.transactions)

    def get_account(self, address: str) -> Optional[Account]:
        return self.accounts.get(address)

    def add_account(self, account: Account):
        self.accounts[account.address] = account

    def find_transaction(self, tx_id: str) -> Optional[Transaction]:
        for tx in self.transactions:
            if tx.id == tx_id:
                return tx
        return None

    def clone_accounts(self) -> Dict[str, Account]:
        """Deep copy of the account snapshot for the next working block."""
        return {address: acc.clone() for address, acc in self.accounts.items()}

    def balances(self) -> Dict[str, int]:
        return {address: acc.balance for address, acc in self.accounts.items()}
