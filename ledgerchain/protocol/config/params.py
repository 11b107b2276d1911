# MIT License
# Copyright (c) 2025 Hashborn

import os
from typing import Dict

# Global Constants
MAX_SUPPLY = 2_147_483_647      # minted to the master account at genesis
BLOCK_SIZE = 10                 # transactions per committed block
MIN_FEE = 10
MAX_NOTE_LENGTH = 1024
MASTER_ADDRESS = "master"

class LedgerConfig:
    def __init__(self,
                 profile: str,
                 max_supply: int = MAX_SUPPLY,
                 block_size: int = BLOCK_SIZE,
                 min_fee: int = MIN_FEE,
                 max_note_length: int = MAX_NOTE_LENGTH,
                 master_address: str = MASTER_ADDRESS):
        if max_supply <= 0:
            raise ValueError("max_supply must be positive")
        if block_size < 1:
            raise ValueError("block_size must be at least 1")
        self.profile = profile
        self.max_supply = max_supply
        self.block_size = block_size
        self.min_fee = min_fee
        self.max_note_length = max_note_length
        self.master_address = master_address

    def __repr__(self) -> str:
        return f"LedgerConfig(profile={self.profile!r}, max_supply={self.max_supply})"

CONFIGS: Dict[str, LedgerConfig] = {
    "default": LedgerConfig(profile="default"),
    "devnet": LedgerConfig(
        profile="devnet",
        max_supply=1_000_000,
    ),
}

# Selected through LEDGER_PROFILE, falls back to the default profile
CURRENT_CONFIG = CONFIGS.get(os.environ.get("LEDGER_PROFILE", "default"), CONFIGS["default"])
