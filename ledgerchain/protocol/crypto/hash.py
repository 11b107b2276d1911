# MIT License
# Copyright (c) 2025 Hashborn

import hashlib
from typing import List, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ..types.tx import Transaction

def sha256(data: bytes) -> bytes:
    """Returns SHA256 hash of bytes."""
    return hashlib.sha256(data).digest()

def sha256_hex(data: bytes) -> str:
    """Returns SHA256 hash of bytes as hex string."""
    return sha256(data).hex()

def hash_text(text: str) -> str:
    """Returns SHA256 hex digest of a UTF-8 string."""
    return sha256_hex(text.encode("utf-8"))

def merkle_root(leaves: Sequence[str]) -> str:
    """
    Calculates the Merkle root for an ordered list of strings.

    Every leaf is hashed on its own, then adjacent hashes are concatenated
    and hashed level by level. An odd node at the end of a level is carried
    up unchanged. A single leaf yields its own hash.
    """
    if not leaves:
        raise ValueError("Cannot build Merkle root with no leaves")

    level: List[str] = [hash_text(leaf) for leaf in leaves]

    while len(level) > 1:
        next_level = []
        for i in range(0, len(level) - 1, 2):
            next_level.append(hash_text(level[i] + level[i + 1]))
        if len(level) % 2 == 1:
            next_level.append(level[-1])
        level = next_level

    return level[0]

def block_root(seed: str, transactions: Sequence["Transaction"]) -> str:
    """Root over the ledger seed followed by each transaction, in submission order."""
    leaves = [seed] + [tx.to_string() for tx in transactions]
    return merkle_root(leaves)
