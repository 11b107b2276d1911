# MIT License
# Copyright (c) 2025 Hashborn

"""
Chain validation tests.

Tests:
- Valid chains pass, repeatedly
- Empty chain
- Broken hash linkage
- Wrong transaction count
- Broken conservation
- Optional Merkle root recomputation
"""

import pytest
from ledgerchain import api
from ledgerchain.blockchain.core.ledger import Ledger
from ledgerchain.blockchain.consensus.chain_validator import ChainValidator
from ledgerchain.protocol.types.common import (
    BalanceInvariantViolation,
    HashInconsistent,
    IntegrityError,
    NoCommittedBlock,
    TransactionCountMismatch,
)


@pytest.fixture
def chain():
    """Ledger with three committed blocks and a partly filled working block."""
    lg = Ledger("L", "d", "seed1")
    api.create_account(lg, "alice")
    api.create_account(lg, "bob")
    for i in range(33):
        if i % 2 == 0:
            api.submit_transaction(lg, f"tx{i}", 200, 10 + i, "", "master", "alice")
        else:
            api.submit_transaction(lg, f"tx{i}", 40, 10 + i, "", "alice", "bob")
    assert lg.number_of_blocks == 3
    return lg


def test_valid_chain(chain):
    ChainValidator(chain).validate()
    ChainValidator(chain).validate(verify_hashes=True)

def test_validate_twice_same_result(chain):
    for _ in range(2):
        api.validate(chain)

def test_empty_chain():
    lg = Ledger("L", "d", "seed1")
    with pytest.raises(NoCommittedBlock):
        api.validate(lg)

def test_empty_chain_with_pending_transactions():
    lg = Ledger("L", "d", "seed1")
    api.create_account(lg, "alice")
    api.submit_transaction(lg, "t", 1, 10, "", "master", "alice")
    with pytest.raises(NoCommittedBlock):
        api.validate(lg)

def test_working_block_not_considered(chain):
    # Working block balances already differ from the last committed snapshot
    assert chain.working_block.size == 3
    api.validate(chain)

def test_hash_inconsistent(chain):
    chain.get_block(2).previous_hash = "bogus"
    with pytest.raises(HashInconsistent) as exc:
        api.validate(chain)
    assert exc.value.block_number == 2
    assert exc.value.reason == "Hash Is Inconsistent: 2"

def test_hash_inconsistent_after_previous_block_rehashed(chain):
    chain.get_block(1).hash = "rewritten"
    with pytest.raises(HashInconsistent) as exc:
        api.validate(chain)
    assert exc.value.block_number == 2

def test_unresolvable_previous_block(chain):
    chain.get_block(3).previous_number = 99
    with pytest.raises(HashInconsistent) as exc:
        api.validate(chain)
    assert exc.value.block_number == 3

def test_transaction_count_mismatch(chain):
    chain.get_block(2).transactions.pop()
    with pytest.raises(TransactionCountMismatch) as exc:
        api.validate(chain)
    assert exc.value.block_number == 2

def test_balance_invariant_violation(chain):
    chain.get_latest_block().get_account("bob").balance += 1
    with pytest.raises(BalanceInvariantViolation):
        api.validate(chain)

def test_hash_checked_before_count(chain):
    chain.get_block(3).previous_hash = "bogus"
    chain.get_block(2).transactions.pop()
    # Block 2 is reached first
    with pytest.raises(TransactionCountMismatch):
        api.validate(chain)

def test_tampered_transaction_detected_with_root_check(chain):
    block = chain.get_block(1)
    original = block.transactions[0]
    block.transactions[0] = original.model_copy(update={"note": "forged"})

    # Linkage, count and totals are untouched
    api.validate(chain)
    with pytest.raises(HashInconsistent) as exc:
        api.validate(chain, verify_hashes=True)
    assert exc.value.block_number == 1

def test_integrity_errors_share_base(chain):
    chain.get_latest_block().get_account("alice").balance = 0
    with pytest.raises(IntegrityError):
        api.validate(chain)

def test_validation_does_not_mutate(chain):
    before = [(b.number, b.hash, b.balances()) for b in chain.committed_blocks()]
    working = chain.working_block.balances()
    api.validate(chain)
    assert [(b.number, b.hash, b.balances()) for b in chain.committed_blocks()] == before
    assert chain.working_block.balances() == working
