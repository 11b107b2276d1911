# MIT License
# Copyright (c) 2025 Hashborn

"""
Tests for the command processor and script ingestion.
"""

import pytest
from ledgerchain.blockchain.core.ledger import reset_ledger, current_ledger
from ledgerchain.cli.commands import CommandError, CommandProcessor, process_file
from ledgerchain.protocol.config.params import MAX_SUPPLY


@pytest.fixture
def output():
    lines = []
    yield lines


@pytest.fixture
def processor(output):
    reset_ledger()
    proc = CommandProcessor(out=output.append)
    yield proc
    reset_ledger()


def tx_command(tx_id, amount=100, fee=10, note="hello world", payer="master", receiver="alice"):
    return (
        f'process-transaction {tx_id} amount {amount} fee {fee} note "{note}" '
        f'payer {payer} receiver {receiver}'
    )


def test_create_ledger(processor, output):
    processor.process('create-ledger test description "a test ledger" seed "harvard"')
    assert processor.ledger is current_ledger()
    assert processor.ledger.description == "a test ledger"
    assert processor.ledger.seed == "harvard"
    assert output == ["Creating Ledger: test a test ledger harvard"]

def test_commands_require_ledger(processor):
    with pytest.raises(CommandError) as exc:
        processor.process("create-account alice")
    assert exc.value.reason == "Ledger Not Created"

def test_unknown_command(processor):
    with pytest.raises(CommandError) as exc:
        processor.process("mint 100")
    assert exc.value.command == "mint"
    assert exc.value.reason == "Invalid Command"

def test_missing_arguments(processor):
    processor.process("create-ledger l description d seed s")
    with pytest.raises(CommandError) as exc:
        processor.process("process-transaction 1 amount 10 fee 10")
    assert exc.value.reason == "Missing Arguments"

def test_invalid_number(processor):
    processor.process("create-ledger l description d seed s")
    processor.process("create-account alice")
    with pytest.raises(CommandError) as exc:
        processor.process(tx_command("1", amount="ten"))
    assert exc.value.reason == "Invalid Number"

def test_ledger_errors_are_reported_not_raised(processor, output):
    processor.process("create-ledger l description d seed s")
    processor.process("create-account alice")
    processor.process("create-account alice")
    assert output[-1] == "Failed due to: Account alice Already Exists"

    processor.process(tx_command("1", fee=5))
    assert output[-1] == "Failed due to: Transaction Fee Must Be At Least 10"

def test_full_block_flow(processor, output):
    processor.process("create-ledger l description d seed s")
    processor.process("create-account alice")
    processor.process("get-account-balances")
    assert output[-1] == "No Account Has Been Committed"

    for i in range(10):
        processor.process(tx_command(str(i)))

    output.clear()
    processor.process("get-account-balance alice")
    assert output == ["Getting Balance for: alice", "Account Balance for: alice is 1000"]

    output.clear()
    processor.process("get-account-balances")
    assert output == [
        "Getting All Balances",
        "Account Balance for: alice is 1000",
        f"Account Balance for: master is {MAX_SUPPLY - 1100}",
    ]

    output.clear()
    processor.process("get-block 1")
    assert output[1].startswith("Block Number: 1 Hash: ")
    assert len(output) == 12
    assert "Note: hello world" in output[2]

    output.clear()
    processor.process("get-transaction 3")
    assert output[1] == "Transaction ID: 3 Amount: 100 Fee: 10 Note: hello world Payer: master Receiver: alice"

    output.clear()
    processor.process("validate")
    assert output == ["Validate: Valid"]

def test_missing_block_and_transaction(processor, output):
    processor.process("create-ledger l description d seed s")
    processor.process("get-block 7")
    assert output[-1] == "Failed due to: Block 7 Does Not Exist"
    processor.process("get-transaction nope")
    assert output[-1] == "Transaction nope Does Not Exist"
    processor.process("validate")
    assert output[-1] == "Validate: Failed due to: No Block Has Been Committed"

def test_process_file(processor, output, tmp_path):
    lines = [
        "# sample script",
        "create-ledger l description d seed s",
        "",
        "create-account alice",
        "bogus-command",
    ]
    lines += [tx_command(str(i)) for i in range(10)]
    lines += ["   # indented comment", "get-account-balance alice", "get-block"]
    script = tmp_path / "ledger.script"
    script.write_text("\n".join(lines) + "\n")

    errors = process_file(str(script), processor)

    assert [(e.command, e.line_number) for e in errors] == [("bogus-command", 5), ("get-block", 18)]
    assert "Failed due to: Invalid Command for Command: bogus-command On Line Number: 5" in output
    assert "Account Balance for: alice is 1000" in output
    assert processor.ledger.number_of_blocks == 1

def test_process_file_reports_undecodable_line(processor, output, tmp_path):
    script = tmp_path / "ledger.script"
    script.write_bytes(
        b"create-ledger l description d seed s\n"
        b"create-account \xff\xfe\n"
        b"create-account alice\n"
    )

    errors = process_file(str(script), processor)

    assert [(e.command, e.reason, e.line_number) for e in errors] == [("<undecodable>", "Invalid UTF-8", 2)]
    assert "Failed due to: Invalid UTF-8 for Command: <undecodable> On Line Number: 2" in output
    assert output[-1] == "Creating Account: alice"

def test_process_file_reads_utf8(processor, output, tmp_path):
    script = tmp_path / "ledger.script"
    script.write_bytes("create-ledger l description d seed s\ncreate-account zoë\n".encode("utf-8"))

    assert process_file(str(script), processor) == []
    assert output[-1] == "Creating Account: zoë"
