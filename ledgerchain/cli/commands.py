# MIT License
# Copyright (c) 2025 Hashborn

"""
Line-oriented command processor.

Translates script commands such as

    process-transaction 7 amount 100 fee 10 note "rent" payer master receiver alice

into calls against ledgerchain.api and reports the results through `out`.
"""

import logging
import shlex
from typing import Callable, List, Optional
from .. import api
from ..blockchain.core.ledger import Ledger
from ..protocol.types.common import LedgerError

logger = logging.getLogger(__name__)

class CommandError(Exception):
    """Malformed or unknown command. Carries the script line number when known."""

    def __init__(self, command: str, reason: str, line_number: Optional[int] = None):
        super().__init__(f"{command}: {reason}")
        self.command = command
        self.reason = reason
        self.line_number = line_number

def _int_arg(command: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise CommandError(command, "Invalid Number")

class CommandProcessor:
    def __init__(self, ledger: Optional[Ledger] = None, out: Callable[[str], None] = print):
        self.ledger = ledger
        self.out = out

    def process(self, line: str):
        """
        Runs one command.
        Raises CommandError for malformed input. Ledger failures are reported
        and do not raise.
        """
        try:
            tokens = shlex.split(line)
        except ValueError as e:
            raise CommandError(line.strip(), f"Unparseable Command ({e})")
        if not tokens:
            return

        command, args = tokens[0], tokens[1:]
        handler = self._handlers().get(command)
        if handler is None:
            raise CommandError(command, "Invalid Command")
        if command != "create-ledger" and self.ledger is None:
            raise CommandError(command, "Ledger Not Created")

        try:
            handler(command, args)
        except LedgerError as e:
            logger.debug(f"{command} failed: {e}")
            self.out(f"Failed due to: {e.reason}")

    def _handlers(self):
        return {
            "create-ledger": self._create_ledger,
            "create-account": self._create_account,
            "get-account-balance": self._get_account_balance,
            "get-account-balances": self._get_account_balances,
            "process-transaction": self._process_transaction,
            "get-block": self._get_block,
            "get-transaction": self._get_transaction,
            "validate": self._validate,
        }

    @staticmethod
    def _expect(command: str, args: List[str], count: int):
        if len(args) != count:
            raise CommandError(command, "Missing Arguments")

    # --- Handlers ---

    def _create_ledger(self, command, args):
        # create-ledger <name> description <description> seed <seed>
        self._expect(command, args, 5)
        name, description, seed = args[0], args[2], args[4]
        self.out(f"Creating Ledger: {name} {description} {seed}")
        self.ledger = api.create_ledger(name, description, seed)

    def _create_account(self, command, args):
        self._expect(command, args, 1)
        self.out(f"Creating Account: {args[0]}")
        api.create_account(self.ledger, args[0])

    def _get_account_balance(self, command, args):
        self._expect(command, args, 1)
        address = args[0]
        self.out(f"Getting Balance for: {address}")
        balance = api.get_balance(self.ledger, address)
        self.out(f"Account Balance for: {address} is {balance}")

    def _get_account_balances(self, command, args):
        self._expect(command, args, 0)
        self.out("Getting All Balances")
        balances = api.get_all_balances(self.ledger)
        if balances is None:
            self.out("No Account Has Been Committed")
            return
        for address in sorted(balances):
            self.out(f"Account Balance for: {address} is {balances[address]}")

    def _process_transaction(self, command, args):
        # process-transaction <id> amount <n> fee <n> note <note> payer <addr> receiver <addr>
        self._expect(command, args, 11)
        tx_id, note, payer, receiver = args[0], args[6], args[8], args[10]
        amount = _int_arg(command, args[2])
        fee = _int_arg(command, args[4])
        self.out(f"Processing Transaction: {tx_id} {amount} {fee} {note} {payer} {receiver}")
        api.submit_transaction(self.ledger, tx_id, amount, fee, note, payer, receiver)

    def _get_block(self, command, args):
        self._expect(command, args, 1)
        number = _int_arg(command, args[0])
        self.out(f"Get Block: {number}")
        block = api.get_block(self.ledger, number)
        self.out(f"Block Number: {block.number} Hash: {block.hash} Previous Hash: {block.previous_hash}")
        for tx in block.transactions:
            self.out(str(tx))

    def _get_transaction(self, command, args):
        self._expect(command, args, 1)
        self.out(f"Get Transaction: {args[0]}")
        tx = api.get_transaction(self.ledger, args[0])
        if tx is None:
            self.out(f"Transaction {args[0]} Does Not Exist")
            return
        self.out(str(tx))

    def _validate(self, command, args):
        self._expect(command, args, 0)
        try:
            api.validate(self.ledger)
        except LedgerError as e:
            logger.debug(f"{command} failed: {e}")
            self.out(f"Validate: Failed due to: {e.reason}")
            return
        self.out("Validate: Valid")


def process_file(path: str, processor: Optional[CommandProcessor] = None) -> List[CommandError]:
    """
    Runs every command in a script file.

    Blank lines and lines starting with '#' are skipped. Malformed commands
    are reported with their 1-based line number and processing continues.
    Returns the collected CommandErrors.
    """
    processor = processor or CommandProcessor()
    errors: List[CommandError] = []

    # Lines are decoded one at a time so a bad byte costs only its own line
    with open(path, "rb") as f:
        for line_number, raw in enumerate(f, start=1):
            try:
                try:
                    stripped = raw.decode("utf-8").strip()
                except UnicodeDecodeError:
                    raise CommandError("<undecodable>", "Invalid UTF-8")
                if not stripped or stripped.startswith("#"):
                    continue
                processor.process(stripped)
            except CommandError as e:
                e.line_number = line_number
                errors.append(e)
                processor.out(
                    f"Failed due to: {e.reason} for Command: {e.command} On Line Number: {e.line_number}"
                )

    logger.info(f"Processed {path} ({len(errors)} command errors)")
    return errors
