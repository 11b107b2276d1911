# MIT License
# Copyright (c) 2025 Hashborn

from pydantic import BaseModel, ConfigDict

class Transaction(BaseModel):
    """
    Transfer of `amount` from `payer` to `receiver`.

    `payer` and `receiver` are account addresses, resolved against the
    working block snapshot when the transaction is submitted. The fee is
    burned. Range checks live in the processor so a rejected submission
    reports a ledger error rather than a model validation error.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    amount: int
    fee: int
    note: str = ""
    payer: str
    receiver: str

    def to_string(self) -> str:
        # Canonical form used as a Merkle leaf. JSON quoting keeps field
        # boundaries unambiguous whatever the field contents.
        return self.model_dump_json()

    def __str__(self) -> str:
        return (
            f"Transaction ID: {self.id} Amount: {self.amount} Fee: {self.fee} "
            f"Note: {self.note} Payer: {self.payer} Receiver: {self.receiver}"
        )
