# MIT License
# Copyright (c) 2025 Hashborn

from pydantic import BaseModel, Field

class Account(BaseModel):
    address: str
    balance: int = Field(default=0, ge=0)

    def clone(self) -> "Account":
        """Independent copy, owned by the block it is placed in."""
        return self.model_copy()
