from pydantic import BaseModel, field_validator
from typing import Optional

class Address(BaseModel):
    address: str
    name: Optional[str] = None

    @field_validator("address")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Address must not be empty")
        return value

    def to_payload(self) -> dict:
        """{address, name} with the name dropped when empty."""
        data = {"address": self.address}
        if self.name:
            data["name"] = self.name
        return data
