from pydantic import BaseModel, field_validator
from datetime import date
from decimal import Decimal

class Transaction(BaseModel):
    date: date
    amount_paid: Decimal = Decimal("0")
    amount_repaid: Decimal = Decimal("0")
    description: str | None = None

    class Config:
        frozen = True

    @field_validator("amount_paid", "amount_repaid", mode="before")
    @classmethod
    def amount_default_zero(cls, v):
        if v is None or v == "":
            return Decimal("0")
        return v

    @field_validator("amount_paid", "amount_repaid")
    @classmethod
    def amount_must_be_finite_and_non_negative(cls, v: Decimal):
        if not v.is_finite():
            raise ValueError("amount must be finite")
        if v < 0:
            raise ValueError("amount must not be negative")
        return v

    @field_validator("description")
    @classmethod
    def description_trim(cls, v: str | None):
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def net_amount(self) -> Decimal:
        return self.amount_paid - self.amount_repaid

    @property
    def is_deposit(self) -> bool:
        return self.amount_paid > 0
