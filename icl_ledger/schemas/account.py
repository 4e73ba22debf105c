from pydantic import BaseModel, field_validator
from datetime import date
from decimal import Decimal
from typing import Literal

InterestMethod = Literal["simple", "compound"]

class AccountTerms(BaseModel):
    start_date: date | None = None
    end_date: date | None = None
    annual_rate_percent: Decimal
    tds_rate_percent: Decimal = Decimal("0")
    interest_method: InterestMethod = "compound"
    name: str | None = None

    class Config:
        frozen = True

    @field_validator("interest_method", mode="before")
    @classmethod
    def method_normalize(cls, v):
        if v is None:
            return "compound"
        return str(v).strip().lower()

    @field_validator("name")
    @classmethod
    def name_trim(cls, v: str | None):
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def is_compound(self) -> bool:
        return self.interest_method == "compound"
