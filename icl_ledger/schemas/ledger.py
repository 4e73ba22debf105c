from pydantic import BaseModel, computed_field
from datetime import date
from decimal import Decimal
from typing import Literal

RowKind = Literal["deposit", "repayment", "interest_accrual", "capitalization"]

TRANSACTION_KINDS = ("deposit", "repayment")

class NegativePrincipalWarning(BaseModel):
    principal: Decimal
    message: str = "principal_negative"

class LedgerRow(BaseModel):
    date: date
    kind: RowKind
    description: str

    amount_paid: Decimal = Decimal("0")
    amount_repaid: Decimal = Decimal("0")
    principal: Decimal

    gross_interest: Decimal = Decimal("0")
    tds: Decimal = Decimal("0")
    net_interest: Decimal = Decimal("0")
    cumulative_net_interest: Decimal

    days_in_period: int = 0
    days_in_year: int = 0

    warnings: list[NegativePrincipalWarning] = []

    @computed_field
    @property
    def net_amount(self) -> Decimal:
        return self.amount_paid - self.amount_repaid

    @computed_field
    @property
    def balance(self) -> Decimal:
        return self.principal + self.cumulative_net_interest

    @property
    def is_transaction(self) -> bool:
        return self.kind in TRANSACTION_KINDS

class LedgerSummary(BaseModel):
    total_paid: Decimal = Decimal("0")
    total_repaid: Decimal = Decimal("0")
    total_gross_interest: Decimal = Decimal("0")
    total_tds: Decimal = Decimal("0")
    total_net_interest: Decimal = Decimal("0")
    total_capitalized: Decimal = Decimal("0")
    accrual_days: int = 0

    closing_principal: Decimal = Decimal("0")
    closing_cumulative_net_interest: Decimal = Decimal("0")
    closing_balance: Decimal = Decimal("0")
    has_negative_principal: bool = False
