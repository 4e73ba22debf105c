from __future__ import annotations

from datetime import date
from typing import Sequence

from icl_ledger.schemas.ledger import LedgerRow, LedgerSummary
from icl_ledger.utils.money import ZERO


def summarize_ledger(rows: Sequence[LedgerRow]) -> LedgerSummary:
    out = LedgerSummary()
    if not rows:
        return out

    pending = ZERO
    for r in rows:
        out.total_paid += r.amount_paid
        out.total_repaid += r.amount_repaid
        if r.kind == "interest_accrual":
            out.total_gross_interest += r.gross_interest
            out.total_tds += r.tds
            out.total_net_interest += r.net_interest
            out.accrual_days += r.days_in_period
        elif r.kind == "capitalization":
            # conservation: the whole pending amount moved into principal
            out.total_capitalized += pending
        if r.warnings:
            out.has_negative_principal = True
        pending = r.cumulative_net_interest

    last = rows[-1]
    out.closing_principal = last.principal
    out.closing_cumulative_net_interest = last.cumulative_net_interest
    out.closing_balance = last.balance
    return out


def balance_at(rows: Sequence[LedgerRow], on: date) -> LedgerRow | None:
    """Ledger state at the end of ``on``: the last row dated on or before it."""
    latest: LedgerRow | None = None
    for r in rows:
        if r.date <= on:
            latest = r
        else:
            break
    return latest
