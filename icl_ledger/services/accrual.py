from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal

from icl_ledger.schemas.account import AccountTerms
from icl_ledger.schemas.ledger import LedgerRow, NegativePrincipalWarning
from icl_ledger.schemas.transaction import Transaction
from icl_ledger.services.capitalization import capitalize, should_capitalize
from icl_ledger.services.timeline import Timeline
from icl_ledger.utils.dates import days_in_year
from icl_ledger.utils.money import HUNDRED, ZERO, d2, fmt_inr

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)

# length of the closing stub booked after the last event of an open ledger
STUB_DAYS = 1


@dataclass
class _AccrualState:
    principal: Decimal
    cumulative_net_interest: Decimal
    accrued_through: date
    rows: list[LedgerRow] = field(default_factory=list)


def accrue_interest(
    principal: Decimal,
    annual_rate_percent: Decimal,
    tds_rate_percent: Decimal,
    days: int,
    year_days: int,
) -> tuple[Decimal, Decimal, Decimal]:
    """Gross, TDS and net interest for one period, each posted to the paisa.

    Interest only runs on a positive balance; an over-repaid account earns
    nothing rather than negative interest.
    """
    base = principal if principal > ZERO else ZERO
    gross = d2(base * annual_rate_percent * Decimal(days) / (HUNDRED * Decimal(year_days)))
    tds = d2(gross * tds_rate_percent / HUNDRED)
    return gross, tds, gross - tds


def _book_period(st: _AccrualState, terms: AccountTerms, through: date, label: str = "Interest accrual") -> None:
    """Book interest for ``(st.accrued_through, through]`` at the current principal."""
    if through <= st.accrued_through:
        return

    start = st.accrued_through + ONE_DAY
    st.accrued_through = through
    if terms.start_date is not None and start < terms.start_date:
        start = terms.start_date
    if start > through:
        return

    days = (through - start).days + 1
    # single-year denominator, taken from the period's closing day
    year_days = days_in_year(through.year)
    gross, tds, net = accrue_interest(
        st.principal, terms.annual_rate_percent, terms.tds_rate_percent, days, year_days
    )
    st.cumulative_net_interest += net

    st.rows.append(
        LedgerRow(
            date=through,
            kind="interest_accrual",
            description=f"{label} ({days} {'day' if days == 1 else 'days'})",
            principal=st.principal,
            gross_interest=gross,
            tds=tds,
            net_interest=net,
            cumulative_net_interest=st.cumulative_net_interest,
            days_in_period=days,
            days_in_year=year_days,
        )
    )


def _apply_transactions(st: _AccrualState, on: date, txs: list[Transaction]) -> None:
    """Fold every transaction dated ``on`` into a single deposit or repayment row."""
    paid = sum((t.amount_paid for t in txs), ZERO)
    repaid = sum((t.amount_repaid for t in txs), ZERO)
    st.principal += paid - repaid

    if paid > ZERO:
        kind = "deposit"
        default_desc = f"Deposit: {fmt_inr(paid)}"
    else:
        kind = "repayment"
        default_desc = f"Repayment: {fmt_inr(repaid)}"

    notes = [t.description for t in txs if t.description]

    warnings: list[NegativePrincipalWarning] = []
    if st.principal < ZERO:
        logger.warning("principal negative after transactions on %s: %s", on, st.principal)
        warnings.append(NegativePrincipalWarning(principal=st.principal))

    st.rows.append(
        LedgerRow(
            date=on,
            kind=kind,
            description="; ".join(notes) or default_desc,
            amount_paid=paid,
            amount_repaid=repaid,
            principal=st.principal,
            cumulative_net_interest=st.cumulative_net_interest,
            warnings=warnings,
        )
    )


def process(terms: AccountTerms, timeline: Timeline) -> list[LedgerRow]:
    """Walk the timeline once and emit the ledger rows.

    A transaction moves principal from the start of its own date, so the
    pending period is booked up to the day before at the old balance.
    Boundary and closing events book through the end of their date, after
    any same-day transactions.
    """
    st = _AccrualState(
        principal=ZERO,
        cumulative_net_interest=ZERO,
        accrued_through=timeline.first_event_date - ONE_DAY,
    )

    for ev in timeline.events:
        d = ev.date
        if ev.kind == "transaction":
            _book_period(st, terms, d - ONE_DAY)
            _apply_transactions(st, d, timeline.transactions_by_date.get(d, []))

        elif ev.kind == "boundary":
            _book_period(st, terms, d)
            if should_capitalize(terms, d, st.cumulative_net_interest):
                row, st.principal = capitalize(d, st.principal, st.cumulative_net_interest)
                st.cumulative_net_interest = ZERO
                st.rows.append(row)

        elif ev.kind == "closing":
            _book_period(st, terms, d, label="Closing interest accrual")

    # nothing to stub when interest is already booked through the as-of date
    if not timeline.is_closed and st.accrued_through < timeline.horizon_date:
        _book_period(
            st,
            terms,
            st.accrued_through + timedelta(days=STUB_DAYS),
            label="Closing stub accrual",
        )

    logger.debug("accrual produced %d row(s), closing principal %s", len(st.rows), st.principal)
    return st.rows
