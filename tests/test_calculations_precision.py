from datetime import date
from decimal import Decimal

import pytest

from icl_ledger.core.config import settings
from icl_ledger.schemas.account import AccountTerms
from icl_ledger.schemas.transaction import Transaction
from icl_ledger.services.accrual import accrue_interest
from icl_ledger.services.ledger import compute_ledger
from icl_ledger.utils.dates import days_in_year, is_leap


def _closed_terms(start: date, end: date, rate: str = "12", tds: str = "0") -> AccountTerms:
    return AccountTerms(
        start_date=start,
        end_date=end,
        annual_rate_percent=Decimal(rate),
        tds_rate_percent=Decimal(tds),
        interest_method="simple",
    )


def _closing_accrual(start: date, end: date, principal: str, **kw):
    rows = compute_ledger(
        _closed_terms(start, end, **kw),
        [Transaction(date=start, amount_paid=Decimal(principal))],
        as_of=end,
    ).rows
    accruals = [r for r in rows if r.kind == "interest_accrual"]
    assert len(accruals) == 1, f"Expected one closing accrual, got {accruals}"
    return accruals[0]


def test_thirty_days_in_non_leap_year():
    row = _closing_accrual(date(2023, 1, 1), date(2023, 1, 30), "100000")

    assert row.days_in_period == 30
    assert row.days_in_year == 365
    assert row.gross_interest == Decimal("986.30")


def test_thirty_days_in_leap_year():
    row = _closing_accrual(date(2024, 1, 1), date(2024, 1, 30), "100000")

    assert row.days_in_period == 30
    assert row.days_in_year == 366
    assert row.gross_interest == Decimal("983.61")


def test_dec_31_boundary_keeps_each_period_in_one_year():
    terms = AccountTerms(
        start_date=date(2023, 12, 1),
        annual_rate_percent=Decimal("12"),
        tds_rate_percent=Decimal("0"),
        interest_method="simple",
    )
    rows = compute_ledger(
        terms, [Transaction(date=date(2023, 12, 20), amount_paid=Decimal("100000"))], as_of=date(2024, 1, 10)
    ).rows

    year_end, stub = [r for r in rows if r.kind == "interest_accrual"]
    assert (year_end.date, year_end.days_in_period, year_end.days_in_year) == (date(2023, 12, 31), 12, 365)
    assert (stub.date, stub.days_in_period, stub.days_in_year) == (date(2024, 1, 1), 1, 366)


@pytest.mark.parametrize(
    "gross_principal, tds_rate",
    [
        ("100000", "10"),
        ("123456789.00", "7.5"),
        ("999.99", "33.333"),
        ("1", "10"),
    ],
)
def test_tds_split_adds_back_to_gross(gross_principal, tds_rate):
    gross, tds, net = accrue_interest(Decimal(gross_principal), Decimal("13.75"), Decimal(tds_rate), 91, 365)

    assert tds + net == gross
    expected_tds = gross * Decimal(tds_rate) / Decimal("100")
    assert abs(tds - expected_tds) <= Decimal("0.005"), f"TDS {tds} drifted from {expected_tds}"


def test_posted_amounts_are_rounded_half_up():
    gross, tds, net = accrue_interest(Decimal("100000"), Decimal("12"), Decimal("10"), 1, 365)

    # 32.8767 gross; TDS is taken on the posted 32.88
    assert gross == Decimal("32.88")
    assert tds == Decimal("3.29")
    assert net == Decimal("29.59")


def test_zero_rate_accrues_nothing():
    gross, tds, net = accrue_interest(Decimal("100000"), Decimal("0"), Decimal("10"), 365, 365)
    assert gross == tds == net == Decimal("0")


def test_money_places_follow_settings(monkeypatch):
    monkeypatch.setattr(settings, "money_places", 4)

    gross, _, _ = accrue_interest(Decimal("100000"), Decimal("12"), Decimal("0"), 30, 365)
    assert gross == Decimal("986.3014")


def test_cumulative_interest_is_sum_of_posted_net():
    terms = AccountTerms(
        start_date=date(2023, 1, 1),
        annual_rate_percent=Decimal("11.25"),
        tds_rate_percent=Decimal("10"),
        interest_method="simple",
    )
    txs = [
        Transaction(date=date(2023, 1, 1), amount_paid=Decimal("250000")),
        Transaction(date=date(2023, 2, 14), amount_repaid=Decimal("50000")),
        Transaction(date=date(2023, 8, 9), amount_paid=Decimal("75000.50")),
    ]
    rows = compute_ledger(terms, txs, as_of=date(2024, 3, 15)).rows

    running = Decimal("0")
    for r in rows:
        running += r.net_interest
        assert r.cumulative_net_interest == running


@pytest.mark.parametrize(
    "year, leap",
    [(2023, False), (2024, True), (1900, False), (2000, True), (2100, False)],
)
def test_gregorian_leap_rule(year, leap):
    assert is_leap(year) is leap
    assert days_in_year(year) == (366 if leap else 365)
