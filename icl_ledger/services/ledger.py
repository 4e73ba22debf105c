from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import localcontext
from typing import Iterable, Mapping

from pydantic import ValidationError

from icl_ledger.core.config import settings
from icl_ledger.core.errors import EmptyTimelineError, InvalidTermsError
from icl_ledger.schemas.account import AccountTerms
from icl_ledger.schemas.ledger import LedgerRow
from icl_ledger.schemas.transaction import Transaction
from icl_ledger.services.accrual import process
from icl_ledger.services.timeline import build_timeline
from icl_ledger.utils.money import HUNDRED, ZERO
from icl_ledger.utils.timezone import today_local

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerResult:
    rows: list[LedgerRow]
    as_of: date
    empty_timeline: EmptyTimelineError | None = None

    @property
    def is_empty_timeline(self) -> bool:
        return self.empty_timeline is not None


def coerce_terms(terms: AccountTerms | Mapping) -> AccountTerms:
    if isinstance(terms, AccountTerms):
        return terms
    try:
        return AccountTerms.model_validate(terms)
    except ValidationError as e:
        raise InvalidTermsError("terms_invalid") from e


def coerce_transactions(transactions: Iterable[Transaction | Mapping]) -> list[Transaction]:
    return [t if isinstance(t, Transaction) else Transaction.model_validate(t) for t in transactions]


def validate_terms(terms: AccountTerms) -> None:
    if terms.start_date is None:
        raise InvalidTermsError("start_date_required")
    if terms.end_date is not None and terms.end_date < terms.start_date:
        raise InvalidTermsError("end_date_before_start_date")
    if not terms.annual_rate_percent.is_finite() or terms.annual_rate_percent < ZERO:
        raise InvalidTermsError("annual_rate_negative")
    if not terms.tds_rate_percent.is_finite() or not (ZERO <= terms.tds_rate_percent <= HUNDRED):
        raise InvalidTermsError("tds_rate_out_of_range")


def compute_ledger(
    terms: AccountTerms | Mapping,
    transactions: Iterable[Transaction | Mapping],
    as_of: date | None = None,
) -> LedgerResult:
    """Produce the ledger for one account.

    ``as_of`` only matters for accounts without a closing date; when it is
    omitted the current local date is read here, once, before any
    calculation starts.

    Raises InvalidTermsError for bad terms. An account with no transactions
    in range yields an empty result with ``empty_timeline`` set.
    """
    terms = coerce_terms(terms)
    validate_terms(terms)
    txs = coerce_transactions(transactions)

    if as_of is None:
        as_of = today_local()

    with localcontext() as ctx:
        ctx.prec = int(settings.decimal_precision)
        try:
            timeline = build_timeline(terms, txs, as_of)
        except EmptyTimelineError as e:
            logger.info("no transactions in range for %s, ledger is empty", terms.name or "account")
            return LedgerResult(rows=[], as_of=as_of, empty_timeline=e)

        rows = process(terms, timeline)

    return LedgerResult(rows=rows, as_of=as_of)
