from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Literal

from icl_ledger.core.errors import EmptyTimelineError
from icl_ledger.schemas.account import AccountTerms
from icl_ledger.schemas.transaction import Transaction
from icl_ledger.utils.dates import iter_quarter_ends

logger = logging.getLogger(__name__)

EventKind = Literal["transaction", "boundary", "closing"]

# same-date processing order
_KIND_ORDER: dict[str, int] = {"transaction": 0, "boundary": 1, "closing": 2}


@dataclass(frozen=True)
class TimelineEvent:
    date: date
    kind: EventKind

    @property
    def sort_key(self) -> tuple[date, int]:
        return (self.date, _KIND_ORDER[self.kind])


@dataclass
class Timeline:
    events: list[TimelineEvent]
    transactions_by_date: dict[date, list[Transaction]]
    horizon_date: date
    is_closed: bool = False
    excluded: list[Transaction] = field(default_factory=list)

    @property
    def first_event_date(self) -> date:
        return self.events[0].date


def group_by_date(txs: Iterable[Transaction]) -> dict[date, list[Transaction]]:
    out: dict[date, list[Transaction]] = {}
    for t in txs:
        out.setdefault(t.date, []).append(t)
    return out


def build_timeline(terms: AccountTerms, transactions: Iterable[Transaction], as_of: date) -> Timeline:
    """Merge transaction dates with quarter ends into one ordered event list.

    Transactions after ``terms.end_date`` are dropped; those before
    ``terms.start_date`` stay in, they may be an earlier disbursement.
    The horizon is the closing date when one is set, otherwise ``as_of``,
    and a closing event is added only for an explicit closing date.

    Raises EmptyTimelineError when no transaction survives the filter.
    """
    kept: list[Transaction] = []
    excluded: list[Transaction] = []
    for t in transactions:
        if terms.end_date is not None and t.date > terms.end_date:
            excluded.append(t)
        else:
            kept.append(t)

    if excluded:
        logger.debug("excluded %d transaction(s) after closing date %s", len(excluded), terms.end_date)

    if not kept:
        raise EmptyTimelineError("no_transactions_in_range")

    # stable: same-date transactions keep caller order
    kept.sort(key=lambda t: t.date)
    by_date = group_by_date(kept)

    first = kept[0].date
    horizon = terms.end_date if terms.end_date is not None else as_of

    seen: set[tuple[date, str]] = set()
    events: list[TimelineEvent] = []

    def _add(d: date, kind: EventKind) -> None:
        if (d, kind) in seen:
            return
        seen.add((d, kind))
        events.append(TimelineEvent(date=d, kind=kind))

    for d in by_date:
        _add(d, "transaction")
    for q in iter_quarter_ends(first, horizon):
        _add(q, "boundary")
    if terms.end_date is not None:
        _add(horizon, "closing")

    events.sort(key=lambda e: e.sort_key)

    logger.debug(
        "timeline built: %d event(s) from %s to horizon %s", len(events), events[0].date, horizon
    )

    return Timeline(
        events=events,
        transactions_by_date=by_date,
        horizon_date=horizon,
        is_closed=terms.end_date is not None,
        excluded=excluded,
    )
