from __future__ import annotations

from datetime import date
from decimal import Decimal

from icl_ledger.schemas.account import AccountTerms
from icl_ledger.schemas.ledger import LedgerRow
from icl_ledger.utils.dates import is_quarter_end, quarter_label
from icl_ledger.utils.money import ZERO


def should_capitalize(terms: AccountTerms, event_date: date, cumulative_net_interest: Decimal) -> bool:
    if not terms.is_compound:
        return False
    if not is_quarter_end(event_date):
        return False
    if terms.start_date is not None and event_date < terms.start_date:
        return False
    return cumulative_net_interest > ZERO


def capitalize(
    event_date: date,
    principal: Decimal,
    cumulative_net_interest: Decimal,
) -> tuple[LedgerRow, Decimal]:
    """Fold accrued net interest into principal.

    Returns the capitalization row and the new principal; cumulative net
    interest is zero afterwards.
    """
    new_principal = principal + cumulative_net_interest
    row = LedgerRow(
        date=event_date,
        kind="capitalization",
        description=f"{quarter_label(event_date)} net interest capitalized",
        principal=new_principal,
        cumulative_net_interest=ZERO,
    )
    return row, new_principal
