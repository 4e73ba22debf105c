from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from icl_ledger.core.config import settings

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def money_quantum() -> Decimal:
    return Decimal(1).scaleb(-int(settings.money_places))


def d2(x: Decimal) -> Decimal:
    return x.quantize(money_quantum(), rounding=ROUND_HALF_UP)


def fmt_inr(x: Decimal) -> str:
    return f"₹{d2(x):,}"
