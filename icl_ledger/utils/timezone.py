from datetime import date, datetime
from zoneinfo import ZoneInfo

from icl_ledger.core.config import settings


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.timezone)


def now_local() -> datetime:
    return datetime.now(tz=local_tz())


def today_local() -> date:
    return now_local().date()
