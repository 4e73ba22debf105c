class LedgerError(Exception):
    """Base class for accrual engine failures."""


class InvalidTermsError(LedgerError, ValueError):
    """Account terms are malformed or out of range.

    Raised before any ledger row is produced. The message is a short
    snake_case code, e.g. ``tds_rate_out_of_range``.
    """


class EmptyTimelineError(LedgerError):
    """No transactions remain once the closing date filter is applied."""
