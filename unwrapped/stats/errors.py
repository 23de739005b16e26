class StatsError(Exception):
    """Base exception for statistics derivation errors."""


class EmptyInputError(StatsError):
    """Raised when a statistic needs at least one daily record and got none."""


class MalformedRecordError(StatsError):
    """Raised at the ingestion boundary for unparsable or out-of-range values."""
