from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return current UTC time as an aware datetime.

    Withdrawal dates are TIMESTAMP WITH TIME ZONE, so tzinfo is kept.
    """
    return datetime.now(UTC)
