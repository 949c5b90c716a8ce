"""Date keys: the UTC calendar day is the unit of booking occupancy."""

from datetime import date, datetime, timedelta, timezone

from core.errors import ErrorCode, ValidationError


def to_date_key(value: str) -> str:
    """Canonicalize an ISO date or datetime string to ``yyyy-mm-dd`` in UTC.

    Aware datetimes are shifted to UTC before the date is taken; naive ones
    are assumed to already be UTC.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except (AttributeError, ValueError) as e:
        raise ValidationError(f"Invalid date: {value!r}", code=ErrorCode.INVALID_DATE) from e

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date().isoformat()


def date_keys_between(start: str, end: str) -> list[str]:
    """Every date key from ``start`` to ``end`` inclusive, ascending.

    Returns an empty list when ``end`` precedes ``start``; callers must treat
    that as an invalid range rather than a zero-day booking.
    """
    first = date.fromisoformat(to_date_key(start))
    last = date.fromisoformat(to_date_key(end))
    if last < first:
        return []
    return [(first + timedelta(days=offset)).isoformat() for offset in range((last - first).days + 1)]


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
