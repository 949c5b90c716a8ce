"""Definitive bookings are exclusive per date key; provisional ones never block."""

from collections.abc import Iterable

from core.errors import ConflictError, ErrorCode
from core.models import Booking, BookingType


def find_conflicts(
    bookings: Iterable[Booking],
    date_keys: list[str],
    booking_type: BookingType,
    exclude_id: str | None = None,
) -> list[Booking]:
    if booking_type != BookingType.DEFINITIVE:
        return []

    wanted = set(date_keys)
    return [
        booking
        for booking in bookings
        if booking.id != exclude_id and booking.is_definitive and wanted.intersection(booking.date_keys)
    ]


def ensure_available(
    bookings: Iterable[Booking],
    date_keys: list[str],
    booking_type: BookingType,
    exclude_id: str | None = None,
) -> None:
    conflicts = find_conflicts(bookings, date_keys, booking_type, exclude_id)
    if conflicts:
        raise ConflictError(
            f"Dates {date_keys[0]}..{date_keys[-1]} overlap definitive booking(s) "
            + ", ".join(booking.id for booking in conflicts),
            code=ErrorCode.DATES_ALREADY_BOOKED,
        )
