import pytest

from core.dates import date_keys_between
from core.errors import ConflictError, ErrorCode
from core.models import Booking, BookingType
from core.services.availability import ensure_available, find_conflicts


def _booking(booking_id, start, end, booking_type):
    keys = date_keys_between(start, end)
    return Booking(
        id=booking_id,
        start_date=start,
        end_date=end,
        date_keys=keys,
        user_id="mael",
        user_name="Maël/Salma",
        type=booking_type,
        created_at="2024-05-01T10:00:00.000Z",
    )


@pytest.fixture
def existing():
    return [
        _booking("a", "2024-06-01", "2024-06-02", BookingType.DEFINITIVE),
        _booking("p", "2024-06-10", "2024-06-12", BookingType.PROVISIONAL),
    ]


def test_definitive_overlap_detected(existing):
    conflicts = find_conflicts(existing, date_keys_between("2024-06-02", "2024-06-03"), BookingType.DEFINITIVE)
    assert [booking.id for booking in conflicts] == ["a"]


def test_adjacent_ranges_do_not_conflict(existing):
    assert find_conflicts(existing, date_keys_between("2024-06-03", "2024-06-05"), BookingType.DEFINITIVE) == []


def test_provisional_candidate_never_conflicts(existing):
    assert find_conflicts(existing, date_keys_between("2024-06-01", "2024-06-02"), BookingType.PROVISIONAL) == []


def test_provisional_bookings_never_block(existing):
    assert find_conflicts(existing, date_keys_between("2024-06-10", "2024-06-12"), BookingType.DEFINITIVE) == []


def test_edited_booking_excluded(existing):
    keys = date_keys_between("2024-06-01", "2024-06-04")
    assert find_conflicts(existing, keys, BookingType.DEFINITIVE, exclude_id="a") == []


def test_ensure_available_raises_conflict(existing):
    with pytest.raises(ConflictError) as exc:
        ensure_available(existing, date_keys_between("2024-05-30", "2024-06-01"), BookingType.DEFINITIVE)
    assert exc.value.code == ErrorCode.DATES_ALREADY_BOOKED
    assert exc.value.status_code == 409


def test_ensure_available_passes(existing):
    ensure_available(existing, date_keys_between("2024-07-01", "2024-07-02"), BookingType.DEFINITIVE)
