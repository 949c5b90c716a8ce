import pytest
from pydantic import ValidationError

from core.models import Booking, BookingType, Comment, Document, normalize_record, seed_document

VALID_BOOKING = dict(
    id="b-1",
    start_date="2024-06-01",
    end_date="2024-06-02",
    date_keys=["2024-06-01", "2024-06-02"],
    user_id="mael",
    user_name="Maël/Salma",
    type=BookingType.DEFINITIVE,
    created_at="2024-05-01T10:00:00.000Z",
)

STORED_BOOKING = {
    "id": "b-1",
    "startDate": "2024-06-01",
    "endDate": "2024-06-02",
    "dateKeys": ["2024-06-01", "2024-06-02"],
    "userId": "mael",
    "userName": "Maël/Salma",
    "type": "definitive",
    "note": "Bretagne",
    "photoUrls": [],
    "createdAt": "2024-05-01T10:00:00.000Z",
    "reactions": {"ivan": "🎉"},
    "comments": [],
}


# --- Booking ---


def test_booking_valid():
    booking = Booking(**VALID_BOOKING)
    assert booking.is_definitive
    assert booking.note == ""
    assert booking.reactions == {}


def test_booking_dumps_camel_case():
    dumped = Booking(**VALID_BOOKING).to_json()
    assert dumped["startDate"] == "2024-06-01"
    assert dumped["dateKeys"] == ["2024-06-01", "2024-06-02"]
    assert dumped["type"] == "definitive"
    assert "weekendKey" not in dumped


def test_booking_accepts_camel_case():
    booking = Booking.model_validate(STORED_BOOKING)
    assert booking.user_id == "mael"
    assert booking.reactions == {"ivan": "🎉"}


def test_booking_date_keys_must_span_range():
    with pytest.raises(ValidationError):
        Booking(**{**VALID_BOOKING, "date_keys": ["2024-06-01"]})


def test_booking_empty_date_keys_rejected():
    with pytest.raises(ValidationError):
        Booking(**{**VALID_BOOKING, "end_date": "2024-05-30", "date_keys": []})


def test_booking_unknown_type_rejected():
    with pytest.raises(ValidationError):
        Booking(**{**VALID_BOOKING, "type": "maybe"})


def test_comment_updated_at_omitted_until_set():
    comment = Comment(id="c-1", user_id="ivan", user_name="Ivan/Isa", text="Top", created_at="2024-05-01T10:00:00.000Z")
    assert "updatedAt" not in comment.to_json()


# --- normalize_record ---


def test_normalize_legacy_weekend_key():
    record = normalize_record({"id": "old", "weekendKey": "2023-07-15", "type": "tentative", "createdAt": "2023-07-01T08:00:00Z"})
    assert record["startDate"] == record["endDate"] == "2023-07-15"
    assert record["dateKeys"] == ["2023-07-15"]
    assert record["type"] == "provisional"
    assert record["reactions"] == {}
    assert record["comments"] == []
    assert record["photoUrls"] == []
    assert record["note"] == ""


def test_normalize_legacy_created_at_only():
    record = normalize_record({"id": "old", "type": "definitive", "createdAt": "2023-08-05T21:15:00.000Z"})
    assert record["dateKeys"] == ["2023-08-05"]
    assert record["weekendKey"] == "2023-08-05"


def test_normalize_recomputes_stale_date_keys():
    record = normalize_record({**STORED_BOOKING, "endDate": "2024-06-04"})
    assert record["dateKeys"] == ["2024-06-01", "2024-06-02", "2024-06-03", "2024-06-04"]


def test_normalize_derives_range_from_date_keys():
    record = normalize_record({**STORED_BOOKING, "startDate": None, "endDate": None, "dateKeys": ["2024-06-03", "2024-06-02"]})
    assert (record["startDate"], record["endDate"]) == ("2024-06-02", "2024-06-03")


def test_normalize_emoji_keyed_reactions():
    record = normalize_record({**STORED_BOOKING, "reactions": {"👍": ["ivan", "lena"], "❤️": ["mael"]}})
    assert record["reactions"] == {"ivan": "👍", "lena": "👍", "mael": "❤️"}


def test_normalize_leaves_input_untouched():
    legacy = {"id": "old", "weekendKey": "2023-07-15", "type": "tentative", "createdAt": "2023-07-01T08:00:00Z"}
    normalize_record(legacy)
    assert "dateKeys" not in legacy


# --- Document ---


def test_document_normalizes_every_booking():
    document = Document.model_validate(
        {
            "users": [{"id": "mael", "name": "Maël/Salma"}],
            "bookings": [
                STORED_BOOKING,
                {"id": "old", "weekendKey": "2023-07-15", "userId": "mael", "userName": "Maël", "type": "tentative", "createdAt": "2023-07-01T08:00:00Z"},
            ],
        }
    )
    legacy = document.find_booking("old")
    assert legacy is not None
    assert legacy.type == BookingType.PROVISIONAL
    assert legacy.date_keys == ["2023-07-15"]


def test_document_resolves_user_names():
    document = Document.model_validate(
        {
            "users": [{"id": "mael", "name": "Maël & Salma"}],
            "bookings": [{**STORED_BOOKING, "comments": [{"id": "c-1", "userId": "mael", "userName": "Maël", "text": "Hi", "createdAt": "2024-05-01T10:00:00.000Z"}]}],
        }
    )
    booking = document.bookings[0]
    assert booking.user_name == "Maël & Salma"
    assert booking.comments[0].user_name == "Maël & Salma"


def test_document_keeps_snapshot_name_for_unknown_user():
    document = Document.model_validate({"users": [], "bookings": [STORED_BOOKING]})
    assert document.bookings[0].user_name == "Maël/Salma"


def test_document_replace_and_remove_booking():
    document = Document.model_validate({"users": [], "bookings": [STORED_BOOKING]})
    updated = document.bookings[0].model_copy(update={"note": "Normandie"})
    document.replace_booking(updated)
    assert document.find_booking("b-1").note == "Normandie"

    document.remove_booking("b-1")
    assert document.bookings == []


def test_document_replace_unknown_booking_raises():
    document = Document()
    with pytest.raises(KeyError):
        document.replace_booking(Booking(**VALID_BOOKING))


def test_seed_document():
    document = seed_document()
    assert [user.id for user in document.users] == ["mael", "ivan", "lena"]
    assert document.bookings == []
