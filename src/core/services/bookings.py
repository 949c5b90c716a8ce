"""Booking lifecycle: list, create, update, delete and the development reset.

Every operation reads the whole document, works on the snapshot and writes
it back with the version it read. A concurrent writer makes the write fail
with a conflict instead of silently losing one of the two updates.
"""

import json
import logging
import uuid
from collections.abc import Sequence
from typing import Any

from core.dates import date_keys_between, to_date_key, utc_now_iso
from core.errors import (
    ErrorCode,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from core.models import Booking, BookingType, UploadedFile, User
from core.services.availability import ensure_available
from core.services.photos import check_photo_count, delete_photos, store_photos
from core.storage import BlobStore, DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_PHOTOS = 10


def parse_booking_type(value: str | None) -> BookingType:
    try:
        return BookingType(value)
    except ValueError as e:
        raise ValidationError(f"Invalid booking type {value!r}", code=ErrorCode.INVALID_BOOKING_TYPE) from e


def parse_remove_photo_urls(raw: str | None) -> list[str]:
    """Decode the ``removePhotoUrls`` form field, a JSON array of URLs."""
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except ValueError as e:
        raise ValidationError(f"removePhotoUrls is not JSON: {e}", code=ErrorCode.INVALID_REQUEST) from e
    if not isinstance(parsed, list):
        raise ValidationError("removePhotoUrls must be a JSON array", code=ErrorCode.INVALID_REQUEST)
    return [item for item in parsed if isinstance(item, str)]


def _require_keys(start: str, end: str) -> list[str]:
    keys = date_keys_between(start, end)
    if not keys:
        raise ValidationError(f"End date {end} precedes start date {start}", code=ErrorCode.INVALID_DATE_RANGE)
    return keys


def list_users(store: DocumentStore) -> list[User]:
    return store.read().document.users


def list_bookings(store: DocumentStore, date_key: str | None = None) -> list[Booking]:
    bookings = store.read().document.bookings
    if not date_key:
        return bookings
    key = to_date_key(date_key)
    return [booking for booking in bookings if key in booking.date_keys]


def create_booking(
    store: DocumentStore,
    blobs: BlobStore,
    booking_type: str | None,
    user_id: str | None,
    start_date: str | None = None,
    end_date: str | None = None,
    note: str | None = None,
    photos: Sequence[UploadedFile] = (),
    date: str | None = None,
    max_photos: int = DEFAULT_MAX_PHOTOS,
) -> Booking:
    kind = parse_booking_type(booking_type)
    start = start_date or date
    end = end_date or start
    if not start or not end or not user_id:
        raise ValidationError("startDate (or date) and userId are required", code=ErrorCode.MISSING_BOOKING_FIELDS)
    check_photo_count(list(photos), max_photos)

    snapshot = store.read()
    document = snapshot.document
    user = document.find_user(user_id)
    if user is None:
        raise NotFoundError(f"Unknown user {user_id}", code=ErrorCode.USER_NOT_FOUND)

    date_keys = _require_keys(start, end)
    ensure_available(document.bookings, date_keys, kind)

    photo_urls = store_photos(blobs, photos)
    booking = Booking(
        id=str(uuid.uuid4()),
        start_date=date_keys[0],
        end_date=date_keys[-1],
        date_keys=date_keys,
        weekend_key=date_keys[0],
        user_id=user.id,
        user_name=user.name,
        type=kind,
        note=note or "",
        photo_urls=photo_urls,
        created_at=utc_now_iso(),
    )
    document.bookings.append(booking)

    try:
        store.replace(document, snapshot.version)
    except Exception:
        delete_photos(blobs, photo_urls)
        raise

    logger.info("Created %s booking %s for %s (%s..%s)", kind.value, booking.id, user.id, booking.start_date, booking.end_date)
    return booking


def update_booking(
    store: DocumentStore,
    blobs: BlobStore,
    booking_id: str,
    start_date: str | None = None,
    end_date: str | None = None,
    note: str | None = None,
    booking_type: str | None = None,
    remove_photo_urls: Sequence[str] = (),
    photos: Sequence[UploadedFile] = (),
    requester_user_id: str | None = None,
    max_photos: int = DEFAULT_MAX_PHOTOS,
) -> Booking:
    """Apply an edit, keeping reactions and comments as they are.

    Removals only touch photos attached to this booking. Removed blobs are
    deleted once the new document is stored; newly uploaded ones are deleted
    again if storing fails.
    """
    check_photo_count(list(photos), max_photos)

    snapshot = store.read()
    document = snapshot.document
    current = document.find_booking(booking_id)
    if current is None:
        raise NotFoundError(f"Booking {booking_id} not found", code=ErrorCode.BOOKING_NOT_FOUND)
    if requester_user_id and requester_user_id != current.user_id:
        raise PermissionDeniedError(
            f"{requester_user_id} cannot edit booking {booking_id} owned by {current.user_id}",
            code=ErrorCode.NOT_BOOKING_OWNER,
        )

    kind = parse_booking_type(booking_type) if booking_type else current.type
    date_keys = _require_keys(start_date or current.start_date, end_date or current.end_date)
    ensure_available(document.bookings, date_keys, kind, exclude_id=booking_id)

    to_remove = set(remove_photo_urls)
    removed = [url for url in current.photo_urls if url in to_remove]
    kept = [url for url in current.photo_urls if url not in removed]
    ignored = to_remove.difference(current.photo_urls)
    if ignored:
        logger.info("Ignoring %d removePhotoUrls not attached to booking %s: %s", len(ignored), booking_id, sorted(ignored))
    added = store_photos(blobs, photos)

    changes: dict[str, Any] = {
        "type": kind,
        "note": current.note if note is None else note,
        "start_date": date_keys[0],
        "end_date": date_keys[-1],
        "date_keys": date_keys,
        "weekend_key": date_keys[0],
        "photo_urls": kept + added,
    }
    updated = current.model_copy(update=changes)
    document.replace_booking(updated)

    try:
        store.replace(document, snapshot.version)
    except Exception:
        delete_photos(blobs, added)
        raise

    delete_photos(blobs, removed)
    logger.info(
        "Updated booking %s (%s..%s, %d photos removed, %d added)",
        booking_id,
        updated.start_date,
        updated.end_date,
        len(removed),
        len(added),
    )
    return updated


def delete_booking(store: DocumentStore, blobs: BlobStore, booking_id: str, requester_user_id: str | None) -> None:
    if not requester_user_id:
        raise ValidationError("requesterUserId is required", code=ErrorCode.MISSING_REQUESTER)

    snapshot = store.read()
    document = snapshot.document
    booking = document.find_booking(booking_id)
    if booking is None:
        raise NotFoundError(f"Booking {booking_id} not found", code=ErrorCode.BOOKING_NOT_FOUND)
    if booking.user_id != requester_user_id:
        raise PermissionDeniedError(
            f"{requester_user_id} cannot delete booking {booking_id} owned by {booking.user_id}",
            code=ErrorCode.NOT_BOOKING_OWNER,
        )

    document.remove_booking(booking_id)
    store.replace(document, snapshot.version)
    delete_photos(blobs, booking.photo_urls)
    logger.info("Deleted booking %s and %d photos", booking_id, len(booking.photo_urls))


def reset(store: DocumentStore, blobs: BlobStore, production: bool) -> dict[str, Any]:
    """Wipe every booking and upload. Refused in production."""
    if production:
        raise PermissionDeniedError("Reset requested in production", code=ErrorCode.RESET_DISABLED)

    snapshot = store.read()
    removed_bookings = len(snapshot.document.bookings)
    snapshot.document.bookings = []
    store.replace(snapshot.document, snapshot.version)
    removed_files = blobs.clear()

    logger.info("Reset removed %d bookings and %d files", removed_bookings, removed_files)
    return {"ok": True, "removedBookings": removed_bookings, "removedFiles": removed_files}
