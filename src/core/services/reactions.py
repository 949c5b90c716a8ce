"""Emoji reactions. Each user holds at most one reaction per booking."""

import logging

from core.errors import ErrorCode, NotFoundError, ValidationError
from core.models import Booking, Document
from core.storage import DocumentStore

logger = logging.getLogger(__name__)


def _get_booking(document: Document, booking_id: str) -> Booking:
    booking = document.find_booking(booking_id)
    if booking is None:
        raise NotFoundError(f"Booking {booking_id} not found", code=ErrorCode.BOOKING_NOT_FOUND)
    return booking


def set_reaction(store: DocumentStore, booking_id: str, user_id: str | None, emoji: str | None) -> Booking:
    """Set the user's reaction. Sending the emoji they already chose clears it."""
    if not user_id or not emoji:
        raise ValidationError("userId and emoji are required", code=ErrorCode.MISSING_REACTION_FIELDS)

    snapshot = store.read()
    booking = _get_booking(snapshot.document, booking_id)
    if snapshot.document.find_user(user_id) is None:
        raise NotFoundError(f"Unknown user {user_id}", code=ErrorCode.USER_NOT_FOUND)

    if booking.reactions.get(user_id) == emoji:
        del booking.reactions[user_id]
    else:
        booking.reactions[user_id] = emoji

    store.replace(snapshot.document, snapshot.version)
    logger.info("Reaction of %s on booking %s is now %s", user_id, booking_id, booking.reactions.get(user_id))
    return booking


def remove_reaction(store: DocumentStore, booking_id: str, user_id: str) -> Booking:
    snapshot = store.read()
    booking = _get_booking(snapshot.document, booking_id)

    if booking.reactions.pop(user_id, None) is not None:
        store.replace(snapshot.document, snapshot.version)
        logger.info("Removed reaction of %s on booking %s", user_id, booking_id)
    return booking
