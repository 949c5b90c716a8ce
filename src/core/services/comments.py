"""Comments on bookings; only their author may edit or delete them."""

import logging
import uuid

from core.dates import utc_now_iso
from core.errors import ErrorCode, NotFoundError, PermissionDeniedError, ValidationError
from core.models import Booking, Comment, Document
from core.storage import DocumentStore

logger = logging.getLogger(__name__)


def _get_booking(document: Document, booking_id: str) -> Booking:
    booking = document.find_booking(booking_id)
    if booking is None:
        raise NotFoundError(f"Booking {booking_id} not found", code=ErrorCode.BOOKING_NOT_FOUND)
    return booking


def _get_own_comment(booking: Booking, comment_id: str, requester_user_id: str | None) -> Comment:
    if not requester_user_id:
        raise ValidationError("requesterUserId is required", code=ErrorCode.MISSING_REQUESTER)
    comment = booking.find_comment(comment_id)
    if comment is None:
        raise NotFoundError(f"Comment {comment_id} not found on {booking.id}", code=ErrorCode.COMMENT_NOT_FOUND)
    if comment.user_id != requester_user_id:
        raise PermissionDeniedError(
            f"{requester_user_id} is not the author of comment {comment_id}",
            code=ErrorCode.NOT_COMMENT_OWNER,
        )
    return comment


def add_comment(store: DocumentStore, booking_id: str, user_id: str | None, text: str | None) -> Comment:
    body = (text or "").strip()
    if not user_id or not body:
        raise ValidationError("userId and text are required", code=ErrorCode.MISSING_COMMENT_FIELDS)

    snapshot = store.read()
    booking = _get_booking(snapshot.document, booking_id)
    user = snapshot.document.find_user(user_id)
    if user is None:
        raise NotFoundError(f"Unknown user {user_id}", code=ErrorCode.USER_NOT_FOUND)

    comment = Comment(
        id=str(uuid.uuid4()),
        user_id=user.id,
        user_name=user.name,
        text=body,
        created_at=utc_now_iso(),
    )
    booking.comments.append(comment)
    store.replace(snapshot.document, snapshot.version)

    logger.info("Comment %s added to booking %s by %s", comment.id, booking_id, user_id)
    return comment


def edit_comment(
    store: DocumentStore,
    booking_id: str,
    comment_id: str,
    requester_user_id: str | None,
    text: str | None,
) -> Comment:
    body = (text or "").strip()
    if not body:
        raise ValidationError("text is required", code=ErrorCode.MISSING_COMMENT_FIELDS)

    snapshot = store.read()
    booking = _get_booking(snapshot.document, booking_id)
    comment = _get_own_comment(booking, comment_id, requester_user_id)

    comment.text = body
    comment.updated_at = utc_now_iso()
    store.replace(snapshot.document, snapshot.version)
    return comment


def delete_comment(store: DocumentStore, booking_id: str, comment_id: str, requester_user_id: str | None) -> None:
    snapshot = store.read()
    booking = _get_booking(snapshot.document, booking_id)
    comment = _get_own_comment(booking, comment_id, requester_user_id)

    booking.comments = [current for current in booking.comments if current.id != comment.id]
    store.replace(snapshot.document, snapshot.version)
    logger.info("Comment %s deleted from booking %s", comment_id, booking_id)
