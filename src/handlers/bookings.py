"""Booking routes.

  GET    /bookings?dateKey=     list, optionally only bookings covering a day
  POST   /bookings/{id}         create; the path segment is the booking type
  PUT    /bookings/{id}         edit dates, type, note and photos
  DELETE /bookings/{id}         delete with its photos (owner only)
"""

from typing import Any

from core.config import get_config
from core.errors import CamperCalendarError, ErrorCode
from core.http import http_handler, http_method, json_response, parse_body, path_param, query_param
from core.services import bookings
from core.storage import get_blob_store, get_document_store


@http_handler
def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    method = http_method(event)
    segment = path_param(event, "id")

    if segment is None:
        if method == "GET":
            return _list(event)
    elif method == "POST":
        return _create(event, segment)
    elif method == "PUT":
        return _update(event, segment)
    elif method == "DELETE":
        return _delete(event, segment)

    raise CamperCalendarError(f"{method} not supported on bookings", code=ErrorCode.METHOD_NOT_ALLOWED)


def _list(event: dict[str, Any]) -> dict[str, Any]:
    store = get_document_store(get_config())
    found = bookings.list_bookings(store, query_param(event, "dateKey"))
    return json_response(200, [booking.to_json() for booking in found])


def _create(event: dict[str, Any], booking_type: str) -> dict[str, Any]:
    config = get_config()
    form = parse_body(event)
    booking = bookings.create_booking(
        get_document_store(config),
        get_blob_store(config),
        booking_type=booking_type,
        user_id=form.get("userId"),
        start_date=form.get("startDate"),
        end_date=form.get("endDate"),
        date=form.get("date"),
        note=form.get("note"),
        photos=form.files,
        max_photos=config.max_photos_per_request,
    )
    return json_response(201, booking.to_json())


def _update(event: dict[str, Any], booking_id: str) -> dict[str, Any]:
    config = get_config()
    form = parse_body(event)
    booking = bookings.update_booking(
        get_document_store(config),
        get_blob_store(config),
        booking_id,
        start_date=form.get("startDate"),
        end_date=form.get("endDate"),
        note=form.get("note"),
        booking_type=form.get("type"),
        remove_photo_urls=bookings.parse_remove_photo_urls(form.get("removePhotoUrls")),
        photos=form.files,
        requester_user_id=form.get("requesterUserId"),
        max_photos=config.max_photos_per_request,
    )
    return json_response(200, booking.to_json())


def _delete(event: dict[str, Any], booking_id: str) -> dict[str, Any]:
    requester = query_param(event, "requesterUserId") or parse_body(event).get("requesterUserId")
    config = get_config()
    bookings.delete_booking(get_document_store(config), get_blob_store(config), booking_id, requester)
    return json_response(204)
