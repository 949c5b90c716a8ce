"""POST /bookings/{id}/reactions and DELETE /bookings/{id}/reactions/{userId}."""

from typing import Any

from core.config import get_config
from core.errors import CamperCalendarError, ErrorCode
from core.http import http_handler, http_method, json_response, parse_body, path_param
from core.services.reactions import remove_reaction, set_reaction
from core.storage import get_document_store


@http_handler
def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    method = http_method(event)
    booking_id = path_param(event, "id") or ""
    store = get_document_store(get_config())

    if method == "POST":
        form = parse_body(event)
        booking = set_reaction(store, booking_id, form.get("userId"), form.get("emoji"))
        return json_response(200, booking.to_json())

    user_id = path_param(event, "userId")
    if method == "DELETE" and user_id:
        return json_response(200, remove_reaction(store, booking_id, user_id).to_json())

    raise CamperCalendarError(f"{method} not supported on reactions", code=ErrorCode.METHOD_NOT_ALLOWED)
