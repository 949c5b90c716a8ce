"""Comment routes.

  POST   /bookings/{id}/comments                 add (userId, text)
  PUT    /bookings/{id}/comments/{commentId}     edit (requesterUserId, text), author only
  DELETE /bookings/{id}/comments/{commentId}     delete (?requesterUserId=), author only
"""

from typing import Any

from core.config import get_config
from core.errors import CamperCalendarError, ErrorCode
from core.http import http_handler, http_method, json_response, parse_body, path_param, query_param
from core.services.comments import add_comment, delete_comment, edit_comment
from core.storage import get_document_store


@http_handler
def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    method = http_method(event)
    booking_id = path_param(event, "id") or ""
    comment_id = path_param(event, "commentId")
    store = get_document_store(get_config())

    if comment_id is None and method == "POST":
        form = parse_body(event)
        comment = add_comment(store, booking_id, form.get("userId"), form.get("text"))
        return json_response(201, comment.to_json())

    if comment_id is not None and method == "PUT":
        form = parse_body(event)
        comment = edit_comment(store, booking_id, comment_id, form.get("requesterUserId"), form.get("text"))
        return json_response(200, comment.to_json())

    if comment_id is not None and method == "DELETE":
        requester = query_param(event, "requesterUserId") or parse_body(event).get("requesterUserId")
        delete_comment(store, booking_id, comment_id, requester)
        return json_response(204)

    raise CamperCalendarError(f"{method} not supported on comments", code=ErrorCode.METHOD_NOT_ALLOWED)
