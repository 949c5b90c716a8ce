"""GET /users: the seeded group members."""

from typing import Any

from core.config import get_config
from core.http import http_handler, json_response
from core.services.bookings import list_users
from core.storage import get_document_store


@http_handler
def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    store = get_document_store(get_config())
    return json_response(200, [user.to_json() for user in list_users(store)])
