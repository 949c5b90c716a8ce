"""GET /photos (album) and GET /uploads/{key} (file serving for the local backend)."""

from typing import Any

from core.config import get_config
from core.errors import ErrorCode, NotFoundError
from core.http import binary_response, http_handler, json_response, path_param
from core.services.photos import list_photos
from core.storage import get_blob_store, get_document_store


@http_handler
def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    document = get_document_store(get_config()).read().document
    return json_response(200, [photo.to_json() for photo in list_photos(document)])


@http_handler
def upload_handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    key = path_param(event, "key")
    if not key:
        raise NotFoundError("Missing upload key", code=ErrorCode.PHOTO_NOT_FOUND)
    data, content_type = get_blob_store(get_config()).get(key)
    return binary_response(data, content_type)
