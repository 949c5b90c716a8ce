"""API Gateway proxy events in, proxy responses out.

Handlers stay thin: they pull fields out of the event with these helpers,
call a service and return ``json_response``. Errors are turned into
responses by ``http_handler`` so no handler builds an error body itself.
"""

import base64
import functools
import io
import json
import logging
import mimetypes
from collections.abc import Callable
from typing import Any
from urllib.parse import parse_qsl

from pydantic import BaseModel
from python_multipart.multipart import parse_form

from core.config import get_config
from core.errors import USER_MESSAGES, CamperCalendarError, ErrorCode, ValidationError
from core.models import UploadedFile

logger = logging.getLogger(__name__)

PHOTO_FIELDS = ("photos", "photos[]")

Handler = Callable[[dict[str, Any], Any], dict[str, Any]]


class FormData(BaseModel):
    fields: dict[str, str] = {}
    files: list[UploadedFile] = []

    def get(self, name: str) -> str | None:
        return self.fields.get(name)


def http_method(event: dict[str, Any]) -> str:
    method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method", "")
    return method.upper()


def path_param(event: dict[str, Any], name: str) -> str | None:
    return (event.get("pathParameters") or {}).get(name)


def query_param(event: dict[str, Any], name: str) -> str | None:
    return (event.get("queryStringParameters") or {}).get(name)


def header(event: dict[str, Any], name: str) -> str | None:
    wanted = name.lower()
    for key, value in (event.get("headers") or {}).items():
        if key.lower() == wanted:
            return value
    return None


def read_body(event: dict[str, Any]) -> bytes:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        return base64.b64decode(body)
    return body.encode("utf-8")


def parse_body(event: dict[str, Any]) -> FormData:
    """Read JSON, multipart or urlencoded bodies into the same shape."""
    raw = read_body(event)
    if not raw:
        return FormData()

    content_type = header(event, "Content-Type") or "application/json"
    if content_type.startswith("application/json"):
        return _parse_json(raw)
    if content_type.startswith("application/x-www-form-urlencoded"):
        return FormData(fields=dict(parse_qsl(raw.decode("utf-8"), keep_blank_values=True)))
    if content_type.startswith("multipart/form-data"):
        return _parse_form(raw, content_type)
    raise ValidationError(f"Unsupported content type {content_type}", code=ErrorCode.INVALID_REQUEST)


def _parse_json(raw: bytes) -> FormData:
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise ValidationError(f"Malformed JSON body: {e}", code=ErrorCode.INVALID_REQUEST) from e
    if not isinstance(payload, dict):
        raise ValidationError("JSON body must be an object", code=ErrorCode.INVALID_REQUEST)
    fields = {
        key: value if isinstance(value, str) else json.dumps(value)
        for key, value in payload.items()
        if value is not None
    }
    return FormData(fields=fields)


def _text(value: bytes | str | None) -> str:
    if value is None:
        return ""
    return value.decode("utf-8") if isinstance(value, bytes) else value


def _parse_form(raw: bytes, content_type: str) -> FormData:
    form = FormData()

    def on_field(field: Any) -> None:
        form.fields[_text(field.field_name)] = _text(field.value)

    def on_file(file: Any) -> None:
        if _text(file.field_name) not in PHOTO_FIELDS:
            return
        filename = _text(file.file_name)
        file.file_object.seek(0)
        data = file.file_object.read()
        if not filename and not data:
            return
        guessed, _ = mimetypes.guess_type(filename)
        form.files.append(
            UploadedFile(filename=filename, content_type=guessed or "application/octet-stream", data=data)
        )

    headers = {"Content-Type": content_type, "Content-Length": str(len(raw))}
    try:
        parse_form(headers, io.BytesIO(raw), on_field, on_file)
    except ValueError as e:
        raise ValidationError(f"Malformed form body: {e}", code=ErrorCode.INVALID_REQUEST) from e
    return form


def _cors_headers() -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": get_config().cors_origin,
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
    }


def json_response(status_code: int, body: Any = None) -> dict[str, Any]:
    if body is None:
        return {"statusCode": status_code, "headers": _cors_headers(), "body": ""}
    return {
        "statusCode": status_code,
        "headers": {**_cors_headers(), "Content-Type": "application/json"},
        "body": json.dumps(body, ensure_ascii=False),
    }


def binary_response(data: bytes, content_type: str) -> dict[str, Any]:
    return {
        "statusCode": 200,
        "headers": {**_cors_headers(), "Content-Type": content_type, "Cache-Control": "public, max-age=31536000"},
        "body": base64.b64encode(data).decode("ascii"),
        "isBase64Encoded": True,
    }


def error_response(error: CamperCalendarError) -> dict[str, Any]:
    return json_response(error.status_code, {"message": error.user_message, "code": error.code.value})


def http_handler(func: Handler) -> Handler:
    """Map domain errors to their status; anything else is logged and becomes a 500."""

    @functools.wraps(func)
    def wrapper(event: dict[str, Any], context: Any) -> dict[str, Any]:
        try:
            return func(event, context)
        except CamperCalendarError as e:
            if e.status_code >= 500:
                logger.exception("%s failed: %s", func.__module__, e.message)
            else:
                logger.info("%s rejected request: %s", func.__module__, e.message)
            return error_response(e)
        except Exception:
            logger.exception("Unhandled error in %s", func.__module__)
            return json_response(
                500,
                {"message": USER_MESSAGES[ErrorCode.INTERNAL_ERROR], "code": ErrorCode.INTERNAL_ERROR.value},
            )

    return wrapper
