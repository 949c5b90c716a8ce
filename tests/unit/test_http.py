"""Unit tests for event parsing, responses and error mapping."""

import base64
import json
import logging

import pytest

from core.config import _reset_config
from core.errors import ConflictError, ErrorCode, NotFoundError, StorageError, ValidationError
from core.http import (
    binary_response,
    header,
    http_handler,
    http_method,
    json_response,
    parse_body,
    path_param,
    query_param,
)


@pytest.fixture(autouse=True)
def _clear_config_cache():
    _reset_config()
    yield
    _reset_config()


# --- event helpers ---


def test_http_method_rest_and_http_api():
    assert http_method({"httpMethod": "post"}) == "POST"
    assert http_method({"requestContext": {"http": {"method": "DELETE"}}}) == "DELETE"


def test_params_tolerate_missing_maps():
    event = {"pathParameters": None, "queryStringParameters": None}
    assert path_param(event, "id") is None
    assert query_param(event, "dateKey") is None


def test_header_is_case_insensitive():
    assert header({"headers": {"content-type": "text/plain"}}, "Content-Type") == "text/plain"
    assert header({"headers": None}, "Content-Type") is None


# --- parse_body ---


def test_parse_json_body(api_event):
    form = parse_body(api_event("POST", body={"userId": "mael", "startDate": "2024-06-01", "removePhotoUrls": ["a"], "note": None}))
    assert form.get("userId") == "mael"
    assert json.loads(form.get("removePhotoUrls")) == ["a"]
    assert form.get("note") is None
    assert form.files == []


def test_parse_empty_body(api_event):
    assert parse_body(api_event("DELETE")).fields == {}


@pytest.mark.parametrize("body", ["{broken", "[1, 2]"])
def test_parse_bad_json_rejected(api_event, body):
    with pytest.raises(ValidationError) as exc:
        parse_body(api_event("POST", body=body, headers={"Content-Type": "application/json"}))
    assert exc.value.code == ErrorCode.INVALID_REQUEST


def test_parse_multipart_body(api_event, multipart):
    body, content_type = multipart(
        {"userId": "mael", "startDate": "2024-06-01", "note": "Étretat"},
        [
            ("photos", "plage.jpg", "image/jpeg", b"\xff\xd8jpeg"),
            ("photos[]", "van.png", "image/png", b"\x89PNG"),
            ("avatar", "me.jpg", "image/jpeg", b"ignored"),
        ],
    )
    form = parse_body(api_event("POST", body=body, headers={"Content-Type": content_type}))

    assert form.get("userId") == "mael"
    assert form.get("note") == "Étretat"
    assert [upload.filename for upload in form.files] == ["plage.jpg", "van.png"]
    assert form.files[0].data == b"\xff\xd8jpeg"
    assert form.files[1].content_type == "image/png"


def test_parse_urlencoded_body(api_event):
    event = api_event(
        "POST",
        body="userId=ivan&emoji=%F0%9F%8E%89",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    form = parse_body(event)
    assert form.get("userId") == "ivan"
    assert form.get("emoji") == "🎉"


def test_parse_unsupported_content_type(api_event):
    with pytest.raises(ValidationError):
        parse_body(api_event("POST", body="hello", headers={"Content-Type": "text/plain"}))


# --- responses ---


def test_json_response_has_cors_and_utf8():
    response = json_response(200, {"message": "Réservé"})
    assert response["headers"]["Access-Control-Allow-Origin"] == "*"
    assert response["headers"]["Content-Type"] == "application/json"
    assert response["body"] == '{"message": "Réservé"}'


def test_empty_json_response():
    response = json_response(204)
    assert response["statusCode"] == 204
    assert response["body"] == ""


def test_binary_response():
    response = binary_response(b"png", "image/png")
    assert response["isBase64Encoded"] is True
    assert base64.b64decode(response["body"]) == b"png"
    assert response["headers"]["Content-Type"] == "image/png"


# --- http_handler ---


@pytest.mark.parametrize(
    "error,status",
    [
        (ValidationError("bad", code=ErrorCode.INVALID_DATE_RANGE), 400),
        (NotFoundError("gone", code=ErrorCode.BOOKING_NOT_FOUND), 404),
        (ConflictError("taken", code=ErrorCode.DATES_ALREADY_BOOKED), 409),
        (StorageError("disk", code=ErrorCode.STORAGE_ERROR), 500),
    ],
)
def test_http_handler_maps_domain_errors(error, status):
    @http_handler
    def failing(event, context):
        raise error

    response = failing({}, None)

    assert response["statusCode"] == status
    body = json.loads(response["body"])
    assert body == {"message": error.user_message, "code": error.code.value}


def test_http_handler_hides_unexpected_errors(caplog):
    @http_handler
    def failing(event, context):
        raise RuntimeError("secret detail")

    with caplog.at_level(logging.ERROR):
        response = failing({}, None)

    assert response["statusCode"] == 500
    body = json.loads(response["body"])
    assert body["code"] == "INTERNAL_ERROR"
    assert "secret" not in body["message"]
    assert "Unhandled error" in caplog.text


def test_http_handler_passes_through_success():
    @http_handler
    def ok(event, context):
        return json_response(200, {"ok": True})

    assert ok({}, None)["statusCode"] == 200
