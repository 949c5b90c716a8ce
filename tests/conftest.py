"""Shared test fixtures for Camper Calendar."""

import base64
import json
import os
import sys
import uuid
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env file for test configuration
load_dotenv()

# Unset AWS_PROFILE for local testing (LocalStack/MinIO don't need it)
if "AWS_PROFILE" in os.environ:
    del os.environ["AWS_PROFILE"]

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


# Local storage fixtures
@pytest.fixture
def document_store(tmp_path):
    """Provide an empty file-backed document store (reads as the seed document)."""
    from core.storage import LocalDocumentStore

    return LocalDocumentStore(tmp_path / "data" / "db.json")


@pytest.fixture
def blob_store(tmp_path):
    """Provide a file-backed photo store under tmp_path/uploads."""
    from core.storage import LocalBlobStore

    return LocalBlobStore(tmp_path / "uploads", "http://localhost:3000/uploads")


@pytest.fixture
def make_upload():
    """Build an UploadedFile with recognisable bytes."""
    from core.models import UploadedFile

    def _make(filename="van.jpg", data=None, content_type="image/jpeg"):
        return UploadedFile(filename=filename, content_type=content_type, data=data or f"bytes-of-{filename}".encode())

    return _make


@pytest.fixture
def write_document(document_store):
    """Write a raw (possibly legacy) document straight to the store's file."""

    def _write(raw):
        path = document_store._path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(raw), encoding="utf-8")

    return _write


# API Gateway event fixtures
@pytest.fixture
def api_event():
    """Build an API Gateway REST proxy event."""

    def _event(method, path_params=None, query=None, body=None, headers=None, is_base64=False):
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
            headers = {"content-type": "application/json", **(headers or {})}
        elif isinstance(body, bytes):
            body = base64.b64encode(body).decode("ascii")
            is_base64 = True
        return {
            "httpMethod": method,
            "pathParameters": path_params,
            "queryStringParameters": query,
            "headers": headers or {},
            "body": body,
            "isBase64Encoded": is_base64,
        }

    return _event


@pytest.fixture
def multipart():
    """Encode form fields and files as a multipart/form-data body."""

    def _encode(fields=None, files=()):
        boundary = f"----camper{uuid.uuid4().hex}"
        parts = []
        for name, value in (fields or {}).items():
            parts.append(
                f'--{boundary}\r\nContent-Disposition: form-data; name="{name}"\r\n\r\n{value}\r\n'.encode()
            )
        for field, filename, content_type, data in files:
            parts.append(
                (
                    f"--{boundary}\r\n"
                    f'Content-Disposition: form-data; name="{field}"; filename="{filename}"\r\n'
                    f"Content-Type: {content_type}\r\n\r\n"
                ).encode()
                + data
                + b"\r\n"
            )
        parts.append(f"--{boundary}--\r\n".encode())
        return b"".join(parts), f"multipart/form-data; boundary={boundary}"

    return _encode


# S3 fixtures
@pytest.fixture
def s3_client():
    """Provide an S3 client against the local endpoint for integration tests."""
    import boto3

    from core.config import get_config

    config = get_config()
    return boto3.client(
        "s3",
        endpoint_url=config.s3_endpoint,
        region_name=config.aws_region,
        aws_access_key_id="dummy",
        aws_secret_access_key="dummy",
    )


@pytest.fixture
def s3_bucket(s3_client):
    """Provide a fresh bucket, emptied and removed afterwards."""
    from core.config import get_config

    name = f"camper-test-{uuid.uuid4().hex[:12]}"
    region = get_config().aws_region
    kwargs = {"Bucket": name}
    if region != "us-east-1":
        kwargs["CreateBucketConfiguration"] = {"LocationConstraint": region}
    s3_client.create_bucket(**kwargs)
    yield name

    # Cleanup: delete every object, then the bucket
    response = s3_client.list_objects_v2(Bucket=name)
    for item in response.get("Contents", []):
        s3_client.delete_object(Bucket=name, Key=item["Key"])
    s3_client.delete_bucket(Bucket=name)
