"""S3 storage: the calendar document and uploaded photos live in two buckets."""

import json
import logging
from typing import Any
from urllib.parse import urlparse

from botocore.exceptions import ClientError

from core.errors import CamperCalendarError, ConflictError, ErrorCode, NotFoundError, StorageError
from core.models import Document, seed_document
from core.storage.interface import BlobStore, DocumentSnapshot, DocumentStore

logger = logging.getLogger(__name__)

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}
_PRECONDITION_CODES = {"PreconditionFailed", "ConditionalRequestConflict", "412"}


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


class S3DocumentStore(DocumentStore):
    def __init__(self, s3_client: Any, bucket: str, key: str) -> None:
        self._client = s3_client
        self._bucket = bucket
        self._key = key

    def read(self) -> DocumentSnapshot:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=self._key)
        except ClientError as e:
            if _error_code(e) in _MISSING_KEY_CODES:
                logger.info("No document at s3://%s/%s, starting from seed data", self._bucket, self._key)
                return DocumentSnapshot(document=seed_document(), version=None)
            raise StorageError(f"Failed to read s3://{self._bucket}/{self._key}: {e}", code=ErrorCode.STORAGE_ERROR) from e

        raw = response["Body"].read()
        try:
            document = Document.model_validate(json.loads(raw))
        except (ValueError, CamperCalendarError) as e:
            raise StorageError(f"Corrupt document at s3://{self._bucket}/{self._key}: {e}", code=ErrorCode.STORAGE_ERROR) from e
        return DocumentSnapshot(document=document, version=response["ETag"])

    def replace(self, document: Document, expected_version: str | None) -> str:
        put_kwargs: dict[str, Any] = {
            "Bucket": self._bucket,
            "Key": self._key,
            "Body": json.dumps(document.to_json(), indent=2, ensure_ascii=False).encode("utf-8"),
            "ContentType": "application/json",
        }
        if expected_version is None:
            put_kwargs["IfNoneMatch"] = "*"
        else:
            put_kwargs["IfMatch"] = expected_version

        try:
            response = self._client.put_object(**put_kwargs)
        except ClientError as e:
            if _error_code(e) in _PRECONDITION_CODES:
                raise ConflictError(
                    f"s3://{self._bucket}/{self._key} changed since version {expected_version}",
                    code=ErrorCode.CONCURRENT_MODIFICATION,
                ) from e
            raise StorageError(f"Failed to write s3://{self._bucket}/{self._key}: {e}", code=ErrorCode.STORAGE_ERROR) from e
        return response["ETag"]


class S3BlobStore(BlobStore):
    def __init__(self, s3_client: Any, bucket: str, public_base_url: str) -> None:
        self._client = s3_client
        self._bucket = bucket
        self._public_base_url = public_base_url.rstrip("/")

    def put(self, key: str, data: bytes, content_type: str) -> str:
        try:
            self._client.put_object(Bucket=self._bucket, Key=key, Body=data, ContentType=content_type)
        except ClientError as e:
            raise StorageError(f"Failed to upload {key} to {self._bucket}: {e}", code=ErrorCode.STORAGE_ERROR) from e
        return f"{self._public_base_url}/{key}"

    def get(self, key: str) -> tuple[bytes, str]:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
        except ClientError as e:
            if _error_code(e) in _MISSING_KEY_CODES:
                raise NotFoundError(f"Upload {key} not found", code=ErrorCode.PHOTO_NOT_FOUND) from e
            raise StorageError(f"Failed to fetch {key} from {self._bucket}: {e}", code=ErrorCode.STORAGE_ERROR) from e
        return response["Body"].read(), response.get("ContentType", "application/octet-stream")

    def delete(self, key: str) -> None:
        try:
            self._client.delete_object(Bucket=self._bucket, Key=key)
        except ClientError as e:
            raise StorageError(f"Failed to delete {key} from {self._bucket}: {e}", code=ErrorCode.STORAGE_ERROR) from e

    def clear(self) -> int:
        removed = 0
        token = None

        while True:
            list_kwargs: dict[str, Any] = {"Bucket": self._bucket}
            if token:
                list_kwargs["ContinuationToken"] = token

            try:
                response = self._client.list_objects_v2(**list_kwargs)
                keys = [{"Key": item["Key"]} for item in response.get("Contents", [])]
                if keys:
                    self._client.delete_objects(Bucket=self._bucket, Delete={"Objects": keys, "Quiet": True})
            except ClientError as e:
                raise StorageError(f"Failed to clear {self._bucket}: {e}", code=ErrorCode.STORAGE_ERROR) from e
            removed += len(keys)

            token = response.get("NextContinuationToken")
            if not response.get("IsTruncated") or not token:
                break

        logger.info("Cleared %d uploads from %s", removed, self._bucket)
        return removed

    def key_for_url(self, url: str) -> str | None:
        key = urlparse(url).path.rsplit("/", 1)[-1]
        return key or None
