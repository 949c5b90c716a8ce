"""Photo attachments: upload, best-effort removal and the album listing."""

import logging
import time
import uuid
from collections.abc import Iterable
from pathlib import PurePosixPath

from core.errors import ErrorCode, StorageError, ValidationError
from core.models import Document, PhotoItem, UploadedFile
from core.storage import BlobStore

logger = logging.getLogger(__name__)


def photo_key(filename: str) -> str:
    extension = PurePosixPath(filename.replace("\\", "/")).suffix.lower()
    return f"{int(time.time() * 1000)}-{uuid.uuid4()}{extension}"


def check_photo_count(files: list[UploadedFile], limit: int) -> None:
    if len(files) > limit:
        raise ValidationError(f"{len(files)} photos sent, limit is {limit}", code=ErrorCode.TOO_MANY_PHOTOS)


def store_photos(blobs: BlobStore, files: Iterable[UploadedFile]) -> list[str]:
    urls: list[str] = []
    try:
        for upload in files:
            urls.append(blobs.put(photo_key(upload.filename), upload.data, upload.content_type))
    except StorageError:
        delete_photos(blobs, urls)
        raise
    return urls


def delete_photos(blobs: BlobStore, urls: Iterable[str]) -> int:
    """Delete the blobs behind ``urls``; failures are logged and skipped, never retried."""
    removed = 0
    for url in urls:
        key = blobs.key_for_url(url)
        if key is None:
            logger.warning("Not an upload URL, skipping delete: %s", url)
            continue
        try:
            blobs.delete(key)
            removed += 1
        except StorageError:
            logger.exception("Failed to delete photo %s", key)
    return removed


def list_photos(document: Document) -> list[PhotoItem]:
    return [
        PhotoItem(
            url=url,
            start_date=booking.start_date,
            end_date=booking.end_date,
            user_name=booking.user_name,
            type=booking.type,
            note=booking.note,
            booking_id=booking.id,
        )
        for booking in document.bookings
        for url in booking.photo_urls
    ]
