"""Filesystem storage for local development: JSON file plus an uploads directory."""

import fcntl
import hashlib
import json
import logging
import mimetypes
import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from core.errors import CamperCalendarError, ConflictError, ErrorCode, NotFoundError, StorageError
from core.models import Document, seed_document
from core.storage.interface import BlobStore, DocumentSnapshot, DocumentStore

logger = logging.getLogger(__name__)


def _fingerprint(raw: bytes) -> str:
    return hashlib.sha256(raw).hexdigest()


class LocalDocumentStore(DocumentStore):
    """JSON file store; writers are serialized through ``flock`` on a sidecar ``.lock`` file."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock_path = path.with_suffix(path.suffix + ".lock")

    def _read_raw(self) -> bytes | None:
        try:
            return self._path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}", code=ErrorCode.STORAGE_ERROR) from e

    def read(self) -> DocumentSnapshot:
        raw = self._read_raw()
        if raw is None:
            return DocumentSnapshot(document=seed_document(), version=None)
        try:
            document = Document.model_validate(json.loads(raw))
        except (ValueError, CamperCalendarError) as e:
            raise StorageError(f"Corrupt document at {self._path}: {e}", code=ErrorCode.STORAGE_ERROR) from e
        return DocumentSnapshot(document=document, version=_fingerprint(raw))

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            lock_file = open(self._lock_path, "a")
        except OSError as e:
            raise StorageError(f"Failed to lock {self._path}: {e}", code=ErrorCode.STORAGE_ERROR) from e
        with lock_file:
            fcntl.flock(lock_file, fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(lock_file, fcntl.LOCK_UN)

    def replace(self, document: Document, expected_version: str | None) -> str:
        payload = json.dumps(document.to_json(), indent=2, ensure_ascii=False).encode("utf-8")
        with self._exclusive():
            raw = self._read_raw()
            current = _fingerprint(raw) if raw is not None else None
            if current != expected_version:
                raise ConflictError(
                    f"{self._path} changed since it was read (expected {expected_version}, found {current})",
                    code=ErrorCode.CONCURRENT_MODIFICATION,
                )
            tmp_name = None
            try:
                with tempfile.NamedTemporaryFile(
                    dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp", delete=False
                ) as tmp:
                    tmp_name = tmp.name
                    tmp.write(payload)
                os.replace(tmp_name, self._path)
            except OSError as e:
                if tmp_name is not None:
                    Path(tmp_name).unlink(missing_ok=True)
                raise StorageError(f"Failed to write {self._path}: {e}", code=ErrorCode.STORAGE_ERROR) from e
        return _fingerprint(payload)


class LocalBlobStore(BlobStore):
    def __init__(self, directory: Path, public_base_url: str) -> None:
        self._directory = directory
        self._public_base_url = public_base_url.rstrip("/")

    @staticmethod
    def _is_safe_key(key: str) -> bool:
        return bool(key) and "/" not in key and "\\" not in key and key not in (".", "..")

    def _path_for(self, key: str) -> Path:
        if not self._is_safe_key(key):
            raise NotFoundError(f"Invalid upload key {key!r}", code=ErrorCode.PHOTO_NOT_FOUND)
        return self._directory / key

    def put(self, key: str, data: bytes, content_type: str) -> str:
        path = self._path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Failed to store upload {key}: {e}", code=ErrorCode.STORAGE_ERROR) from e
        return f"{self._public_base_url}/{key}"

    def get(self, key: str) -> tuple[bytes, str]:
        path = self._path_for(key)
        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            raise NotFoundError(f"Upload {key} not found", code=ErrorCode.PHOTO_NOT_FOUND) from e
        content_type, _ = mimetypes.guess_type(key)
        return data, content_type or "application/octet-stream"

    def delete(self, key: str) -> None:
        try:
            self._path_for(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete upload {key}: {e}", code=ErrorCode.STORAGE_ERROR) from e

    def clear(self) -> int:
        if not self._directory.exists():
            return 0
        removed = 0
        for entry in self._directory.iterdir():
            if entry.is_dir():
                shutil.rmtree(entry)
                continue
            entry.unlink()
            removed += 1
        logger.info("Cleared %d uploads from %s", removed, self._directory)
        return removed

    def key_for_url(self, url: str) -> str | None:
        marker = "/uploads/"
        index = url.rfind(marker)
        if index == -1:
            return None
        key = url[index + len(marker) :]
        return key if self._is_safe_key(key) else None
