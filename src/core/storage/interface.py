from abc import ABC, abstractmethod

from pydantic import BaseModel

from core.config import Config
from core.models import Document


class DocumentSnapshot(BaseModel):
    document: Document
    # None until the document has been written once
    version: str | None = None


class DocumentStore(ABC):
    """Holds the single calendar document.

    ``replace`` only succeeds when ``expected_version`` still matches the
    stored version, so two requests that read the same snapshot cannot both
    write it back.
    """

    @abstractmethod
    def read(self) -> DocumentSnapshot: ...

    @abstractmethod
    def replace(self, document: Document, expected_version: str | None) -> str: ...


class BlobStore(ABC):
    """Flat collection of uploaded photos keyed by generated file name."""

    @abstractmethod
    def put(self, key: str, data: bytes, content_type: str) -> str: ...

    @abstractmethod
    def get(self, key: str) -> tuple[bytes, str]: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...

    @abstractmethod
    def clear(self) -> int: ...

    @abstractmethod
    def key_for_url(self, url: str) -> str | None: ...


def get_document_store(config: Config) -> DocumentStore:
    if config.storage_backend == "s3":
        from core.clients import get_s3_client
        from core.storage.s3 import S3DocumentStore

        return S3DocumentStore(get_s3_client(), config.data_bucket, config.db_key)

    from pathlib import Path

    from core.storage.local import LocalDocumentStore

    return LocalDocumentStore(Path(config.data_dir) / config.db_key)


def get_blob_store(config: Config) -> BlobStore:
    if config.storage_backend == "s3":
        from core.clients import get_s3_client
        from core.storage.s3 import S3BlobStore

        public_url = config.uploads_public_url or (
            f"https://{config.uploads_bucket}.s3.{config.aws_region}.amazonaws.com"
        )
        return S3BlobStore(get_s3_client(), config.uploads_bucket, public_url)

    from pathlib import Path

    from core.storage.local import LocalBlobStore

    return LocalBlobStore(Path(config.upload_dir), f"{config.base_url}/uploads")
