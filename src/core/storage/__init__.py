"""Storage abstraction: one JSON document plus a flat blob collection."""

from core.storage.interface import (
    BlobStore,
    DocumentSnapshot,
    DocumentStore,
    get_blob_store,
    get_document_store,
)
from core.storage.local import LocalBlobStore, LocalDocumentStore
from core.storage.s3 import S3BlobStore, S3DocumentStore

__all__ = [
    "BlobStore",
    "DocumentSnapshot",
    "DocumentStore",
    "LocalBlobStore",
    "LocalDocumentStore",
    "S3BlobStore",
    "S3DocumentStore",
    "get_blob_store",
    "get_document_store",
]
