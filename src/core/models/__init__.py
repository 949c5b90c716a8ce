"""
Pydantic models for Camper Calendar.
"""

from core.models.booking import Booking, BookingType, CamelModel, Comment, normalize_record
from core.models.document import SEED_USERS, Document, User, seed_document
from core.models.photo import PhotoItem, UploadedFile

__all__ = [
    "Booking",
    "BookingType",
    "CamelModel",
    "Comment",
    "Document",
    "PhotoItem",
    "SEED_USERS",
    "UploadedFile",
    "User",
    "normalize_record",
    "seed_document",
]
