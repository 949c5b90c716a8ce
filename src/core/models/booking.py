from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from core.dates import date_keys_between, to_date_key

LEGACY_TYPE_LABELS = {"tentative": "provisional"}


class CamelModel(BaseModel):
    """Stored and served as camelCase JSON, used as snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class BookingType(str, Enum):
    PROVISIONAL = "provisional"
    DEFINITIVE = "definitive"


class Comment(CamelModel):
    id: str
    user_id: str
    user_name: str
    text: str
    created_at: str
    updated_at: str | None = None


class Booking(CamelModel):
    id: str
    start_date: str
    end_date: str
    date_keys: list[str] = Field(..., min_length=1)
    user_id: str
    user_name: str
    type: BookingType
    note: str = ""
    photo_urls: list[str] = []
    created_at: str
    # userId -> emoji, one reaction per user
    reactions: dict[str, str] = {}
    comments: list[Comment] = []
    weekend_key: str | None = None

    @model_validator(mode="after")
    def date_keys_span_range(self) -> "Booking":
        if self.date_keys != date_keys_between(self.start_date, self.end_date):
            raise ValueError("date_keys must cover start_date..end_date exactly")
        return self

    @property
    def is_definitive(self) -> bool:
        return self.type == BookingType.DEFINITIVE

    def find_comment(self, comment_id: str) -> Comment | None:
        return next((comment for comment in self.comments if comment.id == comment_id), None)


def normalize_record(record: dict[str, Any]) -> dict[str, Any]:
    """Bring a stored booking record to the current shape.

    Older records only carry a single ``weekendKey`` (or nothing but
    ``createdAt``), use the ``tentative`` label, or store reactions as
    ``emoji -> [userId]``.
    """
    normalized = dict(record)

    start, end = normalized.get("startDate"), normalized.get("endDate")
    stored_keys = normalized.get("dateKeys")
    if start and end:
        keys = date_keys_between(start, end)
    elif isinstance(stored_keys, list) and stored_keys:
        keys = sorted(to_date_key(key) for key in stored_keys)
        keys = date_keys_between(keys[0], keys[-1])
    else:
        legacy_key = normalized.get("weekendKey") or str(normalized.get("createdAt", ""))[:10]
        keys = [to_date_key(legacy_key)]
        normalized.setdefault("weekendKey", keys[0])

    if keys:
        normalized["startDate"], normalized["endDate"] = keys[0], keys[-1]
    normalized["dateKeys"] = keys

    booking_type = normalized.get("type")
    normalized["type"] = LEGACY_TYPE_LABELS.get(booking_type, booking_type)

    if normalized.get("note") is None:
        normalized["note"] = ""
    normalized["photoUrls"] = list(normalized.get("photoUrls") or [])
    normalized["reactions"] = _normalize_reactions(normalized.get("reactions") or {})
    normalized["comments"] = list(normalized.get("comments") or [])
    return normalized


def _normalize_reactions(reactions: dict[str, Any]) -> dict[str, str]:
    by_user: dict[str, str] = {}
    for key, value in reactions.items():
        if isinstance(value, list):
            # emoji -> [userId]
            for user_id in value:
                by_user[str(user_id)] = key
        else:
            by_user[key] = str(value)
    return by_user
