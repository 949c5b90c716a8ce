from pydantic import BaseModel

from core.models.booking import BookingType, CamelModel


class PhotoItem(CamelModel):
    url: str
    start_date: str
    end_date: str
    user_name: str
    type: BookingType
    note: str
    booking_id: str


class UploadedFile(BaseModel):
    filename: str
    content_type: str
    data: bytes
