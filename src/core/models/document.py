from typing import Any

from pydantic import model_validator

from core.models.booking import Booking, CamelModel, normalize_record


class User(CamelModel):
    id: str
    name: str


SEED_USERS = [
    User(id="mael", name="Maël/Salma"),
    User(id="ivan", name="Ivan/Isa"),
    User(id="lena", name="Lena/Lucas"),
]


class Document(CamelModel):
    """The whole calendar: users and bookings, read and replaced as one unit."""

    users: list[User] = []
    bookings: list[Booking] = []

    @model_validator(mode="before")
    @classmethod
    def normalize_bookings(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("bookings"), list):
            data = {
                **data,
                "bookings": [normalize_record(b) if isinstance(b, dict) else b for b in data["bookings"]],
            }
        return data

    @model_validator(mode="after")
    def resolve_user_names(self) -> "Document":
        names = {user.id: user.name for user in self.users}
        for booking in self.bookings:
            booking.user_name = names.get(booking.user_id, booking.user_name)
            for comment in booking.comments:
                comment.user_name = names.get(comment.user_id, comment.user_name)
        return self

    def find_user(self, user_id: str) -> User | None:
        return next((user for user in self.users if user.id == user_id), None)

    def find_booking(self, booking_id: str) -> Booking | None:
        return next((booking for booking in self.bookings if booking.id == booking_id), None)

    def replace_booking(self, booking: Booking) -> None:
        for index, current in enumerate(self.bookings):
            if current.id == booking.id:
                self.bookings[index] = booking
                return
        raise KeyError(booking.id)

    def remove_booking(self, booking_id: str) -> None:
        self.bookings = [booking for booking in self.bookings if booking.id != booking_id]


def seed_document() -> Document:
    return Document(users=[user.model_copy() for user in SEED_USERS], bookings=[])
