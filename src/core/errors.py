"""
Custom exceptions and error handling for Camper Calendar.

Defines application-specific exceptions with error codes so that every
handler maps failures to the same HTTP status and French user-facing
message.

Usage:
    from core.errors import NotFoundError, ErrorCode

    raise NotFoundError(f"Booking {booking_id} not found", code=ErrorCode.BOOKING_NOT_FOUND)
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for client-facing error messages."""

    # Request validation errors
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_BOOKING_TYPE = "INVALID_BOOKING_TYPE"
    INVALID_DATE = "INVALID_DATE"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    MISSING_BOOKING_FIELDS = "MISSING_BOOKING_FIELDS"
    MISSING_REACTION_FIELDS = "MISSING_REACTION_FIELDS"
    MISSING_COMMENT_FIELDS = "MISSING_COMMENT_FIELDS"
    MISSING_REQUESTER = "MISSING_REQUESTER"
    TOO_MANY_PHOTOS = "TOO_MANY_PHOTOS"

    # Lookup errors
    USER_NOT_FOUND = "USER_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    PHOTO_NOT_FOUND = "PHOTO_NOT_FOUND"
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

    # Ownership errors
    NOT_BOOKING_OWNER = "NOT_BOOKING_OWNER"
    NOT_COMMENT_OWNER = "NOT_COMMENT_OWNER"
    RESET_DISABLED = "RESET_DISABLED"

    # Conflict errors
    DATES_ALREADY_BOOKED = "DATES_ALREADY_BOOKED"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"

    # System errors
    STORAGE_ERROR = "STORAGE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_REQUEST: "Requête invalide.",
    ErrorCode.INVALID_BOOKING_TYPE: "Type de réservation invalide.",
    ErrorCode.INVALID_DATE: "Date invalide.",
    ErrorCode.INVALID_DATE_RANGE: "Plage de dates invalide.",
    ErrorCode.MISSING_BOOKING_FIELDS: "La date de début et l'utilisateur sont obligatoires.",
    ErrorCode.MISSING_REACTION_FIELDS: "L'utilisateur et l'emoji sont obligatoires.",
    ErrorCode.MISSING_COMMENT_FIELDS: "L'utilisateur et le texte du commentaire sont obligatoires.",
    ErrorCode.MISSING_REQUESTER: "L'identifiant du demandeur est obligatoire.",
    ErrorCode.TOO_MANY_PHOTOS: "Trop de photos envoyées en une seule fois.",
    ErrorCode.USER_NOT_FOUND: "Utilisateur inconnu.",
    ErrorCode.BOOKING_NOT_FOUND: "Réservation introuvable.",
    ErrorCode.COMMENT_NOT_FOUND: "Commentaire introuvable.",
    ErrorCode.PHOTO_NOT_FOUND: "Photo introuvable.",
    ErrorCode.ROUTE_NOT_FOUND: "Ressource introuvable.",
    ErrorCode.METHOD_NOT_ALLOWED: "Méthode non autorisée.",
    ErrorCode.NOT_BOOKING_OWNER: "Vous ne pouvez modifier que vos propres réservations.",
    ErrorCode.NOT_COMMENT_OWNER: "Vous ne pouvez modifier que vos propres commentaires.",
    ErrorCode.RESET_DISABLED: "Réinitialisation désactivée en production.",
    ErrorCode.DATES_ALREADY_BOOKED: "Au moins une date du séjour est déjà réservée définitivement.",
    ErrorCode.CONCURRENT_MODIFICATION: "Les données ont été modifiées entre-temps. Veuillez réessayer.",
    ErrorCode.STORAGE_ERROR: "Le stockage est momentanément indisponible. Veuillez réessayer.",
    ErrorCode.INTERNAL_ERROR: "Une erreur inattendue est survenue. Veuillez réessayer.",
}

HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.INVALID_BOOKING_TYPE: 400,
    ErrorCode.INVALID_DATE: 400,
    ErrorCode.INVALID_DATE_RANGE: 400,
    ErrorCode.MISSING_BOOKING_FIELDS: 400,
    ErrorCode.MISSING_REACTION_FIELDS: 400,
    ErrorCode.MISSING_COMMENT_FIELDS: 400,
    ErrorCode.MISSING_REQUESTER: 400,
    ErrorCode.TOO_MANY_PHOTOS: 400,
    ErrorCode.USER_NOT_FOUND: 404,
    ErrorCode.BOOKING_NOT_FOUND: 404,
    ErrorCode.COMMENT_NOT_FOUND: 404,
    ErrorCode.PHOTO_NOT_FOUND: 404,
    ErrorCode.ROUTE_NOT_FOUND: 404,
    ErrorCode.METHOD_NOT_ALLOWED: 405,
    ErrorCode.NOT_BOOKING_OWNER: 403,
    ErrorCode.NOT_COMMENT_OWNER: 403,
    ErrorCode.RESET_DISABLED: 403,
    ErrorCode.DATES_ALREADY_BOOKED: 409,
    ErrorCode.CONCURRENT_MODIFICATION: 409,
    ErrorCode.STORAGE_ERROR: 500,
    ErrorCode.INTERNAL_ERROR: 500,
}


class CamperCalendarError(Exception):
    """Base exception for all Camper Calendar errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        self.message = message
        self.code = code
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.code, USER_MESSAGES[ErrorCode.INTERNAL_ERROR])

    @property
    def status_code(self) -> int:
        return HTTP_STATUS.get(self.code, 500)


class ValidationError(CamperCalendarError):
    """Request fields are missing or malformed."""

    pass


class NotFoundError(CamperCalendarError):
    """A user, booking, comment or photo does not exist."""

    pass


class PermissionDeniedError(CamperCalendarError):
    """The requester does not own the resource."""

    pass


class ConflictError(CamperCalendarError):
    """Definitive dates overlap, or the document changed under us."""

    pass


class StorageError(CamperCalendarError):
    """Document or blob storage failed."""

    pass
