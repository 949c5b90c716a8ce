"""GET /holidays?year=: French public holidays for the calendar grid."""

from datetime import date
from typing import Any

from core.errors import ErrorCode, ValidationError
from core.holidays import french_holidays
from core.http import http_handler, json_response, query_param


@http_handler
def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    raw_year = query_param(event, "year")
    try:
        year = int(raw_year) if raw_year else date.today().year
    except ValueError as e:
        raise ValidationError(f"Invalid year {raw_year!r}", code=ErrorCode.INVALID_REQUEST) from e
    if not 1583 <= year <= 9999:
        raise ValidationError(f"Year {year} outside the Gregorian range", code=ErrorCode.INVALID_REQUEST)

    return json_response(200, [{"date": key, "name": name} for key, name in french_holidays(year).items()])
