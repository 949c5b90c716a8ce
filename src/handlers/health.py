"""GET /health"""

from typing import Any

from core.http import json_response


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    return json_response(200, {"ok": True})
