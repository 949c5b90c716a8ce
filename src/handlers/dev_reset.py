"""POST /dev/reset: wipe bookings and uploads outside production."""

import logging
from typing import Any

from core.config import get_config
from core.http import http_handler, json_response
from core.services.bookings import reset
from core.storage import get_blob_store, get_document_store

logger = logging.getLogger(__name__)


@http_handler
def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    config = get_config()
    result = reset(get_document_store(config), get_blob_store(config), production=config.is_production)
    logger.warning("Development reset executed in %s environment", config.environment)
    return json_response(200, result)
