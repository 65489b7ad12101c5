"""Host entrypoint.

The hosting runtime passes each decoded request object to `handler` and sends back the returned
dict. Transport and deployment belong to the host.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from src.app import App, create_app
from src.config.logging import configure_logging
from src.config.settings import load_settings
from src.skill.handlers import generic_error_response
from src.skill.schema import InvalidRequestError, request_from_obj

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_app() -> App:
    """Build the application once per process."""

    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info("skill ready default_language=%s", settings.default_language)
    return create_app(settings)


def handler(event: Any, _context: Any = None) -> dict[str, Any]:
    """Handle one decoded request object and return the response as a plain dict.

    Every event gets exactly one spoken reply: an object that is not a valid skill request is
    logged and answered with the generic apology.
    """

    try:
        request = request_from_obj(event)
    except InvalidRequestError as exc:
        logger.info("invalid request reason=%s", exc)
        return generic_error_response().model_dump()

    response = get_app().skill.invoke(request)
    return response.model_dump()
