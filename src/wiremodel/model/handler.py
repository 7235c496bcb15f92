"""src/wiremodel/model/handler.py

Request handler protocol.
"""

import logging
from typing import Protocol

from wiremodel.exceptions import HttpError
from wiremodel.model.request import Request
from wiremodel.model.response import Response, response_from_error

__all__ = ["RequestHandler", "handle_request"]

logger = logging.getLogger(__name__)


class RequestHandler(Protocol):
    """Anything that turns a request into a response."""

    def handle(self, request: Request) -> Response:
        """
        Handle a request.

        Raises:
            HttpError: To answer with an error response.
        """


def handle_request(handler: RequestHandler, request: Request) -> Response:
    """
    Run a handler, converting a raised HttpError into its response.

    Other exceptions propagate.
    """
    try:
        return handler.handle(request)
    except HttpError as e:
        logger.info(
            "%s %s failed with %d %s",
            request.method,
            request.request_uri,
            e.status_code,
            e.message,
        )
        return response_from_error(e)
