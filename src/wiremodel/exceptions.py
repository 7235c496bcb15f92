"""src/wiremodel/exceptions.py

Wiremodel Exceptions hierarchy.
"""

import copy
from typing import Dict, Iterable, Optional


class WiremodelError(Exception):
    """Base exception for all Wiremodel errors."""


class InvalidArgumentError(WiremodelError, ValueError):
    """
    A value passed to a constructor or a ``with_*`` method is not acceptable.

    Raised synchronously by the call that received the bad value; never retried.
    """


class ProtocolError(WiremodelError):
    """
    Errors related to HTTP protocol (parsing, violations).
    """


class InvalidResponseError(ProtocolError):
    """Raw response text could not be understood."""


class NetworkError(WiremodelError):
    """Socket-level failure while transmitting a message."""


class UploadError(WiremodelError):
    """An uploaded file could not be persisted."""


class HttpError(WiremodelError):
    """
    An error that maps directly onto an HTTP response.

    Carries the status code and the response headers (e.g. ``Location``,
    ``WWW-Authenticate``, ``Allow``) the response should be sent with.

    Attributes:
        status_code: HTTP status code of the response.
        message: Human readable description, may be empty.
    """

    def __init__(
        self,
        status_code: int,
        headers: Optional[Dict[str, str]] = None,
        message: str = "",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self._headers: Dict[str, str] = dict(headers or {})

    @property
    def headers(self) -> Dict[str, str]:
        """Headers to send along with the response (a copy)."""
        return dict(self._headers)

    def with_header(self, name: str, value: str) -> "HttpError":
        """Return a copy of this error with an extra response header."""
        that = copy.copy(self)
        that._headers = dict(self._headers)
        that._headers[name] = value
        return that


class HttpBadRequestError(HttpError):
    """400 Bad Request."""

    def __init__(self, message: str = ""):
        super().__init__(400, message=message)


class HttpUnauthorizedError(HttpError):
    """
    401 Unauthorized.

    The challenge is sent in the ``WWW-Authenticate`` header.
    """

    def __init__(self, www_authenticate: str, message: str = ""):
        super().__init__(401, {"WWW-Authenticate": www_authenticate}, message)


class HttpForbiddenError(HttpError):
    """403 Forbidden."""

    def __init__(self, message: str = ""):
        super().__init__(403, message=message)


class HttpNotFoundError(HttpError):
    """404 Not Found."""

    def __init__(self, message: str = ""):
        super().__init__(404, message=message)


class HttpMethodNotAllowedError(HttpError):
    """405 Method Not Allowed, listing the allowed methods in ``Allow``."""

    def __init__(self, allowed_methods: Iterable[str], message: str = ""):
        super().__init__(405, {"Allow": ", ".join(allowed_methods)}, message)


class HttpInternalServerError(HttpError):
    """500 Internal Server Error."""

    def __init__(self, message: str = ""):
        super().__init__(500, message=message)


class HttpServiceUnavailableError(HttpError):
    """503 Service Unavailable."""

    def __init__(self, message: str = ""):
        super().__init__(503, message=message)


class HttpRedirectError(HttpError):
    """
    3xx redirect to ``location``.

    Raises:
        InvalidArgumentError: If the status code is not a redirection code.
    """

    def __init__(self, location: str, status_code: int = 302, message: str = ""):
        if status_code < 300 or status_code >= 400:
            raise InvalidArgumentError(
                f"Invalid HTTP redirect status code: {status_code}"
            )
        super().__init__(status_code, {"Location": location}, message)
