"""src/wiremodel/__init__.py

Wiremodel - Immutable HTTP messages for Python.

Wiremodel models HTTP requests and responses as immutable values, built on
Python's standard library only. Every ``with_*`` method returns a new message.

Key Features:
    - Zero external dependencies
    - Case-insensitive, multi-valued headers
    - Cookies, URLs and quality values parsed by their RFC grammars
    - Requests from a WSGI environ, responses to a socket or a WSGI server
    - Memory optimized with __slots__

Example:
    Building a request::

        from wiremodel import Request

        request = Request("GET", "https://example.com/search?q=wire")
        request = request.with_header("Accept", "text/html, */*;q=0.8")
        print(request.get_query("q"), request.get_accept())

    Parsing a response::

        from wiremodel import Response

        response = Response.parse(raw_bytes)
        for cookie in response.cookies:
            print(cookie.name, cookie.is_expired())
"""

from wiremodel.exceptions import HttpError, InvalidArgumentError, WiremodelError
from wiremodel.http.cookie import Cookie
from wiremodel.http.url import Url
from wiremodel.model.request import Request
from wiremodel.model.response import Response
from wiremodel.model.uploaded_file import UploadedFile
from wiremodel.version import __version__

__all__ = [
    "Request",
    "Response",
    "Cookie",
    "Url",
    "UploadedFile",
    "WiremodelError",
    "InvalidArgumentError",
    "HttpError",
]
