"""src/wiremodel/model/__init__.py

Immutable request and response values.
"""

from .cookie_origin import CookieOrigin
from .handler import RequestHandler, handle_request
from .message import Message
from .request import Request
from .response import Response, response_from_error
from .uploaded_file import UploadedFile, UploadStatus, file_tree_from_fields

__all__ = [
    "Message",
    "Request",
    "Response",
    "UploadedFile",
    "UploadStatus",
    "file_tree_from_fields",
    "CookieOrigin",
    "RequestHandler",
    "handle_request",
    "response_from_error",
]
