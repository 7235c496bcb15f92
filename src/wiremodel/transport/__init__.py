"""src/wiremodel/transport/__init__.py

Boundary adapters for Wiremodel.

This module turns a WSGI/CGI environ into a Request, and sends a Response to a
socket or a WSGI server.
"""

from .environ import EnvironOptions, HostPortSource, request_from_environ
from .listener import ListenerMask, LoggingListener, MessageListener
from .writer import ResponseWriter, wsgi_response

__all__ = [
    "EnvironOptions",
    "HostPortSource",
    "request_from_environ",
    "ResponseWriter",
    "wsgi_response",
    "MessageListener",
    "ListenerMask",
    "LoggingListener",
]
