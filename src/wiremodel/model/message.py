"""src/wiremodel/model/message.py

Base class shared by Request and Response.

A message owns its headers and its body. Every ``with_*`` method works on a
private copy of both, so a message is never changed once it has been handed
out.
"""

import abc
import copy
from typing import Dict, List, Mapping, Optional, TypeVar

from wiremodel.http.body import MessageBody
from wiremodel.http.headers import Headers, HeaderValue
from wiremodel.http.http11 import CRLF

__all__ = ["Message"]

M = TypeVar("M", bound="Message")


class Message(abc.ABC):
    """
    An immutable HTTP message: protocol version, headers and optional body.

    ``Content-Length`` and ``Transfer-Encoding`` follow the body set with
    :meth:`with_body`, and are never both present after it.
    """

    __slots__ = ("_protocol_version", "_headers", "_body")

    def __init__(self) -> None:
        self._protocol_version = "1.0"
        self._headers = Headers()
        self._body: Optional[MessageBody] = None

    def _clone(self: M) -> M:
        """Shallow copy with its own headers and body."""
        that = copy.copy(self)
        that._headers = self._headers.copy()
        if self._body is not None:
            that._body = self._body.copy()
        return that

    def _set_body(self, body: Optional[MessageBody]) -> None:
        self._body = body

        if body is None:
            self._headers.remove("Content-Length")
            self._headers.remove("Transfer-Encoding")
            return

        size = body.size()

        if size is None:
            self._headers.remove("Content-Length")
            self._headers.set("Transfer-Encoding", "chunked")
        else:
            self._headers.remove("Transfer-Encoding")
            self._headers.set("Content-Length", str(size))

    @property
    def protocol_version(self) -> str:
        """HTTP version without the ``HTTP/`` prefix, e.g. ``1.1``."""
        return self._protocol_version

    def with_protocol_version(self: M, version: str) -> M:
        if version == self._protocol_version:
            return self
        that = self._clone()
        that._protocol_version = version
        return that

    @property
    def headers(self) -> Dict[str, List[str]]:
        """All headers, keyed by Title-Case name, in insertion order."""
        return self._headers.presentation()

    def has_header(self, name: str) -> bool:
        return name in self._headers

    def get_header(self, name: str) -> str:
        """Values of a header joined with ``, ``; empty string if absent."""
        return self._headers.get(name, "")

    def get_header_as_list(self, name: str) -> List[str]:
        return self._headers.get_all(name)

    def get_first_header(self, name: str) -> Optional[str]:
        return self._headers.first(name)

    def get_last_header(self, name: str) -> Optional[str]:
        return self._headers.last(name)

    def with_header(self: M, name: str, value: HeaderValue) -> M:
        """
        Return a copy with the header replaced.

        Args:
            name: Header name (case-insensitive).
            value: A value or a list of values. Non-string values are
                converted with ``str()``.
        """
        that = self._clone()
        that._headers.set(name, value)
        return that

    def with_headers(self: M, headers: Mapping[str, HeaderValue]) -> M:
        that = self._clone()
        for name, value in headers.items():
            that._headers.set(name, value)
        return that

    def with_added_header(self: M, name: str, value: HeaderValue) -> M:
        """Return a copy with values appended to the header, creating it if absent."""
        that = self._clone()
        that._headers.add(name, value)
        return that

    def with_added_headers(self: M, headers: Mapping[str, HeaderValue]) -> M:
        that = self._clone()
        for name, value in headers.items():
            that._headers.add(name, value)
        return that

    def without_header(self: M, name: str) -> M:
        if name not in self._headers:
            return self
        that = self._clone()
        that._headers.remove(name)
        return that

    @property
    def body(self) -> Optional[MessageBody]:
        return self._body

    def with_body(self: M, body: Optional[MessageBody]) -> M:
        """
        Return a copy with a new body.

        A body of known size sets ``Content-Length``, a body of unknown size
        sets ``Transfer-Encoding: chunked``, None removes both.
        """
        that = self._clone()
        that._set_body(body)
        return that

    @property
    def content_length(self) -> int:
        """Content-Length as an int, 0 if absent or not a plain digit string."""
        value = self.get_header("Content-Length")
        if value.isascii() and value.isdigit():
            return int(value)
        return 0

    def is_content_type(self, content_type: str) -> bool:
        """
        Compare the media type of ``Content-Type``, parameters excluded.

        Example:
            ``text/html; charset=utf-8`` is ``text/html``.
        """
        media_type = self.get_header("Content-Type").split(";", 1)[0]
        return media_type.lower() == content_type.lower()

    @property
    @abc.abstractmethod
    def start_line(self) -> str:
        """Request line or status line, without CRLF."""

    @property
    def head(self) -> str:
        """Start line and headers, terminated by an empty line."""
        lines = [self.start_line]
        lines.extend(self._headers.lines())
        return CRLF.join(lines) + CRLF + CRLF

    def __bytes__(self) -> bytes:
        head = self.head.encode("utf-8")
        if self._body is None:
            return head
        return head + bytes(self._body.copy())

    def __str__(self) -> str:
        if self._body is None:
            return self.head
        return self.head + str(self._body.copy())
