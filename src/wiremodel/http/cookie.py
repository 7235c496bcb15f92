"""src/wiremodel/http/cookie.py

Immutable HTTP cookie, with Set-Cookie parsing and rendering.
"""

# pylint: disable=too-many-instance-attributes

import copy
import email.utils
import logging
import re
import time
import urllib.parse
from typing import Any, Optional

from wiremodel.exceptions import InvalidArgumentError

__all__ = ["Cookie"]

logger = logging.getLogger(__name__)

_ATTRIBUTE_SEPARATOR = re.compile(r";\s*")


def _parse_expires(value: str) -> Optional[int]:
    """Parse an Expires date (RFC 1123, RFC 850 or asctime) into a unix timestamp."""
    parsed = email.utils.parsedate_tz(value)
    if parsed is None:
        return None
    try:
        return int(email.utils.mktime_tz(parsed))
    except (OverflowError, ValueError):
        return None


class Cookie:
    """
    An HTTP cookie. This class is immutable.

    Attributes:
        name: The name of the cookie.
        value: The value of the cookie.
        expires: Unix timestamp at which the cookie expires, 0 for a session cookie.
        path: Path on which the cookie is valid, or None if not set.
        domain: Domain on which the cookie is valid, or None for a host-only cookie.
        secure: Whether the cookie should only be sent on a secure connection.
        http_only: Whether the cookie is hidden from non-HTTP APIs.
    """

    __slots__ = ("_name", "_value", "_expires", "_path", "_domain", "_secure", "_http_only")

    def __init__(self, name: str, value: str):
        self._name = name
        self._value = value
        self._expires = 0
        self._path: Optional[str] = None
        self._domain: Optional[str] = None
        self._secure = False
        self._http_only = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> str:
        return self._value

    @property
    def expires(self) -> int:
        return self._expires

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def domain(self) -> Optional[str]:
        return self._domain

    @property
    def secure(self) -> bool:
        return self._secure

    @property
    def http_only(self) -> bool:
        return self._http_only

    @classmethod
    def parse(cls, string: str) -> "Cookie":
        """
        Create a cookie from the contents of a Set-Cookie header.

        Attribute keywords are case-insensitive; name, value and path are not.
        An unparseable Expires date leaves the cookie as a session cookie.

        Raises:
            InvalidArgumentError: If the string does not start with a non-empty
                ``name=value`` pair.
        """
        parts = _ATTRIBUTE_SEPARATOR.split(string)
        name, sep, value = parts[0].partition("=")

        if not sep or not name or not value:
            raise InvalidArgumentError("The cookie string is not valid.")

        cookie = cls(name, urllib.parse.unquote(value))

        for part in parts[1:]:
            keyword = part.lower()

            if keyword == "secure":
                cookie._secure = True
            elif keyword == "httponly":
                cookie._http_only = True
            elif "=" in part:
                key, attribute = part.split("=", 1)
                key = key.lower()

                if key == "expires":
                    expires = _parse_expires(attribute)
                    if expires is None:
                        logger.debug("Ignoring invalid cookie expiry date %r", attribute)
                    else:
                        cookie._expires = expires
                elif key == "path":
                    cookie._path = attribute
                elif key == "domain":
                    domain = attribute.lower()
                    cookie._domain = domain[1:] if domain.startswith(".") else domain

        return cookie

    def _replace(self, attribute: str, value: Any) -> "Cookie":
        if getattr(self, attribute) == value:
            return self

        that = copy.copy(self)
        setattr(that, "_" + attribute, value)
        return that

    def with_expires(self, expires: int) -> "Cookie":
        """Copy with a new expiry timestamp, or 0 for a session cookie."""
        return self._replace("expires", expires)

    def with_path(self, path: Optional[str]) -> "Cookie":
        """Copy with a new path, or None to unset."""
        return self._replace("path", path)

    def with_domain(self, domain: Optional[str]) -> "Cookie":
        """Copy with a new domain, or None to unset."""
        return self._replace("domain", domain)

    def with_secure(self, secure: bool) -> "Cookie":
        return self._replace("secure", secure)

    def with_http_only(self, http_only: bool) -> "Cookie":
        return self._replace("http_only", http_only)

    def is_host_only(self) -> bool:
        return self.domain is None

    def is_expired(self) -> bool:
        return self.expires != 0 and self.expires < time.time()

    def is_persistent(self) -> bool:
        """Whether the cookie outlives the browser session."""
        return self.expires != 0

    def __str__(self) -> str:
        cookie = f"{self.name}={urllib.parse.quote(self.value, safe='')}"

        if self.expires != 0:
            cookie += "; Expires=" + email.utils.formatdate(self.expires, usegmt=True)

        if self.domain is not None:
            cookie += f"; Domain={self.domain}"

        if self.path is not None:
            cookie += f"; Path={self.path}"

        if self.secure:
            cookie += "; Secure"

        if self.http_only:
            cookie += "; HttpOnly"

        return cookie

    def __repr__(self) -> str:
        return f"Cookie({str(self)!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Cookie):
            return all(getattr(self, a) == getattr(other, a) for a in self.__slots__)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(getattr(self, a) for a in self.__slots__))
