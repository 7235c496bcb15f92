"""src/wiremodel/http/url.py

Absolute http(s) URL parsing and normalization for Wiremodel.

The URL is normalized on construction:

- the scheme and host name are lowercased;
- an explicit standard port is dropped from the string form;
- a missing path becomes ``/``;
- empty query and fragment separators are dropped.
"""

import urllib.parse
from typing import Any

from wiremodel.exceptions import InvalidArgumentError
from wiremodel.http.path import Path

__all__ = ["Url", "standard_port", "is_host"]


def standard_port(secure: bool) -> int:
    """443 for https, 80 for http."""
    return 443 if secure else 80


def is_host(this_host: str, that_host: str, include_sub_domains: bool = False) -> bool:
    """
    Compare host names case-insensitively.

    With ``include_sub_domains``, ``this_host`` also matches when its labels end
    with the labels of ``that_host``: ``en.example.com`` is on ``example.com``,
    ``anexample.com`` is not.
    """
    this_host = this_host.lower()
    that_host = that_host.lower()

    if not include_sub_domains:
        return this_host == that_host

    this_labels = this_host.split(".")
    that_labels = that_host.split(".")

    return this_labels[-len(that_labels) :] == that_labels


class Url:
    """
    An http(s) URL.

    Attributes:
        scheme: ``http`` or ``https``.
        host: Lowercased host name.
        port: Explicit port, or the scheme's standard port.
        path: URL path, ``/`` if absent.
        query: Query string without ``?``, may be empty.
        fragment: Fragment without ``#``, may be empty.
    """

    __slots__ = ("_url", "scheme", "host", "port", "path", "query", "fragment")

    def __init__(self, url: str):
        try:
            parsed = urllib.parse.urlsplit(url)
            port = parsed.port
        except ValueError as exc:
            raise InvalidArgumentError("URL is malformed.") from exc

        if not parsed.scheme:
            raise InvalidArgumentError("URL must contain a scheme, http or https.")

        if not parsed.hostname:
            raise InvalidArgumentError("URL must contain a host name.")

        self.scheme: str = parsed.scheme.lower()
        self.host: str = parsed.hostname.lower()

        if self.scheme not in ("http", "https"):
            raise InvalidArgumentError("URL scheme must be http or https.")

        self.port: int = port if port is not None else standard_port(self.is_secure())
        self.path: Path = Path(parsed.path or "/")
        self.query: str = parsed.query
        self.fragment: str = parsed.fragment

        rendered = f"{self.scheme}://{self.host}"

        if not self.is_standard_port():
            rendered += f":{self.port}"

        rendered += str(self.path)

        if self.query:
            rendered += f"?{self.query}"

        if self.fragment:
            rendered += f"#{self.fragment}"

        self._url = rendered

    def is_host(self, host: str, include_sub_domains: bool = False) -> bool:
        """Whether the host is ``host``, or optionally one of its sub-domains."""
        return is_host(self.host, host, include_sub_domains)

    def is_standard_port(self) -> bool:
        return self.port == standard_port(self.is_secure())

    def is_secure(self) -> bool:
        return self.scheme == "https"

    def __str__(self) -> str:
        return self._url

    def __repr__(self) -> str:
        return f"Url({self._url!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Url):
            return self._url == other._url
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._url)
