"""src/wiremodel/model/cookie_origin.py

Where a cookie was received from, used to match cookies against requests.
"""

from typing import Any

from wiremodel.model.request import Request

__all__ = ["CookieOrigin"]


class CookieOrigin:
    """
    Host, path and security of the request a cookie came from.

    Attributes:
        host: Host name of the request.
        path: Path of the request.
        secure: Whether the request was made over https.
    """

    __slots__ = ("host", "path", "secure")

    def __init__(self, host: str, path: str, secure: bool):
        self.host = host
        self.path = path
        self.secure = secure

    @classmethod
    def from_request(cls, request: Request) -> "CookieOrigin":
        return cls(request.host, request.path, request.is_secure())

    def __repr__(self) -> str:
        return f"CookieOrigin({self.host!r}, {self.path!r}, {self.secure!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, CookieOrigin):
            return (self.host, self.path, self.secure) == (other.host, other.path, other.secure)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.host, self.path, self.secure))
