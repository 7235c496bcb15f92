"""src/wiremodel/model/response.py

Immutable HTTP response, and parsing of raw response text.
"""

from typing import IO, List, Optional, Union

from wiremodel.exceptions import HttpError, InvalidArgumentError
from wiremodel.http.body import MessageBody, StreamBody, StringBody
from wiremodel.http.cookie import Cookie
from wiremodel.http.http11 import HttpParser
from wiremodel.http.status import reason_phrase
from wiremodel.model.message import Message

__all__ = ["Response", "response_from_error"]

Content = Union[str, bytes, IO[bytes], MessageBody]


def _to_body(content: Optional[Content]) -> Optional[MessageBody]:
    if content is None or isinstance(content, MessageBody):
        return content
    if isinstance(content, (str, bytes)):
        return StringBody(content)
    return StreamBody(content)


class Response(Message):
    """
    An HTTP response. This class is immutable.

    Every cookie added with :meth:`with_cookie` has a matching ``Set-Cookie``
    header, in the same order.

    Example:
        >>> response = Response("Hello").with_header("Content-Type", "text/plain")
        >>> response.head
        'HTTP/1.0 200 OK\\r\\nContent-Length: 5\\r\\nContent-Type: text/plain\\r\\n\\r\\n'
    """

    __slots__ = ("_status_code", "_reason_phrase", "_cookies")

    def __init__(self, content: Optional[Content] = None, status_code: int = 200):
        """
        Initialize a response.

        Args:
            content: Body as text, bytes, a binary file-like object or a body.
            status_code: HTTP status code, 100 to 999.

        Raises:
            InvalidArgumentError: If the status code is out of range.
        """
        super().__init__()
        self._status_code = 200
        self._reason_phrase = "OK"
        self._cookies: List[Cookie] = []

        self._set_status(status_code, None)
        if content is not None:
            self._set_body(_to_body(content))

    @classmethod
    def parse(cls, raw: Union[str, bytes]) -> "Response":
        """
        Create a response from its raw text.

        Set-Cookie headers become cookies. The rest of the text after the
        head becomes the body, and sets Content-Length.

        Raises:
            InvalidResponseError: If the text is not a valid response.
            InvalidArgumentError: If a Set-Cookie header is not valid.
        """
        parsed = HttpParser().parse_response(raw)

        response = cls()
        response._protocol_version = parsed.protocol_version
        response._set_status(parsed.status_code, parsed.reason_phrase or None)

        for name, value in parsed.headers:
            if name.lower() == "set-cookie":
                response._add_cookie(Cookie.parse(value))
            else:
                response._headers.add(name, value)

        response._set_body(StringBody(parsed.body))
        return response

    def __repr__(self) -> str:
        return f"<Response [{self._status_code}]>"

    def _set_status(self, status_code: int, reason: Optional[str]) -> None:
        if status_code < 100 or status_code > 999:
            raise InvalidArgumentError(f"Invalid HTTP status code: {status_code}")

        self._status_code = status_code
        self._reason_phrase = reason if reason is not None else reason_phrase(status_code)

    def _add_cookie(self, cookie: Cookie) -> None:
        self._cookies = self._cookies + [cookie]
        self._headers.add("Set-Cookie", str(cookie))

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def reason_phrase(self) -> str:
        return self._reason_phrase

    def with_status_code(self, status_code: int, reason_phrase: Optional[str] = None) -> "Response":
        """
        Return a copy with a new status.

        Args:
            status_code: HTTP status code, 100 to 999.
            reason_phrase: Reason phrase, or None for the standard one.

        Raises:
            InvalidArgumentError: If the status code is out of range.
        """
        that = self._clone()
        that._set_status(status_code, reason_phrase)
        return that

    def is_status_code(self, status_code: int) -> bool:
        return self._status_code == status_code

    def is_informational(self) -> bool:
        return 100 <= self._status_code < 200

    def is_successful(self) -> bool:
        return 200 <= self._status_code < 300

    def is_redirection(self) -> bool:
        return 300 <= self._status_code < 400

    def is_client_error(self) -> bool:
        return 400 <= self._status_code < 500

    def is_server_error(self) -> bool:
        return 500 <= self._status_code < 600

    @property
    def cookies(self) -> List[Cookie]:
        return list(self._cookies)

    def with_cookie(self, cookie: Cookie) -> "Response":
        that = self._clone()
        that._add_cookie(cookie)
        return that

    def without_cookies(self) -> "Response":
        that = self._clone()
        that._cookies = []
        that._headers.remove("Set-Cookie")
        return that

    def with_content(self, content: Optional[Content]) -> "Response":
        """Return a copy with the body set from text, bytes or a binary file-like object."""
        return self.with_body(_to_body(content))

    @property
    def start_line(self) -> str:
        return f"HTTP/{self._protocol_version} {self._status_code} {self._reason_phrase}"


def response_from_error(error: HttpError) -> Response:
    """Convert an HttpError into a response with its status code and headers."""
    return Response(status_code=error.status_code).with_headers(error.headers)
