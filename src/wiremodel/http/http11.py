"""src/wiremodel/http/http11.py

HTTP/1.x response wire parser.
"""

import re
from typing import List, NamedTuple, Tuple, Union

from wiremodel.exceptions import InvalidResponseError

__all__ = ["HttpParser", "ParsedResponse", "CRLF"]

CRLF = "\r\n"

_STATUS_LINE = re.compile(r"^HTTP/([0-9]\.[0-9]) ([0-9]{3}) (.*)\r\n")
_HEADER_LINE = re.compile(r"^(\S+):\s*(.*)\Z")


class ParsedResponse(NamedTuple):
    """Components of a raw response, in wire order."""

    protocol_version: str
    status_code: int
    reason_phrase: str
    headers: List[Tuple[str, str]]
    body: Union[str, bytes]


class HttpParser:
    """
    Strict HTTP/1.x response parser.

    Handles:
    - Status Line parsing.
    - Header lines up to the blank line, duplicates preserved in order.
    - Body passthrough (bytes in, bytes out).

    Each failure stage has its own stable message:
    ``error 1`` bad status line, ``error 2`` missing CRLF,
    ``error 3`` malformed header line.
    """

    def parse_response(self, data: Union[str, bytes]) -> ParsedResponse:
        """
        Parse a full raw HTTP response.

        Bytes are decoded as ISO-8859-1, which keeps the body byte-exact.

        Raises:
            InvalidResponseError: If the response is malformed.
        """
        is_bytes = isinstance(data, bytes)
        text = data.decode("iso-8859-1") if is_bytes else data

        match = _STATUS_LINE.match(text)
        if match is None:
            raise InvalidResponseError("Could not parse response (error 1).")

        protocol_version, code, reason = match.groups()
        rest = text[match.end() :]

        headers: List[Tuple[str, str]] = []

        while True:
            pos = rest.find(CRLF)
            if pos == -1:
                raise InvalidResponseError("Could not parse response (error 2).")

            if pos == 0:
                break

            header = _HEADER_LINE.match(rest[:pos])
            if header is None:
                raise InvalidResponseError("Could not parse response (error 3).")

            headers.append((header.group(1), header.group(2)))
            rest = rest[pos + len(CRLF) :]

        body = rest[len(CRLF) :]

        return ParsedResponse(
            protocol_version,
            int(code),
            reason.rstrip("\r"),
            headers,
            body.encode("iso-8859-1") if is_bytes else body,
        )
