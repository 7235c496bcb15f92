"""src/wiremodel/transport/writer.py

Sending responses over a socket, or through a WSGI server.
"""

import logging
import socket
from typing import Callable, Iterator, List, Tuple

from wiremodel.exceptions import NetworkError
from wiremodel.http.body import file_to_iterator, iter_write_chunked
from wiremodel.model.response import Response

__all__ = ["ResponseWriter", "wsgi_response"]

logger = logging.getLogger(__name__)

StartResponse = Callable[[str, List[Tuple[str, str]]], object]

# Framing is left to the WSGI server.
_HOP_BY_HOP = frozenset(["transfer-encoding", "connection", "keep-alive"])


class ResponseWriter:
    """
    Writes a single response to a connected socket.

    The head is sent once; a second :meth:`send` is refused.
    """

    __slots__ = ("sock", "chunk_size", "_headers_sent")

    def __init__(self, sock: socket.socket, chunk_size: int = 8192):
        self.sock = sock
        self.chunk_size = chunk_size
        self._headers_sent = False

    @property
    def headers_sent(self) -> bool:
        return self._headers_sent

    def send(self, response: Response) -> bool:
        """
        Send the head and the body of a response.

        Bodies of unknown size are sent with chunked transfer coding. The
        response itself is not consumed.

        Returns:
            False without writing anything if a head was already sent.

        Raises:
            NetworkError: If the socket fails.
        """
        if self._headers_sent:
            logger.warning("Headers already sent, dropping %r", response)
            return False

        try:
            self.sock.sendall(response.head.encode("utf-8"))
            self._headers_sent = True

            body = response.body
            if body is not None:
                chunks = file_to_iterator(body.copy(), self.chunk_size)

                if response.get_header("Transfer-Encoding").lower() == "chunked":
                    iter_write_chunked(self.sock, chunks)
                else:
                    for chunk in chunks:
                        self.sock.sendall(chunk)

        except OSError as e:
            raise NetworkError(f"Failed to send response: {e}") from e

        logger.debug("Sent %s", response.start_line)
        return True


def wsgi_response(response: Response, start_response: StartResponse) -> Iterator[bytes]:
    """
    Hand a response to a WSGI server.

    Example:
        >>> def app(environ, start_response):
        ...     request = request_from_environ(environ)
        ...     return wsgi_response(handle_request(handler, request), start_response)

    Returns:
        Iterator over the body chunks.
    """
    headers = [
        (name, value)
        for name, values in response.headers.items()
        if name.lower() not in _HOP_BY_HOP
        for value in values
    ]

    start_response(f"{response.status_code} {response.reason_phrase}", headers)

    if response.body is None:
        return iter(())

    return file_to_iterator(response.body.copy())
