"""tests/unit/test_writer.py"""

import io
from unittest import mock

import pytest

from wiremodel.exceptions import NetworkError
from wiremodel.model.response import Response
from wiremodel.transport.writer import ResponseWriter, wsgi_response


class NonSeekable(io.RawIOBase):
    """Readable stream of unknown size."""

    def __init__(self, data):
        self._data = io.BytesIO(data)

    def readable(self):
        return True

    def read(self, size=-1):
        return self._data.read(size)


class TestResponseWriter:
    """Tests for ResponseWriter."""

    def test_send_with_content_length(self, mock_socket):
        """Test the head and body are written as they are."""
        writer = ResponseWriter(mock_socket)
        response = Response("Hello")

        assert writer.send(response) is True
        assert writer.headers_sent
        assert b"".join(mock_socket.sent) == (
            b"HTTP/1.0 200 OK\r\nContent-Length: 5\r\n\r\nHello"
        )

    def test_send_chunked(self, mock_socket):
        """Test a body of unknown size is sent with chunked coding."""
        response = Response(NonSeekable(b"abcdef"))
        assert response.get_header("Transfer-Encoding") == "chunked"

        writer = ResponseWriter(mock_socket, chunk_size=4)
        writer.send(response)

        assert mock_socket.sent == [
            b"HTTP/1.0 200 OK\r\nTransfer-Encoding: chunked\r\n\r\n",
            b"4\r\nabcd\r\n",
            b"2\r\nef\r\n",
            b"0\r\n\r\n",
        ]

    def test_send_without_body(self, mock_socket):
        """Test a response without a body sends only its head."""
        ResponseWriter(mock_socket).send(Response().with_status_code(204))
        assert mock_socket.sent == [b"HTTP/1.0 204 No Content\r\n\r\n"]

    def test_send_twice_is_refused(self, mock_socket, caplog):
        """Test a second response is dropped with a warning."""
        writer = ResponseWriter(mock_socket)
        writer.send(Response())

        with caplog.at_level("WARNING", logger="wiremodel.transport.writer"):
            assert writer.send(Response("late")) is False

        assert len(mock_socket.sent) == 1
        assert "Headers already sent" in caplog.text

    def test_response_not_consumed(self, mock_socket):
        """Test the response body can still be read after sending."""
        response = Response(io.BytesIO(b"stream"))
        ResponseWriter(mock_socket).send(response)
        assert bytes(response.body) == b"stream"

    def test_socket_error(self):
        """Test socket failures become NetworkError."""
        sock = mock.Mock()
        sock.sendall.side_effect = BrokenPipeError("gone")

        writer = ResponseWriter(sock)
        with pytest.raises(NetworkError, match="Failed to send response"):
            writer.send(Response("x"))
        assert not writer.headers_sent


class TestWsgiResponse:
    """Tests for wsgi_response()."""

    def test_status_and_headers(self):
        """Test start_response receives the status line and header pairs."""
        start_response = mock.Mock()
        response = (
            Response("body", 201)
            .with_header("X-Tag", ["a", "b"])
            .with_header("Connection", "close")
        )

        chunks = wsgi_response(response, start_response)

        start_response.assert_called_once_with(
            "201 Created",
            [("Content-Length", "4"), ("X-Tag", "a"), ("X-Tag", "b")],
        )
        assert b"".join(chunks) == b"body"

    def test_chunked_header_dropped(self):
        """Test Transfer-Encoding is left to the server."""
        start_response = mock.Mock()
        chunks = wsgi_response(Response(NonSeekable(b"data")), start_response)

        _, headers = start_response.call_args[0]
        assert headers == []
        assert b"".join(chunks) == b"data"

    def test_no_body(self):
        """Test an empty iterator for a response without body."""
        start_response = mock.Mock()
        assert list(wsgi_response(Response(), start_response)) == []
        start_response.assert_called_once_with("200 OK", [])
