"""tests/unit/test_body.py"""

import io
from unittest import mock

from wiremodel.http.body import (
    StreamBody,
    StringBody,
    file_to_iterator,
    iter_write_chunked,
)


class TestStringBody:
    """Tests for StringBody."""

    def test_text_is_utf8_encoded(self):
        """Test str bodies are stored as UTF-8 bytes."""
        body = StringBody("héllo")
        assert bytes(body) == "héllo".encode("utf-8")
        assert body.size() == 6
        assert str(body) == "héllo"

    def test_read_advances(self):
        """Test read() moves the cursor."""
        body = StringBody(b"abcdef")
        assert body.read(2) == b"ab"
        assert body.read(3) == b"cde"
        assert body.read(10) == b"f"
        assert body.read(10) == b""

    def test_size_is_total_length(self):
        """Test size() does not depend on the cursor."""
        body = StringBody(b"abc")
        body.read(2)
        assert body.size() == 3

    def test_copy_keeps_offset(self):
        """Test copy() has its own cursor at the same position."""
        body = StringBody(b"abcdef")
        body.read(2)
        other = body.copy()
        assert other.read(2) == b"cd"
        assert body.read(2) == b"cd"

    def test_empty(self):
        """Test the empty body."""
        body = StringBody()
        assert body.size() == 0
        assert bytes(body) == b""


class TestStreamBody:
    """Tests for StreamBody."""

    def test_seekable_size(self):
        """Test the size of a seekable stream, measured without moving it."""
        stream = io.BytesIO(b"0123456789")
        stream.seek(3)
        body = StreamBody(stream)
        assert body.size() == 10
        assert stream.tell() == 3

    def test_non_seekable_size_unknown(self):
        """Test that a non-seekable stream has no known size."""
        stream = mock.Mock()
        stream.seekable.return_value = False
        assert StreamBody(stream).size() is None

    def test_stream_without_seekable(self):
        """Test a raw object without seekable() is treated as non-seekable."""
        stream = mock.Mock(spec=["read"])
        stream.read.return_value = b"data"
        body = StreamBody(stream)
        assert body.size() is None
        assert body.read(4) == b"data"

    def test_read_and_bytes(self):
        """Test reading part of the stream then the rest."""
        body = StreamBody(io.BytesIO(b"hello world"))
        assert body.read(5) == b"hello"
        assert bytes(body) == b" world"
        assert bytes(body) == b""

    def test_copies_have_own_cursor(self):
        """Test copies over a seekable stream do not move each other."""
        body = StreamBody(io.BytesIO(b"abcdef"))
        other = body.copy()
        assert body.read(3) == b"abc"
        assert other.read(2) == b"ab"
        assert body.read(3) == b"def"
        assert bytes(other) == b"cdef"

    def test_stream_property(self):
        """Test access to the wrapped stream."""
        stream = io.BytesIO(b"")
        assert StreamBody(stream).stream is stream


class TestChunkedHelpers:
    """Tests for chunked writing helpers."""

    def test_iter_write_chunked(self, mock_socket):
        """Test chunk framing and terminator, empty chunks skipped."""
        iter_write_chunked(mock_socket, iter([b"hello", b"", b"0123456789abcdef"]))
        assert mock_socket.sent == [
            b"5\r\nhello\r\n",
            b"10\r\n0123456789abcdef\r\n",
            b"0\r\n\r\n",
        ]

    def test_file_to_iterator(self):
        """Test reading a file in fixed-size chunks."""
        chunks = list(file_to_iterator(io.BytesIO(b"abcdefg"), chunk_size=3))
        assert chunks == [b"abc", b"def", b"g"]

    def test_file_to_iterator_with_body(self):
        """Test a message body can be iterated like a file."""
        chunks = list(file_to_iterator(StringBody(b"abcd"), chunk_size=2))
        assert chunks == [b"ab", b"cd"]
