"""src/wiremodel/http/body.py

HTTP message bodies (in-memory and streamed) and chunked writing helpers.
"""

import abc
import io
import socket
from typing import IO, Iterator, Optional, Union

__all__ = [
    "MessageBody",
    "StringBody",
    "StreamBody",
    "iter_write_chunked",
    "file_to_iterator",
]


class MessageBody(abc.ABC):
    """
    Body of an HTTP message.

    ``read()`` advances an internal cursor; ``bytes(body)`` returns whatever
    has not been read yet.
    """

    __slots__ = ()

    @abc.abstractmethod
    def read(self, length: int) -> bytes:
        """Read up to ``length`` bytes."""

    @abc.abstractmethod
    def size(self) -> Optional[int]:
        """Size in bytes if known, or None if unknown."""

    @abc.abstractmethod
    def __bytes__(self) -> bytes:
        pass

    @abc.abstractmethod
    def copy(self) -> "MessageBody":
        """Return a body with its own cursor."""

    def __str__(self) -> str:
        return bytes(self).decode("utf-8", errors="replace")


class StringBody(MessageBody):
    """In-memory body. Text is stored UTF-8 encoded."""

    __slots__ = ("_data", "_offset")

    def __init__(self, body: Union[str, bytes] = b""):
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._data = bytes(body)
        self._offset = 0

    def read(self, length: int) -> bytes:
        chunk = self._data[self._offset : self._offset + length]
        self._offset += length
        return chunk

    def size(self) -> Optional[int]:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return self._data[self._offset :]

    def __repr__(self) -> str:
        return f"StringBody({self._data!r})"

    def copy(self) -> "StringBody":
        other = StringBody(self._data)
        other._offset = self._offset
        return other


class StreamBody(MessageBody):
    """
    Body backed by a binary file-like object.

    The size is only known for seekable streams. A seekable stream is read at
    this body's own offset, so copies of the body never move each other's
    cursor. Copies of a body over a non-seekable stream share its position.
    """

    __slots__ = ("_stream", "_seekable", "_offset")

    def __init__(self, stream: IO[bytes]):
        self._stream = stream
        try:
            self._seekable = bool(stream.seekable())
        except (AttributeError, ValueError):
            self._seekable = False
        self._offset = stream.tell() if self._seekable else 0

    @property
    def stream(self) -> IO[bytes]:
        """The underlying stream."""
        return self._stream

    def read(self, length: int) -> bytes:
        if self._seekable:
            self._stream.seek(self._offset)
        chunk = self._stream.read(length) or b""
        self._offset += len(chunk)
        return chunk

    def size(self) -> Optional[int]:
        if not self._seekable:
            return None
        position = self._stream.tell()
        end = self._stream.seek(0, io.SEEK_END)
        self._stream.seek(position)
        return end

    def __bytes__(self) -> bytes:
        if self._seekable:
            self._stream.seek(self._offset)
        data = self._stream.read() or b""
        self._offset += len(data)
        return data

    def __repr__(self) -> str:
        return f"StreamBody({self._stream!r})"

    def copy(self) -> "StreamBody":
        other = StreamBody.__new__(StreamBody)
        other._stream = self._stream
        other._seekable = self._seekable
        other._offset = self._offset
        return other


def iter_write_chunked(sock: socket.socket, chunks: Iterator[bytes]) -> None:
    """
    Write an iterable of bytes chunks using HTTP chunked transfer encoding.

    Each chunk is sent as ``{hex_size}\\r\\n{data}\\r\\n``.
    A final ``0\\r\\n\\r\\n`` terminator is sent after all chunks.

    Args:
        sock: Socket to write to.
        chunks: Iterator yielding bytes chunks.
    """
    for chunk in chunks:
        if not chunk:
            continue
        size_line = f"{len(chunk):x}\r\n".encode("ascii")
        sock.sendall(size_line + chunk + b"\r\n")
    # Terminating chunk
    sock.sendall(b"0\r\n\r\n")


def file_to_iterator(
    fileobj: Union[IO[bytes], MessageBody], chunk_size: int = 8192
) -> Iterator[bytes]:
    """
    Convert a file-like object or a message body into a bytes iterator.

    Args:
        fileobj: File-like object opened in binary mode, or a MessageBody.
        chunk_size: Number of bytes per chunk.

    Yields:
        Chunks of bytes read from the source.
    """
    while True:
        chunk = fileobj.read(chunk_size)
        if not chunk:
            break
        yield chunk
