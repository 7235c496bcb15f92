import io
from unittest import mock

import pytest


@pytest.fixture
def environ():
    """Minimal WSGI environ for a plain GET request."""
    return {
        "REQUEST_METHOD": "GET",
        "SERVER_PROTOCOL": "HTTP/1.1",
        "wsgi.url_scheme": "http",
        "wsgi.input": io.BytesIO(b""),
    }


@pytest.fixture
def mock_socket():
    """Socket mock recording everything passed to sendall()."""
    sock = mock.Mock()
    sock.sent = []
    sock.sendall.side_effect = sock.sent.append
    return sock
