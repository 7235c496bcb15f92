"""tests/unit/test_message.py"""

import io
from unittest import mock

import pytest

from wiremodel.http.body import StreamBody, StringBody
from wiremodel.model.request import Request
from wiremodel.model.response import Response


def unknown_size_body():
    """A body over a stream that cannot be measured."""
    stream = mock.Mock(spec=["read"])
    stream.read.return_value = b""
    return StreamBody(stream)


class TestMessageHeaders:
    """Tests for header access shared by requests and responses."""

    def test_absent_header(self):
        """Test an absent header reads as an empty string."""
        response = Response()
        assert response.get_header("X-Missing") == ""
        assert response.has_header("X-Missing") is False
        assert response.get_header_as_list("X-Missing") == []
        assert response.get_first_header("X-Missing") is None
        assert response.get_last_header("X-Missing") is None

    def test_empty_header_is_present(self):
        """Test an empty value still counts as a header."""
        response = Response().with_header("X-Empty", "")
        assert response.get_header("X-Empty") == ""
        assert response.has_header("X-Empty") is True

    def test_case_insensitive(self):
        """Test lookup ignores the case of the name."""
        response = Response().with_header("content-TYPE", "text/plain")
        assert response.has_header("Content-Type")
        assert response.get_header("CONTENT-type") == "text/plain"
        assert response.headers == {"Content-Type": ["text/plain"]}

    def test_with_header_list(self):
        """Test a list value sets several values, joined on read."""
        response = Response().with_header("X-Tag", ["a", "b", 3])
        assert response.get_header("X-Tag") == "a, b, 3"
        assert response.get_header_as_list("X-Tag") == ["a", "b", "3"]
        assert response.get_first_header("X-Tag") == "a"
        assert response.get_last_header("X-Tag") == "3"

    def test_with_header_replaces(self):
        """Test with_header replaces values and keeps the header's position."""
        response = (
            Response()
            .with_header("X-A", "1")
            .with_header("X-B", "2")
            .with_added_header("X-A", "3")
        )
        assert response.headers == {"X-A": ["1", "3"], "X-B": ["2"]}

        replaced = response.with_header("x-a", "4")
        assert list(replaced.headers.items()) == [("X-A", ["4"]), ("X-B", ["2"])]
        assert response.get_header_as_list("X-A") == ["1", "3"]

    def test_with_headers_and_added_headers(self):
        """Test the map variants."""
        response = Response().with_headers({"X-A": "1", "X-B": ["2", "3"]})
        assert response.headers == {"X-A": ["1"], "X-B": ["2", "3"]}

        added = response.with_added_headers({"X-A": "4", "X-C": "5"})
        assert added.headers == {"X-A": ["1", "4"], "X-B": ["2", "3"], "X-C": ["5"]}
        assert response.headers == {"X-A": ["1"], "X-B": ["2", "3"]}

    def test_without_header(self):
        """Test removing a header, and removing an absent one."""
        response = Response().with_header("X-A", "1")

        without = response.without_header("x-a")
        assert without is not response
        assert not without.has_header("X-A")
        assert response.has_header("X-A")

        assert without.without_header("X-A") is without

    def test_headers_view_is_a_copy(self):
        """Test the headers view cannot change the message."""
        response = Response().with_header("X-A", "1")
        response.headers["X-A"].append("2")
        response.headers["X-B"] = ["3"]
        assert response.headers == {"X-A": ["1"]}

    def test_title_case_presentation(self):
        """Test each hyphen-delimited word is capitalized."""
        request = Request().with_header("x-forwarded-FOR", "1.2.3.4").with_header("etag", "x")
        assert list(request.headers) == ["X-Forwarded-For", "Etag"]


class TestMessageProtocolVersion:
    """Tests for with_protocol_version()."""

    def test_with_protocol_version(self):
        """Test a new version gives a new message."""
        response = Response()
        new_response = response.with_protocol_version("1.1")
        assert new_response is not response
        assert response.protocol_version == "1.0"
        assert new_response.protocol_version == "1.1"
        assert new_response.start_line == "HTTP/1.1 200 OK"

    def test_same_version_returns_self(self):
        """Test setting the current version is a no-op."""
        response = Response()
        assert response.with_protocol_version("1.0") is response


class TestMessageBody:
    """Tests for the body and its framing headers."""

    def test_known_size(self):
        """Test a body of known size sets Content-Length."""
        request = Request().with_body(StringBody("hello"))
        assert request.get_header("Content-Length") == "5"
        assert not request.has_header("Transfer-Encoding")

    def test_unknown_size(self):
        """Test a body of unknown size sets chunked transfer coding."""
        request = Request().with_body(unknown_size_body())
        assert request.get_header("Transfer-Encoding") == "chunked"
        assert not request.has_header("Content-Length")

    def test_switching_sizes(self):
        """Test the framing headers never appear together."""
        chunked = Request().with_body(unknown_size_body())
        sized = chunked.with_body(StringBody("abc"))
        chunked_again = sized.with_body(unknown_size_body())

        assert sized.headers == {"Content-Length": ["3"]}
        assert chunked_again.headers == {"Transfer-Encoding": ["chunked"]}
        assert chunked.headers == {"Transfer-Encoding": ["chunked"]}

    @pytest.mark.parametrize(
        "body", [StringBody("abc"), StreamBody(io.BytesIO(b"abc")), unknown_size_body()]
    )
    def test_no_body_clears_framing(self, body):
        """Test with_body(None) removes both framing headers."""
        request = Request().with_body(body).with_body(None)
        assert request.body is None
        assert not request.has_header("Content-Length")
        assert not request.has_header("Transfer-Encoding")

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, 0),
            ("0", 0),
            ("12", 12),
            ("12a", 0),
            ("-1", 0),
            ("1.5", 0),
            (" 12", 0),
            ("١٢", 0),
        ],
    )
    def test_content_length(self, value, expected):
        """Test only a plain ASCII digit string is a length."""
        request = Request()
        if value is not None:
            request = request.with_header("Content-Length", value)
        assert request.content_length == expected

    def test_with_body_does_not_share_cursor(self):
        """Test a message and its copy read their bodies independently."""
        request = Request().with_body(StringBody("abcdef"))
        copy = request.with_header("X-A", "1")

        assert request.body.read(3) == b"abc"
        assert copy.body.read(3) == b"abc"


class TestMessageContentType:
    """Tests for is_content_type()."""

    @pytest.mark.parametrize(
        "header, content_type, expected",
        [
            ("text/html", "text/html", True),
            ("text/html; charset=utf-8", "text/html", True),
            ("Text/HTML;charset=utf-8", "text/html", True),
            ("text/html", "TEXT/HTML", True),
            ("text/html", "text/plain", False),
            ("text/html-extra", "text/html", False),
            ("", "text/html", False),
        ],
    )
    def test_is_content_type(self, header, content_type, expected):
        """Test the media type is compared without parameters or case."""
        response = Response().with_header("Content-Type", header)
        assert response.is_content_type(content_type) is expected

    def test_missing_content_type(self):
        """Test a message without Content-Type matches nothing."""
        assert Response().is_content_type("text/html") is False


class TestMessageHead:
    """Tests for head and the string forms."""

    def test_request_head(self):
        """Test the request line, one line per header value, and a blank line."""
        request = (
            Request("GET", "http://example.com/a?b=c")
            .with_added_header("Accept", ["text/html", "*/*"])
        )
        assert request.head == (
            "GET /a?b=c HTTP/1.0\r\n"
            "Host: example.com\r\n"
            "Accept: text/html\r\n"
            "Accept: */*\r\n"
            "\r\n"
        )
        assert str(request) == request.head

    def test_bytes_with_binary_body(self):
        """Test bytes() keeps a binary body exact."""
        response = Response(b"\x89PNG\xff")
        assert bytes(response) == b"HTTP/1.0 200 OK\r\nContent-Length: 5\r\n\r\n\x89PNG\xff"
