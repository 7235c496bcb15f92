"""src/wiremodel/model/request.py

Immutable HTTP request.

The request keeps three views of its target in sync: ``path`` and
``query_string``, the parsed ``query`` map, and ``request_uri``. The ``Host``
header follows the host, port and scheme.
"""

# pylint: disable=too-many-instance-attributes,too-many-public-methods

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from wiremodel.exceptions import InvalidArgumentError
from wiremodel.http.body import StringBody
from wiremodel.http.negotiation import parse_quality_values
from wiremodel.http.path import split_path
from wiremodel.http.url import Url, is_host, standard_port
from wiremodel.model.message import Message
from wiremodel.model.uploaded_file import UploadedFile
from wiremodel.utils.serialization import FormValue, build_query, parse_query
from wiremodel.utils.validators import check_files, copy_tree, resolve_path

__all__ = ["Request", "STANDARD_METHODS"]

logger = logging.getLogger(__name__)

STANDARD_METHODS = frozenset(
    ["CONNECT", "DELETE", "GET", "HEAD", "OPTIONS", "POST", "PUT", "TRACE", "TRACK"]
)

FileTree = Union[List[Any], Dict[str, Any]]


def _normalize_method(method: str) -> str:
    upper = method.upper()
    return upper if upper in STANDARD_METHODS else method


class Request(Message):
    """
    An HTTP request. This class is immutable.

    Standard methods are upper-cased; any other method is kept verbatim and
    compared case-sensitively.

    Example:
        >>> request = Request("POST", "https://example.com/search?q=wire")
        >>> request.get_query("q")
        'wire'
        >>> request.start_line
        'POST /search?q=wire HTTP/1.0'
    """

    __slots__ = (
        "_method",
        "_host",
        "_port",
        "_secure",
        "_path",
        "_query_string",
        "_request_uri",
        "_query",
        "_post",
        "_cookies",
        "_files",
        "_client_ip",
        "_attributes",
    )

    def __init__(self, method: str = "GET", url: Optional[Union[str, Url]] = None):
        """
        Initialize a request.

        Args:
            method: Request method.
            url: Absolute http(s) URL. Without one the request targets
                ``http://localhost/``.

        Raises:
            InvalidArgumentError: If the URL is not valid.
        """
        super().__init__()
        self._method = _normalize_method(method)
        self._host = "localhost"
        self._port = 80
        self._secure = False
        self._path = "/"
        self._query_string = ""
        self._request_uri = "/"
        self._query: Dict[str, FormValue] = {}
        self._post: Dict[str, FormValue] = {}
        self._cookies: Dict[str, FormValue] = {}
        self._files: FileTree = {}
        self._client_ip = "0.0.0.0"
        self._attributes: Dict[str, Any] = {}

        if url is not None:
            self._set_url(url)

    def __repr__(self) -> str:
        return f"<Request {self._method} {self.url}>"

    def _update_request_uri(self) -> None:
        self._request_uri = self._path
        if self._query_string:
            self._request_uri += "?" + self._query_string

    def _update_host_header(self) -> None:
        host = self._host
        if self._port != standard_port(self._secure):
            host += f":{self._port}"
        self._headers.set("Host", host)

    def _set_url(self, url: Union[str, Url]) -> None:
        if not isinstance(url, Url):
            url = Url(url)

        self._secure = url.is_secure()
        self._host = url.host
        self._port = url.port
        self._path = str(url.path)
        self._query_string = url.query
        self._query = parse_query(url.query)
        self._update_request_uri()
        self._update_host_header()

    # Method

    @property
    def method(self) -> str:
        return self._method

    def with_method(self, method: str) -> "Request":
        that = self._clone()
        that._method = _normalize_method(method)
        return that

    def is_method(self, method: str) -> bool:
        return self._method == _normalize_method(method)

    def is_method_safe(self) -> bool:
        """Whether the method is GET or HEAD."""
        return self._method in ("GET", "HEAD")

    # Target

    @property
    def scheme(self) -> str:
        return "https" if self._secure else "http"

    def with_scheme(self, scheme: str) -> "Request":
        """
        Return a copy with the given scheme. The port is left unchanged.

        Raises:
            InvalidArgumentError: If the scheme is not http or https.
        """
        scheme = scheme.lower()
        if scheme not in ("http", "https"):
            raise InvalidArgumentError("The scheme must be http or https.")

        that = self._clone()
        that._secure = scheme == "https"
        that._update_host_header()
        return that

    def is_secure(self) -> bool:
        return self._secure

    def with_secure(self, is_secure: bool) -> "Request":
        """
        Return a copy with the secure flag set.

        A standard port moves along with the flag (80 <-> 443); a custom port
        is kept.
        """
        that = self._clone()
        if is_secure != self._secure:
            if self._port == standard_port(self._secure):
                that._port = standard_port(is_secure)
            that._secure = is_secure
        that._update_host_header()
        return that

    @property
    def host(self) -> str:
        return self._host

    @property
    def host_parts(self) -> List[str]:
        """Dot-separated labels of the host name."""
        return self._host.split(".")

    def with_host(self, host: str) -> "Request":
        that = self._clone()
        that._host = host
        that._update_host_header()
        return that

    def is_host(self, host: str, include_sub_domains: bool = False) -> bool:
        return is_host(self._host, host, include_sub_domains)

    @property
    def port(self) -> int:
        return self._port

    def with_port(self, port: int) -> "Request":
        that = self._clone()
        that._port = port
        that._update_host_header()
        return that

    @property
    def path(self) -> str:
        return self._path

    @property
    def path_parts(self) -> List[str]:
        return split_path(self._path)

    def with_path(self, path: str) -> "Request":
        """
        Return a copy with a new path.

        Raises:
            InvalidArgumentError: If the path contains a query string.
        """
        if "?" in path:
            raise InvalidArgumentError("The path must not contain a query string.")

        that = self._clone()
        that._path = path
        that._update_request_uri()
        return that

    @property
    def query_string(self) -> str:
        return self._query_string

    def with_query_string(self, query_string: str) -> "Request":
        that = self._clone()
        that._query_string = query_string
        that._query = parse_query(query_string)
        that._update_request_uri()
        return that

    @property
    def request_uri(self) -> str:
        """Path and query string as they appear on the request line."""
        return self._request_uri

    def with_request_uri(self, request_uri: str) -> "Request":
        """Return a copy with the path and query string taken from a request URI."""
        path, _, query_string = request_uri.partition("?")

        that = self._clone()
        that._path = path
        that._query_string = query_string
        that._query = parse_query(query_string) if query_string else {}
        that._request_uri = request_uri
        return that

    @property
    def url(self) -> str:
        """Full URL, e.g. ``https://example.com:8443/search?q=wire``."""
        return self.url_base + self._request_uri

    @property
    def url_base(self) -> str:
        """Scheme, host and non-standard port, e.g. ``https://example.com:8443``."""
        base = f"{self.scheme}://{self._host}"
        if self._port != standard_port(self._secure):
            base += f":{self._port}"
        return base

    def with_url(self, url: Union[str, Url]) -> "Request":
        """
        Return a copy targeting an absolute URL.

        Sets the scheme, host, port, path, query string and ``Host`` header at
        once.

        Raises:
            InvalidArgumentError: If the URL is not valid.
        """
        that = self._clone()
        that._set_url(url)
        return that

    def get_referer(self) -> Optional[Url]:
        """The Referer header as a Url, or None if absent or not a valid URL."""
        referer = self.get_first_header("Referer")
        if referer is None:
            return None

        try:
            return Url(referer)
        except InvalidArgumentError:
            logger.debug("Ignoring invalid Referer header %r", referer)
            return None

    # Client

    @property
    def client_ip(self) -> str:
        return self._client_ip

    def with_client_ip(self, client_ip: str) -> "Request":
        that = self._clone()
        that._client_ip = client_ip
        return that

    def is_ajax(self) -> bool:
        """Whether the request was sent by XMLHttpRequest."""
        return self.get_header("X-Requested-With") == "XMLHttpRequest"

    def get_accept(self) -> Dict[str, float]:
        """Accepted media types, ordered by decreasing quality."""
        return parse_quality_values(self.get_header("Accept"))

    def get_accept_language(self) -> Dict[str, float]:
        """Accepted languages, ordered by decreasing quality."""
        return parse_quality_values(self.get_header("Accept-Language"))

    # Parameters

    def get_query(self, name: Optional[str] = None) -> Any:
        """
        Get a query parameter.

        Args:
            name: Parameter path such as ``user.name`` or ``user[name]``;
                None returns the whole map.

        Returns:
            The value, or None if it is not present.
        """
        if name is None:
            return copy_tree(self._query)
        return copy_tree(resolve_path(self._query, name))

    def with_query(self, query: Mapping[str, Any]) -> "Request":
        """Return a copy with the query string rebuilt from a map."""
        query_string = build_query(query)

        that = self._clone()
        that._query_string = query_string
        that._query = parse_query(query_string)
        that._update_request_uri()
        return that

    def get_post(self, name: Optional[str] = None) -> Any:
        """Get a post parameter. Same lookup rules as :meth:`get_query`."""
        if name is None:
            return copy_tree(self._post)
        return copy_tree(resolve_path(self._post, name))

    def with_post(self, post: Mapping[str, Any]) -> "Request":
        """
        Return a copy with the given post data.

        Unless the request is ``multipart/form-data``, the body is replaced by
        the url-encoded data.
        """
        encoded = build_query(post)

        that = self._clone()
        that._post = parse_query(encoded)

        if not that.is_content_type("multipart/form-data"):
            that._set_body(StringBody(encoded))
            that._headers.set("Content-Type", "x-www-form-urlencoded")

        return that

    def get_cookie(self, name: Optional[str] = None) -> Any:
        """Get a cookie value. Same lookup rules as :meth:`get_query`."""
        if name is None:
            return copy_tree(self._cookies)
        return copy_tree(resolve_path(self._cookies, name))

    def with_cookies(self, cookies: Mapping[str, Any]) -> "Request":
        """Return a copy with the given cookies, rewriting the Cookie header."""
        encoded = build_query(cookies)

        that = self._clone()
        that._cookies = parse_query(encoded)

        if encoded:
            that._headers.set("Cookie", encoded.replace("&", "; "))
        else:
            that._headers.remove("Cookie")

        return that

    def with_added_cookies(self, cookies: Mapping[str, Any]) -> "Request":
        """Return a copy with extra cookies, which replace existing ones of the same name."""
        merged = dict(cookies)
        for name, value in self._cookies.items():
            merged.setdefault(name, value)
        return self.with_cookies(merged)

    def get_file(self, name: str) -> Optional[UploadedFile]:
        """The uploaded file at ``name``, or None if there is no file there."""
        value = resolve_path(self._files, name)
        return value if isinstance(value, UploadedFile) else None

    def get_files(self, name: Optional[str] = None) -> Any:
        """
        Get uploaded files.

        Returns:
            The whole files tree when ``name`` is None. Otherwise the files at
            ``name``: a list holding a single file, the files of a list, the
            files of a map, or an empty list.
        """
        if name is None:
            return copy_tree(self._files)

        value = resolve_path(self._files, name)

        if isinstance(value, UploadedFile):
            return [value]

        if isinstance(value, list):
            return [f for f in value if isinstance(f, UploadedFile)]

        if isinstance(value, dict):
            return {k: f for k, f in value.items() if isinstance(f, UploadedFile)}

        return []

    def with_files(self, files: FileTree) -> "Request":
        """
        Return a copy with uploaded files, as a ``multipart/form-data`` request.

        Raises:
            InvalidArgumentError: If ``files`` is not a map or list, or a leaf
                of the tree is not an UploadedFile.
        """
        files = copy_tree(files)
        check_files(files)

        that = self._clone()
        that._files = files
        that._set_body(StringBody(""))
        that._headers.set("Content-Type", "multipart/form-data")
        return that

    # Attributes

    @property
    def attributes(self) -> Dict[str, Any]:
        """Application-defined values attached to the request."""
        return dict(self._attributes)

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self._attributes.get(name, default)

    def with_attribute(self, name: str, value: Any) -> "Request":
        that = self._clone()
        that._attributes = dict(self._attributes)
        that._attributes[name] = value
        return that

    def without_attribute(self, name: str) -> "Request":
        if name not in self._attributes:
            return self
        that = self._clone()
        that._attributes = {k: v for k, v in self._attributes.items() if k != name}
        return that

    @property
    def start_line(self) -> str:
        return f"{self._method} {self._request_uri} HTTP/{self._protocol_version}"
