"""src/wiremodel/transport/environ.py

Building a Request from a WSGI/CGI environ.
"""

# pylint: disable=protected-access

import enum
import logging
import os
import re
import urllib.parse
from dataclasses import dataclass
from http.cookies import CookieError, SimpleCookie
from typing import Any, Dict, Mapping, Optional, Tuple

from wiremodel.exceptions import HttpBadRequestError, InvalidArgumentError
from wiremodel.http.body import StreamBody
from wiremodel.model.request import Request
from wiremodel.utils.serialization import FormValue
from wiremodel.utils.validators import check_files, copy_tree

__all__ = ["HostPortSource", "EnvironOptions", "request_from_environ"]

logger = logging.getLogger(__name__)

_PROTOCOL = re.compile(r"^HTTP/(.+)\Z")
_FORWARDED_FOR_SEPARATOR = re.compile(r",\s*")
_TRUE_VALUES = ("1", "true", "yes", "on")


class HostPortSource(enum.Enum):
    """
    Where the host name and port of the request are taken from.

    ``HTTP_HOST`` carries what the client asked for, ``SERVER_NAME`` and
    ``SERVER_PORT`` what the server is configured with. Host and port are
    chosen independently.
    """

    PREFER_HTTP_HOST = "prefer_http_host"
    PREFER_SERVER_NAME = "prefer_server_name"
    ONLY_HTTP_HOST = "only_http_host"
    ONLY_SERVER_NAME = "only_server_name"


@dataclass
class EnvironOptions:
    """
    Request ingestion configuration.

    Attributes:
        trust_proxy: Whether to honour ``X-Forwarded-*`` headers.
        host_port_source: Precedence between HTTP_HOST and SERVER_NAME/SERVER_PORT.
    """

    trust_proxy: bool = False
    host_port_source: HostPortSource = HostPortSource.PREFER_HTTP_HOST

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EnvironOptions":
        """
        Read options from ``WIREMODEL_TRUST_PROXY`` and ``WIREMODEL_HOST_PORT_SOURCE``.

        Raises:
            InvalidArgumentError: If the host/port source is not a known name.
        """
        if env is None:
            env = os.environ

        trust_proxy = env.get("WIREMODEL_TRUST_PROXY", "").strip().lower() in _TRUE_VALUES

        source_name = env.get("WIREMODEL_HOST_PORT_SOURCE", "").strip()
        if not source_name:
            return cls(trust_proxy=trust_proxy)

        try:
            source = HostPortSource[source_name.upper()]
        except KeyError as e:
            raise InvalidArgumentError(f"Unknown host/port source: {source_name}") from e

        return cls(trust_proxy=trust_proxy, host_port_source=source)


def _parse_port(value: str, source: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise HttpBadRequestError(f"Invalid port in {source}: {value}") from e


def _select_host_port(
    environ: Mapping[str, Any], source: HostPortSource, default_port: int
) -> Tuple[Optional[str], Optional[int]]:
    http_host: Optional[str] = None
    http_port: Optional[int] = None

    if "HTTP_HOST" in environ:
        host, colon, port = environ["HTTP_HOST"].rpartition(":")
        if colon:
            http_host = host
            http_port = _parse_port(port, "HTTP_HOST")
        else:
            http_host = port
            http_port = default_port

    server_name: Optional[str] = environ.get("SERVER_NAME")
    server_port: Optional[int] = None
    if "SERVER_PORT" in environ:
        server_port = _parse_port(environ["SERVER_PORT"], "SERVER_PORT")

    if source is HostPortSource.PREFER_HTTP_HOST:
        return (
            http_host if http_host is not None else server_name,
            http_port if http_port is not None else server_port,
        )

    if source is HostPortSource.PREFER_SERVER_NAME:
        return (
            server_name if server_name is not None else http_host,
            server_port if server_port is not None else http_port,
        )

    if source is HostPortSource.ONLY_HTTP_HOST:
        return http_host, http_port

    return server_name, server_port


def _request_target(environ: Mapping[str, Any]) -> Optional[str]:
    if "REQUEST_URI" in environ:
        return environ["REQUEST_URI"]

    if "PATH_INFO" not in environ and "SCRIPT_NAME" not in environ:
        return None

    path = environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")
    target = urllib.parse.quote(path) or "/"
    query_string = environ.get("QUERY_STRING", "")
    if query_string:
        target += "?" + query_string
    return target


def _environ_headers(environ: Mapping[str, Any]) -> Dict[str, str]:
    headers: Dict[str, str] = {}

    for key, value in environ.items():
        if key.startswith("HTTP_"):
            name = key[5:]
        elif key == "CONTENT_TYPE" or (key == "CONTENT_LENGTH" and value):
            name = key
        else:
            continue

        headers[name.replace("_", "-").lower()] = value

    return headers


def _parse_cookie_header(header: str) -> Dict[str, FormValue]:
    cookie: SimpleCookie = SimpleCookie()
    try:
        cookie.load(header)
    except CookieError:
        logger.debug("Ignoring malformed Cookie header %r", header)
        return {}

    return {k: urllib.parse.unquote(morsel.value) for k, morsel in cookie.items()}


def request_from_environ(
    environ: Mapping[str, Any],
    options: Optional[EnvironOptions] = None,
    *,
    post: Optional[Mapping[str, Any]] = None,
    cookies: Optional[Mapping[str, Any]] = None,
    files: Any = None,
) -> Request:
    """
    Build the Request described by a WSGI/CGI environ.

    Args:
        environ: The environ mapping.
        options: Ingestion options, defaults to :class:`EnvironOptions`.
        post: Decoded post data, if the caller parsed the body.
        cookies: Cookie values; parsed from ``HTTP_COOKIE`` when omitted.
        files: Tree of UploadedFile.

    Returns:
        The request. Its headers are copied from the environ as-is, and its
        body reads ``wsgi.input`` when the request declares one.

    Raises:
        HttpBadRequestError: If the protocol or a port is not valid.
        InvalidArgumentError: If ``files`` holds something other than UploadedFile.
    """
    if options is None:
        options = EnvironOptions()

    request = Request()

    if environ.get("HTTPS") in ("on", "1") or environ.get("wsgi.url_scheme") == "https":
        request._secure = True
        request._port = 443

    host, port = _select_host_port(environ, options.host_port_source, request._port)

    if host is not None:
        request._host = host

    if port is not None:
        request._port = port

    if "REQUEST_METHOD" in environ:
        request._method = environ["REQUEST_METHOD"]

    target = _request_target(environ)
    if target is not None:
        request = request.with_request_uri(target)

    if "SERVER_PROTOCOL" in environ:
        match = _PROTOCOL.match(environ["SERVER_PROTOCOL"])
        if match is None:
            raise HttpBadRequestError(f"Invalid protocol: {environ['SERVER_PROTOCOL']}")
        request._protocol_version = match.group(1)

    if "REMOTE_ADDR" in environ:
        request._client_ip = environ["REMOTE_ADDR"]

    for name, value in _environ_headers(environ).items():
        request._headers.set(name, value)

    if post is not None:
        request._post = copy_tree(post)

    if cookies is not None:
        request._cookies = copy_tree(cookies)
    elif "HTTP_COOKIE" in environ:
        request._cookies = _parse_cookie_header(environ["HTTP_COOKIE"])

    if files is not None:
        files = copy_tree(files)
        check_files(files)
        request._files = files

    if environ.get("CONTENT_LENGTH") or "HTTP_TRANSFER_ENCODING" in environ:
        request._body = StreamBody(environ["wsgi.input"])

    if options.trust_proxy:
        _apply_forwarded_headers(request, environ)

    logger.debug("Ingested request %s %s", request.method, request.url)
    return request


def _apply_forwarded_headers(request: Request, environ: Mapping[str, Any]) -> None:
    if "HTTP_X_FORWARDED_FOR" in environ:
        addresses = _FORWARDED_FOR_SEPARATOR.split(environ["HTTP_X_FORWARDED_FOR"])
        request._client_ip = addresses[-1]

    if "HTTP_X_FORWARDED_HOST" in environ:
        request._host = environ["HTTP_X_FORWARDED_HOST"]

    if "HTTP_X_FORWARDED_PORT" in environ:
        request._port = _parse_port(environ["HTTP_X_FORWARDED_PORT"], "X-Forwarded-Port")

    if "HTTP_X_FORWARDED_PROTO" in environ:
        request._secure = environ["HTTP_X_FORWARDED_PROTO"] == "https"
