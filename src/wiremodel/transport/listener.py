"""src/wiremodel/transport/listener.py

Message listeners, notified of each request and response exchanged.
"""

import enum
import logging
from typing import Optional, Protocol

from wiremodel.http.http11 import CRLF
from wiremodel.model.message import Message
from wiremodel.model.request import Request
from wiremodel.model.response import Response

__all__ = ["MessageListener", "ListenerMask", "LoggingListener"]

logger = logging.getLogger(__name__)


class MessageListener(Protocol):
    """Receives every message sent or received."""

    def listen(self, message: Message) -> None:
        ...


class ListenerMask(enum.IntFlag):
    """Parts of the exchange a listener reports."""

    REQUEST_HEADER = 1
    REQUEST_BODY = 2
    RESPONSE_HEADER = 4
    RESPONSE_BODY = 8

    HEADER = 5
    BODY = 10

    REQUEST = 3
    RESPONSE = 12

    ALL = 15


class LoggingListener:
    """
    Logs message heads and bodies at DEBUG level.

    Args:
        mask: Parts to log.
        log: Logger to write to, defaults to this module's logger.
    """

    __slots__ = ("mask", "log")

    def __init__(self, mask: ListenerMask = ListenerMask.ALL, log: Optional[logging.Logger] = None):
        self.mask = mask
        self.log = log if log is not None else logger

    def listen(self, message: Message) -> None:
        if isinstance(message, Request):
            self._log(message, ListenerMask.REQUEST_HEADER, ListenerMask.REQUEST_BODY)
        elif isinstance(message, Response):
            self._log(message, ListenerMask.RESPONSE_HEADER, ListenerMask.RESPONSE_BODY)

    def _log(self, message: Message, header: ListenerMask, body: ListenerMask) -> None:
        if self.mask & header:
            self.log.debug("%s", message.head.rstrip(CRLF))

        if self.mask & body and message.body is not None:
            content = str(message.body.copy())
            if content:
                self.log.debug("%s", content)
