"""A client for the websocket interface of a nym client."""

from __future__ import annotations

import queue
import sys
from typing import Any, Iterator

import websocket

from nymkit.wsc.messages import Request, Response, response_from_json


class BinaryMessageNotSupportedError(Exception):
    """Raised for binary frames, which are not supported."""

    def __init__(self) -> None:
        super().__init__("websocket frame BinaryMessage not supported yet")


class ConnectionNotEstablishedError(Exception):
    """Raised when sending before a connection is established."""

    def __init__(self) -> None:
        super().__init__("connection is not established")


_CLOSED = object()


class Client:
    """Sends requests to a websocket server and collects its responses."""

    def __init__(self, server: str) -> None:
        self.server = server
        self._conn: Any = None
        self._messages: queue.Queue[Any] = queue.Queue(maxsize=1)

    def dial(self) -> None:
        """Open the connection to the server."""
        try:
            self._conn = websocket.create_connection(self.server)
        except (websocket.WebSocketException, OSError) as exc:
            raise ConnectionError(f"dial {self.server}: {exc}") from exc

    def listen_and_serve(self) -> None:
        """Read frames until the connection ends, queueing every decoded response.

        Frames that cannot be decoded, and binary frames, are reported on
        standard error and skipped. Errors from the connection propagate.
        When this returns or raises, ``messages`` stops.
        """
        if self._conn is None:
            self._messages.put(_CLOSED)
            raise ConnectionNotEstablishedError()
        try:
            while True:
                opcode, data = self._conn.recv_data()
                if opcode == websocket.ABNF.OPCODE_CLOSE:
                    return
                if opcode == websocket.ABNF.OPCODE_TEXT:
                    try:
                        response = response_from_json(data)
                    except ValueError as exc:
                        print(exc, file=sys.stderr)
                        continue
                    self._messages.put(response)
                elif opcode == websocket.ABNF.OPCODE_BINARY:
                    print(BinaryMessageNotSupportedError(), file=sys.stderr)
        finally:
            self._messages.put(_CLOSED)

    def close(self) -> None:
        """Send a close frame if a connection is open."""
        if self._conn is not None:
            self._conn.send_close(status=websocket.STATUS_NORMAL, reason=b"")

    def messages(self) -> Iterator[Response]:
        """Yield responses as they arrive, until the listener stops."""
        while True:
            item = self._messages.get()
            if item is _CLOSED:
                self._messages.put(_CLOSED)
                return
            yield item

    def send_request_as_text(self, request: Request) -> None:
        """Send ``request`` as a JSON text frame."""
        if self._conn is None:
            raise ConnectionNotEstablishedError()
        self._conn.send(request.to_json(), opcode=websocket.ABNF.OPCODE_TEXT)