"""Tags naming the request and response messages of the websocket client protocol."""

from __future__ import annotations

import enum
import json
from typing import Union

JSONData = Union[bytes, bytearray, str]


class UnknownResponseTagError(ValueError):
    """Raised when a response carries a tag this client does not know."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"{tag}: unknown response tag")
        self.tag = tag


class RequestTag(enum.Enum):
    """Request kinds with their text and binary tags."""

    SEND = ("send", 0x0)
    SEND_ANONYMOUS = ("sendAnonymous", 0x1)
    REPLY = ("reply", 0x2)
    GET_SELF_ADDRESS = ("selfAddress", 0x3)
    CLOSED_CONNECTION = ("closedConnection", 0x4)
    GET_LANE_QUEUE_LENGTH = ("getLaneQueueLength", 0x5)

    def __init__(self, text: str, binary: int) -> None:
        self._text = text
        self._binary = binary

    def text(self) -> str:
        """The tag used in the ``type`` field of a JSON message."""
        return self._text

    def binary(self) -> int:
        """The tag used as the first byte of a binary message."""
        return self._binary


class ResponseTag(enum.Enum):
    """Response kinds with their text and binary tags."""

    ERROR = ("error", 0x0)
    RECEIVED = ("received", 0x1)
    SELF_ADDRESS = ("selfAddress", 0x2)
    LANE_QUEUE_LENGTH = ("laneQueueLength", 0x3)

    def __init__(self, text: str, binary: int) -> None:
        self._text = text
        self._binary = binary

    def text(self) -> str:
        """The tag used in the ``type`` field of a JSON message."""
        return self._text

    def binary(self) -> int:
        """The tag used as the first byte of a binary message."""
        return self._binary


def response_tag_from_json(data: JSONData) -> ResponseTag:
    """Return the tag named by the ``type`` field of a JSON response."""
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    try:
        message = json.loads(data)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON response: {exc}") from exc
    if message is None:
        message = {}
    if not isinstance(message, dict):
        raise ValueError(f"response must be a JSON object, got {type(message).__name__}")
    name = message.get("type")
    if name is None:
        name = ""
    if not isinstance(name, str):
        raise ValueError(f"response type must be a string, got {name!r}")
    for tag in ResponseTag:
        if tag.text() == name:
            return tag
    raise UnknownResponseTagError(name)


def response_tag_from_binary(value: int) -> ResponseTag:
    """Return the tag a binary response starts with."""
    for tag in ResponseTag:
        if tag.binary() == value:
            return tag
    raise UnknownResponseTagError(f"0x{value:X}")