"""Requests sent to and responses received from a nym websocket client."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping

from nymkit.wsc.tags import JSONData, RequestTag, ResponseTag, response_tag_from_json

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _encode(message: Mapping[str, Any]) -> bytes:
    text = json.dumps(message, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    for char, escape in _HTML_ESCAPES.items():
        text = text.replace(char, escape)
    return text.encode("utf-8")


def _load_object(data: JSONData) -> Mapping[str, Any]:
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    message = json.loads(data)
    if message is None:
        return {}
    if not isinstance(message, dict):
        raise ValueError(f"response must be a JSON object, got {type(message).__name__}")
    return message


def _string(message: Mapping[str, Any], key: str) -> str:
    value = message.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {value!r}")
    return value


class Request:
    """A message sent to the websocket client."""

    tag: ClassVar[RequestTag]

    def to_json(self) -> bytes:
        """Encode the request as the payload of a text frame."""
        return _encode({"type": self.tag.text()})


@dataclass(frozen=True)
class Send(Request):
    """Send a message to a recipient."""

    tag: ClassVar[RequestTag] = RequestTag.SEND

    message: str
    recipient: str

    def to_json(self) -> bytes:
        return _encode(
            {"type": self.tag.text(), "message": self.message, "recipient": self.recipient}
        )


@dataclass(frozen=True)
class SendAnonymous(Request):
    """Send a message anonymously, attaching reply SURBs."""

    tag: ClassVar[RequestTag] = RequestTag.SEND_ANONYMOUS

    message: str
    recipient: str
    reply_surbs: int

    def to_json(self) -> bytes:
        return _encode(
            {
                "type": self.tag.text(),
                "message": self.message,
                "recipient": self.recipient,
                "replySurbs": self.reply_surbs,
            }
        )


@dataclass(frozen=True)
class Reply(Request):
    """Reply to an anonymous sender through its sender tag."""

    tag: ClassVar[RequestTag] = RequestTag.REPLY

    message: str
    sender_tag: str

    def to_json(self) -> bytes:
        return _encode(
            {"type": self.tag.text(), "message": self.message, "senderTag": self.sender_tag}
        )


@dataclass(frozen=True)
class GetSelfAddress(Request):
    """Ask for the client's own address."""

    tag: ClassVar[RequestTag] = RequestTag.GET_SELF_ADDRESS

    def to_json(self) -> bytes:
        return _encode({"type": self.tag.text()})


@dataclass(frozen=True)
class ClosedConnection(Request):
    """Announce that a connection was closed."""

    tag: ClassVar[RequestTag] = RequestTag.CLOSED_CONNECTION

    def to_json(self) -> bytes:
        return _encode({"type": self.tag.text()})


@dataclass(frozen=True)
class GetLaneQueueLength(Request):
    """Ask for the length of a lane's queue."""

    tag: ClassVar[RequestTag] = RequestTag.GET_LANE_QUEUE_LENGTH

    def to_json(self) -> bytes:
        return _encode({"type": self.tag.text()})


class Response:
    """A message received from the websocket client."""

    tag: ClassVar[ResponseTag]

    def type(self) -> ResponseTag:
        """The tag of this response."""
        return self.tag


@dataclass(frozen=True)
class ErrorResponse(Response):
    """An error reported by the websocket client."""

    tag: ClassVar[ResponseTag] = ResponseTag.ERROR

    message: str = ""

    @classmethod
    def from_json(cls, data: JSONData) -> ErrorResponse:
        return cls(message=_string(_load_object(data), "message"))


@dataclass(frozen=True)
class Received(Response):
    """A message received from the mixnet; ``sender_tag`` is empty unless anonymous."""

    tag: ClassVar[ResponseTag] = ResponseTag.RECEIVED

    message: str = ""
    sender_tag: str = ""

    @classmethod
    def from_json(cls, data: JSONData) -> Received:
        message = _load_object(data)
        return cls(message=_string(message, "message"), sender_tag=_string(message, "senderTag"))


@dataclass(frozen=True)
class SelfAddress(Response):
    """The client's own mixnet address."""

    tag: ClassVar[ResponseTag] = ResponseTag.SELF_ADDRESS

    address: str = ""

    @classmethod
    def from_json(cls, data: JSONData) -> SelfAddress:
        return cls(address=_string(_load_object(data), "address"))


@dataclass(frozen=True)
class LaneQueueLength(Response):
    """An answer to a lane queue length request."""

    tag: ClassVar[ResponseTag] = ResponseTag.LANE_QUEUE_LENGTH

    @classmethod
    def from_json(cls, data: JSONData) -> LaneQueueLength:
        _load_object(data)
        return cls()


_RESPONSES: dict[ResponseTag, Any] = {
    ResponseTag.ERROR: ErrorResponse,
    ResponseTag.RECEIVED: Received,
    ResponseTag.SELF_ADDRESS: SelfAddress,
    ResponseTag.LANE_QUEUE_LENGTH: LaneQueueLength,
}


def response_from_json(data: JSONData) -> Response:
    """Decode a JSON response into the class its ``type`` field names."""
    tag = response_tag_from_json(data)
    try:
        return _RESPONSES[tag].from_json(data)
    except ValueError as exc:
        raise ValueError(f"cannot decode data as {tag.text()}: {exc}") from exc