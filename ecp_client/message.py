"""ECP message model and frame classification.

Every frame read from the device is classified into exactly one of the
message variants below. Classification never raises: input that does not
fit a more specific variant degrades to the most generic one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .transport.ws_client import WsFrame, WsFrameKind

_LOGGER = logging.getLogger(__name__)

AUTH_CHALLENGE_MARKER = '{"notify":"authenticate"'
AUTH_RESPONSE_MARKER = '{"response":"authenticate"'


def is_auth_challenge(content: str) -> bool:
    """Return True when the text is an authentication challenge request."""
    return AUTH_CHALLENGE_MARKER in content


def is_auth_response(content: str) -> bool:
    """Return True when the text is an authentication result."""
    return AUTH_RESPONSE_MARKER in content


def is_auth_message(content: str) -> bool:
    return is_auth_challenge(content) or is_auth_response(content)


@dataclass(frozen=True)
class AuthMessage:
    """Authentication challenge or result.

    ``reply`` is only set for a challenge seen during the handshake, and
    holds the text frame to send back.
    """

    text: str
    reply: str | None = None


@dataclass(frozen=True)
class BinaryMessage:
    data: bytes


@dataclass(frozen=True)
class ControlMessage:
    """Close, ping or pong frame."""

    data: bytes
    kind: WsFrameKind = WsFrameKind.CLOSE


@dataclass(frozen=True)
class TextMessage:
    text: str


@dataclass(frozen=True)
class UnrecognizedMessage:
    data: bytes


EcpMessage = (
    AuthMessage | BinaryMessage | ControlMessage | TextMessage | UnrecognizedMessage
)


class ContentType(Enum):
    """Content type hinted by a response's ``content-type`` field."""

    JPEG = "jpeg"
    PNG = "png"
    JSON = "json"
    XML = "xml"
    NONE = "none"

    @property
    def is_text(self) -> bool:
        return self in (ContentType.JSON, ContentType.XML)

    @property
    def is_image(self) -> bool:
        return self in (ContentType.JPEG, ContentType.PNG)


# Substring checks, first match wins.
_CONTENT_TYPE_HINTS: tuple[tuple[str, ContentType], ...] = (
    ("xml", ContentType.XML),
    ("jpeg", ContentType.JPEG),
    ("json", ContentType.JSON),
    ("png", ContentType.PNG),
)


def content_type_from_hint(hint: str) -> ContentType:
    """Map an advertised MIME-ish string to a ContentType."""
    for needle, content_type in _CONTENT_TYPE_HINTS:
        if needle in hint:
            return content_type
    return ContentType.NONE


@dataclass(frozen=True)
class TextContent:
    string: str


@dataclass(frozen=True)
class DataContent:
    data: bytes


ContentData = TextContent | DataContent


def classify(frame: WsFrame) -> EcpMessage:
    """Classify a transport frame received outside the auth handshake."""
    if frame.kind.is_control:
        return ControlMessage(frame.payload_bytes(), frame.kind)

    if frame.kind is WsFrameKind.BINARY:
        return BinaryMessage(frame.payload_bytes())

    if frame.kind is WsFrameKind.TEXT:
        text = frame_text(frame)
        if text is None:
            return UnrecognizedMessage(frame.payload_bytes())
        if is_auth_message(text):
            _LOGGER.warning("Unexpected auth message received: %s", text)
            return AuthMessage(text)
        return TextMessage(text)

    return UnrecognizedMessage(frame.payload_bytes())


def message_to_frame(message: EcpMessage) -> WsFrame:
    """Re-encode a message as a transport frame."""
    if isinstance(message, (AuthMessage, TextMessage)):
        return WsFrame.text(message.text)
    if isinstance(message, ControlMessage):
        return WsFrame(message.kind, message.data)
    return WsFrame.binary(message.data)


def frame_text(frame: WsFrame) -> str | None:
    """Return the text of a frame, or None if its bytes are not UTF-8."""
    if isinstance(frame.data, str):
        return frame.data
    try:
        return bytes(frame.data).decode("utf-8")
    except UnicodeDecodeError:
        return None
