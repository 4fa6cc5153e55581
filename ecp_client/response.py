"""Response decoding for ECP text frames.

Device output is not under our control, so decoding is permissive: every
malformed field falls back to a sentinel value or a coarser representation
instead of failing the whole response.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from .message import (
    ContentData,
    ContentType,
    DataContent,
    EcpMessage,
    TextContent,
    TextMessage,
    content_type_from_hint,
)

_LOGGER = logging.getLogger(__name__)

NO_RESPONSE_ID = -1
NO_STATUS = 0

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


@dataclass(frozen=True)
class EcpResponse:
    """Structured response to an ECP request.

    Attributes:
        subject: Value of the ``response`` field, empty if absent.
        response_id: Parsed ``response-id``, -1 if absent or unparsable.
        content_type: Hint from ``content-type``, None if the field is absent.
        content_data: Decoded ``content-data`` payload, if any.
        status_code: Parsed ``status``, 0 if absent or unparsable.
        status_message: Value of ``status-msg``, empty if absent.
        raw_bytes: The original frame text as UTF-8 bytes.
    """

    subject: str = ""
    response_id: int = NO_RESPONSE_ID
    content_type: ContentType | None = None
    content_data: ContentData | None = None
    status_code: int = NO_STATUS
    status_message: str = ""
    raw_bytes: bytes = b""

    def is_success(self) -> bool:
        """Whether the device reported status 200."""
        return self.status_code == 200

    @classmethod
    def from_message(cls, message: EcpMessage) -> EcpResponse | None:
        """Decode a text message. Other message variants yield None."""
        if isinstance(message, TextMessage):
            return decode_response(message.text)
        return None


def decode_response(text: str) -> EcpResponse:
    """Decode a response frame's JSON body."""
    raw_bytes = text.encode("utf-8")
    try:
        body = json.loads(text)
    except (ValueError, RecursionError) as err:
        _LOGGER.warning("Unable to deserialize response: %s", err)
        return EcpResponse(raw_bytes=raw_bytes)

    if not isinstance(body, dict):
        body = {}

    content_type = _parse_content_type(body.get("content-type"))
    return EcpResponse(
        subject=_string_field(body, "response"),
        response_id=_int_field(body, "response-id", NO_RESPONSE_ID),
        content_type=content_type,
        content_data=_parse_content_data(body.get("content-data"), content_type),
        status_code=_int_field(body, "status", NO_STATUS),
        status_message=_string_field(body, "status-msg"),
        raw_bytes=raw_bytes,
    )


def _string_field(body: dict[str, Any], name: str) -> str:
    value = body.get(name)
    return value if isinstance(value, str) else ""


def _int_field(body: dict[str, Any], name: str, default: int) -> int:
    """Parse a string-encoded 32-bit integer field."""
    value = body.get(name)
    if not isinstance(value, str) or not _INT_RE.fullmatch(value):
        return default
    parsed = int(value)
    if not _INT32_MIN <= parsed <= _INT32_MAX:
        return default
    return parsed


def _parse_content_type(value: Any) -> ContentType | None:
    if not isinstance(value, str):
        return None
    return content_type_from_hint(value)


def _parse_content_data(
    value: Any, content_type: ContentType | None
) -> ContentData | None:
    if not isinstance(value, str):
        return None

    try:
        decoded = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as err:
        _LOGGER.warning("Unable to decode content-data from base64: %s", err)
        return TextContent(value)

    if content_type is None or content_type is ContentType.NONE:
        return None

    if content_type.is_text:
        try:
            return TextContent(decoded.decode("utf-8"))
        except UnicodeDecodeError as err:
            _LOGGER.warning("Unable to decode JSON/XML content as UTF-8: %s", err)
            return DataContent(decoded)

    return DataContent(decoded)
