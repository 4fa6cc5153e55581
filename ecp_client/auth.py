"""Challenge-response authentication for ECP sessions.

The device opens every session with a notify frame carrying a base64
nonce at a fixed position::

    {"notify":"authenticate","param-challenge":"<24 chars>",...}

The client answers with base64(SHA-1(nonce || key)) and the device then
sends an ``authenticate`` response frame that either carries status 200 or
an error message.
"""

from __future__ import annotations

import base64
import hashlib
import logging
from collections.abc import Awaitable, Callable

from .errors import EcpConnectionError
from .message import AuthMessage, frame_text, is_auth_challenge, is_auth_message
from .transport.ws_client import WsFrame, WsFrameKind

_LOGGER = logging.getLogger(__name__)

CHALLENGE_START = 44
CHALLENGE_END = 68

ReceiveFn = Callable[[], Awaitable[WsFrame | None]]
SendFn = Callable[[str], Awaitable[None]]


def challenge_digest(challenge: bytes, key: bytes) -> str:
    """Return base64(SHA-1(challenge || key))."""
    digest = hashlib.sha1(challenge + key).digest()
    return base64.b64encode(digest).decode("ascii")


def build_auth_reply(counter: int, challenge_response: str) -> str:
    return (
        '{"request":"authenticate",'
        f'"request-id":"{counter}",'
        f'"param-response":"{challenge_response}"}}'
    )


def generate_challenge_response(message: str, counter: int, key: bytes) -> str:
    """Build the reply frame text for an authentication challenge."""
    raw = message.encode("utf-8")
    if len(raw) < CHALLENGE_END:
        _LOGGER.warning("Auth challenge is shorter than expected: %s", message)
    challenge = raw[CHALLENGE_START:CHALLENGE_END]
    return build_auth_reply(counter, challenge_digest(challenge, key))


def try_classify_auth(frame: WsFrame, counter: int, key: bytes) -> AuthMessage | None:
    """Return an AuthMessage only when the frame is auth related."""
    if frame.kind is not WsFrameKind.TEXT:
        return None
    text = frame_text(frame)
    if text is None:
        return None
    if is_auth_challenge(text):
        return AuthMessage(text, generate_challenge_response(text, counter, key))
    if is_auth_message(text):
        return AuthMessage(text)
    return None


async def authenticate(
    receive: ReceiveFn,
    send: SendFn,
    key: bytes,
    counter: int,
) -> bool:
    """Run the challenge-response handshake.

    Frames that are not auth related are dropped. Blocks until the device
    sends a decisive result or the stream ends.

    Returns:
        True if the device accepted the challenge response
    """
    replied = False
    while True:
        frame = await receive()
        if frame is None:
            _LOGGER.warning("Connection ended during authentication")
            return False

        message = try_classify_auth(frame, counter, key)
        if message is None:
            continue

        if message.reply is not None:
            if replied:
                _LOGGER.warning("Ignoring repeated auth challenge")
                continue
            try:
                await send(message.reply)
            except EcpConnectionError as err:
                _LOGGER.warning("Failed to send challenge response: %s", err)
                return False
            replied = True
            _LOGGER.debug("Challenge response sent (request-id %d)", counter)
            continue

        if "error" in message.text.lower():
            _LOGGER.error("Authentication error: %s", message.text)
            return False

        if "200" in message.text:
            return True

        _LOGGER.warning("Unexpected auth message received: %s", message.text)
