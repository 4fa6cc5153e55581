"""Pytest configuration and fixtures for ecp_client tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from ecp_client.errors import EcpConnectionError
from ecp_client.session import EcpSession
from ecp_client.transport.ws_client import WsFrame, WsFrameKind

KEY = b"secretkey"
NONCE = "Zm9vYmFyYmF6cXV4MTIzNA=="
CHALLENGE = (
    '{"notify":"authenticate","param-challenge":"'
    + NONCE
    + '","timestamp":"1234.567"}'
)
# base64(sha1(NONCE + KEY))
CHALLENGE_DIGEST = "rMEdjrR+O7eIVuN0atHROhK8Iic="
AUTH_OK = '{"response":"authenticate","response-id":"0","status":"200","status-msg":"OK"}'
AUTH_ERROR = (
    '{"response":"authenticate","response-id":"0","status":"401",'
    '"status-msg":"Error: bad response"}'
)


class FakeReader:
    """Receive half replaying a fixed list of frames, then end of stream."""

    def __init__(self, frames: list[WsFrame]) -> None:
        self._frames = list(frames)

    async def receive(self) -> WsFrame | None:
        if not self._frames:
            return None
        return self._frames.pop(0)


class FakeWriter:
    """Send half recording every frame sent."""

    def __init__(self, *, fail: bool = False) -> None:
        self.sent: list[WsFrame] = []
        self.closed = False
        self._fail = fail

    async def send(self, frame: WsFrame) -> None:
        if self._fail:
            raise EcpConnectionError("WebSocket is closed")
        self.sent.append(frame)

    async def send_text(self, text: str) -> None:
        await self.send(WsFrame.text(text))

    async def close(self) -> None:
        self.closed = True

    @property
    def sent_text(self) -> list[str]:
        return [frame.data for frame in self.sent if frame.kind is WsFrameKind.TEXT]


def text(data: str) -> WsFrame:
    return WsFrame(WsFrameKind.TEXT, data)


def make_session(frames: list[WsFrame], *, fail_send: bool = False) -> EcpSession:
    return EcpSession(FakeWriter(fail=fail_send), FakeReader(frames))  # type: ignore[arg-type]


@pytest.fixture
def mock_ws() -> AsyncMock:
    """Create a mock websockets ClientConnection."""
    return AsyncMock()
