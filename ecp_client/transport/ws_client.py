"""WebSocket client wrapper for ECP sessions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from websockets.asyncio.client import ClientConnection
from websockets.exceptions import ConnectionClosed
from websockets.frames import Frame, Opcode

from ..errors import EcpConnectionError
from .ws import ECP_PATH, ECP_SUBPROTOCOL, connect_websocket


class WsFrameKind(Enum):
    """Normalized WebSocket frame kinds."""

    TEXT = "text"
    BINARY = "binary"
    CLOSE = "close"
    PING = "ping"
    PONG = "pong"
    UNKNOWN = "unknown"

    @property
    def is_control(self) -> bool:
        """Whether this kind is a close, ping or pong frame."""
        return self in _CONTROL_KINDS


_CONTROL_KINDS = frozenset({WsFrameKind.CLOSE, WsFrameKind.PING, WsFrameKind.PONG})

_OPCODE_KINDS = {
    Opcode.TEXT: WsFrameKind.TEXT,
    Opcode.BINARY: WsFrameKind.BINARY,
    Opcode.CLOSE: WsFrameKind.CLOSE,
    Opcode.PING: WsFrameKind.PING,
    Opcode.PONG: WsFrameKind.PONG,
}


@dataclass(frozen=True)
class WsFrame:
    """One transport frame as seen by the protocol layer."""

    kind: WsFrameKind
    data: str | bytes = b""

    @classmethod
    def text(cls, text: str) -> WsFrame:
        return cls(WsFrameKind.TEXT, text)

    @classmethod
    def binary(cls, data: bytes) -> WsFrame:
        return cls(WsFrameKind.BINARY, data)

    def payload_bytes(self) -> bytes:
        """Return the frame payload as bytes regardless of kind."""
        if isinstance(self.data, str):
            return self.data.encode("utf-8")
        return bytes(self.data)


def normalize_frame(msg: Any) -> WsFrame:
    """Normalize backend-specific frames into WsFrame."""
    if isinstance(msg, str):
        return WsFrame(WsFrameKind.TEXT, msg)
    if isinstance(msg, (bytes, bytearray, memoryview)):
        return WsFrame(WsFrameKind.BINARY, bytes(msg))
    if isinstance(msg, Frame):
        kind = _OPCODE_KINDS.get(msg.opcode, WsFrameKind.UNKNOWN)
        if kind is WsFrameKind.TEXT:
            try:
                return WsFrame(kind, bytes(msg.data).decode("utf-8"))
            except UnicodeDecodeError:
                return WsFrame(WsFrameKind.UNKNOWN, bytes(msg.data))
        return WsFrame(kind, bytes(msg.data))
    return WsFrame(WsFrameKind.UNKNOWN, str(msg).encode("utf-8"))


class WsFrameWriter:
    """Send half of an ECP WebSocket connection."""

    def __init__(self, ws: ClientConnection) -> None:
        self._ws = ws

    async def send(self, frame: WsFrame) -> None:
        """Send a frame to the device.

        Raises:
            EcpConnectionError: If the connection is closed
        """
        try:
            if frame.kind is WsFrameKind.TEXT:
                await self._ws.send(
                    frame.data
                    if isinstance(frame.data, str)
                    else frame.payload_bytes().decode("utf-8")
                )
            elif frame.kind is WsFrameKind.PING:
                await self._ws.ping(frame.payload_bytes())
            elif frame.kind is WsFrameKind.PONG:
                await self._ws.pong(frame.payload_bytes())
            elif frame.kind is WsFrameKind.CLOSE:
                await self._ws.close()
            else:
                await self._ws.send(frame.payload_bytes())
        except ConnectionClosed as err:
            raise EcpConnectionError("WebSocket is closed") from err

    async def send_text(self, text: str) -> None:
        """Send a text frame to the device."""
        await self.send(WsFrame.text(text))

    async def close(self) -> None:
        await self._ws.close()


class WsFrameReader:
    """Receive half of an ECP WebSocket connection.

    After the peer closes, one CLOSE frame carrying the close payload is
    returned, then every further call returns None.
    """

    def __init__(self, ws: ClientConnection) -> None:
        self._ws = ws
        self._ended = False

    @property
    def ended(self) -> bool:
        return self._ended

    async def receive(self) -> WsFrame | None:
        """Return the next frame, or None at end of stream."""
        if self._ended:
            return None
        try:
            msg = await self._ws.recv()
        except ConnectionClosed as err:
            self._ended = True
            payload = err.rcvd.serialize() if err.rcvd is not None else b""
            return WsFrame(WsFrameKind.CLOSE, payload)
        return normalize_frame(msg)


class EcpWsClient:
    """Wrapper around websockets library for ECP sessions."""

    def __init__(self) -> None:
        self._ws: ClientConnection | None = None

    async def connect(
        self,
        host: str,
        port: int,
        *,
        path: str = ECP_PATH,
        subprotocol: str = ECP_SUBPROTOCOL,
        timeout: float = 15.0,
    ) -> None:
        """Connect to the device websocket."""
        self._ws = await connect_websocket(
            host,
            port,
            path=path,
            subprotocol=subprotocol,
            timeout=timeout,
        )

    async def close(self) -> None:
        """Close the websocket connection."""
        if self._ws is not None:
            await self._ws.close()

    def split(self) -> tuple[WsFrameWriter, WsFrameReader]:
        """Split the connection into independent send and receive halves."""
        if self._ws is None:
            raise EcpConnectionError("WebSocket is not connected")
        return WsFrameWriter(self._ws), WsFrameReader(self._ws)
