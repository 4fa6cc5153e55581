"""ECP session over a split WebSocket connection."""

from __future__ import annotations

import logging

from .auth import authenticate
from .message import EcpMessage, classify
from .transport.ws_client import EcpWsClient, WsFrame, WsFrameReader, WsFrameWriter

_LOGGER = logging.getLogger(__name__)


class EcpSession:
    """One WebSocket connection to a device.

    The session is the only owner of both halves of the socket. The
    ``authenticated`` flag only ever moves from False to True.
    """

    def __init__(self, writer: WsFrameWriter, reader: WsFrameReader) -> None:
        self.writer = writer
        self.reader = reader
        self._authenticated = False

    @classmethod
    async def open(cls, host: str, port: int, *, timeout: float = 15.0) -> EcpSession:
        """Open an unauthenticated session to the device.

        Raises:
            EcpTimeout: If the connection attempt timed out
            EcpHandshakeError: If the WebSocket upgrade was rejected
            EcpConnectionError: If the device could not be reached
        """
        ws_client = EcpWsClient()
        await ws_client.connect(host, port, timeout=timeout)
        writer, reader = ws_client.split()
        return cls(writer, reader)

    @property
    def authenticated(self) -> bool:
        return self._authenticated

    async def authenticate(self, key: bytes, counter: int) -> bool:
        """Run the challenge-response handshake, dropping all other frames."""
        if await authenticate(self.reader.receive, self.writer.send_text, key, counter):
            self._authenticated = True
        return self._authenticated

    async def send(self, frame: WsFrame) -> None:
        await self.writer.send(frame)

    async def next_message(self) -> EcpMessage | None:
        """Return the next classified message, or None at end of stream."""
        frame = await self.reader.receive()
        if frame is None:
            return None
        return classify(frame)

    async def close(self) -> None:
        await self.writer.close()
