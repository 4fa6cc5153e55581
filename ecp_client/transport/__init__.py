"""Transport layer for ECP sessions.

Components:
- ws: WebSocket upgrade to the device's ECP endpoint
- ws_client: frame model and the split send/receive halves
"""

from .ws import ECP_ORIGIN, ECP_PATH, ECP_SUBPROTOCOL, connect_websocket
from .ws_client import (
    EcpWsClient,
    WsFrame,
    WsFrameKind,
    WsFrameReader,
    WsFrameWriter,
    normalize_frame,
)

__all__ = [
    "ECP_ORIGIN",
    "ECP_PATH",
    "ECP_SUBPROTOCOL",
    "EcpWsClient",
    "WsFrame",
    "WsFrameKind",
    "WsFrameReader",
    "WsFrameWriter",
    "connect_websocket",
    "normalize_frame",
]
