"""WebSocket helpers for the ECP device transport."""

from __future__ import annotations

import asyncio

import websockets
from websockets.asyncio.client import ClientConnection
from websockets.exceptions import (
    InvalidHandshake,
    InvalidURI,
    WebSocketException,
)
from websockets.typing import Subprotocol

from ..errors import (
    EcpConnectionError,
    EcpHandshakeError,
    EcpTimeout,
)

ECP_PATH = "/ecp-session"
ECP_SUBPROTOCOL = "ecp-2"
ECP_ORIGIN = "Android"


async def connect_websocket(
    host: str,
    port: int,
    *,
    path: str = ECP_PATH,
    subprotocol: str = ECP_SUBPROTOCOL,
    origin: str = ECP_ORIGIN,
    ping_interval: int | None = None,
    timeout: float = 15.0,
) -> ClientConnection:
    """Connect to the ECP session endpoint of a device.

    The device only accepts upgrades that advertise the ``ecp-2`` subprotocol.
    A random ``Sec-WebSocket-Key`` is generated by websockets for every
    connection attempt.

    Args:
        host: Device IPv4 address
        port: Device ECP port
        path: WebSocket path (default: /ecp-session)
        subprotocol: Subprotocol advertised in the upgrade request
        origin: Value sent in the Sec-WebSocket-Origin header
        ping_interval: Interval for keepalive pings, None to disable
        timeout: Connection timeout
    """
    ws_url = f"ws://{host}:{port}{path}"
    try:
        return await asyncio.wait_for(
            websockets.connect(
                ws_url,
                subprotocols=[Subprotocol(subprotocol)],
                additional_headers={"Sec-WebSocket-Origin": origin},
                ping_interval=ping_interval,
                close_timeout=5,
                max_size=None,
            ),
            timeout=timeout,
        )
    except TimeoutError as err:
        raise EcpTimeout("WebSocket connection timed out") from err
    except (InvalidHandshake, InvalidURI) as err:
        raise EcpHandshakeError("WebSocket handshake failed") from err
    except (OSError, WebSocketException) as err:
        raise EcpConnectionError("WebSocket connection failed") from err
