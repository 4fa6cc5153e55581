"""Reconnectable ECP connection handle.

Usage:
    connection = EcpConnection("192.168.1.226", key)
    if await connection.open():
        request = EcpRequest.from_operation(Query.DEVICE_INFO)
        response = await connection.send_request(
            request.set_request_id(connection.next_sync_number())
        )
    await connection.close()

A connection supports one exchange at a time. Callers sharing a connection
between tasks must serialize access to it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from enum import Enum
from ipaddress import IPv4Address
from typing import TypeVar

from .errors import EcpClientError, EcpConnectionError, EcpTimeout
from .message import EcpMessage, TextMessage, message_to_frame
from .request import EcpRequest
from .response import EcpResponse, decode_response
from .session import EcpSession

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")

DEFAULT_PORT = 8060


class ConnectionState(Enum):
    """Lifecycle of an EcpConnection."""

    UNOPENED = "unopened"
    OPENING = "opening"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


class EcpConnection:
    """Handle to one device, holding its address, key and request counter."""

    DEFAULT_PORT = DEFAULT_PORT

    def __init__(
        self,
        ipv4: str | bytes | Sequence[int] | IPv4Address,
        key: bytes,
        *,
        port: int = DEFAULT_PORT,
        connect_timeout: float = 15.0,
        strict_correlation: bool = False,
    ) -> None:
        """Initialize an unopened connection.

        Args:
            ipv4: Device address as a dotted string, 4 packed bytes or 4 ints
            key: Shared secret used to answer the auth challenge
            port: Device ECP port
            connect_timeout: Timeout for the WebSocket upgrade
            strict_correlation: Skip responses whose response-id does not
                match the request-id instead of trusting arrival order
        """
        self.ipv4 = _parse_ipv4(ipv4)
        self.port = port
        self.key = bytes(key)
        self.sync_counter = -1
        self.strict_correlation = strict_correlation

        self._connect_timeout = connect_timeout
        self._session: EcpSession | None = None
        self._state = ConnectionState.UNOPENED

    @property
    def host(self) -> str:
        return str(self.ipv4)

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def session(self) -> EcpSession | None:
        return self._session

    def is_open(self) -> bool:
        """Whether a session has been opened."""
        return self._session is not None

    def is_authenticated(self) -> bool:
        """Whether the open session completed authentication."""
        return self._session is not None and self._session.authenticated

    def next_sync_number(self) -> int:
        """Increment and return the request-id counter. The first call returns 0."""
        self.sync_counter += 1
        return self.sync_counter

    async def open(self, *, timeout: float | None = None) -> bool:
        """Open a session to the device and authenticate.

        The session is kept even when authentication fails, so a connection
        can be open but not authenticated.

        Args:
            timeout: Optional bound on the handshake wait

        Returns:
            True if the session is authenticated

        Raises:
            EcpTimeout: Only when ``timeout`` is given and the handshake
                did not finish in time
        """
        if self._session is not None:
            await self.close()

        self._state = ConnectionState.OPENING
        _LOGGER.info("[%s] Connecting to ws://%s:%s", self._tag, self.host, self.port)

        try:
            session = await EcpSession.open(
                self.host, self.port, timeout=self._connect_timeout
            )
        except EcpClientError as err:
            _LOGGER.warning("[%s] Connection failed: %s", self._tag, err)
            self._state = ConnectionState.FAILED
            return False

        self._session = session
        counter = self.next_sync_number()

        try:
            authenticated = await self._bounded(
                session.authenticate(self.key, counter), timeout
            )
        except EcpTimeout:
            _LOGGER.warning("[%s] Authentication timed out", self._tag)
            self._state = ConnectionState.FAILED
            raise

        if authenticated:
            self._state = ConnectionState.AUTHENTICATED
            _LOGGER.info("[%s] Authenticated", self._tag)
        else:
            self._state = ConnectionState.FAILED
            _LOGGER.warning("[%s] Session opened without authentication", self._tag)
        return authenticated

    async def close(self) -> None:
        """Close the session, if any."""
        if self._session is None:
            return
        _LOGGER.info("[%s] Closing session", self._tag)
        session, self._session = self._session, None
        self._state = ConnectionState.UNOPENED
        await session.close()

    async def send_request(
        self, request: EcpRequest, *, timeout: float | None = None
    ) -> EcpResponse | None:
        """Send a request and wait for the next text response.

        Returns:
            The decoded response, or None if the connection is not open or the
            stream ended before a text frame arrived

        Raises:
            EcpTimeout: Only when ``timeout`` is given and no response arrived
        """
        if self._session is None:
            return None
        return await self._bounded(self._exchange(self._session, request), timeout)

    async def next_message(self, *, timeout: float | None = None) -> EcpMessage | None:
        """Return the next message of any type, or None if nothing can arrive."""
        if self._session is None:
            return None
        return await self._bounded(self._session.next_message(), timeout)

    def clone(self) -> EcpConnection:
        """Return a new unopened connection to the same device."""
        return EcpConnection(
            self.ipv4,
            self.key,
            port=self.port,
            connect_timeout=self._connect_timeout,
            strict_correlation=self.strict_correlation,
        )

    __copy__ = clone

    def __repr__(self) -> str:
        return (
            f"EcpConnection(ipv4={self.host!r}, port={self.port}, "
            f"state={self._state.value!r}, sync_counter={self.sync_counter})"
        )

    @property
    def _tag(self) -> str:
        return f"{self.host}:{self.port}"

    async def _exchange(
        self, session: EcpSession, request: EcpRequest
    ) -> EcpResponse | None:
        try:
            await session.send(message_to_frame(request.build()))
        except EcpConnectionError as err:
            _LOGGER.warning("[%s] Failed to send %s: %s", self._tag, request.subject, err)
            return None
        finally:
            self.sync_counter += 1

        while True:
            message = await session.next_message()
            if message is None:
                _LOGGER.info("[%s] Connection ended awaiting response", self._tag)
                return None

            if not isinstance(message, TextMessage):
                _LOGGER.debug("[%s] Dropping %s", self._tag, type(message).__name__)
                continue

            response = decode_response(message.text)
            if self.strict_correlation and response.response_id != request.request_id:
                _LOGGER.warning(
                    "[%s] Skipping response-id %d while awaiting request-id %d",
                    self._tag,
                    response.response_id,
                    request.request_id,
                )
                continue
            return response

    @staticmethod
    async def _bounded(awaitable: Awaitable[_T], timeout: float | None) -> _T:
        if timeout is None:
            return await awaitable
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except TimeoutError as err:
            raise EcpTimeout("Timed out waiting for the device") from err


def _parse_ipv4(value: str | bytes | Sequence[int] | IPv4Address) -> IPv4Address:
    if isinstance(value, (str, bytes, IPv4Address)):
        return IPv4Address(value)
    return IPv4Address(bytes(value))
