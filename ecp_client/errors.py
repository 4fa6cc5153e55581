"""Client error types for ECP device interactions."""

from __future__ import annotations


class EcpClientError(Exception):
    """Base error for ECP client failures."""


class EcpTimeout(EcpClientError):
    """Timeout while communicating with the device."""


class EcpConnectionError(EcpClientError):
    """Network connection to the device failed."""


class EcpHandshakeError(EcpClientError):
    """WebSocket handshake failed."""


class EcpConfigError(EcpClientError):
    """Device configuration or secrets could not be loaded."""
