"""Request building for ECP text frames."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from .message import TextMessage


class EcpOperation(Protocol):
    """A logical operation from the catalog."""

    @property
    def subject(self) -> str: ...

    def params(self) -> dict[str, str] | None: ...


def build_request_text(
    subject: str, request_id: int, params: Mapping[str, str] | None = None
) -> str:
    """Assemble the request frame text.

    Values are substituted literally without escaping. Param order follows
    the mapping and is not significant to the device.
    """
    fields = "".join(f'"{key}":"{value}",' for key, value in (params or {}).items())
    return f'{{"request":"{subject}",{fields}"request-id":"{request_id}"}}'


class EcpRequest:
    """Fluent builder for ECP requests.

    Usage:
        request = (
            EcpRequest()
            .set_subject("query-device-info")
            .set_request_id(connection.next_sync_number())
        )
        response = await connection.send_request(request)
    """

    def __init__(self) -> None:
        self.subject = ""
        self.request_id = 0
        self.params: dict[str, str] = {}

    @classmethod
    def from_operation(cls, operation: EcpOperation) -> EcpRequest:
        """Create a request for a catalog query or command."""
        return cls().set_subject(operation.subject).set_params(operation.params())

    def set_request_id(self, request_id: int) -> EcpRequest:
        self.request_id = request_id
        return self

    def set_subject(self, subject: str) -> EcpRequest:
        self.subject = subject
        return self

    def add_param(self, key: str, value: str) -> EcpRequest:
        self.params[key] = value
        return self

    def set_params(self, params: Mapping[str, str] | None) -> EcpRequest:
        """Replace all params. None leaves the current params untouched."""
        if params is not None:
            self.params = dict(params)
        return self

    def build(self) -> TextMessage:
        """Build the text message sent over the wire."""
        return TextMessage(build_request_text(self.subject, self.request_id, self.params))

    def __repr__(self) -> str:
        return (
            f"EcpRequest(subject={self.subject!r}, request_id={self.request_id}, "
            f"params={self.params!r})"
        )
