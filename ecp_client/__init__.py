"""Client for the ECP remote-control protocol spoken over WebSocket."""

__version__ = "0.1.0"

from .auth import authenticate, challenge_digest, generate_challenge_response
from .catalog import (
    CaptureScreen,
    Command,
    LaunchApp,
    PressKey,
    Query,
    QueryAppIcon,
    ResetAudioSettings,
    SetAudioOutput,
    SetAudioSetting,
    SetScreensaver,
    SetTexteditText,
)
from .config import DeviceConfig, load_device_config, load_device_key, load_secrets
from .connection import DEFAULT_PORT, ConnectionState, EcpConnection
from .errors import (
    EcpClientError,
    EcpConfigError,
    EcpConnectionError,
    EcpHandshakeError,
    EcpTimeout,
)
from .message import (
    AuthMessage,
    BinaryMessage,
    ContentData,
    ContentType,
    ControlMessage,
    DataContent,
    EcpMessage,
    TextContent,
    TextMessage,
    UnrecognizedMessage,
    classify,
)
from .request import EcpRequest, build_request_text
from .response import EcpResponse, decode_response
from .session import EcpSession

__all__ = [
    "DEFAULT_PORT",
    "AuthMessage",
    "BinaryMessage",
    "CaptureScreen",
    "Command",
    "ConnectionState",
    "ContentData",
    "ContentType",
    "ControlMessage",
    "DataContent",
    "DeviceConfig",
    "EcpClientError",
    "EcpConfigError",
    "EcpConnection",
    "EcpConnectionError",
    "EcpHandshakeError",
    "EcpMessage",
    "EcpRequest",
    "EcpResponse",
    "EcpSession",
    "EcpTimeout",
    "LaunchApp",
    "PressKey",
    "Query",
    "QueryAppIcon",
    "ResetAudioSettings",
    "SetAudioOutput",
    "SetAudioSetting",
    "SetScreensaver",
    "SetTexteditText",
    "TextContent",
    "TextMessage",
    "UnrecognizedMessage",
    "__version__",
    "authenticate",
    "build_request_text",
    "challenge_digest",
    "classify",
    "decode_response",
    "generate_challenge_response",
    "load_device_config",
    "load_device_key",
    "load_secrets",
]
