"""Device configuration and secret loading.

Secrets live in a flat YAML mapping so several device keys can share one
file::

    living_room: "0123456789abcdef"

A device file names the device and where its key comes from::

    host: 192.168.1.226
    port: 8060
    key_file: secrets.yaml
    key_name: living_room

``key_file`` is resolved relative to the device file. A literal ``key`` may
be given instead of ``key_file``/``key_name``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .connection import DEFAULT_PORT
from .errors import EcpConfigError


@dataclass(frozen=True)
class DeviceConfig:
    """Connection settings for one device."""

    host: str
    key: bytes
    port: int = DEFAULT_PORT


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file whose top level must be a mapping."""
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except OSError as err:
        raise EcpConfigError(f"Cannot read {path}") from err
    except yaml.YAMLError as err:
        raise EcpConfigError(f"Invalid YAML in {path}") from err

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise EcpConfigError(f"Expected a mapping in {path}")
    return data


def load_secrets(path: Path | str) -> dict[str, str]:
    """Load a flat name -> secret mapping."""
    data = _load_yaml(Path(path))
    return {str(name): str(value) for name, value in data.items()}


def load_device_key(path: Path | str, name: str) -> bytes:
    """Return the UTF-8 bytes of one named secret.

    Raises:
        EcpConfigError: If the file cannot be loaded or has no such secret
    """
    secrets = load_secrets(path)
    if name not in secrets:
        raise EcpConfigError(f"Secret {name!r} not found in {path}")
    return secrets[name].encode("utf-8")


def load_device_config(path: Path | str) -> DeviceConfig:
    """Load a device file.

    Raises:
        EcpConfigError: If required fields are missing or invalid
    """
    path = Path(path)
    data = _load_yaml(path)

    host = data.get("host")
    if not host:
        raise EcpConfigError(f"'host' is required in {path}")

    port = data.get("port", DEFAULT_PORT)
    if isinstance(port, bool) or not isinstance(port, int):
        raise EcpConfigError(f"'port' must be an integer in {path}")

    if "key" in data:
        key = str(data["key"]).encode("utf-8")
    elif "key_file" in data and "key_name" in data:
        key = load_device_key(path.parent / str(data["key_file"]), str(data["key_name"]))
    else:
        raise EcpConfigError(f"'key' or 'key_file' with 'key_name' is required in {path}")

    return DeviceConfig(host=str(host), key=key, port=port)
