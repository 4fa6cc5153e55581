"""Catalog of ECP queries and commands.

Each operation knows its wire subject and the params it sends. Use
``EcpRequest.from_operation`` to turn one into a request.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class Query(Enum):
    """Queries that take no params. The value is the wire subject."""

    ACTIVE_APP = "query-active-app"
    ACTIVE_TV_CHANNEL = "query-tv-active-channel"
    ACTIVE_TV_INPUT = "query-tv-active-input"
    AUDIO_DEVICE = "query-audio-device"
    AUDIO_SETTING = "query-audio-setting"
    AUDIO_SETTINGS = "query-audio-settings"
    AV_SYNC_OFFSET = "query-av-sync-offset"
    DEVICE_INFO = "query-device-info"
    INSTALLED_APPS = "query-apps"
    MEDIA_PLAYER = "query-media-player"
    SCREENSAVERS = "query-screensavers"
    TEXTEDIT_STATE = "query-textedit-state"
    THEMES = "query-themes"
    TV_CHANNELS = "query-tv-channels-ex"
    VOICE_SERVICE_INFO = "query-info-for-voice-service"
    WARM_STANDBY = "query-warm-standby"

    @property
    def subject(self) -> str:
        return self.value

    def params(self) -> dict[str, str] | None:
        return None


@dataclass(frozen=True)
class QueryAppIcon:
    """Fetch the icon of an installed app."""

    subject: ClassVar[str] = "query-icon"

    channel_id: int

    def params(self) -> dict[str, str] | None:
        return {"param-channel-id": str(self.channel_id)}


@dataclass(frozen=True)
class SetAudioOutput:
    """Route audio to a companion app (private listening)."""

    subject: ClassVar[str] = "set-audio-output"

    audio_output: str
    sas_min_version: int
    sas_max_version: int
    guid: str
    sas_ip_address: str
    sas_port: str
    app_build: str

    def params(self) -> dict[str, str] | None:
        return {
            "param-audio-output": self.audio_output,
            "param-sas-min-version": str(self.sas_min_version),
            "param-sas-max-version": str(self.sas_max_version),
            "param-guid": self.guid,
            "param-sas-ip-address": self.sas_ip_address,
            "param-sas-port": self.sas_port,
            "param-app-build": self.app_build,
        }


@dataclass(frozen=True)
class SetAudioSetting:
    subject: ClassVar[str] = "set-audio-setting"

    id: str
    value: str

    def params(self) -> dict[str, str] | None:
        return {"param-id": self.id, "param-value": self.value}


@dataclass(frozen=True)
class CaptureScreen:
    subject: ClassVar[str] = "capture-screen"

    def params(self) -> dict[str, str] | None:
        return None


@dataclass(frozen=True)
class LaunchApp:
    subject: ClassVar[str] = "launch"

    channel_id: int

    def params(self) -> dict[str, str] | None:
        return {"param-channel-id": str(self.channel_id)}


@dataclass(frozen=True)
class PressKey:
    """Press a remote key, e.g. "Home", "Select" or "Power"."""

    subject: ClassVar[str] = "key-press"

    key: str

    def params(self) -> dict[str, str] | None:
        return {"param-key": self.key}


@dataclass(frozen=True)
class ResetAudioSettings:
    subject: ClassVar[str] = "reset-audio-settings"

    scope: str

    def params(self) -> dict[str, str] | None:
        return {"param-scope": self.scope}


@dataclass(frozen=True)
class SetScreensaver:
    subject: ClassVar[str] = "set-screensaver"

    channel_id: int

    def params(self) -> dict[str, str] | None:
        return {"param-channel-id": str(self.channel_id)}


@dataclass(frozen=True)
class SetTexteditText:
    """Replace the text of an on-screen text field."""

    subject: ClassVar[str] = "set-textedit-text"

    textedit_id: str
    text: str
    selection_start: int
    selection_end: int

    def params(self) -> dict[str, str] | None:
        return {
            "param-textedit-id": self.textedit_id,
            "param-text": self.text,
            "param-selection-start": str(self.selection_start),
            "param-selection-end": str(self.selection_end),
        }


Command = (
    SetAudioOutput
    | SetAudioSetting
    | CaptureScreen
    | LaunchApp
    | PressKey
    | ResetAudioSettings
    | SetScreensaver
    | SetTexteditText
)
