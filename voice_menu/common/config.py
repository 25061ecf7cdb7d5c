"""Per-deployment voice configuration: proximity/radio profiles and defaults.

A config file is optional. When given, it is JSON of the form::

    {
      "profiles": {
        "whisper": {"near": 0, "far": 8, "gain": 10},
        "talk":    {"near": 0, "far": 25, "gain": 15},
        "shout":   {"near": 0, "far": 60, "gain": 18},
        "radio":   {"near": 0, "far": 100000, "gain": 15}
      },
      "radio_lowpass": true,
      "defaults": {"mode": "talk", "channel": 1, "radio_transmit": true}
    }

Any section or key may be omitted; the stock values fill the gaps.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .constants import (
    DEFAULT_CHANNEL,
    DEFAULT_MODE,
    DEFAULT_RADIO_TRANSMIT,
    RADIO_LOWPASS,
    RADIO_PROFILE,
    SHOUT_PROFILE,
    TALK_PROFILE,
    WHISPER_PROFILE,
    VoiceMode,
    clamp_channel,
    clamp_mode,
)


@dataclass(frozen=True)
class ProximityProfile:
    """Spatial falloff for one way of hearing a player."""

    near: float
    far: float
    gain: float


@dataclass
class VoiceConfig:
    """Profiles and local defaults. Constant for a deployment, never persisted."""

    whisper: ProximityProfile = field(
        default_factory=lambda: ProximityProfile(*WHISPER_PROFILE)
    )
    talk: ProximityProfile = field(
        default_factory=lambda: ProximityProfile(*TALK_PROFILE)
    )
    shout: ProximityProfile = field(
        default_factory=lambda: ProximityProfile(*SHOUT_PROFILE)
    )
    radio: ProximityProfile = field(
        default_factory=lambda: ProximityProfile(*RADIO_PROFILE)
    )
    radio_lowpass: bool = RADIO_LOWPASS
    default_mode: int = DEFAULT_MODE.value
    default_channel: int = DEFAULT_CHANNEL
    default_radio_transmit: bool = DEFAULT_RADIO_TRANSMIT

    def __post_init__(self) -> None:
        """Keep defaults inside their valid ranges."""
        self.default_mode = clamp_mode(self.default_mode)
        self.default_channel = clamp_channel(self.default_channel)

    def profile_for(self, mode: int) -> ProximityProfile:
        """Get the proximity profile for a mode. Unknown modes use Talk."""
        if mode == VoiceMode.WHISPER:
            return self.whisper
        elif mode == VoiceMode.SHOUT:
            return self.shout
        return self.talk


def _parse_profile(
    data: dict[str, Any], fallback: ProximityProfile
) -> ProximityProfile:
    return ProximityProfile(
        near=float(data.get("near", fallback.near)),
        far=float(data.get("far", fallback.far)),
        gain=float(data.get("gain", fallback.gain)),
    )


def _parse_mode(value: Any) -> int:
    """Accept a mode as its name ("whisper") or its stored integer."""
    if isinstance(value, str):
        try:
            return VoiceMode[value.upper()].value
        except KeyError:
            raise ValueError(f"Unknown voice mode: {value!r}") from None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Voice mode must be a name or integer, got {value!r}")
    return clamp_mode(value)


def _parse_flag(value: Any, what: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{what} must be true or false, got {value!r}")
    return value


def config_from_dict(data: dict[str, Any]) -> VoiceConfig:
    """Build a VoiceConfig from parsed JSON data."""
    stock = VoiceConfig()
    profiles = data.get("profiles") or {}
    defaults = data.get("defaults") or {}

    channel = defaults.get("channel", stock.default_channel)
    if isinstance(channel, bool) or not isinstance(channel, int):
        raise ValueError(f"Default channel must be an integer, got {channel!r}")

    return VoiceConfig(
        whisper=_parse_profile(profiles.get("whisper") or {}, stock.whisper),
        talk=_parse_profile(profiles.get("talk") or {}, stock.talk),
        shout=_parse_profile(profiles.get("shout") or {}, stock.shout),
        radio=_parse_profile(profiles.get("radio") or {}, stock.radio),
        radio_lowpass=_parse_flag(
            data.get("radio_lowpass", stock.radio_lowpass), "radio_lowpass"
        ),
        default_mode=_parse_mode(defaults.get("mode", stock.default_mode)),
        default_channel=channel,
        default_radio_transmit=_parse_flag(
            defaults.get("radio_transmit", stock.default_radio_transmit),
            "Default radio_transmit",
        ),
    )


def load_config(path: Path | str) -> VoiceConfig:
    """Load a VoiceConfig from a JSON file.

    Raises:
        ValueError: If the file is not valid JSON or holds wrongly typed values.
        FileNotFoundError: If the file does not exist.
    """
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text())
        if not isinstance(data, dict):
            raise ValueError("top level must be an object")
        return config_from_dict(data)
    except (json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid voice config {config_path}: {e}") from e
