"""Per-peer voice policy: how the local client should hear another player."""

from __future__ import annotations

from dataclasses import dataclass

from .config import VoiceConfig
from .constants import clamp_gain


@dataclass(frozen=True)
class AudioParams:
    """Parameters pushed to a peer's audio sink."""

    near: float
    far: float
    gain: float  # Always within [MIN_GAIN, MAX_GAIN]
    lowpass: bool


def resolve(
    config: VoiceConfig,
    local_channel: int,
    target_mode: int,
    target_channel: int,
    target_radio_tx: bool,
) -> AudioParams:
    """Resolve the audio parameters for hearing a target player.

    The target's mode picks a proximity profile. A target transmitting on
    the local channel is heard through the radio profile instead, at any
    distance, with the configured lowpass. The gain is clamped last so a
    misconfigured profile can never reach the audio engine out of range.
    """
    profile = config.profile_for(target_mode)
    lowpass = False

    if target_channel == local_channel and target_radio_tx:
        profile = config.radio
        lowpass = config.radio_lowpass

    return AudioParams(
        near=profile.near,
        far=profile.far,
        gain=clamp_gain(profile.gain),
        lowpass=lowpass,
    )
