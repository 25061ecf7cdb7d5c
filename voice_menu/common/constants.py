"""Shared constants for voice modes, channels and audio profiles."""

import enum

# Durable per-player storage keys
VOICE_MODE_KEY = "voice_mode"
VOICE_CHANNEL_KEY = "voice_channel"
VOICE_RADIO_TX_KEY = "voice_radio_tx"


class VoiceMode(enum.IntEnum):
    WHISPER = 0
    TALK = 1
    SHOUT = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


# Radio channel range
MIN_CHANNEL = 1
MAX_CHANNEL = 10

# Voice gain accepted by the audio engine
MIN_GAIN = 0.0
MAX_GAIN = 24.0

# Stock proximity profiles: (near, far, gain)
WHISPER_PROFILE = (0.0, 8.0, 10.0)
TALK_PROFILE = (0.0, 25.0, 15.0)
SHOUT_PROFILE = (0.0, 60.0, 18.0)
RADIO_PROFILE = (0.0, 100000.0, 15.0)  # Far enough to be global
RADIO_LOWPASS = True

# Local defaults (used when nothing is stored yet, and on reset)
DEFAULT_MODE = VoiceMode.TALK
DEFAULT_CHANNEL = 1
DEFAULT_RADIO_TRANSMIT = True

# Assumed for peers whose durable fields are not populated yet.
# Keeps newly joined peers audible on channel 1.
PEER_FALLBACK_MODE = VoiceMode.TALK
PEER_FALLBACK_CHANNEL = 1
PEER_FALLBACK_RADIO_TRANSMIT = True


def clamp_mode(value: int) -> int:
    """Clamp a raw mode value into the VoiceMode range."""
    return max(VoiceMode.WHISPER.value, min(VoiceMode.SHOUT.value, int(value)))


def clamp_channel(value: int) -> int:
    """Clamp a raw channel value into [MIN_CHANNEL, MAX_CHANNEL]."""
    return max(MIN_CHANNEL, min(MAX_CHANNEL, int(value)))


def clamp_gain(value: float) -> float:
    """Clamp a gain into the range the audio engine accepts."""
    return max(MIN_GAIN, min(MAX_GAIN, float(value)))


def channel_from_slider(value: float) -> int:
    """Convert a slider position to a channel.

    Rounds half to even (like the engine's RoundToInt). The value is bounded
    first so that inf and NaN still land inside the channel range.
    """
    bounded = max(float(MIN_CHANNEL), min(float(MAX_CHANNEL), float(value)))
    return clamp_channel(round(bounded))


def mode_label(mode: int) -> str:
    """Display name for a stored mode value; unknown values read as Talk."""
    try:
        return VoiceMode(mode).label
    except ValueError:
        return VoiceMode.TALK.label
