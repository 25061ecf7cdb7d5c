"""Participant handles and the audio sink each one exposes."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..client.interfaces import AudioSink, PlayerHandle


@dataclass
class VoiceSink(AudioSink):
    """Holds the voice parameters the local client applies to one player."""

    near: float = 0.0
    far: float = 25.0
    gain: float = 15.0
    lowpass: bool = False
    update_count: int = 0  # Number of gain writes, one per audio pass

    def set_voice_distance_near(self, distance: float) -> None:
        self.near = distance

    def set_voice_distance_far(self, distance: float) -> None:
        self.far = distance

    def set_voice_gain(self, gain: float) -> None:
        self.gain = gain
        self.update_count += 1

    def set_voice_lowpass(self, enabled: bool) -> None:
        self.lowpass = enabled


@dataclass(eq=False)
class Participant(PlayerHandle):
    player_id: int
    name: str
    is_local: bool = False
    valid: bool = True
    sink: VoiceSink = field(default_factory=VoiceSink)

    def is_valid(self) -> bool:
        return self.valid
