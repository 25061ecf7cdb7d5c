"""Interfaces of the collaborators the voice menu drives.

The durable profile store, the player roster and the per-player audio
sinks live outside this package's core. The voice menu only talks to them
through these interfaces.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable


class AudioSink(ABC):
    """How the local client renders one remote player's voice."""

    @abstractmethod
    def set_voice_distance_near(self, distance: float) -> None:
        ...

    @abstractmethod
    def set_voice_distance_far(self, distance: float) -> None:
        ...

    @abstractmethod
    def set_voice_gain(self, gain: float) -> None:
        """Set voice gain (0-24)."""
        ...

    @abstractmethod
    def set_voice_lowpass(self, enabled: bool) -> None:
        ...


class PlayerHandle(ABC):
    """A participant as seen by the local client."""

    player_id: int
    name: str
    is_local: bool
    sink: AudioSink

    @abstractmethod
    def is_valid(self) -> bool:
        """False once the participant has left or the handle went stale."""
        ...


# Type aliases for collaborator signals
PlayerCallback = Callable[[PlayerHandle], None]
UpdatedCallback = Callable[[PlayerHandle, list[str]], None]


class ProfileStore(ABC):
    """Durable per-player key/value storage.

    Reads take any player; writes always target the local player.
    """

    @abstractmethod
    def get_int(self, player: PlayerHandle, key: str) -> int | None:
        """Read an int value, or None if the player has no such value."""
        ...

    @abstractmethod
    def get_bool(self, player: PlayerHandle, key: str) -> bool | None:
        """Read a bool value, or None if the player has no such value."""
        ...

    @abstractmethod
    def set_int(self, key: str, value: int) -> None:
        ...

    @abstractmethod
    def set_bool(self, key: str, value: bool) -> None:
        ...

    @abstractmethod
    def on_player_restored(self, callback: PlayerCallback) -> PlayerCallback:
        """Register a callback fired once a player's stored data is available."""
        ...

    @abstractmethod
    def on_player_data_updated(self, callback: UpdatedCallback) -> UpdatedCallback:
        """Register a callback fired whenever a player's stored data changes."""
        ...


class RosterProvider(ABC):
    """Current membership of the shared session."""

    @property
    @abstractmethod
    def local_player(self) -> PlayerHandle | None:
        """The local participant, or None while it is not resolvable yet."""
        ...

    @abstractmethod
    def get_player_count(self) -> int:
        ...

    @abstractmethod
    def get_players(self) -> list[PlayerHandle | None]:
        """Fresh snapshot of all participant handles.

        May contain None or stale handles; callers skip those.
        """
        ...

    @abstractmethod
    def on_player_joined(self, callback: PlayerCallback) -> PlayerCallback:
        ...

    @abstractmethod
    def on_player_left(self, callback: PlayerCallback) -> PlayerCallback:
        ...


def is_valid(player: PlayerHandle | None) -> bool:
    """Check a handle that may be None or stale."""
    return player is not None and player.is_valid()
