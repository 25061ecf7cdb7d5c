"""Shared fixtures for voice-menu tests."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from voice_menu.client.interfaces import (
    AudioSink,
    PlayerCallback,
    PlayerHandle,
    ProfileStore,
    RosterProvider,
    UpdatedCallback,
)
from voice_menu.common.config import ProximityProfile, VoiceConfig


@dataclass
class MockSink(AudioSink):
    """Records every call made to an audio sink."""

    calls: list[tuple[str, object]] = field(default_factory=list)

    def set_voice_distance_near(self, distance: float) -> None:
        self.calls.append(("near", distance))

    def set_voice_distance_far(self, distance: float) -> None:
        self.calls.append(("far", distance))

    def set_voice_gain(self, gain: float) -> None:
        self.calls.append(("gain", gain))

    def set_voice_lowpass(self, enabled: bool) -> None:
        self.calls.append(("lowpass", enabled))

    def last(self, name: str) -> object:
        """Get the last value passed to the named setter."""
        for call_name, value in reversed(self.calls):
            if call_name == name:
                return value
        raise AssertionError(f"{name} was never set")

    @property
    def applied(self) -> tuple[object, object, object, object]:
        """(near, far, gain, lowpass) as last applied."""
        return (self.last("near"), self.last("far"), self.last("gain"), self.last("lowpass"))


@dataclass(eq=False)
class MockPlayer(PlayerHandle):
    """Minimal player handle for policy and replication tests."""

    player_id: int
    name: str = "test"
    is_local: bool = False
    valid: bool = True
    sink: MockSink = field(default_factory=MockSink)

    def is_valid(self) -> bool:
        return self.valid


class MockStore(ProfileStore):
    """Dict-backed profile store that records writes and fires nothing itself."""

    def __init__(self, local: MockPlayer | None = None) -> None:
        self.local = local
        self.records: dict[int, dict[str, int | bool]] = {}
        self.writes: list[tuple[str, int | bool]] = []
        self.restored_callbacks: list[PlayerCallback] = []
        self.updated_callbacks: list[UpdatedCallback] = []

    def put(self, player: MockPlayer, **values: int | bool) -> None:
        """Seed stored values for any player without recording a write."""
        self.records.setdefault(player.player_id, {}).update(values)

    def get_int(self, player: PlayerHandle, key: str) -> int | None:
        value = self.records.get(player.player_id, {}).get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def get_bool(self, player: PlayerHandle, key: str) -> bool | None:
        value = self.records.get(player.player_id, {}).get(key)
        return value if isinstance(value, bool) else None

    def set_int(self, key: str, value: int) -> None:
        self._set(key, value)

    def set_bool(self, key: str, value: bool) -> None:
        self._set(key, value)

    def _set(self, key: str, value: int | bool) -> None:
        assert self.local is not None, "write before local player is known"
        self.writes.append((key, value))
        self.records.setdefault(self.local.player_id, {})[key] = value

    def on_player_restored(self, callback: PlayerCallback) -> PlayerCallback:
        self.restored_callbacks.append(callback)
        return callback

    def on_player_data_updated(self, callback: UpdatedCallback) -> UpdatedCallback:
        self.updated_callbacks.append(callback)
        return callback


class MockRoster(RosterProvider):
    """Roster with a settable local player and a raw player list."""

    def __init__(
        self,
        local: MockPlayer | None = None,
        players: list[MockPlayer | None] | None = None,
    ) -> None:
        self.local = local
        self.players: list[MockPlayer | None] = list(players or [])
        self.joined_callbacks: list[PlayerCallback] = []
        self.left_callbacks: list[PlayerCallback] = []

    @property
    def local_player(self) -> MockPlayer | None:
        return self.local

    def get_player_count(self) -> int:
        return len(self.players)

    def get_players(self) -> list[PlayerHandle | None]:
        return list(self.players)

    def on_player_joined(self, callback: PlayerCallback) -> PlayerCallback:
        self.joined_callbacks.append(callback)
        return callback

    def on_player_left(self, callback: PlayerCallback) -> PlayerCallback:
        self.left_callbacks.append(callback)
        return callback


@pytest.fixture
def config() -> VoiceConfig:
    """Stock voice configuration."""
    return VoiceConfig()


@pytest.fixture
def custom_config() -> VoiceConfig:
    """Configuration with distinctive numbers and non-stock defaults."""
    return VoiceConfig(
        whisper=ProximityProfile(1.0, 5.0, 4.0),
        talk=ProximityProfile(2.0, 20.0, 12.0),
        shout=ProximityProfile(3.0, 70.0, 30.0),  # Gain above the engine limit
        radio=ProximityProfile(0.5, 5000.0, 9.0),
        radio_lowpass=False,
        default_mode=2,
        default_channel=7,
        default_radio_transmit=False,
    )


@pytest.fixture
def local_player() -> MockPlayer:
    return MockPlayer(player_id=1, name="me", is_local=True)


@pytest.fixture
def store(local_player: MockPlayer) -> MockStore:
    return MockStore(local_player)


@pytest.fixture
def roster(local_player: MockPlayer) -> MockRoster:
    return MockRoster(local_player, [local_player])
