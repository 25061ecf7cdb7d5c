"""Tests for the in-process profile store."""

from __future__ import annotations

from pathlib import Path

import pytest

from voice_menu.client.interfaces import PlayerHandle
from voice_menu.world.player import Participant
from voice_menu.world.profile_store import PlayerProfileStore
from voice_menu.world.storage import ProfileStorage


@pytest.fixture
def local() -> Participant:
    return Participant(player_id=1, name="me", is_local=True)


@pytest.fixture
def peer() -> Participant:
    return Participant(player_id=2, name="peer")


class TestReadsAndWrites:
    def test_write_without_local_player_dropped(self, peer: Participant) -> None:
        store = PlayerProfileStore()
        store.set_int("voice_mode", 2)
        assert store.records == {}
        assert not store.has_pending_events

    def test_typed_reads(self, local: Participant) -> None:
        store = PlayerProfileStore()
        store.set_local_player(local)
        store.set_int("voice_mode", 2)
        store.set_bool("voice_radio_tx", False)

        assert store.get_int(local, "voice_mode") == 2
        assert store.get_bool(local, "voice_radio_tx") is False
        # Type mismatches read as not found
        assert store.get_bool(local, "voice_mode") is None
        assert store.get_int(local, "voice_radio_tx") is None
        assert store.get_int(local, "voice_channel") is None

    def test_remote_values_readable(self, peer: Participant) -> None:
        store = PlayerProfileStore()
        store.receive_remote(peer, "voice_channel", 4)
        assert store.get_int(peer, "voice_channel") == 4


class TestSignals:
    def test_updates_are_queued_and_coalesced(
        self, local: Participant, peer: Participant
    ) -> None:
        store = PlayerProfileStore()
        store.set_local_player(local)
        seen: list[tuple[int, list[str]]] = []
        store.on_player_data_updated(lambda p, keys: seen.append((p.player_id, keys)))

        store.set_int("voice_mode", 1)
        store.set_int("voice_channel", 3)
        store.set_int("voice_mode", 2)
        store.receive_remote(peer, "voice_radio_tx", True)
        assert seen == []

        assert store.process_events() == 2
        assert seen == [(1, ["voice_mode", "voice_channel"]), (2, ["voice_radio_tx"])]
        assert store.process_events() == 0

    def test_writes_from_handlers_wait_for_next_round(self, local: Participant) -> None:
        store = PlayerProfileStore()
        store.set_local_player(local)
        rounds: list[list[str]] = []

        @store.on_player_data_updated
        def handler(player: PlayerHandle, keys: list[str]) -> None:
            rounds.append(keys)
            if len(rounds) == 1:
                store.set_bool("voice_radio_tx", True)

        store.set_int("voice_mode", 0)
        store.process_events()
        assert rounds == [["voice_mode"]]
        assert store.has_pending_events
        store.process_events()
        assert rounds == [["voice_mode"], ["voice_radio_tx"]]

    def test_restore_fires_once(self, peer: Participant) -> None:
        store = PlayerProfileStore()
        restored: list[PlayerHandle] = []
        store.on_player_restored(restored.append)
        store.restore(peer)
        store.restore(peer)
        assert restored == [peer]

    def test_forget_drops_record_and_pending(self, peer: Participant) -> None:
        store = PlayerProfileStore()
        store.receive_remote(peer, "voice_mode", 0)
        store.forget(peer)
        assert store.get_int(peer, "voice_mode") is None
        assert not store.has_pending_events


class TestPersistence:
    def test_local_writes_persist_after_restore(
        self, tmp_path: Path, local: Participant
    ) -> None:
        storage = ProfileStorage(tmp_path)
        store = PlayerProfileStore(storage)
        store.restore(local)
        store.set_int("voice_channel", 6)
        assert storage.load_profile("me") == {"voice_channel": 6}

    def test_saved_values_win_over_early_writes(
        self, tmp_path: Path, local: Participant
    ) -> None:
        """Test writes made before restore never clobber the saved profile."""
        storage = ProfileStorage(tmp_path)
        storage.save_profile("me", {"voice_mode": 2, "voice_channel": 9})
        store = PlayerProfileStore(storage)
        store.set_local_player(local)

        store.set_int("voice_mode", 1)
        store.set_bool("voice_radio_tx", True)
        assert storage.load_profile("me") == {"voice_mode": 2, "voice_channel": 9}

        store.restore(local)
        assert store.get_int(local, "voice_mode") == 2
        assert store.get_int(local, "voice_channel") == 9
        assert store.get_bool(local, "voice_radio_tx") is True
        assert storage.load_profile("me") == {
            "voice_mode": 2,
            "voice_channel": 9,
            "voice_radio_tx": True,
        }

    def test_remote_records_not_persisted(
        self, tmp_path: Path, peer: Participant
    ) -> None:
        storage = ProfileStorage(tmp_path)
        store = PlayerProfileStore(storage)
        store.restore(peer)
        store.receive_remote(peer, "voice_mode", 2)
        assert storage.load_profile("peer") is None
