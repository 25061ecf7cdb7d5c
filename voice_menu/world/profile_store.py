"""In-process durable profile store with restore/update signals.

Holds one key/value record per player. The local player's writes are
persisted through ProfileStorage when one is attached; remote records
arrive through ``receive_remote`` as if replicated from their owners.

Update signals are queued and delivered by ``process_events``, so a
handler that writes several keys never observes its own half-finished
write. All updates for one player since the last delivery are coalesced
into a single signal carrying every changed key.
"""

from __future__ import annotations

import logging

from ..client.interfaces import (
    PlayerCallback,
    PlayerHandle,
    ProfileStore,
    UpdatedCallback,
)
from .storage import ProfileStorage, ProfileValue

logger = logging.getLogger(__name__)


class PlayerProfileStore(ProfileStore):
    def __init__(self, storage: ProfileStorage | None = None) -> None:
        self.storage = storage
        self.local_player: PlayerHandle | None = None
        # player_id -> {key: value}
        self.records: dict[int, dict[str, ProfileValue]] = {}
        self.restored: set[int] = set()
        # player_id -> (player, changed keys), in first-change order
        self._pending_updates: dict[int, tuple[PlayerHandle, list[str]]] = {}
        self._on_player_restored_callbacks: list[PlayerCallback] = []
        self._on_player_data_updated_callbacks: list[UpdatedCallback] = []

    # Signals

    def on_player_restored(self, callback: PlayerCallback) -> PlayerCallback:
        """Decorator for a player's stored data becoming available."""
        self._on_player_restored_callbacks.append(callback)
        return callback

    def on_player_data_updated(self, callback: UpdatedCallback) -> UpdatedCallback:
        """Decorator for changes to any player's stored data."""
        self._on_player_data_updated_callbacks.append(callback)
        return callback

    def _queue_update(self, player: PlayerHandle, key: str) -> None:
        _, keys = self._pending_updates.setdefault(player.player_id, (player, []))
        if key not in keys:
            keys.append(key)

    @property
    def has_pending_events(self) -> bool:
        return bool(self._pending_updates)

    def process_events(self) -> int:
        """Deliver queued update signals. Returns how many were delivered.

        Updates queued by the handlers themselves are delivered on the
        next call, not this one.
        """
        pending = list(self._pending_updates.values())
        self._pending_updates.clear()
        for player, keys in pending:
            for callback in self._on_player_data_updated_callbacks:
                callback(player, keys)
        return len(pending)

    # Reads

    def get_int(self, player: PlayerHandle, key: str) -> int | None:
        value = self.records.get(player.player_id, {}).get(key)
        # bool is an int subclass; a bool key is not an int value
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def get_bool(self, player: PlayerHandle, key: str) -> bool | None:
        value = self.records.get(player.player_id, {}).get(key)
        if not isinstance(value, bool):
            return None
        return value

    # Writes (local player only)

    def set_int(self, key: str, value: int) -> None:
        self._set_local(key, int(value))

    def set_bool(self, key: str, value: bool) -> None:
        self._set_local(key, bool(value))

    def _set_local(self, key: str, value: ProfileValue) -> None:
        player = self.local_player
        if player is None:
            logger.warning(f"Dropping write of {key}: local player not set")
            return

        record = self.records.setdefault(player.player_id, {})
        record[key] = value
        # Until restore, the on-disk record is unknown and must not be clobbered
        if self.storage is not None and player.player_id in self.restored:
            self.storage.save_profile(player.name, record)
        self._queue_update(player, key)

    # Session events

    def set_local_player(self, player: PlayerHandle) -> None:
        """Bind writes to the local player without restoring its data yet."""
        self.local_player = player

    def restore(self, player: PlayerHandle) -> None:
        """Make a player's stored data available and fire the restore signal.

        For the local player, the record is loaded from disk first; saved
        values win over anything written before the restore. The signal
        fires at most once per player.
        """
        if player.player_id in self.restored:
            return

        if player.is_local:
            self.local_player = player
            if self.storage is not None:
                saved = self.storage.load_profile(player.name)
                if saved is not None:
                    self.records.setdefault(player.player_id, {}).update(saved)
                    logger.debug(f"Restored profile for {player.name}: {saved}")
                record = self.records.get(player.player_id)
                if record:
                    self.storage.save_profile(player.name, record)

        self.restored.add(player.player_id)
        for callback in self._on_player_restored_callbacks:
            callback(player)

    def receive_remote(
        self, player: PlayerHandle, key: str, value: ProfileValue
    ) -> None:
        """Apply a replicated write made by another player."""
        self.records.setdefault(player.player_id, {})[key] = value
        self._queue_update(player, key)

    def forget(self, player: PlayerHandle) -> None:
        """Drop a departed player's record and any undelivered update."""
        self.records.pop(player.player_id, None)
        self.restored.discard(player.player_id)
        self._pending_updates.pop(player.player_id, None)
