"""Session roster with join/leave signals."""

from __future__ import annotations

import logging

from ..client.interfaces import PlayerCallback, RosterProvider
from .player import Participant

logger = logging.getLogger(__name__)


class Roster(RosterProvider):
    """In-process roster. Callbacks run synchronously, in registration order."""

    def __init__(self) -> None:
        self.players: dict[int, Participant] = {}
        self._local_player: Participant | None = None
        self._next_id = 1
        self._on_player_joined_callbacks: list[PlayerCallback] = []
        self._on_player_left_callbacks: list[PlayerCallback] = []

    @property
    def local_player(self) -> Participant | None:
        return self._local_player

    def on_player_joined(self, callback: PlayerCallback) -> PlayerCallback:
        """Decorator for player join events."""
        self._on_player_joined_callbacks.append(callback)
        return callback

    def on_player_left(self, callback: PlayerCallback) -> PlayerCallback:
        """Decorator for player leave events."""
        self._on_player_left_callbacks.append(callback)
        return callback

    def add_player(self, name: str, is_local: bool = False) -> Participant:
        """Create a participant, add it and fire the join signal."""
        player = Participant(player_id=self._next_id, name=name, is_local=is_local)
        self._next_id += 1
        self.players[player.player_id] = player
        if is_local:
            self._local_player = player
        logger.debug(f"Player joined: {name} (id={player.player_id})")

        for callback in self._on_player_joined_callbacks:
            callback(player)
        return player

    def remove_player(self, player_id: int) -> Participant | None:
        """Remove a participant, invalidate its handle and fire the leave signal."""
        player = self.players.pop(player_id, None)
        if player is None:
            return None

        player.valid = False
        if player is self._local_player:
            self._local_player = None
        logger.debug(f"Player left: {player.name} (id={player_id})")

        for callback in self._on_player_left_callbacks:
            callback(player)
        return player

    def get_player_count(self) -> int:
        return len(self.players)

    def get_players(self) -> list[Participant | None]:
        return list(self.players.values())
