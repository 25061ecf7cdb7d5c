"""A local stand-in for a shared session: roster plus profile store.

Binds the local player to the store when it joins, drops departed players'
records, and lets simulated peers publish their voice settings.
"""

from __future__ import annotations

from ..client.interfaces import PlayerHandle
from ..common.constants import VOICE_CHANNEL_KEY, VOICE_MODE_KEY, VOICE_RADIO_TX_KEY
from .player import Participant
from .profile_store import PlayerProfileStore
from .roster import Roster
from .storage import ProfileStorage


class Session:
    def __init__(self, storage: ProfileStorage | None = None) -> None:
        self.store = PlayerProfileStore(storage)
        self.roster = Roster()
        # Registered before any menu so the store knows the local player
        # by the time other join handlers run.
        self.roster.on_player_joined(self._bind_local_player)
        self.roster.on_player_left(self.store.forget)

    def _bind_local_player(self, player: PlayerHandle) -> None:
        if player.is_local:
            self.store.set_local_player(player)

    def join_local(self, name: str) -> Participant:
        """Join the local player. Its stored data is not restored yet."""
        return self.roster.add_player(name, is_local=True)

    def restore_local(self) -> None:
        """Signal that the local player's stored data is available."""
        local = self.roster.local_player
        if local is not None:
            self.store.restore(local)

    def join_peer(
        self,
        name: str,
        mode: int | None = None,
        channel: int | None = None,
        radio_transmit: bool | None = None,
    ) -> Participant:
        """Join a remote player, optionally with already-published settings."""
        peer = self.roster.add_player(name)
        self.store.restore(peer)
        self.publish(peer, mode=mode, channel=channel, radio_transmit=radio_transmit)
        return peer

    def publish(
        self,
        peer: PlayerHandle,
        mode: int | None = None,
        channel: int | None = None,
        radio_transmit: bool | None = None,
    ) -> None:
        """Replicate a remote player's settings into the local store."""
        if mode is not None:
            self.store.receive_remote(peer, VOICE_MODE_KEY, int(mode))
        if channel is not None:
            self.store.receive_remote(peer, VOICE_CHANNEL_KEY, int(channel))
        if radio_transmit is not None:
            self.store.receive_remote(peer, VOICE_RADIO_TX_KEY, bool(radio_transmit))

    def leave(self, player_id: int) -> Participant | None:
        return self.roster.remove_player(player_id)

    def tick(self) -> int:
        """Deliver queued store signals. Returns how many were delivered."""
        return self.store.process_events()

    def run_until_idle(self, max_rounds: int = 10) -> int:
        """Deliver store signals until none are left (or max_rounds passes)."""
        delivered = 0
        for _ in range(max_rounds):
            if not self.store.has_pending_events:
                break
            delivered += self.tick()
        return delivered
