"""Recompute how every peer is heard from current stored settings.

Every trigger re-derives all peer audio from scratch: reconcile the local
cache from the store, walk a fresh roster snapshot, resolve each peer and
push the result to its sink. Nothing is patched incrementally.
"""

from __future__ import annotations

import logging
from typing import Callable

from ..common.config import VoiceConfig
from ..common.constants import (
    PEER_FALLBACK_CHANNEL,
    PEER_FALLBACK_MODE,
    PEER_FALLBACK_RADIO_TRANSMIT,
    VOICE_CHANNEL_KEY,
    VOICE_MODE_KEY,
    VOICE_RADIO_TX_KEY,
    clamp_channel,
    clamp_mode,
)
from ..common.policy import AudioParams, resolve
from .interfaces import PlayerHandle, ProfileStore, RosterProvider, is_valid
from .settings_state import LocalSettings, SettingsState

logger = logging.getLogger(__name__)


def read_peer_settings(store: ProfileStore, player: PlayerHandle) -> LocalSettings:
    """Read a peer's settings, assuming an audible default for missing fields.

    Peers that have not synced yet are treated as Talk on channel 1 with
    radio transmit on. Nothing is written back for peers.
    """
    mode = store.get_int(player, VOICE_MODE_KEY)
    channel = store.get_int(player, VOICE_CHANNEL_KEY)
    radio_tx = store.get_bool(player, VOICE_RADIO_TX_KEY)
    return LocalSettings(
        mode=clamp_mode(mode) if mode is not None else PEER_FALLBACK_MODE.value,
        channel=(
            clamp_channel(channel) if channel is not None else PEER_FALLBACK_CHANNEL
        ),
        radio_transmit=(
            radio_tx if radio_tx is not None else PEER_FALLBACK_RADIO_TRANSMIT
        ),
    )


def push_audio_params(player: PlayerHandle, params: AudioParams) -> None:
    """Hand resolved parameters to the peer's audio sink."""
    sink = player.sink
    sink.set_voice_lowpass(params.lowpass)
    sink.set_voice_distance_near(params.near)
    sink.set_voice_distance_far(params.far)
    sink.set_voice_gain(params.gain)


class ReplicationLoop:
    def __init__(
        self,
        config: VoiceConfig,
        store: ProfileStore,
        roster: RosterProvider,
        state: SettingsState,
        on_applied: Callable[[], None] | None = None,
    ) -> None:
        self.config = config
        self.store = store
        self.roster = roster
        self.state = state
        self.on_applied = on_applied
        # player_id -> params pushed on the last pass
        self.last_applied: dict[int, AudioParams] = {}

    def reconcile_local(self, local: PlayerHandle) -> LocalSettings:
        """Prefer stored values over the cache, field by field.

        Read-only toward the store: this re-derives the cache from storage.
        """
        cached = self.state.settings
        mode = self.store.get_int(local, VOICE_MODE_KEY)
        channel = self.store.get_int(local, VOICE_CHANNEL_KEY)
        radio_tx = self.store.get_bool(local, VOICE_RADIO_TX_KEY)
        self.state.adopt(
            mode if mode is not None else cached.mode,
            channel if channel is not None else cached.channel,
            radio_tx if radio_tx is not None else cached.radio_transmit,
        )
        return self.state.settings

    def apply_audio_for_all_players(self) -> int:
        """Recompute and push audio parameters for every remote player.

        Returns the number of peers updated. Does nothing (and returns 0)
        while the local player is not resolvable.
        """
        local = self.roster.local_player
        if not is_valid(local):
            logger.debug("Local player not resolvable yet, skipping audio pass")
            return 0
        assert local is not None

        local_settings = self.reconcile_local(local)

        applied: dict[int, AudioParams] = {}
        for target in self.roster.get_players():
            if not is_valid(target) or target.is_local:
                continue
            assert target is not None

            peer = read_peer_settings(self.store, target)
            params = resolve(
                self.config,
                local_settings.channel,
                peer.mode,
                peer.channel,
                peer.radio_transmit,
            )
            push_audio_params(target, params)
            applied[target.player_id] = params

        self.last_applied = applied
        logger.debug(
            f"Applied audio for {len(applied)} peers of "
            f"{self.roster.get_player_count()} players "
            f"(local channel {local_settings.channel})"
        )

        if self.on_applied is not None:
            self.on_applied()
        return len(applied)
