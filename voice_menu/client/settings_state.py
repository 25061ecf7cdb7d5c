"""Local voice settings and their reconciliation with the profile store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..common.config import VoiceConfig
from ..common.constants import (
    VOICE_CHANNEL_KEY,
    VOICE_MODE_KEY,
    VOICE_RADIO_TX_KEY,
    clamp_channel,
    clamp_mode,
)
from .interfaces import PlayerHandle, ProfileStore, is_valid

logger = logging.getLogger(__name__)


@dataclass
class LocalSettings:
    """One player's voice settings."""

    mode: int
    channel: int
    radio_transmit: bool


def read_or_seed_int(
    store: ProfileStore,
    player: PlayerHandle,
    key: str,
    default: int,
    clamp: Callable[[int], int],
) -> int:
    """Read an int setting, writing the default back if none is stored.

    Stored values are clamped, never rejected.
    """
    value = store.get_int(player, key)
    if value is not None:
        return clamp(value)

    seeded = clamp(default)
    logger.debug(f"Seeding {key}={seeded} for {player.name}")
    store.set_int(key, seeded)
    return seeded


def read_or_seed_bool(
    store: ProfileStore, player: PlayerHandle, key: str, default: bool
) -> bool:
    """Read a bool setting, writing the default back if none is stored."""
    value = store.get_bool(player, key)
    if value is not None:
        return value

    logger.debug(f"Seeding {key}={default} for {player.name}")
    store.set_bool(key, default)
    return default


class SettingsState:
    """Cache of the local player's mode, channel and radio transmit flag.

    Until ``ready`` is set the cache holds provisional values that have
    not been reconciled with the store. The store can only be reached once
    the local player is known, so every write path retries that first.
    """

    def __init__(self, config: VoiceConfig, store: ProfileStore) -> None:
        self.config = config
        self.store = store
        self.settings = LocalSettings(
            mode=config.default_mode,
            channel=config.default_channel,
            radio_transmit=config.default_radio_transmit,
        )
        self.ready = False

    @property
    def mode(self) -> int:
        return self.settings.mode

    @property
    def channel(self) -> int:
        return self.settings.channel

    @property
    def radio_transmit(self) -> bool:
        return self.settings.radio_transmit

    def set_mode(self, mode: int) -> None:
        self.settings.mode = clamp_mode(mode)

    def set_channel(self, channel: int) -> None:
        self.settings.channel = clamp_channel(channel)

    def set_radio_transmit(self, enabled: bool) -> None:
        self.settings.radio_transmit = bool(enabled)

    def adopt(self, mode: int, channel: int, radio_transmit: bool) -> None:
        """Replace the cached values (clamped) without touching the store."""
        self.settings = LocalSettings(
            mode=clamp_mode(mode),
            channel=clamp_channel(channel),
            radio_transmit=bool(radio_transmit),
        )

    def load(self, local: PlayerHandle) -> None:
        """Read-or-seed all three fields for the local player and mark ready."""
        self.adopt(
            read_or_seed_int(
                self.store,
                local,
                VOICE_MODE_KEY,
                self.config.default_mode,
                clamp_mode,
            ),
            read_or_seed_int(
                self.store,
                local,
                VOICE_CHANNEL_KEY,
                self.config.default_channel,
                clamp_channel,
            ),
            read_or_seed_bool(
                self.store,
                local,
                VOICE_RADIO_TX_KEY,
                self.config.default_radio_transmit,
            ),
        )
        self.ready = True
        logger.debug(f"Local settings ready: {self.settings}")

    def ensure_ready(self, local: PlayerHandle | None) -> bool:
        """Reconcile with the store unless already done.

        Returns whether the cache is ready. When the local player is not
        resolvable yet nothing happens; the next trigger tries again.
        """
        if self.ready:
            return True
        if not is_valid(local):
            logger.debug("Local player not resolvable yet, deferring load")
            return False
        assert local is not None
        self.load(local)
        return True

    def save(self, local: PlayerHandle | None) -> bool:
        """Write all three fields to the store, even unchanged ones.

        Returns False (and writes nothing) if the cache could not be
        reconciled first.
        """
        if not self.ready and not self.ensure_ready(local):
            return False

        settings = self.settings
        self.store.set_int(VOICE_MODE_KEY, settings.mode)
        self.store.set_int(VOICE_CHANNEL_KEY, settings.channel)
        self.store.set_bool(VOICE_RADIO_TX_KEY, settings.radio_transmit)
        return True

    def apply_defaults(self) -> None:
        """Reset the cache (not the store) to the configured defaults."""
        self.adopt(
            self.config.default_mode,
            self.config.default_channel,
            self.config.default_radio_transmit,
        )
