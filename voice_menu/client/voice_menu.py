"""Voice menu: the local player's mode/channel/radio controls.

Wires collaborator signals and user actions to a single recompute of
every peer's audio, and keeps the display labels in sync.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..common.config import VoiceConfig
from ..common.constants import (
    MAX_CHANNEL,
    MIN_CHANNEL,
    VoiceMode,
    channel_from_slider,
    mode_label,
)
from .interfaces import PlayerHandle, ProfileStore, RosterProvider, is_valid
from .replication import ReplicationLoop
from .settings_state import SettingsState

logger = logging.getLogger(__name__)


class ChannelSlider:
    """Channel slider widget state, owned by the UI.

    Listeners fire on every value change, including ones made by the menu
    itself while it syncs the slider to the current channel.
    """

    def __init__(self, value: float = float(MIN_CHANNEL)) -> None:
        self.value = value
        self.min_value = 0.0
        self.max_value = 1.0
        self.whole_numbers = False
        self._on_value_changed_callbacks: list[Callable[[float], None]] = []

    def on_value_changed(
        self, callback: Callable[[float], None]
    ) -> Callable[[float], None]:
        """Decorator for value changes."""
        self._on_value_changed_callbacks.append(callback)
        return callback

    def set_value(self, value: float) -> None:
        if self.whole_numbers:
            value = float(round(value))
        value = max(self.min_value, min(self.max_value, value))
        if value == self.value:
            return
        self.value = value
        for callback in self._on_value_changed_callbacks:
            callback(value)


@dataclass(frozen=True)
class DisplayState:
    """Labels shown for the local player's settings."""

    mode_text: str
    channel_text: str
    radio_transmit_text: str
    channel: int
    radio_transmit: bool


DisplayCallback = Callable[[DisplayState], None]


class VoiceMenu:
    def __init__(
        self,
        config: VoiceConfig,
        store: ProfileStore,
        roster: RosterProvider,
        slider: ChannelSlider | None = None,
    ) -> None:
        self.config = config
        self.store = store
        self.roster = roster
        self.slider = slider
        self.state = SettingsState(config, store)
        self.replication = ReplicationLoop(
            config, store, roster, self.state, on_applied=self.refresh_display
        )
        self._suppress_slider_callback = False
        self._display = self._build_display()
        self._on_display_changed_callbacks: list[DisplayCallback] = []

    # Session lifecycle

    def attach(self) -> None:
        """Subscribe to the store's and roster's signals."""
        self.store.on_player_restored(self.on_player_restored)
        self.store.on_player_data_updated(self.on_player_data_updated)
        self.roster.on_player_joined(self.on_player_joined)
        self.roster.on_player_left(self.on_player_left)

    def start(self) -> None:
        """Initial load, slider setup and first audio pass."""
        self.state.ensure_ready(self.roster.local_player)

        if self.slider is not None:
            self.slider.min_value = float(MIN_CHANNEL)
            self.slider.max_value = float(MAX_CHANNEL)
            self.slider.whole_numbers = True

        self.refresh_display()
        self.apply_audio_for_all_players()

    def on_display_changed(self, callback: DisplayCallback) -> DisplayCallback:
        """Decorator for display label updates."""
        self._on_display_changed_callbacks.append(callback)
        return callback

    # Collaborator signals

    def on_player_restored(self, player: PlayerHandle) -> None:
        if not is_valid(player) or not player.is_local:
            return

        # Stored data is available now; read it fresh even if a provisional
        # load already happened.
        self.state.load(player)
        self.apply_audio_for_all_players()

    def on_player_data_updated(self, player: PlayerHandle, keys: list[str]) -> None:
        if not is_valid(player):
            return
        logger.debug(f"Stored data updated for {player.name}: {keys}")
        self.apply_audio_for_all_players()

    def on_player_joined(self, player: PlayerHandle) -> None:
        self.apply_audio_for_all_players()

    def on_player_left(self, player: PlayerHandle) -> None:
        self.apply_audio_for_all_players()

    # Controls

    def set_whisper_mode(self) -> None:
        self._set_mode_and_apply(VoiceMode.WHISPER)

    def set_talk_mode(self) -> None:
        self._set_mode_and_apply(VoiceMode.TALK)

    def set_shout_mode(self) -> None:
        self._set_mode_and_apply(VoiceMode.SHOUT)

    def set_radio_level(self, slider_value: float) -> None:
        """Select a channel from a slider position (rounded and clamped)."""
        if self._suppress_slider_callback:
            return

        self.state.set_channel(channel_from_slider(slider_value))
        self._save_and_apply()

    def set_radio_from_slider(self) -> None:
        if self.slider is None:
            return
        self.set_radio_level(self.slider.value)

    def toggle_radio_transmit(self) -> None:
        self._set_radio_transmit(not self.state.radio_transmit)

    def set_radio_transmit_on(self) -> None:
        self._set_radio_transmit(True)

    def set_radio_transmit_off(self) -> None:
        self._set_radio_transmit(False)

    def reset_to_defaults(self) -> None:
        self.state.apply_defaults()
        self._save_and_apply()

    def _set_mode_and_apply(self, mode: int) -> None:
        self.state.set_mode(mode)
        self._save_and_apply()

    def _set_radio_transmit(self, enabled: bool) -> None:
        self.state.set_radio_transmit(enabled)
        self._save_and_apply()

    def _save_and_apply(self) -> None:
        self.state.save(self.roster.local_player)
        self.apply_audio_for_all_players()

    # Audio and display

    def apply_audio_for_all_players(self) -> int:
        return self.replication.apply_audio_for_all_players()

    @property
    def display(self) -> DisplayState:
        return self._display

    def _build_display(self) -> DisplayState:
        settings = self.state.settings
        return DisplayState(
            mode_text=f"Mode: {mode_label(settings.mode)}",
            channel_text=f"Channel: {settings.channel}",
            radio_transmit_text=(
                "Radio: ON" if settings.radio_transmit else "Radio: OFF"
            ),
            channel=settings.channel,
            radio_transmit=settings.radio_transmit,
        )

    def refresh_display(self) -> None:
        """Sync the slider and labels with the cache. Never touches storage."""
        if self.slider is not None:
            # Moving the slider from here must not be read back as user input
            self._suppress_slider_callback = True
            try:
                self.slider.set_value(float(self.state.channel))
            finally:
                self._suppress_slider_callback = False

        self._display = self._build_display()
        for callback in self._on_display_changed_callbacks:
            callback(self._display)
