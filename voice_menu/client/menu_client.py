"""Interactive voice menu client over a local simulated session."""

from __future__ import annotations

import logging
import time
from typing import Any

from blessed import Terminal
from blessed.keyboard import Keystroke

from ..common.config import VoiceConfig
from ..common.constants import MAX_CHANNEL, MIN_CHANNEL
from ..world.player import Participant
from ..world.session import Session
from ..world.storage import ProfileStorage
from .input_handler import get_action, get_channel_step, is_peer_select_key, is_quit_key
from .replication import read_peer_settings
from .terminal_ui import PeerRow, TerminalUI
from .voice_menu import ChannelSlider, VoiceMenu

logger = logging.getLogger(__name__)

FRAME_INTERVAL = 0.05  # Seconds between frames

# Peer names handed out by the join key
PEER_NAMES = ["alice", "bob", "carol", "dave", "erin", "frank", "grace", "heidi"]


class MenuClient:
    def __init__(
        self,
        name: str,
        config: VoiceConfig,
        storage: ProfileStorage | None = None,
    ) -> None:
        self.name = name
        self.session = Session(storage)
        self.slider = ChannelSlider()
        self.menu = VoiceMenu(
            config, self.session.store, self.session.roster, slider=self.slider
        )
        self.menu.attach()
        # The UI wires slider moves back into the menu
        self.slider.on_value_changed(lambda _value: self.menu.set_radio_from_slider())
        self.selected: int | None = None
        self.running = False
        self.term: Any = Terminal()
        self.ui = TerminalUI(self.term)
        self._joined_peers = 0

    def _peers(self) -> list[Participant]:
        return [p for p in self.session.roster.players.values() if not p.is_local]

    def start(self) -> None:
        """Join the local player and run the first audio pass.

        Stored data is restored on the first frame, as it would arrive a
        moment after joining a real session.
        """
        self.session.join_local(self.name)
        self.menu.start()

    def run(self) -> None:
        """Main client loop."""
        self.running = True
        restored = False
        try:
            with self.term.fullscreen(), self.term.cbreak(), self.term.hidden_cursor():
                while self.running:
                    if not restored:
                        self.session.restore_local()
                        restored = True

                    # Drain all pending input (process buffered keys immediately)
                    while True:
                        key = self.term.inkey(timeout=0)
                        if not key:
                            break
                        self._handle_input(key)

                    self.session.run_until_idle()
                    self._render()
                    time.sleep(FRAME_INTERVAL)
        finally:
            self.running = False
            self.ui.cleanup()

    def _handle_input(self, key: Keystroke) -> None:
        """Handle keyboard input."""
        if is_quit_key(key):
            self.running = False
            return

        if is_peer_select_key(key):
            self._select_next_peer()
            return

        step = get_channel_step(key)
        if step is not None:
            self.slider.set_value(self.slider.value + step)
            return

        action = get_action(key)
        if action is not None:
            self.handle_action(action)

    def handle_action(self, action: str) -> None:
        """Dispatch a named menu or peer action."""
        if action == "whisper":
            self.menu.set_whisper_mode()
        elif action == "talk":
            self.menu.set_talk_mode()
        elif action == "shout":
            self.menu.set_shout_mode()
        elif action == "toggle_radio":
            self.menu.toggle_radio_transmit()
        elif action == "reset":
            self.menu.reset_to_defaults()
        elif action == "add_peer":
            self._add_peer()
        elif action == "remove_peer":
            self._remove_selected_peer()
        elif action == "cycle_peer_mode":
            self._update_selected_peer(mode_step=1)
        elif action == "cycle_peer_channel":
            self._update_selected_peer(channel_step=1)
        elif action == "toggle_peer_radio":
            self._update_selected_peer(toggle_radio=True)
        else:
            logger.debug(f"Unknown action: {action}")

    def _select_next_peer(self) -> None:
        peers = self._peers()
        if not peers:
            self.selected = None
        elif self.selected is None:
            self.selected = 0
        else:
            self.selected = (self.selected + 1) % len(peers)

    def _selected_peer(self) -> Participant | None:
        peers = self._peers()
        if self.selected is None or not peers:
            return None
        self.selected = min(self.selected, len(peers) - 1)
        return peers[self.selected]

    def _add_peer(self) -> None:
        name = PEER_NAMES[self._joined_peers % len(PEER_NAMES)]
        if self._joined_peers >= len(PEER_NAMES):
            name += str(self._joined_peers // len(PEER_NAMES) + 1)
        self._joined_peers += 1
        # Joins unsynced: heard with the fallback settings until it publishes
        self.session.join_peer(name)
        if self.selected is None:
            self.selected = 0

    def _remove_selected_peer(self) -> None:
        peer = self._selected_peer()
        if peer is None:
            return
        self.session.leave(peer.player_id)
        if not self._peers():
            self.selected = None

    def _update_selected_peer(
        self, mode_step: int = 0, channel_step: int = 0, toggle_radio: bool = False
    ) -> None:
        peer = self._selected_peer()
        if peer is None:
            return
        current = read_peer_settings(self.session.store, peer)
        channel = current.channel + channel_step
        if channel > MAX_CHANNEL:
            channel = MIN_CHANNEL
        self.session.publish(
            peer,
            mode=(current.mode + mode_step) % 3,
            channel=channel,
            radio_transmit=(
                not current.radio_transmit if toggle_radio else current.radio_transmit
            ),
        )

    def _render(self) -> None:
        """Render the current menu state."""
        applied = self.menu.replication.last_applied
        rows = []
        for peer in self._peers():
            settings = read_peer_settings(self.session.store, peer)
            rows.append(
                PeerRow(
                    peer.name,
                    settings.mode,
                    settings.channel,
                    settings.radio_transmit,
                    applied.get(peer.player_id),
                )
            )
        self.ui.render(
            self.menu.display,
            rows,
            self.selected,
            self.name,
            self.menu.state.ready,
        )
