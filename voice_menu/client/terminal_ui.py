"""Terminal rendering of the voice menu with blessed."""

from __future__ import annotations

from blessed import Terminal

from ..common.constants import MAX_CHANNEL, MIN_CHANNEL, mode_label
from ..common.policy import AudioParams
from .voice_menu import DisplayState


class PeerRow:
    """One line of the peer table."""

    def __init__(
        self,
        name: str,
        mode: int,
        channel: int,
        radio_transmit: bool,
        params: AudioParams | None,
    ) -> None:
        self.name = name
        self.mode = mode
        self.channel = channel
        self.radio_transmit = radio_transmit
        self.params = params


class TerminalUI:
    def __init__(self, terminal: Terminal):
        self.term = terminal

    def _render_slider(self, channel: int) -> str:
        """Draw the channel slider, e.g. [---|------]."""
        cells = []
        for c in range(MIN_CHANNEL, MAX_CHANNEL + 1):
            cells.append(self.term.bold("|") if c == channel else "-")
        return f"[{''.join(cells)}]"

    def _render_params(self, params: AudioParams | None) -> str:
        if params is None:
            return self.term.bright_black("not applied")
        text = (
            f"near={params.near:g} far={params.far:g} gain={params.gain:g}"
        )
        if params.lowpass:
            text += " lowpass"
        return text

    def render(
        self,
        display: DisplayState,
        peers: list[PeerRow],
        selected: int | None,
        local_name: str,
        ready: bool,
    ) -> None:
        """Render the voice menu to the terminal."""
        output: list[str] = []
        clear_eol = str(self.term.clear_eol)

        # Move to top (don't clear - overwrite in place to avoid flicker)
        output.append(str(self.term.home))

        sync_status = (
            self.term.green("SYNCED") if ready else self.term.yellow("PENDING")
        )
        output.append(f"[{sync_status}] {local_name}{clear_eol}")
        output.append(clear_eol)

        # Local settings
        radio_text = display.radio_transmit_text
        if display.radio_transmit:
            radio_text = self.term.green(radio_text)
        else:
            radio_text = self.term.red(radio_text)
        output.append(f"{display.mode_text}{clear_eol}")
        output.append(
            f"{display.channel_text}  {self._render_slider(display.channel)}"
            f"{clear_eol}"
        )
        output.append(f"{radio_text}{clear_eol}")

        # Peer table
        output.append(clear_eol)
        output.append(f"Players ({len(peers)}):{clear_eol}")
        for i, peer in enumerate(peers):
            marker = ">" if i == selected else " "
            tx = "tx" if peer.radio_transmit else "--"
            output.append(
                f"  {marker} {peer.name:<12} {mode_label(peer.mode):<7} "
                f"ch {peer.channel:>2} {tx}  {self._render_params(peer.params)}"
                f"{clear_eol}"
            )

        # Controls
        output.append(clear_eol)
        output.append(
            f"Controls: W/T/S=Mode, +/-=Channel, R=Radio, 0=Reset, Q=Quit{clear_eol}"
        )
        output.append(
            f"Peers: J=Join, X=Leave, Tab=Select, P=Mode, C=Channel, B=Radio"
            f"{clear_eol}"
        )

        # Clear any remaining lines from previous frame
        output.append(str(self.term.clear_eos))

        print("\n".join(output), end="", flush=True)

    def cleanup(self) -> None:
        """Restore terminal state."""
        print(self.term.normal + self.term.clear, end="")
