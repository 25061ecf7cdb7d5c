"""Keyboard input handling for the voice menu client."""

from blessed.keyboard import Keystroke

# Key -> voice menu action name
ACTION_KEYS = {
    "w": "whisper",
    "t": "talk",
    "s": "shout",
    "r": "toggle_radio",
    "0": "reset",
    "j": "add_peer",
    "x": "remove_peer",
    "p": "cycle_peer_mode",
    "c": "cycle_peer_channel",
    "b": "toggle_peer_radio",
}


def get_channel_step(key: Keystroke) -> int | None:
    """Get channel slider step from key press, or None if not a slider key."""
    if key.name in ("KEY_RIGHT", "KEY_UP"):
        return 1
    elif key.name in ("KEY_LEFT", "KEY_DOWN"):
        return -1

    char = str(key)
    if char in ("+", "="):
        return 1
    elif char in ("-", "_"):
        return -1
    return None


def get_action(key: Keystroke) -> str | None:
    """Get the menu action for a key press, or None."""
    return ACTION_KEYS.get(str(key).lower())


def is_peer_select_key(key: Keystroke) -> bool:
    """Check if key cycles the selected peer (Tab)."""
    return key.name == "KEY_TAB"


def is_quit_key(key: Keystroke) -> bool:
    """Check if key is the quit key."""
    return str(key).lower() == "q"
