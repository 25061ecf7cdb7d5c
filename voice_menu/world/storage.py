"""File-based persistence for player voice profiles.

Directory structure:
    users/
      alice/
        profile.json   # {"voice_mode": 1, "voice_channel": 3, "voice_radio_tx": true}
      bob/
        profile.json
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

ProfileValue = int | bool


def check_player_name(name: str) -> None:
    """Raise ValueError unless name is usable as a single directory name."""
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise ValueError(f"Invalid player name for storage: {name!r}")


class ProfileStorage:
    """File-based storage for per-player key/value records."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir
        self.users_dir = data_dir / "users"
        self.users_dir.mkdir(parents=True, exist_ok=True)

    def _user_dir(self, name: str) -> Path:
        """Get the directory for a user."""
        check_player_name(name)
        return self.users_dir / name

    def load_profile(self, name: str) -> dict[str, ProfileValue] | None:
        """Get the saved profile for a player.

        Returns None if no profile exists or the file is unreadable. Values
        that are neither int nor bool are dropped.
        """
        profile_path = self._user_dir(name) / "profile.json"
        if not profile_path.exists():
            return None

        try:
            data = json.loads(profile_path.read_text())
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable profile for {name}: {e}")
            return None
        if not isinstance(data, dict):
            return None

        return {
            str(key): value
            for key, value in data.items()
            if isinstance(value, (int, bool))
        }

    def save_profile(self, name: str, values: dict[str, ProfileValue]) -> None:
        """Save a player's profile to disk."""
        user_dir = self._user_dir(name)
        user_dir.mkdir(parents=True, exist_ok=True)
        (user_dir / "profile.json").write_text(json.dumps(values, sort_keys=True))
