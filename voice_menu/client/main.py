"""Client entry point."""

import argparse
import logging
import os
import sys
from pathlib import Path

from ..common.config import VoiceConfig, load_config
from ..world.storage import ProfileStorage, check_player_name
from .menu_client import MenuClient


def setup_logging(log_file: str) -> None:
    """Configure logging to file only (console would interfere with TUI)."""
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_file),
        ],
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Voice Menu Client")
    parser.add_argument(
        "--name", default=os.environ.get("USER", "player"), help="Player name"
    )
    parser.add_argument(
        "--data-dir",
        default=str(Path.home() / ".voice-menu"),
        help="Directory for saved voice settings (default: ~/.voice-menu)",
    )
    parser.add_argument(
        "--no-persist",
        action="store_true",
        help="Keep settings in memory only",
    )
    parser.add_argument(
        "--config", help="Voice profile config file (JSON, optional)"
    )
    parser.add_argument(
        "--log", help="Log file path (logging disabled if not specified)"
    )
    args = parser.parse_args()

    if args.log:
        setup_logging(args.log)
    else:
        # Suppress all logging output (no stderr spam during TUI)
        logging.getLogger().addHandler(logging.NullHandler())

    config = VoiceConfig()
    if args.config:
        try:
            config = load_config(args.config)
        except (OSError, ValueError) as e:
            print(f"Failed to load config: {e}", file=sys.stderr)
            sys.exit(1)

    if not args.no_persist:
        try:
            check_player_name(args.name)
        except ValueError as e:
            print(e, file=sys.stderr)
            sys.exit(1)

    storage = None if args.no_persist else ProfileStorage(Path(args.data_dir))
    client = MenuClient(args.name, config, storage)
    client.start()

    try:
        client.run()
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
