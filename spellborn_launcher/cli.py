"""Command line entry point: install, update and start the game."""

from __future__ import annotations

import argparse
import logging

import requests

from .game import DEFAULT_FILE_SERVER, DEFAULT_GAME_INFO, Launcher
from .models import Game

log = logging.getLogger(__name__)

_FETCH_ERRORS = (requests.RequestException, ValueError)
_READ_ERRORS = (OSError, ValueError)


def run(launcher: Launcher) -> bool:
    """Install if needed, apply updates and start the game.

    Returns True if the game was started.
    """
    installed = launcher.is_installed()

    try:
        game = launcher.get_game_info()
    except _READ_ERRORS as exc:
        log.error("Error fetching gameInfo: %s", exc)
        game = Game()

    if not installed:
        try:
            latest = launcher.fetch_latest_version()
        except _FETCH_ERRORS as exc:
            log.error("Error fetching latest version: %s", exc)
        else:
            launcher.download_latest(latest, game.keep_downloads)

    # A fresh installation rewrites the game info file, so read it again.
    try:
        game = launcher.get_game_info()
    except _READ_ERRORS:
        game = Game()

    try:
        updates = launcher.fetch_updates()
    except _FETCH_ERRORS as exc:
        log.error("Error fetching updates: %s", exc)
        updates = []

    log.info("Starting update loop.")
    launcher.update_loop(updates, game, game.keep_downloads)
    log.info("Finished update loop.")

    if game.no_launch:
        log.info("Not launching game as no_launch is true. Goodbye! <3")
        return False

    log.info("Launching game.")
    try:
        launcher.launch_game()
    except OSError as exc:
        log.error("Error launching game: %s", exc)
        return False
    log.info("Finished launching game. Goodbye! <3")
    return True


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, then install, update and start the game."""
    parser = argparse.ArgumentParser(description="Install, update and launch the game.")
    parser.add_argument(
        "--game-info",
        default=DEFAULT_GAME_INFO,
        help="path of the game info file (default: %(default)s)",
    )
    parser.add_argument(
        "--file-server",
        default=DEFAULT_FILE_SERVER,
        help="base URL of the file server (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    run(Launcher(args.game_info, args.file_server))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())