"""Installation state, update fetching and game launching."""

from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
import zipfile
from pathlib import Path
from typing import Any, Iterable

import requests

from .models import Game, Latest, Update, parse_updates
from .transfer import (
    DownloadError,
    UnsafeArchiveError,
    download_file,
    extract_zip,
    remove_file,
    verify_checksum,
)

log = logging.getLogger(__name__)

DEFAULT_GAME_INFO = "game.json"
DEFAULT_FILE_SERVER = "https://files.spellborn.org/"
CLIENT_EXECUTABLE = Path("bin", "client", "Sb_client.exe")

_REQUEST_TIMEOUT = 5.0
_DOWNLOAD_ERRORS = (requests.RequestException, DownloadError, OSError)
_EXTRACT_ERRORS = (zipfile.BadZipFile, UnsafeArchiveError, OSError)


def launch_game_platform(exe_path: str, work_dir: str) -> subprocess.Popen | None:
    """Start the game client in work_dir without waiting for it.

    On Windows the client is started elevated; elsewhere it is started as a
    plain child process, which is returned.
    """
    if sys.platform == "win32":
        os.startfile(exe_path, "runas", "", work_dir, 1)  # type: ignore[attr-defined]
        return None
    return subprocess.Popen([exe_path], cwd=work_dir)


class Launcher:
    """Installs, updates and starts the game from a file server."""

    def __init__(
        self,
        game_info: str | Path = DEFAULT_GAME_INFO,
        file_server: str = DEFAULT_FILE_SERVER,
    ) -> None:
        self.game_info = Path(game_info)
        self.file_server = file_server

    def is_installed(self) -> bool:
        """True when the game info file can be read and names a version."""
        try:
            game = self.get_game_info()
        except (OSError, ValueError):
            log.info("Can't read gameInfo file.")
            return False
        if not game.version:
            log.info("gameInfo file does not contain key version.")
            return False
        log.info("Game is installed.")
        return True

    def get_game_info(self) -> Game:
        """Read the game info file.

        Raises OSError if the file cannot be read and ValueError if its
        contents are not a valid game record.
        """
        with self.game_info.open(encoding="utf-8") as fh:
            data = json.load(fh)
        return Game.from_dict(data)

    def _write_game(self, game: Game) -> None:
        self.game_info.write_text(json.dumps(game.to_dict(), indent=2), encoding="utf-8")

    def _fetch_json(self, name: str) -> Any:
        response = requests.get(self.file_server + name, timeout=_REQUEST_TIMEOUT)
        return response.json()

    def fetch_latest_version(self) -> Latest:
        """Fetch the description of the newest full release."""
        latest = Latest.from_dict(self._fetch_json("latest.json"))
        log.info("Latest version information fetched: %s", latest)
        return latest

    def fetch_updates(self) -> list[Update]:
        """Fetch the list of available updates."""
        updates = parse_updates(self._fetch_json("updates.json"))
        log.info("Latest updates fetched: %s", updates)
        return updates

    def update_version(self, new_version: str) -> None:
        """Rewrite the version recorded in the game info file."""
        game = self.get_game_info()
        game.version = new_version
        self._write_game(game)

    def _dispose(self, path: str | Path, keep_download: bool) -> None:
        if keep_download:
            log.info("keep_downloads is set to true, not removing downloaded file %s.", path)
        else:
            remove_file(path)

    def download_latest(self, latest: Latest, keep_download: bool) -> bool:
        """Download, verify and unpack a full release, then record its version."""
        try:
            archive = download_file(latest.file, self.file_server, ".")
        except _DOWNLOAD_ERRORS as exc:
            log.error("Error downloading file: %s", exc)
            return False

        if not verify_checksum(archive, latest.checksum):
            log.error("Please delete ZIP-file to try download again.")
            return False

        try:
            extract_zip(archive, ".")
        except _EXTRACT_ERRORS as exc:
            log.error("Error extracting file: %s", exc)

        self._dispose(archive, keep_download)

        try:
            self._write_game(Game(path="", version=latest.version))
        except OSError as exc:
            log.error("Error creating gameInfo file: %s", exc)
            return False
        return True

    def _apply_update(self, update: Update, keep_download: bool) -> None:
        try:
            archive: Path | str = download_file(update.file, self.file_server, ".")
        except _DOWNLOAD_ERRORS as exc:
            log.error("Error downloading update: %s", exc)
            archive = update.file
        try:
            extract_zip(archive, ".")
        except _EXTRACT_ERRORS as exc:
            log.error("Error extracting update: %s", exc)
        log.info("Update downloaded and extracted: version %s", update.version)
        self._dispose(archive, keep_download)
        try:
            self.update_version(update.version)
        except (OSError, ValueError) as exc:
            log.error("Error updating version: %s", exc)

    def update_loop(self, updates: Iterable[Update], game: Game, keep_download: bool) -> Game:
        """Apply updates one after another while one applies to the current version.

        Returns the game record after the last update applied.
        """
        available = list(updates)
        current = game
        while True:
            update = next((u for u in available if u.applies_to == current.version), None)
            if update is None:
                return current
            self._apply_update(update, keep_download)
            try:
                current = self.get_game_info()
            except (OSError, ValueError) as exc:
                log.error("Failed to get updated game info: %s", exc)
                return current

    def launch_game(self) -> subprocess.Popen | None:
        """Start the game client found under bin/client in the working directory."""
        exe = CLIENT_EXECUTABLE.absolute()
        log.info("Launching game: %s", exe)
        try:
            return launch_game_platform(str(exe), str(exe.parent))
        except OSError as exc:
            log.error("Failed to launch game: %s", exc)
            raise