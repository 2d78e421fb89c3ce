"""Downloading, checksum verification and archive extraction."""

from __future__ import annotations

import hashlib
import logging
import shutil
import zipfile
from pathlib import Path

import requests
from tqdm import tqdm

log = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class DownloadError(Exception):
    """Raised when the file server answers a download with an unusable status."""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(f"download of {url} failed with status {status}")
        self.url = url
        self.status = status


class UnsafeArchiveError(ValueError):
    """Raised when an archive member would be written outside the target directory."""


def download_file(file_name: str, file_server: str, destination: str | Path = ".") -> Path:
    """Download file_server + file_name into destination, resuming a partial file.

    Returns the path of the downloaded file.
    """
    target = Path(destination) / file_name
    target.parent.mkdir(parents=True, exist_ok=True)
    offset = target.stat().st_size if target.exists() else 0

    headers = {"Range": f"bytes={offset}-"} if offset > 0 else {}
    url = file_server + file_name

    with requests.get(url, headers=headers, stream=True) as response:
        if response.status_code not in (200, 206):
            log.error("Server does not support resume: status %s", response.status_code)
            raise DownloadError(url, response.status_code)

        # A plain 200 means the server sent the whole file, so start over.
        mode = "ab" if response.status_code == 206 else "wb"
        length = response.headers.get("Content-Length")
        total = int(length) if length and length.isdigit() else None

        written = 0
        with target.open(mode) as out, tqdm(
            total=total, unit="B", unit_scale=True, unit_divisor=1024, desc="downloading game"
        ) as bar:
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                out.write(chunk)
                bar.update(len(chunk))
                written += len(chunk)

    log.info("File downloaded: %d bytes written", written)
    return target


def verify_checksum(file_name: str | Path, checksum: str) -> bool:
    """Return True if the MD5 hex digest of file_name equals checksum."""
    digest = hashlib.md5()
    try:
        with open(file_name, "rb") as fh:
            for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        log.error("Error opening file for checksum verification: %s", exc)
        return False

    calculated = digest.hexdigest()
    if calculated != checksum:
        log.error("Checksum mismatch: expected %s, got %s", checksum, calculated)
        return False

    log.info("Checksum verified successfully")
    return True


def extract_zip(file_name: str | Path, target_dir: str | Path = ".") -> list[Path]:
    """Extract every member of the zip archive into target_dir and return the files written."""
    root = Path(target_dir).resolve()
    extracted: list[Path] = []

    with zipfile.ZipFile(file_name) as archive:
        members = archive.infolist()
        destinations = []
        for info in members:
            dest = (root / info.filename).resolve()
            if dest != root and root not in dest.parents:
                raise UnsafeArchiveError(f"archive member {info.filename!r} escapes {root}")
            destinations.append(dest)

        total = sum(info.file_size for info in members)
        with tqdm(total=total, unit="B", unit_scale=True, unit_divisor=1024, desc="Extracting") as bar:
            for info, dest in zip(members, destinations):
                if info.is_dir():
                    dest.mkdir(parents=True, exist_ok=True)
                    continue
                dest.parent.mkdir(parents=True, exist_ok=True)
                with archive.open(info) as src, dest.open("wb") as out:
                    while chunk := src.read(_CHUNK_SIZE):
                        out.write(chunk)
                        bar.update(len(chunk))
                extracted.append(dest)

    return extracted


def remove_file(path: str | Path) -> None:
    """Delete a downloaded file, logging rather than failing if that is not possible."""
    try:
        Path(path).unlink()
    except OSError as exc:
        log.error("Error removing file: %s", exc)


__all__ = [
    "DownloadError",
    "UnsafeArchiveError",
    "download_file",
    "verify_checksum",
    "extract_zip",
    "remove_file",
]


def _copy(src, dst) -> None:
    shutil.copyfileobj(src, dst, _CHUNK_SIZE)