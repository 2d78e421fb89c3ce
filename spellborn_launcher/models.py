"""Data records exchanged with the file server and stored in the game info file."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


class ModelError(ValueError):
    """Raised when JSON data does not have the shape a record expects."""


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ModelError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _str_field(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ModelError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


def _bool_field(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ModelError(f"field {key!r} must be a boolean, got {type(value).__name__}")
    return value


@dataclass(slots=True)
class Latest:
    """The newest full release offered by the file server."""

    version: str = ""
    file: str = ""
    checksum: str = ""
    server: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Latest":
        if data is None:
            return cls()
        data = _require_mapping(data, "latest")
        return cls(
            version=_str_field(data, "version"),
            file=_str_field(data, "file"),
            checksum=_str_field(data, "checksum"),
            server=_str_field(data, "server"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "file": self.file,
            "checksum": self.checksum,
            "server": self.server,
        }


@dataclass(slots=True)
class Update:
    """A patch that moves an installation from one version to the next."""

    applies_to: str = ""
    version: str = ""
    file: str = ""
    patchnotes: str = ""
    checksum: str = ""
    server: str = ""
    enabled: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Update":
        if data is None:
            return cls()
        data = _require_mapping(data, "update")
        return cls(
            applies_to=_str_field(data, "applies_to"),
            version=_str_field(data, "version"),
            file=_str_field(data, "file"),
            patchnotes=_str_field(data, "patchnotes"),
            checksum=_str_field(data, "checksum"),
            server=_str_field(data, "server"),
            enabled=_bool_field(data, "enabled"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "applies_to": self.applies_to,
            "version": self.version,
            "file": self.file,
            "patchnotes": self.patchnotes,
            "checksum": self.checksum,
            "server": self.server,
            "enabled": self.enabled,
        }


@dataclass(slots=True)
class Game:
    """Local installation state kept in the game info file."""

    path: str = ""
    version: str = ""
    keep_downloads: bool = False
    no_launch: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Game":
        if data is None:
            return cls()
        data = _require_mapping(data, "game")
        return cls(
            path=_str_field(data, "path"),
            version=_str_field(data, "version"),
            keep_downloads=_bool_field(data, "keep_downloads"),
            no_launch=_bool_field(data, "no_launch"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "version": self.version,
            "keep_downloads": self.keep_downloads,
            "no_launch": self.no_launch,
        }


def parse_updates(data: Any) -> list[Update]:
    """Turn the decoded updates document, a list of {"update": {...}} entries, into updates."""
    if data is None:
        return []
    if not isinstance(data, list):
        raise ModelError(f"updates must be a JSON array, got {type(data).__name__}")
    return [
        Update.from_dict(_require_mapping(entry, "updates entry").get("update"))
        for entry in data
    ]