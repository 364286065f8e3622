from __future__ import annotations

from pathlib import Path
from typing import Optional


class StoreError(Exception):
    """Base class for everything the playlist store raises."""


class ConfigMissing(StoreError):
    """A library document could not be opened, created or written."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"configuration missing at {path}{detail}")


class ParseError(StoreError):
    """A library document is not valid TOML or does not match the schema."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"cannot parse {path}: {detail}")


class DuplicatePlaylistName(ParseError):
    def __init__(self, path: Path, name: str) -> None:
        self.name = name
        super().__init__(path, f"playlist name {name!r} is used more than once")


class PlaylistNotFound(StoreError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"playlist not found: {key}")


class PlaylistDirectoryMissing(StoreError):
    """The files/<name>/ folder of a non-radio playlist cannot be listed."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"playlist directory missing at {path}{detail}")


class PlaylistExists(StoreError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"playlist already exists: {name}")


class WorkspaceExists(StoreError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"workspace in {path} already exists")


class InvalidCardId(StoreError):
    """A card id outside the unsigned 32-bit range was requested."""

    def __init__(self, card_id: int) -> None:
        self.card_id = card_id
        super().__init__(f"card id out of range: {card_id}")


class CardIdsExhausted(StoreError):
    def __init__(self) -> None:
        super().__init__("no unused card id left")
