"Playlist library store backed by a TOML document and a folder of audio files."

from importlib import metadata

from .errors import (
    CardIdsExhausted,
    ConfigMissing,
    DuplicatePlaylistName,
    InvalidCardId,
    ParseError,
    PlaylistDirectoryMissing,
    PlaylistExists,
    PlaylistNotFound,
    StoreError,
    WorkspaceExists,
)
from .models import Playlist
from .store import Store

__all__ = [
    "__version__",
    "CardIdsExhausted",
    "ConfigMissing",
    "DuplicatePlaylistName",
    "InvalidCardId",
    "ParseError",
    "Playlist",
    "PlaylistDirectoryMissing",
    "PlaylistExists",
    "PlaylistNotFound",
    "Store",
    "StoreError",
    "WorkspaceExists",
]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return metadata.version("playlist-store")
        except metadata.PackageNotFoundError:  # pragma: no cover - during editable dev installs
            return "0.0.0"
    raise AttributeError(name)
