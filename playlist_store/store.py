from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any, Iterable, Optional

import tomli_w
from pydantic import ValidationError

from .config import LibraryLayout
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
)
from .fs_utils import atomic_write_text, list_directory, list_subdirectories
from .models import CARD_ID_MAX, LibraryDocument, Playlist, PositionEntry, PositionsDocument

logger = logging.getLogger(__name__)


class Store:
    """In-memory view of one music library.

    A library is a root directory holding ``Music.toml`` (the playlist
    definitions), ``Positions.toml`` (playback positions) and ``files/<name>/``
    folders with the audio files of every non-radio playlist.

    Use it as a context manager to have changes written back when the block
    ends::

        with Store.load("/srv/music") as store:
            store.set_playlist_card_id("Jazz", store.next_card_id())
    """

    def __init__(self, layout: LibraryLayout, playlists: Iterable[Playlist] = ()) -> None:
        self.layout = layout
        self._playlists: list[Playlist] = list(playlists)

    @classmethod
    def load(cls, root_path: str | Path) -> "Store":
        layout = LibraryLayout(root=root_path)
        raw = _read_document(layout.music_path)
        try:
            document = LibraryDocument.model_validate(raw)
        except ValidationError as exc:
            raise ParseError(layout.music_path, _describe(exc)) from exc
        _check_unique_names(layout.music_path, document.playlists)

        store = cls(layout, document.playlists)
        for playlist in store._playlists:
            store._resolve_files(playlist)
        store._restore_positions()
        logger.debug("Loaded %d playlist(s) from %s", len(store._playlists), layout.root)
        return store

    @classmethod
    def load_from_cwd(cls) -> "Store":
        return cls.load(Path.cwd())

    @property
    def root_path(self) -> Path:
        return self.layout.root

    @property
    def playlists(self) -> tuple[Playlist, ...]:
        return tuple(self._playlists)

    def save(self) -> None:
        document = LibraryDocument(playlists=self._playlists)
        self._write_document(
            self.layout.music_path,
            tomli_w.dumps(document.model_dump(mode="json", exclude_none=True)),
        )
        positions = PositionsDocument(
            positions=[
                PositionEntry(name=playlist.name, position=playlist.position)
                for playlist in self._playlists
                if playlist.position is not None
            ]
        )
        self._write_document(
            self.layout.positions_path,
            tomli_w.dumps(positions.model_dump(mode="json")),
        )
        logger.debug("Saved %d playlist(s) to %s", len(self._playlists), self.layout.root)

    def close(self) -> None:
        """Save the library; failures are logged, never raised."""
        try:
            self.save()
        except StoreError as exc:
            logger.error("Failed to save library %s: %s", self.layout.root, exc)

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def playlists_without_card(self) -> list[Playlist]:
        return [
            playlist.model_copy(deep=True)
            for playlist in self._playlists
            if playlist.card_id is None
        ]

    def get_files(self, name: str) -> list[Path]:
        playlist = self._find(name)
        if playlist is None:
            logger.debug("No playlist named %s; returning no files", name)
            return []
        return list(playlist.files)

    def playlist_by_name(self, name: str) -> Playlist:
        playlist = self._find(name)
        if playlist is None:
            raise PlaylistNotFound(name)
        return playlist

    def playlist_by_card(self, card_id: int) -> Playlist:
        for playlist in self._playlists:
            if playlist.card_id == card_id:
                return playlist
        raise PlaylistNotFound(f"card {card_id}")

    def next_card_id(self) -> int:
        """Smallest unused card id, filling gaps before extending the range."""
        ids = sorted(p.card_id for p in self._playlists if p.card_id is not None)
        for a, b in zip(ids, ids[1:]):
            if b != a + 1:
                return a + 1
        if not ids:
            return 0
        if ids[-1] >= CARD_ID_MAX:
            raise CardIdsExhausted()
        return ids[-1] + 1

    def set_playlist_card_id(self, name: str, card_id: int) -> None:
        playlist = self.playlist_by_name(name)
        if not 0 <= card_id <= CARD_ID_MAX:
            raise InvalidCardId(card_id)
        playlist.card_id = card_id

    def set_position(self, name: str, track_index: int) -> None:
        self.playlist_by_name(name).position = (track_index, 0)

    def add_playlist(
        self,
        name: str,
        *,
        allow_random: bool = False,
        radio_url: Optional[str] = None,
    ) -> Playlist:
        if self._find(name) is not None:
            raise PlaylistExists(name)
        playlist = Playlist(name=name, allow_random=allow_random, radio_url=radio_url)
        self._resolve_files(playlist)
        self._playlists.append(playlist)
        logger.info("Added playlist %s (%d file(s))", name, len(playlist.files))
        return playlist

    def unregistered_folders(self) -> list[str]:
        """Folders under files/ that no playlist refers to."""
        files_dir = self.layout.files_dir
        try:
            folders = list_subdirectories(files_dir)
        except OSError as exc:
            raise PlaylistDirectoryMissing(files_dir, exc) from exc
        known = {playlist.name for playlist in self._playlists}
        return [folder for folder in folders if folder not in known]

    def _find(self, name: str) -> Optional[Playlist]:
        for playlist in self._playlists:
            if playlist.name == name:
                return playlist
        return None

    def _resolve_files(self, playlist: Playlist) -> None:
        if playlist.is_radio:
            playlist.files = []
            return
        directory = self.layout.playlist_dir(playlist.name)
        try:
            playlist.files = list_directory(directory)
        except OSError as exc:
            raise PlaylistDirectoryMissing(directory, exc) from exc

    def _restore_positions(self) -> None:
        path = self.layout.positions_path
        if not path.exists():
            return
        raw = _read_document(path)
        try:
            document = PositionsDocument.model_validate(raw)
        except ValidationError as exc:
            raise ParseError(path, _describe(exc)) from exc
        for entry in document.positions:
            playlist = self._find(entry.name)
            if playlist is None:
                logger.warning("Dropping saved position of unknown playlist %s", entry.name)
                continue
            playlist.position = entry.position

    @staticmethod
    def _write_document(path: Path, text: str) -> None:
        try:
            atomic_write_text(path, text)
        except OSError as exc:
            raise ConfigMissing(path, exc) from exc


def _read_document(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        raise ConfigMissing(path, exc) from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(path, str(exc)) from exc


def _check_unique_names(path: Path, playlists: Iterable[Playlist]) -> None:
    seen: set[str] = set()
    for playlist in playlists:
        if playlist.name in seen:
            raise DuplicatePlaylistName(path, playlist.name)
        seen.add(playlist.name)


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)
