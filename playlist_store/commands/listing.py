from __future__ import annotations

from ..models import Playlist
from ..store import Store


def describe(playlist: Playlist) -> str:
    card = f"card {playlist.card_id}" if playlist.card_id is not None else "no card"
    if playlist.is_radio:
        kind = f"radio {playlist.radio_url}"
    else:
        kind = f"{len(playlist.files)} file(s)"
    flags = ", random" if playlist.allow_random else ""
    return f"{playlist.name} ({card}, {kind}{flags})"


def run(store: Store, *, without_card: bool = False) -> list[str]:
    playlists = store.playlists_without_card() if without_card else store.playlists
    return [describe(playlist) for playlist in playlists]
