from __future__ import annotations

from ..store import Store
from ..tracks import read_track_info


def run(store: Store, name: str) -> list[str]:
    playlist = store.playlist_by_name(name)
    if playlist.is_radio:
        return [f"radio stream {playlist.radio_url}"]
    lines = []
    for index, path in enumerate(playlist.files):
        marker = "*" if playlist.position and playlist.position[0] == index else " "
        lines.append(f"{marker}{index:3d}  {read_track_info(path).describe()}")
    return lines
