from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mutagen import File as MutagenFile
from mutagen import MutagenError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TrackInfo:
    path: Path
    title: Optional[str] = None
    artist: Optional[str] = None
    duration_seconds: Optional[int] = None

    def describe(self) -> str:
        label = self.title or self.path.name
        if self.artist:
            label = f"{self.artist} - {label}"
        if self.duration_seconds is not None:
            label = f"{label} [{format_duration(self.duration_seconds)}]"
        return label


def format_duration(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def read_track_info(path: Path) -> TrackInfo:
    """Read title, artist and length from an audio file; unknown formats yield bare info."""
    info = TrackInfo(path=path)
    if not path.is_file():
        return info
    try:
        audio = MutagenFile(path, easy=True)
    except (MutagenError, OSError) as exc:
        logger.debug("Cannot read tags from %s: %s", path, exc)
        return info
    if audio is None:
        return info
    tags = audio.tags or {}
    info.title = _first(tags.get("title"))
    info.artist = _first(tags.get("artist"))
    length = getattr(getattr(audio, "info", None), "length", None)
    info.duration_seconds = int(length) if length else None
    return info


def _first(values: object) -> Optional[str]:
    if not values:
        return None
    if isinstance(values, (list, tuple)):
        return str(values[0]) if values else None
    return str(values)
