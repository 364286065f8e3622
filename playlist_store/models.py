from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

# card ids are stored as unsigned 32-bit integers on the reader side
CARD_ID_MAX = 2**32 - 1


class Playlist(BaseModel):
    """One named playlist: a folder of tracks under files/<name>/ or a radio stream.

    ``files`` and ``position`` are session state; they are never written to the
    definitions document.
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    name: str = Field(strict=True)
    card_id: Optional[int] = Field(default=None, ge=0, le=CARD_ID_MAX, strict=True)
    allow_random: bool = Field(default=False, strict=True)
    radio_url: Optional[str] = Field(default=None, strict=True)
    files: List[Path] = Field(default_factory=list, exclude=True)
    position: Optional[Tuple[NonNegativeInt, NonNegativeInt]] = Field(default=None, exclude=True)

    @property
    def is_radio(self) -> bool:
        return self.radio_url is not None


class LibraryDocument(BaseModel):
    """Schema of Music.toml."""

    model_config = ConfigDict(extra="ignore")

    playlists: List[Playlist] = Field(default_factory=list)


class PositionEntry(BaseModel):
    name: str
    position: Tuple[NonNegativeInt, NonNegativeInt]


class PositionsDocument(BaseModel):
    """Schema of Positions.toml."""

    model_config = ConfigDict(extra="ignore")

    positions: List[PositionEntry] = Field(default_factory=list)
