from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator

MUSIC_DOCUMENT = "Music.toml"
POSITIONS_DOCUMENT = "Positions.toml"
FILES_DIRECTORY = "files"


class LibraryLayout(BaseModel):
    """Where the documents and audio folders of one library live."""

    root: Path

    @field_validator("root", mode="before")
    @classmethod
    def _expand_root(cls, value: str | Path) -> Path:
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = Path.cwd() / path
        return path

    @property
    def music_path(self) -> Path:
        return self.root / MUSIC_DOCUMENT

    @property
    def positions_path(self) -> Path:
        return self.root / POSITIONS_DOCUMENT

    @property
    def files_dir(self) -> Path:
        return self.root / FILES_DIRECTORY

    def playlist_dir(self, name: str) -> Path:
        return self.files_dir / name


def find_root(explicit_path: Optional[Path]) -> Path:
    if explicit_path:
        return Path(explicit_path).expanduser().absolute()
    return Path.cwd()
