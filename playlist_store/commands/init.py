from __future__ import annotations

import logging
from pathlib import Path

from ..config import LibraryLayout
from ..errors import ConfigMissing, WorkspaceExists

logger = logging.getLogger(__name__)


def run(path: Path) -> Path:
    """Create an empty library at ``path``: a files/ folder and an empty Music.toml."""
    layout = LibraryLayout(root=path)
    if layout.music_path.exists():
        raise WorkspaceExists(layout.root)
    logger.info("Initialize workspace in %s", layout.root)
    try:
        layout.files_dir.mkdir(parents=True, exist_ok=True)
        layout.music_path.write_text("", encoding="utf-8")
    except OSError as exc:
        raise ConfigMissing(layout.music_path, exc) from exc
    return layout.root
