from __future__ import annotations

import os
import tempfile
from pathlib import Path


def list_directory(directory: Path) -> list[Path]:
    """Return the entries of ``directory`` in the order the filesystem yields them."""
    with os.scandir(directory) as it:
        return [Path(entry.path) for entry in it]


def list_subdirectories(directory: Path) -> list[str]:
    with os.scandir(directory) as it:
        return sorted(entry.name for entry in it if entry.is_dir())


def atomic_write_text(path: Path, text: str) -> None:
    """Write ``text`` to a temporary sibling of ``path`` and rename it into place."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            try:
                mode = path.stat().st_mode & 0o777
            except FileNotFoundError:
                mode = 0o644
            os.chmod(tmp_path, mode)
            fh.write(text)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
