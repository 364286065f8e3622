from __future__ import annotations

import logging

from ..models import Playlist
from ..store import Store

logger = logging.getLogger(__name__)


def run(store: Store, *, allow_random: bool = False) -> list[Playlist]:
    """Register every folder under files/ that has no playlist entry yet."""
    folders = store.unregistered_folders()
    if not folders:
        logger.info("No new playlist folders in %s", store.layout.files_dir)
        return []
    return [store.add_playlist(folder, allow_random=allow_random) for folder in folders]
