from __future__ import annotations

import logging
from typing import Optional

from ..errors import PlaylistNotFound
from ..store import Store

logger = logging.getLogger(__name__)


def run(store: Store, name: str, *, card_id: Optional[int] = None) -> int:
    """Bind a card to ``name``; an explicit id already in use moves from its old playlist."""
    playlist = store.playlist_by_name(name)
    if card_id is None:
        if playlist.card_id is not None:
            logger.info("%s already bound to card %d", name, playlist.card_id)
            return playlist.card_id
        card_id = store.next_card_id()
    else:
        try:
            holder = store.playlist_by_card(card_id)
        except PlaylistNotFound:
            holder = None
        if holder is not None and holder.name != name:
            logger.warning("Card %d moves from %s to %s", card_id, holder.name, name)
            holder.card_id = None
    store.set_playlist_card_id(name, card_id)
    logger.info("Bound card %d to %s", card_id, name)
    return card_id
