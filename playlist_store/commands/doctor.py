from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path

from ..config import LibraryLayout
from ..errors import StoreError
from ..store import Store
from .output import error, ok as ok_line, warning


@dataclass(slots=True)
class DoctorReport:
    ok: bool
    checks: list[str]


def _card_lines(store: Store) -> tuple[bool, list[str]]:
    holders: dict[int, list[str]] = defaultdict(list)
    for playlist in store.playlists:
        if playlist.card_id is not None:
            holders[playlist.card_id].append(playlist.name)
    clashes = {card: names for card, names in holders.items() if len(names) > 1}
    if clashes:
        detail = "; ".join(
            f"{card}: {', '.join(names)}" for card, names in sorted(clashes.items())
        )
        return False, [error("Card ids", f"shared by several playlists ({detail})")]
    unbound = len(store.playlists) - sum(len(names) for names in holders.values())
    return True, [ok_line("Card ids", f"{len(holders)} bound, {unbound} without card")]


def run(root: Path) -> DoctorReport:
    checks: list[str] = []
    layout = LibraryLayout(root=root)

    if not layout.music_path.exists():
        return DoctorReport(ok=False, checks=[error("Music.toml", f"missing in {layout.root}")])
    if not layout.files_dir.is_dir():
        return DoctorReport(ok=False, checks=[error("Files", f"missing {layout.files_dir}")])

    try:
        store = Store.load(layout.root)
    except StoreError as exc:
        return DoctorReport(ok=False, checks=[error("Library", str(exc))])

    ok = True
    checks.append(ok_line("Library", f"{len(store.playlists)} playlist(s)"))

    cards_ok, card_lines = _card_lines(store)
    ok = ok and cards_ok
    checks.extend(card_lines)

    empty = [p.name for p in store.playlists if not p.is_radio and not p.files]
    if empty:
        checks.append(warning("Empty playlists", ", ".join(empty)))
    else:
        checks.append(ok_line("Empty playlists", "none"))

    unregistered = store.unregistered_folders()
    if unregistered:
        checks.append(
            warning(
                "Unregistered folders",
                f"{', '.join(unregistered)} (run `playlist-store add`)",
            )
        )
    else:
        checks.append(ok_line("Unregistered folders", "none"))

    if layout.positions_path.exists():
        saved = sum(1 for p in store.playlists if p.position is not None)
        checks.append(ok_line("Positions", f"{saved} saved"))
    else:
        checks.append(ok_line("Positions", "not written yet"))

    return DoctorReport(ok=ok, checks=checks)
