from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .commands import add as cmd_add
from .commands import card as cmd_card
from .commands import doctor as cmd_doctor
from .commands import init as cmd_init
from .commands import listing as cmd_listing
from .commands import tracks as cmd_tracks
from .config import find_root
from .errors import StoreError
from .models import CARD_ID_MAX
from .store import Store

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ShortPathFormatter(logging.Formatter):
    def __init__(self, fmt: str, root: Path | None) -> None:
        super().__init__(fmt)
        self.root = str(root) if root else ""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.root:
            return message
        return message.replace(f"{self.root}/", "")


class ColorFormatter(ShortPathFormatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


class WarningBufferHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # pragma: no cover
            msg = record.getMessage()
        self.records.append(msg)


def _card_id(value: str) -> int:
    try:
        card_id = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid card id: {value}") from exc
    if not 0 <= card_id <= CARD_ID_MAX:
        raise argparse.ArgumentTypeError(f"card id out of range: {value}")
    return card_id


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage a local playlist library")
    parser.add_argument("--root", type=Path, help="Library root (defaults to the current directory)")
    parser.add_argument("--log-level", default="INFO", help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)
    init_parser = subparsers.add_parser("init", help="Initialize a new music workspace")
    init_parser.add_argument("path", type=Path, help="Directory to initialize")
    list_parser = subparsers.add_parser("list", help="List all playlists in the library")
    list_parser.add_argument(
        "--without-card",
        action="store_true",
        help="Only show playlists that are not bound to a card",
    )
    add_parser = subparsers.add_parser(
        "add", help="Register folders under files/ that have no playlist yet"
    )
    add_parser.add_argument(
        "--allow-random",
        action="store_true",
        help="Allow shuffle playback for the new playlists",
    )
    card_parser = subparsers.add_parser("card", help="Bind a playlist to a card id")
    card_parser.add_argument("name", help="Playlist name")
    card_parser.add_argument(
        "--id", type=_card_id, default=None, help="Card id (defaults to the next free id)"
    )
    tracks_parser = subparsers.add_parser("tracks", help="List the tracks of a playlist")
    tracks_parser.add_argument("name", help="Playlist name")
    subparsers.add_parser("doctor", help="Check the library for inconsistencies")
    return parser


def configure_logging(level_name: str, root: Path | None) -> WarningBufferHandler:
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    color_handler = logging.StreamHandler()
    color_handler.setFormatter(ColorFormatter(LOG_FORMAT, root))
    root_logger.addHandler(color_handler)

    warn_buffer = WarningBufferHandler()
    warn_buffer.setFormatter(ShortPathFormatter(LOG_FORMAT, root))
    root_logger.addHandler(warn_buffer)
    return warn_buffer


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    root = find_root(args.root)
    warn_buffer = configure_logging(args.log_level, root)

    try:
        match args.command:
            case "init":
                created = cmd_init.run(args.path)
                print(f" => Initialized workspace in {created}")
            case "list":
                store = Store.load(root)
                for line in cmd_listing.run(store, without_card=args.without_card):
                    print(f" => {line}")
            case "add":
                with Store.load(root) as store:
                    for playlist in cmd_add.run(store, allow_random=args.allow_random):
                        print(f" => Added {cmd_listing.describe(playlist)}")
            case "card":
                with Store.load(root) as store:
                    card_id = cmd_card.run(store, args.name, card_id=args.id)
                print(f" => {args.name} bound to card {card_id}")
            case "tracks":
                store = Store.load(root)
                for line in cmd_tracks.run(store, args.name):
                    print(line)
            case "doctor":
                report = cmd_doctor.run(root)
                for line in report.checks:
                    print(line)
                if not report.ok:
                    raise SystemExit(1)
            case _:
                parser.error("Unknown command")
    except StoreError as exc:
        raise SystemExit(f"error: {exc}") from exc
    finally:
        if warn_buffer.records:
            print("\n\033[33mWarnings/Errors summary:\033[0m")
            for line in warn_buffer.records:
                print(f" - {line}")


if __name__ == "__main__":
    main()
