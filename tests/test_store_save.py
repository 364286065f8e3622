import tempfile
import tomllib
import unittest
from pathlib import Path
from unittest.mock import patch

from playlist_store import ConfigMissing, ParseError, Store


MUSIC = """
[[playlists]]
name = "Jazz"
card_id = 0
allow_random = true

[[playlists]]
name = "Rock"

[[playlists]]
name = "FM4"
card_id = 7
radio_url = "http://fm4.example/stream"
"""


def _make_library(root: Path) -> None:
    for folder, names in {"Jazz": ["01.flac", "02.flac"], "Rock": ["a.mp3"]}.items():
        directory = root / "files" / folder
        directory.mkdir(parents=True)
        for name in names:
            (directory / name).write_bytes(b"x")
    (root / "Music.toml").write_text(MUSIC, encoding="utf-8")


def _persisted(store: Store) -> list[tuple]:
    return [
        (p.name, p.card_id, p.allow_random, p.radio_url) for p in store.playlists
    ]


class TestStoreSave(unittest.TestCase):
    def test_round_trip_keeps_persisted_fields(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _make_library(root)
            store = Store.load(root)
            before = _persisted(store)

            store.save()
            reloaded = Store.load(root)

            self.assertEqual(_persisted(reloaded), before)
            self.assertEqual(len(reloaded.get_files("Jazz")), 2)

    def test_saved_document_omits_session_fields(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _make_library(root)
            store = Store.load(root)
            store.set_position("Jazz", 1)

            store.save()
            data = tomllib.loads((root / "Music.toml").read_text(encoding="utf-8"))

            self.assertEqual(set(data), {"playlists"})
            jazz, rock, radio = data["playlists"]
            self.assertEqual(jazz, {"name": "Jazz", "card_id": 0, "allow_random": True})
            self.assertEqual(rock, {"name": "Rock", "allow_random": False})
            self.assertEqual(radio["radio_url"], "http://fm4.example/stream")
            self.assertNotIn("files", jazz)
            self.assertNotIn("position", jazz)

    def test_positions_are_written_and_restored(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _make_library(root)
            store = Store.load(root)
            store.set_position("Rock", 4)

            store.save()
            data = tomllib.loads((root / "Positions.toml").read_text(encoding="utf-8"))
            reloaded = Store.load(root)

            self.assertEqual(data, {"positions": [{"name": "Rock", "position": [4, 0]}]})
            self.assertEqual(reloaded.playlist_by_name("Rock").position, (4, 0))
            self.assertIsNone(reloaded.playlist_by_name("Jazz").position)

    def test_positions_without_any_position_are_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _make_library(root)

            Store.load(root).save()
            data = tomllib.loads((root / "Positions.toml").read_text(encoding="utf-8"))

            self.assertEqual(data, {"positions": []})

    def test_position_of_unknown_playlist_is_dropped(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _make_library(root)
            (root / "Positions.toml").write_text(
                '[[positions]]\nname = "Gone"\nposition = [2, 30]\n'
                '[[positions]]\nname = "Jazz"\nposition = [1, 12]\n',
                encoding="utf-8",
            )

            with self.assertLogs("playlist_store.store", level="WARNING") as logs:
                store = Store.load(root)

            self.assertEqual(store.playlist_by_name("Jazz").position, (1, 12))
            self.assertIn("Gone", "\n".join(logs.output))

    def test_malformed_positions_document_fails_the_load(self) -> None:
        cases = [
            '[[positions]]\nname = "Jazz"\nposition = [-1, "x"]\n',
            '[[positions]]\nname = "Jazz"\nposition = [1, 0\n',
        ]
        for positions in cases:
            with self.subTest(positions=positions):
                with tempfile.TemporaryDirectory() as tmpdir:
                    root = Path(tmpdir)
                    _make_library(root)
                    (root / "Positions.toml").write_text(positions, encoding="utf-8")

                    with self.assertRaises(ParseError) as ctx:
                        Store.load(root)

                    self.assertEqual(ctx.exception.path, root / "Positions.toml")

    def test_save_creates_missing_document(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _make_library(root)
            store = Store.load(root)
            (root / "Music.toml").unlink()

            store.save()

            self.assertTrue((root / "Music.toml").exists())
            self.assertEqual(len(Store.load(root).playlists), 3)

    def test_save_leaves_no_temporary_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _make_library(root)

            Store.load(root).save()

            self.assertEqual(
                sorted(p.name for p in root.iterdir()),
                ["Music.toml", "Positions.toml", "files"],
            )

    def test_unwritable_root_raises_config_missing(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _make_library(root)
            store = Store.load(root)

            with patch(
                "playlist_store.store.atomic_write_text",
                side_effect=PermissionError("read-only"),
            ):
                with self.assertRaises(ConfigMissing) as ctx:
                    store.save()

            self.assertEqual(ctx.exception.path, root / "Music.toml")
            self.assertIsInstance(ctx.exception.cause, PermissionError)

    def test_second_document_failure_keeps_first_write(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _make_library(root)
            store = Store.load(root)
            store.set_playlist_card_id("Rock", 1)

            from playlist_store import fs_utils

            real_write = fs_utils.atomic_write_text

            def write(path: Path, text: str) -> None:
                if path.name == "Positions.toml":
                    raise OSError("disk full")
                real_write(path, text)

            with patch("playlist_store.store.atomic_write_text", side_effect=write):
                with self.assertRaises(ConfigMissing) as ctx:
                    store.save()

            self.assertEqual(ctx.exception.path, root / "Positions.toml")
            self.assertEqual(Store.load(root).playlist_by_name("Rock").card_id, 1)


if __name__ == "__main__":
    unittest.main()
