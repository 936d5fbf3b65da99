"""
Maintenance CLI tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from src.adapters.sqlite_kv import SQLiteKeyValueStore
from src.app_shell.cli import main
from src.components.gallery_index import IndexConfig, IndexManager


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "gallery.db"


@pytest.fixture
def rules_path(tmp_path: Path, db_path: Path) -> Path:
    path = tmp_path / "rules.yaml"
    path.write_text(
        "index:\n"
        "  default_page_size: 3\n"
        "  logical_page_size: 2\n"
        "storage:\n"
        "  backend: sqlite\n"
        f"  sqlite_path: {db_path}\n"
    )
    return path


@pytest.fixture
def index(db_path: Path) -> IndexManager:
    return IndexManager(SQLiteKeyValueStore(db_path), IndexConfig(default_page_size=3))


class TestCli:
    def test_stats(
        self, index: IndexManager, rules_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        for item_id in "abcd":
            index.add_to_index(item_id)

        main(["--rules", str(rules_path), "stats"])

        out = capsys.readouterr().out
        assert "Count:      4" in out
        assert "Page size:  3" in out
        assert " - page 0: 3" in out
        assert " - page 1: 1" in out

    def test_compact(
        self, index: IndexManager, rules_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        for item_id in "abcdefg":
            index.add_to_index(item_id)
        index.remove_from_index({"d", "c", "b"})

        main(["--rules", str(rules_path), "compact"])

        assert "Compacted:" in capsys.readouterr().out
        assert index.page_lengths() == [3, 1]

        main(["--rules", str(rules_path), "compact"])

        assert "already compact" in capsys.readouterr().out

    def test_page(
        self, index: IndexManager, rules_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        for item_id in "abcde":
            index.add_to_index(item_id)

        main(["--rules", str(rules_path), "page", "2"])

        out = capsys.readouterr().out.splitlines()
        assert out == ["Page 2 / 3", "c", "b"]

    def test_page_size_override(
        self, index: IndexManager, rules_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        for item_id in "abcde":
            index.add_to_index(item_id)

        main(["--rules", str(rules_path), "page", "1", "--size", "4"])

        out = capsys.readouterr().out.splitlines()
        assert out == ["Page 1 / 2", "e", "d", "c", "b"]

    def test_invalid_page_number_exits(self, rules_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--rules", str(rules_path), "page", "0"])

        assert exc_info.value.code == 1

    def test_zero_page_size_exits(self, rules_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--rules", str(rules_path), "page", "1", "--size", "0"])

        assert exc_info.value.code == 1

    def test_missing_rules_file_exits(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--rules", str(tmp_path / "nope.yaml"), "stats"])

        assert exc_info.value.code == 1
