from __future__ import annotations

from pathlib import Path

import pytest

from lib_log_fanout.adapters.file import AppendFileAdapter


def test_inactive_without_a_path(tmp_path: Path) -> None:
    sink = AppendFileAdapter()

    sink.write("ignored\n")

    assert sink.active is False
    assert list(tmp_path.iterdir()) == []


def test_appends_to_existing_content(tmp_path: Path) -> None:
    target = tmp_path / "app.log"
    target.write_text("existing\n", encoding="utf-8")
    sink = AppendFileAdapter(target)

    sink.write("one\n")
    sink.write(".")

    assert target.read_text(encoding="utf-8") == "existing\none\n."


def test_open_failure_deactivates_until_registered_again(tmp_path: Path) -> None:
    sink = AppendFileAdapter(tmp_path)

    with pytest.raises(OSError):
        sink.write("line\n")

    assert sink.active is False
    assert sink.path is None

    sink.write("dropped\n")
    target = tmp_path / "fresh.log"
    sink.register(target)
    sink.write("kept\n")

    assert target.read_text(encoding="utf-8") == "kept\n"


def test_register_none_deactivates(tmp_path: Path) -> None:
    sink = AppendFileAdapter(tmp_path / "app.log")

    sink.register(None)

    assert sink.active is False
