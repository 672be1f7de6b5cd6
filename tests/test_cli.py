from __future__ import annotations

import io
from pathlib import Path
from typing import Tuple

from edit_engine.cli import main


def run(tmp_path: Path, *argv: str) -> Tuple[int, str, str]:
    out = io.StringIO()
    err = io.StringIO()
    status = main(
        [
            "--metadata-dir",
            str(tmp_path / "Metadata"),
            "--sessions-dir",
            str(tmp_path / "Sessions"),
            *argv,
        ],
        out=out,
        err=err,
    )
    return status, out.getvalue(), err.getvalue()


def test_edit_session_across_invocations(tmp_path: Path) -> None:
    assert run(tmp_path, "create", "notes")[0] == 0
    assert (tmp_path / "Sessions" / "notes.txt").read_text() == ""

    run(tmp_path, "paste", "notes", "--text", "HELLO")
    status, out, _ = run(tmp_path, "delete", "notes", "--range", "1", "2")

    assert status == 0
    assert '"HLO"' in out
    assert (tmp_path / "Sessions" / "notes.txt").read_text() == "HLO"

    run(tmp_path, "undo", "notes")
    assert (tmp_path / "Sessions" / "notes.txt").read_text() == "HELLO"

    status, out, _ = run(tmp_path, "show", "notes")
    assert "commands=2 cursor=0 undo=yes redo=yes" in out


def test_cut_and_paste_from_clipboard(tmp_path: Path) -> None:
    run(tmp_path, "create", "notes")
    run(tmp_path, "paste", "notes", "--text", "HELLO")
    run(tmp_path, "cut", "notes", "--range", "0", "1")

    status, out, _ = run(tmp_path, "paste", "notes", "--clip", "1", "--end")

    assert status == 0
    assert (tmp_path / "Sessions" / "notes.txt").read_text() == "LLOHE"
    _, out, _ = run(tmp_path, "clipboard", "notes")
    assert out == '1) "HE"\n'


def test_errors_exit_non_zero(tmp_path: Path) -> None:
    run(tmp_path, "create", "notes")

    status, _, err = run(tmp_path, "undo", "notes")
    assert status == 1
    assert "Nothing to undo" in err

    status, _, err = run(tmp_path, "create", "a:b")
    assert status == 1
    assert "forbidden character" in err


def test_remove_session_cleans_up_files(tmp_path: Path) -> None:
    run(tmp_path, "create", "one")
    run(tmp_path, "create", "two")

    status, out, _ = run(tmp_path, "remove", "one")

    assert status == 0
    assert not (tmp_path / "Sessions" / "one.txt").exists()
    assert not (tmp_path / "Metadata" / "Sessions" / "one.txt").exists()
    _, out, _ = run(tmp_path, "list")
    assert out == "#1: two.txt\n"
