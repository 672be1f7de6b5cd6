from __future__ import annotations

from typing import List, Tuple

import pytest

from edit_engine.buffer import Clipboard
from edit_engine.commands import CommandHistory, CommandKind
from edit_engine.errors import IndexOutOfRange, NoOperationToRedo, NoOperationToUndo


class Driver:
    """Keeps a buffer in step with a history the way a session does."""

    def __init__(self, text: str = "") -> None:
        self.history = CommandHistory("test.txt")
        self.clipboard = Clipboard()
        self.text = ""
        if text:
            self.paste(text, 0, 0)

    def run(
        self, kind: CommandKind, start: int = 0, end: int = 0, text: str = ""
    ) -> str:
        self.text = self.history.dispatch(
            kind, self.text, self.clipboard, start=start, end=end, paste_text=text
        )
        return self.text

    def paste(self, text: str, start: int, end: int) -> str:
        return self.run(CommandKind.PASTE, start, end, text)

    def undo(self) -> str:
        return self.run(CommandKind.UNDO)

    def redo(self) -> str:
        return self.run(CommandKind.REDO)


def test_paste_undo_redo_scenario() -> None:
    driver = Driver()

    assert driver.paste("AB", 0, 0) == "AB"
    assert driver.history.cursor == 0
    assert driver.paste("X", 0, 1) == "X"
    assert driver.history.cursor == 1
    assert driver.undo() == "AB"
    assert driver.history.cursor == 0
    assert driver.undo() == ""
    assert driver.history.cursor == -1
    assert driver.redo() == "AB"
    assert driver.history.cursor == 0


def test_delete_then_undo() -> None:
    driver = Driver("HELLO")

    assert driver.run(CommandKind.DELETE, 1, 2) == "HLO"
    assert driver.undo() == "HELLO"


def test_cut_then_undo_keeps_clipboard() -> None:
    driver = Driver("HELLO")

    assert driver.run(CommandKind.CUT, 0, 1) == "LLO"
    assert driver.clipboard.fragments() == ("HE",)
    assert driver.undo() == "HELLO"
    assert driver.clipboard.fragments() == ("HE",)


def test_redo_does_not_copy_again() -> None:
    driver = Driver("HELLO")
    driver.run(CommandKind.CUT, 0, 1)
    driver.undo()

    assert driver.redo() == "LLO"
    assert driver.clipboard.size() == 1


def test_copy_leaves_text_cursor_and_history_alone() -> None:
    driver = Driver("HELLO")

    assert driver.run(CommandKind.COPY, 1, 3) == "HELLO"
    assert driver.history.cursor == 0
    assert len(driver.history) == 1
    assert driver.clipboard.last() == "ELL"


def test_copy_does_not_cut_redo_branch() -> None:
    driver = Driver("HELLO")
    driver.run(CommandKind.DELETE, 0, 0)
    driver.undo()

    driver.run(CommandKind.COPY, 0, 0)

    assert driver.history.forward_count() == 1
    assert driver.history.can_redo()


def test_new_edit_after_undo_discards_forward_commands() -> None:
    driver = Driver("A")
    driver.paste("B", 0, 0)
    driver.paste("C", 1, 1)
    driver.undo()
    driver.undo()
    assert driver.history.forward_count() == 2

    assert driver.run(CommandKind.DELETE, 0, 0) == ""

    assert driver.history.forward_count() == 0
    assert len(driver.history) == 2
    assert driver.history.get(1).previous == 0
    with pytest.raises(NoOperationToRedo):
        driver.redo()


def test_new_edit_after_undoing_everything_starts_fresh() -> None:
    driver = Driver("HELLO")
    driver.undo()

    driver.paste("Z", 0, 0)

    assert len(driver.history) == 1
    assert driver.history.get(0).previous is None
    assert driver.undo() == ""


def test_offsets_are_normalized() -> None:
    driver = Driver("HELLO")

    assert driver.run(CommandKind.DELETE, 3, 1) == "HO"
    command = driver.history.get(1)
    assert (command.start, command.end) == (1, 3)
    assert command.snapshot == "HELLO"
    assert command.previous == 0


def test_undo_and_redo_on_fresh_history_are_rejected() -> None:
    driver = Driver()

    with pytest.raises(NoOperationToUndo):
        driver.undo()
    with pytest.raises(NoOperationToRedo):
        driver.redo()


@pytest.mark.parametrize(
    ("kind", "start", "end"),
    [
        (CommandKind.DELETE, 0, 5),
        (CommandKind.CUT, -1, 2),
        (CommandKind.COPY, 5, 5),
        (CommandKind.PASTE, 0, 9),
    ],
)
def test_out_of_range_offsets_are_rejected(
    kind: CommandKind, start: int, end: int
) -> None:
    driver = Driver("HELLO")

    with pytest.raises(IndexOutOfRange):
        driver.run(kind, start, end, "x")
    assert driver.text == "HELLO"


def test_rejected_edit_keeps_redo_branch() -> None:
    driver = Driver("HELLO")
    driver.run(CommandKind.DELETE, 0, 0)
    driver.undo()

    with pytest.raises(IndexOutOfRange):
        driver.run(CommandKind.DELETE, 0, 10)

    assert driver.history.forward_count() == 1
    assert driver.redo() == "ELLO"


@pytest.mark.parametrize(
    "kind", [CommandKind.COPY, CommandKind.CUT, CommandKind.DELETE]
)
def test_range_commands_reject_empty_buffer(kind: CommandKind) -> None:
    driver = Driver()

    with pytest.raises(IndexOutOfRange):
        driver.run(kind, 0, 0)


def test_every_undo_restores_the_exact_pre_state() -> None:
    driver = Driver()
    steps: List[Tuple[CommandKind, int, int, str]] = [
        (CommandKind.PASTE, 0, 0, "first line\nsecond"),
        (CommandKind.CUT, 0, 5, ""),
        (CommandKind.PASTE, 3, 3, "++"),
        (CommandKind.DELETE, 0, 2, ""),
        (CommandKind.PASTE, 1, 4, "\n\n"),
    ]
    for kind, start, end, text in steps:
        before = driver.text
        after = driver.run(kind, start, end, text)

        assert driver.undo() == before
        assert driver.redo() == after


def test_current_text_and_restore() -> None:
    driver = Driver("HELLO")
    driver.run(CommandKind.DELETE, 0, 0)
    commands = driver.history.commands()

    restored = CommandHistory("copy.txt")
    restored.restore(commands, 0)

    assert restored.current_text() == "HELLO"
    assert restored.forward_count() == 1
    assert [command.previous for command in restored.commands()] == [None, 0]
    with pytest.raises(ValueError):
        restored.restore(commands, 2)
