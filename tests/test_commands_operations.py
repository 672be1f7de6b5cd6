import pytest

from edit_engine.buffer import Clipboard
from edit_engine.commands import Command, CommandKind, duplicate, execute, replay, undo
from edit_engine.commands.operations import remove_range, slice_range, splice_paste


def make_command(
    kind: CommandKind, snapshot: str, start: int, end: int, **kw
) -> Command:
    return Command(kind=kind, snapshot=snapshot, start=start, end=end, **kw)


@pytest.mark.parametrize(
    ("text", "start", "end", "paste", "expected"),
    [
        ("", 0, 0, "AB", "AB"),
        ("HELLO", 0, 0, "X", "XHELLO"),
        ("HELLO", 2, 2, "X", "HEXLLO"),
        ("HELLO", 4, 4, "!", "HELLO!"),
        ("AB", 0, 1, "X", "X"),
        ("HELLO", 1, 3, "-", "H-O"),
        ("A", 0, 0, "B", "AB"),
    ],
)
def test_splice_paste(
    text: str, start: int, end: int, paste: str, expected: str
) -> None:
    assert splice_paste(text, start, end, paste) == expected


def test_inclusive_range_helpers() -> None:
    assert slice_range("HELLO", 1, 2) == "EL"
    assert remove_range("HELLO", 1, 2) == "HLO"
    assert remove_range("HELLO", 0, 4) == ""


def test_copy_appends_fragment_without_changing_text() -> None:
    clipboard = Clipboard()
    command = make_command(CommandKind.COPY, "HELLO", 1, 3)

    assert execute(command, clipboard) == "HELLO"
    assert clipboard.fragments() == ("ELL",)


def test_cut_copies_then_deletes() -> None:
    clipboard = Clipboard()
    command = make_command(CommandKind.CUT, "HELLO", 0, 1)

    assert execute(command, clipboard) == "LLO"
    assert command.result == "LLO"
    assert clipboard.fragments() == ("HE",)


def test_replay_never_touches_clipboard() -> None:
    command = make_command(CommandKind.CUT, "HELLO", 0, 1)

    assert replay(command) == "LLO"


def test_undo_returns_own_snapshot() -> None:
    first = make_command(
        CommandKind.PASTE, "", 0, 0, paste_text="HELLO", result="HELLO"
    )
    second = make_command(CommandKind.DELETE, "HELLO", 1, 2, previous=0, result="HLO")

    assert undo(second) == "HELLO"
    assert undo(first) == ""


def test_undo_ignores_previous_result_when_snapshot_differs() -> None:
    stale = make_command(CommandKind.PASTE, "", 0, 0, paste_text="AB", result="AB")
    edited = make_command(
        CommandKind.PASTE, "XYZ", 0, 0, paste_text="A", previous=0, result="AXYZ"
    )

    assert stale.result != edited.snapshot
    assert undo(edited) == "XYZ"


def test_copy_undo_is_inert() -> None:
    command = make_command(CommandKind.COPY, "HELLO", 0, 1)

    assert undo(command) is None


def test_duplicate_is_independent() -> None:
    command = make_command(CommandKind.PASTE, "A", 0, 0, paste_text="B")
    copy = duplicate(command)
    copy.previous = 7

    assert copy == make_command(
        CommandKind.PASTE, "A", 0, 0, paste_text="B", previous=7
    )
    assert command.previous is None


@pytest.mark.parametrize(
    "kind", [CommandKind.COPY, CommandKind.UNDO, CommandKind.REDO]
)
def test_duplicate_rejects_unstored_kinds(kind: CommandKind) -> None:
    with pytest.raises(ValueError):
        duplicate(Command(kind=kind))
