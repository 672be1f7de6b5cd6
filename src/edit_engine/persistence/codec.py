"""Line-oriented text encoding for session history, clipboard, and index.

Session metadata::

    <name>
    <command count>
    <cursor>
    PasteCommand | CutCommand | DeleteCommand
    ---
    <snapshot, verbatim>
    ---
    ---                 (PasteCommand only)
    <paste text>
    ---
    <start>
    <end>

Text blocks are framed by delimiter lines and read back verbatim. A text
line equal to the delimiter cannot be represented.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from edit_engine.commands import Command, CommandHistory, CommandKind
from edit_engine.errors import PersistenceReadFailure
from edit_engine.runtime.settings import DELIMITER
from edit_engine.sessions import Session

KIND_TAGS = {
    CommandKind.PASTE: "PasteCommand",
    CommandKind.CUT: "CutCommand",
    CommandKind.DELETE: "DeleteCommand",
}
TAG_KINDS = {tag: kind for kind, tag in KIND_TAGS.items()}


class _LineReader:
    def __init__(self, text: str, *, source: Optional[Path] = None) -> None:
        self._lines = _split_lines(text)
        self._position = 0
        self.source = source

    def fail(self, reason: str) -> PersistenceReadFailure:
        if self.source:
            where = f"{self.source}:{self._position}"
        else:
            where = f"line {self._position}"
        return PersistenceReadFailure(f"{where}: {reason}", path=self.source)

    def line(self) -> str:
        if self._position >= len(self._lines):
            raise self.fail("unexpected end of file")
        value = self._lines[self._position]
        self._position += 1
        return value

    def integer(self, label: str) -> int:
        raw = self.line()
        try:
            return int(raw)
        except ValueError:
            raise self.fail(f"expected {label}, got {raw!r}") from None

    def block(self) -> str:
        if self.line() != DELIMITER:
            raise self.fail("expected opening delimiter")
        collected: List[str] = []
        while True:
            value = self.line()
            if value == DELIMITER:
                return "\n".join(collected)
            collected.append(value)


def _split_lines(text: str) -> List[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _block(text: str) -> List[str]:
    body = [text] if text else []
    return [DELIMITER, *body, DELIMITER]


def encode_command(command: Command) -> List[str]:
    try:
        tag = KIND_TAGS[command.kind]
    except KeyError:
        raise ValueError(
            f"'{command.kind.value}' commands are not persisted"
        ) from None
    lines = [tag, *_block(command.snapshot)]
    if command.kind is CommandKind.PASTE:
        lines.extend(_block(command.paste_text))
    lines.extend([str(command.start), str(command.end)])
    return lines


def encode_session(session: Session) -> str:
    lines = [session.name, str(len(session.history)), str(session.cursor)]
    for command in session.history.commands():
        lines.extend(encode_command(command))
    return "\n".join(lines) + "\n"


def _decode_command(reader: _LineReader) -> Command:
    tag = reader.line()
    kind = TAG_KINDS.get(tag)
    if kind is None:
        raise reader.fail(f"unknown command tag {tag!r}")
    snapshot = reader.block()
    paste_text = reader.block() if kind is CommandKind.PASTE else ""
    start = reader.integer("start offset")
    end = reader.integer("end offset")
    return Command(
        kind=kind, snapshot=snapshot, paste_text=paste_text, start=start, end=end
    )


def decode_session(text: str, *, source: Optional[Path] = None) -> Session:
    """Rebuild a session (history, cursor, derived text) from metadata."""

    reader = _LineReader(text, source=source)
    name = reader.line()
    if not name:
        raise reader.fail("missing session name")
    count = reader.integer("command count")
    if count < 0:
        raise reader.fail(f"negative command count {count}")
    cursor = reader.integer("cursor")
    commands = [_decode_command(reader) for _ in range(count)]

    history = CommandHistory(name)
    try:
        history.restore(commands, cursor)
    except ValueError as exc:
        raise reader.fail(str(exc)) from exc
    return Session(name, history=history, text=history.current_text())


def encode_clipboard(fragments: Iterable[str]) -> str:
    return "".join(f"{fragment}\n{DELIMITER}\n" for fragment in fragments)


def decode_clipboard(text: str, *, source: Optional[Path] = None) -> List[str]:
    fragments: List[str] = []
    pending: List[str] = []
    for line in _split_lines(text):
        if line == DELIMITER:
            fragments.append("\n".join(pending))
            pending = []
        else:
            pending.append(line)
    if pending:
        raise PersistenceReadFailure(
            f"{source or 'clipboard'}: unterminated fragment", path=source
        )
    return fragments


def encode_index(names: Sequence[str]) -> str:
    return "".join(f"{name}\n" for name in names)


def decode_index(text: str) -> List[str]:
    return [line for line in _split_lines(text) if line.strip()]


__all__ = [
    "KIND_TAGS",
    "encode_command",
    "encode_session",
    "decode_session",
    "encode_clipboard",
    "decode_clipboard",
    "encode_index",
    "decode_index",
]
