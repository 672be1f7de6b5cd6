"""Execute, undo, and duplicate commands by switching on their kind."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from edit_engine.buffer import Clipboard

from .models import Command, CommandKind


def slice_range(text: str, start: int, end: int) -> str:
    """Return the inclusive range ``text[start..end]``."""

    return text[start : end + 1]


def remove_range(text: str, start: int, end: int) -> str:
    return text[:start] + text[end + 1 :]


def splice_paste(text: str, start: int, end: int, paste_text: str) -> str:
    """Insert at a single offset or replace the inclusive range ``[start, end]``.

    A single-offset paste on the last character lands after it, at offset 0
    it lands before the first character, and anywhere else it lands before
    the character at ``start``.
    """

    if start != end:
        return text[:start] + paste_text + text[end + 1 :]
    if text and start == len(text) - 1:
        return text + paste_text
    if start == 0:
        return paste_text + text
    return text[:start] + paste_text + text[start:]


def replay(command: Command) -> str:
    """Recompute the buffer produced by ``command`` from its snapshot.

    Unlike ``execute`` this never touches a clipboard.
    """

    kind = command.kind
    if kind is CommandKind.PASTE:
        return splice_paste(
            command.snapshot, command.start, command.end, command.paste_text
        )
    if kind in (CommandKind.CUT, CommandKind.DELETE):
        return remove_range(command.snapshot, command.start, command.end)
    if kind is CommandKind.COPY:
        return command.snapshot
    raise ValueError(f"Cannot replay meta command '{kind.value}'")


def execute(command: Command, clipboard: Clipboard) -> str:
    """Apply ``command`` to its snapshot and return the new buffer."""

    kind = command.kind
    if kind is CommandKind.COPY:
        clipboard.append(slice_range(command.snapshot, command.start, command.end))
        result = command.snapshot
    elif kind is CommandKind.CUT:
        clipboard.append(slice_range(command.snapshot, command.start, command.end))
        result = remove_range(command.snapshot, command.start, command.end)
    elif kind in (CommandKind.PASTE, CommandKind.DELETE):
        result = replay(command)
    else:
        raise ValueError(f"'{kind.value}' is dispatched through the history")
    command.result = result
    return result


def undo(command: Command) -> Optional[str]:
    """Return the buffer exactly as ``command`` found it; ``None`` for copies."""

    if command.kind is CommandKind.COPY:
        return None
    if command.kind.is_meta:
        raise ValueError(f"'{command.kind.value}' cannot be undone")
    return command.snapshot


def duplicate(command: Command) -> Command:
    """Return an independent copy suitable for storing in history."""

    if not command.kind.is_recorded:
        raise ValueError(f"'{command.kind.value}' commands are never stored")
    return replace(command)


__all__ = [
    "slice_range",
    "remove_range",
    "splice_paste",
    "replay",
    "execute",
    "undo",
    "duplicate",
]
