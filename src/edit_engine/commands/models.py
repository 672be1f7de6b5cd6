"""Command variants recorded by a session history."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CommandKind(str, Enum):
    """Every operation the engine can dispatch."""

    COPY = "copy"
    PASTE = "paste"
    CUT = "cut"
    DELETE = "delete"
    UNDO = "undo"
    REDO = "redo"

    @property
    def is_meta(self) -> bool:
        return self in (CommandKind.UNDO, CommandKind.REDO)

    @property
    def is_recorded(self) -> bool:
        """True for kinds that are appended to history."""

        return self in RECORDED_KINDS


RECORDED_KINDS = frozenset({CommandKind.PASTE, CommandKind.CUT, CommandKind.DELETE})


@dataclass(slots=True)
class Command:
    """One edit operation with enough state to be undone or replayed.

    ``previous`` and ``target`` are indices into the owning history, never
    object references, so truncating the history cannot leave them dangling.
    ``result`` is the buffer right after execution and is derived data.
    """

    kind: CommandKind
    snapshot: str = ""
    paste_text: str = ""
    start: int = 0
    end: int = 0
    previous: Optional[int] = None
    target: Optional[int] = None
    result: Optional[str] = None

    @classmethod
    def meta(cls, kind: CommandKind, target: int) -> "Command":
        return cls(kind=kind, target=target)


__all__ = ["Command", "CommandKind", "RECORDED_KINDS"]
