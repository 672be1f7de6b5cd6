"""Linear command history and the undo/redo dispatch state machine."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from edit_engine.buffer import Clipboard, ensure_range
from edit_engine.errors import NoOperationToRedo, NoOperationToUndo

from . import operations
from .models import Command, CommandKind


class CommandHistory:
    """Executed commands plus a cursor marking the last applied one.

    The cursor ranges over ``-1 .. len - 1``; ``-1`` means nothing applied.
    A new edit issued while commands sit past the cursor discards them.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._entries: List[Command] = []
        self._index: int = -1

    @property
    def cursor(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._entries)

    def commands(self) -> Tuple[Command, ...]:
        return tuple(self._entries)

    def get(self, index: int) -> Command:
        return self._entries[index]

    def forward_count(self) -> int:
        return len(self._entries) - 1 - self._index

    def can_undo(self) -> bool:
        return self._index != -1

    def can_redo(self) -> bool:
        return self.forward_count() > 0

    def current_text(self) -> str:
        """Buffer implied by the commands up to the cursor."""

        if self._index == -1:
            return ""
        entry = self._entries[self._index]
        if entry.result is None:
            entry.result = operations.replay(entry)
        return entry.result

    def restore(self, commands: Iterable[Command], cursor: int) -> None:
        """Replace the whole history, relinking ``previous`` and results."""

        entries = [operations.duplicate(command) for command in commands]
        if cursor < -1 or cursor > len(entries) - 1:
            raise ValueError(
                f"Cursor {cursor} outside [-1, {len(entries) - 1}] for '{self.name}'"
            )
        for position, entry in enumerate(entries):
            entry.previous = position - 1 if position > 0 else None
            entry.result = operations.replay(entry)
        self._entries = entries
        self._index = cursor

    def truncate_forward(self) -> int:
        """Drop every command after the cursor and return how many went."""

        dropped = self.forward_count()
        if dropped > 0:
            del self._entries[self._index + 1 :]
        return dropped

    def bind(
        self,
        kind: CommandKind,
        buffer: str,
        *,
        start: int = 0,
        end: int = 0,
        paste_text: str = "",
    ) -> Command:
        """Build the command for ``kind`` against the current state."""

        if kind is CommandKind.UNDO:
            if not self.can_undo():
                raise NoOperationToUndo(self.name)
            return Command.meta(kind, self._index)
        if kind is CommandKind.REDO:
            if not self.can_redo():
                raise NoOperationToRedo(self.name)
            return Command.meta(kind, self._index + 1)

        start, end = ensure_range(
            buffer, start, end, allow_empty=kind is CommandKind.PASTE
        )
        previous: Optional[int] = None
        if self._index != -1:
            previous = self._index
        return Command(
            kind=kind,
            snapshot=buffer,
            paste_text=paste_text if kind is CommandKind.PASTE else "",
            start=start,
            end=end,
            previous=previous,
        )

    def dispatch(
        self,
        kind: CommandKind,
        buffer: str,
        clipboard: Clipboard,
        *,
        start: int = 0,
        end: int = 0,
        paste_text: str = "",
    ) -> str:
        """Run one command and return the resulting buffer.

        Preconditions are checked before anything changes, so a rejected
        command leaves the history, cursor, and clipboard untouched.
        """

        if kind.is_recorded:
            # validate against the live buffer before cutting the redo branch
            ensure_range(buffer, start, end, allow_empty=kind is CommandKind.PASTE)
            self.truncate_forward()

        command = self.bind(
            kind, buffer, start=start, end=end, paste_text=paste_text
        )

        if kind is CommandKind.UNDO:
            restored = operations.undo(self._entries[self._index])
            self._index -= 1
            return buffer if restored is None else restored

        if kind is CommandKind.REDO:
            self._index += 1
            target = self._entries[self._index]
            if target.result is None:
                target.result = operations.replay(target)
            return target.result

        result = operations.execute(command, clipboard)
        if kind.is_recorded:
            self._entries.append(operations.duplicate(command))
            self._index += 1
        return result


__all__ = ["CommandHistory"]
