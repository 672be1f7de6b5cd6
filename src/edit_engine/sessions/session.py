"""Named editing sessions: one buffer, one history, one clipboard."""

from __future__ import annotations

from typing import Optional

from edit_engine.buffer import Clipboard
from edit_engine.commands import CommandHistory, CommandKind
from edit_engine.errors import InvalidSessionName
from edit_engine.runtime.settings import FORBIDDEN_NAME_CHARACTERS, SESSION_SUFFIX


def validate_session_name(name: str) -> str:
    """Return the stored form of ``name`` (suffix appended) or raise."""

    if not name:
        raise InvalidSessionName(name)
    for character in FORBIDDEN_NAME_CHARACTERS:
        if character in name:
            raise InvalidSessionName(name, forbidden=character)
    return name + SESSION_SUFFIX


def display_name(stored_name: str) -> str:
    if stored_name.endswith(SESSION_SUFFIX):
        return stored_name[: -len(SESSION_SUFFIX)]
    return stored_name


class Session:
    """Groups the command history, clipboard, and current text of one file."""

    def __init__(
        self,
        name: str,
        *,
        history: Optional[CommandHistory] = None,
        clipboard: Optional[Clipboard] = None,
        text: str = "",
    ) -> None:
        self.name = name
        self.history = history if history is not None else CommandHistory(name)
        self.clipboard = clipboard if clipboard is not None else Clipboard()
        self.text = text

    @classmethod
    def create(cls, name: str) -> "Session":
        """Build an empty session from a user-supplied name."""

        return cls(validate_session_name(name))

    @property
    def cursor(self) -> int:
        return self.history.cursor

    @property
    def title(self) -> str:
        return display_name(self.name)

    def dispatch(
        self,
        kind: CommandKind,
        *,
        start: int = 0,
        end: int = 0,
        paste_text: str = "",
    ) -> str:
        self.text = self.history.dispatch(
            kind,
            self.text,
            self.clipboard,
            start=start,
            end=end,
            paste_text=paste_text,
        )
        return self.text

    def __repr__(self) -> str:
        return (
            f"Session(name={self.name!r}, commands={len(self.history)}, "
            f"cursor={self.cursor}, clipboard={self.clipboard.size()})"
        )


__all__ = ["Session", "validate_session_name", "display_name"]
