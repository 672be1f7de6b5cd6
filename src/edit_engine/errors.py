"""Typed errors raised by the editing engine and its persistence layer."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class EditEngineError(RuntimeError):
    """Base class for every recoverable engine error."""


class InvalidSessionName(EditEngineError):
    """Raised when a session name contains a forbidden character."""

    def __init__(self, name: str, *, forbidden: str = "") -> None:
        if forbidden:
            message = (
                f"Session name '{name}' contains forbidden character '{forbidden}'"
            )
        else:
            message = f"Session name '{name}' is not allowed"
        super().__init__(message)
        self.name = name
        self.forbidden = forbidden


class DuplicateSessionName(EditEngineError):
    """Raised when a session with the same stored name already exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Session '{name}' already exists")
        self.name = name


class UnknownSession(EditEngineError):
    """Raised when a session id resolves to nothing in the registry."""

    def __init__(self, session_id: object) -> None:
        super().__init__(f"Session '{session_id}' is not registered")
        self.session_id = session_id


class UnknownCommand(EditEngineError):
    """Raised when a command tag names none of the supported kinds."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"Unknown command '{kind}'")
        self.kind = kind


class NoOperationToUndo(EditEngineError):
    def __init__(self, session: str = "") -> None:
        super().__init__(f"Nothing to undo in session '{session}'")
        self.session = session


class NoOperationToRedo(EditEngineError):
    def __init__(self, session: str = "") -> None:
        super().__init__(f"Nothing to redo in session '{session}'")
        self.session = session


class IndexOutOfRange(EditEngineError):
    """Raised when offsets fall outside ``[0, upper]``."""

    def __init__(
        self,
        message: str,
        *,
        start: Optional[int] = None,
        end: Optional[int] = None,
        upper: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.start = start
        self.end = end
        self.upper = upper


class PersistenceReadFailure(EditEngineError):
    """Raised when a metadata file is missing or cannot be decoded."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class PersistenceWriteFailure(EditEngineError):
    """Raised when a metadata or content file cannot be written."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


__all__ = [
    "EditEngineError",
    "InvalidSessionName",
    "DuplicateSessionName",
    "UnknownSession",
    "UnknownCommand",
    "NoOperationToUndo",
    "NoOperationToRedo",
    "IndexOutOfRange",
    "PersistenceReadFailure",
    "PersistenceWriteFailure",
]
