"""Command variants, their operations, and the undo/redo history."""

from .history import CommandHistory
from .models import RECORDED_KINDS, Command, CommandKind
from .operations import duplicate, execute, replay, splice_paste, undo

__all__ = [
    "Command",
    "CommandKind",
    "CommandHistory",
    "RECORDED_KINDS",
    "duplicate",
    "execute",
    "replay",
    "splice_paste",
    "undo",
]
