"""Session-based text editing engine with linear undo/redo."""

__all__ = [
    "buffer",
    "commands",
    "sessions",
    "persistence",
    "runtime",
    "engine",
    "errors",
    "cli",
]

__version__ = "0.1.0"
