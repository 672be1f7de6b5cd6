"""Storage settings and on-disk naming constants."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX

DELIMITER = "---"
SESSION_SUFFIX = ".txt"
FORBIDDEN_NAME_CHARACTERS = '/\\":?*|<>'

INDEX_FILE_NAME = "Available_Sessions.txt"
HISTORY_DIR_NAME = "Sessions"
CLIPBOARD_DIR_NAME = "Clipboard"

DEFAULT_METADATA_DIR = "Metadata"
DEFAULT_SESSIONS_DIR = "Sessions"


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Roots for session metadata and session content files."""

    metadata_dir: Path = Path(DEFAULT_METADATA_DIR)
    sessions_dir: Path = Path(DEFAULT_SESSIONS_DIR)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        env = os.environ if environ is None else environ
        return cls(
            metadata_dir=Path(
                env.get(f"{ENV_PREFIX}METADATA_DIR", DEFAULT_METADATA_DIR)
            ),
            sessions_dir=Path(
                env.get(f"{ENV_PREFIX}SESSIONS_DIR", DEFAULT_SESSIONS_DIR)
            ),
        )

    def override(
        self,
        *,
        metadata_dir: Optional[str | Path] = None,
        sessions_dir: Optional[str | Path] = None,
    ) -> "EngineSettings":
        changes: dict[str, Path] = {}
        if metadata_dir is not None:
            changes["metadata_dir"] = Path(metadata_dir)
        if sessions_dir is not None:
            changes["sessions_dir"] = Path(sessions_dir)
        return replace(self, **changes)

    @property
    def index_file(self) -> Path:
        return self.metadata_dir / INDEX_FILE_NAME

    @property
    def history_dir(self) -> Path:
        return self.metadata_dir / HISTORY_DIR_NAME

    @property
    def clipboard_dir(self) -> Path:
        return self.metadata_dir / CLIPBOARD_DIR_NAME


__all__ = [
    "EngineSettings",
    "DELIMITER",
    "SESSION_SUFFIX",
    "FORBIDDEN_NAME_CHARACTERS",
    "INDEX_FILE_NAME",
    "HISTORY_DIR_NAME",
    "CLIPBOARD_DIR_NAME",
]
