"""Filesystem access for session metadata, clipboards, and content files."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from edit_engine.buffer import Clipboard
from edit_engine.errors import (
    DuplicateSessionName,
    PersistenceReadFailure,
    PersistenceWriteFailure,
)
from edit_engine.runtime import telemetry
from edit_engine.runtime.settings import EngineSettings
from edit_engine.sessions import Session, SessionRegistry

from . import codec


class SessionStore:
    """Reads and writes everything a registry needs to survive a restart.

    Layout under ``settings``::

        <metadata>/Available_Sessions.txt   one stored session name per line
        <metadata>/Sessions/<name>          history metadata
        <metadata>/Clipboard/<name>         clipboard fragments
        <sessions>/<name>                   current buffer text
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        *,
        logger_name: str = "edit_engine.persistence",
    ) -> None:
        self.settings = settings or EngineSettings.from_env()
        self._logger_name = logger_name

    # -- plain files -------------------------------------------------------

    def read_whole_file(self, path: Path | str) -> str:
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8", newline="") as handle:
                return handle.read()
        except OSError as exc:
            raise PersistenceReadFailure(
                f"Cannot read {path}: {exc.strerror or exc}", path=path
            ) from exc

    def overwrite_file(self, path: Path | str, text: str) -> bool:
        path = Path(path)
        try:
            self._write(path, text)
        except PersistenceWriteFailure as exc:
            self._event("file.write_failed", "error", path=path, reason=str(exc))
            return False
        return True

    def _write(self, path: Path, text: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(text)
        except OSError as exc:
            raise PersistenceWriteFailure(
                f"Cannot write {path}: {exc.strerror or exc}", path=path
            ) from exc

    # -- content files -----------------------------------------------------

    def content_path(self, name: str) -> Path:
        return self.settings.sessions_dir / name

    def create_content(self, name: str) -> Path:
        path = self.content_path(name)
        if not path.exists():
            self._write(path, "")
        return path

    def read_content(self, name: str) -> Optional[str]:
        path = self.content_path(name)
        if not path.exists():
            return None
        return self.read_whole_file(path)

    def write_content(self, session: Session) -> bool:
        return self.overwrite_file(self.content_path(session.name), session.text)

    def remove_content(self, name: str) -> Path:
        path = self.content_path(name)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceWriteFailure(
                f"Cannot remove {path}: {exc.strerror or exc}", path=path
            ) from exc
        return path

    # -- metadata ----------------------------------------------------------

    def history_path(self, name: str) -> Path:
        return self.settings.history_dir / name

    def clipboard_path(self, name: str) -> Path:
        return self.settings.clipboard_dir / name

    def save(self, session: Session) -> None:
        """Write history and clipboard metadata for one session."""

        with telemetry.span(
            "persistence::save",
            logger_name=self._logger_name,
            component="persistence",
            metadata={"session": session.name},
            expected=(PersistenceWriteFailure,),
        ):
            self._write(
                self.history_path(session.name), codec.encode_session(session)
            )
            self._write(
                self.clipboard_path(session.name),
                codec.encode_clipboard(session.clipboard.fragments()),
            )

    def write_index(self, registry: SessionRegistry) -> None:
        self._write(self.settings.index_file, codec.encode_index(registry.names()))

    def save_all(self, registry: SessionRegistry) -> List[str]:
        """Persist every session, continuing past individual failures.

        Returns the names of the sessions that could not be written.
        """

        failed: List[str] = []
        with telemetry.span(
            "persistence::save_all",
            logger_name=self._logger_name,
            component="persistence",
            metadata={"sessions": len(registry)},
        ) as handle:
            self.reconcile(registry)
            try:
                self.write_index(registry)
            except PersistenceWriteFailure as exc:
                self._event("index.write_failed", "error", reason=str(exc))
            for session in registry:
                try:
                    self.save(session)
                except PersistenceWriteFailure as exc:
                    failed.append(session.name)
                    self._event(
                        "session.write_failed",
                        "error",
                        session=session.name,
                        reason=str(exc),
                    )
            if failed:
                handle.add_metadata("failed", ",".join(failed))
        return failed

    def load_all(self) -> SessionRegistry:
        """Rebuild the registry; unreadable sessions are logged and skipped."""

        registry = SessionRegistry()
        index_file = self.settings.index_file
        with telemetry.span(
            "persistence::load_all",
            logger_name=self._logger_name,
            component="persistence",
            metadata={"index": index_file},
        ):
            if not index_file.exists():
                return registry
            names = codec.decode_index(self.read_whole_file(index_file))
            for name in names:
                try:
                    session = self.load(name)
                    registry.add(session)
                except (PersistenceReadFailure, DuplicateSessionName) as exc:
                    self._event(
                        "session.skipped", "warning", session=name, reason=str(exc)
                    )
        return registry

    def load(self, name: str) -> Session:
        path = self.history_path(name)
        if not path.exists():
            raise PersistenceReadFailure(f"Missing history file {path}", path=path)
        session = codec.decode_session(self.read_whole_file(path), source=path)
        session.clipboard = self._load_clipboard(name)
        content = self.read_content(name)
        if content is not None:
            if content != session.text:
                self._event("session.content_diverged", "warning", session=name)
            session.text = content
        return session

    def _load_clipboard(self, name: str) -> Clipboard:
        path = self.clipboard_path(name)
        if not path.exists():
            return Clipboard()
        try:
            fragments = codec.decode_clipboard(self.read_whole_file(path), source=path)
        except PersistenceReadFailure as exc:
            self._event(
                "clipboard.skipped", "warning", session=name, reason=str(exc)
            )
            return Clipboard()
        return Clipboard(fragments)

    def reconcile(
        self, registry: SessionRegistry, directory: Optional[Path] = None
    ) -> List[Path]:
        """Delete metadata files whose session is no longer registered."""

        directories = (
            [directory]
            if directory is not None
            else [self.settings.history_dir, self.settings.clipboard_dir]
        )
        live = set(registry.names())
        removed: List[Path] = []
        for folder in directories:
            if not folder.is_dir():
                continue
            for path in sorted(folder.iterdir()):
                if path.is_file() and path.name not in live:
                    try:
                        path.unlink()
                    except OSError as exc:
                        self._event(
                            "metadata.remove_failed",
                            "error",
                            path=path,
                            reason=str(exc),
                        )
                        continue
                    removed.append(path)
        if removed:
            self._event("metadata.reconciled", "info", removed=len(removed))
        return removed

    def _event(self, name: str, level: str, **data: object) -> None:
        telemetry.record_event(
            name, level=level, data=dict(data), logger_name=self._logger_name
        )


__all__ = ["SessionStore"]
