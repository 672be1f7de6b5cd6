"""Engine façade owning the session registry and dispatching commands."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional

from edit_engine.commands import CommandKind
from edit_engine.errors import EditEngineError, UnknownCommand
from edit_engine.runtime import telemetry
from edit_engine.runtime.settings import EngineSettings
from edit_engine.sessions import Session, SessionId, SessionRegistry


class EngineBus:
    """Minimal event bus letting hosts observe engine activity."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


def parse_kind(kind: CommandKind | str) -> CommandKind:
    """Coerce a command tag such as ``"paste"`` into a ``CommandKind``."""

    try:
        return CommandKind(kind)
    except ValueError:
        raise UnknownCommand(kind) from None


class Engine:
    """Entry point for hosts: session lifecycle plus command dispatch.

    The engine never touches the filesystem. Callers persist the returned
    buffer text and hand the registry to a ``SessionStore`` when done;
    ``settings`` only tells the engine where content files live so that
    ``delete_session`` can report the path it freed.
    """

    def __init__(
        self,
        registry: Optional[SessionRegistry] = None,
        *,
        settings: Optional[EngineSettings] = None,
        bus: Optional[EngineBus] = None,
        logger_name: str = "edit_engine.engine",
    ) -> None:
        self.registry = registry if registry is not None else SessionRegistry()
        self.settings = settings or EngineSettings.from_env()
        self.bus = bus or EngineBus()
        self._logger_name = logger_name

    def create_session(self, name: str) -> Session:
        with telemetry.span(
            "engine::create_session",
            logger_name=self._logger_name,
            component="engine",
            metadata={"name": name},
            expected=(EditEngineError,),
        ):
            session = self.registry.add(Session.create(name))
        self.bus.emit("session.created", {"session": session.name})
        return session

    def delete_session(self, session_id: SessionId) -> Path:
        """Forget a session and return the content file path it occupied.

        The file itself is left alone; ``SessionStore.remove_content``
        deletes it.
        """

        session = self.registry.remove(session_id)
        freed = self.settings.sessions_dir / session.name
        self.bus.emit("session.deleted", {"session": session.name, "path": freed})
        telemetry.record_event(
            "session.deleted",
            data={"session": session.name, "path": freed},
            logger_name=self._logger_name,
        )
        return freed

    def list_sessions(self) -> list[str]:
        return self.registry.names()

    def session(self, session_id: SessionId) -> Session:
        return self.registry.resolve(session_id)

    def first(self) -> Session:
        return self.registry.first()

    def last(self) -> Session:
        return self.registry.last()

    def dispatch(
        self,
        session_id: SessionId,
        kind: CommandKind | str,
        start: int = 0,
        end: int = 0,
        paste_text: str = "",
    ) -> str:
        """Run one command against a session and return its new text."""

        session = self.registry.resolve(session_id)
        payload = {
            "session": session.name,
            "kind": kind.value if isinstance(kind, CommandKind) else str(kind),
            "start": start,
            "end": end,
        }
        try:
            command_kind = parse_kind(kind)
            with telemetry.span(
                f"engine::{command_kind.value}",
                logger_name=self._logger_name,
                component="engine",
                metadata={"session": session.name},
                expected=(EditEngineError,),
            ) as handle:
                text = session.dispatch(
                    command_kind, start=start, end=end, paste_text=paste_text
                )
                handle.add_metadata("cursor", session.cursor)
        except EditEngineError as exc:
            self.bus.emit("command.rejected", {**payload, "error": exc})
            telemetry.record_event(
                "command.rejected",
                level="warning",
                data={**payload, "error": type(exc).__name__},
                logger_name=self._logger_name,
            )
            raise
        self.bus.emit(
            "command.dispatched",
            {**payload, "cursor": session.cursor, "text": text},
        )
        return text

    def undo(self, session_id: SessionId) -> str:
        return self.dispatch(session_id, CommandKind.UNDO)

    def redo(self, session_id: SessionId) -> str:
        return self.dispatch(session_id, CommandKind.REDO)


__all__ = ["Engine", "EngineBus", "parse_kind"]
