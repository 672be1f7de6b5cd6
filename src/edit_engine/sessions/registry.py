"""Ordered registry of every session known to the process."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from edit_engine.errors import DuplicateSessionName, UnknownSession
from edit_engine.runtime.settings import SESSION_SUFFIX
from edit_engine.runtime.telemetry import span

from .session import Session

SessionId = int | str


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    session_count: int
    command_count: int
    names: tuple[str, ...]


class SessionRegistry:
    """Sessions in creation/load order.

    Positions are not stable: removing session ``i`` shifts every later one.
    """

    def __init__(
        self,
        sessions: Iterable[Session] = (),
        *,
        logger_name: str | None = None,
    ) -> None:
        self._sessions: List[Session] = []
        self._logger_name = logger_name
        for session in sessions:
            self.add(session)

    def add(self, session: Session) -> Session:
        with span(
            "sessions::add",
            logger_name=self._logger_name,
            component="sessions",
            metadata={"session": session.name},
            expected=(DuplicateSessionName,),
        ):
            if self.find(session.name) is not None:
                raise DuplicateSessionName(session.name)
            self._sessions.append(session)
            return session

    def find(self, name: str) -> Optional[Session]:
        """Look up by stored name, accepting the bare name as well."""

        candidates = (name, name + SESSION_SUFFIX)
        for session in self._sessions:
            if session.name in candidates:
                return session
        return None

    def position(self, session: Session) -> int:
        for index, candidate in enumerate(self._sessions):
            if candidate is session:
                return index
        raise UnknownSession(session.name)

    def get(self, index: int) -> Session:
        if index < 0 or index >= len(self._sessions):
            raise UnknownSession(index)
        return self._sessions[index]

    def first(self) -> Session:
        return self.get(0)

    def last(self) -> Session:
        return self.get(len(self._sessions) - 1)

    def resolve(self, session_id: SessionId) -> Session:
        if isinstance(session_id, int):
            return self.get(session_id)
        session = self.find(session_id)
        if session is None:
            raise UnknownSession(session_id)
        return session

    def remove(self, session_id: SessionId) -> Session:
        with span(
            "sessions::remove",
            logger_name=self._logger_name,
            component="sessions",
            metadata={"session": session_id},
            expected=(UnknownSession,),
        ):
            session = self.resolve(session_id)
            del self._sessions[self.position(session)]
            return session

    def names(self) -> list[str]:
        return [session.name for session in self._sessions]

    def is_empty(self) -> bool:
        return not self._sessions

    def stats(self) -> RegistryStats:
        return RegistryStats(
            session_count=len(self._sessions),
            command_count=sum(len(session.history) for session in self._sessions),
            names=tuple(self.names()),
        )

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[Session]:
        return iter(tuple(self._sessions))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None


__all__ = ["SessionRegistry", "RegistryStats", "SessionId"]
