"""Per-session clipboard log."""

from __future__ import annotations

from typing import Iterable, Iterator, List

from edit_engine.errors import IndexOutOfRange


class Clipboard:
    """Append-only, insertion-ordered log of copied and cut fragments.

    Fragments are never removed one by one and duplicates are kept. Growth
    is unbounded; the whole log is replaced only when a session is loaded.
    """

    def __init__(self, fragments: Iterable[str] = ()) -> None:
        self._fragments: List[str] = list(fragments)

    def append(self, fragment: str) -> None:
        self._fragments.append(fragment)

    def get(self, index: int) -> str:
        if index < 0 or index >= len(self._fragments):
            raise IndexOutOfRange(
                f"Clipboard index {index} outside [0, {len(self._fragments) - 1}]",
                start=index,
                end=index,
                upper=len(self._fragments) - 1,
            )
        return self._fragments[index]

    def first(self) -> str:
        return self.get(0)

    def last(self) -> str:
        return self.get(len(self._fragments) - 1)

    def size(self) -> int:
        return len(self._fragments)

    def is_empty(self) -> bool:
        return not self._fragments

    def fragments(self) -> tuple[str, ...]:
        return tuple(self._fragments)

    def load(self, fragments: Iterable[str]) -> None:
        """Replace every fragment, used when rebuilding from disk."""

        self._fragments = list(fragments)

    def __len__(self) -> int:
        return len(self._fragments)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._fragments))


__all__ = ["Clipboard"]
