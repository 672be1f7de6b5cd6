import pytest

from edit_engine.commands import CommandKind
from edit_engine.errors import DuplicateSessionName, InvalidSessionName, UnknownSession
from edit_engine.sessions import Session, SessionRegistry, validate_session_name


def make_registry(*names: str) -> SessionRegistry:
    return SessionRegistry(Session.create(name) for name in names)


def test_valid_name_gets_suffix() -> None:
    assert validate_session_name("notes") == "notes.txt"
    assert Session.create("notes").title == "notes"


@pytest.mark.parametrize(
    "name", ["a/b", "a\\b", 'a"b', "a:b", "a?b", "a*b", "a|b", "a<b", "a>b", ""]
)
def test_forbidden_names_are_rejected(name: str) -> None:
    with pytest.raises(InvalidSessionName):
        Session.create(name)


def test_fresh_session_is_empty() -> None:
    session = Session.create("draft")

    assert session.text == ""
    assert session.cursor == -1
    assert len(session.history) == 0
    assert session.clipboard.is_empty()


def test_session_dispatch_tracks_text() -> None:
    session = Session.create("draft")

    session.dispatch(CommandKind.PASTE, paste_text="HELLO")
    session.dispatch(CommandKind.CUT, start=0, end=1)

    assert session.text == "LLO"
    assert session.clipboard.fragments() == ("HE",)
    assert session.dispatch(CommandKind.UNDO) == "HELLO"


def test_registry_keeps_creation_order_and_rejects_duplicates() -> None:
    registry = make_registry("one", "two", "three")

    assert registry.names() == ["one.txt", "two.txt", "three.txt"]
    assert registry.first().name == "one.txt"
    assert registry.last().name == "three.txt"
    with pytest.raises(DuplicateSessionName):
        registry.add(Session.create("two"))


def test_registry_resolves_by_name_or_position() -> None:
    registry = make_registry("one", "two")

    assert registry.resolve("two") is registry.get(1)
    assert registry.resolve("two.txt") is registry.get(1)
    assert "one" in registry
    with pytest.raises(UnknownSession):
        registry.resolve("missing")
    with pytest.raises(UnknownSession):
        registry.get(2)


def test_remove_shifts_later_positions() -> None:
    registry = make_registry("one", "two", "three")

    removed = registry.remove(0)

    assert removed.name == "one.txt"
    assert registry.get(0).name == "two.txt"
    assert registry.stats().session_count == 2
    with pytest.raises(UnknownSession):
        registry.remove("one")
