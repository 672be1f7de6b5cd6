"""Command line front end: one engine operation per invocation."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Dict, Optional, Sequence, TextIO

from edit_engine.commands import CommandKind
from edit_engine.engine import Engine
from edit_engine.errors import EditEngineError
from edit_engine.persistence import SessionStore
from edit_engine.runtime import telemetry
from edit_engine.runtime.settings import EngineSettings
from edit_engine.sessions import Session

Handler = Callable[[Engine, SessionStore, argparse.Namespace, TextIO], None]


def _print_text(session: Session, out: TextIO) -> None:
    if session.text:
        out.write(f'{session.name}:\n"{session.text}"\n')
    else:
        out.write(f"{session.name}: file is empty\n")


def _full_range(session: Session, args: argparse.Namespace) -> tuple[int, int]:
    if args.range:
        return args.range[0], args.range[1]
    return 0, len(session.text) - 1


def _paste_range(session: Session, args: argparse.Namespace) -> tuple[int, int]:
    if args.range:
        return args.range[0], args.range[1]
    if args.at is not None:
        return args.at, args.at
    if args.end and session.text:
        last = len(session.text) - 1
        return last, last
    return 0, 0


def _handle_list(engine, store, args, out) -> None:
    for position, name in enumerate(engine.list_sessions(), start=1):
        out.write(f"#{position}: {name}\n")


def _handle_create(engine, store, args, out) -> None:
    session = engine.create_session(args.name)
    store.create_content(session.name)
    out.write(f"created {session.name}\n")


def _handle_remove(engine, store, args, out) -> None:
    name = engine.delete_session(args.name).name
    store.remove_content(name)
    out.write(f"removed {name}\n")


def _handle_show(engine, store, args, out) -> None:
    session = engine.session(args.name)
    _print_text(session, out)
    out.write(
        f"commands={len(session.history)} cursor={session.cursor} "
        f"undo={'yes' if session.history.can_undo() else 'no'} "
        f"redo={'yes' if session.history.can_redo() else 'no'}\n"
    )


def _handle_clipboard(engine, store, args, out) -> None:
    session = engine.session(args.name)
    if session.clipboard.is_empty():
        out.write("clipboard is empty\n")
        return
    for position, fragment in enumerate(session.clipboard, start=1):
        out.write(f'{position}) "{fragment}"\n')


def _handle_paste(engine, store, args, out) -> None:
    session = engine.session(args.name)
    if args.clip is not None:
        text = session.clipboard.get(args.clip - 1)
    else:
        text = args.text
    start, end = _paste_range(session, args)
    engine.dispatch(session.name, CommandKind.PASTE, start, end, text)
    store.write_content(session)
    _print_text(session, out)


def _range_handler(kind: CommandKind) -> Handler:
    def handler(engine, store, args, out) -> None:
        session = engine.session(args.name)
        start, end = _full_range(session, args)
        engine.dispatch(session.name, kind, start, end)
        if kind is not CommandKind.COPY:
            store.write_content(session)
        _print_text(session, out)

    return handler


def _history_handler(kind: CommandKind) -> Handler:
    def handler(engine, store, args, out) -> None:
        session = engine.session(args.name)
        engine.dispatch(session.name, kind)
        store.write_content(session)
        _print_text(session, out)

    return handler


_HANDLERS: Dict[str, Handler] = {
    "list": _handle_list,
    "create": _handle_create,
    "remove": _handle_remove,
    "show": _handle_show,
    "clipboard": _handle_clipboard,
    "paste": _handle_paste,
    "copy": _range_handler(CommandKind.COPY),
    "cut": _range_handler(CommandKind.CUT),
    "delete": _range_handler(CommandKind.DELETE),
    "undo": _history_handler(CommandKind.UNDO),
    "redo": _history_handler(CommandKind.REDO),
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edit-engine",
        description="Edit text sessions with undo and redo.",
    )
    parser.add_argument(
        "--metadata-dir",
        help="Directory for session history and clipboard metadata "
        "(default: $EDIT_ENGINE_METADATA_DIR or ./Metadata)",
    )
    parser.add_argument(
        "--sessions-dir",
        help="Directory for session content files "
        "(default: $EDIT_ENGINE_SESSIONS_DIR or ./Sessions)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "quiet"),
        help="Telemetry preset to use instead of the environment defaults",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List sessions in creation order")
    for command, help_text in (
        ("create", "Create an empty session"),
        ("remove", "Delete a session and its files"),
        ("show", "Print a session's text and history state"),
        ("clipboard", "Print a session's clipboard fragments"),
        ("undo", "Undo the last applied command"),
        ("redo", "Redo the next undone command"),
    ):
        sub.add_parser(command, help=help_text).add_argument("name")

    for command, help_text in (
        ("copy", "Copy a range into the clipboard (whole text by default)"),
        ("cut", "Cut a range into the clipboard (whole text by default)"),
        ("delete", "Delete a range (whole text by default)"),
    ):
        range_parser = sub.add_parser(command, help=help_text)
        range_parser.add_argument("name")
        range_parser.add_argument(
            "--range", nargs=2, type=int, metavar=("START", "END")
        )

    paste = sub.add_parser("paste", help="Insert text or replace a range")
    paste.add_argument("name")
    source = paste.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Text to paste")
    source.add_argument(
        "--clip", type=int, metavar="N", help="Paste clipboard fragment N (from 1)"
    )
    where = paste.add_mutually_exclusive_group()
    where.add_argument("--start", action="store_true", help="Paste at the start")
    where.add_argument("--end", action="store_true", help="Paste at the end")
    where.add_argument("--at", type=int, metavar="INDEX", help="Paste at INDEX")
    where.add_argument(
        "--range",
        nargs=2,
        type=int,
        metavar=("START", "END"),
        help="Replace the inclusive range",
    )
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    args = _build_parser().parse_args(argv)
    out = out or sys.stdout
    err = err or sys.stderr
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)

    settings = EngineSettings.from_env().override(
        metadata_dir=args.metadata_dir, sessions_dir=args.sessions_dir
    )
    store = SessionStore(settings)
    engine = Engine(store.load_all(), settings=settings)
    status = 0
    try:
        _HANDLERS[args.command](engine, store, args, out)
    except EditEngineError as exc:
        err.write(f"error: {exc}\n")
        status = 1
    failed = store.save_all(engine.registry)
    if failed:
        err.write(f"error: could not save {', '.join(failed)}\n")
        status = 1
    return status


__all__ = ["main"]
