"""Logging for the editing engine, built on telelog.

Sessions, the store, and the engine façade log through three calls:
``get_logger`` for a cached logger, ``record_event`` for one structured
``event::<name>`` line, and ``span`` to profile a dispatch or a save.
``configure`` swaps the active ``LogProfile``; the default one is read from
``EDIT_ENGINE_*`` environment variables on first use.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "EDIT_ENGINE_"
LOGGER_NAME = "edit_engine"
LEVELS = ("debug", "info", "warning", "error")

_LOGGERS: Dict[str, Any] = {}
_ACTIVE: Optional[Any] = None


def _flag(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class LogProfile:
    """How engine logs are filtered and where they go."""

    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json: bool = False
    log_file: str = ""
    buffer_size: int = 0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LogProfile":
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            return env.get(f"{ENV_PREFIX}{name}")

        buffered = _flag(get("LOG_BUFFERED"), False)
        return cls(
            level=(get("LOG_LEVEL") or "INFO").upper(),
            console=not _flag(get("DISABLE_CONSOLE"), False),
            colored=not _flag(get("NO_COLOR"), False),
            json=_flag(get("LOG_JSON"), False),
            log_file=get("LOG_FILE") or "",
            buffer_size=int(get("LOG_BUFFER_SIZE") or "2048") if buffered else 0,
        )

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffer_size:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        # dispatch and save spans are always timed
        config.with_profiling(True)
        return config


def preset_profile(
    name: str, environ: Optional[Mapping[str, str]] = None
) -> LogProfile:
    """Return the ``development``, ``production`` or ``quiet`` profile."""

    base = LogProfile.from_env(environ)
    key = name.lower()
    if key == "development":
        return replace(base, level="DEBUG", console=True, colored=True, json=False)
    if key == "production":
        return replace(
            base,
            level="INFO",
            console=False,
            log_file=base.log_file or "edit_engine.log",
            buffer_size=base.buffer_size or 2048,
        )
    if key == "quiet":
        return replace(base, level="ERROR", console=False, log_file="")
    raise ValueError(f"Unknown log preset '{name}'.")


def configure(
    *, profile: Optional[LogProfile] = None, preset: Optional[str] = None
) -> LogProfile:
    """Adopt a profile (or a named preset) and drop cached loggers."""

    global _ACTIVE
    if profile is not None and preset:
        raise ValueError("Provide either `profile` or `preset`, not both.")
    if preset:
        profile = preset_profile(preset)
    elif profile is None:
        profile = LogProfile.from_env()

    _ACTIVE = profile.to_config()
    _LOGGERS.clear()
    return profile


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or LOGGER_NAME
    if logger_name not in _LOGGERS:
        if _ACTIVE is None:
            configure()
        _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE)
    return _LOGGERS[logger_name]


def _fields(data: Mapping[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), str(value)) for key, value in data.items()]


def _emit(log: Any, level: str, message: str, data: Mapping[str, Any]) -> None:
    if level not in LEVELS:
        raise ValueError(f"Unsupported log level '{level}'.")
    getattr(log, f"{level}_with")(message, _fields(data))


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` as structured fields."""

    _emit(
        get_logger(logger_name),
        level,
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@dataclass
class SpanHandle:
    logger: Any
    span_name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = str(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component:
            payload["component"] = self.component
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    expected: Tuple[type[BaseException], ...] = (),
) -> Iterator[SpanHandle]:
    """Profile a block, tagging every line inside it with ``metadata``.

    Exceptions in ``expected`` are domain rejections and propagate silently;
    any other exception is logged as ``span::fail`` before it propagates.
    """

    log = get_logger(logger_name)
    context = {key: str(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    handle = SpanHandle(
        logger=log, span_name=name, component=component, metadata=dict(context)
    )
    try:
        with ExitStack() as stack:
            if component:
                stack.enter_context(log.track_component(component))
            stack.enter_context(log.profile(name))
            yield handle
    except expected:
        raise
    except Exception as exc:
        handle.fail(str(exc))
        raise
    finally:
        for key in context:
            log.remove_context(key)


__all__ = [
    "ENV_PREFIX",
    "LogProfile",
    "SpanHandle",
    "configure",
    "get_logger",
    "preset_profile",
    "record_event",
    "span",
]
