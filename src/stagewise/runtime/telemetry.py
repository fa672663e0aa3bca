"""Logging and profiling for stagewise, on top of telelog.

The terminal is owned by the UI while the app runs, so nothing is written to
the console unless ``STAGEWISE_CONSOLE`` is set. ``--log`` swaps the active
configuration for a DEBUG-level file log via :func:`enable_debug_log`.

Call sites only need three things: :func:`get_logger`, :func:`record_event`
for one-off structured lines, and :func:`span` around work worth timing.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "STAGEWISE_"
DEBUG_LOG_FILE = "debug.log"
ROOT_LOGGER = "stagewise"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _text(value)) for key, value in data.items()]


def _base_config(level: str) -> Any:
    config = tl.Config()
    config.with_min_level(level)
    config.with_profiling(True)
    return config


def _default_config() -> Any:
    config = _base_config((_env("LOG_LEVEL") or "INFO").upper())
    console = _env_flag("CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))
    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    return config


def enable_debug_log(path: str | Path | None = None) -> Path:
    """Send DEBUG-level output to ``path`` (``./debug.log`` by default).

    The file is touched first so a bad location raises here, at startup.
    """

    global _ACTIVE_CONFIG
    target = Path(path if path is not None else DEBUG_LOG_FILE)
    target.touch()
    config = _base_config("DEBUG")
    config.with_console_output(False)
    config.with_file_output(str(target))
    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()
    return target


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _default_config()
    logger_name = name or ROOT_LOGGER
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        logger = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _emitter(logger: Any, level: str) -> Tuple[Any, bool]:
    """Pick ``<level>_with`` when telelog offers it, else the plain method."""

    name = level.lower()
    method = getattr(logger, f"{name}_with", None)
    if method is not None:
        return method, True
    method = getattr(logger, name, None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return method, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, structured = _emitter(logger, level)
    if structured:
        method(message, _pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(
        get_logger(logger_name),
        level,
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@dataclass
class SpanHandle:
    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata}
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
) -> Iterator[SpanHandle]:
    """Profile the block under ``name``, tracked as ``component`` when given.

    ``metadata`` is pushed as logger context for the duration of the block.
    An exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    logger = get_logger(logger_name)
    context = {key: _text(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        logger.add_context(key, value)

    handle = SpanHandle(logger, name, component, dict(context))
    try:
        with ExitStack() as stack:
            if component:
                stack.enter_context(logger.track_component(component))
            stack.enter_context(logger.profile(name))
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
    finally:
        for key in context:
            logger.remove_context(key)


__all__ = [
    "DEBUG_LOG_FILE",
    "SpanHandle",
    "enable_debug_log",
    "get_logger",
    "record_event",
    "span",
]
