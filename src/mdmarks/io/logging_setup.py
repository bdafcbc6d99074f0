"""Logging bootstrap for hosts embedding mdmarks.

The library only emits through module loggers under "mdmarks" and never
attaches handlers on import. A host calls configure() once; everything it
does not pass explicitly falls back to the environment:

    MDMARKS_LOG_LEVEL   level name, WARNING when unset or unknown
    MDMARKS_LOG_FILE    exact log file path
    MDMARKS_LOG_DIR     directory for a timestamped log file

With no file target at all, no file handler is attached. Editor hosts that
own the terminal pass stderr=False and get file-only logging.

// [LAW:single-enforcer] Logger handler wiring is enforced in this module only.
// [LAW:one-source-of-truth] The resolved level and file target are returned as LoggingRuntime.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "mdmarks"

_MAX_BYTES = 2 * 1024 * 1024
_BACKUPS = 2


@dataclass(frozen=True)
class LoggingRuntime:
    level_name: str
    level: int
    file_path: str | None
    stderr: bool


_RUNTIME: LoggingRuntime | None = None


def resolve_level(raw: str | int | None) -> int:
    """Level number from a name or number; unknown names mean WARNING."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    level = logging.getLevelName(str(raw or "WARNING").strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def resolve_log_file(explicit: str | os.PathLike | None) -> str | None:
    """File target: explicit argument, then MDMARKS_LOG_FILE, then MDMARKS_LOG_DIR."""
    if explicit:
        return str(explicit)
    if os.environ.get("MDMARKS_LOG_FILE"):
        return os.environ["MDMARKS_LOG_FILE"]
    log_dir = os.environ.get("MDMARKS_LOG_DIR")
    if not log_dir:
        return None
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return str(Path(log_dir) / f"mdmarks-{stamp}-{os.getpid()}.log")


# ─── Handlers ────────────────────────────────────────────────────────────────


def _stderr_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("mdmarks: %(levelname)s %(message)s"))
    return handler


def _file_handler(file_path: str) -> logging.Handler:
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        file_path, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8"
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


# ─── Public API ──────────────────────────────────────────────────────────────


def configure(
    level: str | int | None = None,
    log_file: str | os.PathLike | None = None,
    *,
    stderr: bool = True,
) -> LoggingRuntime:
    """Attach handlers to the "mdmarks" logger. Later calls return the first runtime."""
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    resolved = resolve_level(level if level is not None else os.environ.get("MDMARKS_LOG_LEVEL"))
    file_path = resolve_log_file(log_file)
    handlers = ([_stderr_handler()] if stderr else []) + (
        [_file_handler(file_path)] if file_path else []
    )

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(resolved)
    root.propagate = False
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)

    _RUNTIME = LoggingRuntime(
        level_name=logging.getLevelName(resolved),
        level=resolved,
        file_path=file_path,
        stderr=stderr,
    )
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    return _RUNTIME


def reset() -> None:
    """Detach and close handlers and forget the runtime."""
    global _RUNTIME
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)
    root.propagate = True
    _RUNTIME = None
