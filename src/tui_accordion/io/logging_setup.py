"""Logging bootstrap for tui-accordion.

// [LAW:single-enforcer] Handler wiring happens in this module only; every other
//   module just does `logger = logging.getLogger(__name__)`.
// [LAW:one-source-of-truth] Level and file path come from Settings and are
//   handed back as a LoggingRuntime.

The TUI owns the terminal while it runs, so the CLI configures file-only
logging there. Selection changes are logged at DEBUG by the gate; a one-line
INFO record marks every configure().
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path

from tui_accordion.app.settings import Settings, load_settings

LOGGER_NAME = "tui_accordion"

# One session of toggling produces little output; keep a short history.
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 2

_FILE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-7s %(name)s: %(message)s"
_STREAM_FORMAT = "%(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoggingRuntime:
    """What configure() settled on."""

    level_name: str
    level: int
    file_path: str
    stream: bool = True


_RUNTIME: LoggingRuntime | None = None


def _parse_level(raw: str) -> tuple[str, int]:
    """"debug" → ("DEBUG", 10). Unknown names fall back to INFO."""
    level = logging.getLevelName(str(raw or "INFO").strip().upper())
    if not isinstance(level, int):
        level = logging.INFO
    return logging.getLevelName(level), level


def _session_log_path(log_dir: str) -> Path:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return Path(log_dir) / f"accordion-{stamp}-{os.getpid()}.log"


def _file_handler(level: int, file_path: Path) -> logging.Handler:
    handler = RotatingFileHandler(
        file_path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def _stream_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_STREAM_FORMAT))
    return handler


def configure(settings: Settings | None = None, *, stream: bool = True) -> LoggingRuntime:
    """Attach handlers to the `tui_accordion` logger.

    Idempotent: once configured, later calls return the first runtime and
    ignore their arguments until reset().
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    settings = settings or load_settings()
    level_name, level = _parse_level(settings.log_level)
    file_path = Path(settings.log_file) if settings.log_file else _session_log_path(settings.log_dir)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(level)
    package_logger.propagate = False
    package_logger.handlers.clear()
    package_logger.addHandler(_file_handler(level, file_path))
    if stream:
        package_logger.addHandler(_stream_handler(level))

    _RUNTIME = LoggingRuntime(
        level_name=level_name, level=level, file_path=str(file_path), stream=stream
    )
    logger.info("logging configured: level=%s file=%s", level_name, file_path)
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    return _RUNTIME


def reset() -> None:
    """Detach and close handlers, forget the runtime. Used by tests."""
    global _RUNTIME
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    _RUNTIME = None
