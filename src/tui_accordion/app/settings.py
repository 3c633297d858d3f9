"""Runtime settings, read from the environment.

// [LAW:one-source-of-truth] All known settings and their defaults live in SCHEMA.

Selection state is never persisted; these only shape how the process starts.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

# [LAW:one-source-of-truth] env var → default
SCHEMA: dict[str, str] = {
    "TUI_ACCORDION_LOG_LEVEL": "INFO",
    "TUI_ACCORDION_LOG_FILE": "",
    "TUI_ACCORDION_LOG_DIR": os.path.expanduser("~/.local/share/tui-accordion/logs"),
    "TUI_ACCORDION_START_MULTI": "0",
}

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    log_level: str
    log_file: str | None
    log_dir: str
    start_multi: bool


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Resolve settings from `environ` (defaults to os.environ), filtered to SCHEMA keys."""
    env = os.environ if environ is None else environ
    merged = {k: str(env.get(k, default)) for k, default in SCHEMA.items()}
    return Settings(
        log_level=merged["TUI_ACCORDION_LOG_LEVEL"].strip().upper() or "INFO",
        log_file=merged["TUI_ACCORDION_LOG_FILE"].strip() or None,
        log_dir=merged["TUI_ACCORDION_LOG_DIR"],
        start_multi=merged["TUI_ACCORDION_START_MULTI"].strip().lower() in _TRUTHY,
    )
