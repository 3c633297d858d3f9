"""Textual in-process test harness for tui-accordion.

Re-exports all public API for convenient imports:
    from tests.harness import run_app, press_and_settle, MessageCapture, ...
"""

from tests.harness.app_runner import run_app, run_widget
from tests.harness.interactions import (
    press_and_settle,
    press_sequence,
    click_and_settle,
)
from tests.harness.messages import MessageCapture

__all__ = [
    "run_app",
    "run_widget",
    "press_and_settle",
    "press_sequence",
    "click_and_settle",
    "MessageCapture",
]
