"""CLI entry point for tui-accordion."""

import argparse
import json
import logging
import sys
from pathlib import Path

import tui_accordion.app.settings
import tui_accordion.io.logging_setup
from tui_accordion.core.actions import AccordionOff, actions_to_msg, parse_actions
from tui_accordion.app.accordion_store import AccordionStore
from tui_accordion.tui.app import AccordionApp

logger = logging.getLogger(__name__)

DEFAULT_SECTIONS = ["one", "two", "three"]


def _load_actions_json(raw: str) -> object:
    """Parse --actions. `@path` reads the JSON document from a file."""
    if raw.startswith("@"):
        raw = Path(raw[1:]).read_text(encoding="utf-8")
    return json.loads(raw)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Collapsible panels with accordion selection")
    parser.add_argument(
        "sections",
        nargs="*",
        default=None,
        help="Section ids, in display order (default: one two three)",
    )
    parser.add_argument(
        "--actions",
        type=str,
        default=None,
        help='Initial action batch as JSON, e.g. \'[{"type": "selectIds", "ids": ["one"]}]\'. '
        "Prefix with @ to read from a file.",
    )
    parser.add_argument(
        "--print-state",
        action="store_true",
        default=False,
        help="Apply the initial actions, print the resulting state as JSON and exit.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = tui_accordion.app.settings.load_settings()

    sections = args.sections or list(DEFAULT_SECTIONS)

    actions = []
    if settings.start_multi:
        actions.append(AccordionOff())
    if args.actions is not None:
        try:
            actions.extend(parse_actions(_load_actions_json(args.actions)))
        except (OSError, json.JSONDecodeError) as e:
            parser.error(f"--actions: {e}")

    msg = actions_to_msg(actions) if actions else None

    if args.print_state:
        store = AccordionStore(universe=lambda: sections, message=msg)
        print(json.dumps(store.state.to_dict()))
        return 0

    runtime = tui_accordion.io.logging_setup.configure(settings, stream=False)
    logger.info("starting tui-accordion with %d sections (log: %s)", len(sections), runtime.file_path)
    AccordionApp(sections, msg=msg).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
