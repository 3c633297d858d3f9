"""Demo TUI application hosting a single Accordion.

// [LAW:locality-or-seam] Thin coordinator: key bindings become actions on the
//   Accordion; all selection logic stays in the store.
"""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from tui_accordion.core.actions import AccordionOff, AccordionOn, CollapseAll, ExpandAll
from tui_accordion.core.reducer import SelectionState
from tui_accordion.tui.accordion import Accordion, AccordionSection

logger = logging.getLogger(__name__)


def section_dom_id(index: int) -> str:
    """Widget id for the section at `index`. Names never reach the DOM id."""
    return f"section-{index}"


def summarize(state: SelectionState) -> str:
    mode = "accordion" if state.accordion else "multi"
    selected = ", ".join(str(x) for x in state.selected) or "none"
    return f"{mode} · expanded: {selected}"


class AccordionApp(App):
    """Accordion demo. Sections are named on the command line."""

    TITLE = "tui-accordion"

    BINDINGS = [
        Binding("e", "expand_all", "Expand all"),
        Binding("c", "collapse_all", "Collapse all"),
        Binding("a", "toggle_mode", "Accordion on/off"),
        Binding("q", "quit", "Quit"),
    ] + [
        Binding(str(n), f"toggle_nth({n - 1})", f"Toggle #{n}", show=False)
        for n in range(1, 10)
    ]

    def __init__(self, sections: list[str], msg=None) -> None:
        super().__init__()
        # Section names are identifiers, so repeats collapse to one section.
        self._section_names = list(dict.fromkeys(sections))
        self._msg = msg

    def compose(self) -> ComposeResult:
        yield Header()
        yield Accordion(
            *(
                AccordionSection(
                    str(name),
                    Static(f"Contents of {name}."),
                    section_id=name,
                    id=section_dom_id(index),
                )
                for index, name in enumerate(self._section_names)
            ),
            msg=self._msg,
            id="accordion",
        )
        yield Footer()

    @property
    def accordion(self) -> Accordion:
        return self.query_one("#accordion", Accordion)

    def on_mount(self) -> None:
        # Accordion replays its initial message in its own on_mount.
        self.call_after_refresh(self._refresh_sub_title)

    def _refresh_sub_title(self) -> None:
        self.sub_title = summarize(self.accordion.store.state)

    def on_accordion_changed(self, event: Accordion.Changed) -> None:
        logger.debug("accordion changed: %s", event.state.to_dict())
        self.sub_title = summarize(event.state)

    # ─── Actions ─────────────────────────────────────────────────────────

    def action_expand_all(self) -> None:
        self.accordion.dispatch(ExpandAll())

    def action_collapse_all(self) -> None:
        self.accordion.dispatch(CollapseAll())

    def action_toggle_mode(self) -> None:
        acc = self.accordion
        acc.dispatch(AccordionOff() if acc.store.accordion else AccordionOn())

    def action_toggle_nth(self, index: int) -> None:
        ids = self.accordion.section_ids()
        if 0 <= index < len(ids):
            self.accordion.toggle(ids[index])
