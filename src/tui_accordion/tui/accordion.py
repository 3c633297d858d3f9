"""Accordion widgets: Textual host for AccordionStore.

// [LAW:locality-or-seam] All Textual coupling lives here. The store/reducer never
//   import textual.
// [LAW:single-enforcer] Title clicks and injected messages both end in
//   AccordionStore → MessageGate.receive.
// [LAW:dataflow-not-control-flow] Universe = direct AccordionSection children,
//   recomputed on every query, never cached.

Section layout: first line is the title (always visible), everything else is
the body, shown only while the section is expanded.
"""

from __future__ import annotations

from collections.abc import Hashable

from rich.text import Text
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget

from tui_accordion.app.accordion_store import AccordionStore
from tui_accordion.core.reducer import SelectionState

_COLLAPSED_ICON = "\u25b6"  # ▶
_EXPANDED_ICON = "\u25bc"  # ▼


class SectionTitle(Widget):
    """Clickable, focusable title line of a section."""

    ALLOW_SELECT = False
    can_focus = True

    BINDINGS = [
        Binding("enter", "press", "Toggle", show=False),
        Binding("space", "press", "Toggle", show=False),
    ]

    DEFAULT_CSS = """
    SectionTitle {
        width: 1fr;
        height: 1;
        text-style: bold;
        background: $panel;
        color: $text;
    }

    SectionTitle:hover {
        background: $panel-lighten-1;
    }

    SectionTitle:focus {
        text-style: bold underline;
        background: $panel-lighten-2;
    }
    """

    expanded = reactive(False)

    class Pressed(Message):
        """Title was clicked or activated from the keyboard."""

    def __init__(self, label: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.label = label

    def render(self) -> Text:
        icon = _EXPANDED_ICON if self.expanded else _COLLAPSED_ICON
        return Text.assemble((f" {icon} ", "bold"), self.label)

    def action_press(self) -> None:
        self.post_message(self.Pressed())

    def on_click(self, event) -> None:
        event.stop()
        self.post_message(self.Pressed())


class AccordionSection(Vertical):
    """One collapsible panel. `section_id` is its identifier in the selection."""

    DEFAULT_CSS = """
    AccordionSection {
        height: auto;
    }

    AccordionSection > .accordion-body {
        display: none;
        height: auto;
        padding: 0 1 0 4;
    }

    AccordionSection.-expanded > .accordion-body {
        display: block;
    }
    """

    expanded = reactive(False)

    class Toggled(Message):
        """Posted when the user asks to flip this section."""

        def __init__(self, section: AccordionSection) -> None:
            self.section = section
            super().__init__()

        @property
        def section_id(self) -> Hashable:
            return self.section.section_id

        @property
        def control(self) -> AccordionSection:
            return self.section

    def __init__(
        self,
        title: str,
        *body: Widget,
        section_id: Hashable | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.section_id = section_id if section_id is not None else id
        self._title = title
        self._body = body

    def compose(self):
        yield SectionTitle(self._title).data_bind(AccordionSection.expanded)
        with Vertical(classes="accordion-body"):
            yield from self._body

    def on_mount(self) -> None:
        # Sections mounted after the Accordion pick up the current selection.
        parent = self.parent
        if isinstance(parent, Accordion) and self.section_id is not None:
            self.expanded = parent.is_selected(self.section_id)

    def watch_expanded(self, expanded: bool) -> None:
        self.set_class(expanded, "-expanded")

    def on_section_title_pressed(self, event: SectionTitle.Pressed) -> None:
        event.stop()
        self.post_message(self.Toggled(self))


class Accordion(VerticalScroll):
    """Container that keeps its AccordionSection children in sync with an AccordionStore.

    msg: optional initial action batch (Message or {"actions", "token"} dict),
      replayed once the sections are mounted. Assigning `accordion.msg` later
      feeds the same gate, so resending an already applied message is a no-op.
    """

    DEFAULT_CSS = """
    Accordion {
        height: 1fr;
    }
    """

    msg = reactive(None, init=False, always_update=True)

    class Changed(Message):
        """Selection or mode changed. Not posted when a batch leaves state as it was."""

        def __init__(self, accordion: Accordion, state: SelectionState) -> None:
            self.accordion_widget = accordion
            self.state = state
            super().__init__()

        @property
        def selected(self) -> list:
            return self.state.selected.to_list()

        @property
        def accordion_mode(self) -> bool:
            return self.state.accordion

        @property
        def control(self) -> Accordion:
            return self.accordion_widget

    def __init__(
        self,
        *sections: AccordionSection,
        msg=None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(*sections, id=id, classes=classes)
        self._initial_msg = msg
        self._unsubscribe = None
        self.store = AccordionStore(universe=self.section_ids)

    # ─── Host queries ────────────────────────────────────────────────────

    def sections(self) -> list[AccordionSection]:
        return [
            child
            for child in self.children
            if isinstance(child, AccordionSection) and child.section_id is not None
        ]

    def section_ids(self) -> list:
        return [section.section_id for section in self.sections()]

    def is_selected(self, section_id: Hashable) -> bool:
        return self.store.is_selected(section_id)

    def selected_ids(self) -> list:
        return self.store.selected_ids()

    # ─── Ingestion ───────────────────────────────────────────────────────

    def send(self, message) -> bool:
        return self.store.receive(message)

    def dispatch(self, actions) -> bool:
        return self.store.dispatch(actions)

    def toggle(self, section_id: Hashable) -> bool:
        return self.store.toggle(section_id)

    def watch_msg(self, msg) -> None:
        self.store.receive(msg)

    # ─── Lifecycle ───────────────────────────────────────────────────────

    def on_mount(self) -> None:
        # Initial replay happens before subscribing, so it is not reported upward.
        self.store.receive(self._initial_msg)
        self._unsubscribe = self.store.subscribe(self._on_store_change)
        self.refresh_sections()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def on_accordion_section_toggled(self, event: AccordionSection.Toggled) -> None:
        event.stop()
        self.store.toggle(event.section_id)

    def refresh_sections(self) -> None:
        """Push `expanded` to every section from the current store state."""
        for section in self.sections():
            section.expanded = self.store.is_selected(section.section_id)

    def _on_store_change(self, state: SelectionState) -> None:
        self.refresh_sections()
        self.post_message(self.Changed(self, state))
