"""Accordion store: owns one widget's SelectionState.

// [LAW:one-source-of-truth] `state` is the only copy of the selection; hosts query it.
// [LAW:single-enforcer] Every change (host toggle, injected batch) flows through
//   MessageGate.receive. There is exactly one ingestion path.
// [LAW:one-way-deps] Depends on core + message_gate only. Knows nothing about Textual.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Sequence

from tui_accordion.app.message_gate import MessageGate
from tui_accordion.core.actions import Action, Message, actions_to_msg, ToggleIds
from tui_accordion.core.reducer import SelectionState, initial_state

logger = logging.getLogger(__name__)

Subscriber = Callable[[SelectionState], None]


class AccordionStore:
    """Selection state + gate + change subscribers for a single accordion.

    universe: zero-arg callable returning the currently known panel ids.
      Queried on every ingestion, never cached.
    message: optional initial batch, replayed at construction.
    """

    def __init__(
        self,
        universe: Callable[[], Sequence] | None = None,
        message: Message | dict | None = None,
    ) -> None:
        self._universe = universe or (lambda: ())
        self._gate = MessageGate()
        self._subscribers: list[Subscriber] = []
        self.state: SelectionState = initial_state()
        if message is not None:
            self.state, _ = self._gate.receive(message, self.state, self._universe())

    # ─── Queries ─────────────────────────────────────────────────────────

    def is_selected(self, section_id: Hashable) -> bool:
        return self.state.selected.has(section_id)

    def selected_ids(self) -> list:
        return self.state.selected.to_list()

    @property
    def accordion(self) -> bool:
        return self.state.accordion

    @property
    def last_token(self) -> object:
        return self._gate.last_token

    # ─── Ingestion ───────────────────────────────────────────────────────

    def receive(self, message: Message | dict | None) -> bool:
        """Feed an externally stamped batch through the gate. Returns `changed`."""
        new_state, changed = self._gate.receive(message, self.state, self._universe())
        if changed:
            self.state = new_state
            self._publish()
        return changed

    def dispatch(self, actions: Action | dict | list) -> bool:
        """Stamp one action or a list with a fresh token and receive it."""
        return self.receive(actions_to_msg(actions))

    def toggle(self, section_id: Hashable) -> bool:
        """Single-id toggle from the host (e.g. a click on a section title)."""
        return self.dispatch(ToggleIds(ids=(section_id,)))

    # ─── Subscribers ─────────────────────────────────────────────────────

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call `callback(state)` after every change. Returns an unsubscribe fn."""
        self._subscribers.append(callback)

        def _unsub():
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

        return _unsub

    def _publish(self) -> None:
        for callback in list(self._subscribers):
            try:
                callback(self.state)
            except Exception:
                logger.exception("accordion subscriber %r failed", callback)
