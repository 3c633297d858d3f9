"""Message gate: applies each stamped action batch at most once.

// [LAW:single-enforcer] receive() is the only entry from the outside world into apply_batch.
// [LAW:dataflow-not-control-flow] "Nothing changed" is returned as data (changed=False),
//   never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tui_accordion.core.actions import Message, parse_message
from tui_accordion.core.reducer import SelectionState, apply_batch, states_equal

logger = logging.getLogger(__name__)


class MessageGate:
    """Remembers the token of the last applied batch and ignores replays of it."""

    def __init__(self) -> None:
        self.last_token: object = None

    def receive(
        self,
        message: Message | dict | None,
        state: SelectionState,
        universe: Sequence = (),
    ) -> tuple[SelectionState, bool]:
        """Fold a fresh message over `state`.

        Returns (new_state, changed). Absent, tokenless, already-applied and
        empty messages are a no-op: (state, False).
        """
        msg = parse_message(message)
        if msg is None or msg.token is None:
            return state, False
        if msg.token == self.last_token:
            logger.debug("ignoring replayed message %s", msg.token)
            return state, False
        if not msg.actions:
            return state, False

        candidate = apply_batch(state, msg.actions, universe)
        self.last_token = msg.token
        changed = not states_equal(candidate, state)
        logger.debug(
            "applied message %s (%d actions, changed=%s)", msg.token, len(msg.actions), changed
        )
        return candidate, changed

    def reset(self) -> None:
        self.last_token = None
