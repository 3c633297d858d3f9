"""Accordion actions and the message envelope that carries them.

// [LAW:one-source-of-truth] The class IS the action; the tag lives on the class, not in a field.
// [LAW:single-enforcer] parse_action / parse_message are the sole validation boundary
//   for untyped input. Everything past this module sees typed actions only.

Pure data, no live state. Safe for `from` imports everywhere.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

logger = logging.getLogger(__name__)


class ActionType(Enum):
    """Wire tag for each action."""

    SELECT_IDS = "selectIds"
    ACCORDION_ON = "accordionOn"
    ACCORDION_OFF = "accordionOff"
    COLLAPSE_ALL = "collapseAll"
    EXPAND_ALL = "expandAll"
    TOGGLE_IDS = "toggleIds"


# ─── Action hierarchy ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Action:
    """Base class for all accordion actions."""

    type: ClassVar[ActionType]

    def to_dict(self) -> dict[str, object]:
        return {"type": self.type.value}


@dataclass(frozen=True)
class SelectIds(Action):
    """Replace the selection with exactly these ids."""

    type: ClassVar[ActionType] = ActionType.SELECT_IDS
    ids: tuple = ()

    def to_dict(self) -> dict[str, object]:
        return {"type": self.type.value, "ids": list(self.ids)}


@dataclass(frozen=True)
class AccordionOn(Action):
    type: ClassVar[ActionType] = ActionType.ACCORDION_ON


@dataclass(frozen=True)
class AccordionOff(Action):
    type: ClassVar[ActionType] = ActionType.ACCORDION_OFF


@dataclass(frozen=True)
class CollapseAll(Action):
    type: ClassVar[ActionType] = ActionType.COLLAPSE_ALL


@dataclass(frozen=True)
class ExpandAll(Action):
    type: ClassVar[ActionType] = ActionType.EXPAND_ALL


@dataclass(frozen=True)
class ToggleIds(Action):
    """Flip the expanded state of these ids (first id only in accordion mode)."""

    type: ClassVar[ActionType] = ActionType.TOGGLE_IDS
    ids: tuple = ()

    def to_dict(self) -> dict[str, object]:
        return {"type": self.type.value, "ids": list(self.ids)}


# ─── Message envelope ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Message:
    """Ordered batch of actions stamped with a token.

    The token is only ever compared for inequality against the last one
    applied, so a caller can resend its whole action history safely.
    """

    actions: tuple[Action, ...] = field(default_factory=tuple)
    token: object = None

    def to_dict(self) -> dict[str, object]:
        return {"actions": [a.to_dict() for a in self.actions], "token": self.token}


def new_token() -> str:
    """Epoch milliseconds plus a 12-digit random suffix."""
    return f"{int(time.time() * 1000)}-{random.randrange(10**12):012d}"


def as_list(value: object) -> list:
    """A list stays a list (tuples too); anything else becomes a one-item list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def actions_to_msg(actions: Action | Iterable[Action]) -> Message:
    """Wrap one action or a list of actions into a freshly stamped Message."""
    return Message(actions=tuple(parse_actions(actions)), token=new_token())


# ─── Parse boundary ───────────────────────────────────────────────────────────


def _ids(raw: Mapping) -> tuple | None:
    if "ids" not in raw or raw["ids"] is None:
        return None
    return tuple(as_list(raw["ids"]))


def _parse_select(raw: Mapping) -> Action | None:
    ids = _ids(raw)
    return None if ids is None else SelectIds(ids=ids)


def _parse_toggle(raw: Mapping) -> Action | None:
    ids = _ids(raw)
    return None if ids is None else ToggleIds(ids=ids)


_PARSERS: dict[str, Callable[[Mapping], Action | None]] = {
    ActionType.SELECT_IDS.value: _parse_select,
    ActionType.ACCORDION_ON.value: lambda raw: AccordionOn(),
    ActionType.ACCORDION_OFF.value: lambda raw: AccordionOff(),
    ActionType.COLLAPSE_ALL.value: lambda raw: CollapseAll(),
    ActionType.EXPAND_ALL.value: lambda raw: ExpandAll(),
    ActionType.TOGGLE_IDS.value: _parse_toggle,
}


def parse_action(raw: object) -> Action | None:
    """Validate one action. Returns None for anything unrecognized.

    Accepts typed Action instances (returned as-is) and mappings with a
    "type" key holding a wire tag or an ActionType member.
    """
    if isinstance(raw, Action):
        return raw
    if not isinstance(raw, Mapping):
        logger.debug("dropping non-mapping action: %r", raw)
        return None
    tag = raw.get("type")
    if isinstance(tag, ActionType):
        tag = tag.value
    parser = _PARSERS.get(tag) if isinstance(tag, str) else None
    action = parser(raw) if parser is not None else None
    if action is None:
        logger.debug("dropping malformed action: %r", raw)
    return action


def parse_actions(raw: object) -> list[Action]:
    """Validate a single action or a list of them, dropping unrecognized entries."""
    parsed = (parse_action(item) for item in as_list(raw))
    return [a for a in parsed if a is not None]


def parse_message(raw: object) -> Message | None:
    """Coerce a Message or a {"actions", "token"} mapping into a Message.

    "ts" is accepted as an alias for "token". Returns None for anything else.
    """
    if isinstance(raw, Message):
        return raw
    if not isinstance(raw, Mapping):
        return None
    token = raw.get("token", raw.get("ts"))
    return Message(actions=tuple(parse_actions(raw.get("actions"))), token=token)
