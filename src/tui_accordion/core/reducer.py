"""Selection reducer, a pure function: (state, action, universe) → state.

// [LAW:dataflow-not-control-flow] Universe is a parameter, never cached here.
// [LAW:single-enforcer] apply_one is the only place the transition table lives.

The universe (all currently known panel ids) belongs to the host, not to the
accordion state, so it is injected per call instead of being stored.

Pure functions, no live state.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from functools import reduce

from tui_accordion.core.actions import (
    AccordionOff,
    AccordionOn,
    Action,
    CollapseAll,
    ExpandAll,
    SelectIds,
    ToggleIds,
    parse_actions,
)
from tui_accordion.core.id_set import IdentifierSet


@dataclass(frozen=True)
class SelectionState:
    """Expanded panel ids + whether single-expand mode is on."""

    selected: IdentifierSet = field(default_factory=IdentifierSet)
    accordion: bool = True

    def to_dict(self) -> dict[str, object]:
        return {"selected": self.selected.to_list(), "accordion": self.accordion}


def initial_state() -> SelectionState:
    return SelectionState(selected=IdentifierSet(), accordion=True)


def states_equal(s1: SelectionState, s2: SelectionState) -> bool:
    """Same mode flag and same selected members, regardless of identity."""
    return s1.accordion == s2.accordion and s1.selected.equals(s2.selected)


# ─── Per-action transitions ───────────────────────────────────────────────────


def _select_ids(state: SelectionState, action: SelectIds, universe: Sequence) -> SelectionState:
    selected = IdentifierSet(action.ids)
    # Multi-select leaves accordion mode rather than truncating.
    accordion = False if selected.size() > 1 and state.accordion else state.accordion
    return replace(state, selected=selected, accordion=accordion)


def _accordion_on(state: SelectionState, action: AccordionOn, universe: Sequence) -> SelectionState:
    selected = state.selected.first() if state.selected.size() > 1 else state.selected
    return replace(state, selected=selected, accordion=True)


def _accordion_off(state: SelectionState, action: AccordionOff, universe: Sequence) -> SelectionState:
    return replace(state, accordion=False)


def _collapse_all(state: SelectionState, action: CollapseAll, universe: Sequence) -> SelectionState:
    selected = IdentifierSet() if state.selected.size() != 0 else state.selected
    return replace(state, selected=selected, accordion=True)


def _expand_all(state: SelectionState, action: ExpandAll, universe: Sequence) -> SelectionState:
    selected = state.selected if state.selected.equals(universe) else IdentifierSet(universe)
    return replace(state, selected=selected, accordion=False)


def _toggle_ids(state: SelectionState, action: ToggleIds, universe: Sequence) -> SelectionState:
    """XOR the requested ids into the selection.

    In accordion mode only the first requested id counts, and every other
    selected id is dropped before the XOR, so at most one stays selected.
    """
    requested = IdentifierSet(action.ids)
    selected = state.selected
    if state.accordion:
        requested = requested.first()
        selected = selected.intersect(requested)
    return replace(state, selected=selected.symmetric_difference(requested))


_TRANSITIONS: dict[type, Callable[[SelectionState, Action, Sequence], SelectionState]] = {
    SelectIds: _select_ids,
    AccordionOn: _accordion_on,
    AccordionOff: _accordion_off,
    CollapseAll: _collapse_all,
    ExpandAll: _expand_all,
    ToggleIds: _toggle_ids,
}


# ─── Public API ───────────────────────────────────────────────────────────────


def apply_one(state: SelectionState, action: object, universe: Sequence = ()) -> SelectionState:
    """Apply a single action. Unrecognized actions return `state` unchanged."""
    transition = _TRANSITIONS.get(type(action))
    if transition is None:
        return state
    return transition(state, action, universe)


def apply_batch(state: SelectionState, actions: object, universe: Sequence = ()) -> SelectionState:
    """Left-fold apply_one over the recognized actions, in order.

    `actions` may be one action or a list; raw mappings are parsed and
    anything unrecognized is dropped before folding.
    """
    universe = IdentifierSet(universe)
    return reduce(
        lambda acc, action: apply_one(acc, action, universe),
        parse_actions(actions),
        state,
    )
