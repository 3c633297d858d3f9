"""Tests for tui_accordion.app.message_gate: token de-duplication and change detection."""

from hypothesis import given
from hypothesis import strategies as st

from tui_accordion.app.message_gate import MessageGate
from tui_accordion.core.actions import (
    AccordionOff,
    CollapseAll,
    ExpandAll,
    Message,
    SelectIds,
    ToggleIds,
    actions_to_msg,
)
from tui_accordion.core.reducer import initial_state, states_equal

UNIVERSE = ["a", "b", "c"]


class TestReceive:
    def test_fresh_message_applies(self):
        gate = MessageGate()
        s, changed = gate.receive(actions_to_msg(ToggleIds(ids=("a",))), initial_state(), UNIVERSE)
        assert changed is True
        assert s.selected.to_list() == ["a"]

    def test_token_recorded(self):
        gate = MessageGate()
        msg = Message(actions=(ExpandAll(),), token="t-1")
        gate.receive(msg, initial_state(), UNIVERSE)
        assert gate.last_token == "t-1"

    def test_same_token_twice_is_noop(self):
        """Scenario 6: replaying a message yields changed=False and leaves state alone."""
        gate = MessageGate()
        msg = actions_to_msg(ToggleIds(ids=("a",)))
        s1, changed1 = gate.receive(msg, initial_state(), UNIVERSE)
        s2, changed2 = gate.receive(msg, s1, UNIVERSE)
        assert changed1 is True
        assert changed2 is False
        assert s2 is s1

    def test_missing_token_is_noop(self):
        gate = MessageGate()
        s0 = initial_state()
        s, changed = gate.receive(Message(actions=(ExpandAll(),), token=None), s0, UNIVERSE)
        assert (s, changed) == (s0, False)
        assert gate.last_token is None

    def test_absent_message_is_noop(self):
        gate = MessageGate()
        s0 = initial_state()
        assert gate.receive(None, s0, UNIVERSE) == (s0, False)

    def test_empty_actions_is_noop_and_token_not_recorded(self):
        gate = MessageGate()
        s0 = initial_state()
        assert gate.receive(Message(actions=(), token="t"), s0, UNIVERSE) == (s0, False)
        assert gate.last_token is None

    def test_only_malformed_actions_is_noop(self):
        gate = MessageGate()
        s0 = initial_state()
        raw = {"actions": [{"type": "nope"}, {"type": "selectIds"}], "token": "t"}
        assert gate.receive(raw, s0, UNIVERSE) == (s0, False)

    def test_unchanged_result_records_token(self):
        gate = MessageGate()
        s0 = initial_state()
        s, changed = gate.receive(Message(actions=(CollapseAll(),), token="t"), s0, UNIVERSE)
        assert changed is False
        assert states_equal(s, s0)
        assert gate.last_token == "t"

    def test_raw_mapping_with_ts(self):
        gate = MessageGate()
        raw = {"actions": [{"type": "selectIds", "ids": ["b", "c"]}], "ts": "1-2"}
        s, changed = gate.receive(raw, initial_state(), UNIVERSE)
        assert changed is True
        assert s.selected.to_list() == ["b", "c"]
        assert s.accordion is False

    def test_new_token_after_replay_applies_again(self):
        gate = MessageGate()
        s1, _ = gate.receive(Message(actions=(ToggleIds(ids=("a",)),), token="1"), initial_state())
        s2, changed = gate.receive(Message(actions=(ToggleIds(ids=("a",)),), token="2"), s1)
        assert changed is True
        assert s2.selected.size() == 0

    def test_alternating_tokens_are_both_fresh(self):
        """Only the last applied token is remembered."""
        gate = MessageGate()
        m1 = Message(actions=(AccordionOff(),), token="1")
        m2 = Message(actions=(SelectIds(ids=("a",)),), token="2")
        s, _ = gate.receive(m1, initial_state(), UNIVERSE)
        s, _ = gate.receive(m2, s, UNIVERSE)
        _, changed = gate.receive(m1, s, UNIVERSE)
        assert gate.last_token == "1"
        assert changed is False  # AccordionOff again changes nothing

    def test_reset(self):
        gate = MessageGate()
        msg = Message(actions=(ExpandAll(),), token="t")
        gate.receive(msg, initial_state(), UNIVERSE)
        gate.reset()
        _, changed = gate.receive(msg, initial_state(), UNIVERSE)
        assert changed is True


_actions = st.lists(
    st.one_of(
        st.lists(st.sampled_from(UNIVERSE), max_size=3).map(lambda ids: ToggleIds(ids=tuple(ids))),
        st.lists(st.sampled_from(UNIVERSE), max_size=3).map(lambda ids: SelectIds(ids=tuple(ids))),
        st.just(ExpandAll()),
        st.just(CollapseAll()),
        st.just(AccordionOff()),
    ),
    min_size=1,
    max_size=10,
)


class TestMessageGateProperties:
    @given(_actions, _actions)
    def test_idempotent_replay(self, history, batch):
        gate = MessageGate()
        start, _ = gate.receive(actions_to_msg(history), initial_state(), UNIVERSE)
        msg = actions_to_msg(batch)
        s1, _ = gate.receive(msg, start, UNIVERSE)
        s2, changed = gate.receive(msg, s1, UNIVERSE)
        assert changed is False
        assert states_equal(s2, s1)

    @given(_actions)
    def test_changed_flag_matches_state_comparison(self, batch):
        gate = MessageGate()
        s0 = initial_state()
        s1, changed = gate.receive(actions_to_msg(batch), s0, UNIVERSE)
        assert changed == (not states_equal(s0, s1))
