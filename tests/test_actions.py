"""Tests for advisor/engine/actions.py — action parsing and Advice."""

from __future__ import annotations

import pytest

from advisor.engine.actions import (
    ACTION_CODES,
    ACTION_INDEX,
    ALWAYS_AVAILABLE,
    Action,
    Advice,
    Outcome,
    action_key,
    available_actions,
    parse_action,
)


class TestParseAction:
    @pytest.mark.parametrize("name", ["double", "DOUBLE", " Double "])
    def test_case_insensitive(self, name):
        assert parse_action(name) is Action.DOUBLE

    def test_enum_passthrough(self):
        assert parse_action(Action.SPLIT) is Action.SPLIT

    def test_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown action"):
            parse_action("insurance")


class TestAvailableActions:
    def test_hit_and_stand_always_present(self):
        assert available_actions() == ALWAYS_AVAILABLE
        assert available_actions(["double"]) >= {Action.HIT, Action.STAND}

    def test_all_optional(self):
        assert available_actions(["double", "split", "surrender"]) == frozenset(Action)

    def test_duplicates_collapse(self):
        assert available_actions(["hit", "hit", "stand"]) == ALWAYS_AVAILABLE


class TestActionKey:
    def test_order_independent(self):
        a = action_key([Action.SURRENDER, Action.HIT, Action.STAND])
        b = action_key([Action.STAND, Action.SURRENDER, Action.HIT])
        assert a == b == ("HIT", "STAND", "SURRENDER")


class TestAdvice:
    def test_frozen(self):
        advice = Advice(Action.HIT, "take a card")
        with pytest.raises(AttributeError):
            advice.action = Action.STAND  # type: ignore[misc]

    def test_label(self):
        assert Advice(Action.DOUBLE, "x").label == "DOUBLE"
        assert Advice(Outcome.BUST, "x").label == "BUST"

    def test_equality(self):
        assert Advice(Action.HIT, "x") == Advice(Action.HIT, "x")


def test_codes_and_indices_cover_every_action():
    assert set(ACTION_CODES) == set(Action)
    assert len(set(ACTION_CODES.values())) == len(Action)
    assert sorted(ACTION_INDEX.values()) == list(range(len(Action)))
