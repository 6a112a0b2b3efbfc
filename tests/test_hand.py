"""Tests for advisor/engine/hand.py — totals, softness, and pair detection."""

from __future__ import annotations

import itertools

import pytest

from advisor.engine.hand import (
    Hand,
    classify,
    hand_from_total,
    hand_totals,
    is_blackjack,
    is_bust,
    is_pair,
)
from tests.conftest import hand

NON_ACE_RANKS = ['2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K']


# ─── hand_totals ──────────────────────────────────────────────────────────────

class TestHandTotals:
    def test_two_card_hard(self):
        assert hand_totals(('10', '6')) == (16, False)

    def test_face_cards(self):
        assert hand_totals(('K', 'Q')) == (20, False)

    def test_ace_seven_soft_18(self):
        assert hand_totals(('A', '7')) == (18, True)

    def test_ace_king_21(self):
        assert hand_totals(('A', 'K')) == (21, True)

    def test_ace_seven_eight_hard_16(self):
        # 11+7+8=26 -> demote ace -> 16, no ace left high
        assert hand_totals(('A', '7', '8')) == (16, False)

    def test_ace_five_five_soft_21(self):
        assert hand_totals(('A', '5', '5')) == (21, True)

    def test_three_aces(self):
        # 33 -> 23 -> 13, one ace still high
        assert hand_totals(('A', 'A', 'A')) == (13, True)

    def test_bust_without_aces(self):
        assert hand_totals(('10', '10', '5')) == (25, False)

    def test_bust_with_all_aces_demoted(self):
        assert hand_totals(('A', 'K', 'Q', '5')) == (26, False)

    def test_five_card_hand(self):
        assert hand_totals(('2', '3', '4', '5', '6')) == (20, False)


# ─── classify ─────────────────────────────────────────────────────────────────

class TestClassify:
    def test_ace_ace(self):
        result = classify(('A', 'A'))
        assert result.total == 12
        assert result.is_soft is True
        assert result.is_pair is True

    def test_ace_ace_nine(self):
        # 11+11=22 -> 12, +9 = 21 with one ace still at 11
        result = classify(('A', 'A', '9'))
        assert result.total == 21
        assert result.is_soft is True
        assert result.is_pair is False

    def test_ten_king_is_pair(self):
        assert classify(('10', 'K')).is_pair is True

    def test_jack_queen_is_pair(self):
        assert classify(('J', 'Q')).is_pair is True

    def test_eight_nine_not_pair(self):
        assert classify(('8', '9')).is_pair is False

    def test_three_of_a_kind_not_pair(self):
        assert classify(('7', '7', '7')).is_pair is False

    def test_cards_kept_in_order(self):
        assert classify(['6', 'A', '3']).cards == ('6', 'A', '3')

    def test_accepts_list(self):
        assert classify(['10', '6']) == hand('10', '6')

    def test_unknown_rank_raises(self):
        with pytest.raises(ValueError):
            classify(('10', 'X'))

    @pytest.mark.parametrize("n", [2, 3, 4, 5])
    def test_no_ace_sequences_are_hard_sums(self, n):
        # Every no-ace sequence that stays <= 21 is hard and sums arithmetically.
        values = {'J': 10, 'Q': 10, 'K': 10}
        for combo in itertools.combinations_with_replacement(['2', '3', '5', '7', '10', 'K'], n):
            expected = sum(values.get(r, 0) or int(r) for r in combo)
            if expected > 21:
                continue
            result = classify(combo)
            assert result.total == expected
            assert result.is_soft is False

    @pytest.mark.parametrize("others", [('2',), ('9',), ('5', '5'), ('2', '3', '4'), ('A',)])
    def test_ace_counted_high_is_soft(self, others):
        # 11 + sum(others counted low) <= 21 keeps an ace high.
        result = classify(('A',) + others)
        assert result.is_soft is True
        assert result.total <= 21


# ─── Hand ─────────────────────────────────────────────────────────────────────

class TestHand:
    def test_pair_value(self):
        assert hand('8', '8').pair_value == 8
        assert hand('K', '10').pair_value == 10
        assert hand('A', 'A').pair_value == 11

    def test_pair_value_none_for_non_pair(self):
        assert hand('8', '9').pair_value is None

    def test_label(self):
        assert hand('A', '7').label == "Soft 18"
        assert hand('8', '8').label == "Hard 16 (Pair)"

    def test_str_includes_cards(self):
        assert str(hand('10', '6')) == "10,6 (Hard 16)"

    def test_with_card_reclassifies(self):
        start = hand('A', '6')
        assert start.is_soft is True
        drawn = start.with_card('9')
        assert drawn.cards == ('A', '6', '9')
        assert drawn.total == 16
        assert drawn.is_soft is False
        assert start.cards == ('A', '6')

    def test_with_card_on_total_mode_hand_raises(self):
        with pytest.raises(ValueError, match="total-mode"):
            hand_from_total(12).with_card('5')

    def test_frozen(self):
        with pytest.raises(AttributeError):
            hand('10', '6').total = 17  # type: ignore[misc]

    def test_hashable(self):
        assert len({hand('10', '6'), hand('10', '6')}) == 1


class TestTotalMode:
    def test_fields(self):
        result = hand_from_total(17, is_soft=True)
        assert result == Hand(total=17, is_soft=True, is_pair=False, cards=())

    def test_never_pair(self):
        assert hand_from_total(16).is_pair is False
        assert hand_from_total(16).pair_value is None

    def test_default_hard(self):
        assert hand_from_total(12).is_soft is False

    def test_str(self):
        assert str(hand_from_total(13, True)) == "Soft 13"


# ─── Helpers ──────────────────────────────────────────────────────────────────

class TestHelpers:
    def test_is_pair(self):
        assert is_pair(('5', '5'))
        assert not is_pair(('5',))
        assert not is_pair(('5', '5', '5'))

    def test_is_bust(self):
        assert not is_bust(21)
        assert is_bust(22)

    def test_blackjack_needs_two_cards(self):
        assert is_blackjack(hand('A', 'K'))
        assert not is_blackjack(hand('7', '7', '7'))
        assert not is_blackjack(hand_from_total(21, is_soft=True))

    def test_all_two_card_non_ace_pairs_detected(self):
        for a, b in itertools.product(NON_ACE_RANKS, repeat=2):
            expected = (min(int(a) if a.isdigit() else 10, 10) == min(int(b) if b.isdigit() else 10, 10))
            assert classify((a, b)).is_pair is expected
