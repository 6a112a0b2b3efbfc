"""Tests for advisor/engine/cards.py — rank values and normalisation."""

from __future__ import annotations

import pytest

from advisor.engine.cards import (
    DEALER_UPCARDS,
    RANK_NAMES,
    RANK_VALUES,
    card_value,
    hand_to_str,
    normalize_rank,
    rank_for_value,
)


class TestCardValue:
    @pytest.mark.parametrize("rank", ['2', '3', '4', '5', '6', '7', '8', '9', '10'])
    def test_number_cards_face_value(self, rank):
        assert card_value(rank) == int(rank)

    @pytest.mark.parametrize("rank", ['J', 'Q', 'K'])
    def test_face_cards_worth_ten(self, rank):
        assert card_value(rank) == 10

    def test_ace_worth_eleven(self):
        assert card_value('A') == 11

    def test_unknown_rank_raises(self):
        with pytest.raises(ValueError, match="Unknown card rank"):
            card_value('X')

    def test_lower_case_not_accepted_without_normalising(self):
        with pytest.raises(ValueError):
            card_value('k')


class TestRankTables:
    def test_thirteen_ranks(self):
        assert len(RANK_NAMES) == 13
        assert set(RANK_NAMES) == set(RANK_VALUES)

    def test_dealer_columns_match_values(self):
        assert [card_value(r) for r in DEALER_UPCARDS] == list(range(2, 12))


class TestNormalizeRank:
    def test_canonical_ranks_unchanged(self):
        for rank in RANK_NAMES:
            assert normalize_rank(rank) == rank

    def test_lower_case_face(self):
        assert normalize_rank('q') == 'Q'
        assert normalize_rank('a') == 'A'

    def test_int_input(self):
        assert normalize_rank(7) == '7'
        assert normalize_rank(10) == '10'

    def test_t_means_ten(self):
        assert normalize_rank('T') == '10'

    def test_eleven_means_ace(self):
        assert normalize_rank(11) == 'A'

    def test_whitespace_stripped(self):
        assert normalize_rank(' 9 ') == '9'

    @pytest.mark.parametrize("bad", ['0', '12', 'X', '', 'joker'])
    def test_unknown_symbols_raise(self, bad):
        with pytest.raises(ValueError):
            normalize_rank(bad)


class TestRankForValue:
    def test_round_trip_for_dealer_values(self):
        for value in range(2, 12):
            assert card_value(rank_for_value(value)) == value

    def test_eleven_is_ace(self):
        assert rank_for_value(11) == 'A'

    def test_out_of_range_raises(self):
        with pytest.raises(ValueError):
            rank_for_value(1)
        with pytest.raises(ValueError):
            rank_for_value(12)


def test_hand_to_str():
    assert hand_to_str(('10', '6')) == '10,6'
