"""
Shared pytest fixtures for blackjack advisor tests.

Provides helpers for building known hands and the action sets the tests use
most often.
"""

from __future__ import annotations

import pytest

from advisor.engine.actions import Action
from advisor.engine.decision import StrategyEngine
from advisor.engine.hand import Hand, classify, hand_from_total

ALL_OPTIONAL: tuple[Action, ...] = (Action.DOUBLE, Action.SPLIT, Action.SURRENDER)


def hand(*ranks: str) -> Hand:
    """Build a cards-mode hand from rank strings.

    Examples:
        >>> hand('A', '7').total
        18
    """
    return classify(ranks)


def hard(total: int) -> Hand:
    return hand_from_total(total, is_soft=False)


def soft(total: int) -> Hand:
    return hand_from_total(total, is_soft=True)


@pytest.fixture
def engine() -> StrategyEngine:
    """A fresh engine with its own cache."""
    return StrategyEngine()


@pytest.fixture
def uncached_engine() -> StrategyEngine:
    """An engine with caching disabled."""
    return StrategyEngine(cache_size=0)


@pytest.fixture
def h():
    """Expose the hand() helper as a fixture for convenience."""
    return hand
