"""
Strategy decision engine: dispatch and memoisation.

Every query is reduced to a canonical key first; the advice is a pure
function of that key (resolve_key).  Dispatch precedence in resolve_key():
    1. Pair rules — only when the hand is a pair AND split is available,
       and only a SPLIT result is returned from this step.
    2. Soft rules when the hand is soft.
    3. Hard rules otherwise.

StrategyEngine memoises resolve_key with functools.lru_cache.  The cache is
a latency optimisation only: StrategyEngine(cache_size=0) runs the same
function uncached and returns identical advice.
"""

from __future__ import annotations

import functools
import logging
from typing import Iterable

from advisor.engine.actions import Action, Advice, action_key, available_actions
from advisor.engine.cards import ACE_HIGH, card_value, normalize_rank
from advisor.engine.hand import Hand
from advisor.engine.strategy_rules import hard_decision, pair_decision, soft_decision

LOGGER = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE: int = 512

# (total, is_soft, is_pair, dealer_value, sorted action names)
CacheKey = tuple[int, bool, bool, int, tuple[str, ...]]


def canonical_key(hand: Hand, dealer_value: int, actions: Iterable[Action]) -> CacheKey:
    """Return the order-independent cache key for a query.

    The pair flag is set only for hands whose pair value is known (two
    cards), since only those can reach the pair rules.  A pair's total and
    softness then determine its pair value, so no rank is needed in the key.

    Examples:
        >>> from advisor.engine.hand import hand_from_total
        >>> canonical_key(hand_from_total(16), 10, [Action.STAND, Action.HIT])
        (16, False, False, 10, ('HIT', 'STAND'))
    """
    return (hand.total, hand.is_soft, hand.pair_value is not None, dealer_value, action_key(actions))


def _pair_value_of(total: int, is_soft: bool) -> int:
    # A soft pair can only be A,A.
    return ACE_HIGH if is_soft else total // 2


def resolve_key(key: CacheKey) -> Advice:
    """Resolve a canonical key to Advice (no caching).

    Examples:
        >>> resolve_key((16, False, True, 11, ('HIT', 'SPLIT', 'STAND'))).action
        <Action.SPLIT: 'SPLIT'>
    """
    total, is_soft, is_pair, dealer_value, names = key
    allowed = frozenset(Action(name) for name in names)

    if is_pair and Action.SPLIT in allowed:
        pair_value = _pair_value_of(total, is_soft)
        advice = pair_decision(pair_value, dealer_value, allowed)
        if advice.action == Action.SPLIT:
            LOGGER.debug("resolving %s: pair %d -> SPLIT", key, pair_value)
            return advice

    if is_soft:
        LOGGER.debug("resolving %s: soft rules", key)
        return soft_decision(total, dealer_value, allowed)

    LOGGER.debug("resolving %s: hard rules", key)
    return hard_decision(total, dealer_value, allowed)


class StrategyEngine:
    """Maps (hand, dealer upcard, available actions) to basic-strategy Advice.

    Args:
        cache_size: Maximum number of memoised decisions (LRU eviction).
                    0 disables the cache entirely.

    Raises:
        ValueError: If cache_size is negative.
    """

    def __init__(self, cache_size: int = DEFAULT_CACHE_SIZE) -> None:
        if cache_size < 0:
            raise ValueError(f"cache_size must be >= 0, got {cache_size}")
        self.cache_size = cache_size
        self._lookup = functools.lru_cache(maxsize=cache_size)(resolve_key)

    @property
    def caching(self) -> bool:
        return self.cache_size > 0

    def cache_info(self):
        """Named tuple of hits / misses / maxsize / currsize for the decision cache."""
        return self._lookup.cache_info()

    def cache_clear(self) -> None:
        self._lookup.cache_clear()

    def decide(
        self,
        hand: Hand,
        dealer_card: str,
        actions: Iterable[str | Action] = (),
    ) -> Advice:
        """Return the basic-strategy advice for a hand.

        Args:
            hand:        Classified hand (cards or total mode).  Totals outside
                         4-21 are outside the contract.
            dealer_card: Dealer upcard rank, e.g. '10', 'K', 'A'.
            actions:     Available action names; HIT and STAND are implied.

        Returns:
            Advice with one of the five Actions.  Split requested for a
            non-pair hand is ignored.
        """
        dealer_value = card_value(normalize_rank(dealer_card))
        key = canonical_key(hand, dealer_value, available_actions(actions))
        return self._lookup(key)


_DEFAULT_ENGINE: StrategyEngine | None = None


def default_engine() -> StrategyEngine:
    """Process-wide engine shared by the query boundary and the charts."""
    global _DEFAULT_ENGINE
    if _DEFAULT_ENGINE is None:
        _DEFAULT_ENGINE = StrategyEngine()
    return _DEFAULT_ENGINE


def decide(hand: Hand, dealer_card: str, actions: Iterable[str | Action] = ()) -> Advice:
    """Module-level shortcut for default_engine().decide()."""
    return default_engine().decide(hand, dealer_card, actions)
