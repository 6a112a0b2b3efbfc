"""
Query boundary between a user-facing caller and the strategy engine.

advise() owns everything the engine deliberately does not:

    1. Input validation   — dealer card present, 2-5 known ranks (cards mode)
                            or a total in 4-21 (total mode).
    2. Bust short-circuit — cards totalling over 21 return Outcome.BUST.
    3. Blackjack          — two cards totalling 21 return Outcome.BLACKJACK.
    4. Action gating      — HIT/STAND always; SPLIT dropped for non-pairs.
    5. Delegation         — StrategyEngine.decide().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from advisor.engine.actions import Action, Advice, Outcome, available_actions
from advisor.engine.cards import normalize_rank
from advisor.engine.decision import StrategyEngine, default_engine
from advisor.engine.hand import Hand, classify, hand_from_total, is_blackjack, is_bust

MIN_CARDS: int = 2
MAX_CARDS: int = 5
MIN_TOTAL: int = 4
MAX_TOTAL: int = 21

BUST_ADVICE = Advice(Outcome.BUST, "The hand is already bust (over 21); no action is possible.")
BLACKJACK_ADVICE = Advice(Outcome.BLACKJACK, "Blackjack! You hold the perfect hand.")


class InvalidQueryError(ValueError):
    """A query the engine must not see (missing dealer card, bad card count, ...)."""


@dataclass(frozen=True)
class Scenario:
    """A preset query offered as a one-click example."""
    name: str
    dealer: str
    cards: tuple[str, ...]


QUICK_SCENARIOS: list[Scenario] = [
    Scenario("Hard 16 vs 10", "10", ('10', '6')),
    Scenario("Soft 18 vs 9", "9", ('A', '7')),
    Scenario("Pair 8s vs A", "A", ('8', '8')),
    Scenario("Hard 11 vs 6", "6", ('5', '6')),
]


def _validated_rank(symbol: str | int | None, what: str) -> str:
    if symbol is None or str(symbol).strip() == "":
        raise InvalidQueryError(f"Select a {what} first.")
    try:
        return normalize_rank(symbol)
    except ValueError as exc:
        raise InvalidQueryError(str(exc)) from None


def build_hand(
    *,
    cards: Iterable[str | int] | None = None,
    total: int | None = None,
    is_soft: bool = False,
) -> Hand:
    """Validate caller input and build a Hand in cards or total mode.

    Exactly one of *cards* / *total* must be given.

    Raises:
        InvalidQueryError: On a bad card count, unknown rank, or out-of-range total.
    """
    if cards is not None and total is not None:
        raise InvalidQueryError("Give either cards or a total, not both.")

    if cards is not None:
        ranks = tuple(_validated_rank(c, "card") for c in cards)
        if len(ranks) < MIN_CARDS:
            raise InvalidQueryError(f"Select at least {MIN_CARDS} cards.")
        if len(ranks) > MAX_CARDS:
            raise InvalidQueryError(f"A hand holds at most {MAX_CARDS} cards.")
        return classify(ranks)

    if total is None:
        raise InvalidQueryError("Give the player's cards or hand total.")
    if not MIN_TOTAL <= total <= MAX_TOTAL:
        raise InvalidQueryError(f"Enter a valid total ({MIN_TOTAL}-{MAX_TOTAL}).")
    return hand_from_total(total, is_soft)


def gate_actions(hand: Hand, requested: Iterable[str | Action]) -> frozenset[Action]:
    """Normalise requested actions and drop SPLIT when the hand is not a pair."""
    try:
        allowed = available_actions(requested)
    except ValueError as exc:
        raise InvalidQueryError(str(exc)) from None
    if not hand.is_pair:
        allowed = allowed - {Action.SPLIT}
    return allowed


def advise_hand(
    hand: Hand,
    dealer_card: str | int | None,
    actions: Iterable[str | Action] = (),
    engine: StrategyEngine | None = None,
) -> Advice:
    """Short-circuit terminal hands, then ask the engine."""
    dealer = _validated_rank(dealer_card, "dealer card")

    if is_bust(hand.total):
        return BUST_ADVICE
    if is_blackjack(hand):
        return BLACKJACK_ADVICE

    engine = engine or default_engine()
    return engine.decide(hand, dealer, gate_actions(hand, actions))


def advise(
    dealer_card: str | int | None,
    *,
    cards: Iterable[str | int] | None = None,
    total: int | None = None,
    is_soft: bool = False,
    actions: Iterable[str | Action] = (),
    engine: StrategyEngine | None = None,
) -> Advice:
    """Validate a user query and return advice for it.

    Examples:
        >>> advise('10', cards=['10', '6'], actions=['surrender']).action
        <Action.SURRENDER: 'SURRENDER'>
        >>> advise('6', total=11, actions=['double']).action
        <Action.DOUBLE: 'DOUBLE'>
        >>> advise('9', cards=['A', 'K']).action
        <Outcome.BLACKJACK: 'BLACKJACK'>
    """
    _validated_rank(dealer_card, "dealer card")
    hand = build_hand(cards=cards, total=total, is_soft=is_soft)
    return advise_hand(hand, dealer_card, actions, engine)
