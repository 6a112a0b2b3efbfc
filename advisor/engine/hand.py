"""
Hand classification: total, softness, and pair detection.

Two input modes produce the same Hand type:
    cards mode — classify(cards) derives total / is_soft / is_pair from 2-5 ranks.
    total mode — hand_from_total(total, is_soft) trusts the caller; never a pair.

Ace handling: every ace starts at 11; while the hand busts and an ace is
still counted high, that ace is demoted to 1 (subtract 10).
"""

from __future__ import annotations

from dataclasses import dataclass

from advisor.engine.cards import ACE_DEMOTION, card_value, hand_to_str, is_ace


@dataclass(frozen=True)
class Hand:
    """Immutable player hand as seen by the strategy engine.

    Frozen (hashable) so it can take part in cache keys.  `cards` is empty
    for total-mode hands.
    """
    total: int
    is_soft: bool
    is_pair: bool
    cards: tuple[str, ...] = ()

    @property
    def pair_value(self) -> int | None:
        """Numeric value of one card of the pair, or None for non-pairs."""
        if not self.is_pair or not self.cards:
            return None
        return card_value(self.cards[0])

    @property
    def label(self) -> str:
        """Short display label, e.g. 'Soft 18' or 'Hard 16 (Pair)'."""
        kind = "Soft" if self.is_soft else "Hard"
        suffix = " (Pair)" if self.is_pair else ""
        return f"{kind} {self.total}{suffix}"

    def with_card(self, rank: str) -> Hand:
        """Return a new hand with *rank* appended.

        Raises:
            ValueError: For a total-mode hand, which has no cards to extend.
        """
        if not self.cards:
            raise ValueError(f"Cannot draw onto a total-mode hand ({self.label})")
        return classify(self.cards + (rank,))

    def __str__(self) -> str:
        if self.cards:
            return f"{hand_to_str(self.cards)} ({self.label})"
        return self.label


def hand_totals(cards: tuple[str, ...] | list[str]) -> tuple[int, bool]:
    """Return (total, is_soft) for a sequence of ranks.

    Examples:
        >>> hand_totals(('A', '7'))
        (18, True)
        >>> hand_totals(('A', 'A', '9'))
        (21, True)
        >>> hand_totals(('A', '7', '8'))
        (16, False)
    """
    total = 0
    soft_aces = 0
    for rank in cards:
        total += card_value(rank)
        if is_ace(rank):
            soft_aces += 1

    while total > 21 and soft_aces > 0:
        total -= ACE_DEMOTION
        soft_aces -= 1

    return total, soft_aces > 0 and total <= 21


def is_pair(cards: tuple[str, ...] | list[str]) -> bool:
    """Two cards of equal numeric value ('10' and 'K' count as a pair).

    Examples:
        >>> is_pair(('10', 'K'))
        True
        >>> is_pair(('8', '8', '8'))
        False
    """
    return len(cards) == 2 and card_value(cards[0]) == card_value(cards[1])


def classify(cards: tuple[str, ...] | list[str]) -> Hand:
    """Build a Hand from ranks (cards mode).

    Card-count validation (2-5 cards) belongs to the caller; any non-empty
    sequence of known ranks classifies.

    Examples:
        >>> classify(('A', 'A'))
        Hand(total=12, is_soft=True, is_pair=True, cards=('A', 'A'))
    """
    cards = tuple(cards)
    total, soft = hand_totals(cards)
    return Hand(total=total, is_soft=soft, is_pair=is_pair(cards), cards=cards)


def hand_from_total(total: int, is_soft: bool = False) -> Hand:
    """Build a Hand from a pre-classified total (total mode)."""
    return Hand(total=total, is_soft=is_soft, is_pair=False)


def is_bust(total: int) -> bool:
    return total > 21


def is_blackjack(hand: Hand) -> bool:
    """Natural 21: exactly two cards totalling 21."""
    return len(hand.cards) == 2 and hand.total == 21
