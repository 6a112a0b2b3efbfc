"""
Card rank constants, value lookup, and rank normalisation.

Ranks are plain strings at every boundary:
    '2' .. '10', 'J', 'Q', 'K', 'A'

Value mapping:
    2-10 -> face value, J/Q/K -> 10, A -> 11 (hand.classify demotes aces to 1)

Suits play no part in strategy and are never represented.
"""

from __future__ import annotations

RANK_NAMES: list[str] = ['2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K', 'A']

RANK_VALUES: dict[str, int] = {
    '2': 2, '3': 3, '4': 4, '5': 5, '6': 6, '7': 7, '8': 8, '9': 9, '10': 10,
    'J': 10, 'Q': 10, 'K': 10, 'A': 11,
}

RANK_ACE: str = 'A'
ACE_HIGH: int = 11
ACE_DEMOTION: int = 10  # 11 -> 1

# Dealer upcards in chart column order (2 .. 10, then A).
DEALER_UPCARDS: list[str] = ['2', '3', '4', '5', '6', '7', '8', '9', '10', 'A']

_ALIASES: dict[str, str] = {'T': '10', '1': 'A', '11': 'A'}


def normalize_rank(symbol: str | int) -> str:
    """Return the canonical rank string for a loosely-typed card symbol.

    Accepts ints, surrounding whitespace, lower-case face letters and the
    common 'T' shorthand for ten.  Unknown symbols raise ValueError.

    Examples:
        >>> normalize_rank('k')
        'K'
        >>> normalize_rank(10)
        '10'
        >>> normalize_rank('T')
        '10'
    """
    rank = str(symbol).strip().upper()
    rank = _ALIASES.get(rank, rank)
    if rank not in RANK_VALUES:
        raise ValueError(f"Unknown card rank: {symbol!r}")
    return rank


def card_value(rank: str) -> int:
    """Return the numeric value of a rank, counting an ace as 11.

    Examples:
        >>> card_value('7')
        7
        >>> card_value('Q')
        10
        >>> card_value('A')
        11
    """
    try:
        return RANK_VALUES[rank]
    except KeyError:
        raise ValueError(f"Unknown card rank: {rank!r}") from None


def is_ace(rank: str) -> bool:
    return rank == RANK_ACE


def rank_for_value(value: int) -> str:
    """Return a representative rank for a numeric value (10 -> '10', 11 -> 'A').

    Examples:
        >>> rank_for_value(11)
        'A'
        >>> rank_for_value(10)
        '10'
    """
    if value == ACE_HIGH:
        return RANK_ACE
    if 2 <= value <= 10:
        return str(value)
    raise ValueError(f"No card rank has value {value}")


def hand_to_str(cards: tuple[str, ...]) -> str:
    """Join ranks for display.

    Examples:
        >>> hand_to_str(('A', '7'))
        'A,7'
    """
    return ','.join(cards)
