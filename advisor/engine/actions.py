"""
Player actions, advice results, and available-action sets.

HIT and STAND are always available.  DOUBLE, SPLIT and SURRENDER are gated
by table-rule toggles owned by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class Action(Enum):
    """Actions the strategy engine can recommend."""

    HIT = "HIT"
    STAND = "STAND"
    DOUBLE = "DOUBLE"
    SPLIT = "SPLIT"
    SURRENDER = "SURRENDER"


class Outcome(Enum):
    """Terminal hand states reported by the query boundary, never by the engine."""

    BUST = "BUST"
    BLACKJACK = "BLACKJACK"


ALWAYS_AVAILABLE: frozenset[Action] = frozenset({Action.HIT, Action.STAND})
OPTIONAL_ACTIONS: tuple[Action, ...] = (Action.DOUBLE, Action.SPLIT, Action.SURRENDER)

# Single-letter codes used by charts and printed reports.
ACTION_CODES: dict[Action, str] = {
    Action.HIT: "H",
    Action.STAND: "S",
    Action.DOUBLE: "D",
    Action.SPLIT: "P",
    Action.SURRENDER: "R",
}

# Stable integer index per action (chart matrices store these).
ACTION_INDEX: dict[Action, int] = {a: i for i, a in enumerate(Action)}


@dataclass(frozen=True)
class Advice:
    """Recommended action plus a human-readable rationale."""
    action: Action | Outcome
    explanation: str

    @property
    def label(self) -> str:
        return self.action.value


def parse_action(name: str | Action) -> Action:
    """Convert 'double' / 'DOUBLE' / Action.DOUBLE to Action.DOUBLE.

    Examples:
        >>> parse_action('surrender')
        <Action.SURRENDER: 'SURRENDER'>
    """
    if isinstance(name, Action):
        return name
    try:
        return Action(str(name).strip().upper())
    except ValueError:
        raise ValueError(f"Unknown action: {name!r}") from None


def available_actions(names: Iterable[str | Action] = ()) -> frozenset[Action]:
    """Return the available-action set, always including HIT and STAND.

    Examples:
        >>> sorted(a.value for a in available_actions(['double']))
        ['DOUBLE', 'HIT', 'STAND']
    """
    return ALWAYS_AVAILABLE | frozenset(parse_action(n) for n in names)


def action_key(actions: Iterable[Action]) -> tuple[str, ...]:
    """Sorted action names — the order-independent form used in cache keys."""
    return tuple(sorted(a.value for a in actions))
