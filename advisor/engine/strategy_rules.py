"""
Basic strategy rules as rule tables.

Three tables map a hand key to a rule closure:

    PAIR_RULES  — pair value (2..11)  -> rule(pair_value, dealer, actions)
    SOFT_RULES  — soft total (13..19) -> rule(total, dealer, actions)
    HARD_RULES  — hard total (9..16)  -> rule(total, dealer, actions)

Totals outside a table's keys are covered by explicit edge rules
(hard <=8 HIT / >=17 STAND, soft <=12 HIT / >=20 STAND), so every total a
hand can have resolves to exactly one rule.  Each rule checks its
conditions top to bottom; the first match wins.

Dealer values are numeric: 2..10, ace = 11.
"""

from __future__ import annotations

from typing import Callable

from advisor.engine.actions import Action, Advice

Rule = Callable[[int, int, frozenset[Action]], Advice]

HARD_TOTALS: range = range(4, 22)
SOFT_TOTALS: range = range(13, 22)
PAIR_VALUES: range = range(2, 12)


def _between(value: int, low: int, high: int) -> bool:
    return low <= value <= high


# ─── Hard totals ──────────────────────────────────────────────────────────────


def _hard_stand(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    return Advice(Action.STAND, f"{total} is high enough; the risk of busting is too great.")


def _hard_16(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    if dealer >= 9 and Action.SURRENDER in actions:
        return Advice(Action.SURRENDER, "16 against 9-A is very unfavourable; surrender limits the loss.")
    if _between(dealer, 2, 6):
        return Advice(Action.STAND, "The dealer is likely to bust; stand on 16.")
    return Advice(Action.HIT, "16 is weak against a strong dealer card; take the risk.")


def _hard_15(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    if dealer == 10 and Action.SURRENDER in actions:
        return Advice(Action.SURRENDER, "15 against 10 is very unfavourable; surrender is the best option.")
    if _between(dealer, 2, 6):
        return Advice(Action.STAND, "The dealer can easily bust; stand.")
    return Advice(Action.HIT, "15 is too weak; take the risk.")


def _hard_13_14(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    if _between(dealer, 2, 6):
        return Advice(Action.STAND, "The dealer shows a weak card; let the dealer bust.")
    return Advice(Action.HIT, f"{total} is too low against a strong dealer card.")


def _hard_12(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    if _between(dealer, 4, 6):
        return Advice(Action.STAND, "The dealer has the highest bust chance; stand.")
    return Advice(Action.HIT, "12 is too low; only a ten-value card busts you.")


def _hard_11(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    if Action.DOUBLE in actions:
        return Advice(Action.DOUBLE, "11 is ideal for doubling; a good chance of reaching 21.")
    return Advice(Action.HIT, "11 cannot bust; take a card.")


def _hard_10(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    if _between(dealer, 2, 9) and Action.DOUBLE in actions:
        return Advice(Action.DOUBLE, "10 is strong for doubling against this dealer card.")
    return Advice(Action.HIT, "10 cannot bust; take a card.")


def _hard_9(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    if _between(dealer, 3, 6) and Action.DOUBLE in actions:
        return Advice(Action.DOUBLE, "Double 9 against a weak dealer card.")
    return Advice(Action.HIT, "9 is too low; keep drawing.")


def _hard_low(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    return Advice(Action.HIT, "The hand is too low to bust; keep drawing.")


HARD_RULES: dict[int, Rule] = {
    16: _hard_16,
    15: _hard_15,
    14: _hard_13_14,
    13: _hard_13_14,
    12: _hard_12,
    11: _hard_11,
    10: _hard_10,
    9: _hard_9,
}


def hard_rule_for(total: int) -> Rule:
    """Return the rule governing a hard total (edge rules outside the table)."""
    if total >= 17:
        return _hard_stand
    return HARD_RULES.get(total, _hard_low)


def hard_decision(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    """Resolve a hard total.

    Args:
        total:   Hard hand total (contract: 4-21).
        dealer:  Dealer upcard value (2-11).
        actions: Available actions; DOUBLE and SURRENDER are consulted.

    Returns:
        Advice for the hand.
    """
    return hard_rule_for(total)(total, dealer, actions)


# ─── Soft totals ──────────────────────────────────────────────────────────────


def _soft_stand(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    return Advice(Action.STAND, f"Soft {total} is almost unbeatable; stand.")


def _soft_19(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    if dealer == 6 and Action.DOUBLE in actions:
        return Advice(Action.DOUBLE, "Double soft 19 against a 6; the dealer busts often.")
    return Advice(Action.STAND, "Soft 19 is strong; stand.")


def _soft_18(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    if dealer >= 9:
        return Advice(Action.HIT, "Soft 18 is weak against 9-A; try to improve.")
    if _between(dealer, 3, 6) and Action.DOUBLE in actions:
        return Advice(Action.DOUBLE, "Double soft 18 against a weak dealer card.")
    return Advice(Action.STAND, "Soft 18 holds up against this dealer card.")


def _soft_17(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    if _between(dealer, 3, 6) and Action.DOUBLE in actions:
        return Advice(Action.DOUBLE, "Double soft 17 against a weak dealer card; one card cannot bust it.")
    return Advice(Action.HIT, "Soft 17 is weak; take a card, it cannot bust.")


def _soft_15_16(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    if _between(dealer, 4, 6) and Action.DOUBLE in actions:
        return Advice(Action.DOUBLE, "Double against a dealer 4-6.")
    return Advice(Action.HIT, "The hand is too weak; draw, it cannot bust.")


def _soft_13_14(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    if dealer in (5, 6) and Action.DOUBLE in actions:
        return Advice(Action.DOUBLE, "Double against the weakest dealer cards.")
    return Advice(Action.HIT, "The hand is weak; keep drawing.")


def _soft_low(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    return Advice(Action.HIT, "The hand is too low; keep drawing.")


SOFT_RULES: dict[int, Rule] = {
    19: _soft_19,
    18: _soft_18,
    17: _soft_17,
    16: _soft_15_16,
    15: _soft_15_16,
    14: _soft_13_14,
    13: _soft_13_14,
}


def soft_rule_for(total: int) -> Rule:
    """Return the rule governing a soft total (edge rules outside the table)."""
    if total >= 20:
        return _soft_stand
    return SOFT_RULES.get(total, _soft_low)


def soft_decision(total: int, dealer: int, actions: frozenset[Action]) -> Advice:
    """Resolve a soft total.  Only DOUBLE availability matters here."""
    return soft_rule_for(total)(total, dealer, actions)


# ─── Pairs ────────────────────────────────────────────────────────────────────


def _split_when(low: int, high: int, split_reason: str, hit_reason: str) -> Rule:
    """Build a 'SPLIT if dealer in [low, high], else HIT' rule."""

    def rule(pair_value: int, dealer: int, actions: frozenset[Action]) -> Advice:
        if _between(dealer, low, high):
            return Advice(Action.SPLIT, split_reason)
        return Advice(Action.HIT, hit_reason)

    return rule


def _pair_aces(pair_value: int, dealer: int, actions: frozenset[Action]) -> Advice:
    return Advice(Action.SPLIT, "Always split aces; two chances at a strong hand.")


def _pair_tens(pair_value: int, dealer: int, actions: frozenset[Action]) -> Advice:
    return Advice(Action.STAND, "20 is too good a hand to split.")


def _pair_nines(pair_value: int, dealer: int, actions: frozenset[Action]) -> Advice:
    if dealer == 7 or dealer >= 10:
        return Advice(Action.STAND, "18 is strong enough against this dealer card.")
    return Advice(Action.SPLIT, "Split 9s against weaker dealer cards for more profit.")


def _pair_eights(pair_value: int, dealer: int, actions: frozenset[Action]) -> Advice:
    return Advice(Action.SPLIT, "Always split 8s; 16 is a poor hand, two hands starting at 8 are better.")


def _pair_fives(pair_value: int, dealer: int, actions: frozenset[Action]) -> Advice:
    return hard_decision(10, dealer, actions)


def _pair_fallback(pair_value: int, dealer: int, actions: frozenset[Action]) -> Advice:
    return hard_decision(pair_value * 2, dealer, actions)


PAIR_RULES: dict[int, Rule] = {
    11: _pair_aces,
    10: _pair_tens,
    9: _pair_nines,
    8: _pair_eights,
    7: _split_when(2, 7, "Split 7s against weaker dealer cards.", "14 is too weak; take a card."),
    6: _split_when(2, 6, "Split 6s while the dealer is weak (high bust chance).",
                   "12 is too weak against a strong dealer card."),
    5: _pair_fives,
    4: _split_when(5, 6, "Split 4s only against the weakest dealer cards.", "8 is too low; take a card."),
    3: _split_when(2, 7, "Split 3s against weaker dealer cards.", "6 is too low against a strong dealer card."),
    2: _split_when(2, 7, "Split 2s against weaker dealer cards.", "4 is too low; draw until 12 or more."),
}


def pair_rule_for(pair_value: int) -> Rule:
    """Return the rule for a pair value; unknown values play as the doubled hard total."""
    return PAIR_RULES.get(pair_value, _pair_fallback)


def pair_decision(pair_value: int, dealer: int, actions: frozenset[Action]) -> Advice:
    """Resolve a pair.

    The result may be a non-split action (tens STAND, fives delegate to hard
    10); the dispatcher only short-circuits on SPLIT.
    """
    return pair_rule_for(pair_value)(pair_value, dealer, actions)
