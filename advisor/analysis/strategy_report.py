"""Printed strategy charts and session summaries.

Four public functions write plain-text tables to stdout:

    print_hard_chart(engine, actions)   — hard totals 4–21 × dealer 2–A
    print_soft_chart(engine, actions)   — soft totals 13–21 × dealer 2–A
    print_pair_chart(engine, actions)   — pairs 2,2 … A,A × dealer 2–A
    print_session_summary(log)          — query statistics + recent history

Chart cells use single-letter action codes (H, S, D, P, R).
"""

from __future__ import annotations

from typing import Iterable

from advisor.analysis.heat_maps import FULL_RULES, build_advice_grid, column_labels, row_labels
from advisor.analysis.session_log import SessionLog
from advisor.engine.actions import ACTION_CODES, Action
from advisor.engine.decision import StrategyEngine

_RULE = "=" * 56


def _legend() -> str:
    return "  " + "  ".join(f"{code}={a.value}" for a, code in ACTION_CODES.items())


def format_chart(
    kind: str,
    engine: StrategyEngine | None = None,
    actions: Iterable[Action] = FULL_RULES,
) -> list[str]:
    """Return the text lines of one chart (no title)."""
    grid = build_advice_grid(kind, engine, tuple(actions))
    header = f"  {'Hand':>5} | " + " ".join(f"{d:>2}" for d in column_labels())
    lines = [header, f"  {'-----':>5}-+-" + "-" * (3 * len(column_labels()) - 1)]
    for label, row in zip(row_labels(kind), grid):
        cells = " ".join(f"{ACTION_CODES[advice.action]:>2}" for advice in row)
        lines.append(f"  {label:>5} | {cells}")
    return lines


def _print_chart(title: str, kind: str, engine: StrategyEngine | None, actions: Iterable[Action]) -> None:
    print(_RULE)
    print(title)
    print(_RULE)
    for line in format_chart(kind, engine, actions):
        print(line)
    print(_legend())
    print()


def print_hard_chart(engine: StrategyEngine | None = None, actions: Iterable[Action] = FULL_RULES) -> None:
    """Print the hard-total chart."""
    _print_chart("Hard Totals  (player total vs dealer upcard)", "hard", engine, actions)


def print_soft_chart(engine: StrategyEngine | None = None, actions: Iterable[Action] = FULL_RULES) -> None:
    """Print the soft-total chart."""
    _print_chart("Soft Totals  (ace counted as 11)", "soft", engine, actions)


def print_pair_chart(engine: StrategyEngine | None = None, actions: Iterable[Action] = FULL_RULES) -> None:
    """Print the pair chart.  Non-split cells show the action the hand plays as."""
    actions = tuple(actions)
    split = "split available" if Action.SPLIT in actions else "split not allowed"
    _print_chart(f"Pairs  ({split})", "pairs", engine, actions)


def print_session_summary(log: SessionLog) -> None:
    """Print query statistics and the recent hand history.

    Args:
        log: SessionLog of the current advisor session.
    """
    stats = log.stats
    print(_RULE)
    print("Session Statistics")
    print(_RULE)
    print(f"  Total queries: {stats.total_queries}")
    print(f"  {'Action':<10}  {'Count':>5}  {'Share':>6}")
    print(f"  {'------':<10}  {'-----':>5}  {'------':>6}")
    for action in Action:
        count = stats.action_counts.get(action.value, 0)
        print(f"  {action.value:<10}  {count:>5}  {stats.share(action) * 100:>5.1f}%")
    print()

    print(_RULE)
    print(f"Recent Hands  (newest first, max {log.history.limit})")
    print(_RULE)
    if not log.history.entries:
        print("  (no history yet)")
    for entry in log.history.entries:
        print(f"  {entry}")
    print()


# ─── Entry point ──────────────────────────────────────────────────────────────

if __name__ == "__main__":
    print_hard_chart()
    print_soft_chart()
    print_pair_chart()
