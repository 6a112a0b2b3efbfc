"""Query statistics and hand history for an advisor session.

    QueryStats  — total queries + per-action counts
    HandHistory — newest-first log of recent queries, capped at HISTORY_LIMIT
    SessionLog  — both of the above plus the preferred input mode, with
                  JSON save/load

Only engine advice (the five Actions) is counted; BUST / BLACKJACK
short-circuits are never recorded.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path

from advisor.engine.actions import Action, Advice, Outcome
from advisor.engine.hand import Hand

LOGGER = logging.getLogger(__name__)

HISTORY_LIMIT: int = 10
INPUT_MODES: tuple[str, ...] = ("cards", "total")


def _empty_counts() -> dict[str, int]:
    return {a.value: 0 for a in Action}


@dataclass
class QueryStats:
    total_queries: int = 0
    action_counts: dict[str, int] = field(default_factory=_empty_counts)

    def record(self, action: Action | Outcome) -> bool:
        """Count one answered query.  Outcomes without a counter are ignored."""
        if action.value not in self.action_counts:
            return False
        self.total_queries += 1
        self.action_counts[action.value] += 1
        return True

    def share(self, action: Action) -> float:
        """Fraction of queries answered with *action* (0.0 when empty)."""
        if self.total_queries == 0:
            return 0.0
        return self.action_counts.get(action.value, 0) / self.total_queries


@dataclass(frozen=True)
class HistoryEntry:
    timestamp: str
    hand: int
    hand_type: str  # "Soft" / "Hard"
    dealer: str
    action: str

    def __str__(self) -> str:
        return f"{self.timestamp}  {self.hand_type} {self.hand} vs {self.dealer}  {self.action}"


@dataclass
class HandHistory:
    entries: list[HistoryEntry] = field(default_factory=list)
    limit: int = HISTORY_LIMIT

    def add(self, entry: HistoryEntry) -> None:
        self.entries.insert(0, entry)
        del self.entries[self.limit:]

    def clear(self) -> None:
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)


@dataclass
class SessionLog:
    """Everything an advisor front end remembers between queries."""
    stats: QueryStats = field(default_factory=QueryStats)
    history: HandHistory = field(default_factory=HandHistory)
    input_mode: str = "cards"

    def record(self, hand: Hand, dealer_card: str, advice: Advice, now: datetime | None = None) -> bool:
        """Record one answered query.  Returns False (and records nothing) for
        boundary outcomes such as BUST or BLACKJACK."""
        if not self.stats.record(advice.action):
            return False
        stamp = (now or datetime.now()).strftime("%H:%M:%S")
        self.history.add(
            HistoryEntry(
                timestamp=stamp,
                hand=hand.total,
                hand_type="Soft" if hand.is_soft else "Hard",
                dealer=dealer_card,
                action=advice.action.value,
            )
        )
        return True

    def set_input_mode(self, mode: str) -> None:
        if mode not in INPUT_MODES:
            raise ValueError(f"input_mode must be one of {INPUT_MODES}, got {mode!r}")
        self.input_mode = mode

    # ─── Persistence ──────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "stats": asdict(self.stats),
            "history": [asdict(e) for e in self.history.entries],
            "settings": {"input_mode": self.input_mode},
        }

    @classmethod
    def from_dict(cls, data: dict) -> SessionLog:
        stats_data = data.get("stats", {})
        counts = _empty_counts()
        counts.update({k: int(v) for k, v in stats_data.get("action_counts", {}).items() if k in counts})
        stats = QueryStats(total_queries=int(stats_data.get("total_queries", 0)), action_counts=counts)

        history = HandHistory()
        for raw in data.get("history", [])[:HISTORY_LIMIT]:
            history.entries.append(HistoryEntry(**raw))

        mode = data.get("settings", {}).get("input_mode", "cards")
        log = cls(stats=stats, history=history)
        if mode in INPUT_MODES:
            log.input_mode = mode
        return log

    def save(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: str | Path) -> SessionLog:
        """Load a saved session; a missing or unreadable file gives a fresh one."""
        path = Path(path)
        if not path.exists():
            return cls()
        try:
            return cls.from_dict(json.loads(path.read_text(encoding="utf-8")))
        except (OSError, json.JSONDecodeError, TypeError, ValueError, AttributeError) as exc:
            LOGGER.warning("ignoring unreadable session file %s: %s", path, exc)
            return cls()
