"""Strategy chart heat maps for the blackjack advisor.

Data builders query the StrategyEngine for every chart cell, so the charts
always show exactly what the engine advises:

    chart_hands(kind)                        — representative Hand per chart row
    build_advice_grid(kind, engine, actions) — rows × dealer Advice grid
    build_strategy_matrices(engine, actions) — (hard, soft, pairs) code matrices

Plot functions render matplotlib figures:

    plot_strategy_heatmaps(hard, soft, pairs, title, ...) — 1×3 figure
    plot_engine_strategy(actions, ...)                    — convenience wrapper
    plot_rule_comparison(...)                             — 2×3 comparison figure

Matrix convention:
    Rows  : hard totals 4–21 (18), soft totals 13–21 (9), pairs 2,2 … A,A (10)
    Cols  : dealer upcard 2, 3, …, 10, A (10)
    Values: ACTION_INDEX code (0=HIT, 1=STAND, 2=DOUBLE, 3=SPLIT, 4=SURRENDER)
"""

from __future__ import annotations

from typing import Iterable

import matplotlib
import matplotlib.colors
import matplotlib.figure
import matplotlib.patches
import matplotlib.pyplot as plt
import numpy as np

from advisor.engine.actions import ACTION_CODES, ACTION_INDEX, OPTIONAL_ACTIONS, Action, Advice
from advisor.engine.cards import DEALER_UPCARDS, rank_for_value
from advisor.engine.decision import StrategyEngine, default_engine
from advisor.engine.hand import Hand, classify, hand_from_total
from advisor.engine.strategy_rules import HARD_TOTALS, PAIR_VALUES, SOFT_TOTALS

# ─── Constants ────────────────────────────────────────────────────────────────

CHART_KINDS: tuple[str, ...] = ("hard", "soft", "pairs")

FULL_RULES: tuple[Action, ...] = OPTIONAL_ACTIONS
NO_SURRENDER: tuple[Action, ...] = (Action.DOUBLE, Action.SPLIT)
HIT_STAND_ONLY: tuple[Action, ...] = ()

_COL_LABELS: list[str] = list(DEALER_UPCARDS)
_ACTIONS_BY_INDEX: list[Action] = sorted(ACTION_INDEX, key=ACTION_INDEX.get)

ACTION_COLORS: dict[Action, str] = {
    Action.HIT: "#2ca02c",
    Action.STAND: "#d62728",
    Action.DOUBLE: "#1f77b4",
    Action.SPLIT: "#9467bd",
    Action.SURRENDER: "#7f7f7f",
}

_ACTION_CMAP = matplotlib.colors.ListedColormap([ACTION_COLORS[a] for a in _ACTIONS_BY_INDEX])
_ACTION_NORM = matplotlib.colors.BoundaryNorm(
    np.arange(-0.5, len(_ACTIONS_BY_INDEX) + 0.5), _ACTION_CMAP.N
)


# ─── Chart axes ───────────────────────────────────────────────────────────────


def _pair_label(value: int) -> str:
    rank = rank_for_value(value)
    return f"{rank},{rank}"


def chart_hands(kind: str) -> list[tuple[str, Hand]]:
    """Return (row_label, representative Hand) for each row of a chart.

    Hard and soft rows are total-mode hands; pair rows are two-card hands.

    Raises:
        ValueError: If *kind* is not one of CHART_KINDS.
    """
    if kind == "hard":
        return [(str(t), hand_from_total(t, is_soft=False)) for t in HARD_TOTALS]
    if kind == "soft":
        return [(f"S{t}", hand_from_total(t, is_soft=True)) for t in SOFT_TOTALS]
    if kind == "pairs":
        return [
            (_pair_label(v), classify((rank_for_value(v), rank_for_value(v))))
            for v in PAIR_VALUES
        ]
    raise ValueError(f"Unknown chart kind {kind!r}; expected one of {CHART_KINDS}")


def row_labels(kind: str) -> list[str]:
    return [label for label, _ in chart_hands(kind)]


def column_labels() -> list[str]:
    return list(_COL_LABELS)


# ─── Data builders ────────────────────────────────────────────────────────────


def build_advice_grid(
    kind: str,
    engine: StrategyEngine | None = None,
    actions: Iterable[Action] = FULL_RULES,
) -> list[list[Advice]]:
    """Return a rows × 10 grid of engine Advice for one chart."""
    engine = engine or default_engine()
    actions = tuple(actions)
    return [
        [engine.decide(hand, upcard, actions) for upcard in DEALER_UPCARDS]
        for _, hand in chart_hands(kind)
    ]


def advice_grid_to_matrix(grid: list[list[Advice]]) -> np.ndarray:
    """Convert an Advice grid into a float matrix of ACTION_INDEX codes."""
    return np.array(
        [[float(ACTION_INDEX[advice.action]) for advice in row] for row in grid],
        dtype=np.float64,
    )


def build_strategy_matrices(
    engine: StrategyEngine | None = None,
    actions: Iterable[Action] = FULL_RULES,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return (hard, soft, pairs) action-code matrices.

    Shapes: hard (18, 10), soft (9, 10), pairs (10, 10).
    """
    actions = tuple(actions)
    hard, soft, pairs = (
        advice_grid_to_matrix(build_advice_grid(kind, engine, actions)) for kind in CHART_KINDS
    )
    return hard, soft, pairs


def action_counts(matrix: np.ndarray) -> dict[Action, int]:
    """Number of chart cells recommending each action."""
    return {a: int(np.count_nonzero(matrix == ACTION_INDEX[a])) for a in _ACTIONS_BY_INDEX}


# ─── Rendering helper ─────────────────────────────────────────────────────────


def _render_panel(
    ax: matplotlib.axes.Axes,
    data: np.ndarray,
    labels: list[str],
) -> matplotlib.image.AxesImage:
    """Render one chart panel onto *ax* with action-letter annotations.

    The caller sets title and axis labels.
    """
    im = ax.imshow(data, cmap=_ACTION_CMAP, norm=_ACTION_NORM, aspect="auto")

    ax.set_xticks(range(len(_COL_LABELS)))
    ax.set_xticklabels(_COL_LABELS, fontsize=8)
    ax.set_yticks(range(len(labels)))
    ax.set_yticklabels(labels, fontsize=8)

    for r in range(data.shape[0]):
        for c in range(data.shape[1]):
            action = _ACTIONS_BY_INDEX[int(data[r, c])]
            ax.text(
                c,
                r,
                ACTION_CODES[action],
                ha="center",
                va="center",
                fontsize=8,
                color="white",
                fontweight="bold",
            )

    return im


def _legend_handles() -> list[matplotlib.patches.Patch]:
    return [
        matplotlib.patches.Patch(color=ACTION_COLORS[a], label=f"{ACTION_CODES[a]} = {a.value}")
        for a in _ACTIONS_BY_INDEX
    ]


# ─── Public plot functions ────────────────────────────────────────────────────


def plot_strategy_heatmaps(
    hard_data: np.ndarray,
    soft_data: np.ndarray,
    pair_data: np.ndarray,
    title: str,
    *,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Plot hard, soft and pair charts as a 1×3 figure.

    Args:
        hard_data: (18, 10) action-code matrix for hard totals 4–21.
        soft_data: (9, 10) matrix for soft totals 13–21.
        pair_data: (10, 10) matrix for pairs 2,2 … A,A.
        title:     Figure suptitle.
        show:      If True, call plt.show() after rendering.
        save_path: If not None, save the figure to this path before showing.

    Returns:
        matplotlib.figure.Figure.
    """
    fig, (ax_hard, ax_soft, ax_pair) = plt.subplots(1, 3, figsize=(15, 7))
    fig.suptitle(title, fontsize=13, fontweight="bold")

    panels = [
        (ax_hard, hard_data, row_labels("hard"), "Hard totals"),
        (ax_soft, soft_data, row_labels("soft"), "Soft totals"),
        (ax_pair, pair_data, row_labels("pairs"), "Pairs"),
    ]
    for ax, data, labels, name in panels:
        _render_panel(ax, data, labels)
        ax.set_title(name, fontsize=10)
        ax.set_xlabel("Dealer upcard", fontsize=9)
    ax_hard.set_ylabel("Player hand", fontsize=9)

    fig.legend(handles=_legend_handles(), loc="lower center", ncol=5, fontsize=9, frameon=False)
    plt.tight_layout(rect=(0, 0.05, 1, 1))

    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight", dpi=120)
    if show:
        plt.show()

    return fig


def plot_engine_strategy(
    actions: Iterable[Action] = FULL_RULES,
    *,
    engine: StrategyEngine | None = None,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Convenience: build engine matrices for *actions* and render them."""
    actions = tuple(actions)
    hard, soft, pairs = build_strategy_matrices(engine, actions)
    allowed = "/".join(a.value.lower() for a in actions) or "hit/stand only"
    return plot_strategy_heatmaps(
        hard,
        soft,
        pairs,
        f"Basic Strategy  ({allowed})",
        show=show,
        save_path=save_path,
    )


def plot_rule_comparison(
    *,
    engine: StrategyEngine | None = None,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Side-by-side comparison: full rules vs no surrender vs hit/stand only.

    Produces a 2×3 figure:
        Row 0 = hard totals.
        Row 1 = soft totals.
        Col 0..2 = FULL_RULES, NO_SURRENDER, HIT_STAND_ONLY.

    Returns:
        matplotlib.figure.Figure with 6 subplot axes.
    """
    rule_sets = [FULL_RULES, NO_SURRENDER, HIT_STAND_ONLY]
    col_titles = ["Double + split + surrender", "No surrender", "Hit / stand only"]
    matrices = [build_strategy_matrices(engine, rs) for rs in rule_sets]

    fig, axes = plt.subplots(2, 3, figsize=(15, 10))
    fig.suptitle("Basic Strategy by Table Rules", fontsize=14, fontweight="bold")

    for col, (hard, soft, _) in enumerate(matrices):
        for row, (data, kind) in enumerate([(hard, "hard"), (soft, "soft")]):
            ax = axes[row, col]
            _render_panel(ax, data, row_labels(kind))
            if row == 0:
                ax.set_title(col_titles[col], fontsize=10, fontweight="bold")
            if col == 0:
                ax.set_ylabel(f"{kind.capitalize()} totals", fontsize=9)
            if row == 1:
                ax.set_xlabel("Dealer upcard", fontsize=9)

    fig.legend(handles=_legend_handles(), loc="lower center", ncol=5, fontsize=9, frameon=False)
    plt.tight_layout(rect=(0, 0.04, 1, 1))

    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight", dpi=120)
    if show:
        plt.show()

    return fig


# ─── Entry point ──────────────────────────────────────────────────────────────

if __name__ == "__main__":
    print("Generating strategy charts …")
    plot_engine_strategy(FULL_RULES, show=False, save_path="strategy_full.png")
    plot_engine_strategy(HIT_STAND_ONLY, show=False, save_path="strategy_hit_stand.png")
    plot_rule_comparison(show=False, save_path="strategy_comparison.png")
    print("Saved: strategy_full.png, strategy_hit_stand.png, strategy_comparison.png")
