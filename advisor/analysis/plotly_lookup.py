"""Interactive Plotly strategy lookup for the blackjack advisor.

Three public functions:

    build_lookup_figure(actions, engine)
        — Interactive hard / soft / pair charts for one set of table rules.
    build_rule_comparison_figure(engine)
        — 2×3 grid: full rules / no surrender / hit-stand only, hard and soft.
    save_lookup_html(fig, path)
        — Export any figure to a self-contained HTML file.

Hovering over a cell shows the hand, the dealer upcard, the advised action
and the engine's explanation for it.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from advisor.analysis.heat_maps import (
    ACTION_COLORS,
    FULL_RULES,
    HIT_STAND_ONLY,
    NO_SURRENDER,
    advice_grid_to_matrix,
    build_advice_grid,
    column_labels,
    row_labels,
)
from advisor.engine.actions import ACTION_INDEX, Action, Advice
from advisor.engine.decision import StrategyEngine

# ─── Constants ────────────────────────────────────────────────────────────────

_ACTIONS_BY_INDEX: list[Action] = sorted(ACTION_INDEX, key=ACTION_INDEX.get)
_N_ACTIONS: int = len(_ACTIONS_BY_INDEX)


def _discrete_colorscale() -> list[list]:
    """One flat colour band per action code on a [0, 1] colorscale."""
    scale: list[list] = []
    for i, action in enumerate(_ACTIONS_BY_INDEX):
        color = ACTION_COLORS[action]
        scale.append([i / _N_ACTIONS, color])
        scale.append([(i + 1) / _N_ACTIONS, color])
    return scale


_ACTION_COLORSCALE: list[list] = _discrete_colorscale()


# ─── Hover text ───────────────────────────────────────────────────────────────


def _build_hover(kind: str, grid: list[list[Advice]]) -> list[list[str]]:
    """Return a rows × 10 list of HTML hover strings for one chart."""
    labels = row_labels(kind)
    dealers = column_labels()
    rows: list[list[str]] = []
    for label, advice_row in zip(labels, grid):
        row: list[str] = []
        for dealer, advice in zip(dealers, advice_row):
            lines = [
                f"Hand: <b>{label}</b>",
                f"Dealer: {dealer}",
                f"Action: <b>{advice.action.value}</b>",
                advice.explanation,
            ]
            row.append("<br>".join(lines))
        rows.append(row)
    return rows


# ─── Trace builder ────────────────────────────────────────────────────────────


def _make_heatmap_trace(
    data: np.ndarray,
    labels: list[str],
    hover_text: list[list[str]],
    *,
    name: str,
    showscale: bool = False,
) -> go.Heatmap:
    """Build one go.Heatmap trace for a chart panel.

    Action codes 0..4 are centred in their colour bands via zmin=-0.5 and
    zmax=4.5.
    """
    colorbar = {
        "title": "Action",
        "tickvals": list(range(_N_ACTIONS)),
        "ticktext": [a.value for a in _ACTIONS_BY_INDEX],
    }
    return go.Heatmap(
        z=data.tolist(),
        x=column_labels(),
        y=labels,
        colorscale=_ACTION_COLORSCALE,
        zmin=-0.5,
        zmax=_N_ACTIONS - 0.5,
        text=hover_text,
        hovertemplate="%{text}<extra></extra>",
        showscale=showscale,
        colorbar=colorbar,
        name=name,
    )


def _chart_trace(
    kind: str,
    engine: StrategyEngine | None,
    actions: tuple[Action, ...],
    *,
    name: str,
    showscale: bool,
) -> go.Heatmap:
    grid = build_advice_grid(kind, engine, actions)
    return _make_heatmap_trace(
        advice_grid_to_matrix(grid),
        row_labels(kind),
        _build_hover(kind, grid),
        name=name,
        showscale=showscale,
    )


# ─── Public figure builders ───────────────────────────────────────────────────


def build_lookup_figure(
    actions: Iterable[Action] = FULL_RULES,
    *,
    engine: StrategyEngine | None = None,
) -> go.Figure:
    """Build an interactive figure with hard, soft and pair panels.

    Args:
        actions: Optional actions the table allows (HIT/STAND are implied).
        engine:  Engine to query; the shared default engine when None.

    Returns:
        go.Figure with three heatmap traces in a 1×3 subplot layout.
    """
    actions = tuple(actions)
    fig = make_subplots(
        rows=1,
        cols=3,
        subplot_titles=["Hard totals", "Soft totals", "Pairs"],
        horizontal_spacing=0.07,
    )
    for col, (kind, name) in enumerate([("hard", "Hard"), ("soft", "Soft"), ("pairs", "Pairs")], start=1):
        fig.add_trace(
            _chart_trace(kind, engine, actions, name=name, showscale=(col == 3)),
            row=1,
            col=col,
        )

    allowed = "/".join(a.value.lower() for a in actions) or "hit/stand only"
    fig.update_layout(
        title_text=f"Basic Strategy Lookup — {allowed}",
        title_font_size=15,
        height=620,
        width=1150,
    )
    fig.update_yaxes(autorange="reversed")
    fig.update_yaxes(title_text="Player hand", col=1)
    fig.update_xaxes(title_text="Dealer upcard")
    return fig


def build_rule_comparison_figure(*, engine: StrategyEngine | None = None) -> go.Figure:
    """Build a 2×3 interactive comparison across table rules.

    Layout::

        Col 1 = full rules   Col 2 = no surrender   Col 3 = hit / stand only
        Row 1 = hard totals  Row 2 = soft totals

    Returns:
        go.Figure with 6 heatmap traces.
    """
    rule_sets = [
        ("Full rules", FULL_RULES),
        ("No surrender", NO_SURRENDER),
        ("Hit/stand only", HIT_STAND_ONLY),
    ]
    subplot_titles = [f"{name} — Hard" for name, _ in rule_sets] + [
        f"{name} — Soft" for name, _ in rule_sets
    ]
    fig = make_subplots(
        rows=2,
        cols=3,
        subplot_titles=subplot_titles,
        horizontal_spacing=0.06,
        vertical_spacing=0.1,
    )

    for col, (name, actions) in enumerate(rule_sets, start=1):
        for row, kind in enumerate(("hard", "soft"), start=1):
            fig.add_trace(
                _chart_trace(
                    kind,
                    engine,
                    actions,
                    name=f"{name} {kind}",
                    showscale=(row == 1 and col == 3),
                ),
                row=row,
                col=col,
            )

    fig.update_layout(
        title_text="Basic Strategy by Table Rules",
        title_font_size=15,
        height=900,
        width=1150,
    )
    fig.update_yaxes(autorange="reversed")
    for c in range(1, 4):
        fig.update_xaxes(title_text="Dealer upcard", row=2, col=c)
    return fig


# ─── HTML export ──────────────────────────────────────────────────────────────


def save_lookup_html(fig: go.Figure, path: str) -> None:
    """Save a figure to an HTML file (Plotly JS loaded from the CDN)."""
    fig.write_html(path, include_plotlyjs="cdn")


# ─── Entry point ──────────────────────────────────────────────────────────────

if __name__ == "__main__":
    print("Building interactive lookup figures …")
    save_lookup_html(build_lookup_figure(FULL_RULES), "strategy_lookup.html")
    save_lookup_html(build_rule_comparison_figure(), "strategy_comparison_lookup.html")
    print("Saved: strategy_lookup.html, strategy_comparison_lookup.html")
