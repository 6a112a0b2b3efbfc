"""Blackjack Strategy Advisor — Streamlit Dashboard.

Four-tab interactive dashboard built on the strategy engine:
  Tab 1 — Advisor                   (query a hand, see advice, stats, history)
  Tab 2 — Strategy Heat Maps        (matplotlib, hard / soft / pair charts)
  Tab 3 — Interactive Plotly Lookup (hover for action + explanation)
  Tab 4 — Strategy Report           (printed charts + session summary)

Run:
    PYTHONPATH=. streamlit run app.py
"""

from __future__ import annotations

import contextlib
import io
from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # must be set before any other matplotlib imports

import pandas as pd
import streamlit as st

from advisor.analysis.session_log import SessionLog
from advisor.engine.actions import Action
from advisor.engine.cards import DEALER_UPCARDS, RANK_NAMES
from advisor.engine.decision import StrategyEngine
from advisor.engine.query import QUICK_SCENARIOS, InvalidQueryError, Scenario, advise_hand, build_hand

SESSION_FILE: Path = Path(".advisor_session.json")
MAX_CARD_SLOTS: int = 5
_NO_CARD: str = "—"

# ─── Page config ──────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Blackjack Strategy Advisor",
    page_icon="🃏",
    layout="wide",
)


@st.cache_resource
def _engine() -> StrategyEngine:
    """One engine (and decision cache) for the process lifetime."""
    return StrategyEngine()


@st.cache_resource
def _load_analysis_modules():
    """Import plotting modules once (cached for the process lifetime)."""
    from advisor.analysis.heat_maps import (
        FULL_RULES,
        plot_engine_strategy,
        plot_rule_comparison,
    )
    from advisor.analysis.plotly_lookup import build_lookup_figure, build_rule_comparison_figure
    from advisor.analysis.strategy_report import (
        print_hard_chart,
        print_pair_chart,
        print_session_summary,
        print_soft_chart,
    )

    return {
        "FULL_RULES": FULL_RULES,
        "plot_engine_strategy": plot_engine_strategy,
        "plot_rule_comparison": plot_rule_comparison,
        "build_lookup_figure": build_lookup_figure,
        "build_rule_comparison_figure": build_rule_comparison_figure,
        "print_hard_chart": print_hard_chart,
        "print_soft_chart": print_soft_chart,
        "print_pair_chart": print_pair_chart,
        "print_session_summary": print_session_summary,
    }


# ─── Session state ────────────────────────────────────────────────────────────

if "session_log" not in st.session_state:
    st.session_state["session_log"] = SessionLog.load(SESSION_FILE)
    st.session_state["input_mode"] = st.session_state["session_log"].input_mode

st.session_state.setdefault("dealer_card", _NO_CARD)
for _slot in range(MAX_CARD_SLOTS):
    st.session_state.setdefault(f"card_{_slot}", _NO_CARD)
st.session_state.setdefault("hand_total", 16)
st.session_state.setdefault("is_soft", False)
st.session_state.setdefault("last_advice", None)

log: SessionLog = st.session_state["session_log"]


def _load_scenario(scenario: Scenario) -> None:
    st.session_state["input_mode"] = "cards"
    st.session_state["dealer_card"] = scenario.dealer
    for slot in range(MAX_CARD_SLOTS):
        st.session_state[f"card_{slot}"] = (
            scenario.cards[slot] if slot < len(scenario.cards) else _NO_CARD
        )


def _clear_cards() -> None:
    for slot in range(MAX_CARD_SLOTS):
        st.session_state[f"card_{slot}"] = _NO_CARD


def _clear_history() -> None:
    log.history.clear()
    log.save(SESSION_FILE)


# ─── Sidebar controls ─────────────────────────────────────────────────────────

with st.sidebar:
    st.title("🃏 Strategy Advisor")
    st.markdown("---")

    input_mode = st.radio(
        "Input mode",
        options=["cards", "total"],
        format_func=lambda v: "Cards" if v == "cards" else "Hand total",
        key="input_mode",
    )

    st.markdown("**Table rules**")
    allow_double = st.checkbox("Double allowed", value=True)
    allow_split = st.checkbox("Split allowed", value=True)
    allow_surrender = st.checkbox("Surrender allowed", value=False)

    st.markdown("---")
    st.markdown("**Quick scenarios**")
    for scenario in QUICK_SCENARIOS:
        st.button(scenario.name, on_click=_load_scenario, args=(scenario,), key=f"scenario_{scenario.name}")

    st.markdown("---")
    st.caption("Basic strategy: hit / stand / double / split / surrender")

requested_actions: list[Action] = []
if allow_double:
    requested_actions.append(Action.DOUBLE)
if allow_split:
    requested_actions.append(Action.SPLIT)
if allow_surrender:
    requested_actions.append(Action.SURRENDER)

if input_mode != log.input_mode:
    log.set_input_mode(input_mode)
    log.save(SESSION_FILE)

# ─── Tabs ─────────────────────────────────────────────────────────────────────

tab1, tab2, tab3, tab4 = st.tabs(
    [
        "Advisor",
        "Strategy Heat Maps",
        "Interactive Plotly Lookup",
        "Strategy Report",
    ]
)

m = _load_analysis_modules()

# ── Tab 1: Advisor ────────────────────────────────────────────────────────────

with tab1:
    st.header("Get Advice")

    st.selectbox("Dealer upcard", options=[_NO_CARD] + DEALER_UPCARDS, key="dealer_card")

    if input_mode == "cards":
        cols = st.columns(MAX_CARD_SLOTS)
        for slot, col in enumerate(cols):
            col.selectbox(f"Card {slot + 1}", options=[_NO_CARD] + RANK_NAMES, key=f"card_{slot}")
        st.button("Clear cards", on_click=_clear_cards)
    else:
        st.number_input("Hand total", min_value=4, max_value=21, step=1, key="hand_total")
        st.checkbox("Soft hand (ace counted as 11)", key="is_soft")

    if st.button("Get advice", type="primary"):
        dealer = st.session_state["dealer_card"]
        dealer = None if dealer == _NO_CARD else dealer
        try:
            if input_mode == "cards":
                cards = [
                    st.session_state[f"card_{slot}"]
                    for slot in range(MAX_CARD_SLOTS)
                    if st.session_state[f"card_{slot}"] != _NO_CARD
                ]
                hand = build_hand(cards=cards)
            else:
                hand = build_hand(
                    total=int(st.session_state["hand_total"]),
                    is_soft=bool(st.session_state["is_soft"]),
                )
            advice = advise_hand(hand, dealer, requested_actions, _engine())
        except InvalidQueryError as exc:
            st.warning(f"⚠️ {exc}")
        else:
            if log.record(hand, dealer, advice):
                log.save(SESSION_FILE)
            st.session_state["last_advice"] = (advice, hand, input_mode)

    if st.session_state["last_advice"] is not None:
        advice, hand, mode = st.session_state["last_advice"]
        st.markdown("---")
        st.subheader(advice.label)
        st.write(advice.explanation)
        if mode == "cards":
            st.caption(f"Your hand: {hand.label}")

    st.markdown("---")
    st.subheader("Statistics")
    stat_cols = st.columns(len(Action) + 1)
    stat_cols[0].metric("Total", log.stats.total_queries)
    for col, action in zip(stat_cols[1:], Action):
        col.metric(action.value.capitalize(), log.stats.action_counts.get(action.value, 0))

    st.subheader("History")
    if log.history.entries:
        history_df = pd.DataFrame(
            [
                {
                    "Time": e.timestamp,
                    "Hand": f"{e.hand_type} {e.hand}",
                    "Dealer": e.dealer,
                    "Action": e.action,
                }
                for e in log.history.entries
            ]
        )
        st.dataframe(history_df, use_container_width=True, hide_index=True)
    else:
        st.caption("No history yet.")
    st.button("Clear history", on_click=_clear_history)

# ── Tab 2: Strategy Heat Maps ─────────────────────────────────────────────────

with tab2:
    st.header("Strategy Heat Maps")
    st.caption(
        "Rows = player hand | Cols = dealer upcard | "
        "H = hit, S = stand, D = double, P = split, R = surrender"
    )

    st.subheader("Current table rules")
    fig_rules = m["plot_engine_strategy"](requested_actions, engine=_engine(), show=False)
    st.pyplot(fig_rules)

    st.markdown("---")
    st.subheader("Comparison across table rules")
    fig_cmp = m["plot_rule_comparison"](engine=_engine(), show=False)
    st.pyplot(fig_cmp)

# ── Tab 3: Interactive Plotly Lookup ──────────────────────────────────────────

with tab3:
    st.header("Interactive Plotly Strategy Lookup")
    st.caption("Hover over any cell to see the hand, dealer card, action, and explanation.")

    fig_lookup = m["build_lookup_figure"](requested_actions, engine=_engine())
    st.plotly_chart(fig_lookup, use_container_width=True)

    st.markdown("---")
    st.subheader("Comparison across table rules")
    fig_cmp_plotly = m["build_rule_comparison_figure"](engine=_engine())
    st.plotly_chart(fig_cmp_plotly, use_container_width=True)

# ── Tab 4: Strategy Report ────────────────────────────────────────────────────

with tab4:
    st.header("Strategy Report")

    for section_fn, label in [
        (m["print_hard_chart"], "Hard Totals"),
        (m["print_soft_chart"], "Soft Totals"),
        (m["print_pair_chart"], "Pairs"),
    ]:
        st.subheader(label)
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            section_fn(_engine(), requested_actions)
        st.code(buf.getvalue(), language=None)

    st.subheader("Session Summary")
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        m["print_session_summary"](log)
    st.code(buf.getvalue(), language=None)
