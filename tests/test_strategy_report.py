"""Tests for advisor/analysis/strategy_report.py — printed charts and summaries."""

from __future__ import annotations

import pytest

from advisor.analysis.heat_maps import HIT_STAND_ONLY
from advisor.analysis.session_log import SessionLog
from advisor.analysis.strategy_report import (
    format_chart,
    print_hard_chart,
    print_pair_chart,
    print_session_summary,
    print_soft_chart,
)
from advisor.engine.actions import Action, Advice
from tests.conftest import hand

NO_SPLIT = (Action.DOUBLE, Action.SURRENDER)


class TestFormatChart:
    def test_line_count(self) -> None:
        # header + separator + one line per row
        assert len(format_chart("hard")) == 2 + 18
        assert len(format_chart("soft")) == 2 + 9
        assert len(format_chart("pairs")) == 2 + 10

    def test_header_lists_dealer_cards(self) -> None:
        header = format_chart("hard")[0]
        assert header.split("|")[1].split() == ['2', '3', '4', '5', '6', '7', '8', '9', '10', 'A']

    def test_hard_sixteen_row(self) -> None:
        row = next(line for line in format_chart("hard") if line.split("|")[0].strip() == "16")
        assert row.split("|")[1].split() == ['S', 'S', 'S', 'S', 'S', 'H', 'H', 'R', 'R', 'R']

    def test_pair_eights_row(self) -> None:
        row = next(line for line in format_chart("pairs") if line.split("|")[0].strip() == "8,8")
        assert set(row.split("|")[1].split()) == {'P'}

    def test_hit_stand_only(self) -> None:
        cells = {c for line in format_chart("hard", actions=HIT_STAND_ONLY)[2:] for c in line.split("|")[1].split()}
        assert cells <= {'H', 'S'}


class TestPrintCharts:
    @pytest.mark.parametrize(
        "fn, title",
        [
            (print_hard_chart, "Hard Totals"),
            (print_soft_chart, "Soft Totals"),
            (print_pair_chart, "Pairs"),
        ],
    )
    def test_output(self, fn, title, capsys: pytest.CaptureFixture) -> None:
        fn()
        out = capsys.readouterr().out
        assert title in out
        assert "H=HIT" in out


class TestPrintSessionSummary:
    def test_empty_session(self, capsys: pytest.CaptureFixture) -> None:
        print_session_summary(SessionLog())
        out = capsys.readouterr().out
        assert "Total queries: 0" in out
        assert "(no history yet)" in out

    def test_with_history(self, capsys: pytest.CaptureFixture) -> None:
        log = SessionLog()
        log.record(hand('10', '6'), '10', Advice(Action.SURRENDER, "x"))
        log.record(hand('5', '6'), '6', Advice(Action.DOUBLE, "x"))
        print_session_summary(log)
        out = capsys.readouterr().out
        assert "Total queries: 2" in out
        assert "Hard 16 vs 10" in out
        assert "Hard 11 vs 6" in out
        assert "50.0%" in out


class TestPairChartTitle:
    def test_split_available(self, capsys: pytest.CaptureFixture) -> None:
        print_pair_chart()
        assert "split available" in capsys.readouterr().out

    def test_split_not_allowed(self, capsys: pytest.CaptureFixture) -> None:
        print_pair_chart(actions=NO_SPLIT)
        out = capsys.readouterr().out
        assert "split not allowed" in out
        assert "split available" not in out

    def test_no_split_cells_without_split(self) -> None:
        cells = {c for line in format_chart("pairs", actions=NO_SPLIT)[2:] for c in line.split("|")[1].split()}
        assert "P" not in cells
