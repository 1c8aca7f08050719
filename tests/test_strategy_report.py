"""
Tests for the average-strategy report.

Run with: pytest tests/test_strategy_report.py -v
"""

import json

import pytest
import numpy as np

from kuhn_cfr.games.base import Player
from kuhn_cfr.games.kuhn import JACK, QUEEN, KING
from kuhn_cfr.engine.ops import DTYPE
from kuhn_cfr.engine.infosets import InformationSetStore
from kuhn_cfr.reporting.strategy_report import (
    StrategyRow,
    StrategyReport,
    build_report,
    format_report,
    report_to_dict,
)


@pytest.fixture
def store():
    """Small hand-built store: two P1 infosets and one P2 infoset."""
    store = InformationSetStore()

    king = store.get_or_create(KING, "rr")
    king.strategy_sum[:] = [1.0, 3.0]
    king.reach_pr_sum = DTYPE(4.0)

    store.get_or_create(JACK, "rr")  # never reached: uniform

    queen = store.get_or_create(QUEEN, "rrb")
    queen.strategy_sum[:] = [2.0, 0.0]
    queen.reach_pr_sum = DTYPE(2.0)
    return store


class TestBuildReport:
    """Projection of a store into report rows."""

    def test_partition_by_player(self, store):
        report = build_report(store, 0.5)
        assert [row.key for row in report.player_1_rows] == ["J rr", "K rr"]
        assert [row.key for row in report.player_2_rows] == ["Q rrb"]

    def test_rows_use_average_strategy(self, store):
        report = build_report(store, 0.5)
        assert report.player_1_rows == (
            StrategyRow("J rr", 0.5, 0.5),
            StrategyRow("K rr", 0.25, 0.75),
        )
        assert report.player_2_rows == (StrategyRow("Q rrb", 1.0, 0.0),)

    def test_values_negated(self, store):
        report = build_report(store, -0.125, iterations=7)
        assert report.player_1_value == -0.125
        assert report.player_2_value == 0.125
        assert report.iterations == 7

    def test_rows_for(self, store):
        report = build_report(store, 0.0)
        assert report.rows_for(Player.PLAYER_1) is report.player_1_rows
        assert report.rows_for(Player.PLAYER_2) is report.player_2_rows
        with pytest.raises(ValueError):
            report.rows_for(Player.CHANCE)

    def test_store_unchanged(self, store):
        before = {
            s.key: (s.regret_sum.copy(), s.strategy_sum.copy(), s.strategy.copy(), s.reach_pr_sum)
            for s in store
        }
        build_report(store, 0.0)
        for info_set in store:
            regret_sum, strategy_sum, strategy, reach_pr_sum = before[info_set.key]
            np.testing.assert_array_equal(info_set.regret_sum, regret_sum)
            np.testing.assert_array_equal(info_set.strategy_sum, strategy_sum)
            np.testing.assert_array_equal(info_set.strategy, strategy)
            assert info_set.reach_pr_sum == reach_pr_sum

    def test_empty_store(self):
        report = build_report(InformationSetStore(), 0.0)
        assert report.player_1_rows == ()
        assert report.player_2_rows == ()


class TestFormatReport:
    """Plain-text rendering."""

    def test_layout(self, store):
        text = format_report(build_report(store, 0.5))
        assert text.splitlines() == [
            "player 1 expected game value: 0.5",
            "player 2 expected game value: -0.5",
            "player 1 strategy:",
            "J rr 0.5 0.5",
            "K rr 0.25 0.75",
            "player 2 strategy:",
            "Q rrb 1.0 0.0",
        ]

    def test_precision(self, store):
        text = format_report(build_report(store, -1.0 / 18.0), precision=3)
        lines = text.splitlines()
        assert lines[0] == "player 1 expected game value: -0.056"
        assert lines[1] == "player 2 expected game value: 0.056"
        assert "K rr 0.250 0.750" in lines

    def test_default_is_float32_repr(self):
        report = StrategyReport(player_1_value=float(np.float32(1.0 / 3.0)), player_2_value=0.0)
        first = format_report(report).splitlines()[0]
        assert first == "player 1 expected game value: 0.33333334"
        assert first.endswith(str(np.float32(1.0 / 3.0)))

    def test_deterministic(self, store):
        assert format_report(build_report(store, 0.1)) == format_report(build_report(store, 0.1))


class TestReportToDict:
    """JSON projection."""

    def test_keys(self, store):
        data = report_to_dict(build_report(store, 0.5, iterations=3))
        assert data["iterations"] == 3
        assert data["player_1_value"] == 0.5
        assert data["player_2_value"] == -0.5
        assert data["player_1_strategy"] == {"J rr": [0.5, 0.5], "K rr": [0.25, 0.75]}
        assert data["player_2_strategy"] == {"Q rrb": [1.0, 0.0]}

    def test_json_serialisable(self, store):
        data = report_to_dict(build_report(store, 0.5))
        assert json.loads(json.dumps(data)) == data
