"""Average-strategy report for a trained infoset store.

Projects solver state into what a caller wants to read at the end of a run:

    player 1 expected game value: -0.05555
    player 2 expected game value: 0.05555
    player 1 strategy:
    J rr 0.79 0.21
    ...
    player 2 strategy:
    J rrb 1.0 0.0
    ...

Rows are partitioned by acting player and sorted by key, so two runs with
the same iteration count produce byte-identical text. Nothing here mutates
the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from kuhn_cfr.engine.infosets import InformationSetStore
from kuhn_cfr.games.base import Player


@dataclass(frozen=True)
class StrategyRow:
    """Time-averaged strategy of one infoset.

    Attributes:
        key:       Infoset key, e.g. ``"K rrcb"``.
        prob_pass: Probability of the first action (check / fold).
        prob_bet:  Probability of the second action (bet / call).
    """

    key: str
    prob_pass: float
    prob_bet: float


@dataclass(frozen=True)
class StrategyReport:
    """Everything a run reports, ready for formatting.

    Attributes:
        player_1_value: Expected game value for player 1.
        player_2_value: Expected game value for player 2 (the negation).
        player_1_rows:  Player 1 infosets, sorted by key.
        player_2_rows:  Player 2 infosets, sorted by key.
        iterations:     CFR iterations behind the numbers (0 if unknown).
    """

    player_1_value: float
    player_2_value: float
    player_1_rows: tuple[StrategyRow, ...] = field(default_factory=tuple)
    player_2_rows: tuple[StrategyRow, ...] = field(default_factory=tuple)
    iterations: int = 0

    def rows_for(self, player: Player) -> tuple[StrategyRow, ...]:
        if player == Player.PLAYER_1:
            return self.player_1_rows
        if player == Player.PLAYER_2:
            return self.player_2_rows
        raise ValueError(f"No strategy rows for {player!r}")


def build_report(
    store: InformationSetStore,
    game_value: float,
    iterations: int = 0,
) -> StrategyReport:
    """Derive the per-player average strategies from a store.

    Args:
        store:      Infoset store after training.
        game_value: Expected game value for player 1.
        iterations: Number of iterations the store was trained for.

    Returns:
        StrategyReport with rows partitioned by acting player and sorted by key.
    """
    rows: dict[Player, list[StrategyRow]] = {Player.PLAYER_1: [], Player.PLAYER_2: []}

    for info_set in store.sorted():
        avg = info_set.get_average_strategy()
        rows[info_set.player].append(
            StrategyRow(key=info_set.key, prob_pass=float(avg[0]), prob_bet=float(avg[1]))
        )

    value = float(np.float32(game_value))
    return StrategyReport(
        player_1_value=value,
        player_2_value=-value,
        player_1_rows=tuple(rows[Player.PLAYER_1]),
        player_2_rows=tuple(rows[Player.PLAYER_2]),
        iterations=iterations,
    )


def _fmt(value: float, precision: Optional[int]) -> str:
    # Shortest float32 repr by default, matching the solver's arithmetic.
    if precision is None:
        return str(np.float32(value))
    return f"{value:.{precision}f}"


def format_report(report: StrategyReport, precision: Optional[int] = None) -> str:
    """Render a report as plain text, one infoset per line.

    Args:
        report:    Report from build_report().
        precision: Digits after the decimal point; None for the shortest
                   float32 representation.
    """
    lines = [
        f"player 1 expected game value: {_fmt(report.player_1_value, precision)}",
        f"player 2 expected game value: {_fmt(report.player_2_value, precision)}",
    ]
    for label, player_rows in (
        ("player 1", report.player_1_rows),
        ("player 2", report.player_2_rows),
    ):
        lines.append(f"{label} strategy:")
        for row in player_rows:
            lines.append(
                f"{row.key} {_fmt(row.prob_pass, precision)} {_fmt(row.prob_bet, precision)}"
            )
    return "\n".join(lines)


def report_to_dict(report: StrategyReport) -> dict:
    """Plain-data projection of a report (JSON serialisable)."""

    def _rows(player_rows: tuple[StrategyRow, ...]) -> dict[str, list[float]]:
        return {row.key: [row.prob_pass, row.prob_bet] for row in player_rows}

    return {
        "iterations": report.iterations,
        "player_1_value": report.player_1_value,
        "player_2_value": report.player_2_value,
        "player_1_strategy": _rows(report.player_1_rows),
        "player_2_strategy": _rows(report.player_2_rows),
    }
