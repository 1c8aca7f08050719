"""
Vanilla CFR (Counterfactual Regret Minimization) Solver.

Implements the classic recursive CFR algorithm over history strings.

Each iteration has two phases:
1. One full traversal from the chance node (all 6 deals). Every node reads
   its infoset's current strategy, accumulates reach and regret, and
   returns its utility for the player about to act there.
2. An update pass over every infoset: fold this iteration's reach into the
   strategy sum, recompute the strategy by regret matching, reset reach.

Strategies only change in phase 2, so every regret computed during one
traversal is measured against the same fixed strategy profile.
"""

import logging
from typing import Dict, Optional

import numpy as np

from kuhn_cfr import config
from kuhn_cfr.games.base import Game, Player
from kuhn_cfr.games.kuhn import KuhnPoker
from kuhn_cfr.engine.ops import (
    DTYPE,
    check_distribution,
    check_regret_invariant,
)
from kuhn_cfr.engine.infosets import InformationSetStore
from kuhn_cfr.solvers.best_response import exploitability as compute_exploitability
from kuhn_cfr.reporting.strategy_report import (
    StrategyReport,
    build_report,
    format_report,
)

logger = logging.getLogger(__name__)


class CFRSolver:
    """
    Vanilla CFR solver using a recursive game-tree walk.

    The solver owns its InformationSetStore, so independent solver
    instances never share state.
    """

    def __init__(
        self,
        game: Optional[Game] = None,
        check_invariants: bool = False,
        log_every: int = config.LOG_EVERY
    ):
        """
        Initialize the CFR solver.

        Args:
            game: Game to solve (Kuhn poker by default)
            check_invariants: If True, check strategy and regret invariants at
                every decision node (slower but useful for debugging)
            log_every: Log a progress line every this many iterations
                (KUHN_CFR_LOG_EVERY by default; 0 disables)
        """
        self.game = game if game is not None else KuhnPoker()
        self.store = InformationSetStore(self.game)
        self.check_invariants = check_invariants
        self.log_every = log_every

        # Running sum of per-iteration game values (player 1's perspective)
        self._game_value_sum = DTYPE(0.0)

        # Iteration counter
        self.iterations = 0

    def run(self, num_iterations: int) -> float:
        """
        Run CFR iterations.

        Args:
            num_iterations: Number of iterations to run

        Returns:
            Expected game value for player 1, averaged over all iterations so far
        """
        if num_iterations < 1:
            raise ValueError(f"num_iterations must be positive, got {num_iterations}")

        logger.info("Running %d CFR iterations (%d done so far)", num_iterations, self.iterations)

        for _ in range(num_iterations):
            self._single_iteration()
            self.iterations += 1

            if self.log_every and self.iterations % self.log_every == 0:
                logger.debug(
                    "Iteration %d: game value %.6f, %d infosets",
                    self.iterations, self.expected_game_value, len(self.store)
                )

        logger.info(
            "Finished %d iterations: player 1 game value %.6f",
            self.iterations, self.expected_game_value
        )
        return self.expected_game_value

    def solve(self, iterations: int = 10000) -> float:
        """Solve the game by running CFR iterations."""
        return self.run(iterations)

    def _single_iteration(self) -> None:
        """Run one traversal followed by the update pass."""
        one = DTYPE(1.0)
        self._game_value_sum += self.cfr("", -1, -1, one, one, one)

        for info_set in self.store:
            info_set.update_strategy_sum()
            info_set.update_strategy()
            info_set.update_reach_pr_sum()
            info_set.reset_reach_pr()

            if self.check_invariants:
                check_distribution(info_set.strategy, label=info_set.key)

    def cfr(
        self,
        history: str,
        card_1: int,
        card_2: int,
        pr_1: np.float32,
        pr_2: np.float32,
        pr_chance: np.float32
    ) -> np.float32:
        """
        Counterfactual regret minimization over one subtree.

        Args:
            history: History of the game so far
            card_1: Card of player 1 (-1 before the deal)
            card_2: Card of player 2 (-1 before the deal)
            pr_1: Probability of player 1 playing to reach this history
            pr_2: Probability of player 2 playing to reach this history
            pr_chance: Probability contribution of chance to reach this history

        Returns:
            Utility of this history for the player about to act at it
        """
        game = self.game

        if game.is_chance_node(history):
            return self._chance_utility()

        player = game.acting_player(history)
        is_player_1 = player == Player.PLAYER_1
        card, opponent_card = (card_1, card_2) if is_player_1 else (card_2, card_1)

        if game.is_terminal(history):
            return DTYPE(game.terminal_utility(history, card, opponent_card))

        assert game.is_decision_node(history), \
            f"History {history!r} is neither chance, terminal nor decision node"

        info_set = self.store.get_or_create(card, history)
        info_set.reach_pr += pr_1 if is_player_1 else pr_2

        # Read once: the strategy stays fixed for the whole traversal
        strategy = info_set.strategy
        action_utils = np.zeros(len(strategy), dtype=DTYPE)

        for action in game.actions(history):
            next_history = history + action.name
            prob = strategy[action.id]
            if is_player_1:
                action_utils[action.id] = -self.cfr(
                    next_history, card_1, card_2, pr_1 * prob, pr_2, pr_chance
                )
            else:
                action_utils[action.id] = -self.cfr(
                    next_history, card_1, card_2, pr_1, pr_2 * prob, pr_chance
                )

        util = DTYPE(np.dot(action_utils, strategy))
        regrets = action_utils - util

        if self.check_invariants:
            check_distribution(strategy, label=info_set.key)
            check_regret_invariant(strategy, regrets, label=info_set.key)

        # Counterfactual weight: everyone's reach except the acting player's
        opponent_pr = pr_2 if is_player_1 else pr_1
        info_set.regret_sum += (opponent_pr * pr_chance) * regrets

        return util

    def _chance_utility(self) -> np.float32:
        """Average the deal subtrees over every ordered card pair."""
        expected_value = DTYPE(0.0)
        one = DTYPE(1.0)
        for (card_1, card_2), prob in self.game.chance_outcomes():
            prob = DTYPE(prob)
            expected_value += prob * self.cfr(
                self.game.deal_history, card_1, card_2, one, one, prob
            )
        return expected_value

    @property
    def expected_game_value(self) -> float:
        """Game value for player 1 averaged over completed iterations."""
        if self.iterations == 0:
            return 0.0
        return float(self._game_value_sum / DTYPE(self.iterations))

    def current_strategy(self) -> Dict[str, np.ndarray]:
        """Current strategy (from regret matching) of every infoset."""
        return {info_set.key: info_set.strategy.copy() for info_set in self.store}

    def average_strategy(self) -> Dict[str, np.ndarray]:
        """Average strategy (converges to Nash equilibrium) of every infoset."""
        return {info_set.key: info_set.get_average_strategy() for info_set in self.store}

    def report(self) -> StrategyReport:
        """Average strategies and game value, ready for formatting."""
        return build_report(self.store, self.expected_game_value, self.iterations)

    def print_strategy(self, precision: Optional[int] = None) -> None:
        """Print the game values and average strategy for all infosets."""
        print(format_report(self.report(), precision=precision))

    def exploitability(self) -> float:
        """
        Compute exploitability of the average strategy.

        Exploitability measures how far the strategy is from Nash equilibrium.
        Returns the sum of best response values for both players.
        """
        return compute_exploitability(self.average_strategy(), self.game)
