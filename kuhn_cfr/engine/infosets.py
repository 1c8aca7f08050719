"""
Information sets and the store that owns them.

An information set (infoset) is a decision point as the acting player sees
it: their own card plus the public action history. The opponent's card is
never part of the key, so a player's strategy cannot depend on it.

Each InformationSet carries the CFR bookkeeping for one key:

    regret_sum    cumulative counterfactual regret, never reset
    strategy_sum  reach-weighted strategy mass, used for the time average
    strategy      current-iteration strategy
    reach_pr      reach mass accumulated during the current iteration only
    reach_pr_sum  cumulative reach mass, denominator of the time average

The solver only touches infosets through an InformationSetStore, which
creates them lazily and never deletes them.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

import numpy as np

from kuhn_cfr.games.base import Game, Player
from kuhn_cfr.games.kuhn import KuhnPoker, NUM_ACTIONS
from kuhn_cfr.engine.ops import (
    DTYPE,
    compute_strategy,
    average_strategy,
    uniform_strategy,
)


@dataclass
class InformationSet:
    """CFR accumulators for one (card, history) key."""
    key: str
    card: int
    history: str
    player: Player
    regret_sum: np.ndarray = field(default_factory=lambda: np.zeros(NUM_ACTIONS, dtype=DTYPE))
    strategy_sum: np.ndarray = field(default_factory=lambda: np.zeros(NUM_ACTIONS, dtype=DTYPE))
    strategy: np.ndarray = field(default_factory=lambda: uniform_strategy(NUM_ACTIONS))
    reach_pr: np.float32 = DTYPE(0.0)
    reach_pr_sum: np.float32 = DTYPE(0.0)

    def update_strategy_sum(self) -> None:
        """strategy_sum = strategy_sum + reach_pr * strategy"""
        self.strategy_sum += self.reach_pr * self.strategy

    def update_reach_pr_sum(self) -> None:
        """reach_pr_sum = reach_pr_sum + reach_pr"""
        self.reach_pr_sum = DTYPE(self.reach_pr_sum + self.reach_pr)

    def update_strategy(self) -> None:
        """strategy = regret matching over regret_sum"""
        self.strategy = compute_strategy(self.regret_sum)

    def reset_reach_pr(self) -> None:
        self.reach_pr = DTYPE(0.0)

    def get_average_strategy(self) -> np.ndarray:
        return average_strategy(self.strategy_sum, self.reach_pr_sum)


class InformationSetStore:
    """
    Owns every InformationSet of one solver run.

    Infosets are created on first visit and live for the store's lifetime.
    Iteration follows creation order, which is deterministic for a fixed
    traversal order.
    """

    def __init__(self, game: Optional[Game] = None):
        self.game = game if game is not None else KuhnPoker()
        self._infosets: Dict[str, InformationSet] = {}

    def get_or_create(self, card: int, history: str) -> InformationSet:
        """
        Return the mutable infoset for (card, history), creating it if absent.

        New infosets start with zero regret and strategy sums, a uniform
        strategy and zero reach accumulators.
        """
        key = self.game.infoset_key(card, history)
        info_set = self._infosets.get(key)
        if info_set is None:
            info_set = InformationSet(
                key=key,
                card=card,
                history=history,
                player=self.game.acting_player(history),
            )
            self._infosets[key] = info_set
        return info_set

    def get(self, key: str) -> Optional[InformationSet]:
        return self._infosets.get(key)

    def keys(self) -> List[str]:
        return list(self._infosets)

    def sorted(self) -> List[InformationSet]:
        """Infosets ordered lexicographically by key."""
        return [self._infosets[key] for key in sorted(self._infosets)]

    def __contains__(self, key: str) -> bool:
        return key in self._infosets

    def __len__(self) -> int:
        return len(self._infosets)

    def __iter__(self) -> Iterator[InformationSet]:
        return iter(self._infosets.values())
