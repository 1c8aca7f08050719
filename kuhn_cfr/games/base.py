"""
Abstract base classes for game definitions.

This module defines the interface the CFR solver walks. Games are described
by action-history strings: the solver never builds an explicit tree, it asks
the game how to classify a history and who acts at it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple


class Player(IntEnum):
    """Player identifiers."""
    CHANCE = -1
    PLAYER_1 = 0
    PLAYER_2 = 1


@dataclass(frozen=True)
class Action:
    """An action that can be taken at a decision node."""
    id: int
    name: str


class Game(ABC):
    """Abstract base class for two-player zero-sum games over history strings."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the game."""
        pass

    @property
    @abstractmethod
    def num_players(self) -> int:
        """Number of players (excluding chance)."""
        pass

    @property
    @abstractmethod
    def num_actions(self) -> int:
        """Number of actions available at every decision node."""
        pass

    @property
    @abstractmethod
    def deal_history(self) -> str:
        """History marking a completed deal; play continues from here."""
        pass

    @abstractmethod
    def is_chance_node(self, history: str) -> bool:
        pass

    @abstractmethod
    def is_terminal(self, history: str) -> bool:
        pass

    @abstractmethod
    def is_decision_node(self, history: str) -> bool:
        pass

    @abstractmethod
    def acting_player(self, history: str) -> Player:
        """
        Player whose turn it is at `history`.

        At a terminal history this is the player "about to act", which is
        also the perspective terminal_utility() reports from.
        """
        pass

    @abstractmethod
    def actions(self, history: str) -> Tuple[Action, ...]:
        """Actions available at a decision node (empty elsewhere)."""
        pass

    @abstractmethod
    def terminal_utility(self, history: str, own_card: int, opponent_card: int) -> float:
        """Payoff to the player about to act at a terminal history."""
        pass

    @abstractmethod
    def chance_outcomes(self) -> Tuple[Tuple[Tuple[int, int], float], ...]:
        """All (card_1, card_2) deals with their probabilities, in fixed order."""
        pass

    @abstractmethod
    def infoset_key(self, card: int, history: str) -> str:
        """
        Return a string key identifying the information set.

        Two decision points belong to the same infoset iff they have the same key.
        """
        pass
