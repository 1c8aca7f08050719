"""
Kuhn Poker implementation.

Kuhn Poker is a simplified poker game:
- 3-card deck: Jack (J=0), Queen (Q=1), King (K=2)
- Each player antes 1 chip
- Each player is dealt one card
- Player 1 acts first: Pass or Bet
- Betting round follows standard poker rules
- Higher card wins at showdown

Histories are strings. "" is the chance node (the deal), "rr" marks the
two dealt cards, then one token per action:
    'c' = pass (check, or fold when facing a bet)
    'b' = bet  (bet, or call when facing a bet)

Decision histories: rr, rrc, rrb, rrcb
Terminal histories: rrcc, rrcbc, rrcbb, rrbc, rrbb

The player to act alternates, so the acting player is given by the parity of
the history length (even = player 1, odd = player 2). Utilities are always
reported for the player about to act at the terminal history.
"""

from itertools import permutations
from typing import Tuple

from .base import Game, Action, Player


# Card values
JACK = 0
QUEEN = 1
KING = 2
CARD_NAMES = {JACK: 'J', QUEEN: 'Q', KING: 'K'}

NUM_CARDS = 3
NUM_ACTIONS = 2

# Actions
PASS = Action(id=0, name='c')  # Check / Fold
BET = Action(id=1, name='b')   # Bet / Call
ACTIONS = (PASS, BET)

CHANCE_HISTORY = ""
DEAL = "rr"
DECISION_HISTORIES = frozenset({"rr", "rrc", "rrb", "rrcb"})
TERMINAL_HISTORIES = frozenset({"rrcc", "rrcbc", "rrcbb", "rrbc", "rrbb"})

# Histories that end with a bet being folded to
_FOLD_HISTORIES = frozenset({"rrbc", "rrcbc"})
# Showdowns after a bet was called
_CALLED_HISTORIES = frozenset({"rrbb", "rrcbb"})

# All 6 ordered (card_1, card_2) deals, in fixed order
DEALS = tuple(permutations(range(NUM_CARDS), 2))
DEAL_PROB = 1.0 / len(DEALS)


def card_name(card: int) -> str:
    """Single-letter label for a card rank."""
    try:
        return CARD_NAMES[card]
    except KeyError:
        raise ValueError(f"Unknown Kuhn card: {card!r}") from None


def infoset_key(card: int, history: str) -> str:
    """
    Information set key: the acting player's own card and the public history.

    Player knows: their own card + action history
    Player doesn't know: opponent's card

    The separator keeps the key length parity equal to the history's, so the
    acting player can be read off either.
    """
    return f"{card_name(card)} {history}"


def is_chance_node(history: str) -> bool:
    """The deal is the only chance event."""
    return history == CHANCE_HISTORY


def is_terminal(history: str) -> bool:
    return history in TERMINAL_HISTORIES


def is_decision_node(history: str) -> bool:
    return history in DECISION_HISTORIES


def acting_player(history: str) -> Player:
    """Player to act at `history` by length parity (strict alternation)."""
    return Player.PLAYER_1 if len(history) % 2 == 0 else Player.PLAYER_2


def valid_actions(history: str) -> Tuple[Action, ...]:
    """Both actions at every decision node, none elsewhere."""
    if is_decision_node(history):
        return ACTIONS
    return ()


def terminal_utility(history: str, own_card: int, opponent_card: int) -> float:
    """
    Payoff to the player about to act at a terminal history.

    Args:
        history: Terminal history string
        own_card: Card of the player about to act
        opponent_card: Card of the other player

    Returns:
        +1 if the opponent folded to a bet, +/-1 for a check-check showdown,
        +/-2 for a showdown after a called bet.
    """
    if history in _FOLD_HISTORIES:
        return 1.0
    if history == "rrcc":
        return 1.0 if own_card > opponent_card else -1.0
    if history in _CALLED_HISTORIES:
        return 2.0 if own_card > opponent_card else -2.0
    raise ValueError(f"Not a terminal Kuhn history: {history!r}")


class KuhnPoker(Game):
    """Kuhn Poker game implementation."""

    @property
    def name(self) -> str:
        return "kuhn_poker"

    @property
    def num_players(self) -> int:
        return 2

    @property
    def num_actions(self) -> int:
        return NUM_ACTIONS

    @property
    def deal_history(self) -> str:
        return DEAL

    def is_chance_node(self, history: str) -> bool:
        return is_chance_node(history)

    def is_terminal(self, history: str) -> bool:
        return is_terminal(history)

    def is_decision_node(self, history: str) -> bool:
        return is_decision_node(history)

    def acting_player(self, history: str) -> Player:
        return acting_player(history)

    def actions(self, history: str) -> Tuple[Action, ...]:
        return valid_actions(history)

    def terminal_utility(self, history: str, own_card: int, opponent_card: int) -> float:
        return terminal_utility(history, own_card, opponent_card)

    def chance_outcomes(self) -> Tuple[Tuple[Tuple[int, int], float], ...]:
        return tuple((deal, DEAL_PROB) for deal in DEALS)

    def infoset_key(self, card: int, history: str) -> str:
        return infoset_key(card, history)
