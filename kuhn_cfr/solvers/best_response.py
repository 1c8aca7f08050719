"""
Policy evaluation, best response and exploitability.

A strategy profile is a mapping from infoset key to a probability vector
over the game's actions (the output of CFRSolver.average_strategy()).
Infosets missing from the profile are played uniformly.

Best response for player i is computed per own card: the opponent's
possible cards are carried down the tree as weights
(chance probability x opponent reach), so at each of player i's histories
the best action is chosen for the whole infoset, not per deal.

Values here are plain Python floats; these are evaluation tools, not part
of the float32 training loop.
"""

from typing import Dict, Mapping, Optional, Sequence

from kuhn_cfr.games.base import Game, Player
from kuhn_cfr.games.kuhn import KuhnPoker

StrategyProfile = Mapping[str, Sequence[float]]


def _strategy_at(profile: StrategyProfile, game: Game, card: int, history: str) -> Sequence[float]:
    """Profile entry for an infoset, uniform if missing."""
    strategy = profile.get(game.infoset_key(card, history))
    if strategy is None:
        return [1.0 / game.num_actions] * game.num_actions
    return strategy


def _player_value(game: Game, history: str, player: Player, own_card: int, opponent_card: int) -> float:
    """Terminal payoff to `player`, whoever is about to act."""
    if game.acting_player(history) == player:
        return game.terminal_utility(history, own_card, opponent_card)
    return -game.terminal_utility(history, opponent_card, own_card)


def _policy_value(game: Game, profile: StrategyProfile, history: str, cards: Sequence[int]) -> float:
    """Value for player 1 of the subtree at `history` under `profile`."""
    if game.is_terminal(history):
        return _player_value(game, history, Player.PLAYER_1, cards[0], cards[1])

    assert game.is_decision_node(history), f"Unexpected history {history!r}"

    acting = game.acting_player(history)
    strategy = _strategy_at(profile, game, cards[acting.value], history)
    return sum(
        float(strategy[action.id]) * _policy_value(game, profile, history + action.name, cards)
        for action in game.actions(history)
    )


def policy_value(profile: StrategyProfile, game: Optional[Game] = None) -> float:
    """
    Expected value for player 1 when both players follow `profile`.

    Args:
        profile: Mapping infoset key -> action probabilities
        game: Game to evaluate (Kuhn poker by default)

    Returns:
        Player 1's expected value; player 2's is its negation
    """
    game = game if game is not None else KuhnPoker()
    return sum(
        prob * _policy_value(game, profile, game.deal_history, deal)
        for deal, prob in game.chance_outcomes()
    )


def _best_response(
    game: Game,
    profile: StrategyProfile,
    player: Player,
    history: str,
    own_card: int,
    weights: Dict[int, float]
) -> float:
    """
    Weighted best-response value of `player` holding `own_card`.

    weights[opp] = chance probability x opponent reach of the deal with
    opponent card `opp`.
    """
    if game.is_terminal(history):
        return sum(
            weight * _player_value(game, history, player, own_card, opponent_card)
            for opponent_card, weight in weights.items()
        )

    assert game.is_decision_node(history), f"Unexpected history {history!r}"

    if game.acting_player(history) == player:
        return max(
            _best_response(game, profile, player, history + action.name, own_card, weights)
            for action in game.actions(history)
        )

    value = 0.0
    for action in game.actions(history):
        child_weights = {
            opponent_card: weight * float(_strategy_at(profile, game, opponent_card, history)[action.id])
            for opponent_card, weight in weights.items()
        }
        value += _best_response(game, profile, player, history + action.name, own_card, child_weights)
    return value


def best_response_value(profile: StrategyProfile, player: Player, game: Optional[Game] = None) -> float:
    """
    Value for `player` when best-responding to the opponent's part of `profile`.

    Args:
        profile: Mapping infoset key -> action probabilities
        player: Player.PLAYER_1 or Player.PLAYER_2
        game: Game to evaluate (Kuhn poker by default)
    """
    if player not in (Player.PLAYER_1, Player.PLAYER_2):
        raise ValueError(f"Invalid player: {player!r}")
    game = game if game is not None else KuhnPoker()

    # Group deals by the best-responding player's own card
    deals_by_card: Dict[int, Dict[int, float]] = {}
    for (card_1, card_2), prob in game.chance_outcomes():
        own, opponent = (card_1, card_2) if player == Player.PLAYER_1 else (card_2, card_1)
        deals_by_card.setdefault(own, {})[opponent] = prob

    return sum(
        _best_response(game, profile, player, game.deal_history, own, weights)
        for own, weights in deals_by_card.items()
    )


def exploitability(profile: StrategyProfile, game: Optional[Game] = None) -> float:
    """
    Sum of both players' best response values against `profile`.

    Zero at an exact Nash equilibrium, positive otherwise.
    """
    game = game if game is not None else KuhnPoker()
    return (
        best_response_value(profile, Player.PLAYER_1, game)
        + best_response_value(profile, Player.PLAYER_2, game)
    )
