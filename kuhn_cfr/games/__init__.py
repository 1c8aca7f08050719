"""
Game definitions layer (Layer 1 - lowest).

It must not import from any other kuhn_cfr layer.
"""

from kuhn_cfr.games.base import Game, Player, Action
from kuhn_cfr.games.kuhn import KuhnPoker

__all__ = ['Game', 'Player', 'Action', 'KuhnPoker']
