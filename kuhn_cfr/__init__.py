"""
Kuhn Poker CFR Solver

Counterfactual Regret Minimization for 3-card Kuhn poker: a recursive
self-play solver whose average strategy converges to a Nash equilibrium.
"""

__version__ = "0.1.0"
