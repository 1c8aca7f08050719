"""
CFR solver algorithms layer (Layer 4 - highest).

It may import from: kuhn_cfr.reporting, kuhn_cfr.engine, kuhn_cfr.games, kuhn_cfr.config
"""

from kuhn_cfr.solvers.vanilla import CFRSolver
from kuhn_cfr.solvers.best_response import (
    policy_value,
    best_response_value,
    exploitability,
)

__all__ = ['CFRSolver', 'policy_value', 'best_response_value', 'exploitability']
