"""
CFR engine layer (Layer 2).

Regret matching and the infoset store.
It may only import from: kuhn_cfr.games, kuhn_cfr.config
"""

from kuhn_cfr.engine.ops import (
    DTYPE,
    compute_strategy,
    average_strategy,
    uniform_strategy,
    check_distribution,
    check_regret_invariant,
)

from kuhn_cfr.engine.infosets import (
    InformationSet,
    InformationSetStore,
)

__all__ = [
    'DTYPE',
    'compute_strategy',
    'average_strategy',
    'uniform_strategy',
    'check_distribution',
    'check_regret_invariant',
    'InformationSet',
    'InformationSetStore',
]
