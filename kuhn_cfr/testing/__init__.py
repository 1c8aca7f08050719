"""
Testing infrastructure.

This module provides the known Kuhn equilibrium and validation against it.
It may import from any layer (test-only code).
"""

from kuhn_cfr.testing.nash import (
    NASH_GAME_VALUE,
    KNOWN_NASH_PROFILE,
    DOMINATED_ACTIONS,
    validate_against_known_nash,
    run_validation,
)

__all__ = [
    'NASH_GAME_VALUE',
    'KNOWN_NASH_PROFILE',
    'DOMINATED_ACTIONS',
    'validate_against_known_nash',
    'run_validation',
]
