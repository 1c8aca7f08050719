"""
Run configuration.

Defaults for the command line entry point. Each can be overridden through
the environment so batch jobs don't need to pass flags:

    KUHN_CFR_ITERATIONS   number of CFR iterations (default 10000)
    KUHN_CFR_LOG_LEVEL    logging level name (default WARNING)
    KUHN_CFR_LOG_EVERY    iterations between solver progress lines (default 1000)

Game constants (deck size, action count) live in kuhn_cfr.games.kuhn and
are not configurable.
"""

import logging
import os

import numpy as np

DTYPE = np.float32

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_log_level(name: str, default: str) -> str:
    level = os.getenv(name) or default
    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{name} must be a logging level name, got {level!r}")
    return level


DEFAULT_ITERATIONS = _env_int('KUHN_CFR_ITERATIONS', 10000)
LOG_LEVEL = _env_log_level('KUHN_CFR_LOG_LEVEL', 'WARNING')

# Progress line cadence for the solver's debug log
LOG_EVERY = _env_int('KUHN_CFR_LOG_EVERY', 1000)
