"""
Core CFR operations on per-infoset action vectors.

- Regret matching: convert cumulative regrets to a strategy
- Average strategy: convert reach-weighted strategy sums to a distribution
- Invariant checks used while debugging the solver

Every vector is a float32 array of length num_actions. Both conversions fall
back to the uniform distribution explicitly instead of dividing by zero.
"""

import numpy as np

from kuhn_cfr.config import DTYPE

# Tolerance for "sums to one" checks on float32 distributions
DISTRIBUTION_TOLERANCE = 1e-4


def uniform_strategy(num_actions: int = 2) -> np.ndarray:
    """
    Create uniform strategy (equal probability for all actions).

    Args:
        num_actions: Number of actions at the infoset

    Returns:
        strategy: Array of shape (num_actions,)
    """
    return np.full(num_actions, 1.0 / num_actions, dtype=DTYPE)


def compute_strategy(regret_sum: np.ndarray) -> np.ndarray:
    """
    Convert cumulative regrets to strategy via regret matching.

        positive_regrets = max(0, regrets)
        if sum(positive_regrets) > 0:
            strategy = positive_regrets / sum(positive_regrets)
        else:
            strategy = uniform over actions

    Args:
        regret_sum: Array of shape (num_actions,)

    Returns:
        strategy: Array of shape (num_actions,) - valid probability distribution
    """
    regrets = np.asarray(regret_sum, dtype=DTYPE)
    positive_regrets = np.maximum(regrets, 0)
    total = positive_regrets.sum(dtype=DTYPE)

    if total > 0:
        return (positive_regrets / total).astype(DTYPE)
    return uniform_strategy(len(regrets))


def average_strategy(strategy_sum: np.ndarray, reach_pr_sum: float) -> np.ndarray:
    """
    Time-averaged strategy of an infoset.

        total_strategy = strategy_sum / reach_pr_sum
        average_strategy = total_strategy / sum(total_strategy)

    An infoset that was created but never reached with positive probability
    (reach_pr_sum == 0) averages to uniform.

    Args:
        strategy_sum: Reach-weighted strategy sums, shape (num_actions,)
        reach_pr_sum: Cumulative reach probability of the infoset

    Returns:
        strategy: Array of shape (num_actions,)
    """
    sums = np.asarray(strategy_sum, dtype=DTYPE)
    num_actions = len(sums)

    if reach_pr_sum <= 0:
        return uniform_strategy(num_actions)

    total_strategy = sums / DTYPE(reach_pr_sum)
    total = total_strategy.sum(dtype=DTYPE)
    if total <= 0:
        return uniform_strategy(num_actions)
    return (total_strategy / total).astype(DTYPE)


# =============================================================================
# Invariant checks for debugging CFR
# =============================================================================

def check_distribution(
    strategy: np.ndarray,
    tolerance: float = DISTRIBUTION_TOLERANCE,
    label: str = "strategy"
) -> bool:
    """
    Check that `strategy` is a probability distribution.

    Returns:
        True if invariant holds, raises AssertionError otherwise
    """
    strategy = np.asarray(strategy)

    assert np.all(strategy >= 0), \
        f"Negative probability in {label}: {strategy}"

    total = float(strategy.sum())
    assert abs(total - 1.0) < tolerance, \
        f"Probabilities in {label} sum to {total:.6f}, tolerance = {tolerance}"

    return True


def check_regret_invariant(
    strategy: np.ndarray,
    instant_regret: np.ndarray,
    tolerance: float = 1e-5,
    label: str = "infoset"
) -> bool:
    """
    Check CFR invariant: sum_a sigma[a] * instant_regret[a] ≈ 0 at one node.

    This must hold because:
    - instant_regret[a] = u[a] - u
    - u = sum_a sigma[a] * u[a]
    - Therefore: sum_a sigma[a] * (u[a] - u) = u - u = 0

    Args:
        strategy: Strategy used at the node
        instant_regret: Per-action regrets computed at the node
        tolerance: Tolerance for floating point comparison
        label: Name used in the failure message

    Returns:
        True if invariant holds, raises AssertionError otherwise
    """
    sigma_regret_sum = float(np.sum(np.asarray(strategy) * np.asarray(instant_regret)))

    assert abs(sigma_regret_sum) < tolerance, \
        f"Regret invariant violated at {label}: " \
        f"sum(sigma * regret) = {sigma_regret_sum:.9f}, tolerance = {tolerance}"

    return True
