"""
Known Kuhn poker Nash equilibrium and validation against it.

Kuhn poker has a one-parameter family of equilibria (alpha in [0, 1/3]):
- P1 with J: bet with probability alpha
- P1 with Q: check always; call a check-bet with probability alpha + 1/3
- P1 with K: bet with probability 3 * alpha; call a check-bet always
- P2 with J: fold to a bet; bet 1/3 after a check
- P2 with Q: call a bet with probability 1/3; check after a check
- P2 with K: call a bet; bet after a check

Every equilibrium has game value -1/18 for P1. CFR converges to one member
of the family, so validation checks the properties all of them share.
"""

from typing import Dict, Optional, Tuple

import numpy as np

from kuhn_cfr.games.kuhn import PASS, BET
from kuhn_cfr.solvers.best_response import StrategyProfile, exploitability

# Game value at Nash equilibrium (same for all Nash equilibria)
NASH_GAME_VALUE = -1.0 / 18.0

# The alpha = 0 member of the equilibrium family: P1 never bets first.
# Vectors are [pass, bet].
KNOWN_NASH_PROFILE: Dict[str, np.ndarray] = {
    key: np.array(probs, dtype=np.float64)
    for key, probs in {
        "J rr": [1.0, 0.0],
        "Q rr": [1.0, 0.0],
        "K rr": [1.0, 0.0],
        "J rrcb": [1.0, 0.0],
        "Q rrcb": [2.0 / 3.0, 1.0 / 3.0],
        "K rrcb": [0.0, 1.0],
        "J rrb": [1.0, 0.0],
        "Q rrb": [2.0 / 3.0, 1.0 / 3.0],
        "K rrb": [0.0, 1.0],
        "J rrc": [2.0 / 3.0, 1.0 / 3.0],
        "Q rrc": [1.0, 0.0],
        "K rrc": [0.0, 1.0],
    }.items()
}

# Pure actions every equilibrium plays: infoset -> (action, description)
DOMINATED_ACTIONS = {
    "J rrb": (PASS, "P2 Jack fold vs bet"),
    "K rrb": (BET, "P2 King call vs bet"),
    "K rrc": (BET, "P2 King bet after check"),
    "K rrcb": (BET, "P1 King call vs check-bet"),
    "J rrcb": (PASS, "P1 Jack fold vs check-bet"),
}


def validate_against_known_nash(
    profile: StrategyProfile,
    game_value: Optional[float] = None,
    tolerance: float = 0.05,
    max_exploitability: float = 0.05
) -> Tuple[bool, str]:
    """
    Validate a strategy profile against the known Kuhn Nash equilibrium.

    Args:
        profile: Mapping infoset key -> [pass, bet] probabilities
        game_value: Player 1's game value to check against -1/18 (optional)
        tolerance: Allowed distance from 0/1 for pure actions, and from
            -1/18 for the game value
        max_exploitability: Largest acceptable exploitability

    Returns:
        (valid, report): Whether strategy is close to Nash and detailed report
    """
    report_lines = [
        "Nash Equilibrium Validation",
        "=" * 50,
        ""
    ]

    valid = True
    expl = exploitability(profile)
    report_lines.append(f"Exploitability: {expl:.6f}")

    if expl > max_exploitability:
        valid = False
        report_lines.append("WARNING: Exploitability too high!")

    if game_value is not None:
        ok = abs(game_value - NASH_GAME_VALUE) <= tolerance
        valid = valid and ok
        status = "✓" if ok else "✗"
        report_lines.append(
            f"{status} Game value: {game_value:.6f} (expected {NASH_GAME_VALUE:.6f})"
        )

    report_lines.append("")
    report_lines.append("Key Strategy Checks:")
    report_lines.append("-" * 40)

    checks = [
        (key, action.id, 1.0 - tolerance, 1.0, description)
        for key, (action, description) in DOMINATED_ACTIONS.items()
    ]
    checks.append(("J rr", BET.id, 0.0, 1.0 / 3.0 + tolerance, "P1 Jack bet frequency"))

    for infoset_key, action_idx, low, high, description in checks:
        strategy = profile.get(infoset_key)
        if strategy is None:
            valid = False
            report_lines.append(f"  ✗ {description}: infoset {infoset_key!r} missing")
            continue

        prob = float(strategy[action_idx])
        ok = low <= prob <= high
        valid = valid and ok
        status = "✓" if ok else "✗"
        report_lines.append(
            f"  {status} {description}: {prob:.3f} (expected {low:.2f}-{high:.2f})"
        )

    report_lines.append("")
    report_lines.append("=" * 50)
    report_lines.append(f"Validation: {'PASSED' if valid else 'FAILED'}")

    return valid, "\n".join(report_lines)


def run_validation(iterations: int = 10000) -> Tuple[bool, str]:
    """Train a fresh solver and validate its average strategy."""
    from kuhn_cfr.solvers.vanilla import CFRSolver

    solver = CFRSolver()
    solver.run(iterations)
    return validate_against_known_nash(
        solver.average_strategy(), game_value=solver.expected_game_value
    )
