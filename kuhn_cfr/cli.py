"""
Command line entry point.

    kuhn-cfr --iterations 10000
    python -m kuhn_cfr -n 50000 --precision 4 --exploitability
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from kuhn_cfr import config
from kuhn_cfr.reporting.strategy_report import format_report, report_to_dict
from kuhn_cfr.solvers.vanilla import CFRSolver

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="kuhn-cfr",
        description="Solve 3-card Kuhn poker with vanilla CFR and print the average strategy",
    )
    p.add_argument("-n", "--iterations", type=_positive_int, default=config.DEFAULT_ITERATIONS,
                   help=f"number of CFR iterations (default {config.DEFAULT_ITERATIONS})")
    p.add_argument("--precision", type=_non_negative_int, default=None,
                   help="digits after the decimal point (default: shortest float32 repr)")
    p.add_argument("--json", action="store_true", help="print the report as JSON")
    p.add_argument("--exploitability", action="store_true",
                   help="also report exploitability of the average strategy")
    p.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT,
    )

    solver = CFRSolver()
    solver.run(args.iterations)
    report = solver.report()

    expl = solver.exploitability() if args.exploitability else None
    if expl is not None:
        logger.info("Exploitability after %d iterations: %.6f", solver.iterations, expl)

    if args.json:
        payload = report_to_dict(report)
        if expl is not None:
            payload["exploitability"] = expl
        print(json.dumps(payload, indent=2))
    else:
        print(format_report(report, precision=args.precision))
        if expl is not None:
            print(f"exploitability: {expl:.6f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
