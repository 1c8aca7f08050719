"""
Result reporting layer (Layer 3).

Pure projections of solver state into printable reports.
It may only import from: kuhn_cfr.games, kuhn_cfr.engine
"""

from kuhn_cfr.reporting.strategy_report import (
    StrategyRow,
    StrategyReport,
    build_report,
    format_report,
    report_to_dict,
)

__all__ = [
    'StrategyRow',
    'StrategyReport',
    'build_report',
    'format_report',
    'report_to_dict',
]
