"""
Report logging module.

Provides append-only report logging for audit and bookkeeping.
"""

from mining_reports.logging.report_log import (
    ReportLogger,
    get_logger,
)

__all__ = [
    "ReportLogger",
    "get_logger",
]
