"""
Report orchestration.
"""

from mining_reports.reports.manager import (
    EmailDeliveryError,
    MethodNotImplementedError,
    ReportError,
    ReportManager,
    UnsupportedMethodError,
)

__all__ = [
    "EmailDeliveryError",
    "MethodNotImplementedError",
    "ReportError",
    "ReportManager",
    "UnsupportedMethodError",
]
