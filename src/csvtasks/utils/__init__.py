"""Utilities module for csvtasks."""

from .date_utils import date_only, is_bare_date, normalize_due
from .logging_utils import get_logger, log_operation, setup_logging

__all__ = [
    # Date utilities
    "normalize_due",
    "date_only",
    "is_bare_date",
    # Logging utilities
    "get_logger",
    "setup_logging",
    "log_operation",
]
