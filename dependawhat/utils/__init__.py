"""Utility functions."""

from .logging import setup_logging, get_logger
from .metrics import CheckSummary, calculate_summary, format_summary

__all__ = [
    "setup_logging",
    "get_logger",
    "CheckSummary",
    "calculate_summary",
    "format_summary",
]
