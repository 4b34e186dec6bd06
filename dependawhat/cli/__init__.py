"""CLI commands."""

from .check_cmd import run_check, format_report, select_repositories
from .init_cmd import init_config

__all__ = ["run_check", "format_report", "select_repositories", "init_config"]
