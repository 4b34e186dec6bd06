#!/usr/bin/env python3
"""
dependawhat - Main Entry Point

Read-only check of open Dependabot pull requests across repositories,
showing CI status and which PRs are skipped by deny lists.

Usage:
    dependawhat check owner/repo [owner/repo ...]
    dependawhat check --config ~/.dependawhat/config.yaml
    dependawhat init
"""

import argparse
import logging
import sys
from pathlib import Path

from .cli import init_config, run_check
from .config import ConfigError, load_config
from .utils import setup_logging, get_logger


def cmd_init(args):
    """Handle 'init' subcommand."""
    target = Path(args.path).expanduser() if args.path else None
    success = init_config(target)
    sys.exit(0 if success else 1)


def cmd_check(args):
    """Handle 'check' subcommand."""
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)
    logger = get_logger()

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    if config.config_file:
        logger.info(f"Using config file: {config.config_file}")

    config.apply_overrides(
        github_token=args.github_token,
        deny_packages=args.deny_packages,
        deny_orgs=args.deny_orgs,
        max_parallel=args.max_parallel,
    )

    try:
        run_check(config, repositories=args.repositories)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dependawhat",
        description="Check for open Dependabot PRs (read-only)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # init command
    init_parser = subparsers.add_parser("init", help="Write a starter config file")
    init_parser.add_argument(
        "path",
        nargs="?",
        help="Config file path (default: ~/.dependawhat/config.yaml)"
    )

    # check command
    check_parser = subparsers.add_parser(
        "check",
        help="Check for open Dependabot PRs across repositories",
        description=(
            "List open Dependabot PRs with CI status and deny list information. "
            "Without repository arguments, checks every repository configured "
            "under 'repositories' in the config file."
        )
    )
    check_parser.add_argument(
        "repositories",
        nargs="*",
        metavar="owner/repo",
        help="Repositories to check"
    )
    check_parser.add_argument(
        "--config",
        type=str,
        help="Config file (default: ~/.dependawhat/config.yaml)"
    )
    check_parser.add_argument(
        "--github-token",
        type=str,
        help="GitHub token (defaults to USER_GITHUB_TOKEN env var)"
    )
    check_parser.add_argument(
        "--deny-packages",
        action="append",
        default=[],
        help="Packages to deny, comma-separated or repeated"
    )
    check_parser.add_argument(
        "--deny-orgs",
        action="append",
        default=[],
        help="Organizations to deny, comma-separated or repeated"
    )
    check_parser.add_argument(
        "--max-parallel",
        type=int,
        default=None,
        help="Repositories to check at once (default: 1)"
    )
    check_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def main():
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    # Route to subcommand
    if args.command == "init":
        cmd_init(args)
    elif args.command == "check":
        cmd_check(args)
    else:
        # No subcommand - show help
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
