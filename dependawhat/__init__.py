"""dependawhat - read-only report of open Dependabot PRs and deny-list matches."""

__version__ = "0.1.0"
