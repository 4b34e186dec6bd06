"""Tools for dependawhat."""

from .github_tool import GitHubTool

__all__ = [
    "GitHubTool",
]
