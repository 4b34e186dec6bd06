"""Data models for pull request reports."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .dependency import DependencyReference


class CIStatus(Enum):
    """Combined commit status states reported by GitHub."""
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"


@dataclass(frozen=True)
class PullRequestRecord:
    """One bot-authored open PR with its deny decision and CI state."""
    number: int
    title: str
    url: str
    dependency: DependencyReference = field(default_factory=DependencyReference)
    denied: bool = False
    deny_reason: str = ""
    ci_status: str = ""  # "" when the status lookup was unavailable

    @property
    def is_skipped(self) -> bool:
        """Denied PRs are skipped by whoever acts on the report."""
        return self.denied

    @property
    def has_status(self) -> bool:
        return bool(self.ci_status)


@dataclass
class RepositoryReport:
    """Result of checking one repository."""
    repository: str
    pull_requests: List[PullRequestRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def denied_count(self) -> int:
        return sum(1 for pr in self.pull_requests if pr.denied)

    @property
    def allowed_count(self) -> int:
        return len(self.pull_requests) - self.denied_count
