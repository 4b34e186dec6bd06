"""Summary counts for a check run."""

from dataclasses import dataclass
from typing import List

from ..models import CIStatus, RepositoryReport


@dataclass
class CheckSummary:
    """Totals across all repositories in one check run."""

    repositories: int = 0
    failed_repositories: int = 0
    pull_requests: int = 0
    skipped: int = 0
    passing: int = 0
    failing: int = 0
    pending: int = 0
    unknown_status: int = 0

    @property
    def actionable(self) -> int:
        """PRs that are not denied."""
        return self.pull_requests - self.skipped


def calculate_summary(reports: List[RepositoryReport]) -> CheckSummary:
    """
    Count PRs and outcomes across repository reports.

    CI states are only counted for PRs that were not skipped.

    Args:
        reports: Reports from PREnumerator

    Returns:
        CheckSummary with totals
    """
    summary = CheckSummary(repositories=len(reports))

    for report in reports:
        if not report.ok:
            summary.failed_repositories += 1
            continue

        for pr in report.pull_requests:
            summary.pull_requests += 1
            if pr.denied:
                summary.skipped += 1
                continue

            if pr.ci_status == CIStatus.SUCCESS.value:
                summary.passing += 1
            elif pr.ci_status in (CIStatus.FAILURE.value, CIStatus.ERROR.value):
                summary.failing += 1
            elif pr.ci_status == CIStatus.PENDING.value:
                summary.pending += 1
            else:
                summary.unknown_status += 1

    return summary


def format_summary(summary: CheckSummary) -> str:
    """Format totals as a short human-readable block."""
    lines = [
        "Summary:",
        f"  Repositories checked: {summary.repositories}",
        f"  Repositories with errors: {summary.failed_repositories}",
        f"  Open Dependabot PRs: {summary.pull_requests}",
        f"  Skipped (denied): {summary.skipped}",
        f"  Actionable: {summary.actionable}",
        f"  CI passing: {summary.passing}",
        f"  CI failing: {summary.failing}",
        f"  CI pending: {summary.pending}",
    ]
    if summary.unknown_status:
        lines.append(f"  CI status unavailable: {summary.unknown_status}")

    return "\n".join(lines)
