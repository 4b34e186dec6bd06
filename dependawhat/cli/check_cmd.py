"""The 'check' command: report open Dependabot PRs across repositories."""

from typing import List, Optional

from ..config import CheckConfig, ConfigError
from ..models import CIStatus, PullRequestRecord, RepositoryReport
from ..orchestrator import PREnumerator
from ..tools import GitHubTool
from ..tools.github_tool import TOKEN_MISSING_MESSAGE
from ..utils import calculate_summary, format_summary, get_logger

REPORT_HEADER = "Open Dependabot PRs:\n-------------------------"

STATUS_ICONS = {
    CIStatus.SUCCESS.value: "[success]",
    CIStatus.FAILURE.value: "[failure]",
}


def select_repositories(requested: Optional[List[str]], config: CheckConfig) -> List[str]:
    """Repositories from the command line, else those in the config."""
    if requested:
        return list(requested)
    return list(config.repositories)


def format_pull_request(pr: PullRequestRecord) -> List[str]:
    """Lines for one PR entry."""
    lines = [
        f"   #{pr.number}: {pr.title}",
        f"   {pr.url}",
    ]
    if pr.is_skipped:
        lines.append(f"   Status: SKIPPED ({pr.deny_reason})")
    elif pr.has_status:
        icon = STATUS_ICONS.get(pr.ci_status, "[pending]")
        lines.append(f"   Status: {icon} {pr.ci_status}")
    return lines


def format_report(report: RepositoryReport) -> str:
    """
    Format one repository report for the terminal.

    Args:
        report: Report from PREnumerator

    Returns:
        Multi-line block, ending with a blank line
    """
    lines = [report.repository]

    if not report.ok:
        lines.append(f"   Error: {report.error}")
    elif not report.pull_requests:
        lines.append("   (no open Dependabot PRs)")
    else:
        for pr in report.pull_requests:
            lines.extend(format_pull_request(pr))
            lines.append("")

    lines.append("")
    return "\n".join(lines)


def run_check(
    config: CheckConfig,
    repositories: Optional[List[str]] = None,
    github: Optional[GitHubTool] = None
) -> List[RepositoryReport]:
    """
    Check repositories and print a report for each.

    Args:
        config: Loaded configuration
        repositories: Repositories given on the command line
        github: GitHub wrapper (built from config.github_token if omitted)

    Returns:
        Reports in check order

    Raises:
        ConfigError: If no token or no repositories are available
    """
    logger = get_logger()

    if github is None:
        if not config.github_token:
            raise ConfigError(TOKEN_MISSING_MESSAGE)
        github = GitHubTool(token=config.github_token)

    repos = select_repositories(repositories, config)
    if not repos:
        raise ConfigError(
            "no repositories specified. Use command-line arguments or "
            "configure repositories in config file"
        )

    logger.info(f"Checking {len(repos)} repositories")

    enumerator = PREnumerator(github, bot_user_id=config.bot_user_id)
    targets = [(repo, config.effective_policy(repo)) for repo in repos]
    reports = enumerator.check_repositories(targets, max_parallel=config.max_parallel)

    print(REPORT_HEADER)
    for report in reports:
        print(format_report(report))

    print(format_summary(calculate_summary(reports)))

    return reports
