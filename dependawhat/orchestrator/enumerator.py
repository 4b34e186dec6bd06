"""Enumerate open dependency-update PRs and build per-repository reports."""

import asyncio
from typing import List, Optional, Sequence, Tuple

from github import GithubException
from github.PullRequest import PullRequest
from requests import RequestException

from ..config import DEPENDABOT_USER_ID, parse_repository
from ..deny import is_denied, parse_title
from ..models import (
    DependencyReference,
    DenyDecision,
    EffectivePolicy,
    PullRequestRecord,
    RepositoryReport,
)
from ..tools import GitHubTool
from ..utils import get_logger


def evaluate_pull(title: str, policy: EffectivePolicy) -> Tuple[DependencyReference, DenyDecision]:
    """Parse a PR title and match it against a policy. No network access."""
    ref = parse_title(title)
    return ref, is_denied(ref, policy)


class PREnumerator:
    """
    Builds reports of open bot-authored PRs.

    Per repository:
    1. List open PRs (a failure here becomes the report's error)
    2. Keep PRs opened by the dependency-update bot
    3. Parse title and apply deny rules
    4. Attach the head commit's combined CI status
    """

    def __init__(self, github: GitHubTool, bot_user_id: int = DEPENDABOT_USER_ID):
        """
        Initialize PR enumerator.

        Args:
            github: Read-only GitHub wrapper
            bot_user_id: Account id whose PRs are reported
        """
        self.github = github
        self.bot_user_id = bot_user_id
        self.logger = get_logger()

    def is_bot_pull(self, pr: PullRequest) -> bool:
        """Check if a PR was opened by the dependency-update bot."""
        return pr.user is not None and pr.user.id == self.bot_user_id

    def fetch_status(self, owner: str, repo: str, sha: str) -> str:
        """
        Fetch the combined CI state of a commit.

        Returns:
            State string, or "" if it could not be fetched
        """
        try:
            return self.github.get_combined_status(owner, repo, sha)
        except (GithubException, RequestException) as e:
            self.logger.warning(f"{owner}/{repo}: status unavailable for {sha[:7]}: {e}")
            return ""

    def build_record(
        self,
        owner: str,
        repo: str,
        pr: PullRequest,
        policy: EffectivePolicy
    ) -> PullRequestRecord:
        """Build the report entry for one PR."""
        ref, decision = evaluate_pull(pr.title, policy)

        if decision.denied:
            self.logger.debug(f"{owner}/{repo}#{pr.number}: {decision.reason}")

        ci_status = self.fetch_status(owner, repo, pr.head.sha)

        return PullRequestRecord(
            number=pr.number,
            title=pr.title,
            url=pr.html_url,
            dependency=ref,
            denied=decision.denied,
            deny_reason=decision.reason,
            ci_status=ci_status,
        )

    def check_repository(self, repository: str, policy: EffectivePolicy) -> RepositoryReport:
        """
        Check one repository.

        Args:
            repository: "owner/repo"
            policy: Effective deny rules for this repository

        Returns:
            RepositoryReport, with error set if PRs could not be listed
        """
        try:
            owner, repo = parse_repository(repository)
        except ValueError as e:
            return RepositoryReport(repository=repository, error=str(e))

        try:
            pulls = self.github.list_open_pulls(owner, repo)
        except (GithubException, RequestException) as e:
            self.logger.error(f"{repository}: failed to list pull requests: {e}")
            return RepositoryReport(repository=f"{owner}/{repo}", error=str(e))

        records = [
            self.build_record(owner, repo, pr, policy)
            for pr in pulls
            if self.is_bot_pull(pr)
        ]

        report = RepositoryReport(repository=f"{owner}/{repo}", pull_requests=records)
        self.logger.info(
            f"{report.repository}: {len(records)} Dependabot PRs, "
            f"{report.denied_count} skipped"
        )

        return report

    async def _check_parallel(
        self,
        targets: Sequence[Tuple[str, EffectivePolicy]],
        max_parallel: int
    ) -> List[RepositoryReport]:
        semaphore = asyncio.Semaphore(max_parallel)

        async def limited_check(repository: str, policy: EffectivePolicy) -> RepositoryReport:
            async with semaphore:
                worker = PREnumerator(self.github.fork(), bot_user_id=self.bot_user_id)
                return await asyncio.to_thread(worker.check_repository, repository, policy)

        tasks = [limited_check(repository, policy) for repository, policy in targets]
        return list(await asyncio.gather(*tasks))

    def check_repositories(
        self,
        targets: Sequence[Tuple[str, EffectivePolicy]],
        max_parallel: Optional[int] = 1
    ) -> List[RepositoryReport]:
        """
        Check several repositories.

        Args:
            targets: (repository, policy) pairs
            max_parallel: Repositories checked at once (1 = sequential)

        Returns:
            Reports in the same order as targets
        """
        if not max_parallel or max_parallel <= 1 or len(targets) <= 1:
            return [self.check_repository(repository, policy) for repository, policy in targets]

        self.logger.debug(f"Checking {len(targets)} repositories, {max_parallel} at a time")
        return asyncio.run(self._check_parallel(targets, max_parallel))
