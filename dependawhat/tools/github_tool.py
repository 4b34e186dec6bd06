"""Read-only GitHub API wrapper for dependency PR checks."""

from typing import List, Optional

from github import Auth, Github
from github.PullRequest import PullRequest
from github.Repository import Repository

from ..utils import get_logger

TOKEN_MISSING_MESSAGE = (
    "GitHub token not provided. Use --github-token flag or set "
    "USER_GITHUB_TOKEN environment variable"
)


class GitHubTool:
    """
    GitHub API wrapper for listing PRs and reading commit status.

    Handles:
    - Listing open pull requests of a repository
    - Fetching the combined CI status of a commit

    Never creates, merges, closes or comments on anything.
    """

    def __init__(self, token: Optional[str] = None, client: Optional[Github] = None):
        """
        Initialize GitHub tool.

        Args:
            token: GitHub token
            client: Pre-built PyGithub client (mainly for tests)
        """
        if client is None and not token:
            raise ValueError(TOKEN_MISSING_MESSAGE)

        self.token = token
        # Lazy client: repository handles make no request until used
        self.gh = client or Github(auth=Auth.Token(token), lazy=True)
        self.logger = get_logger()

    def fork(self) -> "GitHubTool":
        """
        A tool with its own PyGithub client and connection.

        PyGithub keeps one connection per client, so threads must not share
        a client. A tool built around an injected client returns itself.
        """
        if not self.token:
            return self
        return GitHubTool(token=self.token)

    def get_repo(self, owner: str, repo: str) -> Repository:
        """Repository handle; no request is made until it is used."""
        return self.gh.get_repo(f"{owner}/{repo}")

    def list_open_pulls(self, owner: str, repo: str) -> List[PullRequest]:
        """
        List all open pull requests of a repository.

        The paginated result is read fully here so that transport errors
        surface from this call.

        Raises:
            GithubException: On API errors
            requests.RequestException: On connection errors
        """
        pulls = list(self.get_repo(owner, repo).get_pulls(state="open"))
        self.logger.debug(f"{owner}/{repo}: {len(pulls)} open PRs")
        return pulls

    def get_combined_status(self, owner: str, repo: str, sha: str) -> str:
        """
        Get the combined CI state of a commit.

        Returns:
            State string as reported by GitHub ("success", "failure", "pending", ...)

        Raises:
            GithubException: On API errors
            requests.RequestException: On connection errors
        """
        commit = self.get_repo(owner, repo).get_commit(sha)
        return commit.get_combined_status().state or ""
