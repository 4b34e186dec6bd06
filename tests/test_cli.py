"""Tests for the check/init commands and report formatting."""

import sys
from unittest.mock import MagicMock

import pytest

from dependawhat import main as main_module
from dependawhat.cli import format_report, init_config, run_check, select_repositories
from dependawhat.config import DEPENDABOT_USER_ID, CheckConfig, ConfigError
from dependawhat.models import (
    DependencyReference,
    DenyPolicy,
    PullRequestRecord,
    RepositoryReport,
)
from dependawhat.tools import GitHubTool
from dependawhat.utils import calculate_summary, format_summary


def record(number=1, denied=False, reason="", status=""):
    return PullRequestRecord(
        number=number,
        title=f"Bump lib{number} from 1 to 2",
        url=f"https://github.com/acme/api/pull/{number}",
        dependency=DependencyReference(f"lib{number}", ""),
        denied=denied,
        deny_reason=reason,
        ci_status=status,
    )


class TestFormatReport:
    """Tests for terminal report formatting."""

    def test_skipped_pull(self):
        """Given a denied PR, should print SKIPPED with the reason."""
        # Given
        report = RepositoryReport("acme/api", [record(denied=True, reason="org 'datadog' is denied")])

        # When
        text = format_report(report)

        # Then
        assert text.splitlines() == [
            "acme/api",
            "   #1: Bump lib1 from 1 to 2",
            "   https://github.com/acme/api/pull/1",
            "   Status: SKIPPED (org 'datadog' is denied)",
            "",
        ]

    @pytest.mark.parametrize("status,line", [
        ("success", "   Status: [success] success"),
        ("failure", "   Status: [failure] failure"),
        ("pending", "   Status: [pending] pending"),
        ("error", "   Status: [pending] error"),
    ])
    def test_status_icons(self, status, line):
        """Given a CI state, should print the matching icon."""
        # When
        text = format_report(RepositoryReport("acme/api", [record(status=status)]))

        # Then
        assert line in text.splitlines()

    def test_unknown_status_prints_no_status_line(self):
        """Given no CI status, should omit the status line."""
        # When
        text = format_report(RepositoryReport("acme/api", [record(status="")]))

        # Then
        assert "Status:" not in text

    def test_empty_repository(self):
        """Given no bot PRs, should say so."""
        # When
        text = format_report(RepositoryReport("acme/api"))

        # Then
        assert "   (no open Dependabot PRs)" in text.splitlines()

    def test_error_repository(self):
        """Given a failed repository, should print the error."""
        # When
        text = format_report(RepositoryReport("acme/api", error="404 Not Found"))

        # Then
        assert text.splitlines()[:2] == ["acme/api", "   Error: 404 Not Found"]


class TestSummary:
    """Tests for run totals."""

    def test_counts(self):
        """Given mixed reports, should count PRs, skips, states and errors."""
        # Given
        reports = [
            RepositoryReport("acme/one", [
                record(1, status="success"),
                record(2, status="failure"),
                record(3, denied=True, reason="r", status="success"),
            ]),
            RepositoryReport("acme/two", [record(4, status="pending"), record(5)]),
            RepositoryReport("acme/three", error="boom"),
        ]

        # When
        summary = calculate_summary(reports)

        # Then
        assert summary.repositories == 3
        assert summary.failed_repositories == 1
        assert summary.pull_requests == 5
        assert summary.skipped == 1
        assert summary.actionable == 4
        assert (summary.passing, summary.failing, summary.pending, summary.unknown_status) == (1, 1, 1, 1)
        assert "Skipped (denied): 1" in format_summary(summary)
        assert "Actionable: 4" in format_summary(summary)


class TestRunCheck:
    """Tests for the check command."""

    def test_select_repositories_prefers_arguments(self):
        """Given repositories on the command line, should ignore configured ones."""
        config = CheckConfig(repositories=["a/b"])
        assert select_repositories(["c/d"], config) == ["c/d"]
        assert select_repositories([], config) == ["a/b"]

    def test_missing_token_raises(self):
        """Given no token, should raise before contacting GitHub."""
        with pytest.raises(ConfigError, match="GitHub token not provided"):
            run_check(CheckConfig(repositories=["a/b"]))

    def test_no_repositories_raises(self):
        """Given no repositories anywhere, should raise ConfigError."""
        with pytest.raises(ConfigError, match="no repositories specified"):
            run_check(CheckConfig(), github=MagicMock(spec=GitHubTool))

    def test_prints_report(self, capsys):
        """Given configured repositories, should print a report per repository."""
        # Given
        pr = MagicMock()
        pr.number = 12
        pr.title = "Bump github.com/datadog/datadog-go from 5.0.0 to 5.1.0"
        pr.html_url = "https://github.com/acme/api/pull/12"
        pr.user.id = DEPENDABOT_USER_ID
        pr.head.sha = "abc"

        github = MagicMock(spec=GitHubTool)
        github.list_open_pulls.return_value = [pr]
        github.get_combined_status.return_value = "success"

        config = CheckConfig(
            github_token="t",
            repositories=["acme/api"],
            global_policy=DenyPolicy(denied_orgs=("datadog",)),
        )

        # When
        reports = run_check(config, github=github)

        # Then
        out = capsys.readouterr().out
        assert out.startswith("Open Dependabot PRs:\n-------------------------\n")
        assert "   Status: SKIPPED (org 'datadog' is denied)" in out
        assert reports[0].pull_requests[0].denied is True


class TestMain:
    """Tests for the argparse entry point."""

    def test_no_command_prints_help(self, monkeypatch, capsys):
        """Given no subcommand, should print help and exit 0."""
        # Given
        monkeypatch.setattr(sys, "argv", ["dependawhat"])

        # When/Then
        with pytest.raises(SystemExit) as exc:
            main_module.main()
        assert exc.value.code == 0
        assert "check" in capsys.readouterr().out

    def test_check_with_missing_config_exits_1(self, monkeypatch, tmp_path):
        """Given a config path that does not exist, should exit 1."""
        # Given
        monkeypatch.setattr(
            sys, "argv", ["dependawhat", "check", "--config", str(tmp_path / "missing.yaml")]
        )

        # When/Then
        with pytest.raises(SystemExit) as exc:
            main_module.main()
        assert exc.value.code == 1

    def test_check_without_token_exits_1(self, monkeypatch, tmp_path):
        """Given no token from any source, should exit 1."""
        # Given
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.delenv("USER_GITHUB_TOKEN", raising=False)
        monkeypatch.delenv("DEPENDAWHAT_GITHUB_TOKEN", raising=False)
        monkeypatch.setattr(sys, "argv", ["dependawhat", "check", "acme/api"])

        # When/Then
        with pytest.raises(SystemExit) as exc:
            main_module.main()
        assert exc.value.code == 1

    def test_check_flags_parse(self):
        """Given repeated deny flags, should collect them all."""
        # When
        args = main_module.build_parser().parse_args([
            "check", "a/b", "c/d",
            "--deny-packages", "x,y",
            "--deny-packages", "z",
            "--deny-orgs", "datadog",
            "--max-parallel", "3",
        ])

        # Then
        assert args.repositories == ["a/b", "c/d"]
        assert args.deny_packages == ["x,y", "z"]
        assert args.deny_orgs == ["datadog"]
        assert args.max_parallel == 3


class TestInitConfig:
    """Tests for writing a starter config."""

    def test_creates_config(self, tmp_path):
        """Given a new path, should write the template."""
        # Given
        target = tmp_path / "conf" / "config.yaml"

        # When
        assert init_config(target) is True

        # Then
        assert "denied_packages" in target.read_text()

    def test_keeps_existing_config(self, tmp_path):
        """Given an existing file, should leave it untouched."""
        # Given
        target = tmp_path / "config.yaml"
        target.write_text("global: {}\n")

        # When
        assert init_config(target) is True

        # Then
        assert target.read_text() == "global: {}\n"

    def test_template_loads(self, tmp_path):
        """Given the written template, should load as a valid config."""
        # Given
        from dependawhat.config import load_config
        target = tmp_path / "config.yaml"
        init_config(target)

        # When
        config = load_config(str(target), env={})

        # Then
        assert config.global_policy.denied_packages == ("*alpha*", "*beta*")
        assert config.repositories == []
