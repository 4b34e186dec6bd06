"""Configuration for dependawhat."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple
import os

import yaml

from .deny import resolve
from .models import DenyPolicy, EffectivePolicy

# GitHub account id of dependabot[bot]
DEPENDABOT_USER_ID = 49699333

DEFAULT_CONFIG_DIR = ".dependawhat"
DEFAULT_CONFIG_NAME = "config.yaml"


class ConfigError(ValueError):
    """Raised when configuration cannot be loaded or is unusable."""


def default_config_path() -> Path:
    """Path of the config file used when none is given explicitly."""
    return Path.home() / DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_NAME


def parse_repository(path: str) -> Tuple[str, str]:
    """
    Split "owner/repo" into its parts.

    Raises:
        ValueError: If path is not exactly two non-empty segments
    """
    parts = path.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Invalid repository format: {path} (expected owner/repo)")
    return parts[0], parts[1]


def _split_flag_values(values: Optional[List[str]]) -> Tuple[str, ...]:
    """Flatten repeated and comma-separated CLI values."""
    result = []
    for value in values or []:
        result.extend(v.strip() for v in value.split(",") if v.strip())
    return tuple(result)


def _parse_int(value: Any, key: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid integer for {key}: {value!r}")


@dataclass
class CheckConfig:
    """Everything a check run needs, resolved once at startup."""

    # GitHub settings
    github_token: Optional[str] = None
    bot_user_id: int = DEPENDABOT_USER_ID

    # Repositories to check, in order ("owner/repo")
    repositories: List[str] = field(default_factory=list)

    # Deny policies
    global_policy: DenyPolicy = field(default_factory=DenyPolicy)
    repository_policies: Dict[str, DenyPolicy] = field(default_factory=dict)

    # Parallel processing across repositories
    max_parallel: int = 1

    # Where the settings came from (None when no file was read)
    config_file: Optional[str] = None

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        config_file: Optional[str] = None
    ) -> "CheckConfig":
        """
        Create config from a parsed YAML document.

        Args:
            data: Top-level mapping from the config file
            config_file: Path the mapping was read from

        Returns:
            CheckConfig
        """
        global_section = data.get("global")
        if global_section is not None and not isinstance(global_section, Mapping):
            raise ConfigError("'global' must be a mapping")
        global_policy = DenyPolicy.from_mapping(global_section)

        repositories: List[str] = []
        repository_policies: Dict[str, DenyPolicy] = {}

        repo_section = data.get("repositories") or {}
        if isinstance(repo_section, Mapping):
            for name, overrides in repo_section.items():
                repositories.append(str(name))
                if overrides is not None and not isinstance(overrides, Mapping):
                    raise ConfigError(f"repositories.{name} must be a mapping")
                repository_policies[str(name).lower()] = DenyPolicy.from_mapping(overrides)
        elif isinstance(repo_section, list):
            repositories = [str(name) for name in repo_section]
        else:
            raise ConfigError("'repositories' must be a mapping of owner/repo entries")

        # Older configs listed repositories under check.repositories
        if not repositories:
            check_section = data.get("check") or {}
            if isinstance(check_section, Mapping):
                legacy = check_section.get("repositories") or []
                repositories = [str(name) for name in legacy]

        config = cls(
            github_token=data.get("github-token") or None,
            repositories=repositories,
            global_policy=global_policy,
            repository_policies=repository_policies,
            config_file=config_file,
        )

        if data.get("bot-user-id") is not None:
            config.bot_user_id = _parse_int(data["bot-user-id"], "bot-user-id")
        if data.get("max-parallel") is not None:
            config.max_parallel = _parse_int(data["max-parallel"], "max-parallel")

        return config

    def apply_env(self, env: Mapping[str, str]) -> None:
        """Override settings from environment variables."""
        token = env.get("USER_GITHUB_TOKEN") or env.get("DEPENDAWHAT_GITHUB_TOKEN")
        if token:
            self.github_token = token
        if env.get("DEPENDAWHAT_MAX_PARALLEL"):
            self.max_parallel = _parse_int(env["DEPENDAWHAT_MAX_PARALLEL"], "DEPENDAWHAT_MAX_PARALLEL")

    def apply_overrides(
        self,
        github_token: Optional[str] = None,
        deny_packages: Optional[List[str]] = None,
        deny_orgs: Optional[List[str]] = None,
        max_parallel: Optional[int] = None,
    ) -> None:
        """
        Merge command-line flags into the config.

        Denied packages and orgs given on the command line are appended to
        the global policy.
        """
        if github_token:
            self.github_token = github_token

        extra_packages = _split_flag_values(deny_packages)
        extra_orgs = _split_flag_values(deny_orgs)
        if extra_packages or extra_orgs:
            self.global_policy = DenyPolicy(
                denied_packages=self.global_policy.denied_packages + extra_packages,
                denied_orgs=self.global_policy.denied_orgs + extra_orgs,
            )

        if max_parallel is not None:
            self.max_parallel = max_parallel

    def policy_for(self, repository: str) -> DenyPolicy:
        """Repository override, or an empty policy when none is configured."""
        return self.repository_policies.get(repository.strip().lower(), DenyPolicy())

    def effective_policy(self, repository: str) -> EffectivePolicy:
        """Global rules merged with the repository's own."""
        return resolve(self.global_policy, self.policy_for(repository))


def load_config(
    config_file: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None
) -> CheckConfig:
    """
    Load configuration from YAML and the environment.

    An explicit config_file must exist. Without one, the default
    ~/.dependawhat/config.yaml is read if present.

    Args:
        config_file: Path to a YAML config file
        env: Environment mapping (defaults to os.environ)

    Returns:
        CheckConfig

    Raises:
        ConfigError: If the file is missing (explicit path) or malformed
    """
    env = os.environ if env is None else env

    path = Path(config_file).expanduser() if config_file else default_config_path()

    data: Dict[str, Any] = {}
    used_file: Optional[str] = None

    if path.is_file():
        try:
            with open(path, "r") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}")

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        data = loaded
        used_file = str(path)
    elif config_file:
        raise ConfigError(f"Config file not found: {path}")

    config = CheckConfig.from_mapping(data, config_file=used_file)
    config.apply_env(env)

    return config
