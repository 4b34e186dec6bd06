"""Data models for dependency references and deny policies."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple


class MatchKind(Enum):
    """Which kind of deny rule fired."""
    ORG = "org"                        # Organization equality
    WILDCARD = "wildcard"              # One of the recognised *...* forms
    VERSIONED = "versioned"            # Entry with @, substring match
    EXACT = "exact"                    # Plain entry, equal package name
    VERSION_SUFFIX = "version_suffix"  # Plain entry, equal after dropping @version


@dataclass(frozen=True)
class DependencyReference:
    """Package and organization parsed out of a PR title."""
    package_name: str = ""
    org_name: str = ""  # Always derived from package_name

    @property
    def is_empty(self) -> bool:
        return not self.package_name


def _as_patterns(value: Any) -> Tuple[str, ...]:
    """Normalize a config value into a tuple of pattern strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(p for p in re.split(r"[,\s]+", value) if p)
    if isinstance(value, Iterable):
        return tuple(str(v) for v in value if v is not None)
    return (str(value),)


@dataclass(frozen=True)
class DenyPolicy:
    """Deny rules for one scope (global or a single repository)."""
    denied_packages: Tuple[str, ...] = ()
    denied_orgs: Tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "DenyPolicy":
        """
        Build a policy from a configuration mapping.

        Args:
            mapping: Dict with optional ``denied_packages`` / ``denied_orgs`` keys

        Returns:
            DenyPolicy (empty when mapping is None or has neither key)
        """
        if not mapping:
            return cls()
        return cls(
            denied_packages=_as_patterns(mapping.get("denied_packages")),
            denied_orgs=_as_patterns(mapping.get("denied_orgs")),
        )


@dataclass(frozen=True)
class EffectivePolicy:
    """Merged global + repository deny rules for one repository check."""
    denied_packages: Tuple[str, ...] = ()
    denied_orgs: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DenyDecision:
    """Outcome of matching one dependency against a policy."""
    denied: bool
    reason: str = ""
    rule: Optional[str] = None       # The deny entry that fired
    kind: Optional[MatchKind] = None

    @classmethod
    def allowed(cls) -> "DenyDecision":
        return cls(denied=False)
