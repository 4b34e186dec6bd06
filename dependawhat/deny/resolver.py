"""Merge global and per-repository deny policies."""

from typing import Iterable, Optional, Tuple

from ..models import DenyPolicy, EffectivePolicy


def dedupe_patterns(entries: Iterable[str]) -> Tuple[str, ...]:
    """
    Trim, drop blanks and remove case-insensitive duplicates.

    The first occurrence wins and keeps its casing and position.
    """
    seen = set()
    result = []

    for entry in entries:
        cleaned = entry.strip()
        normalized = cleaned.lower()
        if normalized and normalized not in seen:
            seen.add(normalized)
            result.append(cleaned)

    return tuple(result)


def resolve(
    global_policy: DenyPolicy,
    repo_override: Optional[DenyPolicy] = None
) -> EffectivePolicy:
    """
    Build the effective deny rules for one repository.

    Args:
        global_policy: Rules that apply to every repository
        repo_override: Repository-specific rules (None means none configured)

    Returns:
        EffectivePolicy with global entries first
    """
    override = repo_override or DenyPolicy()

    return EffectivePolicy(
        denied_packages=dedupe_patterns(
            list(global_policy.denied_packages) + list(override.denied_packages)
        ),
        denied_orgs=dedupe_patterns(
            list(global_policy.denied_orgs) + list(override.denied_orgs)
        ),
    )
