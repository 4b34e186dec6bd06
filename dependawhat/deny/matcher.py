"""Deny-list matching for parsed dependencies."""

from typing import Optional, Sequence, Tuple, Union

from ..models import (
    DependencyReference,
    DenyDecision,
    DenyPolicy,
    EffectivePolicy,
    MatchKind,
)


def _wildcard_matches(pattern: str, package: str) -> bool:
    """
    Match one of the four recognised wildcard forms.

    Any other wildcard text never matches. Both arguments are lower-cased.
    """
    if pattern == "*alpha*":
        return "alpha" in package
    if pattern == "*beta*":
        return "beta" in package
    if pattern == "*rc*":
        return "rc" in package
    if pattern == "*/v0":
        return package.endswith("/v0")
    return False


def _entry_matches(entry: str, package: str) -> Optional[MatchKind]:
    """Return the kind of match for one deny entry, or None. Package is lower-cased."""
    denied = entry.lower()

    if "*" in denied:
        return MatchKind.WILDCARD if _wildcard_matches(denied, package) else None

    if "@" in denied:
        return MatchKind.VERSIONED if denied in package else None

    if package == denied:
        return MatchKind.EXACT

    # "pkg@v1.7.0" against a plain "pkg" entry
    at = package.find("@")
    if at > 0 and package[:at] == denied:
        return MatchKind.VERSION_SUFFIX

    return None


def match_package(
    package_name: str,
    denied_packages: Sequence[str]
) -> Optional[Tuple[str, MatchKind]]:
    """
    Find the first deny entry matching a package name.

    Args:
        package_name: Package identifier from the PR title
        denied_packages: Ordered deny entries

    Returns:
        (entry, kind) for the first entry that matches, or None
    """
    if not package_name:
        return None

    package = package_name.lower()
    for entry in denied_packages:
        if not entry:
            continue
        kind = _entry_matches(entry, package)
        if kind is not None:
            return entry, kind

    return None


def match_org(org_name: str, denied_orgs: Sequence[str]) -> Optional[str]:
    """Return the first deny entry equal to org_name (case-insensitive), or None."""
    if not org_name:
        return None

    org = org_name.lower()
    for entry in denied_orgs:
        if entry and entry.lower() == org:
            return entry

    return None


def is_denied(
    ref: DependencyReference,
    policy: Union[DenyPolicy, EffectivePolicy]
) -> DenyDecision:
    """
    Decide whether a dependency is denied by a policy.

    Org and package rules are evaluated in a single pass and the decision
    carries the rule that fired. When both an org and a package rule match,
    the org reason is reported.

    Args:
        ref: Parsed dependency reference
        policy: Deny rules to apply

    Returns:
        DenyDecision; an empty reference is never denied
    """
    org_entry = match_org(ref.org_name, policy.denied_orgs)
    if org_entry is not None:
        return DenyDecision(
            denied=True,
            reason=f"org '{ref.org_name}' is denied",
            rule=org_entry,
            kind=MatchKind.ORG,
        )

    package_match = match_package(ref.package_name, policy.denied_packages)
    if package_match is not None:
        entry, kind = package_match
        return DenyDecision(
            denied=True,
            reason=f"package '{entry}' is denied",
            rule=entry,
            kind=kind,
        )

    return DenyDecision.allowed()
