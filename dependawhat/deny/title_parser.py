"""Package and organization extraction from dependency-update PR titles."""

import re
from typing import List, Optional

from ..models import DependencyReference
from ..utils import get_logger

logger = get_logger()

# First match wins, in this order
TITLE_PATTERNS: List[re.Pattern] = [
    # "Bump package from x to y" / "Bump package to y"
    re.compile(r'^bump\s+(\S+)\s+(?:from|to)', re.IGNORECASE),
    # "Update package from x to y" / "Update package to y"
    re.compile(r'^update\s+(\S+)\s+(?:from|to)', re.IGNORECASE),
    # "chore(deps): bump package from x to y"
    re.compile(r'^chore.*bump\s+(\S+)\s+(?:from|to)', re.IGNORECASE),
]

# Canonical Go namespaces with no owning organization
ORGLESS_PREFIXES = ("golang.org/x/", "google.golang.org/")


def _match_patterns(title: str) -> str:
    for pattern in TITLE_PATTERNS:
        match = pattern.match(title)
        if match:
            return match.group(1)
    return ""


def _fallback_token(title: str) -> str:
    """First token after the leading word that looks like a package path."""
    for token in title.split()[1:]:
        if "/" in token or "@" in token:
            return token
    return ""


def extract_org(package_name: str) -> str:
    """
    Infer the owning organization from a package identifier.

    Examples:
        "@datadog/browser-rum" -> "datadog"
        "github.com/datadog/datadog-go" -> "datadog"
        "gopkg.in/DataDog/dd-trace-go.v1" -> "datadog"
        "golang.org/x/net" -> ""
        "rails" -> ""

    Args:
        package_name: Package identifier as it appeared in the title

    Returns:
        Organization name, or "" when none can be inferred
    """
    if not package_name or "/" not in package_name:
        return ""

    parts = package_name.split("/")

    # Scoped registry packages: @scope/name
    if package_name.startswith("@"):
        return parts[0][1:]

    if package_name.startswith(ORGLESS_PREFIXES):
        return ""

    if package_name.startswith("gopkg.in/"):
        if len(parts) > 2:
            return parts[1].lower()
        return ""

    if package_name.startswith("github.com/") and len(parts) >= 3:
        return parts[1]

    # Skip domain parts and version indicators
    for part in parts[1:]:
        if "." not in part and not part.startswith("v"):
            return part

    return ""


def parse_title(title: Optional[str]) -> DependencyReference:
    """
    Extract the dependency identity from a bot-generated PR title.

    Tries the known title patterns first, then falls back to the first
    path-like token. Never raises: an unparseable title gives an empty
    reference.

    Args:
        title: Pull request title

    Returns:
        DependencyReference with package and org (either may be empty)
    """
    if not isinstance(title, str) or not title.strip():
        return DependencyReference()

    package_name = _match_patterns(title) or _fallback_token(title)
    if not package_name:
        logger.debug(f"No package found in title: {title!r}")
        return DependencyReference()

    org_name = extract_org(package_name)
    logger.debug(f"Parsed {title!r} -> package={package_name!r} org={org_name!r}")

    return DependencyReference(package_name=package_name, org_name=org_name)
