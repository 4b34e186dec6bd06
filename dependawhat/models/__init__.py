"""Data models for dependency PR checks."""

from .dependency import (
    MatchKind,
    DependencyReference,
    DenyPolicy,
    EffectivePolicy,
    DenyDecision,
)
from .report import CIStatus, PullRequestRecord, RepositoryReport

__all__ = [
    "MatchKind",
    "DependencyReference",
    "DenyPolicy",
    "EffectivePolicy",
    "DenyDecision",
    "CIStatus",
    "PullRequestRecord",
    "RepositoryReport",
]
