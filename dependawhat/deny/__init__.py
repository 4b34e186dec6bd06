"""Dependency extraction and deny-list matching.

This module provides:
- parse_title: Package/org extraction from bot PR titles
- is_denied: Deny decision for a parsed dependency
- resolve: Global + repository policy merge
"""

from .title_parser import parse_title, extract_org
from .matcher import is_denied, match_package, match_org
from .resolver import resolve, dedupe_patterns

__all__ = [
    "parse_title",
    "extract_org",
    "is_denied",
    "match_package",
    "match_org",
    "resolve",
    "dedupe_patterns",
]
