"""Repository-level orchestration of dependency PR checks."""

from .enumerator import PREnumerator, evaluate_pull

__all__ = [
    "PREnumerator",
    "evaluate_pull",
]
