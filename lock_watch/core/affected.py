"""Handling of the user's affected package list."""

from typing import FrozenSet, Iterable


def parse_affected_names(text: str) -> FrozenSet[str]:
    """Turn free-form list text into a set of package names.

    One name per line; surrounding whitespace is trimmed and blank lines are
    dropped.

    Args:
        text: Multi-line list text

    Returns:
        Set of package names
    """
    return normalize_affected_names(text.splitlines())


def normalize_affected_names(names: Iterable[str]) -> FrozenSet[str]:
    """Trim names and drop blanks."""
    return frozenset(name.strip() for name in names if name.strip())


def format_affected_names(names: Iterable[str]) -> str:
    """Render names as list text, one per line, sorted."""
    return "".join(f"{name}\n" for name in sorted(normalize_affected_names(names)))
