"""Shared text matching utilities for catalog search and grouping."""

from typing import Optional


def normalize_for_match(text: Optional[str]) -> str:
    """Lowercase and strip for matching; empty string if None."""
    return (text or "").lower().strip()


def contains_query(query: str, *fields: Optional[str]) -> bool:
    """
    Case-insensitive substring match of `query` against any field.
    An empty query matches everything.
    """
    needle = normalize_for_match(query)
    if not needle:
        return True
    return any(needle in normalize_for_match(f) for f in fields)


def skill_key(skill: object) -> Optional[str]:
    """Group key for a skill tag: trimmed text, or None when blank or not a string."""
    # Case is kept: "Python" and "python" are separate groups
    if not isinstance(skill, str):
        return None
    key = skill.strip()
    return key or None
