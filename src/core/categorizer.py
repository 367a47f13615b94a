# src/core/categorizer.py — v1
"""Keyword-based incident categorization."""

from __future__ import annotations

from collections.abc import Sequence

from incidentsync.config.categories import DEFAULT_CATEGORIES, UNCATEGORIZED, CategoryRule


def categorize(
    name: str, rules: Sequence[CategoryRule] = DEFAULT_CATEGORIES
) -> str:
    """Return the first category whose keywords appear in the name.

    Matching is case-insensitive (the name is upper-cased). Returns
    UNCATEGORIZED when no rule matches.
    """
    upper = name.upper()
    for rule in rules:
        if any(keyword in upper for keyword in rule.keywords):
            return rule.name
    return UNCATEGORIZED
