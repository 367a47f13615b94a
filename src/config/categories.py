# src/config/categories.py — v1
"""Ordered incident category registry.

Order is priority: a name matching keywords of two categories resolves to
whichever is listed first.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter

UNCATEGORIZED = "UNCATEGORIZED"


class CategoryRule(BaseModel):
    """A category name and the upper-case keywords that select it."""

    name: str
    keywords: list[str] = Field(default_factory=list)


# Add or modify entries here; keywords are matched as substrings of the
# upper-cased incident name.
DEFAULT_CATEGORIES: list[CategoryRule] = [
    CategoryRule(name="Stores", keywords=["STORES", "RETAIL"]),
    CategoryRule(name="Orca", keywords=["ORCA"]),
    CategoryRule(name="Network", keywords=["EHOP", "DISTB"]),
    CategoryRule(name="Cloud", keywords=["AWS", "AZURE", "GCP", "GWS"]),
    CategoryRule(name="Rewards", keywords=["RWDS"]),
    CategoryRule(name="MyDeal", keywords=["MDEAL"]),
    CategoryRule(name="BigW", keywords=["BIGW"]),
    CategoryRule(name="WowCorp", keywords=["CORP", "WOW", "WOWGA"]),
    CategoryRule(name="GFS", keywords=["GFS"]),
    CategoryRule(name="Hoax Mailbox", keywords=["HOAX"]),
]

_RULES_ADAPTER = TypeAdapter(list[CategoryRule])


def load_categories(path: Path | str | None = None) -> list[CategoryRule]:
    """Load an ordered category list from a JSON file.

    The file holds a list of ``{"name": ..., "keywords": [...]}`` objects.
    Keywords are upper-cased on load.

    Args:
        path: JSON file path. None returns the built-in defaults.

    Returns:
        Ordered list of CategoryRule.
    """
    if path is None:
        return list(DEFAULT_CATEGORIES)
    data = json.loads(Path(path).expanduser().read_text(encoding="utf-8"))
    rules = _RULES_ADAPTER.validate_python(data)
    return [
        CategoryRule(name=r.name, keywords=[k.upper() for k in r.keywords])
        for r in rules
    ]
