# src/storage/base_workbook.py — v1
"""Abstract spreadsheet surface: workbooks and sheets.

Rows and columns are 1-based, as in the spreadsheet UI.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class BaseSheet(ABC):
    """A single worksheet."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Sheet title."""

    @abstractmethod
    def set_values(
        self, row: int, col: int, values: Sequence[Sequence[Any]]
    ) -> None:
        """Write a rectangular block with its top-left cell at (row, col)."""

    @abstractmethod
    def clear(self) -> None:
        """Remove all cell contents."""

    @abstractmethod
    def get_value(self, row: int, col: int) -> Any:
        """Read a single cell (formulas are returned as their text)."""

    @abstractmethod
    def set_value(self, row: int, col: int, value: Any) -> None:
        """Write a single cell."""


class BaseWorkbook(ABC):
    """A spreadsheet file holding named sheets."""

    @property
    @abstractmethod
    def id(self) -> str:
        """Stable identifier (file path for local workbooks)."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name (file stem for local workbooks)."""

    @abstractmethod
    def get_sheet(self, name: str) -> BaseSheet | None:
        """Return the named sheet, or None if it does not exist."""

    @abstractmethod
    def save(self) -> None:
        """Persist pending changes."""
