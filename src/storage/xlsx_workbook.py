# src/storage/xlsx_workbook.py — v1
"""Excel workbook backend using openpyxl.

openpyxl does not round-trip charts, images or drawing shapes: saving a
loaded workbook drops them. Keep charts on a sheet of a separate workbook
(or rebuild them after each pass) rather than on the sheets written here.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.worksheet.worksheet import Worksheet

from incidentsync.storage.base_workbook import BaseSheet, BaseWorkbook

logger = logging.getLogger(__name__)


class XlsxSheet(BaseSheet):
    """Wraps an openpyxl worksheet."""

    def __init__(self, worksheet: Worksheet) -> None:
        self._ws = worksheet

    @property
    def name(self) -> str:
        return self._ws.title

    def set_values(
        self, row: int, col: int, values: Sequence[Sequence[Any]]
    ) -> None:
        for r_offset, row_values in enumerate(values):
            for c_offset, value in enumerate(row_values):
                self._ws.cell(row=row + r_offset, column=col + c_offset, value=value)

    def clear(self) -> None:
        # delete_rows keeps the sheet (and its title/position) in place
        if self._ws.max_row:
            self._ws.delete_rows(1, self._ws.max_row)

    def get_value(self, row: int, col: int) -> Any:
        return self._ws.cell(row=row, column=col).value

    def set_value(self, row: int, col: int, value: Any) -> None:
        self._ws.cell(row=row, column=col, value=value)


class XlsxWorkbook(BaseWorkbook):
    """An .xlsx file on the local filesystem."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser().resolve()
        if not self._path.is_file():
            raise FileNotFoundError(f"Workbook not found: {self._path}")
        self._wb = openpyxl.load_workbook(str(self._path))

    @property
    def id(self) -> str:
        return str(self._path)

    @property
    def name(self) -> str:
        return self._path.stem

    def get_sheet(self, name: str) -> XlsxSheet | None:
        if name not in self._wb.sheetnames:
            return None
        return XlsxSheet(self._wb[name])

    def save(self) -> None:
        self._wb.save(str(self._path))
        logger.debug("Saved workbook %s", self._path.name)
