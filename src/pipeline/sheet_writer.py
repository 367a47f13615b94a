# src/pipeline/sheet_writer.py — v1
"""Batched sheet writer: accumulate rows, commit with one bulk write."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from incidentsync.storage.base_workbook import BaseSheet

logger = logging.getLogger(__name__)


class BatchSheetWriter:
    """Collect rows in order and write them as a single rectangular block.

    Args:
        sheet: Destination sheet.
        start_row: 1-based row of the block's top-left cell.
        start_col: 1-based column of the block's top-left cell.
        width: Fixed block width. None uses the widest accumulated row.
    """

    def __init__(
        self,
        sheet: BaseSheet,
        start_row: int,
        start_col: int,
        width: int | None = None,
    ) -> None:
        self._sheet = sheet
        self._start_row = start_row
        self._start_col = start_col
        self._width = width
        self._rows: list[list[Any]] = []

    def append(self, row: Sequence[Any]) -> None:
        self._rows.append(list(row))

    def extend(self, rows: Sequence[Sequence[Any]]) -> None:
        for row in rows:
            self.append(row)

    def flush(self) -> int:
        """Write all accumulated rows at once; return the number written.

        With no rows, nothing is written and existing content is untouched.
        """
        if not self._rows:
            return 0
        width = self._width or max(len(r) for r in self._rows)
        block = [(r + [""] * (width - len(r)))[:width] for r in self._rows]
        self._sheet.set_values(self._start_row, self._start_col, block)
        logger.info(
            "Wrote %d rows x %d columns to %s at row %d, column %d",
            len(block), width, self._sheet.name, self._start_row, self._start_col,
        )
        written = len(block)
        self._rows = []
        return written
