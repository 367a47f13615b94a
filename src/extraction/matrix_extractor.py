# src/extraction/matrix_extractor.py — v1
"""Mitigation matrix table extraction.

Locates the first table whose header row holds every required column
(case-insensitive, any order, extra columns allowed) and emits one
MatrixRow per data row, tagged with the incident name, summary and
category.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from incidentsync.config.categories import DEFAULT_CATEGORIES, CategoryRule
from incidentsync.config.settings import Settings, load_settings
from incidentsync.core.categorizer import categorize
from incidentsync.core.models import MatrixRow
from incidentsync.extraction.summary import extract_summary
from incidentsync.storage.base_document_service import BaseDocumentService
from incidentsync.storage.models import DocumentRef, TableView

logger = logging.getLogger(__name__)


def find_matrix_table(
    tables: Iterable[TableView], required_headers: Sequence[str]
) -> TableView | None:
    """Return the first table whose header row contains all required headers."""
    required = {h.strip().lower() for h in required_headers}
    for table in tables:
        if table.num_rows == 0:
            continue
        header = {cell.strip().lower() for cell in table.row(0)}
        if required <= header:
            return table
    return None


class MitigationMatrixExtractor:
    """Turn a document's matrix table into sheet rows."""

    def __init__(
        self,
        content_service: BaseDocumentService,
        settings: Settings | None = None,
        categories: Sequence[CategoryRule] = DEFAULT_CATEGORIES,
    ) -> None:
        self._content = content_service
        self._settings = settings or load_settings()
        self._categories = categories

    async def extract(self, document: DocumentRef) -> list[MatrixRow] | None:
        """Extract matrix rows, or None when the document has no matrix table."""
        structured = await self._content.open_structured(document.id)
        table = find_matrix_table(
            structured.tables, self._settings.matrix_required_headers_list
        )
        if table is None:
            return None

        summary = extract_summary(
            structured.paragraphs,
            self._settings.summary_start_heading,
            self._settings.summary_end_heading,
        )
        category = categorize(document.name, self._categories)
        num_cols = len(table.row(0))

        rows: list[MatrixRow] = []
        for i in range(self._settings.matrix_data_start_row, table.num_rows):
            cells = [table.cell_text(i, j).strip() for j in range(num_cols)]
            rows.append(
                MatrixRow(
                    document_name=document.name,
                    summary=summary,
                    category=category,
                    cells=cells,
                )
            )

        logger.debug(
            "Matrix table in %s: %d columns, %d data rows",
            document.name, num_cols, len(rows),
        )
        return rows
