# src/pipeline/matrix_pass.py — v1
"""Mitigation matrix pass.

Clears the matrix sheet, then reads the matrix table of every document in
every incident subfolder (no cache) and writes all rows from row 2,
column A in a single bulk write. Documents without a matrix table are
skipped silently.
"""

from __future__ import annotations

import logging
import time
import uuid

from incidentsync.config.settings import Settings, load_settings
from incidentsync.core.models import PassReport
from incidentsync.extraction.matrix_extractor import MitigationMatrixExtractor
from incidentsync.logging.context import set_document_context, set_pass_context
from incidentsync.pipeline.notifier import BaseNotifier, ConsoleNotifier
from incidentsync.pipeline.sheet_writer import BatchSheetWriter
from incidentsync.storage.base_folder_store import BaseFolderStore
from incidentsync.storage.base_workbook import BaseWorkbook

logger = logging.getLogger(__name__)

MATRIX_START_ROW = 2
MATRIX_START_COL = 1  # column A
NO_TABLE_REASON = "no matrix table"


class MatrixPass:
    """Populate the raw mitigation matrix sheet."""

    name = "matrix"

    def __init__(
        self,
        folder_store: BaseFolderStore,
        extractor: MitigationMatrixExtractor,
        settings: Settings | None = None,
        notifier: BaseNotifier | None = None,
    ) -> None:
        self._folders = folder_store
        self._extractor = extractor
        self._settings = settings or load_settings()
        self._notifier = notifier or ConsoleNotifier()

    async def run(self, workbook: BaseWorkbook) -> PassReport:
        """Run the pass and return a per-document report."""
        t0 = time.perf_counter()
        set_pass_context(self.name, uuid.uuid4().hex[:12])
        report = PassReport(pass_name=self.name)

        sheet_name = self._settings.matrix_sheet_name
        sheet = workbook.get_sheet(sheet_name)
        if sheet is None:
            message = f'Cannot find sheet named "{sheet_name}"'
            self._notifier.alert(message)
            report.aborted = True
            report.abort_reason = message
            return report

        sheet.clear()
        logger.info("Sheet %s cleared", sheet_name)

        writer = BatchSheetWriter(sheet, MATRIX_START_ROW, MATRIX_START_COL)
        root = self._folders.get_parent_folder(workbook.id)

        for subfolder in self._folders.list_subfolders(root):
            for document in self._folders.list_documents(
                subfolder, self._settings.document_type
            ):
                set_document_context(document.id, document.name)
                try:
                    rows = await self._extractor.extract(document)
                except Exception as e:
                    logger.exception(
                        "Error reading matrix from %s (%s)", document.name, document.id
                    )
                    report.record(document.id, document.name, "failed", str(e))
                    continue
                if rows is None:
                    logger.debug("No matrix table in %s", document.name)
                    report.record(
                        document.id, document.name, "skipped", NO_TABLE_REASON
                    )
                    continue
                writer.extend([row.as_row() for row in rows])
                report.record(document.id, document.name, "extracted")
        set_document_context(None, None)

        report.rows_written = writer.flush()
        # Saved even when empty: the clear above must persist.
        workbook.save()
        if not report.rows_written:
            self._notifier.alert(
                "No tables matching the specified headers were found in any documents."
            )

        report.duration_seconds = round(time.perf_counter() - t0, 2)
        logger.info(
            "Matrix pass done: %d rows from %d documents (%d skipped, %d failed)",
            report.rows_written, report.count("extracted"),
            report.count("skipped"), report.count("failed"),
        )
        return report
