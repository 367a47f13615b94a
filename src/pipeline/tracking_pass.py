# src/pipeline/tracking_pass.py — v1
"""Tracking sheet pass: assignees, reviewers, status, summary, time-to-detect.

Walks the incident subfolders next to the report workbook. In each one,
the document named like the subfolder is reconciled against the cache and
contributes one row. All rows are written to columns B-F from row 2 in a
single bulk write.
"""

from __future__ import annotations

import logging
import time
import uuid

from incidentsync.config.settings import Settings, load_settings
from incidentsync.core.models import PassReport
from incidentsync.logging.context import set_document_context, set_pass_context
from incidentsync.pipeline.notifier import BaseNotifier, ConsoleNotifier
from incidentsync.pipeline.reconciler import CacheAwareReconciler
from incidentsync.pipeline.sheet_writer import BatchSheetWriter
from incidentsync.storage.base_folder_store import BaseFolderStore
from incidentsync.storage.base_workbook import BaseWorkbook

logger = logging.getLogger(__name__)

TRACKING_START_ROW = 2
TRACKING_START_COL = 2  # column B
TRACKING_WIDTH = 5


class TrackingPass:
    """Populate the tracking sheet from incident documents."""

    name = "tracking"

    def __init__(
        self,
        folder_store: BaseFolderStore,
        reconciler: CacheAwareReconciler,
        settings: Settings | None = None,
        notifier: BaseNotifier | None = None,
    ) -> None:
        self._folders = folder_store
        self._reconciler = reconciler
        self._settings = settings or load_settings()
        self._notifier = notifier or ConsoleNotifier()

    async def run(self, workbook: BaseWorkbook) -> PassReport:
        """Run the pass and return a per-document report."""
        t0 = time.perf_counter()
        set_pass_context(self.name, uuid.uuid4().hex[:12])
        report = PassReport(pass_name=self.name)

        sheet_name = self._settings.tracking_sheet_name
        sheet = workbook.get_sheet(sheet_name)
        if sheet is None:
            message = f'Cannot find sheet named "{sheet_name}"'
            self._notifier.alert(message)
            report.aborted = True
            report.abort_reason = message
            return report

        writer = BatchSheetWriter(
            sheet, TRACKING_START_ROW, TRACKING_START_COL, width=TRACKING_WIDTH
        )
        sentinel = self._settings.confirmed_positive_status
        root = self._folders.get_parent_folder(workbook.id)

        for subfolder in self._folders.list_subfolders(root):
            for document in self._folders.list_documents(
                subfolder, self._settings.document_type
            ):
                if document.name != subfolder.name:
                    continue
                set_document_context(document.id, document.name)
                try:
                    reconciled = await self._reconciler.reconcile(document)
                except Exception as e:
                    logger.exception(
                        "Error processing document %s (%s)", document.name, document.id
                    )
                    report.record(document.id, document.name, "failed", str(e))
                    continue
                writer.append(reconciled.result.tracking_row(sentinel))
                report.record(
                    document.id,
                    document.name,
                    "cached" if reconciled.from_cache else "extracted",
                )
        set_document_context(None, None)

        report.rows_written = writer.flush()
        if report.rows_written:
            workbook.save()

        report.duration_seconds = round(time.perf_counter() - t0, 2)
        logger.info(
            "Tracking pass done: %d rows (%d extracted, %d cached, %d failed)",
            report.rows_written, report.count("extracted"),
            report.count("cached"), report.count("failed"),
        )
        return report
