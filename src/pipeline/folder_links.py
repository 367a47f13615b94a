# src/pipeline/folder_links.py — v1
"""Folder link pass: one hyperlink per incident subfolder in column A."""

from __future__ import annotations

import logging
import time
import uuid

from incidentsync.config.settings import Settings, load_settings
from incidentsync.core.models import PassReport
from incidentsync.logging.context import set_pass_context
from incidentsync.pipeline.notifier import BaseNotifier, ConsoleNotifier
from incidentsync.storage.base_folder_store import BaseFolderStore
from incidentsync.storage.base_workbook import BaseWorkbook
from incidentsync.storage.models import FolderRef

logger = logging.getLogger(__name__)

LINK_START_ROW = 2
LINK_COL = 1  # column A


def hyperlink_formula(folder: FolderRef) -> str:
    """Spreadsheet HYPERLINK formula pointing at a folder."""
    name = folder.name.replace('"', '""')
    return f'=HYPERLINK("{folder.url}","{name}")'


class FolderLinkPass:
    """Write subfolder links into the tracking sheet, skipping existing ones."""

    name = "links"

    def __init__(
        self,
        folder_store: BaseFolderStore,
        settings: Settings | None = None,
        notifier: BaseNotifier | None = None,
    ) -> None:
        self._folders = folder_store
        self._settings = settings or load_settings()
        self._notifier = notifier or ConsoleNotifier()

    def run(self, workbook: BaseWorkbook) -> PassReport:
        """Link each subfolder on its own row, starting at A2."""
        t0 = time.perf_counter()
        set_pass_context(self.name, uuid.uuid4().hex[:12])
        report = PassReport(pass_name=self.name)

        sheet_name = self._settings.tracking_sheet_name
        sheet = workbook.get_sheet(sheet_name)
        if sheet is None:
            message = f'No sheet named "{sheet_name}" found.'
            self._notifier.alert(message)
            report.aborted = True
            report.abort_reason = message
            return report

        root = self._folders.get_parent_folder(workbook.id)
        row = LINK_START_ROW
        for subfolder in self._folders.list_subfolders(root):
            current = sheet.get_value(row, LINK_COL)
            current_text = "" if current is None else str(current)
            if current_text == "" or subfolder.url not in current_text:
                sheet.set_value(row, LINK_COL, hyperlink_formula(subfolder))
                report.record(subfolder.id, subfolder.name, "extracted")
            else:
                report.record(subfolder.id, subfolder.name, "cached")
            row += 1

        report.rows_written = report.count("extracted")
        if report.rows_written:
            workbook.save()

        report.duration_seconds = round(time.perf_counter() - t0, 2)
        logger.info(
            "Folder links done: %d written, %d already linked",
            report.rows_written, report.count("cached"),
        )
        return report
