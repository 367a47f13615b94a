# tests/unit/pipeline/test_unit_matrix_pass.py — v1
"""Tests for pipeline/matrix_pass.py."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from conftest import FakeWorkbook

from incidentsync.extraction.matrix_extractor import MitigationMatrixExtractor
from incidentsync.pipeline.matrix_pass import NO_TABLE_REASON, MatrixPass
from incidentsync.pipeline.notifier import BaseNotifier

SHEET = "rawMitigationScoreMatrix"


@pytest.fixture
def notifier():
    return MagicMock(spec=BaseNotifier)


@pytest.fixture
def matrix(folder_store, content_service, settings, notifier):
    extractor = MitigationMatrixExtractor(content_service, settings)
    return MatrixPass(folder_store, extractor, settings, notifier)


class TestMatrixPass:
    @pytest.mark.asyncio
    async def test_all_documents_all_rows(
        self, matrix, folder_store, content_service, incident_paragraphs, matrix_table
    ):
        inc1 = folder_store.add_folder("INC-1 Orca alert")
        inc2 = folder_store.add_folder("INC-2")
        folder_store.add_document(inc1, "INC-1 Orca alert")
        folder_store.add_document(inc1, "Appendix")
        folder_store.add_document(inc2, "INC-2 EHOP firewall")
        content_service.add(
            "doc-INC-1 Orca alert", paragraphs=incident_paragraphs, tables=[matrix_table]
        )
        content_service.add("doc-Appendix", tables=[[["Name"], ["x"]]])
        content_service.add("doc-INC-2 EHOP firewall", tables=[matrix_table[:3]])
        workbook = FakeWorkbook([SHEET])

        report = await matrix.run(workbook)

        sheet = workbook.sheets[SHEET]
        row, col, block = sheet.set_values_calls[0]
        assert (row, col) == (2, 1)
        assert block == [
            ["INC-1 Orca alert", "line1\nline2", "Orca", "1", "2", "3", "4"],
            ["INC-1 Orca alert", "line1\nline2", "Orca", "5", "6", "7", "8"],
            ["INC-2 EHOP firewall", "", "Network", "1", "2", "3", "4"],
        ]
        assert report.rows_written == 3
        assert [(o.document_name, o.status) for o in report.outcomes] == [
            ("INC-1 Orca alert", "extracted"),
            ("Appendix", "skipped"),
            ("INC-2 EHOP firewall", "extracted"),
        ]
        assert report.outcomes[1].reason == NO_TABLE_REASON

    @pytest.mark.asyncio
    async def test_sheet_cleared_before_write(self, matrix, folder_store, content_service):
        workbook = FakeWorkbook([SHEET])
        sheet = workbook.sheets[SHEET]
        sheet.set_value(5, 1, "stale")

        await matrix.run(workbook)

        assert sheet.clear_calls == 1
        assert sheet.get_value(5, 1) is None
        assert workbook.save_calls == 1

    @pytest.mark.asyncio
    async def test_no_tables_alerts(self, matrix, folder_store, content_service, notifier):
        folder = folder_store.add_folder("INC-1")
        folder_store.add_document(folder, "INC-1")
        content_service.add("doc-INC-1", paragraphs=["no tables here"])

        report = await matrix.run(FakeWorkbook([SHEET]))

        assert report.rows_written == 0
        notifier.alert.assert_called_once_with(
            "No tables matching the specified headers were found in any documents."
        )

    @pytest.mark.asyncio
    async def test_missing_sheet_aborts(self, matrix, notifier):
        workbook = FakeWorkbook(["True Positives"])
        report = await matrix.run(workbook)
        assert report.aborted is True
        notifier.alert.assert_called_once_with(f'Cannot find sheet named "{SHEET}"')
        assert workbook.save_calls == 0

    @pytest.mark.asyncio
    async def test_unreadable_document_recorded(
        self, matrix, folder_store, content_service, matrix_table
    ):
        folder = folder_store.add_folder("INC-1")
        folder_store.add_document(folder, "broken")
        folder_store.add_document(folder, "INC-1")
        content_service.add("doc-INC-1", tables=[matrix_table])

        report = await matrix.run(FakeWorkbook([SHEET]))

        assert [o.status for o in report.outcomes] == ["failed", "extracted"]
        assert report.rows_written == 2
