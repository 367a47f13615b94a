# tests/unit/storage/test_unit_xlsx_workbook.py — v1
"""Tests for storage/xlsx_workbook.py — real workbooks via openpyxl."""

from __future__ import annotations

import openpyxl
import pytest

from incidentsync.storage.xlsx_workbook import XlsxWorkbook


@pytest.fixture
def workbook_path(tmp_path):
    path = tmp_path / "Incident Summary - March 2026.xlsx"
    wb = openpyxl.Workbook()
    wb.active.title = "True Positives"
    matrix = wb.create_sheet("rawMitigationScoreMatrix")
    matrix["A1"] = "Document"
    matrix["A2"] = "stale"
    wb.save(path)
    return path


class TestXlsxWorkbook:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            XlsxWorkbook(tmp_path / "nope.xlsx")

    def test_identity(self, workbook_path):
        wb = XlsxWorkbook(workbook_path)
        assert wb.id == str(workbook_path.resolve())
        assert wb.name == "Incident Summary - March 2026"

    def test_get_sheet(self, workbook_path):
        wb = XlsxWorkbook(workbook_path)
        assert wb.get_sheet("True Positives").name == "True Positives"
        assert wb.get_sheet("Missing") is None

    def test_set_values_block_and_save(self, workbook_path):
        wb = XlsxWorkbook(workbook_path)
        wb.get_sheet("True Positives").set_values(2, 2, [["a", "b"], ["c", "d"]])
        wb.save()

        ws = openpyxl.load_workbook(workbook_path)["True Positives"]
        assert ws["B2"].value == "a"
        assert ws["C3"].value == "d"
        assert ws["A2"].value is None

    def test_clear(self, workbook_path):
        wb = XlsxWorkbook(workbook_path)
        sheet = wb.get_sheet("rawMitigationScoreMatrix")
        sheet.clear()
        assert sheet.get_value(1, 1) is None
        assert sheet.get_value(2, 1) is None
        assert wb.get_sheet("rawMitigationScoreMatrix") is not None

    def test_get_and_set_value(self, workbook_path):
        sheet = XlsxWorkbook(workbook_path).get_sheet("True Positives")
        sheet.set_value(2, 1, '=HYPERLINK("file:///x","x")')
        assert sheet.get_value(2, 1) == '=HYPERLINK("file:///x","x")'
