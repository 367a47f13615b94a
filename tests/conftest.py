# tests/conftest.py — v1
"""Shared test fixtures for all unit tests.

Provides in-memory fakes for the folder store, document service and
workbook, a fake clock, and builders for .docx archives and files.
No network access — all I/O is local or mocked.
"""

from __future__ import annotations

import io
import zipfile
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any
from xml.sax.saxutils import escape, quoteattr

import docx
import pytest
from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls

from incidentsync.config.settings import Settings
from incidentsync.storage.base_document_service import BaseDocumentService
from incidentsync.storage.base_folder_store import BaseFolderStore
from incidentsync.storage.base_workbook import BaseSheet, BaseWorkbook
from incidentsync.storage.models import DocumentRef, FolderRef, StructuredDocument, TableView


# === BUILDERS ===


def sdt_dropdown_xml(field_type: str, value: str, with_ns: bool = False) -> str:
    """Markup of a dropdown content control as Word writes it."""
    ns = f" {nsdecls('w')}" if with_ns else ""
    return (
        f"<w:sdt{ns}><w:sdtPr><w:alias w:val={quoteattr(field_type)}/>"
        f'<w:tag w:val="t"/><w:id w:val="1"/>'
        f"<w:dropDownList w:lastValue={quoteattr(value)}>"
        f"<w:listItem w:displayText={quoteattr(value)} w:value={quoteattr(value)}/>"
        f"</w:dropDownList></w:sdtPr>"
        f"<w:sdtContent><w:r><w:t>{escape(value)}</w:t></w:r></w:sdtContent></w:sdt>"
    )


def markup_archive(markup: str) -> bytes:
    """Zip archive holding only word/document.xml."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("word/document.xml", markup)
    return buf.getvalue()


def build_docx(
    path: Path,
    markers: Sequence[tuple[str, str]] = (),
    paragraphs: Sequence[str] = (),
    tables: Sequence[Sequence[Sequence[str]]] = (),
) -> Path:
    """Write a real .docx with dropdown controls, paragraphs and tables."""
    document = docx.Document()
    for field_type, value in markers:
        p = document.add_paragraph()
        p._p.append(parse_xml(sdt_dropdown_xml(field_type, value, with_ns=True)))
    for text in paragraphs:
        document.add_paragraph(text)
    for rows in tables:
        table = document.add_table(rows=len(rows), cols=len(rows[0]))
        for i, row in enumerate(rows):
            for j, text in enumerate(row):
                table.cell(i, j).text = text
    path.parent.mkdir(parents=True, exist_ok=True)
    document.save(str(path))
    return path


# === FAKES ===


class FakeClock:
    """Manually advanced clock (seconds)."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeDocumentService(BaseDocumentService):
    """In-memory documents keyed by id; counts calls per id."""

    def __init__(self) -> None:
        self.archives: dict[str, bytes] = {}
        self.structured: dict[str, StructuredDocument] = {}
        self.export_calls: list[str] = []
        self.open_calls: list[str] = []

    def add(
        self,
        document_id: str,
        markup: str = "",
        paragraphs: Sequence[str] = (),
        tables: Sequence[Sequence[Sequence[str]]] = (),
    ) -> None:
        self.archives[document_id] = markup_archive(markup)
        self.structured[document_id] = StructuredDocument(
            paragraphs=list(paragraphs),
            tables=[TableView(rows=[list(r) for r in t]) for t in tables],
        )

    async def export_archive(self, document_id: str) -> bytes:
        self.export_calls.append(document_id)
        if document_id not in self.archives:
            raise FileNotFoundError(document_id)
        return self.archives[document_id]

    async def open_structured(self, document_id: str) -> StructuredDocument:
        self.open_calls.append(document_id)
        if document_id not in self.structured:
            raise FileNotFoundError(document_id)
        return self.structured[document_id]


class FakeFolderStore(BaseFolderStore):
    """Single-level folder tree: root -> subfolders -> documents."""

    def __init__(self) -> None:
        self.root = FolderRef(id="root", name="root", url="https://drive/root")
        self.subfolders: list[FolderRef] = []
        self.documents: dict[str, list[DocumentRef]] = {}

    def add_folder(self, name: str) -> FolderRef:
        folder = FolderRef(id=f"folder-{name}", name=name, url=f"https://drive/{name}")
        self.subfolders.append(folder)
        self.documents[folder.id] = []
        return folder

    def add_document(
        self, folder: FolderRef, name: str, last_modified: int = 1000
    ) -> DocumentRef:
        doc = DocumentRef(id=f"doc-{name}", name=name, last_modified=last_modified)
        self.documents[folder.id].append(doc)
        return doc

    def touch(self, document_id: str, last_modified: int) -> None:
        for docs in self.documents.values():
            for i, doc in enumerate(docs):
                if doc.id == document_id:
                    docs[i] = doc.model_copy(update={"last_modified": last_modified})

    def get_parent_folder(self, item_id: str) -> FolderRef:
        return self.root

    def list_subfolders(self, folder: FolderRef) -> Iterator[FolderRef]:
        return iter(list(self.subfolders))

    def list_documents(self, folder: FolderRef, type_filter: str) -> Iterator[DocumentRef]:
        return iter(list(self.documents.get(folder.id, [])))

    def get_or_create_folder(self, parent: FolderRef, name: str) -> FolderRef:
        raise NotImplementedError

    def find_file(self, folder: FolderRef, name: str) -> str | None:
        raise NotImplementedError

    def copy_file(self, source_id: str, folder: FolderRef, new_name: str) -> str:
        raise NotImplementedError


class FakeSheet(BaseSheet):
    """Dict-backed sheet recording bulk writes."""

    def __init__(self, name: str) -> None:
        self._name = name
        self.cells: dict[tuple[int, int], Any] = {}
        self.set_values_calls: list[tuple[int, int, list[list[Any]]]] = []
        self.clear_calls = 0

    @property
    def name(self) -> str:
        return self._name

    def set_values(self, row: int, col: int, values: Sequence[Sequence[Any]]) -> None:
        block = [list(r) for r in values]
        self.set_values_calls.append((row, col, block))
        for i, r in enumerate(block):
            for j, v in enumerate(r):
                self.cells[(row + i, col + j)] = v

    def clear(self) -> None:
        self.clear_calls += 1
        self.cells.clear()

    def get_value(self, row: int, col: int) -> Any:
        return self.cells.get((row, col))

    def set_value(self, row: int, col: int, value: Any) -> None:
        self.cells[(row, col)] = value


class FakeWorkbook(BaseWorkbook):
    """Workbook holding FakeSheets; counts saves."""

    def __init__(self, sheet_names: Sequence[str] = ()) -> None:
        self.sheets = {name: FakeSheet(name) for name in sheet_names}
        self.save_calls = 0

    @property
    def id(self) -> str:
        return "workbook"

    @property
    def name(self) -> str:
        return "Incident Summary - March 2026"

    def get_sheet(self, name: str) -> FakeSheet | None:
        return self.sheets.get(name)

    def save(self) -> None:
        self.save_calls += 1


# === FIXTURES ===


@pytest.fixture
def settings() -> Settings:
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None, cache_backend="memory")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def content_service() -> FakeDocumentService:
    return FakeDocumentService()


@pytest.fixture
def folder_store() -> FakeFolderStore:
    return FakeFolderStore()


@pytest.fixture
def incident_paragraphs() -> list[str]:
    return [
        "intro",
        "A summary of the incident",
        "line1",
        "",
        "line2",
        "Mitigation Matrix:",
        "ignored",
    ]


@pytest.fixture
def matrix_table() -> list[list[str]]:
    return [
        ["Other", "Inbound", "Endpoint", "Outbound"],
        ["score", "score", "score", "score"],
        ["1", "2", "3", "4"],
        ["5", "6", "7", "8"],
    ]
