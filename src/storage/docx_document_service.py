# src/storage/docx_document_service.py — v1
"""Document content service for local .docx files using python-docx.

Document ids are file paths (see LocalFolderStore). The archive export is
the file itself; the structured view walks every paragraph of the body in
document order, including paragraphs nested in tables and content
controls.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import docx
from docx.oxml.ns import qn
from docx.text.paragraph import Paragraph

from incidentsync.storage.base_document_service import BaseDocumentService
from incidentsync.storage.models import StructuredDocument, TableView

logger = logging.getLogger(__name__)


class DocxDocumentService(BaseDocumentService):
    """Reads .docx documents from the local filesystem."""

    async def export_archive(self, document_id: str) -> bytes:
        """Return the raw .docx bytes."""
        path = Path(document_id)
        if not path.is_file():
            raise FileNotFoundError(f"Document not found: {document_id}")
        return path.read_bytes()

    async def open_structured(self, document_id: str) -> StructuredDocument:
        """Parse paragraphs and tables with python-docx."""
        content = await self.export_archive(document_id)
        return self.parse(content)

    @staticmethod
    def parse(content: bytes) -> StructuredDocument:
        """Build a StructuredDocument from .docx bytes."""
        doc = docx.Document(io.BytesIO(content))
        body = doc.element.body

        paragraphs = [
            Paragraph(p, doc).text for p in body.iter(qn("w:p"))
        ]

        tables: list[TableView] = []
        for table in doc.tables:
            rows = [[cell.text for cell in row.cells] for row in table.rows]
            tables.append(TableView(rows=rows))

        logger.debug(
            "Parsed document: %d paragraphs, %d tables",
            len(paragraphs), len(tables),
        )
        return StructuredDocument(paragraphs=paragraphs, tables=tables)
