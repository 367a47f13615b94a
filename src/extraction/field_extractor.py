# src/extraction/field_extractor.py — v1
"""Document field extractor.

Combines two independent reads of the same document: a markup scan of the
exported archive (dropdown fields and the time-to-detect token) and a
paragraph traversal of the structured body (the incident summary).
"""

from __future__ import annotations

import logging

from incidentsync.config.settings import Settings, load_settings
from incidentsync.core.models import DocumentExtraction
from incidentsync.core.timecodec import time_to_decimal
from incidentsync.extraction.archive import read_document_markup
from incidentsync.extraction.markup_scanner import scan_markup
from incidentsync.extraction.summary import extract_summary
from incidentsync.storage.base_document_service import BaseDocumentService

logger = logging.getLogger(__name__)


class DocumentFieldExtractor:
    """Extract dropdown fields, summary and time-to-detect from a document."""

    def __init__(
        self,
        content_service: BaseDocumentService,
        settings: Settings | None = None,
    ) -> None:
        self._content = content_service
        self._settings = settings or load_settings()

    async def extract(self, document_id: str) -> DocumentExtraction:
        """Extract raw fields from one document.

        Raises whatever the content service or archive reader raises; the
        caller decides whether to skip the document.
        """
        archive = await self._content.export_archive(document_id)
        markup = read_document_markup(archive)
        scan = scan_markup(markup)

        structured = await self._content.open_structured(document_id)
        summary = extract_summary(
            structured.paragraphs,
            self._settings.summary_start_heading,
            self._settings.summary_end_heading,
        )

        logger.debug(
            "Extracted %d field markers from %s (time token: %s)",
            len(scan.field_markers), document_id, scan.raw_time_to_detect,
        )
        return DocumentExtraction(
            field_markers=scan.field_markers,
            summary=summary,
            raw_time_to_detect=scan.raw_time_to_detect,
            decimal_time_to_detect=time_to_decimal(scan.raw_time_to_detect),
        )
