# src/storage/base_document_service.py — v1
"""Abstract document content service.

A document is readable two ways: as an exported archive (the .docx
container whose markup carries the dropdown fields) and as a structured
body of paragraphs and tables.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from incidentsync.storage.models import StructuredDocument


class BaseDocumentService(ABC):
    """Unified interface for document content backends."""

    @abstractmethod
    async def export_archive(self, document_id: str) -> bytes:
        """Return the document exported as a .docx (zip) archive."""

    @abstractmethod
    async def open_structured(self, document_id: str) -> StructuredDocument:
        """Return the document's ordered paragraphs and tables."""
