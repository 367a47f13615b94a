# src/extraction/archive.py — v1
"""Unpack an exported .docx container and read its body markup."""

from __future__ import annotations

import io
import logging
import zipfile

logger = logging.getLogger(__name__)

DOCUMENT_MARKUP_MEMBER = "word/document.xml"


class ArchiveError(Exception):
    """Raised when an exported document is not a readable archive."""


def read_document_markup(archive: bytes) -> str:
    """Return the primary body markup from a .docx archive.

    Args:
        archive: Exported .docx bytes.

    Returns:
        The ``word/document.xml`` payload as text, or "" when the archive
        has no such member.

    Raises:
        ArchiveError: If the bytes are not a zip archive.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(archive)) as zf:
            if DOCUMENT_MARKUP_MEMBER not in zf.namelist():
                logger.debug("Archive has no %s member", DOCUMENT_MARKUP_MEMBER)
                return ""
            return zf.read(DOCUMENT_MARKUP_MEMBER).decode("utf-8", errors="replace")
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Exported document is not a valid archive: {e}") from e
