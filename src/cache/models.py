# src/cache/models.py — v2
"""Cache domain models and key layout.

Each document owns two entries: the serialized ExtractionResult and the
metadata used to decide whether it is still valid.
"""

from __future__ import annotations

from pydantic import BaseModel

DATA_KEY_PREFIX = "data_"
METADATA_KEY_PREFIX = "metadata_"


class CacheMetadata(BaseModel):
    """Validity metadata stored beside a cached extraction."""

    last_modified: int  # document timestamp at capture, ms since epoch
    processed_at: int  # capture time, ms since epoch


def data_key(document_id: str) -> str:
    return f"{DATA_KEY_PREFIX}{document_id}"


def metadata_key(document_id: str) -> str:
    return f"{METADATA_KEY_PREFIX}{document_id}"
