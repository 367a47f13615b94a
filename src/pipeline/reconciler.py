# src/pipeline/reconciler.py — v1
"""Cache-aware reconciliation of document extractions.

A cached extraction is reused only while the document's last-modified
timestamp matches the one stored beside it. Anything else (missing entry,
unreadable entry, unreachable store, changed timestamp) falls through to a
fresh extraction, whose classified result is written back with a fixed
time-to-live.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from pydantic import ValidationError

from incidentsync.cache.base_cache_store import BaseCacheStore
from incidentsync.cache.models import CacheMetadata, data_key, metadata_key
from incidentsync.config.settings import Settings, load_settings
from incidentsync.core.models import DocumentExtraction, ExtractionResult, FieldMarker
from incidentsync.extraction.field_extractor import DocumentFieldExtractor
from incidentsync.storage.models import DocumentRef

logger = logging.getLogger(__name__)

ANALYST_TYPE = "ANALYST"
REVIEWER_TYPE = "REVIEWER"
STATUS_TYPE = "Project status"


def classify_markers(
    markers: Iterable[FieldMarker], placeholder: str = "SELECT Analyst"
) -> tuple[str, str, str]:
    """Route field markers into (assignees, reviewers, status).

    Analyst and reviewer values equal to the placeholder are dropped; the
    rest keep encounter order and are not deduplicated. The last status
    marker wins.
    """
    assignees: list[str] = []
    reviewers: list[str] = []
    status = ""
    for marker in markers:
        if marker.type == ANALYST_TYPE and marker.value != placeholder:
            assignees.append(marker.value)
        elif marker.type == REVIEWER_TYPE and marker.value != placeholder:
            reviewers.append(marker.value)
        elif marker.type == STATUS_TYPE:
            status = marker.value
    return ", ".join(assignees), ", ".join(reviewers), status


def build_result(
    extraction: DocumentExtraction, placeholder: str = "SELECT Analyst"
) -> ExtractionResult:
    """Classify a raw extraction into the cacheable result."""
    assignees, reviewers, status = classify_markers(
        extraction.field_markers, placeholder
    )
    return ExtractionResult(
        assignees=assignees,
        reviewers=reviewers,
        status=status,
        summary=extraction.summary,
        time_to_detect=extraction.decimal_time_to_detect,
    )


@dataclass
class ReconcileResult:
    """Classified result and whether it was served from the cache."""

    result: ExtractionResult
    from_cache: bool


class CacheAwareReconciler:
    """Serve extractions from the cache while documents are unchanged."""

    def __init__(
        self,
        extractor: DocumentFieldExtractor,
        cache_store: BaseCacheStore,
        settings: Settings | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._extractor = extractor
        self._cache = cache_store
        self._settings = settings or load_settings()
        self._clock = clock

    async def reconcile(self, document: DocumentRef) -> ReconcileResult:
        """Return the document's extraction, re-extracting only when stale.

        Extraction errors propagate and leave the cache untouched.
        """
        cached = await self._lookup(document)
        if cached is not None:
            logger.info("Using cached data for document %s", document.name)
            return ReconcileResult(result=cached, from_cache=True)

        extraction = await self._extractor.extract(document.id)
        result = build_result(extraction, self._settings.assignee_placeholder)
        await self._store(document, result)
        logger.info("Processed and cached document %s", document.name)
        return ReconcileResult(result=result, from_cache=False)

    async def _lookup(self, document: DocumentRef) -> ExtractionResult | None:
        """Return the cached result if still valid for this document."""
        try:
            raw_metadata = await self._cache.get(metadata_key(document.id))
            raw_data = await self._cache.get(data_key(document.id))
        except Exception as e:
            logger.warning(
                "Cache unavailable for %s (%s), treating as miss: %s",
                document.name, document.id, e,
            )
            return None

        if raw_metadata is None or raw_data is None:
            return None

        try:
            metadata = CacheMetadata.model_validate_json(raw_metadata)
            result = ExtractionResult.model_validate_json(raw_data)
        except ValidationError as e:
            logger.warning(
                "Unreadable cache entry for %s (%s), treating as miss: %s",
                document.name, document.id, e,
            )
            return None

        if metadata.last_modified != document.last_modified:
            logger.info(
                "Document %s has been modified, reprocessing", document.name
            )
            return None
        return result

    async def _store(self, document: DocumentRef, result: ExtractionResult) -> None:
        metadata = CacheMetadata(
            last_modified=document.last_modified,
            processed_at=int(self._clock() * 1000),
        )
        try:
            await self._cache.put_all(
                {
                    data_key(document.id): result.model_dump_json(),
                    metadata_key(document.id): metadata.model_dump_json(),
                },
                self._settings.cache_ttl_seconds,
            )
        except Exception as e:
            logger.warning(
                "Failed to cache extraction for %s (%s): %s",
                document.name, document.id, e,
            )
