# src/pipeline/runner.py — v2
"""Pass runner — wire collaborators from settings and run the passes.

One entry point per user action: provision, links, assignees, refresh
(links then assignees) and matrix. Collaborators default to the local
backends and can be injected for tests or other storage.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from incidentsync.cache.base_cache_store import BaseCacheStore
from incidentsync.cache.cache_factory import create_cache_store
from incidentsync.config.categories import load_categories
from incidentsync.config.settings import Settings, load_settings
from incidentsync.core.models import PassReport
from incidentsync.extraction.field_extractor import DocumentFieldExtractor
from incidentsync.extraction.matrix_extractor import MitigationMatrixExtractor
from incidentsync.pipeline.folder_links import FolderLinkPass
from incidentsync.pipeline.matrix_pass import MatrixPass
from incidentsync.pipeline.notifier import BaseNotifier, ConsoleNotifier
from incidentsync.pipeline.provision import ReportProvisioner
from incidentsync.pipeline.reconciler import CacheAwareReconciler
from incidentsync.pipeline.tracking_pass import TrackingPass
from incidentsync.storage.base_document_service import BaseDocumentService
from incidentsync.storage.base_folder_store import BaseFolderStore
from incidentsync.storage.base_workbook import BaseWorkbook
from incidentsync.storage.docx_document_service import DocxDocumentService
from incidentsync.storage.local_folder_store import LocalFolderStore

logger = logging.getLogger(__name__)


class PassRunner:
    """Build and run passes against one set of collaborators."""

    def __init__(
        self,
        settings: Settings | None = None,
        folder_store: BaseFolderStore | None = None,
        content_service: BaseDocumentService | None = None,
        cache_store: BaseCacheStore | None = None,
        notifier: BaseNotifier | None = None,
    ) -> None:
        self._settings = settings or load_settings()
        self._folders = folder_store or LocalFolderStore()
        self._content = content_service or DocxDocumentService()
        self._cache_store = cache_store
        self._notifier = notifier or ConsoleNotifier()

    @property
    def cache_store(self) -> BaseCacheStore:
        """Configured cache store, created on first use."""
        if self._cache_store is None:
            self._cache_store = create_cache_store(self._settings)
        return self._cache_store

    def close(self) -> None:
        """Close the cache store if one was created."""
        if self._cache_store is not None:
            self._cache_store.close()
            self._cache_store = None

    def provision(
        self, template_path: Path | str, today: date | None = None
    ) -> str | None:
        return ReportProvisioner(self._folders, self._settings).run(
            template_path, today
        )

    def links(self, workbook: BaseWorkbook) -> PassReport:
        return FolderLinkPass(self._folders, self._settings, self._notifier).run(
            workbook
        )

    async def assignees(self, workbook: BaseWorkbook) -> PassReport:
        extractor = DocumentFieldExtractor(self._content, self._settings)
        reconciler = CacheAwareReconciler(extractor, self.cache_store, self._settings)
        tracking = TrackingPass(
            self._folders, reconciler, self._settings, self._notifier
        )
        return await tracking.run(workbook)

    async def refresh(self, workbook: BaseWorkbook) -> list[PassReport]:
        """Folder links followed by the tracking sheet."""
        links_report = self.links(workbook)
        if links_report.aborted:
            return [links_report]
        return [links_report, await self.assignees(workbook)]

    async def matrix(self, workbook: BaseWorkbook) -> PassReport:
        categories = load_categories(self._settings.categories_file)
        extractor = MitigationMatrixExtractor(
            self._content, self._settings, categories
        )
        matrix = MatrixPass(self._folders, extractor, self._settings, self._notifier)
        return await matrix.run(workbook)
