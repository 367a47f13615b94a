# src/storage/base_folder_store.py — v1
"""Abstract folder store interface.

Walks the incident folder tree and exposes documents with their
last-modified timestamps.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator

from incidentsync.storage.models import DocumentRef, FolderRef


class BaseFolderStore(ABC):
    """Unified interface for folder/document storage backends."""

    @abstractmethod
    def get_parent_folder(self, item_id: str) -> FolderRef:
        """Folder containing the given file (e.g. the report workbook)."""

    @abstractmethod
    def list_subfolders(self, folder: FolderRef) -> Iterator[FolderRef]:
        """Direct child folders, in store order."""

    @abstractmethod
    def list_documents(
        self, folder: FolderRef, type_filter: str
    ) -> Iterator[DocumentRef]:
        """Documents of the given type directly inside the folder."""

    @abstractmethod
    def get_or_create_folder(self, parent: FolderRef, name: str) -> FolderRef:
        """Return the named child folder, creating it when missing."""

    @abstractmethod
    def find_file(self, folder: FolderRef, name: str) -> str | None:
        """Return the id of a file with this exact name, or None."""

    @abstractmethod
    def copy_file(self, source_id: str, folder: FolderRef, new_name: str) -> str:
        """Copy a file into a folder under a new name; return the new id."""
