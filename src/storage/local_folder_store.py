# src/storage/local_folder_store.py — v1
"""Local filesystem folder store (default backend).

Folders are directories; documents are files identified by their resolved
path. Listings are sorted by name so traversal order is stable.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterator
from pathlib import Path

from incidentsync.storage.base_folder_store import BaseFolderStore
from incidentsync.storage.models import DocumentRef, FolderRef

logger = logging.getLogger(__name__)

# Office lock files ("~$name.docx") are not documents.
_LOCK_PREFIX = "~$"


class LocalFolderStore(BaseFolderStore):
    """Folder store backed by the local filesystem."""

    def get_parent_folder(self, item_id: str) -> FolderRef:
        """Folder containing the given file."""
        return self._folder_ref(Path(item_id).expanduser().resolve().parent)

    def list_subfolders(self, folder: FolderRef) -> Iterator[FolderRef]:
        """Direct child directories sorted by name (hidden ones skipped)."""
        root = Path(folder.id)
        if not root.is_dir():
            return
        for path in sorted(root.iterdir(), key=lambda p: p.name):
            if path.is_dir() and not path.name.startswith("."):
                yield self._folder_ref(path)

    def list_documents(
        self, folder: FolderRef, type_filter: str
    ) -> Iterator[DocumentRef]:
        """Files with the given extension, sorted by name."""
        suffix = f".{type_filter.lower().lstrip('.')}"
        root = Path(folder.id)
        if not root.is_dir():
            return
        for path in sorted(root.iterdir(), key=lambda p: p.name):
            if not path.is_file() or path.suffix.lower() != suffix:
                continue
            if path.name.startswith(_LOCK_PREFIX):
                continue
            yield DocumentRef(
                id=str(path.resolve()),
                name=path.stem,
                last_modified=path.stat().st_mtime_ns // 1_000_000,
            )

    def get_or_create_folder(self, parent: FolderRef, name: str) -> FolderRef:
        """Return the child directory, creating it when missing."""
        path = Path(parent.id) / name
        if not path.is_dir():
            path.mkdir(parents=True)
            logger.info("Created folder: %s", name)
        return self._folder_ref(path)

    def find_file(self, folder: FolderRef, name: str) -> str | None:
        """Id of the file with this exact name, or None."""
        path = Path(folder.id) / name
        return str(path.resolve()) if path.is_file() else None

    def copy_file(self, source_id: str, folder: FolderRef, new_name: str) -> str:
        """Copy a file into the folder under a new name."""
        dst = Path(folder.id) / new_name
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source_id, dst)
        return str(dst.resolve())

    @staticmethod
    def _folder_ref(path: Path) -> FolderRef:
        resolved = path.resolve()
        return FolderRef(id=str(resolved), name=resolved.name, url=resolved.as_uri())
