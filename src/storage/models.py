# src/storage/models.py — v1
"""Collaborator-facing models: folders, documents, structured content."""

from __future__ import annotations

from pydantic import BaseModel, Field


class FolderRef(BaseModel):
    """A folder in the incident folder tree."""

    id: str
    name: str
    url: str


class DocumentRef(BaseModel):
    """A document handle with the metadata needed for cache reconciliation."""

    id: str
    name: str
    last_modified: int  # milliseconds since epoch


class TableView(BaseModel):
    """A document table as rows of cell texts."""

    rows: list[list[str]] = Field(default_factory=list)

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    def row(self, index: int) -> list[str]:
        return self.rows[index] if 0 <= index < len(self.rows) else []

    def cell_text(self, row: int, col: int) -> str:
        cells = self.row(row)
        return cells[col] if 0 <= col < len(cells) else ""


class StructuredDocument(BaseModel):
    """Live document body: ordered paragraph texts and tables."""

    paragraphs: list[str] = Field(default_factory=list)
    tables: list[TableView] = Field(default_factory=list)
