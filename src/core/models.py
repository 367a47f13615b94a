# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

No module redefines these types — all imports come from core.models.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


# === EXTRACTION ===


class FieldMarker(BaseModel):
    """A labeled value read from a document's embedded dropdown control."""

    type: str
    value: str


class DocumentExtraction(BaseModel):
    """Raw output of the document field extractor, before classification."""

    field_markers: list[FieldMarker] = Field(default_factory=list)
    summary: str = ""
    raw_time_to_detect: str | None = None
    decimal_time_to_detect: float | None = None


class ExtractionResult(BaseModel):
    """Classified fields for one incident document (the cached payload)."""

    assignees: str = ""
    reviewers: str = ""
    status: str = ""
    summary: str = ""
    time_to_detect: float | None = None

    def tracking_row(self, confirmed_status: str) -> list[str | float]:
        """Return the five tracking sheet cells.

        Time-to-detect is shown only for the confirmed-positive status.
        """
        ttd: str | float = ""
        if self.status == confirmed_status and self.time_to_detect is not None:
            ttd = self.time_to_detect
        return [self.assignees, self.reviewers, self.status, self.summary, ttd]


# === MATRIX ===


class MatrixRow(BaseModel):
    """One mitigation matrix data row tagged with its source incident."""

    document_name: str
    summary: str
    category: str
    cells: list[str] = Field(default_factory=list)

    def as_row(self) -> list[str]:
        return [self.document_name, self.summary, self.category, *self.cells]


# === RUN REPORTING ===

OutcomeStatus = Literal["extracted", "cached", "skipped", "failed"]


class DocumentOutcome(BaseModel):
    """What happened to a single document (or folder) during a pass."""

    document_id: str
    document_name: str
    status: OutcomeStatus
    reason: str | None = None


class PassReport(BaseModel):
    """Summary of one pass over the incident folder tree."""

    pass_name: str
    outcomes: list[DocumentOutcome] = Field(default_factory=list)
    rows_written: int = 0
    aborted: bool = False
    abort_reason: str | None = None
    duration_seconds: float = 0.0

    def count(self, status: OutcomeStatus) -> int:
        """Number of outcomes with the given status."""
        return sum(1 for o in self.outcomes if o.status == status)

    def record(
        self,
        document_id: str,
        document_name: str,
        status: OutcomeStatus,
        reason: str | None = None,
    ) -> None:
        self.outcomes.append(
            DocumentOutcome(
                document_id=document_id,
                document_name=document_name,
                status=status,
                reason=reason,
            )
        )
