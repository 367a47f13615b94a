# src/logging/context.py — v2
"""Contextual logging support — attach run_id, pass and document to records.

Context is set per pass and per document so every log line emitted while a
document is processed carries enough to locate the source file.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per pass and per document.
_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
_pass_name: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "pass_name", default=None
)
_document_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "document_id", default=None
)
_document_name: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "document_name", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    run_id: str | None = None
    pass_name: str | None = None
    document_id: str | None = None
    document_name: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        run_id=_run_id.get(),
        pass_name=_pass_name.get(),
        document_id=_document_id.get(),
        document_name=_document_name.get(),
    )


def set_pass_context(pass_name: str, run_id: str) -> None:
    """Set pass-level context (called once per pass)."""
    _pass_name.set(pass_name)
    _run_id.set(run_id)


def set_document_context(document_id: str | None, document_name: str | None) -> None:
    """Set document-level context (called per document)."""
    _document_id.set(document_id)
    _document_name.set(document_name)


def clear_context() -> None:
    """Reset all context variables."""
    _run_id.set(None)
    _pass_name.set(None)
    _document_id.set(None)
    _document_name.set(None)
