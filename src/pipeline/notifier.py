# src/pipeline/notifier.py — v1
"""User-visible notices (missing sheets, empty results)."""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import TextIO

logger = logging.getLogger(__name__)


class BaseNotifier(ABC):
    """Delivers a message to whoever started the run."""

    @abstractmethod
    def alert(self, message: str) -> None:
        """Show a message to the user."""


class ConsoleNotifier(BaseNotifier):
    """Writes notices to a stream (stderr by default) and the log."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def alert(self, message: str) -> None:
        logger.warning(message)
        print(message, file=self._stream or sys.stderr)
