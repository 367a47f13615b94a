# src/pipeline/provision.py — v1
"""Monthly report provisioning from the template workbook.

The copy lands in ``_<YYYY>/_<YYYY>-<MM>`` beside the template and is named
for the following month. Running twice in the same month is a no-op.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from incidentsync.config.settings import Settings, load_settings
from incidentsync.storage.base_folder_store import BaseFolderStore

logger = logging.getLogger(__name__)


def next_month(today: date) -> date:
    """First day of the month after ``today``."""
    if today.month == 12:
        return date(today.year + 1, 1, 1)
    return date(today.year, today.month + 1, 1)


class ReportProvisioner:
    """Copy the template workbook into next month's report folder."""

    def __init__(
        self,
        folder_store: BaseFolderStore,
        settings: Settings | None = None,
    ) -> None:
        self._folders = folder_store
        self._settings = settings or load_settings()

    def report_name(self, month: date) -> str:
        """e.g. "Incident Summary - March 2026"."""
        return f"{self._settings.report_name_prefix} - {month:%B} {month.year}"

    def run(self, template_path: Path | str, today: date | None = None) -> str | None:
        """Create next month's report; return its id, or None if skipped."""
        template = Path(template_path)
        if template.stem != self._settings.template_name:
            logger.info(
                "Provisioning only runs on the template workbook (%s), got %s. Exiting.",
                self._settings.template_name, template.stem,
            )
            return None

        month = next_month(today or date.today())
        file_name = f"{self.report_name(month)}{template.suffix}"
        year_folder_name = f"_{month.year}"
        month_folder_name = f"_{month.year}-{month.month:02d}"

        parent = self._folders.get_parent_folder(str(template))
        year_folder = self._folders.get_or_create_folder(parent, year_folder_name)
        month_folder = self._folders.get_or_create_folder(year_folder, month_folder_name)

        if self._folders.find_file(month_folder, file_name) is not None:
            logger.info(
                "File already exists: %s in folder %s/%s",
                file_name, year_folder_name, month_folder_name,
            )
            return None

        new_id = self._folders.copy_file(str(template), month_folder, file_name)
        logger.info(
            "New report created: %s in folder %s/%s",
            file_name, year_folder_name, month_folder_name,
        )
        return new_id
