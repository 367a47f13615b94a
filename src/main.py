# src/main.py — v2
"""CLI entry point — provision, links, assignees, refresh, matrix commands.

Usage:
    incidentsync provision <template.xlsx> [--date YYYY-MM-DD]
    incidentsync links <workbook.xlsx>
    incidentsync assignees <workbook.xlsx>
    incidentsync refresh <workbook.xlsx>
    incidentsync matrix <workbook.xlsx>

The incident folders are the subdirectories of the workbook's directory.
Schedule ``refresh`` and ``matrix`` with cron for daily runs.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from incidentsync.version import __version__

if TYPE_CHECKING:
    from incidentsync.config.settings import Settings
    from incidentsync.core.models import PassReport

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = _load_settings(args.env_file)
        _setup_logging(settings, args.verbose)
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="incidentsync",
        description=f"incidentsync v{__version__} — Incident report automation",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--env-file", type=Path, default=Path(".env"),
        help="Settings file (default: ./.env)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- provision ---
    p_provision = subparsers.add_parser(
        "provision", help="Create next month's report from the template",
    )
    p_provision.add_argument("template", type=Path, help="Path to template workbook")
    p_provision.add_argument(
        "--date", dest="today", type=date.fromisoformat, default=None,
        help="Reference date YYYY-MM-DD (default: today)",
    )
    p_provision.set_defaults(func=_cmd_provision)

    # --- workbook commands ---
    for name, help_text, func in [
        ("links", "Link incident subfolders into the tracking sheet", _cmd_links),
        ("assignees", "Extract document fields into the tracking sheet", _cmd_assignees),
        ("refresh", "Folder links, then tracking sheet fields", _cmd_refresh),
        ("matrix", "Rebuild the raw mitigation matrix sheet", _cmd_matrix),
    ]:
        p_cmd = subparsers.add_parser(name, help=help_text)
        p_cmd.add_argument("workbook", type=Path, help="Path to report workbook")
        p_cmd.set_defaults(func=func)

    return parser


async def _cmd_provision(args: argparse.Namespace, settings: Settings) -> int:
    """Copy the template into next month's folder."""
    from incidentsync.pipeline.runner import PassRunner

    template: Path = args.template
    if not template.is_file():
        logger.error("File not found: %s", template)
        return 1

    runner = PassRunner(settings)
    try:
        new_id = runner.provision(template, args.today)
    finally:
        runner.close()
    if new_id is not None:
        print(f"Created {new_id}")
    return 0


async def _cmd_links(args: argparse.Namespace, settings: Settings) -> int:
    from incidentsync.pipeline.runner import PassRunner
    from incidentsync.storage.xlsx_workbook import XlsxWorkbook

    runner = PassRunner(settings)
    try:
        report = runner.links(XlsxWorkbook(args.workbook))
    finally:
        runner.close()
    _print_report(report)
    return 1 if report.aborted else 0


async def _cmd_assignees(args: argparse.Namespace, settings: Settings) -> int:
    from incidentsync.pipeline.runner import PassRunner
    from incidentsync.storage.xlsx_workbook import XlsxWorkbook

    runner = PassRunner(settings)
    try:
        report = await runner.assignees(XlsxWorkbook(args.workbook))
    finally:
        runner.close()
    _print_report(report)
    return 1 if report.aborted else 0


async def _cmd_refresh(args: argparse.Namespace, settings: Settings) -> int:
    from incidentsync.pipeline.runner import PassRunner
    from incidentsync.storage.xlsx_workbook import XlsxWorkbook

    runner = PassRunner(settings)
    try:
        reports = await runner.refresh(XlsxWorkbook(args.workbook))
    finally:
        runner.close()
    for report in reports:
        _print_report(report)
    return 1 if any(r.aborted for r in reports) else 0


async def _cmd_matrix(args: argparse.Namespace, settings: Settings) -> int:
    from incidentsync.pipeline.runner import PassRunner
    from incidentsync.storage.xlsx_workbook import XlsxWorkbook

    runner = PassRunner(settings)
    try:
        report = await runner.matrix(XlsxWorkbook(args.workbook))
    finally:
        runner.close()
    _print_report(report)
    return 1 if report.aborted else 0


def _print_report(report: PassReport) -> None:
    """Print a human-readable summary of a PassReport."""
    print(f"\n{report.pass_name} pass:")
    if report.aborted:
        print(f"  Aborted:      {report.abort_reason}")
        return
    print(f"  Rows written: {report.rows_written}")
    print(f"  Extracted:    {report.count('extracted')}")
    print(f"  Cached:       {report.count('cached')}")
    print(f"  Skipped:      {report.count('skipped')}")
    print(f"  Failed:       {report.count('failed')}")
    print(f"  Duration:     {report.duration_seconds:.1f}s")
    for outcome in report.outcomes:
        if outcome.status == "failed":
            print(f"    ! {outcome.document_name}: {outcome.reason}")


def _load_settings(env_file: Path) -> Settings:
    from incidentsync.config.settings import load_settings

    return load_settings(_env_file=env_file if env_file.is_file() else None)


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from incidentsync.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
