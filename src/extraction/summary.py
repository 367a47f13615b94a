# src/extraction/summary.py — v1
"""Heading-delimited free-text summary extraction."""

from __future__ import annotations

from collections.abc import Iterable

DEFAULT_START_HEADING = "A summary of the incident"
DEFAULT_END_HEADING = "Mitigation Matrix:"


def extract_summary(
    paragraphs: Iterable[str],
    start_heading: str = DEFAULT_START_HEADING,
    end_heading: str = DEFAULT_END_HEADING,
) -> str:
    """Collect the paragraphs between two exact-match headings.

    Nothing is collected until a paragraph whose stripped text equals
    ``start_heading``. After that, each non-empty stripped paragraph is
    appended on its own line until one equals ``end_heading``. A repeated
    start heading inside the section is not part of the summary. A missing
    start heading yields ""; a missing end heading collects to the end.

    Args:
        paragraphs: Paragraph texts in document order.
        start_heading: Heading that opens the summary section.
        end_heading: Heading that closes it.

    Returns:
        Newline-joined summary with trailing whitespace removed.
    """
    lines: list[str] = []
    found_start = False
    for paragraph in paragraphs:
        text = paragraph.strip()
        if not found_start:
            found_start = text == start_heading
            continue
        if text == end_heading:
            break
        if text and text != start_heading:
            lines.append(text)
    return "\n".join(lines).rstrip()
