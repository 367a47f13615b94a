# src/extraction/markup_scanner.py — v1
"""Tokenizing scanner over WordprocessingML body markup.

Finds dropdown content controls (a ``w:alias`` declaration followed, with
any markup in between, by a ``w:dropDownList`` carrying ``w:lastValue``)
and the first escaped ``<H:MM>`` time-to-detect token in the text.

The scan is a single forward pass over tag and text tokens. Fields may
appear in any order and any number.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from html import unescape

from incidentsync.core.models import FieldMarker

ALIAS_TAG = "w:alias"
ALIAS_ATTR = "w:val"
DROPDOWN_TAG = "w:dropDownList"
DROPDOWN_ATTR = "w:lastValue"

_TOKEN_RE = re.compile(r"<[^>]*>|[^<]+")
_TAG_NAME_RE = re.compile(r"<\s*([^\s/>]+)")
_ATTR_RE = re.compile(r'([^\s=/>]+)\s*=\s*"([^"]*)"')
# Angle brackets around the token are entity-escaped in the markup stream.
_TIME_TOKEN_RE = re.compile(r"&lt;(\d+:\d{2})&gt;")


@dataclass
class MarkupScan:
    """Result of scanning one document's markup."""

    field_markers: list[FieldMarker] = field(default_factory=list)
    raw_time_to_detect: str | None = None


@dataclass
class _Tag:
    name: str
    attrs: dict[str, str]


class MarkupScanner:
    """Single-pass scanner emitting field markers in document order."""

    def __init__(self) -> None:
        self._pending_type: str | None = None
        self._result = MarkupScan()

    def scan(self, markup: str) -> MarkupScan:
        """Scan markup and return markers plus the first time token."""
        self._pending_type = None
        self._result = MarkupScan()
        for token in _TOKEN_RE.finditer(markup):
            text = token.group(0)
            if text.startswith("<"):
                tag = self._parse_tag(text)
                if tag is not None:
                    self._on_tag(tag)
            else:
                self._on_text(text)
        return self._result

    def _on_tag(self, tag: _Tag) -> None:
        if tag.name == ALIAS_TAG:
            value = tag.attrs.get(ALIAS_ATTR, "")
            # The first alias since the last dropdown owns the next dropdown.
            if value and self._pending_type is None:
                self._pending_type = value
        elif tag.name == DROPDOWN_TAG and self._pending_type is not None:
            last_value = tag.attrs.get(DROPDOWN_ATTR, "")
            if last_value:
                self._result.field_markers.append(
                    FieldMarker(type=self._pending_type, value=last_value)
                )
                self._pending_type = None

    def _on_text(self, text: str) -> None:
        if self._result.raw_time_to_detect is not None:
            return
        match = _TIME_TOKEN_RE.search(text)
        if match:
            self._result.raw_time_to_detect = match.group(1)

    @staticmethod
    def _parse_tag(raw: str) -> _Tag | None:
        """Parse an opening or self-closing tag; None for others."""
        if raw.startswith(("</", "<?", "<!")):
            return None
        name_match = _TAG_NAME_RE.match(raw)
        if not name_match:
            return None
        attrs = {
            key: unescape(value)
            for key, value in _ATTR_RE.findall(raw[name_match.end():])
        }
        return _Tag(name=name_match.group(1), attrs=attrs)


def scan_markup(markup: str) -> MarkupScan:
    """Convenience wrapper around MarkupScanner."""
    return MarkupScanner().scan(markup)

