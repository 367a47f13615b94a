# src/core/timecodec.py — v1
"""Time-to-detect conversion from ``H:MM`` tokens to decimal hours."""

from __future__ import annotations


def time_to_decimal(raw: str | None) -> float | None:
    """Convert an ``H:MM`` string to decimal hours rounded to 2 places.

    Args:
        raw: Time token such as "2:30". None or empty yields None.

    Returns:
        Decimal hours (e.g. 2.5), or None if the token is malformed.
    """
    if not raw:
        return None
    parts = raw.split(":")
    if len(parts) < 2:
        return None
    try:
        hours = int(parts[0].strip())
        minutes = int(parts[1].strip())
    except ValueError:
        return None
    return round(hours + minutes / 60, 2)
