#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

from typing import Optional
from datetime import datetime, timezone


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Safely convert datetime to ISO format string.

    Naive datetimes are stored as UTC and are tagged as such.

    Args:
        dt: Datetime object.

    Returns:
        ISO format string or None.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def next_offset(offset: int, limit: int, total: int) -> Optional[int]:
    """Offset of the following page, or None when this page is the last."""
    return offset + limit if offset + limit < total else None


def preview(text: str, length: int = 200) -> str:
    """First length characters, with "..." only when something was cut."""
    if len(text) <= length:
        return text
    return text[:length] + "..."
