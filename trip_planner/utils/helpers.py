"""
Helper utilities for the Trip Planner workspace.

This module provides general utility functions used across the application.
"""

import time
import uuid
from datetime import date, datetime


def generate_id(prefix: str = "") -> str:
    """
    Generate a unique ID with an optional prefix.

    IDs are random UUID4 values (122 random bits), so two IDs generated
    anywhere in the workspace collide with negligible probability and no
    collision check is performed.

    Args:
        prefix: Optional prefix for the ID

    Returns:
        A unique ID string
    """
    unique_id = uuid.uuid4().hex
    if prefix:
        return f"{prefix}-{unique_id}"
    return unique_id


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def parse_iso_date(value: str | date) -> date:
    """
    Parse a ``YYYY-MM-DD`` calendar date.

    The result is a plain ``date`` with no time or timezone component, so
    no local-midnight conversion can shift it by a day.

    Args:
        value: ISO date string or an existing date

    Returns:
        The calendar date

    Raises:
        ValueError: If the string is not a valid ISO calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Keep the first ``max_length`` characters of text, adding a suffix if
    anything was cut.

    Args:
        text: Text to truncate
        max_length: Number of characters kept from the original text
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text

    return text[:max_length] + suffix


def strip_data_url(data: str) -> str:
    """Return the base64 payload of a ``data:...;base64,`` URL, or data unchanged."""
    if "base64," in data:
        return data.split("base64,", 1)[1]
    return data


def to_data_url(data: str, mime_type: str = "image/png") -> str:
    """Wrap a base64 payload as a data URL."""
    return f"data:{mime_type};base64,{data}"
