"""
Unified Date Parsing Utilities

Price Paid Data, UKHPI series and planning listings each write dates
differently. Every stage goes through parse_date() so that a month key
means the same thing everywhere.
"""

import re
from datetime import datetime
from typing import Optional, Union

import pandas as pd

from pricemodel.logging_config import get_logger

logger = get_logger(__name__)

# Common date format patterns
DATE_PATTERNS = [
    # ISO format: 2024-01-15
    (r"^\d{4}-\d{2}-\d{2}$", "%Y-%m-%d"),
    # Price Paid format: 2024-01-15 00:00
    (r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}$", "%Y-%m-%d %H:%M"),
    # ISO with seconds: 2024-01-15 10:30:00
    (r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$", "%Y-%m-%d %H:%M:%S"),
    # Month key: 2024-01
    (r"^\d{4}-\d{2}$", "%Y-%m"),
    # UK format: 15/01/2024 or 5/1/2024
    (r"^\d{1,2}/\d{1,2}/\d{4}$", "%d/%m/%Y"),
    # Planning portal format: Mon 15 Jan 2024
    (r"^[A-Za-z]{3}\s+\d{1,2}\s+[A-Za-z]{3}\s+\d{4}$", "%a %d %b %Y"),
    # Short month: 15 Jan 2024
    (r"^\d{1,2}\s+[A-Za-z]{3}\s+\d{4}$", "%d %b %Y"),
    # Full month: 15 January 2024
    (r"^\d{1,2}\s+[A-Za-z]+\s+\d{4}$", "%d %B %Y"),
    # Month year: Jan 2024
    (r"^[A-Za-z]{3}\s+\d{4}$", "%b %Y"),
]


def parse_date(date_str: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse a date string into a datetime object.

    Accepts ISO-like forms (``2024-01-15``, ``2024-01-15 00:00``,
    ``2024-01-15T10:30:00Z``, ``2024-01``) and day-first UK forms
    (``15/01/2024``, ``5/1/2024``, ``15 Jan 2024``).

    Args:
        date_str: Date string to parse.

    Returns:
        datetime object or None if parsing fails.

    Example:
        >>> parse_date("5/3/2024")
        datetime(2024, 3, 5, 0, 0)
        >>> parse_date("2024-03-05 00:00")
        datetime(2024, 3, 5, 0, 0)
    """
    if isinstance(date_str, datetime):
        return date_str
    if not date_str:
        return None

    date_str = str(date_str).strip()
    if not date_str:
        return None

    # Handle ISO format with time component
    if "T" in date_str and re.match(r"^\d{4}-\d{2}-\d{2}T", date_str):
        try:
            return datetime.strptime(date_str.split("T")[0], "%Y-%m-%d")
        except ValueError:
            return None

    for pattern, fmt in DATE_PATTERNS:
        if re.match(pattern, date_str):
            try:
                return datetime.strptime(date_str, fmt)
            except ValueError:
                continue

    logger.debug("Could not parse date: %s", date_str)
    return None


def month_key(dt: datetime) -> str:
    """Zero-padded ``YYYY-MM`` key; sorts lexicographically by time."""
    return f"{dt.year:04d}-{dt.month:02d}"


def previous_month_key(key: str) -> str:
    """Month key one calendar month before ``key``.

    Example:
        >>> previous_month_key("2024-01")
        "2023-12"
    """
    year_str, month_str = key.split("-")
    year, month = int(year_str), int(month_str) - 1
    if month <= 0:
        month = 12
        year -= 1
    return f"{year:04d}-{month:02d}"


def subtract_months(dt: datetime, months: int) -> datetime:
    """Calendar month arithmetic (31 Mar - 1 month = 29 Feb in a leap year)."""
    return (pd.Timestamp(dt) - pd.DateOffset(months=months)).to_pydatetime()
