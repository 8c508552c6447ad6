"""
Numeric Parsing Utilities

Source files are read as text; values are converted here and rejected when
they are not finite.
"""

import math
from typing import Optional, Union

from pricemodel.logging_config import get_logger

logger = get_logger(__name__)


def parse_float(value: Union[str, float, int, None]) -> Optional[float]:
    """Parse a number, returning None for blanks, junk, NaN and infinities.

    Example:
        >>> parse_float("250000")
        250000.0
        >>> parse_float("n/a") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.debug("Could not parse number: %r", value)
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_price(value: Union[str, float, int, None]) -> Optional[float]:
    """Parse a sale price; only strictly positive values are valid."""
    price = parse_float(value)
    if price is None or price <= 0:
        return None
    return price


def format_price(price: Optional[float]) -> str:
    """Format a price for display.

    Example:
        >>> format_price(250000)
        "£250,000"
    """
    if price is None:
        return "N/A"
    return f"£{price:,.0f}"
