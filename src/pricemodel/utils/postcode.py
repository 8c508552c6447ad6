"""
UK Postcode Utilities

Postcodes are keyed in their compact form ("SE207UA"): uppercase with all
whitespace removed. The outcode is everything except the three-character
inward code.
"""

import re
from typing import Iterable, Optional

from pricemodel.core.constants import INWARD_CODE_LENGTH

_WHITESPACE_RE = re.compile(r"\s+")
_AREA_RE = re.compile(r"^[A-Z]+")


def normalize_postcode(raw: Optional[str]) -> str:
    """Uppercase a postcode and strip all whitespace.

    Example:
        >>> normalize_postcode(" se20 7ua ")
        "SE207UA"
    """
    if not raw:
        return ""
    return _WHITESPACE_RE.sub("", str(raw)).upper()


def parse_outcode(normalized: str) -> str:
    """Outward code of a normalized postcode.

    Example:
        >>> parse_outcode("SE207UA")
        "SE20"
    """
    return normalized[:-INWARD_CODE_LENGTH]


def postcode_area(postcode: Optional[str]) -> str:
    """Leading letters of a postcode ("SE" for "SE20 7UA")."""
    match = _AREA_RE.match(normalize_postcode(postcode))
    return match.group(0) if match else ""


def format_postcode(normalized: str) -> str:
    """Display form with a single space before the inward code."""
    if len(normalized) <= INWARD_CODE_LENGTH:
        return normalized
    return f"{parse_outcode(normalized)} {normalized[-INWARD_CODE_LENGTH:]}"


def is_allowed_area(outcode: str, allowed_areas: Iterable[str]) -> bool:
    """True if the outcode starts with any allowed area prefix."""
    return any(outcode.startswith(area) for area in allowed_areas)
