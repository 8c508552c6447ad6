"""
Property Type Utilities

Maps Price Paid Data category flags onto the values used by the model.
"""

from typing import Optional

from pricemodel.core.constants import PROPERTY_TYPE_BASELINE, PROPERTY_TYPE_CODES

# Price Paid property type codes
PROPERTY_TYPE_LABELS = {
    "D": "Detached",
    "S": "Semi-detached",
    "T": "Terraced",
    "F": "Flat/Maisonette",
    "O": "Other",
}


def normalize_property_type(value: Optional[str]) -> str:
    """Coerce a property type flag to D, S, T or F, else O.

    Example:
        >>> normalize_property_type(" s ")
        "S"
        >>> normalize_property_type("X")
        "O"
    """
    code = (value or "").strip().upper()
    if code in PROPERTY_TYPE_CODES:
        return code
    return PROPERTY_TYPE_BASELINE


def normalize_new_build(value: Optional[str]) -> bool:
    """New build iff the flag is "Y"."""
    return (value or "").strip().upper() == "Y"


def normalize_tenure(value: Optional[str]) -> str:
    """Leasehold ("L") iff the flag is "L"; everything else is freehold."""
    return "L" if (value or "").strip().upper() == "L" else "F"


def property_type_label(code: Optional[str]) -> str:
    """Human readable label for a property type code."""
    return PROPERTY_TYPE_LABELS[normalize_property_type(code)]
