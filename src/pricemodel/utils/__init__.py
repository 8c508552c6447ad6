"""
Utility modules for the Price Paid Valuation Model.

Provides shared parsing and normalisation for dates, postcodes, prices and
property categories.
"""

from pricemodel.utils.date_parser import (
    month_key,
    parse_date,
    previous_month_key,
    subtract_months,
)
from pricemodel.utils.postcode import (
    format_postcode,
    is_allowed_area,
    normalize_postcode,
    parse_outcode,
    postcode_area,
)
from pricemodel.utils.price_parser import format_price, parse_float, parse_price
from pricemodel.utils.property_types import (
    normalize_new_build,
    normalize_property_type,
    normalize_tenure,
)

__all__ = [
    "month_key",
    "parse_date",
    "previous_month_key",
    "subtract_months",
    "format_postcode",
    "is_allowed_area",
    "normalize_postcode",
    "parse_outcode",
    "postcode_area",
    "format_price",
    "parse_float",
    "parse_price",
    "normalize_new_build",
    "normalize_property_type",
    "normalize_tenure",
]
