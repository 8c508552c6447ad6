"""
Price Paid Valuation Model

Builds a geographically and temporally scoped dataset of residential sales
from HM Land Registry Price Paid Data and fits a ridge regression pricing
model to it.

Main components:
- dataset: postcode geocoding, UKHPI alignment, planning activity, assembly
- ml: feature encoding, train/test splitting, ridge solver, evaluation
- cli: Command-line interfaces

Usage:
    from pricemodel import get_config
    from pricemodel.dataset.pipeline import build_dataset
    from pricemodel.ml import PricingModel
"""

__version__ = "1.0.0"

from pricemodel.config import get_config
from pricemodel.logging_config import setup_logging

__all__ = [
    "__version__",
    "get_config",
    "setup_logging",
]
