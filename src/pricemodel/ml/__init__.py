"""
Machine Learning module for the Price Paid Valuation Model.

Provides ridge regression training, feature encoding and evaluation.
"""

from pricemodel.ml.evaluation import compute_metrics
from pricemodel.ml.feature_engineering import (
    NUMERIC_FEATURES,
    encode,
    fit_schema,
)
from pricemodel.ml.solver import fit_ridge, solve_linear_system
from pricemodel.ml.splitter import split_records
from pricemodel.ml.valuation_predictor import PricingModel

__all__ = [
    "PricingModel",
    "NUMERIC_FEATURES",
    "compute_metrics",
    "encode",
    "fit_schema",
    "fit_ridge",
    "solve_linear_system",
    "split_records",
]
