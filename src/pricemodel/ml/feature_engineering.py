"""
Feature Engineering for the Price Paid Valuation Model

Encodes training records as fixed-length numeric vectors. The layout is
recorded in a FeatureSchema so that a saved model can rebuild exactly the
same vector at scoring time.
"""

from typing import Dict, List, Mapping, Sequence

import numpy as np

from pricemodel.core.constants import PROPERTY_TYPE_CODES, VARIANCE_FLOOR
from pricemodel.core.models import FeatureScaling, FeatureSchema, TrainingRecord
from pricemodel.exceptions import InsufficientDataError
from pricemodel.logging_config import get_logger

logger = get_logger(__name__)

# Standardized (z-score) features
NUMERIC_FEATURES: List[str] = [
    "distanceKm",
    "distanceKm2",
    "hpiIndex",
    "planningCount12m",
    "saleYear",
]

# Intercept and indicators; property type "O" is the all-zero reference level
CATEGORICAL_FEATURES: List[str] = (
    ["intercept"]
    + [f"type_{code}" for code in PROPERTY_TYPE_CODES]
    + ["newBuild", "leasehold"]
)

OUTCODE_PREFIX = "outcode_"


def numeric_values(
    distance_km: float,
    hpi_index: float,
    planning_count_12m: float,
    sale_year: float,
) -> Dict[str, float]:
    """Raw (unscaled) numeric features."""
    return {
        "distanceKm": float(distance_km),
        "distanceKm2": float(distance_km) * float(distance_km),
        "hpiIndex": float(hpi_index),
        "planningCount12m": float(planning_count_12m or 0),
        "saleYear": float(sale_year),
    }


def record_numeric_values(record: TrainingRecord) -> Dict[str, float]:
    return numeric_values(
        record.distance_km,
        record.hpi_index,
        record.planning_count_12m,
        record.year,
    )


def compute_scaling(records: Sequence[TrainingRecord]) -> Dict[str, FeatureScaling]:
    """Population mean and std per numeric feature.

    Variance is floored at 1e-12 so a constant feature scales to zero
    instead of dividing by zero.
    """
    matrix = np.array(
        [[record_numeric_values(r)[name] for name in NUMERIC_FEATURES] for r in records],
        dtype=float,
    )
    means = matrix.mean(axis=0)
    variances = matrix.var(axis=0)
    stds = np.sqrt(np.maximum(variances, VARIANCE_FLOOR))
    return {
        name: FeatureScaling(mean=float(means[i]), std=float(stds[i]))
        for i, name in enumerate(NUMERIC_FEATURES)
    }


def build_feature_names(outcodes: Sequence[str]) -> List[str]:
    """Full feature order: categoricals, numerics, then outcode dummies.

    The first (sorted) outcode is the baseline and gets no dummy.
    """
    return (
        list(CATEGORICAL_FEATURES)
        + list(NUMERIC_FEATURES)
        + [f"{OUTCODE_PREFIX}{code}" for code in list(outcodes)[1:]]
    )


def fit_schema(records: Sequence[TrainingRecord]) -> FeatureSchema:
    """Derive the feature schema from the full record set.

    Raises:
        InsufficientDataError: If there are no records.
    """
    if not records:
        raise InsufficientDataError("No training records found.", required=1, available=0)

    outcodes = sorted({r.outcode for r in records})
    schema = FeatureSchema(
        feature_names=build_feature_names(outcodes),
        numeric_feature_names=list(NUMERIC_FEATURES),
        scaling=compute_scaling(records),
        outcodes=outcodes,
        base_outcode=outcodes[0] if outcodes else "",
    )
    logger.info(
        "Feature schema: %d features, %d outcodes (baseline %s)",
        len(schema.feature_names),
        len(outcodes),
        schema.base_outcode,
    )
    return schema


def _scale(schema: FeatureSchema, name: str, value: float) -> float:
    stats = schema.scaling.get(name)
    if stats is None or not np.isfinite(stats.std) or stats.std == 0:
        return value
    return (value - stats.mean) / stats.std


def feature_values(
    schema: FeatureSchema,
    property_type: str,
    new_build: bool,
    tenure: str,
    outcode: str,
    numerics: Mapping[str, float],
) -> Dict[str, float]:
    """Named feature values for one observation."""
    values: Dict[str, float] = {"intercept": 1.0}
    for code in PROPERTY_TYPE_CODES:
        values[f"type_{code}"] = 1.0 if property_type == code else 0.0
    values["newBuild"] = 1.0 if new_build else 0.0
    values["leasehold"] = 1.0 if tenure == "L" else 0.0
    for name in schema.numeric_feature_names:
        values[name] = _scale(schema, name, numerics[name])
    for code in schema.outcodes[1:]:
        values[f"{OUTCODE_PREFIX}{code}"] = 1.0 if outcode == code else 0.0
    return values


def encode_values(schema: FeatureSchema, values: Mapping[str, float]) -> np.ndarray:
    """Order named values by the schema; names not supplied encode as 0."""
    return np.array([values.get(name, 0.0) for name in schema.feature_names], dtype=float)


def encode(record: TrainingRecord, schema: FeatureSchema) -> np.ndarray:
    """Feature vector for a record, len(schema.feature_names) long."""
    values = feature_values(
        schema,
        property_type=record.property_type,
        new_build=record.new_build,
        tenure=record.tenure,
        outcode=record.outcode,
        numerics=record_numeric_values(record),
    )
    return encode_values(schema, values)


def encode_matrix(records: Sequence[TrainingRecord], schema: FeatureSchema) -> np.ndarray:
    """Design matrix, one row per record."""
    if not records:
        return np.zeros((0, len(schema.feature_names)))
    return np.vstack([encode(r, schema) for r in records])
