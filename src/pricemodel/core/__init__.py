"""
Core data models and constants shared by the dataset and training pipelines.
"""

from pricemodel.core.models import (
    ActivityCounts,
    DatasetStats,
    FeatureSchema,
    FeatureScaling,
    FittedModel,
    GeocodeResult,
    Metrics,
    PlanningRecord,
    PostcodeInfo,
    PostcodeRecord,
    RawTransaction,
    TrainingRecord,
)

__all__ = [
    "ActivityCounts",
    "DatasetStats",
    "FeatureSchema",
    "FeatureScaling",
    "FittedModel",
    "GeocodeResult",
    "Metrics",
    "PlanningRecord",
    "PostcodeInfo",
    "PostcodeRecord",
    "RawTransaction",
    "TrainingRecord",
]
