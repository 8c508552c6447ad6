"""
Price Paid Valuation Model

Ridge regression on log sale price with support for:
- Training from the assembled JSONL dataset (temporal or random split)
- JSON persistence of coefficients, feature schema and metrics
- Scoring a postcode from the artifacts written by the dataset build
"""

import math
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np

from pricemodel.config import TrainingConfig, get_config
from pricemodel.core.constants import (
    DATASET_METADATA_FILE,
    DEFAULT_DISTRICT,
    DEFAULT_HPI_INDEX,
    DEFAULT_HPI_SLUG,
    HPI_LATEST_FILE,
    OUTCODE_TO_DISTRICT,
    PLANNING_COUNTS_FILE,
    POSTCODE_LOOKUP_FILE,
    PROPERTY_TYPE_BASELINE,
    TRAINING_METRICS_FILE,
)
from pricemodel.core.models import (
    ActivityCounts,
    FittedModel,
    PostcodeInfo,
    TrainingRecord,
)
from pricemodel.dataset import sources
from pricemodel.dataset.hpi import resolve_hpi_slug
from pricemodel.exceptions import (
    InsufficientDataError,
    ModelNotFoundError,
    PredictionError,
    TrainingError,
)
from pricemodel.logging_config import get_logger
from pricemodel.ml.evaluation import compute_metrics
from pricemodel.ml.feature_engineering import (
    encode,
    encode_matrix,
    encode_values,
    feature_values,
    fit_schema,
    numeric_values,
)
from pricemodel.ml.solver import fit_ridge
from pricemodel.ml.splitter import split_records
from pricemodel.utils.date_parser import parse_date
from pricemodel.utils.postcode import normalize_postcode, parse_outcode
from pricemodel.utils.property_types import normalize_property_type, normalize_tenure

logger = get_logger(__name__)


def district_for_outcode(outcode: str) -> str:
    """Local authority district for an outcode.

    Exact outcode first, then the first known outcode sharing its area
    letters, then LONDON.
    """
    if outcode in OUTCODE_TO_DISTRICT:
        return OUTCODE_TO_DISTRICT[outcode]
    for known, district in OUTCODE_TO_DISTRICT.items():
        if outcode.startswith(known.rstrip("0123456789")):
            return district
    return DEFAULT_DISTRICT


class PricingModel:
    """Ridge regression model for residential sale prices."""

    def __init__(self, model_path: Optional[Path] = None, training_dir: Optional[Path] = None):
        """Initialize the model.

        Args:
            model_path: Location of the model JSON document.
            training_dir: Directory holding the dataset build artifacts.
        """
        config = get_config()
        self.model_path = Path(model_path or config.paths.model_path)
        self.training_dir = Path(training_dir or config.paths.training_dir)

        self.fitted: Optional[FittedModel] = None
        self._coefficients: Optional[np.ndarray] = None

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def load_training_data(self, dataset_path: Optional[Path] = None) -> List[TrainingRecord]:
        """Load the assembled dataset into memory."""
        dataset_path = dataset_path or get_config().paths.dataset_path
        logger.info("Loading training data from %s", dataset_path)
        records = sources.read_training_records(dataset_path)
        logger.info("Loaded %d training records", len(records))
        return records

    def train(
        self,
        records: Sequence[TrainingRecord],
        training: Optional[TrainingConfig] = None,
    ) -> FittedModel:
        """Fit the model on the given records.

        Args:
            records: Full record set; split internally.
            training: Hyperparameters (defaults to config).

        Returns:
            The FittedModel (also kept on ``self.fitted``).

        Raises:
            InsufficientDataError: If there are no records or the training split is empty.
            SingularMatrixError: If the normal equations are singular.
        """
        training = training or get_config().training
        if not records:
            raise InsufficientDataError("No training records found.", required=1, available=0)

        schema = fit_schema(records)
        split = split_records(records, training.split_mode, training.test_ratio, training.seed)
        if not split.train:
            raise InsufficientDataError(
                "Training split is empty.", required=1, available=len(split.train)
            )

        X = encode_matrix(split.train, schema)
        y = np.array([r.log_price for r in split.train], dtype=float)

        logger.info(
            "Fitting ridge regression: %d rows, %d features, lambda=%s",
            X.shape[0],
            X.shape[1],
            training.ridge_lambda,
        )
        coefficients = fit_ridge(X, y, training.ridge_lambda)
        self._coefficients = coefficients

        self.fitted = FittedModel(
            feature_schema=schema,
            coefficients=coefficients.tolist(),
            ridge_lambda=training.ridge_lambda,
            split_mode=split.split_mode,
            record_counts={
                "total": len(records),
                "train": len(split.train),
                "test": len(split.test),
            },
            generated_at=datetime.now().isoformat(),
        )
        self.fitted.train_metrics = compute_metrics(split.train, self.predict_log)
        self.fitted.test_metrics = compute_metrics(split.test, self.predict_log)

        for name, metrics in self.fitted.metrics.items():
            logger.info(
                "%s: R² %.4f | MAE £%s | RMSE £%s | MAPE %.2f%%",
                name,
                metrics.r2,
                f"{metrics.mae:,.0f}",
                f"{metrics.rmse:,.0f}",
                metrics.mape * 100,
            )
        return self.fitted

    def predict_log(self, record: TrainingRecord) -> float:
        """Predicted log price for a record."""
        self._require_model()
        return float(self._coefficients @ encode(record, self.fitted.feature_schema))

    def predict(self, record: TrainingRecord) -> float:
        """Predicted price for a record."""
        return math.exp(self.predict_log(record))

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> None:
        """Save the model document and a training metrics summary."""
        if self.fitted is None:
            raise TrainingError("No model to save. Train the model first.")

        sources.write_json(self.model_path, self.fitted.to_dict())
        sources.write_json(self.training_dir / TRAINING_METRICS_FILE, {
            "generatedAt": self.fitted.generated_at,
            "splitMode": self.fitted.split_mode,
            "lambda": self.fitted.ridge_lambda,
            "metrics": {k: v.to_dict() for k, v in self.fitted.metrics.items()},
        })
        logger.info("Model saved to: %s", self.model_path)

    def load(self) -> bool:
        """Load a saved model.

        Returns:
            True if the model loaded successfully.
        """
        payload = sources.read_json(self.model_path)
        if payload is None:
            logger.warning("Model not found at %s", self.model_path)
            return False
        try:
            self.fitted = FittedModel.from_dict(payload)
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Error loading model %s: %s", self.model_path, e)
            return False
        self._coefficients = np.array(self.fitted.coefficients, dtype=float)
        logger.info("Model loaded from %s", self.model_path)
        return True

    def _require_model(self) -> None:
        if self.fitted is None and not self.load():
            raise ModelNotFoundError(str(self.model_path))

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def _load_context(self) -> Dict:
        lookup = sources.read_json(self.training_dir / POSTCODE_LOOKUP_FILE)
        return {
            "postcodes": (
                {pc: PostcodeInfo.from_dict(info) for pc, info in lookup.items()}
                if lookup is not None else None
            ),
            "hpi_latest": sources.read_json(self.training_dir / HPI_LATEST_FILE, default={}),
            "planning": ActivityCounts.from_dict(
                sources.read_json(self.training_dir / PLANNING_COUNTS_FILE, default={})
            ),
            "dataset_meta": sources.read_json(self.training_dir / DATASET_METADATA_FILE, default={}),
        }

    def estimate(
        self,
        postcode: str,
        property_type: str = PROPERTY_TYPE_BASELINE,
        tenure: str = "F",
        new_build: bool = False,
        as_of: Optional[str] = None,
    ) -> Dict:
        """Estimate the price of a property from its postcode and attributes.

        Args:
            postcode: Postcode inside the trained region.
            property_type: D, S, T, F or O.
            tenure: F or L.
            new_build: New build flag.
            as_of: Valuation date (defaults to today); only its year is used.

        Returns:
            Dict with ``estimate`` (None when no estimate is possible),
            ``inputs``, ``warnings`` and ``meta``.

        Raises:
            ModelNotFoundError: If no model is available.
            PredictionError: If scoring fails unexpectedly.
        """
        self._require_model()
        warnings: List[str] = []
        context = self._load_context()

        if context["postcodes"] is None:
            return {"estimate": None, "warnings": ["Postcode lookup not available."]}

        normalized = normalize_postcode(postcode)
        info = context["postcodes"].get(normalized)
        if info is None:
            return {"estimate": None, "warnings": ["Postcode is outside the trained model radius."]}

        hpi_slug = resolve_hpi_slug(district_for_outcode(parse_outcode(normalized)))
        hpi_latest = context["hpi_latest"] or {}
        hpi_record = hpi_latest.get(hpi_slug) or hpi_latest.get(DEFAULT_HPI_SLUG)
        if not hpi_record:
            warnings.append("Latest HPI index not available; using default index baseline.")

        as_of_date = parse_date(as_of) if as_of else None
        if as_of and as_of_date is None:
            warnings.append(f"Could not parse valuation date {as_of!r}; using today.")
        sale_year = (as_of_date or datetime.now()).year

        inputs = {
            "postcode": postcode.strip().upper(),
            "outcode": info.outcode,
            "distanceKm": info.distance_km,
            "hpiIndex": float(hpi_record["index"]) if hpi_record else DEFAULT_HPI_INDEX,
            "hpiDate": hpi_record.get("dateKey") if hpi_record else None,
            "planningCount12m": context["planning"].count_for(normalized, info.outcode),
            "propertyType": normalize_property_type(property_type),
            "tenure": normalize_tenure(tenure),
            "newBuild": bool(new_build),
            "saleYear": sale_year,
        }

        try:
            schema = self.fitted.feature_schema
            values = feature_values(
                schema,
                property_type=inputs["propertyType"],
                new_build=inputs["newBuild"],
                tenure=inputs["tenure"],
                outcode=inputs["outcode"],
                numerics=numeric_values(
                    inputs["distanceKm"],
                    inputs["hpiIndex"],
                    inputs["planningCount12m"],
                    sale_year,
                ),
            )
            vector = encode_values(schema, values)
            if vector.shape[0] != self._coefficients.shape[0]:
                warnings.append("Model feature mismatch; skipping estimate.")
                return {"estimate": None, "inputs": inputs, "warnings": warnings}

            log_price = float(self._coefficients @ vector)
            estimate = int(round(math.exp(log_price)))
        except (KeyError, ValueError, OverflowError) as e:
            logger.error("Prediction failed: %s", e, exc_info=True)
            raise PredictionError(f"Prediction failed: {e}", input_data=inputs) from e

        stats = (context["dataset_meta"] or {}).get("stats")
        coverage = None
        if stats:
            coverage = {
                "transactions": stats.get("includedRows", 0),
                "minDate": stats.get("minDate"),
                "maxDate": stats.get("maxDate"),
                "radiusKm": (context["dataset_meta"].get("region") or {}).get("radiusKm"),
            }

        return {
            "estimate": estimate,
            "inputs": inputs,
            "warnings": warnings,
            "meta": {
                "generatedAt": self.fitted.generated_at,
                "metrics": {k: v.to_dict() for k, v in self.fitted.metrics.items()},
                "coverage": coverage,
            },
        }
