"""
Data Models for the Price Paid Valuation Model

Dataclass definitions for source rows, derived lookups, training records and
the fitted model. JSON shapes use camelCase keys so that datasets and models
written by earlier runs stay readable.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class PostcodeRecord:
    """One gazetteer row."""

    postcode: str
    outcode_area: str
    latitude: float
    longitude: float
    is_terminated: bool = False


@dataclass(frozen=True)
class PostcodeInfo:
    """A postcode inside the target region."""

    latitude: float
    longitude: float
    outcode: str
    distance_km: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lat": self.latitude,
            "lon": self.longitude,
            "outcode": self.outcode,
            "distanceKm": self.distance_km,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PostcodeInfo":
        return cls(
            latitude=float(data["lat"]),
            longitude=float(data["lon"]),
            outcode=data["outcode"],
            distance_km=float(data["distanceKm"]),
        )


@dataclass
class GeocodeResult:
    """Output of the geocode resolver."""

    lookup: Dict[str, PostcodeInfo]
    total_scanned: int = 0
    total_included: int = 0


@dataclass(frozen=True)
class PlanningRecord:
    """A planning application, reduced to the fields the aggregator reads."""

    postcode: Optional[str] = None
    received_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlanningRecord":
        return cls(postcode=data.get("postcode"), received_date=data.get("receivedDate"))


@dataclass
class ActivityCounts:
    """Planning applications in the trailing window, by postcode and outcode."""

    by_postcode: Dict[str, int] = field(default_factory=dict)
    by_outcode: Dict[str, int] = field(default_factory=dict)

    def count_for(self, postcode: str, outcode: str) -> int:
        """Exact postcode count, else outcode count, else 0."""
        if postcode in self.by_postcode:
            return self.by_postcode[postcode]
        return self.by_outcode.get(outcode, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {"byPostcode": dict(self.by_postcode), "byOutcode": dict(self.by_outcode)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ActivityCounts":
        return cls(
            by_postcode=dict(data.get("byPostcode", {})),
            by_outcode=dict(data.get("byOutcode", {})),
        )


@dataclass(frozen=True)
class RawTransaction:
    """A Price Paid Data row, typed once at parse time."""

    id: str
    price: Optional[float]
    date: Optional[str]
    postcode: Optional[str]
    property_type: Optional[str] = None
    new_build: Optional[str] = None
    tenure: Optional[str] = None
    district: Optional[str] = None
    record_status: Optional[str] = None
    truncated: bool = False


@dataclass(frozen=True)
class TrainingRecord:
    """An enriched transaction ready for feature encoding."""

    id: str
    price: float
    log_price: float
    date: str
    year: int
    month: int
    postcode: str
    outcode: str
    property_type: str  # D, S, T, F or O
    new_build: bool
    tenure: str  # F or L
    district: str
    distance_km: float
    hpi_index: float
    planning_count_12m: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "price": self.price,
            "logPrice": self.log_price,
            "date": self.date,
            "year": self.year,
            "month": self.month,
            "postcode": self.postcode,
            "outcode": self.outcode,
            "propertyType": self.property_type,
            "newBuild": self.new_build,
            "tenure": self.tenure,
            "district": self.district,
            "distanceKm": self.distance_km,
            "hpiIndex": self.hpi_index,
            "planningCount12m": self.planning_count_12m,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrainingRecord":
        return cls(
            id=str(data.get("id", "")),
            price=float(data["price"]),
            log_price=float(data["logPrice"]),
            date=data.get("date", ""),
            year=int(data["year"]),
            month=int(data["month"]),
            postcode=data.get("postcode", ""),
            outcode=data.get("outcode", ""),
            property_type=data.get("propertyType", "O"),
            new_build=bool(data.get("newBuild", False)),
            tenure=data.get("tenure", "F"),
            district=data.get("district", ""),
            distance_km=float(data.get("distanceKm", 0.0)),
            hpi_index=float(data.get("hpiIndex", 100.0)),
            planning_count_12m=int(data.get("planningCount12m") or 0),
        )


@dataclass
class DatasetStats:
    """Counters accumulated while assembling the dataset."""

    total_rows: int = 0
    included_rows: int = 0
    skipped_inactive: int = 0
    skipped_missing: int = 0
    skipped_invalid_date: int = 0
    skipped_outside: int = 0
    missing_hpi: int = 0
    min_date: Optional[str] = None
    max_date: Optional[str] = None

    def observe_date(self, iso_date: str) -> None:
        if self.min_date is None or iso_date < self.min_date:
            self.min_date = iso_date
        if self.max_date is None or iso_date > self.max_date:
            self.max_date = iso_date

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRows": self.total_rows,
            "includedRows": self.included_rows,
            "skippedInactive": self.skipped_inactive,
            "skippedMissing": self.skipped_missing,
            "skippedInvalidDate": self.skipped_invalid_date,
            "skippedOutside": self.skipped_outside,
            "missingHpi": self.missing_hpi,
            "minDate": self.min_date,
            "maxDate": self.max_date,
        }


@dataclass(frozen=True)
class FeatureScaling:
    """Population mean and standard deviation of a numeric feature."""

    mean: float
    std: float


@dataclass
class FeatureSchema:
    """Ordered feature layout plus the scaling needed to reproduce it."""

    feature_names: List[str]
    numeric_feature_names: List[str]
    scaling: Dict[str, FeatureScaling]
    outcodes: List[str]
    base_outcode: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "order": list(self.feature_names),
            "numeric": list(self.numeric_feature_names),
            "scaling": {k: asdict(v) for k, v in self.scaling.items()},
            "baseOutcode": self.base_outcode,
            "outcodes": list(self.outcodes),
            "typeBaseline": "O",
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeatureSchema":
        return cls(
            feature_names=list(data["order"]),
            numeric_feature_names=list(data["numeric"]),
            scaling={
                k: FeatureScaling(mean=float(v["mean"]), std=float(v["std"]))
                for k, v in data["scaling"].items()
            },
            outcodes=list(data["outcodes"]),
            base_outcode=data.get("baseOutcode", ""),
        )


@dataclass(frozen=True)
class Metrics:
    """Error metrics in price space."""

    mae: float = 0.0
    rmse: float = 0.0
    mape: float = 0.0
    r2: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Metrics":
        return cls(**{k: float(data.get(k, 0.0)) for k in ("mae", "rmse", "mape", "r2")})


@dataclass
class FittedModel:
    """A trained ridge model and how it was evaluated."""

    feature_schema: FeatureSchema
    coefficients: List[float]
    ridge_lambda: float
    split_mode: str
    train_metrics: Metrics = field(default_factory=Metrics)
    test_metrics: Metrics = field(default_factory=Metrics)
    record_counts: Dict[str, int] = field(default_factory=dict)
    generated_at: Optional[str] = None

    @property
    def metrics(self) -> Dict[str, Metrics]:
        return {"train": self.train_metrics, "test": self.test_metrics}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generatedAt": self.generated_at,
            "records": dict(self.record_counts),
            "splitMode": self.split_mode,
            "lambda": self.ridge_lambda,
            "features": self.feature_schema.to_dict(),
            "coefficients": [float(c) for c in self.coefficients],
            "metrics": {k: v.to_dict() for k, v in self.metrics.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FittedModel":
        metrics = data.get("metrics", {})
        return cls(
            feature_schema=FeatureSchema.from_dict(data["features"]),
            coefficients=[float(c) for c in data["coefficients"]],
            ridge_lambda=float(data.get("lambda", 0.0)),
            split_mode=data.get("splitMode", "random"),
            train_metrics=Metrics.from_dict(metrics.get("train", {})),
            test_metrics=Metrics.from_dict(metrics.get("test", {})),
            record_counts=dict(data.get("records", {})),
            generated_at=data.get("generatedAt"),
        )
