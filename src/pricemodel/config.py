"""
Centralized Configuration Module

Provides configuration classes and environment variable loading for all components.

Usage:
    from pricemodel.config import get_config

    config = get_config()
    radius = config.region.radius_km
    dataset_path = config.paths.dataset_path
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

VALID_SPLIT_MODES = ("temporal", "random")


def _get_project_root() -> Path:
    """Get the project root directory."""
    # Go up: config.py -> pricemodel -> src -> project_root
    current = Path(__file__).resolve()
    return current.parent.parent.parent


def resolve_path(path: str) -> str:
    """Resolve a relative path against the project root."""
    if not os.path.isabs(path):
        return str(_get_project_root() / path)
    return path


@dataclass
class RegionConfig:
    """Target region: a circle around a center point, restricted to postcode areas."""

    center_postcode: str = field(default_factory=lambda: os.getenv(
        "PRICEMODEL_CENTER_POSTCODE", "SE20 7UA"
    ))
    center_latitude: float = field(default_factory=lambda: float(os.getenv(
        "PRICEMODEL_CENTER_LAT", "51.405312"
    )))
    center_longitude: float = field(default_factory=lambda: float(os.getenv(
        "PRICEMODEL_CENTER_LON", "-0.062353"
    )))
    radius_km: float = field(default_factory=lambda: float(os.getenv(
        "PRICEMODEL_RADIUS_KM", "5"
    )))
    allowed_areas: List[str] = field(default_factory=lambda: os.getenv(
        "PRICEMODEL_ALLOWED_AREAS", "SE,BR"
    ).split(","))

    def __post_init__(self):
        # Normalize area prefixes
        self.allowed_areas = [a.strip().upper() for a in self.allowed_areas if a.strip()]

    @property
    def center(self) -> dict:
        return {
            "postcode": self.center_postcode,
            "latitude": self.center_latitude,
            "longitude": self.center_longitude,
        }

    def to_dict(self) -> dict:
        return {
            "center": self.center,
            "radiusKm": self.radius_km,
            "allowedPostcodeAreas": list(self.allowed_areas),
        }


@dataclass
class PathsConfig:
    """Locations of source files and generated artifacts."""

    data_dir: str = field(default_factory=lambda: os.getenv(
        "PRICEMODEL_DATA_DIR", "data/property-model"
    ))
    onspd_path: str = field(default_factory=lambda: os.getenv(
        "PRICEMODEL_ONSPD_PATH", "data/postcodes/ONSPD.csv"
    ))
    planning_file: str = field(default_factory=lambda: os.getenv(
        "PRICEMODEL_PLANNING_FILE", "bromley-latest.json"
    ))

    def __post_init__(self):
        # Resolve relative paths
        self.data_dir = resolve_path(self.data_dir)
        self.onspd_path = resolve_path(self.onspd_path)

    @property
    def ppd_dir(self) -> Path:
        return Path(self.data_dir) / "ppd"

    @property
    def ukhpi_dir(self) -> Path:
        return Path(self.data_dir) / "ukhpi"

    @property
    def planning_path(self) -> Path:
        return Path(self.data_dir) / "planning" / self.planning_file

    @property
    def training_dir(self) -> Path:
        return Path(self.data_dir) / "training"

    @property
    def dataset_path(self) -> Path:
        """Path to the JSONL training dataset."""
        return self.training_dir / "transactions.jsonl"

    @property
    def region_path(self) -> Path:
        return Path(self.data_dir) / "region.json"

    @property
    def model_path(self) -> Path:
        """Path to the fitted model document."""
        return Path(self.data_dir) / "model.json"


@dataclass
class TrainingConfig:
    """Ridge regression hyperparameters."""

    ridge_lambda: float = field(default_factory=lambda: float(os.getenv(
        "PRICEMODEL_LAMBDA", "1"
    )))
    split_mode: str = field(default_factory=lambda: os.getenv(
        "PRICEMODEL_SPLIT", "random"
    ).lower())
    test_ratio: float = field(default_factory=lambda: float(os.getenv(
        "PRICEMODEL_TEST_RATIO", "0.2"
    )))
    seed: int = field(default_factory=lambda: int(os.getenv(
        "PRICEMODEL_SEED", "42"
    )))

    def __post_init__(self):
        if self.split_mode not in VALID_SPLIT_MODES:
            self.split_mode = "random"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv(
        "PRICEMODEL_LOG_LEVEL", "INFO"
    ).upper())
    log_file: Optional[str] = field(default_factory=lambda: os.getenv(
        "PRICEMODEL_LOG_FILE"
    ))

    def __post_init__(self):
        # Validate log level
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level not in valid_levels:
            self.level = "INFO"


@dataclass
class Config:
    """Main configuration container."""

    region: RegionConfig = field(default_factory=RegionConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    training: TrainingConfig = field(default_factory=TrainingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Singleton instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config: The application configuration.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the configuration (useful for testing)."""
    global _config
    _config = None
