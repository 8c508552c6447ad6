"""
Shared Constants for the Price Paid Valuation Model

Contains all constant values used across the pipeline stages.
"""

from typing import Dict, List, Tuple

# Geodesy
EARTH_RADIUS_KM: float = 6371.0

# UK inward codes ("7UA" in "SE20 7UA") are always three characters
INWARD_CODE_LENGTH: int = 3

# Gazetteer header aliases (matched case-insensitively)
ONSPD_POSTCODE_COLUMNS: Tuple[str, ...] = ("pcd", "pcd2", "pcds", "postcode")
ONSPD_LATITUDE_COLUMNS: Tuple[str, ...] = ("lat", "latitude")
ONSPD_LONGITUDE_COLUMNS: Tuple[str, ...] = ("long", "longitude", "lng")
ONSPD_TERMINATION_COLUMNS: Tuple[str, ...] = ("doterm", "termination")

# Price Paid Data files are headerless; this is the published column order
PPD_COLUMNS: List[str] = [
    "id",
    "price",
    "date",
    "postcode",
    "property_type",
    "new_build",
    "tenure",
    "paon",
    "saon",
    "street",
    "locality",
    "town",
    "district",
    "county",
    "category",
    "record_status",
]
PPD_ACTIVE_STATUS: str = "A"

# UKHPI downloads: ukhpi-<slug>-2000-01-01-to-2024-06-01.csv
UKHPI_FILENAME_PATTERN: str = r"^ukhpi-(.+?)-\d{4}-\d{2}-\d{2}-to-\d{4}-\d{2}-\d{2}\.csv$"

# Local authority district -> UKHPI region slug
DISTRICT_TO_HPI_SLUG: Dict[str, str] = {
    "BROMLEY": "bromley",
    "LEWISHAM": "lewisham",
    "CROYDON": "croydon",
    "SOUTHWARK": "southwark",
    "LAMBETH": "lambeth",
    "GREENWICH": "greenwich",
    "LONDON": "london",
}
DEFAULT_HPI_SLUG: str = "london"
DEFAULT_DISTRICT: str = "LONDON"

# Outcode -> district, used when scoring a bare postcode
OUTCODE_TO_DISTRICT: Dict[str, str] = {
    "SE20": "BROMLEY",
    "SE6": "LEWISHAM",
    "SE9": "GREENWICH",
    "SE12": "LEWISHAM",
    "SE26": "LEWISHAM",
    "BR1": "BROMLEY",
    "BR2": "BROMLEY",
    "BR3": "BROMLEY",
    "BR4": "BROMLEY",
    "BR5": "BROMLEY",
    "BR6": "BROMLEY",
    "BR7": "BROMLEY",
}

# Index alignment
HPI_FALLBACK_MONTHS: int = 24
DEFAULT_HPI_INDEX: float = 100.0

# Trailing window for planning activity
PLANNING_WINDOW_MONTHS: int = 12

# Train/test split
TEMPORAL_TEST_MONTHS: int = 12
MIN_SPLIT_PARTITION: int = 10
LCG_MULTIPLIER: int = 1664525
LCG_INCREMENT: int = 1013904223
LCG_MODULUS: int = 2 ** 32

# Numerical guards
VARIANCE_FLOOR: float = 1e-12
PIVOT_TOLERANCE: float = 1e-12

# Property categories
PROPERTY_TYPE_CODES: Tuple[str, ...] = ("D", "S", "T", "F")
PROPERTY_TYPE_BASELINE: str = "O"

# Artifact file names inside the training directory
DATASET_METADATA_FILE: str = "dataset-metadata.json"
POSTCODE_LOOKUP_FILE: str = "postcode-lookup.json"
HPI_LATEST_FILE: str = "hpi-latest.json"
PLANNING_COUNTS_FILE: str = "planning-counts.json"
TRAINING_METRICS_FILE: str = "training-metrics.json"
