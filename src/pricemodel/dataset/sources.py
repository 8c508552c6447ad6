"""
Source Readers and Artifact Writers

Reads the gazetteer, HPI downloads, planning listings and Price Paid files
into the typed records the pipeline consumes, and writes the JSON/JSONL
artifacts it produces. Large CSVs are read in chunks so memory stays
bounded by the chunk size, not the file size.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

import pandas as pd

from pricemodel.core.constants import PPD_COLUMNS, UKHPI_FILENAME_PATTERN
from pricemodel.core.models import (
    PlanningRecord,
    PostcodeRecord,
    RawTransaction,
    TrainingRecord,
)
from pricemodel.dataset.geocode import resolve_header
from pricemodel.dataset.hpi import HpiSeriesMap, build_series
from pricemodel.exceptions import ConfigurationError, ParsingError
from pricemodel.logging_config import get_logger
from pricemodel.utils.postcode import postcode_area
from pricemodel.utils.price_parser import parse_float, parse_price

logger = get_logger(__name__)

PathLike = Union[str, Path]

DEFAULT_CHUNKSIZE = 200_000


def _blank(value) -> bool:
    return value is None or (isinstance(value, float) and pd.isna(value)) or str(value).strip() == ""


def _missing_field(value) -> bool:
    # Short CSV rows come back as NaN; an empty field is ""
    return value is None or (isinstance(value, float) and pd.isna(value))


def _text(value) -> Optional[str]:
    if _blank(value):
        return None
    return str(value).strip()


# ---------------------------------------------------------------------------
# Postcode gazetteer
# ---------------------------------------------------------------------------

def read_postcode_gazetteer(
    path: PathLike,
    chunksize: int = DEFAULT_CHUNKSIZE,
) -> Iterator[PostcodeRecord]:
    """Stream gazetteer rows (ONSPD-style CSV with a header).

    Raises:
        ConfigurationError: If the file is missing or lacks required columns.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Postcode gazetteer not found: {path}", path=str(path))

    try:
        header = list(pd.read_csv(path, nrows=0).columns)
    except pd.errors.EmptyDataError as e:
        raise ParsingError(f"Postcode gazetteer is empty: {path}", source=str(path)) from e
    columns = resolve_header(header)
    usecols = [c for c in columns.values() if c is not None]

    logger.info("Reading postcode gazetteer %s", path)
    for chunk in pd.read_csv(
        path,
        usecols=usecols,
        dtype=str,
        keep_default_na=False,
        chunksize=chunksize,
    ):
        postcodes = chunk[columns["postcode"]].tolist()
        lats = chunk[columns["latitude"]].tolist()
        lons = chunk[columns["longitude"]].tolist()
        if columns["termination"] is not None:
            terms = chunk[columns["termination"]].tolist()
        else:
            terms = [""] * len(postcodes)

        for postcode, lat, lon, term in zip(postcodes, lats, lons, terms):
            postcode = _text(postcode) or ""
            latitude = parse_float(lat)
            longitude = parse_float(lon)
            yield PostcodeRecord(
                postcode=postcode,
                outcode_area=postcode_area(postcode),
                latitude=latitude if latitude is not None else float("nan"),
                longitude=longitude if longitude is not None else float("nan"),
                is_terminated=not _blank(term),
            )


# ---------------------------------------------------------------------------
# UK House Price Index
# ---------------------------------------------------------------------------

def hpi_slug_from_filename(filename: str) -> Optional[str]:
    """Region slug embedded in a UKHPI download name, or None."""
    match = re.match(UKHPI_FILENAME_PATTERN, filename, re.IGNORECASE)
    return match.group(1).lower() if match else None


def _hpi_columns(header: List[str], source: Path):
    date_col = next((c for c in header if "date" in str(c).lower()), None)
    index_col = next((c for c in header if "index" in str(c).lower()), None)
    if date_col is None or index_col is None:
        raise ConfigurationError(f"Missing Date or Index columns in UKHPI file: {source}", path=str(source))
    return date_col, index_col


def read_hpi_directory(directory: PathLike) -> HpiSeriesMap:
    """Load every UKHPI download in a directory into month-keyed series.

    A missing directory yields an empty map; every lookup then falls back
    to the neutral default index.
    """
    directory = Path(directory)
    if not directory.exists():
        logger.warning("UKHPI directory not found: %s", directory)
        return {}

    raw: Dict[str, list] = {}
    for path in sorted(directory.glob("*.csv")):
        slug = hpi_slug_from_filename(path.name)
        if not slug:
            logger.debug("Ignoring non-UKHPI file %s", path.name)
            continue

        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError as e:
            raise ParsingError(f"UKHPI file is empty: {path}", source=str(path)) from e

        date_col, index_col = _hpi_columns(list(df.columns), path)
        raw.setdefault(slug, []).extend(zip(df[date_col].tolist(), df[index_col].tolist()))

    return build_series(raw)


# ---------------------------------------------------------------------------
# Planning applications
# ---------------------------------------------------------------------------

def read_planning_records(path: PathLike) -> List[PlanningRecord]:
    """Load planning records from a JSON array; missing or unreadable files yield []."""
    payload = read_json(path, default=[])
    if not isinstance(payload, list):
        logger.warning("Planning file %s is not a JSON array; ignoring", path)
        return []
    records = [PlanningRecord.from_dict(item) for item in payload if isinstance(item, dict)]
    logger.info("Loaded %d planning records from %s", len(records), path)
    return records


# ---------------------------------------------------------------------------
# Price Paid Data
# ---------------------------------------------------------------------------

def list_ppd_files(directory: PathLike) -> List[Path]:
    """CSV files in the Price Paid directory.

    Raises:
        ConfigurationError: If the directory is missing or holds no CSV files.
    """
    directory = Path(directory)
    if not directory.exists():
        raise ConfigurationError(f"PPD directory not found: {directory}", path=str(directory))
    files = sorted(directory.glob("*.csv"))
    if not files:
        raise ConfigurationError(f"No PPD CSV files found in {directory}", path=str(directory))
    return files


def transaction_from_row(row: Dict[str, Any]) -> RawTransaction:
    """Type a Price Paid row once, at parse time."""
    return RawTransaction(
        id=_text(row.get("id")) or "",
        price=parse_price(row.get("price")),
        date=_text(row.get("date")),
        postcode=_text(row.get("postcode")),
        property_type=_text(row.get("property_type")),
        new_build=_text(row.get("new_build")),
        tenure=_text(row.get("tenure")),
        district=_text(row.get("district")),
        record_status=_text(row.get("record_status")),
        truncated=_missing_field(row.get("record_status")),
    )


def _trim_extra_fields(fields: List[str]) -> List[str]:
    # Called by pandas for rows with more fields than PPD_COLUMNS
    logger.debug("Dropping %d trailing Price Paid fields", len(fields) - len(PPD_COLUMNS))
    return fields[:len(PPD_COLUMNS)]


def read_price_paid(
    files: Iterable[PathLike],
    chunksize: int = DEFAULT_CHUNKSIZE,
) -> Iterator[RawTransaction]:
    """Stream Price Paid rows from headerless CSV files.

    Short rows are kept and flagged as truncated; fields past the sixteenth
    are ignored.
    """
    for path in files:
        logger.info("Reading Price Paid file %s", path)
        for chunk in pd.read_csv(
            path,
            header=None,
            names=PPD_COLUMNS,
            index_col=False,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=_trim_extra_fields,
            chunksize=chunksize,
        ):
            for row in chunk.to_dict(orient="records"):
                yield transaction_from_row(row)


# ---------------------------------------------------------------------------
# JSON / JSONL artifacts
# ---------------------------------------------------------------------------

def write_training_records(records: Iterable[TrainingRecord], path: PathLike) -> int:
    """Stream records to a JSONL file, one object per line.

    Returns:
        Number of records written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with open(path, "w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record.to_dict()))
            f.write("\n")
            count += 1
    logger.info("Wrote %d training records to %s", count, path)
    return count


def read_training_records(path: PathLike) -> List[TrainingRecord]:
    """Load a JSONL dataset fully into memory.

    Raises:
        ConfigurationError: If the dataset file does not exist.
        ParsingError: If a line is not valid JSON.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Dataset not found at {path}", path=str(path))

    records = []
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                records.append(TrainingRecord.from_dict(json.loads(line)))
            except (ValueError, KeyError) as e:
                raise ParsingError(f"Bad record on line {line_no} of {path}: {e}", source=str(path)) from e
    return records


def write_json(path: PathLike, payload: Any) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, default=str)


def read_json(path: PathLike, default: Any = None) -> Any:
    """Read a JSON file, returning ``default`` if it is missing or invalid."""
    path = Path(path)
    if not path.exists():
        return default
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except ValueError as e:
        logger.warning("Failed to read JSON %s: %s", path, e)
        return default
