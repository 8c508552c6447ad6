"""
Dataset Build Pipeline

Wires the source readers, the three lookups and the assembler together and
writes the dataset plus the artifacts needed to score new postcodes later.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from pricemodel.config import Config, get_config
from pricemodel.core.constants import (
    DATASET_METADATA_FILE,
    HPI_LATEST_FILE,
    PLANNING_COUNTS_FILE,
    POSTCODE_LOOKUP_FILE,
)
from pricemodel.core.models import ActivityCounts, DatasetStats, GeocodeResult
from pricemodel.dataset import sources
from pricemodel.dataset.assembler import DatasetAssembler
from pricemodel.dataset.geocode import derive_region, resolve_region
from pricemodel.dataset.hpi import IndexAligner
from pricemodel.dataset.planning import aggregate_planning
from pricemodel.logging_config import get_logger, log_counts

logger = get_logger(__name__)


@dataclass
class DatasetBuildResult:
    """What a dataset build produced."""

    dataset_path: Path
    stats: DatasetStats
    geocode: GeocodeResult
    activity: ActivityCounts
    hpi_slugs: list


def build_postcode_lookup(config: Optional[Config] = None) -> GeocodeResult:
    """Resolve the configured region against the postcode gazetteer."""
    config = config or get_config()
    records = sources.read_postcode_gazetteer(config.paths.onspd_path)
    return resolve_region(records, config.region)


def write_region_summary(config: Optional[Config] = None) -> dict:
    """Resolve the region and write its district summary."""
    config = config or get_config()
    result = build_postcode_lookup(config)
    summary = derive_region(result, config.region)
    summary["generatedAt"] = datetime.now().isoformat()
    sources.write_json(config.paths.region_path, summary)
    logger.info(
        "Region covers %d postcode districts: %s",
        len(summary["postcodeDistricts"]),
        ", ".join(summary["postcodeDistricts"]),
    )
    return summary


def build_dataset(
    config: Optional[Config] = None,
    as_of: Optional[datetime] = None,
) -> DatasetBuildResult:
    """Build the training dataset and its side artifacts.

    Args:
        config: Configuration (defaults to the global config).
        as_of: Reference time for the planning window (defaults to now).

    Returns:
        DatasetBuildResult with the final statistics.

    Raises:
        ConfigurationError: If a required source is missing or malformed.
    """
    config = config or get_config()
    paths = config.paths

    # Fail on a missing PPD directory before the slow gazetteer scan
    ppd_files = sources.list_ppd_files(paths.ppd_dir)

    geocode = build_postcode_lookup(config)
    aligner = IndexAligner(sources.read_hpi_directory(paths.ukhpi_dir))
    activity = aggregate_planning(sources.read_planning_records(paths.planning_path), as_of=as_of)

    assembler = DatasetAssembler(geocode.lookup, aligner, activity)
    transactions = sources.read_price_paid(ppd_files)
    sources.write_training_records(assembler.assemble(transactions), paths.dataset_path)
    stats = assembler.stats

    generated_at = datetime.now().isoformat()
    training_dir = paths.training_dir
    sources.write_json(training_dir / DATASET_METADATA_FILE, {
        "generatedAt": generated_at,
        "region": config.region.to_dict(),
        "onspd": {
            "totalPostcodesScanned": geocode.total_scanned,
            "totalPostcodesIncluded": geocode.total_included,
        },
        "sources": {
            "ppdFiles": [p.name for p in ppd_files],
            "ukHpiFiles": aligner.slugs,
            "planningRecords": len(activity.by_postcode),
        },
        "stats": stats.to_dict(),
    })
    sources.write_json(
        training_dir / POSTCODE_LOOKUP_FILE,
        {pc: info.to_dict() for pc, info in geocode.lookup.items()},
    )
    sources.write_json(training_dir / HPI_LATEST_FILE, aligner.latest())
    sources.write_json(training_dir / PLANNING_COUNTS_FILE, {
        "generatedAt": generated_at,
        **activity.to_dict(),
    })

    log_counts(logger, "Dataset statistics", stats.to_dict())
    logger.info("Saved training dataset to %s", paths.dataset_path)

    return DatasetBuildResult(
        dataset_path=paths.dataset_path,
        stats=stats,
        geocode=geocode,
        activity=activity,
        hpi_slugs=aligner.slugs,
    )
