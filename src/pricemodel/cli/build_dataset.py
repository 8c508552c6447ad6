#!/usr/bin/env python
"""
CLI for assembling the training dataset.

Usage:
    python -m pricemodel.cli.build_dataset
    python -m pricemodel.cli.build_dataset --data-dir data/property-model
"""

import argparse
import sys

from pricemodel.config import get_config, resolve_path
from pricemodel.exceptions import PriceModelError
from pricemodel.logging_config import setup_logging, get_logger
from pricemodel.utils.date_parser import parse_date


def main():
    """Main entry point for dataset build CLI."""
    parser = argparse.ArgumentParser(
        description="Assemble the Price Paid training dataset",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m pricemodel.cli.build_dataset
    python -m pricemodel.cli.build_dataset --as-of 2024-06-30
    python -m pricemodel.cli.build_dataset --onspd-path data/postcodes/ONSPD.csv
        """,
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Model data directory (default: from config)",
    )
    parser.add_argument(
        "--onspd-path",
        type=str,
        default=None,
        help="Path to the postcode gazetteer CSV (default: from config)",
    )
    parser.add_argument(
        "--as-of",
        type=str,
        default=None,
        help="End of the planning activity window (default: now)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set log level (default: INFO)",
    )

    args = parser.parse_args()

    setup_logging(level=args.log_level)
    logger = get_logger(__name__)

    config = get_config()
    if args.data_dir:
        config.paths.data_dir = resolve_path(args.data_dir)
    if args.onspd_path:
        config.paths.onspd_path = resolve_path(args.onspd_path)

    as_of = None
    if args.as_of:
        as_of = parse_date(args.as_of)
        if as_of is None:
            parser.error(f"Could not parse --as-of date: {args.as_of}")

    logger.info("Starting dataset build")
    logger.info("Data directory: %s", config.paths.data_dir)

    try:
        from pricemodel.dataset.pipeline import build_dataset

        result = build_dataset(config, as_of=as_of)
        stats = result.stats

        print("\nDataset:")
        print(f"  Rows scanned: {stats.total_rows:,}")
        print(f"  Included: {stats.included_rows:,}")
        print(f"  Outside region: {stats.skipped_outside:,}")
        print(f"  Missing fields: {stats.skipped_missing:,}")
        print(f"  Invalid date: {stats.skipped_invalid_date:,}")
        print(f"  Not active: {stats.skipped_inactive:,}")
        print(f"  Missing HPI: {stats.missing_hpi:,}")
        print(f"  Date range: {stats.min_date} to {stats.max_date}")

    except PriceModelError as e:
        logger.error("Dataset build failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
