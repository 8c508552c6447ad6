#!/usr/bin/env python
"""
CLI for deriving the model region from the postcode gazetteer.

Usage:
    python -m pricemodel.cli.derive_region
    python -m pricemodel.cli.derive_region --radius-km 3 --areas SE,BR
"""

import argparse
import sys

from pricemodel.config import get_config, resolve_path
from pricemodel.exceptions import PriceModelError
from pricemodel.logging_config import setup_logging, get_logger


def main():
    """Main entry point for region derivation CLI."""
    parser = argparse.ArgumentParser(
        description="List the postcode districts inside the model region",
    )
    parser.add_argument(
        "--onspd-path",
        type=str,
        default=None,
        help="Path to the postcode gazetteer CSV (default: from config)",
    )
    parser.add_argument("--radius-km", type=float, default=None, help="Override region radius")
    parser.add_argument(
        "--areas",
        type=str,
        default=None,
        help="Comma-separated postcode areas, e.g. SE,BR (default: from config)",
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
    if args.onspd_path:
        config.paths.onspd_path = resolve_path(args.onspd_path)
    if args.radius_km is not None:
        config.region.radius_km = args.radius_km
    if args.areas:
        config.region.allowed_areas = [a.strip().upper() for a in args.areas.split(",") if a.strip()]

    try:
        from pricemodel.dataset.pipeline import write_region_summary

        summary = write_region_summary(config)
        logger.info("Saved region to %s", config.paths.region_path)
        print(f"\nPostcode districts ({len(summary['postcodeDistricts'])}):")
        print("  " + ", ".join(summary["postcodeDistricts"]))
        print(f"Postcodes scanned: {summary['totalPostcodesScanned']:,}")
        print(f"Postcodes included: {summary['totalPostcodesIncluded']:,}")

    except PriceModelError as e:
        logger.error("Failed to derive model region: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
