#!/usr/bin/env python
"""
CLI for price estimates.

Usage:
    python -m pricemodel.cli.predict --postcode "SE20 7UA"
    python -m pricemodel.cli.predict --postcode BR3 1AB --property-type S --tenure F --json
"""

import argparse
import json
import sys

from pricemodel.exceptions import PriceModelError
from pricemodel.logging_config import setup_logging, get_logger
from pricemodel.utils.price_parser import format_price
from pricemodel.utils.property_types import PROPERTY_TYPE_LABELS, property_type_label


def main():
    """Main entry point for the prediction CLI."""
    parser = argparse.ArgumentParser(
        description="Estimate a sale price using the trained model",
    )
    parser.add_argument("--postcode", type=str, required=True, help="Postcode inside the model region")
    parser.add_argument(
        "--property-type",
        type=str.upper,
        default="O",
        choices=sorted(PROPERTY_TYPE_LABELS),
        help="D, S, T, F or O (default: O)",
    )
    parser.add_argument(
        "--tenure",
        type=str.upper,
        default="F",
        choices=["F", "L"],
        help="F (freehold) or L (leasehold)",
    )
    parser.add_argument("--new-build", action="store_true", help="Property is a new build")
    parser.add_argument("--as-of", type=str, default=None, help="Valuation date (default: today)")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set log level (default: WARNING)",
    )

    args = parser.parse_args()

    setup_logging(level=args.log_level)
    logger = get_logger(__name__)

    try:
        from pricemodel.ml.valuation_predictor import PricingModel

        model = PricingModel()
        result = model.estimate(
            postcode=args.postcode,
            property_type=args.property_type,
            tenure=args.tenure,
            new_build=args.new_build,
            as_of=args.as_of,
        )

        if args.json:
            print(json.dumps(result, indent=2))
        else:
            print("\n" + "=" * 50)
            print("Price Estimate")
            print("=" * 50)
            print(f"\n  Postcode: {args.postcode.upper()}")
            print(f"  Property Type: {property_type_label(args.property_type)}")
            print(f"  Tenure: {'Leasehold' if args.tenure == 'L' else 'Freehold'}")
            print(f"  New Build: {'Yes' if args.new_build else 'No'}")
            print(f"\n  Estimated Value: {format_price(result.get('estimate'))}")
            for warning in result.get("warnings", []):
                print(f"  Note: {warning}")
            print()

        if result.get("estimate") is None:
            sys.exit(2)

    except PriceModelError as e:
        logger.error("Prediction failed: %s", e)
        if args.json:
            print(json.dumps({"error": str(e)}))
        else:
            print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
