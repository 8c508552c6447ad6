#!/usr/bin/env python
"""
CLI for training the pricing model.

Usage:
    python -m pricemodel.cli.train_model
    python -m pricemodel.cli.train_model --split temporal --lambda 0.5
"""

import argparse
import sys

from pricemodel.config import VALID_SPLIT_MODES, get_config
from pricemodel.exceptions import PriceModelError
from pricemodel.logging_config import setup_logging, get_logger
from pricemodel.utils.price_parser import format_price


def main():
    """Main entry point for model training CLI."""
    parser = argparse.ArgumentParser(
        description="Train the ridge regression pricing model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m pricemodel.cli.train_model
    python -m pricemodel.cli.train_model --split temporal
    python -m pricemodel.cli.train_model --lambda 2 --test-ratio 0.25 --seed 7
        """,
    )
    parser.add_argument(
        "--dataset",
        type=str,
        default=None,
        help="Path to the JSONL dataset (default: from config)",
    )
    parser.add_argument(
        "--lambda",
        dest="ridge_lambda",
        type=float,
        default=None,
        help="Ridge penalty strength (default: from config)",
    )
    parser.add_argument(
        "--split",
        choices=VALID_SPLIT_MODES,
        default=None,
        help="Train/test split mode (default: from config)",
    )
    parser.add_argument("--test-ratio", type=float, default=None, help="Random split test ratio")
    parser.add_argument("--seed", type=int, default=None, help="Random split seed")
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
    training = config.training
    if args.ridge_lambda is not None:
        training.ridge_lambda = args.ridge_lambda
    if args.split:
        training.split_mode = args.split
    if args.test_ratio is not None:
        training.test_ratio = args.test_ratio
    if args.seed is not None:
        training.seed = args.seed

    dataset_path = args.dataset or config.paths.dataset_path

    logger.info("Starting model training")
    logger.info("Dataset: %s", dataset_path)

    try:
        from pricemodel.ml.valuation_predictor import PricingModel

        model = PricingModel()
        records = model.load_training_data(dataset_path)
        fitted = model.train(records, training)
        model.save()

        counts = fitted.record_counts
        print("\nModel Performance:")
        for name, metrics in fitted.metrics.items():
            print(f"  [{name}] R² {metrics.r2:.4f} | MAE {format_price(metrics.mae)} | "
                  f"RMSE {format_price(metrics.rmse)} | MAPE {metrics.mape:.2%}")
        print(f"  Split mode: {fitted.split_mode}")
        print(f"  Training samples: {counts.get('train', 0)}")
        print(f"  Test samples: {counts.get('test', 0)}")

    except PriceModelError as e:
        logger.error("Model training failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
