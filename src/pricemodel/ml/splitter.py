"""
Train/Test Splitting

Temporal splits hold out the final twelve months of sales. When that would
leave either side with fewer than ten records the split falls back to a
seeded random split, which is reproducible for a given seed and input order.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Sequence

from pricemodel.core.constants import (
    LCG_INCREMENT,
    LCG_MODULUS,
    LCG_MULTIPLIER,
    MIN_SPLIT_PARTITION,
    TEMPORAL_TEST_MONTHS,
)
from pricemodel.core.models import TrainingRecord
from pricemodel.exceptions import ValidationError
from pricemodel.logging_config import get_logger
from pricemodel.utils.date_parser import subtract_months

logger = get_logger(__name__)


class LinearCongruentialGenerator:
    """Deterministic uniform generator on [0, 1).

    state' = (state * 1664525 + 1013904223) mod 2**32
    """

    def __init__(self, seed: int):
        self.state = int(seed) % LCG_MODULUS

    def random(self) -> float:
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.state / LCG_MODULUS


@dataclass
class SplitResult:
    train: List[TrainingRecord] = field(default_factory=list)
    test: List[TrainingRecord] = field(default_factory=list)
    split_mode: str = "random"


def _month_start(record: TrainingRecord) -> datetime:
    return datetime(record.year, record.month, 1)


def temporal_split(records: Sequence[TrainingRecord]) -> SplitResult:
    """Records after (latest month - 12 months) go to test; order is by (year, month)."""
    ordered = sorted(records, key=lambda r: (r.year, r.month))
    result = SplitResult(split_mode="temporal")
    if not ordered:
        return result

    cutoff = subtract_months(_month_start(ordered[-1]), TEMPORAL_TEST_MONTHS)
    for record in ordered:
        if _month_start(record) > cutoff:
            result.test.append(record)
        else:
            result.train.append(record)
    return result


def random_split(records: Sequence[TrainingRecord], test_ratio: float, seed: int) -> SplitResult:
    """Assign each record to test with probability ``test_ratio``, in input order."""
    rng = LinearCongruentialGenerator(seed)
    result = SplitResult(split_mode="random")
    for record in records:
        if rng.random() < test_ratio:
            result.test.append(record)
        else:
            result.train.append(record)
    return result


def split_records(
    records: Sequence[TrainingRecord],
    mode: str = "random",
    test_ratio: float = 0.2,
    seed: int = 42,
) -> SplitResult:
    """Partition records into train and test sets.

    Args:
        records: All training records.
        mode: "temporal" or "random".
        test_ratio: Test probability for random mode.
        seed: Generator seed for random mode.

    Returns:
        SplitResult whose split_mode says which mode was actually used.

    Raises:
        ValidationError: For an unknown mode or a ratio outside [0, 1].
    """
    if mode not in ("temporal", "random"):
        raise ValidationError(f"Unknown split mode: {mode}", field="split_mode", value=mode)
    if not 0.0 <= test_ratio <= 1.0:
        raise ValidationError(
            f"Test ratio must be within [0, 1], got {test_ratio}", field="test_ratio", value=test_ratio
        )

    if mode == "temporal":
        result = temporal_split(records)
        if len(result.train) >= MIN_SPLIT_PARTITION and len(result.test) >= MIN_SPLIT_PARTITION:
            logger.info("Temporal split: %d train, %d test", len(result.train), len(result.test))
            return result
        logger.warning(
            "Temporal split too small (%d train, %d test); falling back to random",
            len(result.train),
            len(result.test),
        )

    result = random_split(records, test_ratio, seed)
    logger.info("Random split (seed=%d): %d train, %d test", seed, len(result.train), len(result.test))
    return result
