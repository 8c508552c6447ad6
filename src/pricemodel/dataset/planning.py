"""
Activity Aggregator

Counts planning applications received in the trailing twelve months, keyed
by postcode and by outcode.
"""

from collections import Counter
from datetime import datetime
from typing import Iterable, Optional

from pricemodel.core.constants import PLANNING_WINDOW_MONTHS
from pricemodel.core.models import ActivityCounts, PlanningRecord
from pricemodel.logging_config import get_logger
from pricemodel.utils.date_parser import parse_date, subtract_months
from pricemodel.utils.postcode import normalize_postcode, parse_outcode

logger = get_logger(__name__)


def aggregate_planning(
    records: Iterable[PlanningRecord],
    as_of: Optional[datetime] = None,
) -> ActivityCounts:
    """Count recent planning applications.

    Args:
        records: Planning records; those without a parsable received date
            or a postcode are ignored.
        as_of: End of the window (defaults to now).

    Returns:
        ActivityCounts, empty when there are no qualifying records.
    """
    if as_of is None:
        as_of = datetime.now()
    cutoff = subtract_months(as_of, PLANNING_WINDOW_MONTHS)

    by_postcode: Counter = Counter()
    by_outcode: Counter = Counter()
    seen = 0

    for record in records:
        seen += 1
        received = parse_date(record.received_date) if record.received_date else None
        if received is None or received < cutoff:
            continue

        normalized = normalize_postcode(record.postcode)
        if not normalized:
            continue

        by_postcode[normalized] += 1
        by_outcode[parse_outcode(normalized)] += 1

    logger.info(
        "Planning: %d of %d records received since %s",
        sum(by_postcode.values()),
        seen,
        cutoff.strftime("%Y-%m-%d"),
    )
    return ActivityCounts(by_postcode=dict(by_postcode), by_outcode=dict(by_outcode))
