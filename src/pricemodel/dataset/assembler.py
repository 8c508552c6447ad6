"""
Dataset Assembler

Joins Price Paid transactions with the postcode lookup, the regional house
price index and planning activity. Each transaction either becomes one
TrainingRecord or increments exactly one rejection counter; dirty rows never
stop the run.
"""

import math
from typing import Iterable, Iterator, Mapping, Optional, Tuple

from pricemodel.core.constants import DEFAULT_HPI_INDEX, PPD_ACTIVE_STATUS
from pricemodel.core.models import (
    ActivityCounts,
    DatasetStats,
    PostcodeInfo,
    RawTransaction,
    TrainingRecord,
)
from pricemodel.dataset.hpi import IndexAligner
from pricemodel.logging_config import get_logger
from pricemodel.utils.date_parser import month_key, parse_date
from pricemodel.utils.postcode import format_postcode, normalize_postcode
from pricemodel.utils.property_types import (
    normalize_new_build,
    normalize_property_type,
    normalize_tenure,
)

logger = get_logger(__name__)


class DatasetAssembler:
    """Turns raw transactions into training records, counting every rejection."""

    def __init__(
        self,
        postcode_lookup: Mapping[str, PostcodeInfo],
        index_aligner: IndexAligner,
        activity: Optional[ActivityCounts] = None,
    ):
        self.postcode_lookup = postcode_lookup
        self.index_aligner = index_aligner
        self.activity = activity or ActivityCounts()
        self.stats = DatasetStats()

    def enrich(self, txn: RawTransaction) -> Optional[TrainingRecord]:
        """Validate and enrich one transaction.

        Returns:
            The TrainingRecord, or None if the row was rejected (the reason
            is recorded in ``self.stats``).
        """
        stats = self.stats
        stats.total_rows += 1

        if txn.truncated:
            stats.skipped_missing += 1
            return None

        if txn.record_status and txn.record_status != PPD_ACTIVE_STATUS:
            stats.skipped_inactive += 1
            return None

        price = txn.price
        if not txn.postcode or price is None or not math.isfinite(price) or price <= 0:
            stats.skipped_missing += 1
            return None

        sold = parse_date(txn.date)
        if sold is None:
            stats.skipped_invalid_date += 1
            return None

        normalized = normalize_postcode(txn.postcode)
        info = self.postcode_lookup.get(normalized)
        if info is None:
            stats.skipped_outside += 1
            return None

        district = txn.district or ""
        hpi_index = self.index_aligner.index_for(district, month_key(sold))
        if hpi_index is None:
            stats.missing_hpi += 1
            hpi_index = DEFAULT_HPI_INDEX

        record = TrainingRecord(
            id=txn.id,
            price=price,
            log_price=math.log(price),
            date=sold.strftime("%Y-%m-%d"),
            year=sold.year,
            month=sold.month,
            postcode=format_postcode(normalized),
            outcode=info.outcode,
            property_type=normalize_property_type(txn.property_type),
            new_build=normalize_new_build(txn.new_build),
            tenure=normalize_tenure(txn.tenure),
            district=district,
            distance_km=info.distance_km,
            hpi_index=hpi_index,
            planning_count_12m=self.activity.count_for(normalized, info.outcode),
        )

        stats.included_rows += 1
        stats.observe_date(record.date)
        return record

    def assemble(self, transactions: Iterable[RawTransaction]) -> Iterator[TrainingRecord]:
        """Lazily enrich a stream of transactions.

        Stats are complete once the iterator is exhausted.
        """
        for txn in transactions:
            record = self.enrich(txn)
            if record is not None:
                yield record

        logger.info(
            "Assembled %d of %d transactions (outside=%d, missing=%d, bad date=%d, "
            "inactive=%d, missing HPI=%d)",
            self.stats.included_rows,
            self.stats.total_rows,
            self.stats.skipped_outside,
            self.stats.skipped_missing,
            self.stats.skipped_invalid_date,
            self.stats.skipped_inactive,
            self.stats.missing_hpi,
        )


def assemble(
    transactions: Iterable[RawTransaction],
    postcode_lookup: Mapping[str, PostcodeInfo],
    index_aligner: IndexAligner,
    activity: Optional[ActivityCounts] = None,
) -> Tuple[Iterator[TrainingRecord], DatasetStats]:
    """Functional form of DatasetAssembler.assemble().

    The returned stats object fills in as the iterator is consumed.
    """
    assembler = DatasetAssembler(postcode_lookup, index_aligner, activity)
    return assembler.assemble(transactions), assembler.stats
