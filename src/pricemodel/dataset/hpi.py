"""
Index Aligner

Turns regional UK House Price Index series into a per-region monthly lookup.
Lookups that miss a month walk backwards a bounded number of months, which
absorbs regions whose publication lags the transaction data.
"""

from typing import Dict, Iterable, Mapping, Optional, Tuple

from pricemodel.core.constants import (
    DEFAULT_HPI_SLUG,
    DISTRICT_TO_HPI_SLUG,
    HPI_FALLBACK_MONTHS,
)
from pricemodel.logging_config import get_logger
from pricemodel.utils.date_parser import month_key, parse_date, previous_month_key
from pricemodel.utils.price_parser import parse_float

logger = get_logger(__name__)

HpiSeries = Dict[str, float]
HpiSeriesMap = Dict[str, HpiSeries]


def build_series(raw_series: Mapping[str, Iterable[Tuple[str, object]]]) -> HpiSeriesMap:
    """Build month-keyed series from raw (date, value) rows per region.

    Rows with an unparsable date or a non-finite value are skipped. Several
    rows in one month collapse to the last one seen. Regions left with no
    rows are dropped.

    Args:
        raw_series: Region slug -> iterable of (date string, index value).

    Returns:
        Lowercase slug -> {"YYYY-MM": index}.
    """
    series_map: HpiSeriesMap = {}
    for slug, rows in raw_series.items():
        series: HpiSeries = {}
        for date_value, index_value in rows:
            value = parse_float(index_value)
            if not date_value or value is None:
                continue
            parsed = parse_date(date_value)
            if parsed is None:
                continue
            series[month_key(parsed)] = value

        if series:
            series_map[slug.lower()] = series
        else:
            logger.warning("HPI series for %s has no usable rows", slug)

    logger.info("Loaded %d HPI series: %s", len(series_map), ", ".join(sorted(series_map)))
    return series_map


def lookup_index(series_map: Mapping[str, HpiSeries], slug: str, date_key: str) -> Optional[float]:
    """Index value for a region and month, with bounded backward fallback.

    Unknown slugs use the London series. If the month itself is missing,
    up to 24 earlier months are tried, nearest first.

    Args:
        series_map: Output of build_series().
        slug: Region slug.
        date_key: "YYYY-MM".

    Returns:
        The index value, or None when nothing is found within 24 months.
    """
    series = series_map.get(slug)
    if series is None:
        series = series_map.get(DEFAULT_HPI_SLUG)
    if series is None:
        return None

    direct = series.get(date_key)
    if direct is not None:
        return direct

    key = date_key
    for _ in range(HPI_FALLBACK_MONTHS):
        key = previous_month_key(key)
        fallback = series.get(key)
        if fallback is not None:
            return fallback

    return None


def build_latest(series_map: Mapping[str, HpiSeries]) -> Dict[str, Dict[str, object]]:
    """Most recent reading per region.

    Keys are zero-padded "YYYY-MM" so the lexicographic maximum is the
    latest month.

    Returns:
        Slug -> {"index": value, "dateKey": "YYYY-MM"}.
    """
    latest: Dict[str, Dict[str, object]] = {}
    for slug, series in series_map.items():
        if not series:
            continue
        latest_key = max(series)
        latest[slug] = {"index": series[latest_key], "dateKey": latest_key}
    return latest


def resolve_hpi_slug(district: Optional[str]) -> str:
    """Region slug for a local authority district name (default: london)."""
    key = (district or "").strip().upper()
    return DISTRICT_TO_HPI_SLUG.get(key, DEFAULT_HPI_SLUG)


class IndexAligner:
    """Bound series map with district-aware lookups."""

    def __init__(self, series_map: Mapping[str, HpiSeries]):
        self.series_map = dict(series_map)

    def lookup(self, slug: str, date_key: str) -> Optional[float]:
        return lookup_index(self.series_map, slug, date_key)

    def index_for(self, district: Optional[str], date_key: str) -> Optional[float]:
        return self.lookup(resolve_hpi_slug(district), date_key)

    def latest(self) -> Dict[str, Dict[str, object]]:
        return build_latest(self.series_map)

    @property
    def slugs(self):
        return sorted(self.series_map)
