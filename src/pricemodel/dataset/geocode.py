"""
Geocode Resolver

Filters the national postcode gazetteer down to postcodes within a radius of
the region center and inside the allowed postcode areas.
"""

import math
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from pricemodel.config import RegionConfig
from pricemodel.core.constants import (
    EARTH_RADIUS_KM,
    ONSPD_LATITUDE_COLUMNS,
    ONSPD_LONGITUDE_COLUMNS,
    ONSPD_POSTCODE_COLUMNS,
    ONSPD_TERMINATION_COLUMNS,
)
from pricemodel.core.models import GeocodeResult, PostcodeInfo, PostcodeRecord
from pricemodel.exceptions import ConfigurationError
from pricemodel.logging_config import get_logger
from pricemodel.utils.postcode import is_allowed_area, normalize_postcode, parse_outcode

logger = get_logger(__name__)


def haversine_km(lat1, lon1, lat2, lon2, radius: float = EARTH_RADIUS_KM):
    """Great-circle distance in kilometres.

    Works on scalars and numpy arrays alike.

    Args:
        lat1, lon1: First point in degrees.
        lat2, lon2: Second point in degrees.
        radius: Sphere radius in km.

    Returns:
        Distance in km.
    """
    lat1, lon1, lat2, lon2 = map(np.radians, (lat1, lon1, lat2, lon2))
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return radius * c


def _find_column(header: Sequence[str], options: Sequence[str]) -> Optional[str]:
    for name in header:
        if str(name).strip().lower() in options:
            return name
    return None


def resolve_header(header: Sequence[str]) -> Dict[str, Optional[str]]:
    """Map gazetteer header names to the columns the resolver needs.

    Args:
        header: Column names from the gazetteer file.

    Returns:
        Dict with keys postcode, latitude, longitude and termination
        (termination is None when the file has no such column).

    Raises:
        ConfigurationError: If postcode, latitude or longitude is missing.
    """
    columns = {
        "postcode": _find_column(header, ONSPD_POSTCODE_COLUMNS),
        "latitude": _find_column(header, ONSPD_LATITUDE_COLUMNS),
        "longitude": _find_column(header, ONSPD_LONGITUDE_COLUMNS),
        "termination": _find_column(header, ONSPD_TERMINATION_COLUMNS),
    }
    missing = [k for k in ("postcode", "latitude", "longitude") if columns[k] is None]
    if missing:
        raise ConfigurationError(
            f"Missing required columns in postcode gazetteer: {', '.join(missing)}"
        )
    return columns


def resolve_postcodes(
    records: Iterable[PostcodeRecord],
    center_lat: float,
    center_lon: float,
    radius_km: float,
    allowed_areas: Sequence[str],
) -> GeocodeResult:
    """Build the postcode lookup for the target region.

    Terminated postcodes and rows without finite coordinates are dropped
    before counting; the remainder are counted as scanned and kept when
    their outcode is in an allowed area and lies within ``radius_km``.

    Args:
        records: Gazetteer rows.
        center_lat: Region center latitude.
        center_lon: Region center longitude.
        radius_km: Inclusion radius.
        allowed_areas: Postcode area prefixes, e.g. ["SE", "BR"].

    Returns:
        GeocodeResult with the lookup keyed by normalized postcode.
    """
    lookup: Dict[str, PostcodeInfo] = {}
    scanned = 0
    included = 0

    for record in records:
        if record.is_terminated:
            continue
        if not (_is_finite(record.latitude) and _is_finite(record.longitude)):
            continue

        normalized = normalize_postcode(record.postcode)
        if not normalized:
            continue

        scanned += 1
        outcode = parse_outcode(normalized)
        if not is_allowed_area(outcode, allowed_areas):
            continue

        distance = float(haversine_km(center_lat, center_lon, record.latitude, record.longitude))
        if distance <= radius_km:
            lookup[normalized] = PostcodeInfo(
                latitude=record.latitude,
                longitude=record.longitude,
                outcode=outcode,
                distance_km=distance,
            )
            included += 1

    logger.info("Scanned %d postcodes, %d within %.1f km", scanned, included, radius_km)
    return GeocodeResult(lookup=lookup, total_scanned=scanned, total_included=included)


def resolve_region(records: Iterable[PostcodeRecord], region: RegionConfig) -> GeocodeResult:
    """resolve_postcodes() with the parameters of a RegionConfig."""
    return resolve_postcodes(
        records,
        center_lat=region.center_latitude,
        center_lon=region.center_longitude,
        radius_km=region.radius_km,
        allowed_areas=region.allowed_areas,
    )


def derive_region(result: GeocodeResult, region: RegionConfig) -> dict:
    """Summarise a resolved region as the postcode districts it covers."""
    districts: List[str] = sorted({info.outcode for info in result.lookup.values()})
    summary = region.to_dict()
    summary.update({
        "postcodeDistricts": districts,
        "totalPostcodesScanned": result.total_scanned,
        "totalPostcodesIncluded": result.total_included,
    })
    return summary


def _is_finite(value) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False
