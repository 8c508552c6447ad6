"""
Dataset assembly: postcode geocoding, house price index alignment, planning
activity and transaction enrichment.
"""

from pricemodel.dataset.assembler import DatasetAssembler, assemble
from pricemodel.dataset.geocode import derive_region, haversine_km, resolve_postcodes
from pricemodel.dataset.hpi import (
    IndexAligner,
    build_latest,
    build_series,
    lookup_index,
    resolve_hpi_slug,
)
from pricemodel.dataset.planning import aggregate_planning

__all__ = [
    "DatasetAssembler",
    "assemble",
    "derive_region",
    "haversine_km",
    "resolve_postcodes",
    "IndexAligner",
    "build_latest",
    "build_series",
    "lookup_index",
    "resolve_hpi_slug",
    "aggregate_planning",
]
