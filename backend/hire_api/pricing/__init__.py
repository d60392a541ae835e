"""Hire page pricing: catalog, estimate range and itemised breakdown."""

from functools import lru_cache

from .catalog import (
    DEFAULT_CATALOG,
    AdditionalService,
    BasePackage,
    CatalogError,
    Feature,
    PriceCatalog,
    PriceKind,
    ServicePrice,
    catalog_as_dict,
    catalog_from_dict,
    load_catalog,
)
from .estimate import (
    EMPTY_ESTIMATE,
    BreakdownLine,
    EstimateRequest,
    EstimateResult,
    EstimateWithBreakdown,
    compute_breakdown,
    compute_estimate,
    estimate_with_breakdown,
)


@lru_cache(maxsize=1)
def get_catalog() -> PriceCatalog:
    """Return the process-wide catalog, loading ``PRICING_CATALOG_PATH`` once."""
    from ..core.config import settings

    path = settings.PRICING_CATALOG_PATH
    if not path:
        return DEFAULT_CATALOG
    return load_catalog(path)


__all__ = [
    "DEFAULT_CATALOG",
    "AdditionalService",
    "BasePackage",
    "CatalogError",
    "Feature",
    "PriceCatalog",
    "PriceKind",
    "ServicePrice",
    "catalog_as_dict",
    "catalog_from_dict",
    "load_catalog",
    "get_catalog",
    "EMPTY_ESTIMATE",
    "BreakdownLine",
    "EstimateRequest",
    "EstimateResult",
    "EstimateWithBreakdown",
    "compute_breakdown",
    "compute_estimate",
    "estimate_with_breakdown",
]
