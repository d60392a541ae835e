from fastapi import APIRouter, Depends

from ..core.config import settings
from ..pricing import PriceCatalog, EstimateRequest, catalog_as_dict, estimate_with_breakdown
from ..schemas.pricing import EstimateIn, EstimateOut
from .dependencies import get_price_catalog

router = APIRouter()


@router.get("/pricing/catalog")
def read_catalog(catalog: PriceCatalog = Depends(get_price_catalog)) -> dict:
    return catalog_as_dict(catalog)


@router.post("/pricing/estimate", response_model=EstimateOut)
def estimate(body: EstimateIn, catalog: PriceCatalog = Depends(get_price_catalog)):
    """Price a hire page selection; unknown keys are ignored, not rejected."""
    request = EstimateRequest(
        project_type=body.project_type,
        selected_features=tuple(body.selected_features),
        selected_additional_services=tuple(body.selected_additional_services),
        timeline=body.timeline,
        needs_maintenance=body.needs_maintenance,
        maintenance_level=body.maintenance_level,
    )
    priced = estimate_with_breakdown(catalog, request)
    return EstimateOut(
        min=priced.estimate.min,
        max=priced.estimate.max,
        currency=settings.DEFAULT_CURRENCY,
        breakdown=[line.as_dict() for line in priced.breakdown],
    )
