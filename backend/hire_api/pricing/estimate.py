from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, List, Optional, Tuple

from .catalog import PriceCatalog, format_amount, format_range

NORMAL_TIMELINE = "normal"

_TIMELINE_LABELS = {
    "rush": "Rush delivery",
    "flexible": "Flexible timeline discount",
}


def _ordered_keys(keys: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """De-duplicate selection keys keeping first-selection order."""
    if not keys:
        return ()
    if isinstance(keys, str):
        keys = (keys,)
    return tuple(dict.fromkeys(str(k) for k in keys if k))


@dataclass(frozen=True)
class EstimateRequest:
    project_type: str = ""
    selected_features: Tuple[str, ...] = ()
    selected_additional_services: Tuple[str, ...] = ()
    timeline: str = NORMAL_TIMELINE
    needs_maintenance: bool = False
    maintenance_level: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "project_type", (self.project_type or "").strip())
        object.__setattr__(self, "selected_features", _ordered_keys(self.selected_features))
        object.__setattr__(
            self, "selected_additional_services", _ordered_keys(self.selected_additional_services)
        )
        object.__setattr__(self, "timeline", (self.timeline or NORMAL_TIMELINE).strip())

    @classmethod
    def from_payload(cls, data: Any) -> "EstimateRequest":
        """Build a request from a camelCase/snake_case dict or attribute object."""

        def read(*keys: str) -> Any:
            for key in keys:
                if isinstance(data, dict):
                    if key in data:
                        return data[key]
                elif hasattr(data, key):
                    return getattr(data, key)
            return None

        def read_keys(*keys: str) -> Tuple[str, ...]:
            value = read(*keys) or ()
            # A lone key arrives as a string, not a list of characters
            if isinstance(value, str):
                return (value,)
            return tuple(value)

        return cls(
            project_type=read("project_type", "projectType") or "",
            selected_features=read_keys("selected_features", "selectedFeatures"),
            selected_additional_services=read_keys(
                "selected_additional_services", "selectedAdditionalServices"
            ),
            timeline=read("timeline") or NORMAL_TIMELINE,
            needs_maintenance=bool(read("needs_maintenance", "needsMaintenance")),
            maintenance_level=read("maintenance_level", "maintenanceLevel") or "",
        )


@dataclass(frozen=True)
class EstimateResult:
    min: int
    max: int

    @property
    def is_empty(self) -> bool:
        return self.min == 0 and self.max == 0

    def as_dict(self) -> dict[str, int]:
        return {"min": self.min, "max": self.max}


EMPTY_ESTIMATE = EstimateResult(0, 0)


@dataclass(frozen=True)
class BreakdownLine:
    item: str
    price: str
    included_in_total: bool = True

    def as_dict(self) -> dict[str, Any]:
        return {"item": self.item, "price": self.price, "included_in_total": self.included_in_total}


def _round_pounds(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _extras_total(catalog: PriceCatalog, request: EstimateRequest) -> int:
    feature_sum = sum(
        catalog.features[key].price for key in request.selected_features if key in catalog.features
    )
    service_sum = sum(
        catalog.additional_services[key].price.one_time_amount()
        for key in request.selected_additional_services
        if key in catalog.additional_services
    )
    return feature_sum + service_sum


def compute_estimate(catalog: PriceCatalog, request: EstimateRequest) -> EstimateResult:
    """Return the whole-pound price range for a hire page selection.

    Unknown project types yield ``EMPTY_ESTIMATE``. Unknown feature or
    service keys contribute nothing. Only one-time service prices (flat and
    the low end of ranges) are added; recurring and percentage services are
    shown in the breakdown but never summed.
    """
    pkg = catalog.base_packages.get(request.project_type)
    if pkg is None:
        return EMPTY_ESTIMATE

    extras = _extras_total(catalog, request)
    multiplier = Decimal(str(catalog.multiplier_for(request.timeline)))
    low = _round_pounds(Decimal(pkg.min + extras) * multiplier)
    high = _round_pounds(Decimal(pkg.max + extras) * multiplier)
    return EstimateResult(low, high)


def _timeline_adjustment(multiplier: float) -> str:
    pct = _round_pounds((Decimal(str(multiplier)) - Decimal("1")) * Decimal("100"))
    return f"+{pct}%" if pct >= 0 else f"{pct}%"


def compute_breakdown(catalog: PriceCatalog, request: EstimateRequest) -> List[BreakdownLine]:
    """Return the itemised lines matching :func:`compute_estimate`.

    Order: base package, features and services in selection order, timeline
    adjustment (omitted for ``normal``), then monthly maintenance.
    """
    pkg = catalog.base_packages.get(request.project_type)
    if pkg is None:
        return []

    monthly_fee = catalog.maintenance_fee(request.project_type)
    lines: List[BreakdownLine] = [BreakdownLine(pkg.name, format_range(pkg.min, pkg.max))]

    for key in request.selected_features:
        feat = catalog.features.get(key)
        if feat is None:
            continue
        lines.append(BreakdownLine(feat.name, format_amount(feat.price)))

    for key in request.selected_additional_services:
        svc = catalog.additional_services.get(key)
        if svc is None:
            continue
        lines.append(
            BreakdownLine(svc.name, svc.price.display(monthly_fee), included_in_total=svc.price.is_one_time)
        )

    if request.timeline != NORMAL_TIMELINE and request.timeline in catalog.timeline_multipliers:
        label = _TIMELINE_LABELS.get(request.timeline, f"{request.timeline} timeline adjustment")
        lines.append(
            BreakdownLine(label, _timeline_adjustment(catalog.multiplier_for(request.timeline)))
        )

    if request.needs_maintenance:
        price = f"{format_amount(monthly_fee)}/month" if monthly_fee is not None else "quoted separately"
        lines.append(
            BreakdownLine(f"{request.project_type} maintenance", price, included_in_total=False)
        )

    return lines


@dataclass
class EstimateWithBreakdown:
    estimate: EstimateResult
    breakdown: List[BreakdownLine] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            **self.estimate.as_dict(),
            "breakdown": [line.as_dict() for line in self.breakdown],
        }


def estimate_with_breakdown(catalog: PriceCatalog, request: EstimateRequest) -> EstimateWithBreakdown:
    """Compute the range and its breakdown in lock-step for API payloads."""
    return EstimateWithBreakdown(
        estimate=compute_estimate(catalog, request),
        breakdown=compute_breakdown(catalog, request),
    )
