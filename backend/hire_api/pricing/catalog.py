"""Static price catalog for the hire page estimator.

The catalog is an immutable value: build it once (``DEFAULT_CATALOG`` or
``load_catalog``) and pass it into the estimator functions. Additional service
prices are tagged with a :class:`PriceKind` so the estimate and the breakdown
classify one-time versus recurring/percentage costs from the same table.
"""

from __future__ import annotations

import enum
import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)

CURRENCY_SYMBOL = "£"

_RANGE_RE = re.compile(r"^£\s*(\d+)\s*-\s*£?\s*(\d+)\s*$")
_FLAT_RE = re.compile(r"^£\s*(\d+)\s*$")
_PERCENT_RE = re.compile(r"^\+?\s*(\d+(?:\.\d+)?)\s*%$")
_RECURRING_RE = re.compile(r"^£\s*(\d+)(?:\s*-\s*£?\s*(\d+))?\s*/\s*(?:month|mo)$", re.IGNORECASE)


class CatalogError(ValueError):
    """Raised when catalog data breaks a pricing invariant."""


class PriceKind(str, enum.Enum):
    FLAT = "flat"
    RANGE = "range"
    PERCENTAGE = "percentage"
    RECURRING = "recurring"
    CUSTOM = "custom"


def format_amount(amount: int) -> str:
    return f"{CURRENCY_SYMBOL}{amount}"


def format_range(low: int, high: int) -> str:
    if low == high:
        return format_amount(low)
    return f"{CURRENCY_SYMBOL}{low}-{high}"


def format_percent(percent: float) -> str:
    if float(percent).is_integer():
        return f"+{int(percent)}%"
    return f"+{percent}%"


@dataclass(frozen=True)
class ServicePrice:
    kind: PriceKind
    amount: int = 0
    max_amount: Optional[int] = None
    percent: float = 0.0
    dynamic: bool = False
    label: str = ""

    def __post_init__(self) -> None:
        if self.amount < 0 or (self.max_amount is not None and self.max_amount < 0):
            raise CatalogError(f"negative price: {self!r}")
        if self.max_amount is not None and self.max_amount < self.amount:
            raise CatalogError(f"price range min exceeds max: {self!r}")
        if self.percent < 0:
            raise CatalogError(f"negative percentage: {self!r}")

    @classmethod
    def flat(cls, amount: int) -> "ServicePrice":
        return cls(PriceKind.FLAT, amount=amount)

    @classmethod
    def range(cls, low: int, high: int) -> "ServicePrice":
        return cls(PriceKind.RANGE, amount=low, max_amount=high)

    @classmethod
    def percentage(cls, percent: float) -> "ServicePrice":
        return cls(PriceKind.PERCENTAGE, percent=percent)

    @classmethod
    def recurring(cls, low: int, high: Optional[int] = None, *, dynamic: bool = False) -> "ServicePrice":
        return cls(PriceKind.RECURRING, amount=low, max_amount=high, dynamic=dynamic)

    @classmethod
    def custom(cls, label: str) -> "ServicePrice":
        return cls(PriceKind.CUSTOM, label=label)

    @classmethod
    def parse(cls, raw: Any) -> "ServicePrice":
        """Classify a legacy price value such as ``"£150-300"`` or ``"+15%"``.

        Strings that match no known shape become ``custom`` prices: they are
        shown verbatim but never added to an estimate.
        """
        if isinstance(raw, bool):
            raise CatalogError(f"invalid price: {raw!r}")
        if isinstance(raw, int):
            return cls.flat(raw)
        if isinstance(raw, float) and raw.is_integer():
            return cls.flat(int(raw))
        if not isinstance(raw, str):
            raise CatalogError(f"invalid price: {raw!r}")
        text = raw.strip()
        m = _RECURRING_RE.match(text)
        if m:
            high = int(m.group(2)) if m.group(2) else None
            return cls.recurring(int(m.group(1)), high)
        m = _RANGE_RE.match(text)
        if m:
            return cls.range(int(m.group(1)), int(m.group(2)))
        m = _FLAT_RE.match(text)
        if m:
            return cls.flat(int(m.group(1)))
        m = _PERCENT_RE.match(text)
        if m:
            return cls.percentage(float(m.group(1)))
        logger.warning("Unrecognised service price %r; treating as quoted separately", text)
        return cls.custom(text)

    @property
    def is_one_time(self) -> bool:
        return self.kind in (PriceKind.FLAT, PriceKind.RANGE)

    def one_time_amount(self) -> int:
        """Amount added to a one-time estimate (the low end of a range)."""
        if self.is_one_time:
            return self.amount
        return 0

    def display(self, monthly_fee: Optional[int] = None) -> str:
        if self.kind is PriceKind.FLAT:
            return format_amount(self.amount)
        if self.kind is PriceKind.RANGE:
            return format_range(self.amount, self.max_amount if self.max_amount is not None else self.amount)
        if self.kind is PriceKind.PERCENTAGE:
            return format_percent(self.percent)
        if self.kind is PriceKind.RECURRING:
            if self.dynamic and monthly_fee is not None:
                return f"{format_amount(monthly_fee)}/month"
            high = self.max_amount if self.max_amount is not None else self.amount
            return f"{format_range(self.amount, high)}/month"
        return self.label

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind.value, "display": self.display()}
        if self.kind in (PriceKind.FLAT, PriceKind.RANGE, PriceKind.RECURRING):
            data["min"] = self.amount
            data["max"] = self.max_amount if self.max_amount is not None else self.amount
        if self.kind is PriceKind.PERCENTAGE:
            data["percent"] = self.percent
        if self.dynamic:
            data["dynamic"] = True
        return data


@dataclass(frozen=True)
class BasePackage:
    min: int
    max: int
    name: str

    def __post_init__(self) -> None:
        if self.min < 0 or self.max < 0:
            raise CatalogError(f"negative base price for {self.name!r}")
        if self.min > self.max:
            raise CatalogError(f"base price min exceeds max for {self.name!r}")


@dataclass(frozen=True)
class Feature:
    price: int
    name: str
    description: str = ""
    category: str = ""

    def __post_init__(self) -> None:
        if self.price < 0:
            raise CatalogError(f"negative feature price for {self.name!r}")


@dataclass(frozen=True)
class AdditionalService:
    price: ServicePrice
    name: str
    description: str = ""


def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True, eq=False)
class PriceCatalog:
    base_packages: Mapping[str, BasePackage]
    features: Mapping[str, Feature]
    additional_services: Mapping[str, AdditionalService]
    timeline_multipliers: Mapping[str, float]
    maintenance_pricing: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for key, mult in self.timeline_multipliers.items():
            if mult <= 0:
                raise CatalogError(f"timeline multiplier for {key!r} must be positive")
        for key, fee in self.maintenance_pricing.items():
            if fee < 0:
                raise CatalogError(f"negative maintenance fee for {key!r}")
        # Read-only views so a shared catalog cannot be mutated in place
        object.__setattr__(self, "base_packages", _freeze(self.base_packages))
        object.__setattr__(self, "features", _freeze(self.features))
        object.__setattr__(self, "additional_services", _freeze(self.additional_services))
        object.__setattr__(self, "timeline_multipliers", _freeze(self.timeline_multipliers))
        object.__setattr__(self, "maintenance_pricing", _freeze(self.maintenance_pricing))

    def multiplier_for(self, timeline: Optional[str]) -> float:
        return self.timeline_multipliers.get(timeline or "", 1.0)

    def maintenance_fee(self, project_type: Optional[str]) -> Optional[int]:
        return self.maintenance_pricing.get(project_type or "")


DEFAULT_CATALOG = PriceCatalog(
    base_packages={
        "personal": BasePackage(300, 600, "Personal Website"),
        "business": BasePackage(500, 800, "Business Website"),
        "ecommerce": BasePackage(800, 1500, "E-commerce Platform"),
        "saas": BasePackage(1500, 3000, "Custom Web Application"),
        "enterprise": BasePackage(3000, 8000, "Enterprise Solution"),
    },
    features={
        "blog": Feature(100, "Blog/News Section", "publish articles and updates", "content"),
        "gallery": Feature(80, "Image Gallery", "portfolio or product showcase", "content"),
        "multiLanguage": Feature(350, "Multiple Languages", "translated pages and language switcher", "content"),
        "booking": Feature(300, "Online Appointment Booking", "customers book slots online", "functionality"),
        "userAccounts": Feature(400, "User Accounts", "login, registration and profiles", "functionality"),
        "payments": Feature(350, "Payment Integration", "Stripe or PayPal checkout", "functionality"),
        "liveChat": Feature(150, "Live Chat Support", "real-time chat widget", "communication"),
        "newsletter": Feature(100, "Newsletter Signup", "email list capture", "marketing"),
        "analytics": Feature(75, "Analytics Dashboard", "traffic and conversion tracking", "marketing"),
        "thirdParty": Feature(250, "Third-party Integrations", "CRM, calendars and other services", "integration"),
        "automation": Feature(300, "Workflow Automation", "automated emails and business processes", "integration"),
    },
    additional_services={
        "maintenance": AdditionalService(
            ServicePrice.recurring(50, 300, dynamic=True),
            "Maintenance Package",
            "updates, security patches and technical support",
        ),
        "training": AdditionalService(ServicePrice.range(150, 300), "Training Session", "walkthrough of managing your site"),
        "content": AdditionalService(ServicePrice.range(300, 800), "Content Creation", "copywriting support"),
        "seo": AdditionalService(ServicePrice.range(200, 500), "Advanced SEO Setup", "keyword research and on-page optimisation"),
        "logo": AdditionalService(ServicePrice.range(150, 400), "Logo Design", "custom brand mark"),
        "hosting": AdditionalService(ServicePrice.flat(120), "Hosting Setup", "domain, DNS and hosting configuration"),
        "prioritySupport": AdditionalService(ServicePrice.percentage(15), "Priority Support", "same-day responses during the build"),
    },
    timeline_multipliers={
        "rush": 1.3,
        "normal": 1.0,
        "flexible": 0.9,
    },
    maintenance_pricing={
        "personal": 50,
        "business": 100,
        "ecommerce": 150,
        "saas": 200,
        "enterprise": 300,
    },
)


def _as_int(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) != int(value):
        raise CatalogError(f"{what} must be a whole number, got {value!r}")
    return int(value)


def _service_price_from(raw: Any) -> ServicePrice:
    if isinstance(raw, Mapping):
        kind = PriceKind(raw.get("kind", "custom"))
        if kind is PriceKind.FLAT:
            return ServicePrice.flat(_as_int(raw.get("amount", raw.get("min")), "amount"))
        if kind is PriceKind.RANGE:
            return ServicePrice.range(_as_int(raw["min"], "min"), _as_int(raw["max"], "max"))
        if kind is PriceKind.PERCENTAGE:
            return ServicePrice.percentage(float(raw["percent"]))
        if kind is PriceKind.RECURRING:
            high = raw.get("max")
            return ServicePrice.recurring(
                _as_int(raw["min"], "min"),
                _as_int(high, "max") if high is not None else None,
                dynamic=bool(raw.get("dynamic", False)),
            )
        return ServicePrice.custom(str(raw.get("label", "")))
    return ServicePrice.parse(raw)


def catalog_from_dict(data: Mapping[str, Any]) -> PriceCatalog:
    """Build a catalog from the camelCase JSON layout used by the hire page."""
    try:
        base = {
            key: BasePackage(_as_int(v["min"], "min"), _as_int(v["max"], "max"), str(v["name"]))
            for key, v in (data.get("basePackages") or {}).items()
        }
        features = {
            key: Feature(
                _as_int(v["price"], "price"),
                str(v["name"]),
                str(v.get("description", "")),
                str(v.get("category", "")),
            )
            for key, v in (data.get("features") or {}).items()
        }
        services = {}
        for key, v in (data.get("additionalServices") or {}).items():
            price = _service_price_from(v["price"])
            if v.get("dynamic") and price.kind is PriceKind.RECURRING:
                price = ServicePrice.recurring(price.amount, price.max_amount, dynamic=True)
            services[key] = AdditionalService(price, str(v["name"]), str(v.get("description", "")))
        multipliers = {key: float(v) for key, v in (data.get("timelineMultipliers") or {}).items()}
        maintenance = {
            key: _as_int(v, "maintenance fee") for key, v in (data.get("maintenancePricing") or {}).items()
        }
    except CatalogError:
        raise
    except (KeyError, TypeError, AttributeError, ValueError) as exc:
        raise CatalogError(f"malformed catalog: {exc}") from exc
    if not base:
        raise CatalogError("catalog defines no base packages")
    return PriceCatalog(
        base_packages=base,
        features=features,
        additional_services=services,
        timeline_multipliers=multipliers or {"normal": 1.0},
        maintenance_pricing=maintenance,
    )


def load_catalog(path: str | Path) -> PriceCatalog:
    """Load a catalog JSON file; raises :class:`CatalogError` on bad data."""
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"unable to read catalog {p}: {exc}") from exc
    catalog = catalog_from_dict(raw)
    logger.info(
        "Loaded price catalog from %s (%d packages, %d features, %d services)",
        p,
        len(catalog.base_packages),
        len(catalog.features),
        len(catalog.additional_services),
    )
    return catalog


def catalog_as_dict(catalog: PriceCatalog) -> dict[str, Any]:
    return {
        "basePackages": {
            key: {"min": pkg.min, "max": pkg.max, "name": pkg.name}
            for key, pkg in catalog.base_packages.items()
        },
        "features": {
            key: {
                "price": feat.price,
                "name": feat.name,
                "description": feat.description,
                "category": feat.category,
            }
            for key, feat in catalog.features.items()
        },
        "additionalServices": {
            key: {"price": svc.price.as_dict(), "name": svc.name, "description": svc.description}
            for key, svc in catalog.additional_services.items()
        },
        "timelineMultipliers": dict(catalog.timeline_multipliers),
        "maintenancePricing": dict(catalog.maintenance_pricing),
    }
