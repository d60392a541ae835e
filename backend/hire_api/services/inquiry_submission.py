"""Hire wizard session: collects the form, prices it live and submits it.

One :class:`InquiryFlow` per visitor session. The estimate and breakdown are
recomputed from the catalog on every call, never stored. Submission is a
single POST to ``INQUIRY_ENDPOINT_URL``; a failed request becomes a
user-facing message and is not retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..core.config import settings
from ..pricing import (
    BreakdownLine,
    EstimateRequest,
    EstimateResult,
    PriceCatalog,
    compute_breakdown,
    compute_estimate,
    get_catalog,
)
from ..schemas.inquiry import InquiryFields
from .inquiry_rules import STEP_COUNT, validate_inquiry, validate_step

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "thanks! your inquiry has been sent. i'll be in touch within 24 hours."
FAILURE_MESSAGE = "failed to send inquiry. please try again or email me directly."


@dataclass
class SubmissionResult:
    ok: bool
    message: str
    inquiry_id: Optional[int] = None
    field_errors: Optional[Dict[str, str]] = None


class InquiryFlow:
    def __init__(
        self,
        catalog: Optional[PriceCatalog] = None,
        endpoint: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        **initial: Any,
    ) -> None:
        self.catalog = catalog or get_catalog()
        self.endpoint = endpoint or settings.INQUIRY_ENDPOINT_URL
        self._client = client
        self.form = InquiryFields(**initial)
        self.step = 1

    # ─── form state ──────────────────────────────────────────────────────────

    def update(self, **fields: Any) -> None:
        data = self.form.model_dump()
        unknown = set(fields) - set(data)
        if unknown:
            raise ValueError(f"unknown inquiry fields: {sorted(unknown)}")
        data.update(fields)
        self.form = InquiryFields(**data)

    def _toggle(self, attr: str, key: str) -> bool:
        selected: List[str] = list(getattr(self.form, attr))
        if key in selected:
            selected.remove(key)
            active = False
        else:
            selected.append(key)
            active = True
        self.update(**{attr: selected})
        return active

    def toggle_feature(self, key: str) -> bool:
        """Add or remove a feature; returns whether it is now selected."""
        return self._toggle("selected_features", key)

    def toggle_service(self, key: str) -> bool:
        return self._toggle("selected_additional_services", key)

    # ─── wizard navigation ───────────────────────────────────────────────────

    def validate_step(self, step: Optional[int] = None) -> Dict[str, str]:
        return validate_step(self.form, step or self.step)

    def next_step(self) -> Dict[str, str]:
        """Advance when the current step is complete; returns its errors."""
        errors = self.validate_step()
        if not errors and self.step < STEP_COUNT:
            self.step += 1
        return errors

    def previous_step(self) -> None:
        if self.step > 1:
            self.step -= 1

    @property
    def is_last_step(self) -> bool:
        return self.step == STEP_COUNT

    # ─── pricing ─────────────────────────────────────────────────────────────

    def estimate_request(self) -> EstimateRequest:
        return EstimateRequest(
            project_type=self.form.project_type,
            selected_features=tuple(self.form.selected_features),
            selected_additional_services=tuple(self.form.selected_additional_services),
            timeline=self.form.timeline or "normal",
            needs_maintenance=self.form.needs_maintenance,
            maintenance_level=self.form.maintenance_level or "",
        )

    def estimate(self) -> EstimateResult:
        return compute_estimate(self.catalog, self.estimate_request())

    def breakdown(self) -> List[BreakdownLine]:
        return compute_breakdown(self.catalog, self.estimate_request())

    # ─── submission ──────────────────────────────────────────────────────────

    def build_payload(self) -> Dict[str, Any]:
        request = self.estimate_request()
        estimate = compute_estimate(self.catalog, request)
        payload = self.form.model_dump(by_alias=True)
        payload.update(
            {
                "estimateMin": estimate.min,
                "estimateMax": estimate.max,
                "breakdown": [line.as_dict() for line in compute_breakdown(self.catalog, request)],
            }
        )
        return payload

    def submit(self) -> SubmissionResult:
        errors = validate_inquiry(self.form)
        if errors:
            return SubmissionResult(False, "please fill in all required fields", field_errors=errors)

        payload = self.build_payload()
        client = self._client or httpx.Client(timeout=settings.INQUIRY_SUBMIT_TIMEOUT)
        try:
            resp = client.post(self.endpoint, json=payload)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Inquiry submission to %s failed: %s", self.endpoint, exc)
            return SubmissionResult(False, FAILURE_MESSAGE)
        finally:
            if self._client is None:
                client.close()

        inquiry_id = None
        try:
            body = resp.json()
        except ValueError:
            logger.warning("Inquiry endpoint returned a non-JSON body")
        else:
            if isinstance(body, dict):
                inquiry_id = body.get("id")
        logger.info("Inquiry submitted for %s (id=%s)", self.form.email, inquiry_id)
        return SubmissionResult(True, SUCCESS_MESSAGE, inquiry_id=inquiry_id)
