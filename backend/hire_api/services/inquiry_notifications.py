"""Plain-text emails sent for inquiries and quotes."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Mapping

from ..models.inquiry import Inquiry
from ..utils.email import send_email

_TIMELINE_LABELS = {
    "rush": "rush (asap)",
    "normal": "normal",
    "flexible": "flexible",
}


def _format_breakdown(lines: Iterable[Mapping]) -> str:
    rows = []
    for line in lines or []:
        suffix = "" if line.get("included_in_total", True) else " (not in estimate)"
        rows.append(f"  - {line.get('item')}: {line.get('price')}{suffix}")
    return "\n".join(rows) or "  (none)"


def _format_money(value) -> str:
    amount = Decimal(str(value or 0)).quantize(Decimal("0.01"))
    return f"£{amount:,}"


def new_inquiry_message(inquiry: Inquiry) -> tuple[str, str]:
    subject = f"new project inquiry from {inquiry.name}"
    estimate = (
        f"£{inquiry.estimate_min}-{inquiry.estimate_max}"
        if inquiry.estimate_max
        else "n/a"
    )
    body = "\n".join(
        [
            "contact information",
            f"  name: {inquiry.name}",
            f"  email: {inquiry.email}",
            f"  company: {inquiry.company or '-'}",
            f"  phone: {inquiry.phone or '-'}",
            "",
            "project details",
            f"  project type: {inquiry.project_type}",
            f"  goal: {inquiry.project_goal}",
            f"  timeline: {_TIMELINE_LABELS.get(inquiry.timeline, inquiry.timeline)}",
            f"  budget: {inquiry.budget or '-'}",
            f"  estimate: {estimate}",
            "",
            "breakdown",
            _format_breakdown(inquiry.breakdown or []),
            "",
            "message",
            inquiry.message,
        ]
    )
    return subject, body


def quote_message(inquiry: Inquiry, accept_url: str, notes: str | None = None) -> tuple[str, str]:
    subject = f"Your Project Quote - {inquiry.project_type} website"
    body_lines = [
        f"Hi {inquiry.name},",
        "",
        "Thanks for your inquiry. Here is the quote for your project.",
        "",
        f"Project price: {_format_money(inquiry.final_price)}",
        "",
        "Breakdown from your original estimate:",
        _format_breakdown(inquiry.breakdown or []),
    ]
    if inquiry.needs_maintenance:
        body_lines += [
            "",
            "Maintenance is billed separately from month two and covers updates, "
            "security patches and technical support.",
        ]
    if notes:
        body_lines += ["", "Notes:", notes]
    body_lines += ["", "To accept this quote, open:", accept_url]
    return subject, "\n".join(body_lines)


def send_quote_email(inquiry: Inquiry, accept_url: str, notes: str | None = None) -> bool:
    subject, body = quote_message(inquiry, accept_url, notes)
    return send_email(inquiry.email, subject, body)
