from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session
import logging

from .. import crud, models, schemas
from ..core.config import settings, PUBLIC_BASE_URL
from ..pricing import EstimateRequest, PriceCatalog, estimate_with_breakdown
from ..services.inquiry_notifications import new_inquiry_message, send_quote_email
from ..services.inquiry_rules import validate_inquiry
from ..services.quote_links import build_accept_url, verify_quote_token
from ..utils import error_response, send_email
from .dependencies import get_db, get_price_catalog, require_admin

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(inquiry_id: int):
    return error_response(
        f"Inquiry {inquiry_id} not found",
        {"inquiry_id": "not_found"},
        status.HTTP_404_NOT_FOUND,
    )


@router.post(
    "/inquiries",
    response_model=schemas.InquiryRead,
    status_code=status.HTTP_201_CREATED,
)
def create_inquiry(
    inquiry_in: schemas.InquiryCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    catalog: PriceCatalog = Depends(get_price_catalog),
):
    errors = validate_inquiry(inquiry_in)
    if errors:
        raise error_response("Please fill in all required fields", errors)

    # Price server-side; estimates sent by the browser are not trusted.
    priced = estimate_with_breakdown(
        catalog,
        EstimateRequest(
            project_type=inquiry_in.project_type,
            selected_features=tuple(inquiry_in.selected_features),
            selected_additional_services=tuple(inquiry_in.selected_additional_services),
            timeline=inquiry_in.timeline,
            needs_maintenance=inquiry_in.needs_maintenance,
            maintenance_level=inquiry_in.maintenance_level or "",
        ),
    )
    inquiry = crud.create_inquiry(db, inquiry_in, priced)
    logger.info(
        "Created inquiry %s for %s (%s, £%s-%s)",
        inquiry.id,
        inquiry.email,
        inquiry.project_type,
        inquiry.estimate_min,
        inquiry.estimate_max,
    )
    if settings.CONTACT_EMAIL:
        subject, body = new_inquiry_message(inquiry)
        background_tasks.add_task(send_email, settings.CONTACT_EMAIL, subject, body)
    return inquiry


@router.get("/inquiries", response_model=list[schemas.InquiryRead], dependencies=[Depends(require_admin)])
def list_inquiries(
    status_filter: Optional[models.InquiryStatus] = Query(default=None, alias="status"),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return crud.get_inquiries(db, status=status_filter, skip=skip, limit=limit)


@router.get("/inquiries/accept-quote", response_model=schemas.AcceptQuoteOut)
def accept_quote(
    inquiry_id: Optional[int] = Query(default=None, alias="id"),
    token: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    if inquiry_id is None or not token:
        raise error_response(
            "Missing inquiry ID or token",
            {"id": "required", "token": "required"},
            status.HTTP_400_BAD_REQUEST,
        )
    if not verify_quote_token(inquiry_id, token):
        raise error_response("Invalid token", {"token": "invalid"}, status.HTTP_403_FORBIDDEN)
    inquiry = crud.get_inquiry(db, inquiry_id)
    if not inquiry:
        raise _not_found(inquiry_id)
    if inquiry.status == models.InquiryStatus.ACCEPTED:
        return schemas.AcceptQuoteOut(
            message="Quote already accepted", inquiry_id=inquiry.id, status=inquiry.status
        )
    if inquiry.status != models.InquiryStatus.QUOTED:
        raise error_response(
            "Inquiry has not been quoted yet",
            {"status": inquiry.status.value},
            status.HTTP_400_BAD_REQUEST,
        )
    if inquiry.final_price is None:
        raise error_response(
            "No final price set for this inquiry",
            {"final_price": "missing"},
            status.HTTP_400_BAD_REQUEST,
        )
    inquiry = crud.mark_accepted(db, inquiry)
    logger.info("Inquiry %s quote accepted at £%s", inquiry.id, inquiry.final_price)
    return schemas.AcceptQuoteOut(message="Quote accepted", inquiry_id=inquiry.id, status=inquiry.status)


@router.get(
    "/inquiries/{inquiry_id}",
    response_model=schemas.InquiryRead,
    dependencies=[Depends(require_admin)],
)
def read_inquiry(inquiry_id: int, db: Session = Depends(get_db)):
    inquiry = crud.get_inquiry(db, inquiry_id)
    if not inquiry:
        logger.info("Inquiry %s not found", inquiry_id)
        raise _not_found(inquiry_id)
    return inquiry


@router.patch(
    "/inquiries/{inquiry_id}",
    response_model=schemas.InquiryRead,
    dependencies=[Depends(require_admin)],
)
def update_inquiry(
    inquiry_id: int,
    inquiry_in: schemas.InquiryUpdate,
    db: Session = Depends(get_db),
):
    inquiry = crud.get_inquiry(db, inquiry_id)
    if not inquiry:
        raise _not_found(inquiry_id)
    updated = crud.update_inquiry(db, inquiry, inquiry_in)
    logger.info(
        "Updated inquiry %s: %s",
        inquiry_id,
        sorted(inquiry_in.model_dump(exclude_unset=True)),
    )
    return updated


@router.delete(
    "/inquiries/{inquiry_id}",
    response_model=schemas.InquiryRead,
    dependencies=[Depends(require_admin)],
)
def delete_inquiry(inquiry_id: int, db: Session = Depends(get_db)):
    inquiry = crud.get_inquiry(db, inquiry_id)
    if not inquiry:
        raise _not_found(inquiry_id)
    # Serialise before the row is gone
    payload = schemas.InquiryRead.model_validate(inquiry)
    crud.delete_inquiry(db, inquiry_id)
    return payload


@router.post(
    "/inquiries/{inquiry_id}/send-quote",
    response_model=schemas.SendQuoteOut,
    dependencies=[Depends(require_admin)],
)
def send_quote(
    inquiry_id: int,
    quote_in: schemas.SendQuoteIn,
    db: Session = Depends(get_db),
):
    inquiry = crud.get_inquiry(db, inquiry_id)
    if not inquiry:
        raise _not_found(inquiry_id)
    inquiry = crud.mark_quoted(db, inquiry, quote_in.final_price, quote_in.notes)
    accept_url = build_accept_url(PUBLIC_BASE_URL, inquiry.id)
    email_sent = send_quote_email(inquiry, accept_url, quote_in.notes)
    if not email_sent:
        logger.warning("Quote email for inquiry %s was not delivered", inquiry.id)
    return schemas.SendQuoteOut(
        inquiry=schemas.InquiryRead.model_validate(inquiry),
        accept_url=accept_url,
        email_sent=email_sent,
    )
