from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from .. import models, schemas
from ..pricing import EstimateWithBreakdown


def create_inquiry(
    db: Session,
    inquiry_in: schemas.InquiryCreate,
    priced: EstimateWithBreakdown,
) -> models.Inquiry:
    data = inquiry_in.model_dump()
    data["selected_features"] = list(dict.fromkeys(data.get("selected_features") or []))
    data["selected_additional_services"] = list(
        dict.fromkeys(data.get("selected_additional_services") or [])
    )
    db_inquiry = models.Inquiry(
        **data,
        estimate_min=priced.estimate.min,
        estimate_max=priced.estimate.max,
        breakdown=[line.as_dict() for line in priced.breakdown],
        status=models.InquiryStatus.NEW,
    )
    db.add(db_inquiry)
    db.commit()
    db.refresh(db_inquiry)
    return db_inquiry


def get_inquiries(
    db: Session,
    status: Optional[models.InquiryStatus] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[models.Inquiry]:
    query = db.query(models.Inquiry)
    if status is not None:
        query = query.filter(models.Inquiry.status == status)
    return (
        query.order_by(models.Inquiry.created_at.desc(), models.Inquiry.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_inquiry(db: Session, inquiry_id: int) -> Optional[models.Inquiry]:
    return db.query(models.Inquiry).filter(models.Inquiry.id == inquiry_id).first()


def update_inquiry(
    db: Session, db_inquiry: models.Inquiry, inquiry_in: schemas.InquiryUpdate
) -> models.Inquiry:
    update_data = inquiry_in.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(db_inquiry, key, value)
    db.commit()
    db.refresh(db_inquiry)
    return db_inquiry


def mark_quoted(db: Session, db_inquiry: models.Inquiry, final_price, notes: Optional[str] = None) -> models.Inquiry:
    db_inquiry.final_price = final_price
    db_inquiry.status = models.InquiryStatus.QUOTED
    db_inquiry.quoted_at = datetime.utcnow()
    if notes:
        db_inquiry.notes = notes
    db.commit()
    db.refresh(db_inquiry)
    return db_inquiry


def mark_accepted(db: Session, db_inquiry: models.Inquiry) -> models.Inquiry:
    db_inquiry.status = models.InquiryStatus.ACCEPTED
    db.commit()
    db.refresh(db_inquiry)
    return db_inquiry


def delete_inquiry(db: Session, inquiry_id: int) -> Optional[models.Inquiry]:
    db_inquiry = db.query(models.Inquiry).filter(models.Inquiry.id == inquiry_id).first()
    if db_inquiry:
        db.delete(db_inquiry)
        db.commit()
    return db_inquiry
