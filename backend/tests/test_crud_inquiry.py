from datetime import datetime
from decimal import Decimal

from freezegun import freeze_time

from hire_api import crud, schemas
from hire_api.models import InquiryStatus
from hire_api.pricing import DEFAULT_CATALOG, EstimateRequest, estimate_with_breakdown


def make_inquiry(db, **overrides):
    fields = {
        'project_type': 'saas',
        'project_goal': 'Launch an MVP',
        'selected_features': ['userAccounts', 'payments', 'userAccounts'],
        'timeline': 'normal',
        'name': 'Linus',
        'email': 'linus@example.com',
        'message': 'Need a dashboard.',
    }
    fields.update(overrides)
    inquiry_in = schemas.InquiryCreate(**fields)
    priced = estimate_with_breakdown(DEFAULT_CATALOG, EstimateRequest.from_payload(inquiry_in))
    return crud.create_inquiry(db, inquiry_in, priced)


def test_create_inquiry_stores_estimate_snapshot(db_session_factory):
    db = db_session_factory()
    inquiry = make_inquiry(db)
    assert inquiry.id is not None
    assert inquiry.status == InquiryStatus.NEW
    assert inquiry.selected_features == ['userAccounts', 'payments']
    assert (inquiry.estimate_min, inquiry.estimate_max) == (2250, 3750)
    assert len(inquiry.breakdown) == 3
    db.close()


def test_get_inquiries_orders_newest_first(db_session_factory):
    db = db_session_factory()
    newer = make_inquiry(db, name='Newer')
    older = make_inquiry(db, name='Older')
    newer.created_at = datetime(2030, 2, 1)
    older.created_at = datetime(2030, 1, 1)
    db.commit()

    assert [i.id for i in crud.get_inquiries(db)] == [newer.id, older.id]
    assert [i.id for i in crud.get_inquiries(db, skip=1)] == [older.id]
    assert crud.get_inquiries(db, status=InquiryStatus.QUOTED) == []
    db.close()


def test_mark_quoted_and_accepted(db_session_factory):
    db = db_session_factory()
    inquiry = make_inquiry(db)

    with freeze_time('2026-03-15 10:00:00'):
        inquiry = crud.mark_quoted(db, inquiry, Decimal('2999.99'))
    assert inquiry.status == InquiryStatus.QUOTED
    assert inquiry.quoted_at == datetime(2026, 3, 15, 10, 0, 0)
    assert inquiry.final_price == Decimal('2999.99')
    assert inquiry.notes is None

    inquiry = crud.mark_quoted(db, inquiry, Decimal('2800'), notes='discount applied')
    assert inquiry.notes == 'discount applied'

    inquiry = crud.mark_accepted(db, inquiry)
    assert inquiry.status == InquiryStatus.ACCEPTED
    db.close()


def test_update_only_touches_sent_fields(db_session_factory):
    db = db_session_factory()
    inquiry = make_inquiry(db)
    updated = crud.update_inquiry(db, inquiry, schemas.InquiryUpdate(priority=True))
    assert updated.priority is True
    assert updated.status == InquiryStatus.NEW
    assert updated.notes is None
    db.close()


def test_delete_inquiry(db_session_factory):
    db = db_session_factory()
    inquiry = make_inquiry(db)
    assert crud.delete_inquiry(db, inquiry.id) is not None
    assert crud.get_inquiry(db, inquiry.id) is None
    assert crud.delete_inquiry(db, inquiry.id) is None
    db.close()
