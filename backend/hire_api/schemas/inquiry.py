from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..models.inquiry import InquiryStatus
from .pricing import BreakdownLineOut


class InquiryFields(BaseModel):
    """Everything the four-step hire wizard collects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # step 1: project
    project_type: str = ""
    business_type: Optional[str] = None
    current_challenge: Optional[str] = None
    project_goal: str = ""
    target_audience: Optional[str] = None
    has_existing_website: Optional[str] = None
    # step 2: features
    selected_features: List[str] = Field(default_factory=list)
    selected_additional_services: List[str] = Field(default_factory=list)
    design_preference: Optional[str] = None
    needs_maintenance: bool = False
    maintenance_level: Optional[str] = None
    # step 3: timeline
    timeline: str = ""
    content_ready: Optional[str] = None
    budget: Optional[str] = None
    # step 4: contact
    name: str = ""
    email: str = ""
    company: Optional[str] = None
    phone: Optional[str] = None
    message: str = ""
    hear_about_us: Optional[str] = None

    @field_validator("project_type", "project_goal", "timeline", "name", "email", "message", mode="before")
    def strip_required(cls, v):
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v


class InquiryCreate(InquiryFields):
    pass


class InquiryUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: Optional[InquiryStatus] = None
    notes: Optional[str] = None
    priority: Optional[bool] = None
    follow_up_date: Optional[datetime] = None
    final_price: Optional[Decimal] = Field(default=None, ge=0)
    quoted_at: Optional[datetime] = None

    @field_validator("status", "priority", mode="before")
    def reject_null(cls, v):
        # Both columns are NOT NULL; omit the field to leave it unchanged
        if v is None:
            raise ValueError("may not be null")
        return v


class InquiryRead(BaseModel):
    id: int
    name: str
    email: str
    company: Optional[str] = None
    phone: Optional[str] = None
    project_type: str
    business_type: Optional[str] = None
    current_challenge: Optional[str] = None
    project_goal: str
    target_audience: Optional[str] = None
    has_existing_website: Optional[str] = None
    selected_features: List[str] = Field(default_factory=list)
    selected_additional_services: List[str] = Field(default_factory=list)
    design_preference: Optional[str] = None
    needs_maintenance: bool = False
    maintenance_level: Optional[str] = None
    timeline: str
    content_ready: Optional[str] = None
    budget: Optional[str] = None
    estimate_min: Optional[int] = None
    estimate_max: Optional[int] = None
    breakdown: Optional[List[BreakdownLineOut]] = None
    message: str
    hear_about_us: Optional[str] = None
    status: InquiryStatus
    priority: bool = False
    notes: Optional[str] = None
    follow_up_date: Optional[datetime] = None
    final_price: Optional[Decimal] = None
    quoted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SendQuoteIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    final_price: Decimal = Field(gt=0)
    notes: Optional[str] = None


class SendQuoteOut(BaseModel):
    inquiry: InquiryRead
    accept_url: str
    email_sent: bool


class AcceptQuoteOut(BaseModel):
    message: str
    inquiry_id: int
    status: InquiryStatus
