import enum
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum as SQLAlchemyEnum,
    Integer,
    JSON,
    Numeric,
    String,
    Text,
)

from .base import BaseModel


class InquiryStatus(str, enum.Enum):
    NEW = "NEW"
    CONTACTED = "CONTACTED"
    IN_DISCUSSION = "IN_DISCUSSION"
    QUOTED = "QUOTED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    CONVERTED = "CONVERTED"
    ARCHIVED = "ARCHIVED"


class Inquiry(BaseModel):
    """A hire page submission, with the estimate shown to the visitor."""

    __tablename__ = "inquiries"

    id = Column(Integer, primary_key=True, index=True)

    # contact
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    company = Column(String, nullable=True)
    phone = Column(String, nullable=True)

    # project
    project_type = Column(String, nullable=False)
    business_type = Column(String, nullable=True)
    current_challenge = Column(Text, nullable=True)
    project_goal = Column(Text, nullable=False)
    target_audience = Column(String, nullable=True)
    has_existing_website = Column(String, nullable=True)

    # scope
    selected_features = Column(JSON, nullable=False, default=list)
    selected_additional_services = Column(JSON, nullable=False, default=list)
    design_preference = Column(String, nullable=True)
    needs_maintenance = Column(Boolean, nullable=False, default=False)
    maintenance_level = Column(String, nullable=True)
    timeline = Column(String, nullable=False)
    content_ready = Column(String, nullable=True)
    budget = Column(String, nullable=True)

    # estimate snapshot
    estimate_min = Column(Integer, nullable=True)
    estimate_max = Column(Integer, nullable=True)
    breakdown = Column(JSON, nullable=True)

    message = Column(Text, nullable=False)
    hear_about_us = Column(String, nullable=True)

    # back-office workflow
    status = Column(SQLAlchemyEnum(InquiryStatus), nullable=False, default=InquiryStatus.NEW, index=True)
    priority = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    follow_up_date = Column(DateTime, nullable=True)
    final_price = Column(Numeric(10, 2), nullable=True)
    quoted_at = Column(DateTime, nullable=True)
