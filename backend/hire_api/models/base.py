from datetime import datetime
from sqlalchemy import Column, DateTime
from ..database import Base  # This is the same Base created by declarative_base()


class BaseModel(Base):
    """Abstract base for hire desk tables; stamps rows in naive UTC."""

    __abstract__ = True

    created_at = Column(DateTime, default=datetime.utcnow)
    # Bumped on every admin edit, quote and acceptance
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
