"""
SQLAlchemy ORM models for saved calculator state.
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class TimestampMixin:
    """Mixin for audit timestamps."""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


class InputSnapshot(TimestampMixin, Base):
    """
    One saved set of calculator inputs.

    The payload is stored as an opaque JSON record and only interpreted
    when loaded, so rows written by older versions still load.
    """

    __tablename__ = "input_snapshots"

    key = Column(String(255), primary_key=True)
    data = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<InputSnapshot {self.key}>"
