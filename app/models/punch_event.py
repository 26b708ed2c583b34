"""
Punch Event Model - Append-only log of activity switches
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from atams.db import Base

from app.db.types import IdType


class PunchEvent(Base):
    """Punch event model - Table: punch_events"""
    __tablename__ = "punch_events"
    __table_args__ = (
        # Per-user total order: (occurred_at, id)
        Index("ix_punch_events_user_order", "pe_user_id", "pe_occurred_at", "pe_id"),
    )

    pe_id = Column(IdType, primary_key=True, index=True, autoincrement=True)
    pe_user_id = Column(IdType, ForeignKey("users.u_id"), nullable=False, index=True)
    # No FK: activity types are a live lookup joined at read time
    pe_activity_type_id = Column(IdType, nullable=False, index=True)
    pe_occurred_at = Column(DateTime, nullable=False)  # Naive application-local time
    pe_comment = Column(String(255), nullable=True)
    pe_created_at = Column(DateTime, server_default=func.now(), nullable=False)
