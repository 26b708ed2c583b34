"""
Activity Type Model - Named states a user can punch into (work, break, end of work)
"""
from sqlalchemy import Column, Boolean, String, DateTime
from sqlalchemy.sql import func
from atams.db import Base

from app.db.types import IdType


class ActivityType(Base):
    """Activity type model - Table: activity_types"""
    __tablename__ = "activity_types"

    at_id = Column(IdType, primary_key=True, index=True, autoincrement=True)
    at_status = Column(String(100), unique=True, nullable=False)
    at_counts_as_work = Column(Boolean, nullable=False)
    at_code = Column(String(50), unique=True, nullable=True)  # Scanned on bulk clocking
    at_comment = Column(String(255), nullable=True)
    at_created_at = Column(DateTime, server_default=func.now(), nullable=False)
    at_updated_at = Column(DateTime, onupdate=func.now(), nullable=True)
