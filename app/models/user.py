"""
User Model - Punch clock users identified by their stamp key (badge code)
"""
from sqlalchemy import Column, Boolean, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, false
from atams.db import Base

from app.db.types import IdType


class User(Base):
    """User model - Table: users"""
    __tablename__ = "users"

    u_id = Column(IdType, primary_key=True, index=True, autoincrement=True)
    u_name = Column(String(255), nullable=False)
    u_email = Column(String(255), unique=True, nullable=False)
    u_stamp_key = Column(String(64), unique=True, nullable=False, index=True)
    u_position = Column(String(255), nullable=True)
    u_department_id = Column(IdType, ForeignKey("departments.d_id"), nullable=True, index=True)
    u_auto_checkout_midnight = Column(Boolean, nullable=False, default=False, server_default=false())
    u_created_at = Column(DateTime, server_default=func.now(), nullable=False)
    u_updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

    department = relationship("Department", lazy="joined")
