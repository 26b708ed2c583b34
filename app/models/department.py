"""
Department Model - Organisational units users belong to
"""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from atams.db import Base

from app.db.types import IdType


class Department(Base):
    """Department model - Table: departments"""
    __tablename__ = "departments"

    d_id = Column(IdType, primary_key=True, index=True, autoincrement=True)
    d_name = Column(String(255), unique=True, nullable=False)
    d_created_at = Column(DateTime, server_default=func.now(), nullable=False)
