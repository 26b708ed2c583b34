"""
Activity Type Schemas for request/response validation
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class ActivityTypeBase(BaseModel):
    at_status: str = Field(min_length=1, max_length=100)
    at_counts_as_work: bool
    at_code: Optional[str] = Field(default=None, max_length=50)
    at_comment: Optional[str] = Field(default=None, max_length=255)


class ActivityTypeCreate(ActivityTypeBase):
    pass


class ActivityTypeUpdate(BaseModel):
    at_status: Optional[str] = Field(default=None, min_length=1, max_length=100)
    at_counts_as_work: Optional[bool] = None
    at_code: Optional[str] = Field(default=None, max_length=50)
    at_comment: Optional[str] = Field(default=None, max_length=255)


class ActivityTypeInDB(ActivityTypeBase):
    model_config = ConfigDict(from_attributes=True)

    at_id: int
    at_created_at: Optional[datetime] = None
    at_updated_at: Optional[datetime] = None


class ActivityType(ActivityTypeInDB):
    pass
