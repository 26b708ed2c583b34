"""
Punch Schemas for events and clock actions
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.timezone import to_local


class PunchEventBase(BaseModel):
    pe_user_id: int
    pe_activity_type_id: int
    pe_occurred_at: datetime
    pe_comment: Optional[str] = None


class PunchEventInDB(PunchEventBase):
    model_config = ConfigDict(from_attributes=True)

    pe_id: int
    pe_created_at: Optional[datetime] = None

    @field_validator('pe_occurred_at', 'pe_created_at', mode='before')
    @classmethod
    def normalize_local_time(cls, v):
        """Backends return naive, aware or string timestamps; expose naive local time"""
        if v == '' or v is None:
            return None
        return to_local(v)


class PunchEvent(PunchEventInDB):
    pass


# Request/Response schemas for API endpoints
class PunchRequest(BaseModel):
    """Request schema for a single clock action"""
    user_id: Optional[int] = None
    stamp_key: Optional[str] = None  # Used when user_id is not given
    activity_type_id: int
    occurred_at: Optional[datetime] = None  # Defaults to now
    comment: Optional[str] = Field(default=None, max_length=255)


class PunchResponse(BaseModel):
    """Response schema for a single clock action"""
    event: PunchEvent
    auto_checkout: Optional[PunchEvent] = None
    message: str


class BatchPunchRequest(BaseModel):
    """Request schema for bulk clocking (many badges, one activity)"""
    stamp_keys: List[str] = Field(min_length=1)
    activity_type_id: Optional[int] = None
    activity_code: Optional[str] = None  # Used when activity_type_id is not given
    occurred_at: Optional[datetime] = None


class BatchPunchResponse(BaseModel):
    """Response schema for bulk clocking"""
    events: List[PunchEvent]
    auto_checkouts: List[PunchEvent]
    skipped_stamp_keys: List[str]
