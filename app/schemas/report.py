"""
Report Schemas - derived, never persisted
"""
from typing import Optional
from datetime import date, datetime, timedelta
from pydantic import BaseModel


class Interval(BaseModel):
    """Span from one punch event to the next one (or to the as-of instant)"""
    event_id: int
    user_id: int
    activity_type_id: int
    activity: Optional[str] = None
    counts_as_work: bool
    start: datetime
    end: datetime
    is_open: bool
    duration_hours: float
    comment: Optional[str] = None


class CurrentStatus(BaseModel):
    user_id: int
    user_name: Optional[str] = None
    status: str  # Activity name, or "unknown" without any punch
    activity_type_id: Optional[int] = None
    counts_as_work: Optional[bool] = None
    last_punch_at: Optional[datetime] = None
    since: Optional[timedelta] = None


class DailyWorkHours(BaseModel):
    user_id: int
    user_name: str
    work_date: date
    work_hours: float


class DepartmentSummary(BaseModel):
    department_name: str
    total_users: int
    total_hours: float
    avg_hours_per_user: float


class TrendPoint(BaseModel):
    work_date: date
    total_hours: float
    active_users: int
    work_events: int
    non_work_events: int


class UserActivitySummary(BaseModel):
    user_id: int
    user_name: str
    department: str
    total_work_hours: float
    total_non_work_hours: float
    last_activity: Optional[datetime] = None
    status: str


class UserDailyActivity(BaseModel):
    user_id: int
    user_name: str
    department: str
    work_hours: float
    non_work_hours: float
    last_activity: Optional[datetime] = None
    status: str
