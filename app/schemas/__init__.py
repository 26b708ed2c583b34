from .punch import (
    PunchEvent,
    PunchRequest,
    PunchResponse,
    BatchPunchRequest,
    BatchPunchResponse
)
from .report import (
    Interval,
    CurrentStatus,
    DailyWorkHours,
    DepartmentSummary,
    TrendPoint,
    UserActivitySummary,
    UserDailyActivity
)
from .activity_type import ActivityType, ActivityTypeCreate, ActivityTypeUpdate
from .user import User, UserCreate, UserUpdate, AutoCheckoutUpdate
from .department import Department, DepartmentCreate, DepartmentUpdate
from atams.schemas import DataResponse, PaginationResponse

__all__ = [
    # Punch schemas
    "PunchEvent",
    "PunchRequest",
    "PunchResponse",
    "BatchPunchRequest",
    "BatchPunchResponse",
    # Report schemas
    "Interval",
    "CurrentStatus",
    "DailyWorkHours",
    "DepartmentSummary",
    "TrendPoint",
    "UserActivitySummary",
    "UserDailyActivity",
    # Activity type schemas
    "ActivityType",
    "ActivityTypeCreate",
    "ActivityTypeUpdate",
    # User schemas
    "User",
    "UserCreate",
    "UserUpdate",
    "AutoCheckoutUpdate",
    # Department schemas
    "Department",
    "DepartmentCreate",
    "DepartmentUpdate",
    # Common schemas
    "DataResponse",
    "PaginationResponse"
]
