"""
Report Endpoints - Work hours, department summaries, trends and drill-downs
"""
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.services.report_service import ReportService
from app.schemas import (
    DailyWorkHours,
    DepartmentSummary,
    Interval,
    TrendPoint,
    UserActivitySummary,
    UserDailyActivity,
    DataResponse
)

router = APIRouter()
report_service = ReportService()


@router.get(
    "/intervals",
    response_model=DataResponse[List[Interval]],
    status_code=status.HTTP_200_OK
)
def get_intervals(
    user_id: Optional[int] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    activity_type_id: Optional[int] = Query(None),
    department: Optional[str] = Query(None),
    as_of: Optional[datetime] = Query(None),
    db: Session = Depends(get_db)
):
    """Reconstructed intervals with optional filters (detail and calendar views)"""
    intervals = report_service.get_intervals(
        db,
        user_id=user_id,
        date_from=date_from,
        date_to=date_to,
        activity_type_id=activity_type_id,
        department=department,
        as_of=as_of
    )

    return DataResponse(
        success=True,
        message="Intervals retrieved successfully",
        data=intervals
    )


@router.get(
    "/work-hours",
    response_model=DataResponse[List[DailyWorkHours]],
    status_code=status.HTTP_200_OK
)
def get_work_hours(
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    user_id: Optional[int] = Query(None),
    as_of: Optional[datetime] = Query(None),
    db: Session = Depends(get_db)
):
    """Work hours per user and day"""
    rows = report_service.get_daily_work_hours(db, date_from, date_to, user_id, as_of)

    return DataResponse(
        success=True,
        message="Work hours retrieved successfully",
        data=rows
    )


@router.get(
    "/departments",
    response_model=DataResponse[List[DepartmentSummary]],
    status_code=status.HTTP_200_OK
)
def get_department_summary(
    day: Optional[date] = Query(None, description="Restrict to one calendar day"),
    as_of: Optional[datetime] = Query(None),
    db: Session = Depends(get_db)
):
    """Total users, total and average work hours per department"""
    summaries = report_service.get_department_summary(db, day, as_of)

    return DataResponse(
        success=True,
        message="Department summary retrieved successfully",
        data=summaries
    )


@router.get(
    "/departments/{department}/users",
    response_model=DataResponse[List[UserDailyActivity]],
    status_code=status.HTTP_200_OK
)
def get_department_users_on_day(
    department: str,
    day: date = Query(..., description="Calendar day to drill into"),
    as_of: Optional[datetime] = Query(None),
    db: Session = Depends(get_db)
):
    """Work and non-work hours of a department's users on one day"""
    rows = report_service.get_department_users_on_day(db, department, day, as_of)

    return DataResponse(
        success=True,
        message="Department activity retrieved successfully",
        data=rows
    )


@router.get(
    "/trends",
    response_model=DataResponse[List[TrendPoint]],
    status_code=status.HTTP_200_OK
)
def get_trends(
    days: int = Query(30, ge=0, le=settings.TREND_MAX_DAYS),
    as_of: Optional[datetime] = Query(None),
    db: Session = Depends(get_db)
):
    """One row per day for the last `days` days, newest first; empty days are zero"""
    trends = report_service.get_trends(db, days, as_of)

    return DataResponse(
        success=True,
        message="Trends retrieved successfully",
        data=trends
    )


@router.get(
    "/users",
    response_model=DataResponse[List[UserActivitySummary]],
    status_code=status.HTTP_200_OK
)
def get_user_activity_summary(
    department: Optional[str] = Query(None),
    as_of: Optional[datetime] = Query(None),
    db: Session = Depends(get_db)
):
    """All-time work and non-work hours, last activity and status per user"""
    summaries = report_service.get_user_activity_summary(db, department, as_of)

    return DataResponse(
        success=True,
        message="User activity summary retrieved successfully",
        data=summaries
    )
