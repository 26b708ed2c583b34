"""
User Endpoints - Administration, auto-checkout preference, status and intervals
"""
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.report_service import ReportService
from app.services.status_service import StatusService
from app.services.user_service import UserService
from app.schemas import (
    AutoCheckoutUpdate,
    CurrentStatus,
    Interval,
    User,
    UserCreate,
    UserUpdate,
    DataResponse
)

router = APIRouter()
user_service = UserService()
status_service = StatusService()
report_service = ReportService()


@router.get(
    "",
    response_model=DataResponse[List[User]],
    status_code=status.HTTP_200_OK
)
def list_users(db: Session = Depends(get_db)):
    users = user_service.list_users(db)

    return DataResponse(
        success=True,
        message="Users retrieved successfully",
        data=users
    )


@router.post(
    "",
    response_model=DataResponse[User],
    status_code=status.HTTP_201_CREATED
)
def create_user(
    user_in: UserCreate,
    db: Session = Depends(get_db)
):
    """Create a user; a 12-digit stamp key is generated when none is given"""
    user = user_service.create_user(db, user_in)

    return DataResponse(
        success=True,
        message="User created successfully",
        data=user
    )


@router.patch(
    "/{u_id}",
    response_model=DataResponse[User],
    status_code=status.HTTP_200_OK
)
def update_user(
    u_id: int,
    user_in: UserUpdate,
    db: Session = Depends(get_db)
):
    """
    Edit a user; only the fields sent are changed

    **Errors:**
    - 404: Unknown user or department
    - 409: Stamp key or email already taken
    """
    user = user_service.update_user(db, u_id, user_in)

    return DataResponse(
        success=True,
        message="User updated successfully",
        data=user
    )


@router.delete(
    "/{u_id}",
    response_model=DataResponse[User],
    status_code=status.HTTP_200_OK
)
def delete_user(
    u_id: int,
    db: Session = Depends(get_db)
):
    """Delete a user and all of their punch events"""
    deleted = user_service.delete_user(db, u_id)

    return DataResponse(
        success=True,
        message="User deleted successfully",
        data=deleted
    )


@router.patch(
    "/{u_id}/auto-checkout",
    response_model=DataResponse[User],
    status_code=status.HTTP_200_OK
)
def update_auto_checkout(
    u_id: int,
    update: AutoCheckoutUpdate,
    db: Session = Depends(get_db)
):
    """Enable or disable midnight auto-checkout for a user"""
    user = user_service.set_auto_checkout(db, u_id, update.u_auto_checkout_midnight)

    return DataResponse(
        success=True,
        message="Auto-checkout preference updated",
        data=user
    )


@router.get(
    "/status",
    response_model=DataResponse[List[CurrentStatus]],
    status_code=status.HTTP_200_OK
)
def get_all_status(
    as_of: Optional[datetime] = Query(None, description="Reference instant (default: now)"),
    db: Session = Depends(get_db)
):
    """Current status of every user (live dashboard)"""
    statuses = status_service.get_all_current_status(db, as_of)

    return DataResponse(
        success=True,
        message="Current status retrieved successfully",
        data=statuses
    )


@router.get(
    "/{u_id}/status",
    response_model=DataResponse[CurrentStatus],
    status_code=status.HTTP_200_OK
)
def get_status(
    u_id: int,
    as_of: Optional[datetime] = Query(None, description="Reference instant (default: now)"),
    db: Session = Depends(get_db)
):
    """
    Current status of one user

    **Response:**
    - status: activity of the most recent punch, or "unknown"
    - since: time elapsed since that punch
    """
    current = status_service.get_current_status(db, u_id, as_of)

    return DataResponse(
        success=True,
        message="Current status retrieved successfully",
        data=current
    )


@router.get(
    "/{u_id}/intervals",
    response_model=DataResponse[List[Interval]],
    status_code=status.HTTP_200_OK
)
def get_user_intervals(
    u_id: int,
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    as_of: Optional[datetime] = Query(None, description="Instant closing the open interval (default: now)"),
    db: Session = Depends(get_db)
):
    """Reconstructed intervals of one user"""
    intervals = report_service.get_intervals(
        db, user_id=u_id, date_from=date_from, date_to=date_to, as_of=as_of
    )

    return DataResponse(
        success=True,
        message="Intervals retrieved successfully",
        data=intervals
    )
