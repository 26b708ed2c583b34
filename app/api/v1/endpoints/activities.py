"""
Activity Type Endpoints - Administration of punchable activities
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.activity_service import ActivityService
from app.schemas import (
    ActivityType,
    ActivityTypeCreate,
    ActivityTypeUpdate,
    DataResponse
)

router = APIRouter()
activity_service = ActivityService()


@router.get(
    "",
    response_model=DataResponse[List[ActivityType]],
    status_code=status.HTTP_200_OK
)
def list_activity_types(db: Session = Depends(get_db)):
    activity_types = activity_service.list_activity_types(db)

    return DataResponse(
        success=True,
        message="Activity types retrieved successfully",
        data=activity_types
    )


@router.post(
    "",
    response_model=DataResponse[ActivityType],
    status_code=status.HTTP_201_CREATED
)
def create_activity_type(
    activity_in: ActivityTypeCreate,
    db: Session = Depends(get_db)
):
    activity_type = activity_service.create_activity_type(db, activity_in)

    return DataResponse(
        success=True,
        message="Activity type created successfully",
        data=activity_type
    )


@router.patch(
    "/{at_id}",
    response_model=DataResponse[ActivityType],
    status_code=status.HTTP_200_OK
)
def update_activity_type(
    at_id: int,
    activity_in: ActivityTypeUpdate,
    db: Session = Depends(get_db)
):
    """
    Correct label, code or work flag

    A changed work flag reclassifies every past interval of this type.
    """
    activity_type = activity_service.update_activity_type(db, at_id, activity_in)

    return DataResponse(
        success=True,
        message="Activity type updated successfully",
        data=activity_type
    )


@router.delete(
    "/{at_id}",
    response_model=DataResponse[ActivityType],
    status_code=status.HTTP_200_OK
)
def delete_activity_type(
    at_id: int,
    db: Session = Depends(get_db)
):
    """
    Delete an unused activity type

    **Errors:**
    - 404: Unknown activity type
    - 409: Punch events still reference the type
    """
    deleted = activity_service.delete_activity_type(db, at_id)

    return DataResponse(
        success=True,
        message="Activity type deleted successfully",
        data=deleted
    )
