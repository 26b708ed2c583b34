"""
Punch Endpoints - Clock actions (single and bulk) and entry deletion
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.punch_service import PunchService
from app.schemas import (
    PunchEvent,
    PunchRequest,
    PunchResponse,
    BatchPunchRequest,
    BatchPunchResponse,
    DataResponse
)

router = APIRouter()
punch_service = PunchService()


@router.post(
    "",
    response_model=DataResponse[PunchResponse],
    status_code=status.HTTP_201_CREATED
)
def create_punch(
    request: PunchRequest,
    db: Session = Depends(get_db)
):
    """
    Record a clock action

    **Process:**
    1. Resolve the user (user_id or stamp_key) and activity type
    2. Insert a midnight auto-checkout first if the user opted in and
       their last work interval crossed midnight
    3. Append the punch event

    **Errors:**
    - 400: Neither user_id nor stamp_key given
    - 404: Unknown user or activity type
    - 503: Event log unavailable, the punch was not recorded
    """
    punch_response = punch_service.clock(db, request)

    return DataResponse(
        success=True,
        message="Punch recorded successfully",
        data=punch_response
    )


@router.post(
    "/batch",
    response_model=DataResponse[BatchPunchResponse],
    status_code=status.HTTP_201_CREATED
)
def create_batch_punch(
    request: BatchPunchRequest,
    db: Session = Depends(get_db)
):
    """
    Clock many scanned badges to one activity

    Unknown stamp keys are skipped and listed in `skipped_stamp_keys`.
    """
    batch_response = punch_service.clock_batch(db, request)

    return DataResponse(
        success=True,
        message=f"{len(batch_response.events)} punch(es) recorded",
        data=batch_response
    )


@router.delete(
    "/{pe_id}",
    response_model=DataResponse[PunchEvent],
    status_code=status.HTTP_200_OK
)
def delete_punch(
    pe_id: int,
    db: Session = Depends(get_db)
):
    """Delete a single punch event (administrative correction)"""
    deleted = punch_service.delete_event(db, pe_id)

    return DataResponse(
        success=True,
        message="Punch deleted successfully",
        data=deleted
    )
