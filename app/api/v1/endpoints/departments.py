"""
Department Endpoints - Administration of departments
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.department_service import DepartmentService
from app.schemas import (
    Department,
    DepartmentCreate,
    DepartmentUpdate,
    DataResponse
)

router = APIRouter()
department_service = DepartmentService()


@router.get(
    "",
    response_model=DataResponse[List[Department]],
    status_code=status.HTTP_200_OK
)
def list_departments(db: Session = Depends(get_db)):
    departments = department_service.list_departments(db)

    return DataResponse(
        success=True,
        message="Departments retrieved successfully",
        data=departments
    )


@router.post(
    "",
    response_model=DataResponse[Department],
    status_code=status.HTTP_201_CREATED
)
def create_department(
    payload: DepartmentCreate,
    db: Session = Depends(get_db)
):
    department = department_service.create_department(db, payload)

    return DataResponse(
        success=True,
        message="Department created successfully",
        data=department
    )


@router.patch(
    "/{d_id}",
    response_model=DataResponse[Department],
    status_code=status.HTTP_200_OK
)
def rename_department(
    d_id: int,
    payload: DepartmentUpdate,
    db: Session = Depends(get_db)
):
    department = department_service.rename_department(db, d_id, payload)

    return DataResponse(
        success=True,
        message="Department updated successfully",
        data=department
    )


@router.delete(
    "/{d_id}",
    response_model=DataResponse[Department],
    status_code=status.HTTP_200_OK
)
def delete_department(
    d_id: int,
    db: Session = Depends(get_db)
):
    """
    Delete an empty department

    **Errors:**
    - 404: Unknown department
    - 409: Users are still assigned to it
    """
    deleted = department_service.delete_department(db, d_id)

    return DataResponse(
        success=True,
        message="Department deleted successfully",
        data=deleted
    )
