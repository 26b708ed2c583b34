"""
Department Service - Administration of departments
"""
from typing import List

from sqlalchemy.orm import Session

from atams.exceptions import ConflictException, NotFoundException

from app.core.exceptions import store_guard
from app.repositories.department_repository import DepartmentRepository
from app.schemas.department import Department, DepartmentCreate, DepartmentUpdate
from app.services.report_service import NO_DEPARTMENT


class DepartmentService:
    def __init__(self) -> None:
        self.repo = DepartmentRepository()

    def _check_name_free(self, db: Session, name: str, department_id: int = None) -> None:
        # Reserved for users without a department in reports
        if name == NO_DEPARTMENT:
            raise ConflictException(f"'{NO_DEPARTMENT}' is a reserved name")
        existing = self.repo.get_by_name(db, name)
        if existing and existing.d_id != department_id:
            raise ConflictException("Department already exists")

    def list_departments(self, db: Session) -> List[Department]:
        with store_guard(db, "read departments"):
            return [Department.model_validate(d) for d in self.repo.get_all(db)]

    def create_department(self, db: Session, payload: DepartmentCreate) -> Department:
        with store_guard(db, "create department"):
            self._check_name_free(db, payload.d_name)
            return Department.model_validate(self.repo.create(db, payload.model_dump()))

    def rename_department(self, db: Session, department_id: int, payload: DepartmentUpdate) -> Department:
        """Renaming moves every member's report rows to the new name"""
        with store_guard(db, "update department"):
            department = self.repo.get(db, department_id)
            if not department:
                raise NotFoundException("Department not found")
            self._check_name_free(db, payload.d_name, department_id)

            return Department.model_validate(self.repo.update(db, department, payload.model_dump()))

    def delete_department(self, db: Session, department_id: int) -> Department:
        """
        Delete a department no user is assigned to

        Raises:
            NotFoundException: Unknown department
            ConflictException: Users are still assigned to it
        """
        with store_guard(db, "delete department"):
            department = self.repo.get(db, department_id)
            if not department:
                raise NotFoundException("Department not found")

            members = self.repo.count_members(db, department_id)
            if members:
                raise ConflictException(
                    "Department still has users assigned",
                    details={"users": members}
                )

            deleted = Department.model_validate(department)
            self.repo.delete(db, department_id)
            return deleted
