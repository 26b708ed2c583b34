"""
Department Repository - Data access layer for departments
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from app.models.department import Department


class DepartmentRepository(BaseRepository[Department]):
    def __init__(self):
        super().__init__(Department)

    def get_all(self, db: Session) -> List[Department]:
        """Get all departments ordered by name using ORM"""
        return db.query(Department).order_by(Department.d_name.asc()).all()

    def get_by_name(self, db: Session, name: str) -> Optional[Department]:
        """Get department by name using ORM"""
        return db.query(Department).filter(Department.d_name == name).first()

    def count_members(self, db: Session, department_id: int) -> int:
        """Count users assigned to a department using native SQL"""
        query = """
            SELECT COUNT(*)
            FROM users
            WHERE u_department_id = :department_id
        """
        return self.execute_raw_sql_scalar(db, query, {"department_id": department_id})
