"""
User Repository - Data access layer for users
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from app.models.user import User


class UserRepository(BaseRepository[User]):
    def __init__(self):
        super().__init__(User)

    def get_all(self, db: Session) -> List[User]:
        """Get all users ordered by name using ORM"""
        return db.query(User).order_by(User.u_name.asc(), User.u_id.asc()).all()

    def get_by_stamp_key(self, db: Session, stamp_key: str) -> Optional[User]:
        """Get user by badge code using ORM"""
        return db.query(User).filter(User.u_stamp_key == stamp_key).first()

    def get_by_department(self, db: Session, department_id: int) -> List[User]:
        """Get users of a department using ORM"""
        return db.query(User).filter(
            User.u_department_id == department_id
        ).order_by(User.u_name.asc(), User.u_id.asc()).all()

    def stamp_key_exists(self, db: Session, stamp_key: str) -> bool:
        """Check if a stamp key is taken using ORM"""
        return db.query(User.u_id).filter(User.u_stamp_key == stamp_key).first() is not None

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email using ORM"""
        return db.query(User).filter(User.u_email == email).first()
