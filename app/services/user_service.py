"""
User Service - Administrative edits of punch clock users
"""
import random
from typing import List

from sqlalchemy.orm import Session

from atams.exceptions import ConflictException, NotFoundException
from atams.logging import get_logger
from atams.transaction import transaction

from app.core.config import settings
from app.core.exceptions import store_guard
from app.repositories.department_repository import DepartmentRepository
from app.repositories.punch_event_repository import PunchEventRepository
from app.repositories.user_repository import UserRepository
from app.schemas.user import User, UserCreate, UserUpdate

logger = get_logger(__name__)


class UserService:
    def __init__(self) -> None:
        self.user_repo = UserRepository()
        self.department_repo = DepartmentRepository()
        self.event_repo = PunchEventRepository()

    def generate_stamp_key(self, db: Session) -> str:
        """Draw 12-digit badge codes until one is unused"""
        while True:
            stamp_key = str(random.randint(settings.STAMP_KEY_MIN, settings.STAMP_KEY_MAX))
            if not self.user_repo.stamp_key_exists(db, stamp_key):
                return stamp_key

    def _check_references(self, db: Session, data: dict, user_id: int = None) -> None:
        if data.get("u_department_id") is not None and not self.department_repo.exists(db, data["u_department_id"]):
            raise NotFoundException("Department not found")

        if data.get("u_stamp_key"):
            owner = self.user_repo.get_by_stamp_key(db, data["u_stamp_key"])
            if owner and owner.u_id != user_id:
                raise ConflictException("Stamp key already assigned")

        if data.get("u_email"):
            owner = self.user_repo.get_by_email(db, data["u_email"])
            if owner and owner.u_id != user_id:
                raise ConflictException("Email already in use")

    def list_users(self, db: Session) -> List[User]:
        with store_guard(db, "read users"):
            return [User.model_validate(u) for u in self.user_repo.get_all(db)]

    def create_user(self, db: Session, user_in: UserCreate) -> User:
        """
        Create a user, handing out a fresh stamp key when none is given

        Raises:
            NotFoundException: Unknown department
            ConflictException: Stamp key or email already taken
        """
        with store_guard(db, "create user"):
            data = user_in.model_dump()
            self._check_references(db, data)
            if not data["u_stamp_key"]:
                data["u_stamp_key"] = self.generate_stamp_key(db)

            return User.model_validate(self.user_repo.create(db, data))

    def update_user(self, db: Session, user_id: int, user_in: UserUpdate) -> User:
        """
        Edit name, email, badge, position, department or auto-checkout flag

        Only the fields sent are changed. An explicit null department
        detaches the user from their department.
        """
        with store_guard(db, "update user"):
            user = self.user_repo.get(db, user_id)
            if not user:
                raise NotFoundException("User not found")

            changes = user_in.model_dump(exclude_unset=True)
            for required in ("u_name", "u_email", "u_stamp_key", "u_auto_checkout_midnight"):
                if required in changes and changes[required] is None:
                    del changes[required]
            self._check_references(db, changes, user_id)

            return User.model_validate(self.user_repo.update(db, user, changes))

    def set_auto_checkout(self, db: Session, user_id: int, enabled: bool) -> User:
        """Toggle the midnight auto-checkout preference"""
        with store_guard(db, "update user"):
            user = self.user_repo.get(db, user_id)
            if not user:
                raise NotFoundException("User not found")

            updated = self.user_repo.update(db, user, {"u_auto_checkout_midnight": enabled})
            return User.model_validate(updated)

    def delete_user(self, db: Session, user_id: int) -> User:
        """Delete a user together with all of their punch events"""
        with store_guard(db, "delete user"):
            user = self.user_repo.get(db, user_id)
            if not user:
                raise NotFoundException("User not found")

            deleted = User.model_validate(user)
            with transaction(db):
                removed = self.event_repo.delete_user_events(db, user_id)
                db.delete(user)

            logger.info(f"Deleted user {user_id} and {removed} punch event(s)")
            return deleted
