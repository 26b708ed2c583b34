"""
Activity Service - Administration of activity types
"""
from typing import List

from sqlalchemy.orm import Session

from atams.exceptions import ConflictException, NotFoundException
from atams.logging import get_logger

from app.core.exceptions import store_guard
from app.repositories.activity_type_repository import ActivityTypeRepository
from app.repositories.punch_event_repository import PunchEventRepository
from app.schemas.activity_type import ActivityType, ActivityTypeCreate, ActivityTypeUpdate

logger = get_logger(__name__)


class ActivityService:
    def __init__(self) -> None:
        self.activity_repo = ActivityTypeRepository()
        self.event_repo = PunchEventRepository()

    def list_activity_types(self, db: Session) -> List[ActivityType]:
        with store_guard(db, "read activity types"):
            return [ActivityType.model_validate(a) for a in self.activity_repo.get_all(db)]

    def create_activity_type(self, db: Session, activity_in: ActivityTypeCreate) -> ActivityType:
        with store_guard(db, "create activity type"):
            if self.activity_repo.get_by_status(db, activity_in.at_status):
                raise ConflictException("Activity type already exists")
            if activity_in.at_code and self.activity_repo.get_by_code(db, activity_in.at_code):
                raise ConflictException("Activity code already assigned")

            return ActivityType.model_validate(self.activity_repo.create(db, activity_in.model_dump()))

    def update_activity_type(self, db: Session, activity_type_id: int, activity_in: ActivityTypeUpdate) -> ActivityType:
        """
        Correct an activity type's label, code or work flag

        Past events are not touched: every interval using this type is
        classified by the new flag from the next report on.
        """
        with store_guard(db, "update activity type"):
            activity = self.activity_repo.get(db, activity_type_id)
            if not activity:
                raise NotFoundException("Activity type not found")

            changes = activity_in.model_dump(exclude_unset=True, exclude_none=True)
            if "at_status" in changes:
                existing = self.activity_repo.get_by_status(db, changes["at_status"])
                if existing and existing.at_id != activity_type_id:
                    raise ConflictException("Activity type already exists")
            if "at_code" in changes:
                existing = self.activity_repo.get_by_code(db, changes["at_code"])
                if existing and existing.at_id != activity_type_id:
                    raise ConflictException("Activity code already assigned")
            if "at_counts_as_work" in changes and changes["at_counts_as_work"] != activity.at_counts_as_work:
                logger.info(
                    f"Activity type {activity_type_id} work flag changed to {changes['at_counts_as_work']}; "
                    f"past intervals are reclassified"
                )

            return ActivityType.model_validate(self.activity_repo.update(db, activity, changes))

    def delete_activity_type(self, db: Session, activity_type_id: int) -> ActivityType:
        """
        Delete an activity type that no punch event references

        Raises:
            NotFoundException: Unknown activity type
            ConflictException: Events still reference the type
        """
        with store_guard(db, "delete activity type"):
            activity = self.activity_repo.get(db, activity_type_id)
            if not activity:
                raise NotFoundException("Activity type not found")

            references = self.event_repo.count_by_activity_type(db, activity_type_id)
            if references:
                raise ConflictException(
                    "Activity type is still referenced by punch events",
                    details={"references": references}
                )

            deleted = ActivityType.model_validate(activity)
            self.activity_repo.delete(db, activity_type_id)
            return deleted
