"""
Activity Type Repository - Data access layer for activity types
"""
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import case, false

from atams.db import BaseRepository
from app.models.activity_type import ActivityType


class ActivityTypeRepository(BaseRepository[ActivityType]):
    def __init__(self):
        super().__init__(ActivityType)

    def get_all(self, db: Session) -> List[ActivityType]:
        """Get all activity types ordered by id using ORM"""
        return db.query(ActivityType).order_by(ActivityType.at_id.asc()).all()

    def get_type_map(self, db: Session) -> Dict[int, ActivityType]:
        """
        Get all activity types keyed by id.

        Read on every call: an administrator may flip a work flag at any
        time and the next aggregation must reflect it.
        """
        return {activity.at_id: activity for activity in self.get_all(db)}

    def get_by_code(self, db: Session, code: str) -> Optional[ActivityType]:
        """Get activity type by its scan code using ORM"""
        return db.query(ActivityType).filter(ActivityType.at_code == code).first()

    def get_by_status(self, db: Session, status: str) -> Optional[ActivityType]:
        """Get activity type by its name using ORM"""
        return db.query(ActivityType).filter(ActivityType.at_status == status).first()

    def get_auto_checkout_type(self, db: Session, preferred_status: str) -> Optional[ActivityType]:
        """Get the non-work type used to close a day: the preferred name first, else lowest id"""
        preference = case((ActivityType.at_status == preferred_status, 0), else_=1)
        return db.query(ActivityType).filter(
            ActivityType.at_counts_as_work == false()
        ).order_by(preference, ActivityType.at_id.asc()).first()
