"""
Status Service - Current status of users, derived from their last interval
"""
from datetime import datetime, timedelta
from typing import List, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from app.core.exceptions import store_guard
from app.core.timezone import now_local, to_local
from app.models.activity_type import ActivityType
from app.models.punch_event import PunchEvent
from app.models.user import User
from app.repositories.activity_type_repository import ActivityTypeRepository
from app.repositories.punch_event_repository import PunchEventRepository
from app.repositories.user_repository import UserRepository
from app.schemas.report import CurrentStatus, Interval
from app.services.interval_service import last_interval, reconstruct_intervals

UNKNOWN_STATUS = "unknown"
# Events exist but their activity type is gone
DELETED_ACTIVITY_STATUS = "deleted activity"


def status_label(interval: Optional[Interval]) -> str:
    if interval is None:
        return UNKNOWN_STATUS
    return interval.activity if interval.activity is not None else DELETED_ACTIVITY_STATUS


def status_from_intervals(
    user_id: int,
    intervals: Sequence[Interval],
    as_of: datetime,
    user_name: Optional[str] = None
) -> CurrentStatus:
    """Current status is the last reconstructed interval, open or not"""
    last = last_interval(intervals)
    if last is None:
        return CurrentStatus(user_id=user_id, user_name=user_name, status=UNKNOWN_STATUS)

    since = to_local(as_of) - last.start
    return CurrentStatus(
        user_id=user_id,
        user_name=user_name,
        status=status_label(last),
        activity_type_id=last.activity_type_id,
        counts_as_work=last.counts_as_work,
        last_punch_at=last.start,
        since=max(since, timedelta(0))
    )


class StatusService:
    def __init__(self) -> None:
        self.event_repo = PunchEventRepository()
        self.user_repo = UserRepository()
        self.activity_repo = ActivityTypeRepository()

    def _resolve(
        self,
        user_id: int,
        latest: Optional[PunchEvent],
        as_of: datetime,
        activity_types: Mapping[int, ActivityType],
        user_name: Optional[str] = None
    ) -> CurrentStatus:
        # The last interval of a full reconstruction starts at the latest
        # event and ends at as_of, so the latest event alone reproduces it
        intervals = reconstruct_intervals([latest] if latest else [], as_of, activity_types)
        return status_from_intervals(user_id, intervals, as_of, user_name)

    def get_current_status(self, db: Session, user_id: int, as_of: datetime = None) -> CurrentStatus:
        """
        Get a user's current status

        Args:
            db: Tenant database session
            user_id: User ID
            as_of: Reference instant (default: now, local time)

        Returns:
            CurrentStatus: Activity of the most recent punch and the time
            elapsed since, or status "unknown" when the user never punched
        """
        as_of = to_local(as_of) if as_of else now_local()

        with store_guard(db, "read current status"):
            user = self.user_repo.get(db, user_id)
            latest = self.event_repo.get_latest_event(db, user_id)
            activity_types = self.activity_repo.get_type_map(db)

        return self._resolve(user_id, latest, as_of, activity_types, user.u_name if user else None)

    def get_all_current_status(self, db: Session, as_of: datetime = None) -> List[CurrentStatus]:
        """Get the current status of every user (live dashboard)"""
        as_of = to_local(as_of) if as_of else now_local()

        with store_guard(db, "read current status"):
            users: List[User] = self.user_repo.get_all(db)
            latest_events = self.event_repo.get_latest_events(db)
            activity_types = self.activity_repo.get_type_map(db)

        return [
            self._resolve(user.u_id, latest_events.get(user.u_id), as_of, activity_types, user.u_name)
            for user in users
        ]
