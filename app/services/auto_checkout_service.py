"""
Auto Checkout Service - Closes a forgotten work interval at the end of its day
"""
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from atams.logging import get_logger

from app.core.config import settings
from app.core.timezone import to_local
from app.models.punch_event import PunchEvent
from app.models.user import User
from app.repositories.activity_type_repository import ActivityTypeRepository
from app.repositories.punch_event_repository import PunchEventRepository

logger = get_logger(__name__)


class AutoCheckoutService:
    def __init__(self) -> None:
        self.event_repo = PunchEventRepository()
        self.activity_repo = ActivityTypeRepository()

    def ensure_midnight_checkout(
        self,
        db: Session,
        user: User,
        occurred_at: datetime
    ) -> Optional[PunchEvent]:
        """
        Insert a boundary event before a new punch when a work interval crossed midnight

        Must run inside the caller's transaction, right before the new
        punch is appended. The boundary event is flushed, not committed.

        Args:
            db: Tenant database session
            user: User about to punch
            occurred_at: Timestamp of the new punch

        Returns:
            PunchEvent: The synthetic boundary event, or None if nothing
            had to be closed
        """
        if not user.u_auto_checkout_midnight:
            return None

        last = self.event_repo.get_latest_event(db, user.u_id)
        if last is None:
            return None

        activity = self.activity_repo.get(db, last.pe_activity_type_id)
        if activity is None or not activity.at_counts_as_work:
            return None

        last_at = to_local(last.pe_occurred_at)
        new_at = to_local(occurred_at)
        if new_at.date() <= last_at.date():
            return None

        boundary_type = self.activity_repo.get_auto_checkout_type(db, settings.AUTO_CHECKOUT_ACTIVITY)
        if boundary_type is None:
            logger.warning(
                f"No non-work activity type configured; auto checkout skipped for user {user.u_id}"
            )
            return None

        # Never sort before the event it closes
        boundary = max(datetime.combine(last_at.date(), settings.AUTO_CHECKOUT_BOUNDARY), last_at)

        event = self.event_repo.append_event(db, {
            "pe_user_id": user.u_id,
            "pe_activity_type_id": boundary_type.at_id,
            "pe_occurred_at": boundary,
            "pe_comment": settings.AUTO_CHECKOUT_COMMENT
        })

        logger.info(
            f"Auto checkout for user {user.u_id} at {boundary} "
            f"({boundary_type.at_status}) before punch at {new_at}"
        )
        return event
