"""
Punch Service - Write path for clock actions
"""
from typing import Optional

from sqlalchemy.orm import Session

from atams.exceptions import BadRequestException, NotFoundException
from atams.logging import get_logger
from atams.transaction import transaction

from app.core.exceptions import store_guard
from app.core.timezone import now_local, to_local
from app.models.activity_type import ActivityType
from app.models.user import User
from app.repositories.activity_type_repository import ActivityTypeRepository
from app.repositories.punch_event_repository import PunchEventRepository
from app.repositories.user_repository import UserRepository
from app.schemas.punch import (
    PunchEvent,
    PunchRequest,
    PunchResponse,
    BatchPunchRequest,
    BatchPunchResponse
)
from app.services.auto_checkout_service import AutoCheckoutService

logger = get_logger(__name__)


class PunchService:
    def __init__(self) -> None:
        self.event_repo = PunchEventRepository()
        self.user_repo = UserRepository()
        self.activity_repo = ActivityTypeRepository()
        self.auto_checkout_service = AutoCheckoutService()

    def _resolve_user(self, db: Session, user_id: Optional[int], stamp_key: Optional[str]) -> User:
        if user_id is not None:
            user = self.user_repo.get(db, user_id)
        elif stamp_key:
            user = self.user_repo.get_by_stamp_key(db, stamp_key)
        else:
            raise BadRequestException("Either user_id or stamp_key is required")

        if not user:
            raise NotFoundException("User not found")
        return user

    def _resolve_activity(
        self,
        db: Session,
        activity_type_id: Optional[int],
        activity_code: Optional[str] = None
    ) -> ActivityType:
        if activity_type_id is not None:
            activity = self.activity_repo.get(db, activity_type_id)
        elif activity_code:
            activity = self.activity_repo.get_by_code(db, activity_code)
        else:
            raise BadRequestException("Either activity_type_id or activity_code is required")

        if not activity:
            raise NotFoundException("Activity type not found")
        return activity

    def clock(self, db: Session, request: PunchRequest) -> PunchResponse:
        """
        Record a single clock action

        Args:
            db: Tenant database session
            request: Resolved user reference, activity and optional timestamp

        Returns:
            PunchResponse: Stored event plus the auto-checkout boundary event
            if one had to be inserted first

        Raises:
            BadRequestException: No user reference given
            NotFoundException: Unknown user or activity type
            StoreUnavailableException: The punch could not be recorded
        """
        occurred_at = to_local(request.occurred_at) if request.occurred_at else now_local()

        with store_guard(db, "record punch"):
            user = self._resolve_user(db, request.user_id, request.stamp_key)
            activity = self._resolve_activity(db, request.activity_type_id)

            # Boundary event and punch commit or roll back together
            with transaction(db):
                synthetic = self.auto_checkout_service.ensure_midnight_checkout(db, user, occurred_at)
                event = self.event_repo.append_event(db, {
                    "pe_user_id": user.u_id,
                    "pe_activity_type_id": activity.at_id,
                    "pe_occurred_at": occurred_at,
                    "pe_comment": request.comment
                })

            return PunchResponse(
                event=PunchEvent.model_validate(event),
                auto_checkout=PunchEvent.model_validate(synthetic) if synthetic else None,
                message=f"{user.u_name}: {activity.at_status} {occurred_at.strftime('%H:%M')}"
            )

    def clock_batch(self, db: Session, request: BatchPunchRequest) -> BatchPunchResponse:
        """
        Clock many badges to one activity at one instant

        Unknown stamp keys are skipped and reported back; everything else is
        recorded in a single transaction.

        Raises:
            BadRequestException: No activity reference given
            NotFoundException: Unknown activity type or code
            StoreUnavailableException: The batch could not be recorded
        """
        occurred_at = to_local(request.occurred_at) if request.occurred_at else now_local()

        with store_guard(db, "record batch punch"):
            activity = self._resolve_activity(db, request.activity_type_id, request.activity_code)

            events, synthetic_events, skipped = [], [], []
            with transaction(db):
                for stamp_key in request.stamp_keys:
                    user = self.user_repo.get_by_stamp_key(db, stamp_key)
                    if user is None:
                        skipped.append(stamp_key)
                        continue

                    synthetic = self.auto_checkout_service.ensure_midnight_checkout(db, user, occurred_at)
                    if synthetic is not None:
                        synthetic_events.append(synthetic)

                    events.append(self.event_repo.append_event(db, {
                        "pe_user_id": user.u_id,
                        "pe_activity_type_id": activity.at_id,
                        "pe_occurred_at": occurred_at
                    }))

            if skipped:
                logger.info(f"Batch punch skipped {len(skipped)} unknown stamp key(s)")

            return BatchPunchResponse(
                events=[PunchEvent.model_validate(e) for e in events],
                auto_checkouts=[PunchEvent.model_validate(e) for e in synthetic_events],
                skipped_stamp_keys=skipped
            )

    def delete_event(self, db: Session, event_id: int) -> PunchEvent:
        """Administrative deletion of a single punch event"""
        with store_guard(db, "delete punch"):
            event = self.event_repo.get(db, event_id)
            if not event:
                raise NotFoundException("Punch event not found")

            deleted = PunchEvent.model_validate(event)
            self.event_repo.delete(db, event_id)
            return deleted
