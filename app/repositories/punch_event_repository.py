"""
Punch Event Repository - Data access layer for the event log
"""
from typing import Dict, Iterable, List, Optional
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import and_, func

from atams.db import BaseRepository
from app.models.punch_event import PunchEvent


class PunchEventRepository(BaseRepository[PunchEvent]):
    def __init__(self):
        super().__init__(PunchEvent)

    # Per-user total order; the interval reconstruction sorts by the same key
    ORDERING = (PunchEvent.pe_occurred_at.asc(), PunchEvent.pe_id.asc())
    REVERSE_ORDERING = (PunchEvent.pe_occurred_at.desc(), PunchEvent.pe_id.desc())

    def get_events_in_window(
        self,
        db: Session,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        user_ids: Optional[Iterable[int]] = None
    ) -> List[PunchEvent]:
        """Get events in the half-open window [start, end), ordered by user then punch order"""
        query = db.query(PunchEvent)

        if user_ids is not None:
            query = query.filter(PunchEvent.pe_user_id.in_(list(user_ids)))
        if start is not None:
            query = query.filter(PunchEvent.pe_occurred_at >= start)
        if end is not None:
            query = query.filter(PunchEvent.pe_occurred_at < end)

        return query.order_by(PunchEvent.pe_user_id.asc(), *self.ORDERING).all()

    def get_successor_events(
        self,
        db: Session,
        after: datetime,
        user_ids: Optional[Iterable[int]] = None
    ) -> List[PunchEvent]:
        """
        Get, per user, the first event at or after `after`.

        These close the last interval of a window whose successor lies
        beyond the window's end.
        """
        first_after = db.query(
            PunchEvent.pe_user_id.label("user_id"),
            func.min(PunchEvent.pe_occurred_at).label("occurred_at")
        ).filter(PunchEvent.pe_occurred_at >= after)

        if user_ids is not None:
            first_after = first_after.filter(PunchEvent.pe_user_id.in_(list(user_ids)))

        first_after = first_after.group_by(PunchEvent.pe_user_id).subquery()

        candidates = db.query(PunchEvent).join(
            first_after,
            and_(
                PunchEvent.pe_user_id == first_after.c.user_id,
                PunchEvent.pe_occurred_at == first_after.c.occurred_at
            )
        ).order_by(PunchEvent.pe_user_id.asc(), *self.ORDERING).all()

        # Identical timestamps: lowest id wins
        successors: Dict[int, PunchEvent] = {}
        for event in candidates:
            successors.setdefault(event.pe_user_id, event)
        return list(successors.values())

    def get_latest_event(self, db: Session, user_id: int) -> Optional[PunchEvent]:
        """Get the user's most recent event using ORM"""
        return db.query(PunchEvent).filter(
            PunchEvent.pe_user_id == user_id
        ).order_by(*self.REVERSE_ORDERING).first()

    def get_latest_events(self, db: Session) -> Dict[int, PunchEvent]:
        """Get the most recent event of every user, keyed by user id"""
        ranked = db.query(
            PunchEvent.pe_id.label("pe_id"),
            func.row_number().over(
                partition_by=PunchEvent.pe_user_id,
                order_by=list(self.REVERSE_ORDERING)
            ).label("rn")
        ).subquery()

        events = db.query(PunchEvent).join(
            ranked, ranked.c.pe_id == PunchEvent.pe_id
        ).filter(ranked.c.rn == 1).all()

        return {event.pe_user_id: event for event in events}

    def append_event(self, db: Session, event_data: dict) -> PunchEvent:
        """
        Append an event without committing.

        The caller owns the transaction so a synthetic auto-checkout event
        and the real punch are committed or rolled back together.
        """
        db_event = PunchEvent(**event_data)
        db.add(db_event)
        db.flush()
        return db_event

    def count_by_activity_type(self, db: Session, activity_type_id: int) -> int:
        """Count events referencing an activity type using native SQL"""
        query = """
            SELECT COUNT(*)
            FROM punch_events
            WHERE pe_activity_type_id = :activity_type_id
        """
        return self.execute_raw_sql_scalar(db, query, {"activity_type_id": activity_type_id})

    def delete_user_events(self, db: Session, user_id: int) -> int:
        """Delete every event of a user without committing"""
        return db.query(PunchEvent).filter(
            PunchEvent.pe_user_id == user_id
        ).delete(synchronize_session=False)
