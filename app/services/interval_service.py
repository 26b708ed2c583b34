"""
Interval reconstruction - turns a user's punch events into intervals

Pure functions: nothing here touches the event log, so any range (a day,
a custom window, all time) can be reconstructed from whatever events the
caller loaded.
"""
from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from atams.logging import get_logger

from app.core.timezone import hours_between, to_local
from app.models.activity_type import ActivityType
from app.models.punch_event import PunchEvent
from app.schemas.report import Interval

logger = get_logger(__name__)


def event_order_key(event: PunchEvent) -> Tuple[datetime, int]:
    """Total order of one user's events: timestamp, then insertion order"""
    return to_local(event.pe_occurred_at), event.pe_id


def _readable_events(events: Iterable[PunchEvent]) -> List[PunchEvent]:
    """Drop events whose timestamp cannot be parsed; reports must survive dirty history"""
    readable = []
    for event in events:
        try:
            to_local(event.pe_occurred_at)
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping punch event {event.pe_id} with unreadable timestamp: {str(e)}")
            continue
        readable.append(event)
    return readable


def reconstruct_intervals(
    events: Sequence[PunchEvent],
    as_of: datetime,
    activity_types: Mapping[int, ActivityType]
) -> List[Interval]:
    """
    Map one user's events to the intervals covering [first event, as_of]

    Args:
        events: Punch events of a single user, in any order
        as_of: Instant that closes the last (open) interval
        activity_types: Live activity type lookup by id

    Returns:
        List[Interval]: One interval per event, in punch order. Empty when
        there are no events.
    """
    ordered = sorted(_readable_events(events), key=event_order_key)
    if not ordered:
        return []

    if len({event.pe_user_id for event in ordered}) > 1:
        raise ValueError("reconstruct_intervals expects the events of a single user")

    as_of = to_local(as_of)
    intervals = []

    for position, event in enumerate(ordered):
        start = to_local(event.pe_occurred_at)
        is_open = position + 1 == len(ordered)
        end = as_of if is_open else to_local(ordered[position + 1].pe_occurred_at)

        duration = hours_between(start, end)
        if duration < 0:
            # Clock moved backwards: keep the interval, clamp its length
            logger.warning(
                f"Clamped negative interval for user {event.pe_user_id} "
                f"(event {event.pe_id}: {start} -> {end})"
            )
            duration = 0.0

        # Orphaned references (type removed outside the app) never count as work
        activity = activity_types.get(event.pe_activity_type_id)

        intervals.append(Interval(
            event_id=event.pe_id,
            user_id=event.pe_user_id,
            activity_type_id=event.pe_activity_type_id,
            activity=activity.at_status if activity else None,
            counts_as_work=bool(activity.at_counts_as_work) if activity else False,
            start=start,
            end=end,
            is_open=is_open,
            duration_hours=duration,
            comment=event.pe_comment
        ))

    return intervals


def reconstruct_by_user(
    events: Iterable[PunchEvent],
    as_of: datetime,
    activity_types: Mapping[int, ActivityType]
) -> Dict[int, List[Interval]]:
    """Group events per user and reconstruct each user's intervals independently"""
    per_user: Dict[int, List[PunchEvent]] = defaultdict(list)
    for event in events:
        per_user[event.pe_user_id].append(event)

    return {
        user_id: reconstruct_intervals(user_events, as_of, activity_types)
        for user_id, user_events in per_user.items()
    }


def last_interval(intervals: Sequence[Interval]) -> Optional[Interval]:
    return intervals[-1] if intervals else None
