"""
Report Service - Work hour aggregation over reconstructed intervals

Every report is built from the same reconstructed intervals and the same
per-day totals, so detail, daily, department and trend views never
disagree on a duration.
"""
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from atams.exceptions import BadRequestException

from app.core.config import settings
from app.core.exceptions import store_guard
from app.core.timezone import day_window, now_local, to_local
from app.models.user import User
from app.repositories.activity_type_repository import ActivityTypeRepository
from app.repositories.department_repository import DepartmentRepository
from app.repositories.punch_event_repository import PunchEventRepository
from app.repositories.user_repository import UserRepository
from app.schemas.report import (
    DailyWorkHours,
    DepartmentSummary,
    Interval,
    TrendPoint,
    UserActivitySummary,
    UserDailyActivity
)
from app.services.interval_service import reconstruct_by_user
from app.services.status_service import status_from_intervals, status_label

NO_DEPARTMENT = "No Department"


def round_hours(value: float) -> float:
    return round(value, settings.HOURS_PRECISION)


def daily_work_hours(intervals: Iterable[Interval]) -> Dict[Tuple[int, date], float]:
    """
    Sum work durations per (user, calendar date of interval start)

    Every (user, date) with at least one interval gets an entry, even when
    none of its intervals counts as work.
    """
    totals: Dict[Tuple[int, date], float] = defaultdict(float)
    for interval in intervals:
        totals[(interval.user_id, interval.start.date())] += (
            interval.duration_hours if interval.counts_as_work else 0.0
        )
    return totals


def _department_name(user: User) -> str:
    return user.department.d_name if user.department else NO_DEPARTMENT


class ReportService:
    def __init__(self) -> None:
        self.event_repo = PunchEventRepository()
        self.user_repo = UserRepository()
        self.activity_repo = ActivityTypeRepository()
        self.department_repo = DepartmentRepository()

    def _collect_intervals(
        self,
        db: Session,
        as_of: datetime,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        user_ids: Optional[List[int]] = None
    ) -> List[Interval]:
        """
        Reconstruct the intervals starting on [date_from, date_to]

        Events inside the window are loaded together with each user's first
        event after the window, which closes the window's last interval.
        """
        start, end = day_window(date_from, date_to)

        events = self.event_repo.get_events_in_window(db, start, end, user_ids)
        if end is not None:
            events.extend(self.event_repo.get_successor_events(db, end, user_ids))

        activity_types = self.activity_repo.get_type_map(db)

        intervals = []
        for user_intervals in reconstruct_by_user(events, as_of, activity_types).values():
            intervals.extend(
                interval for interval in user_intervals
                if (start is None or interval.start >= start) and (end is None or interval.start < end)
            )
        return intervals

    def get_intervals(
        self,
        db: Session,
        user_id: int = None,
        date_from: date = None,
        date_to: date = None,
        activity_type_id: int = None,
        department: str = None,
        as_of: datetime = None
    ) -> List[Interval]:
        """
        Get reconstructed intervals (detail / calendar views)

        Args:
            db: Tenant database session
            user_id: Restrict to one user
            date_from: First calendar day (inclusive)
            date_to: Last calendar day (inclusive)
            activity_type_id: Keep only intervals of this activity
            department: Restrict to users of this department name
            as_of: Instant closing open intervals (default: now)

        Returns:
            List[Interval]: Ordered by start, then user, then event id.
            Unknown users or departments yield an empty list.
        """
        as_of = to_local(as_of) if as_of else now_local()

        with store_guard(db, "read intervals"):
            user_ids = [user_id] if user_id is not None else None
            if department is not None:
                members = self._department_members(db, department)
                user_ids = [u.u_id for u in members if user_ids is None or u.u_id in user_ids]
            if user_ids == []:
                return []

            intervals = self._collect_intervals(db, as_of, date_from, date_to, user_ids)

        # Filter after reconstruction: other activities still bound these intervals
        if activity_type_id is not None:
            intervals = [i for i in intervals if i.activity_type_id == activity_type_id]

        return sorted(intervals, key=lambda i: (i.start, i.user_id, i.event_id))

    def get_daily_work_hours(
        self,
        db: Session,
        date_from: date = None,
        date_to: date = None,
        user_id: int = None,
        as_of: datetime = None
    ) -> List[DailyWorkHours]:
        """
        Get work hours per user and calendar day

        With a date_from, every selected user gets a row for every day up
        to date_to (default: the day of as_of), zero when nothing was
        recorded. Without one, only days that have intervals are listed.
        """
        as_of = to_local(as_of) if as_of else now_local()

        with store_guard(db, "read work hours"):
            users = {u.u_id: u for u in self.user_repo.get_all(db)}
            intervals = self._collect_intervals(
                db, as_of, date_from, date_to, [user_id] if user_id is not None else None
            )

        totals = daily_work_hours(intervals)
        if date_from is not None:
            last_day = date_to if date_to is not None else as_of.date()
            selected = list(users) if user_id is None else [uid for uid in users if uid == user_id]
            for offset in range((last_day - date_from).days + 1):
                for uid in selected:
                    totals.setdefault((uid, date_from + timedelta(days=offset)), 0.0)

        rows = [
            DailyWorkHours(
                user_id=uid,
                user_name=users[uid].u_name if uid in users else str(uid),
                work_date=work_date,
                work_hours=round_hours(hours)
            )
            for (uid, work_date), hours in totals.items()
        ]
        return sorted(rows, key=lambda r: (r.work_date, r.user_name, r.user_id))

    def get_department_summary(self, db: Session, day: date = None, as_of: datetime = None) -> List[DepartmentSummary]:
        """
        Get total users, total and average work hours per department

        Args:
            db: Tenant database session
            day: Restrict hours to intervals starting on this day (default: all time)
            as_of: Instant closing open intervals (default: now)
        """
        as_of = to_local(as_of) if as_of else now_local()

        with store_guard(db, "read department summary"):
            departments = self.department_repo.get_all(db)
            users = self.user_repo.get_all(db)
            intervals = self._collect_intervals(db, as_of, day, day)

        hours_per_user: Dict[int, float] = defaultdict(float)
        for (uid, _), hours in daily_work_hours(intervals).items():
            hours_per_user[uid] += hours

        members: Dict[str, List[User]] = {d.d_name: [] for d in departments}
        for user in users:
            members.setdefault(_department_name(user), []).append(user)

        summaries = []
        for name, dept_users in members.items():
            total = sum(hours_per_user.get(u.u_id, 0.0) for u in dept_users)
            summaries.append(DepartmentSummary(
                department_name=name,
                total_users=len(dept_users),
                total_hours=round_hours(total),
                avg_hours_per_user=round_hours(total / len(dept_users)) if dept_users else 0.0
            ))

        return sorted(summaries, key=lambda s: (-s.total_hours, s.department_name))

    def get_trends(self, db: Session, days: int, as_of: datetime = None) -> List[TrendPoint]:
        """
        Get one row per calendar day in [today - days, today], newest first

        Days without events are present with zero values.

        Raises:
            BadRequestException: days outside 0..TREND_MAX_DAYS
        """
        if days < 0 or days > settings.TREND_MAX_DAYS:
            raise BadRequestException(f"days must be between 0 and {settings.TREND_MAX_DAYS}")

        as_of = to_local(as_of) if as_of else now_local()
        today = as_of.date()
        first_day = today - timedelta(days=days)

        with store_guard(db, "read trends"):
            intervals = self._collect_intervals(db, as_of, first_day, today)

        hours_per_day: Dict[date, float] = defaultdict(float)
        for (_, work_date), hours in daily_work_hours(intervals).items():
            hours_per_day[work_date] += hours

        # One interval per event, so interval counts are event counts
        active_users: Dict[date, set] = defaultdict(set)
        work_events: Dict[date, int] = defaultdict(int)
        non_work_events: Dict[date, int] = defaultdict(int)
        for interval in intervals:
            day = interval.start.date()
            active_users[day].add(interval.user_id)
            if interval.counts_as_work:
                work_events[day] += 1
            else:
                non_work_events[day] += 1

        return [
            TrendPoint(
                work_date=day,
                total_hours=round_hours(hours_per_day.get(day, 0.0)),
                active_users=len(active_users.get(day, ())),
                work_events=work_events.get(day, 0),
                non_work_events=non_work_events.get(day, 0)
            )
            for day in (today - timedelta(days=offset) for offset in range(days + 1))
        ]

    def get_user_activity_summary(
        self,
        db: Session,
        department: str = None,
        as_of: datetime = None
    ) -> List[UserActivitySummary]:
        """Get all-time work and non-work hours, last activity and status per user"""
        as_of = to_local(as_of) if as_of else now_local()

        with store_guard(db, "read user activity summary"):
            users = self.user_repo.get_all(db)
            intervals = self._collect_intervals(db, as_of)

        per_user: Dict[int, List[Interval]] = defaultdict(list)
        for interval in sorted(intervals, key=lambda i: (i.start, i.event_id)):
            per_user[interval.user_id].append(interval)

        summaries = []
        for user in users:
            if department is not None and _department_name(user) != department:
                continue
            user_intervals = per_user.get(user.u_id, [])
            status = status_from_intervals(user.u_id, user_intervals, as_of, user.u_name)
            summaries.append(UserActivitySummary(
                user_id=user.u_id,
                user_name=user.u_name,
                department=_department_name(user),
                total_work_hours=round_hours(sum(i.duration_hours for i in user_intervals if i.counts_as_work)),
                total_non_work_hours=round_hours(sum(i.duration_hours for i in user_intervals if not i.counts_as_work)),
                last_activity=status.last_punch_at,
                status=status.status
            ))

        return sorted(summaries, key=lambda s: (-s.total_work_hours, s.user_name))

    def get_department_users_on_day(
        self,
        db: Session,
        department: str,
        day: date,
        as_of: datetime = None
    ) -> List[UserDailyActivity]:
        """Get work and non-work hours of one department's users on one day (drill-down)"""
        as_of = to_local(as_of) if as_of else now_local()

        with store_guard(db, "read department day"):
            members = self._department_members(db, department)
            if not members:
                return []
            intervals = self._collect_intervals(db, as_of, day, day, [u.u_id for u in members])

        per_user: Dict[int, List[Interval]] = defaultdict(list)
        for interval in sorted(intervals, key=lambda i: (i.start, i.event_id)):
            per_user[interval.user_id].append(interval)

        rows = []
        for user in members:
            user_intervals = per_user.get(user.u_id, [])
            last = user_intervals[-1] if user_intervals else None
            rows.append(UserDailyActivity(
                user_id=user.u_id,
                user_name=user.u_name,
                department=_department_name(user),
                work_hours=round_hours(sum(i.duration_hours for i in user_intervals if i.counts_as_work)),
                non_work_hours=round_hours(sum(i.duration_hours for i in user_intervals if not i.counts_as_work)),
                last_activity=last.start if last else None,
                status=status_label(last)
            ))

        return sorted(rows, key=lambda r: (-r.work_hours, r.user_name))

    def _department_members(self, db: Session, department: str) -> List[User]:
        if department == NO_DEPARTMENT:
            return [u for u in self.user_repo.get_all(db) if _department_name(u) == NO_DEPARTMENT]

        dept = self.department_repo.get_by_name(db, department)
        if not dept:
            return []
        return self.user_repo.get_by_department(db, dept.d_id)
