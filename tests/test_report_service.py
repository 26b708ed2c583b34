from datetime import date, datetime

import pytest
from sqlalchemy.exc import OperationalError

from atams.exceptions import BadRequestException

from app.core.exceptions import StoreUnavailableException
from app.models import Department, User
from app.schemas.activity_type import ActivityTypeUpdate
from app.services.activity_service import ActivityService
from app.services.report_service import NO_DEPARTMENT, ReportService, round_hours

AS_OF = datetime(2022, 4, 13, 8, 0)
DAY_1 = date(2022, 4, 11)
DAY_2 = date(2022, 4, 12)


@pytest.fixture
def service():
    return ReportService()


def test_single_day_work_hours(db, service, users, activities, punch):
    john = users["john"]
    punch(john, activities["work"], "2022-04-11 09:00:00")
    punch(john, activities["end of work"], "2022-04-11 17:00:00")

    rows = service.get_daily_work_hours(db, DAY_1, DAY_1, as_of=datetime(2022, 4, 11, 20, 0))

    assert [(r.user_name, r.work_date, r.work_hours) for r in rows] == [
        ("Alice Johnson", DAY_1, 0.0),
        ("Jane Smith", DAY_1, 0.0),
        ("John Doe", DAY_1, 8.0),
    ]


def test_daily_work_hours_over_example_log(db, service, example_log):
    rows = service.get_daily_work_hours(db, as_of=AS_OF)

    assert [(r.work_date, r.user_name, r.work_hours) for r in rows] == [
        (DAY_1, "Alice Johnson", 8.0),
        (DAY_1, "Jane Smith", 8.0),
        (DAY_1, "John Doe", 8.0),
        (DAY_2, "Alice Johnson", 8.0),
        (DAY_2, "Jane Smith", 8.0),
        (DAY_2, "John Doe", 7.0),
    ]


def test_window_end_closes_interval_with_next_event(db, service, users, activities, punch):
    john = users["john"]
    punch(john, activities["work"], "2022-04-11 22:00:00")
    punch(john, activities["end of work"], "2022-04-12 02:00:00")

    rows = service.get_daily_work_hours(db, DAY_1, DAY_1, john.u_id, as_of=AS_OF)

    assert [(r.work_date, r.work_hours) for r in rows] == [(DAY_1, 4.0)]


def test_user_without_events_reports_zero(db, service, users, activities):
    john = users["john"]
    rows = service.get_daily_work_hours(db, DAY_1, date(2022, 4, 13), john.u_id, as_of=datetime(2022, 4, 14, 8, 0))

    assert [(r.user_id, r.work_date, r.work_hours) for r in rows] == [
        (john.u_id, DAY_1, 0.0),
        (john.u_id, DAY_2, 0.0),
        (john.u_id, date(2022, 4, 13), 0.0),
    ]

    trend = service.get_trends(db, 3, as_of=AS_OF)
    assert len(trend) == 4
    assert all(p.total_hours == 0 and p.active_users == 0 for p in trend)


def test_department_summary_all_time(db, service, example_log):
    summary = service.get_department_summary(db, as_of=AS_OF)

    assert [(s.department_name, s.total_users, s.total_hours, s.avg_hours_per_user) for s in summary] == [
        ("Engineering", 1, 16.0, 16.0),
        ("Marketing", 1, 16.0, 16.0),
        ("Sales", 1, 15.0, 15.0),
    ]


def test_department_summary_for_one_day(db, service, example_log):
    summary = {s.department_name: s.total_hours for s in service.get_department_summary(db, DAY_2, as_of=AS_OF)}

    assert summary == {"Engineering": 8.0, "Marketing": 8.0, "Sales": 7.0}


def test_department_summary_lists_empty_and_missing_departments(db, service, example_log):
    db.add(Department(d_name="Legal"))
    db.add(User(u_name="Freelancer", u_email="fl@example.tld", u_stamp_key="100000000009"))
    db.commit()

    summary = {s.department_name: s for s in service.get_department_summary(db, as_of=AS_OF)}

    assert summary["Legal"].total_users == 0
    assert summary["Legal"].avg_hours_per_user == 0.0
    assert summary[NO_DEPARTMENT].total_users == 1
    assert summary[NO_DEPARTMENT].total_hours == 0.0


def test_trends_newest_first(db, service, example_log):
    trend = service.get_trends(db, 2, as_of=AS_OF)

    assert [(p.work_date, p.total_hours, p.active_users, p.work_events, p.non_work_events) for p in trend] == [
        (date(2022, 4, 13), 0.0, 0, 0, 0),
        (DAY_2, 23.0, 3, 4, 4),
        (DAY_1, 24.0, 3, 3, 3),
    ]


def test_trends_of_today_only(db, service, example_log):
    trend = service.get_trends(db, 0, as_of=datetime(2022, 4, 12, 20, 0))

    assert len(trend) == 1
    assert trend[0].work_date == DAY_2


@pytest.mark.parametrize("days", [-1, 367])
def test_trends_reject_out_of_range_days(db, service, days):
    with pytest.raises(BadRequestException):
        service.get_trends(db, days, as_of=AS_OF)


def test_reports_agree_on_daily_totals(db, service, example_log):
    daily = service.get_daily_work_hours(db, DAY_1, DAY_2, as_of=AS_OF)
    trend = {p.work_date: p.total_hours for p in service.get_trends(db, 2, as_of=AS_OF)}

    for day in (DAY_1, DAY_2):
        total = sum(r.work_hours for r in daily if r.work_date == day)
        departments = service.get_department_summary(db, day, as_of=AS_OF)

        assert sum(s.total_hours for s in departments) == pytest.approx(total)
        assert trend[day] == pytest.approx(total)


def test_reclassified_activity_changes_totals_immediately(db, service, example_log, activities):
    before = {s.department_name: s.total_hours for s in service.get_department_summary(db, DAY_1, as_of=AS_OF)}
    assert before["Sales"] == 8.0

    ActivityService().update_activity_type(
        db, activities["work"].at_id, ActivityTypeUpdate(at_counts_as_work=False)
    )

    after = {s.department_name: s.total_hours for s in service.get_department_summary(db, DAY_1, as_of=AS_OF)}
    assert after == {"Engineering": 0.0, "Marketing": 0.0, "Sales": 0.0}


def test_intervals_filtered_by_activity_and_department(db, service, example_log, activities, users):
    breaks = service.get_intervals(db, activity_type_id=activities["Break"].at_id, as_of=AS_OF)

    assert len(breaks) == 1
    assert breaks[0].user_id == users["john"].u_id
    assert breaks[0].duration_hours == pytest.approx(1.0)

    sales = service.get_intervals(db, department="Sales", as_of=AS_OF)
    assert len(sales) == 6
    assert {i.user_id for i in sales} == {users["john"].u_id}
    assert sales[-1].is_open

    assert service.get_intervals(db, department="Nowhere", as_of=AS_OF) == []


def test_intervals_of_one_day_are_ordered(db, service, example_log):
    intervals = service.get_intervals(db, date_from=DAY_1, date_to=DAY_1, as_of=AS_OF)

    assert all(i.start.date() == DAY_1 for i in intervals)
    assert intervals == sorted(intervals, key=lambda i: (i.start, i.user_id, i.event_id))
    assert len(intervals) == 6


def test_user_activity_summary(db, service, example_log):
    summary = service.get_user_activity_summary(db, as_of=AS_OF)

    assert [s.user_name for s in summary] == ["Alice Johnson", "Jane Smith", "John Doe"]
    john = summary[-1]
    assert john.department == "Sales"
    assert john.total_work_hours == 15.0
    assert john.total_non_work_hours == 32.0
    assert john.status == "end of work"
    assert john.last_activity == datetime(2022, 4, 12, 17, 0)

    marketing = service.get_user_activity_summary(db, department="Marketing", as_of=AS_OF)
    assert [s.user_name for s in marketing] == ["Jane Smith"]
    assert marketing[0].total_non_work_hours == 30.0


def test_department_users_on_day(db, service, example_log):
    rows = service.get_department_users_on_day(db, "Sales", DAY_2, as_of=AS_OF)

    assert len(rows) == 1
    assert rows[0].work_hours == 7.0
    assert rows[0].non_work_hours == 16.0
    assert rows[0].status == "end of work"
    assert rows[0].last_activity == datetime(2022, 4, 12, 17, 0)

    assert service.get_department_users_on_day(db, "Nowhere", DAY_2, as_of=AS_OF) == []


def test_store_failure_is_reported_as_unavailable(db, service, example_log, monkeypatch):
    def broken_read(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(service.event_repo, "get_events_in_window", broken_read)

    with pytest.raises(StoreUnavailableException):
        service.get_daily_work_hours(db, as_of=AS_OF)


def test_round_hours_only_at_output():
    assert round_hours(14 + 59 / 60 + 59 / 3600) == 15.0
    assert round_hours(7.999) == 8.0
    assert round_hours(1 / 3) == 0.33


def test_open_ended_range_runs_to_as_of_day(db, service, users, activities, punch):
    punch(users["jane"], activities["work"], "2022-04-12 10:00:00")
    punch(users["jane"], activities["end of work"], "2022-04-12 12:00:00")

    rows = service.get_daily_work_hours(db, date_from=DAY_1, as_of=AS_OF)

    assert {r.work_date for r in rows} == {DAY_1, DAY_2, date(2022, 4, 13)}
    assert len(rows) == 9
    assert sum(r.work_hours for r in rows) == 2.0


def test_unknown_user_gets_no_zero_rows(db, service, users, activities):
    assert service.get_daily_work_hours(db, DAY_1, DAY_2, 9999, as_of=AS_OF) == []
