import os

# Settings() is built at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ATLAS_APP_CODE", "PUNCHCLOCK")
os.environ.setdefault("TIMEZONE", "Europe/Berlin")
os.environ.setdefault("LOGGING_ENABLED", "false")

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from atams.db import Base

from app.models import ActivityType, Department, PunchEvent, User
from app.repositories.punch_event_repository import PunchEventRepository


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def departments(db):
    rows = {name: Department(d_name=name) for name in ("Sales", "Marketing", "Engineering")}
    db.add_all(rows.values())
    db.commit()
    return rows


@pytest.fixture
def activities(db):
    rows = {
        "work": ActivityType(at_status="work", at_counts_as_work=True, at_code="W", at_comment="clock in"),
        "end of work": ActivityType(at_status="end of work", at_counts_as_work=False, at_code="E", at_comment="clock out"),
        "Break": ActivityType(at_status="Break", at_counts_as_work=False, at_code="B", at_comment="clock out"),
        "clean up": ActivityType(at_status="clean up", at_counts_as_work=True, at_comment="additional activities"),
    }
    # Insert one by one so ids follow the listed order
    for activity in rows.values():
        db.add(activity)
        db.flush()
    db.commit()
    return rows


@pytest.fixture
def users(db, departments):
    rows = {
        "john": User(u_name="John Doe", u_email="jd@example.tld", u_stamp_key="100000000001",
                     u_department_id=departments["Sales"].d_id),
        "jane": User(u_name="Jane Smith", u_email="js@example.tld", u_stamp_key="100000000002",
                     u_department_id=departments["Marketing"].d_id),
        "alice": User(u_name="Alice Johnson", u_email="aj@example.tld", u_stamp_key="100000000003",
                      u_department_id=departments["Engineering"].d_id),
    }
    for user in rows.values():
        db.add(user)
        db.flush()
    db.commit()
    return rows


@pytest.fixture
def punch(db):
    """Append an event straight to the log, bypassing auto-checkout"""
    repo = PunchEventRepository()

    def _punch(user: User, activity: ActivityType, occurred_at: str, comment: str = None) -> PunchEvent:
        event = repo.append_event(db, {
            "pe_user_id": user.u_id,
            "pe_activity_type_id": activity.at_id,
            "pe_occurred_at": datetime.fromisoformat(occurred_at),
            "pe_comment": comment
        })
        db.commit()
        return event

    return _punch


@pytest.fixture
def example_log(users, activities, punch):
    """Two working days for three users"""
    work, end, brk = activities["work"], activities["end of work"], activities["Break"]
    john, jane, alice = users["john"], users["jane"], users["alice"]

    punch(john, work, "2022-04-11 09:00:00")
    punch(john, end, "2022-04-11 17:00:00")
    punch(john, work, "2022-04-12 09:00:00")
    punch(john, brk, "2022-04-12 12:00:00")
    punch(john, work, "2022-04-12 13:00:00")
    punch(john, end, "2022-04-12 17:00:00")

    punch(jane, work, "2022-04-11 10:00:00")
    punch(jane, end, "2022-04-11 18:00:00")
    punch(jane, work, "2022-04-12 10:00:00")
    punch(jane, end, "2022-04-12 18:00:00")

    punch(alice, work, "2022-04-11 09:30:00")
    punch(alice, end, "2022-04-11 17:30:00")
    punch(alice, work, "2022-04-12 09:30:00")
    punch(alice, end, "2022-04-12 17:30:00")
