"""
Database session dependency.

Each tenant owns its own database; the hosting layer initialises the
engine for the tenant and every service call receives the session
explicitly.
"""
from sqlalchemy import Engine

from atams.db import Base
from atams.db import session as atams_session
from atams.db.session import get_db

import app.models  # noqa: F401  (registers the tables on Base.metadata)

__all__ = ["get_db", "create_tables"]


def create_tables(engine: Engine = None) -> None:
    """Create missing tables on the given engine (default: the initialised one)"""
    Base.metadata.create_all(bind=engine or atams_session.engine)
