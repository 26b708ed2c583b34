"""
Punch clock specific exceptions on top of atams.exceptions
"""
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from atams.exceptions import ServiceUnavailableException
from atams.logging import get_logger

logger = get_logger(__name__)


class StoreUnavailableException(ServiceUnavailableException):
    """503 - The tenant's event log could not be read or written"""

    def __init__(self, message: str = "Event log unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


@contextmanager
def store_guard(db: Session, operation: str) -> Generator[None, None, None]:
    """
    Translate database failures into StoreUnavailableException.

    The session is rolled back and the failure surfaced to the caller.
    Nothing is retried here: a retried write could duplicate a punch.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Event log failure during {operation}: {str(e)}")
        raise StoreUnavailableException(
            f"Could not {operation}",
            details={"error": e.__class__.__name__}
        ) from e
