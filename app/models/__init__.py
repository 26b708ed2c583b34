from .department import Department
from .user import User
from .activity_type import ActivityType
from .punch_event import PunchEvent

__all__ = [
    "Department",
    "User",
    "ActivityType",
    "PunchEvent"
]
