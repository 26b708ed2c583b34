from .department_repository import DepartmentRepository
from .user_repository import UserRepository
from .activity_type_repository import ActivityTypeRepository
from .punch_event_repository import PunchEventRepository

__all__ = [
    "DepartmentRepository",
    "UserRepository",
    "ActivityTypeRepository",
    "PunchEventRepository"
]
