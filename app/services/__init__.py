from .interval_service import reconstruct_intervals, reconstruct_by_user
from .status_service import StatusService
from .auto_checkout_service import AutoCheckoutService
from .punch_service import PunchService
from .report_service import ReportService
from .activity_service import ActivityService
from .user_service import UserService
from .department_service import DepartmentService

__all__ = [
    "reconstruct_intervals",
    "reconstruct_by_user",
    "StatusService",
    "AutoCheckoutService",
    "PunchService",
    "ReportService",
    "ActivityService",
    "UserService",
    "DepartmentService"
]
