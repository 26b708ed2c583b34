from fastapi import APIRouter
from app.api.v1.endpoints import punches, users, reports, activities, departments

api_router = APIRouter()

# Register routes
api_router.include_router(punches.router, prefix="/punches", tags=["Punches"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(reports.router, prefix="/reports", tags=["Reports"])
api_router.include_router(activities.router, prefix="/activities", tags=["Activity Types"])
api_router.include_router(departments.router, prefix="/departments", tags=["Departments"])
