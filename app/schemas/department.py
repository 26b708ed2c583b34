"""
Department Schemas for request/response validation
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class DepartmentBase(BaseModel):
    d_name: str = Field(min_length=1, max_length=255)


class DepartmentCreate(DepartmentBase):
    pass


class DepartmentUpdate(DepartmentBase):
    pass


class DepartmentInDB(DepartmentBase):
    model_config = ConfigDict(from_attributes=True)

    d_id: int
    d_created_at: Optional[datetime] = None


class Department(DepartmentInDB):
    pass
