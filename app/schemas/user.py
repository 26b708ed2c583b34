"""
User Schemas for request/response validation
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class UserBase(BaseModel):
    u_name: str = Field(min_length=1, max_length=255)
    u_email: str = Field(min_length=3, max_length=255)
    u_position: Optional[str] = None
    u_department_id: Optional[int] = None
    u_auto_checkout_midnight: bool = False


class UserCreate(UserBase):
    u_stamp_key: Optional[str] = None  # Generated when omitted


class UserUpdate(BaseModel):
    u_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    u_email: Optional[str] = Field(default=None, min_length=3, max_length=255)
    u_stamp_key: Optional[str] = Field(default=None, min_length=1, max_length=64)
    u_position: Optional[str] = None
    u_department_id: Optional[int] = None
    u_auto_checkout_midnight: Optional[bool] = None


class UserInDB(UserBase):
    model_config = ConfigDict(from_attributes=True)

    u_id: int
    u_stamp_key: str
    u_created_at: Optional[datetime] = None
    u_updated_at: Optional[datetime] = None


class User(UserInDB):
    pass


class AutoCheckoutUpdate(BaseModel):
    u_auto_checkout_midnight: bool
