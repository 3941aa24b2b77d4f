"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr


class UserRead(BaseModel):
    id: int
    name: str
    email: EmailStr
    created_at: datetime | None
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class UserSummaryRead(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


__all__ = ["UserCreate", "UserRead", "UserSummaryRead"]
