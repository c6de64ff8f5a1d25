from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from core.enums import UserRole, UserStatus
from schemas.validators import NonBlankStr


class UserCreate(BaseModel):
    """Schema for creating an account (admin action or self-registration)"""
    name: NonBlankStr
    email: EmailStr = Field(..., description="Login email (unique, case-insensitive)")
    password: str = Field(..., min_length=6, description="Plain password (min 6 characters)")
    role: UserRole = UserRole.STAFF
    status: UserStatus = UserStatus.ACTIVE


class UserUpdate(BaseModel):
    """Schema for updating an account; a blank password leaves it unchanged"""
    name: NonBlankStr | None = None
    email: EmailStr | None = None
    password: str | None = None
    role: UserRole | None = None
    status: UserStatus | None = None


class UserResponse(BaseModel):
    """Schema for user responses (excludes password)"""
    id: str
    name: str
    email: str
    role: str
    status: UserStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RegisterRequest(BaseModel):
    """Self-registration; accounts created this way are always Staff"""
    name: NonBlankStr
    email: EmailStr
    password: str = Field(..., min_length=6)
