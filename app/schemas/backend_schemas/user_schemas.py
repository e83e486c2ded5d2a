from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, Literal
from datetime import datetime

from app.models.user_models import UserRole


class UserSummary(BaseModel):
    id: str
    name: Optional[str] = None
    email: EmailStr
    role: UserRole

    class Config:
        from_attributes = True


class StudentSummary(BaseModel):
    id: str
    name: Optional[str] = None
    email: EmailStr
    roll_number: Optional[str] = None

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    id: str
    name: Optional[str] = None
    email: EmailStr
    roll_number: Optional[str] = None
    role: UserRole
    created_at: datetime

    class Config:
        from_attributes = True


class StudentRegisterSchema(BaseModel):
    email: EmailStr
    roll_number: str = Field(..., min_length=1)
    password: str = Field(..., min_length=8, max_length=128)
    name: Optional[str] = None

    @field_validator("roll_number")
    def validate_roll_number(cls, value):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Roll number is required")
        return cleaned


class RegisterResponse(BaseModel):
    message: str
    user: UserResponse


class LoginSchema(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class FacultyInviteSchema(BaseModel):
    email: EmailStr
    role: Literal["ADMIN", "SUPER_ADMIN", "CLERK", "TEACHER"]
    name: Optional[str] = None


class InviteResponse(BaseModel):
    message: str
    user: UserResponse
    # only populated when ENVIRONMENT=development
    debug_password: Optional[str] = None
