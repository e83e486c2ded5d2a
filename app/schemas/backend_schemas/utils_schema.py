from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class ForgetPasswordSchema(BaseModel):
    email: EmailStr


class ResetPasswordSchema(BaseModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=8, max_length=128)


class MessageResponse(BaseModel):
    message: str


class ForgetPasswordResponse(MessageResponse):
    # only populated when ENVIRONMENT=development
    debug_token: Optional[str] = None
