from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.models.application_models import ApplicationStatus
from app.schemas.backend_schemas.user_schemas import UserSummary, StudentSummary


class ApplicationCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    attachment_url: Optional[str] = None


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class RemarkCreate(BaseModel):
    content: str = Field(..., min_length=1)


class RemarkResponse(BaseModel):
    id: str
    content: str
    author_id: Optional[str] = None
    application_id: str
    author: Optional[UserSummary] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ApplicationResponse(BaseModel):
    id: str
    title: str
    content: str
    attachment_url: Optional[str] = None
    status: ApplicationStatus

    student_id: str
    student: Optional[StudentSummary] = None
    remarks: list[RemarkResponse] = []

    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
