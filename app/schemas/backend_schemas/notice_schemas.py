from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.models.notice_models import NoticeCategory
from app.schemas.backend_schemas.user_schemas import UserSummary


class NoticeCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    category: NoticeCategory

    attachment_url: Optional[str] = None
    attachment_type: Optional[str] = None
    thumbnail_url: Optional[str] = None


class NoticeUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    category: Optional[NoticeCategory] = None

    attachment_url: Optional[str] = None
    attachment_type: Optional[str] = None
    thumbnail_url: Optional[str] = None


class NoticeResponse(BaseModel):
    id: str
    title: str
    content: str
    category: NoticeCategory

    attachment_url: Optional[str] = None
    attachment_type: Optional[str] = None
    thumbnail_url: Optional[str] = None

    author_id: str
    author: Optional[UserSummary] = None

    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
