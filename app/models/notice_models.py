import uuid
import enum

from sqlalchemy import Column, String, DateTime, ForeignKey, Text, Enum as SAEnum
from sqlalchemy.orm import relationship

from app.db.database import Base
from app.utils.clock import utc_now


class NoticeCategory(str, enum.Enum):
    GENERAL = "GENERAL"
    EXAMS = "EXAMS"
    EVENTS = "EVENTS"


class Notice(Base):
    __tablename__ = "notices"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))

    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)

    category = Column(
        SAEnum(NoticeCategory, name="notice_category"),
        nullable=False,
        default=NoticeCategory.GENERAL,
        index=True,
    )

    attachment_url = Column(String, nullable=True)
    attachment_type = Column(String, nullable=True)
    thumbnail_url = Column(String, nullable=True)

    author_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    author = relationship("User", back_populates="notices")
