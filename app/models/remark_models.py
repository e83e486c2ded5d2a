import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from app.db.database import Base
from app.utils.clock import utc_now


class Remark(Base):
    """Append-only reviewer note on an application. Rows are never updated."""

    __tablename__ = "remarks"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))

    content = Column(Text, nullable=False)

    # kept when the author account is deleted
    author_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    application_id = Column(
        String(36), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True
    )

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    author = relationship("User", back_populates="remarks")
    application = relationship("Application", back_populates="remarks")
