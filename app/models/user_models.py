import uuid
import enum

from sqlalchemy import Column, Integer, String, DateTime, Enum as SAEnum
from sqlalchemy.orm import relationship

from app.db.database import Base
from app.utils.clock import utc_now


class UserRole(str, enum.Enum):
    STUDENT = "STUDENT"
    TEACHER = "TEACHER"
    CLERK = "CLERK"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


ADMIN_ROLES = {UserRole.ADMIN, UserRole.SUPER_ADMIN}
FACULTY_ROLES = {UserRole.ADMIN, UserRole.SUPER_ADMIN, UserRole.CLERK, UserRole.TEACHER}


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))

    name = Column(String, nullable=True)
    email = Column(String, unique=True, nullable=False, index=True)
    # students only
    roll_number = Column(String, unique=True, nullable=True)
    password = Column(String, nullable=False)

    role = Column(SAEnum(UserRole, name="user_role"), nullable=False, default=UserRole.STUDENT)

    password_reset_token = Column(String, unique=True, nullable=True)
    password_reset_token_expires_at = Column(DateTime(timezone=True), nullable=True)

    # JWT invalidation / global logout
    token_version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    notices = relationship("Notice", back_populates="author", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="student", cascade="all, delete-orphan")
    # deleting a user nulls Remark.author_id; remarks are never removed
    remarks = relationship("Remark", back_populates="author")
