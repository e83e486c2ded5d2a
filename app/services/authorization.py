"""
Role and ownership rules for every protected action.

All checks are pure functions of the caller and the owner/author id of the
resource; nothing here touches the database. Routers and services call
`ensure(...)` to turn a denial into a ForbiddenError.
"""

from pydantic import BaseModel

from app.core.exceptions import ForbiddenError
from app.models.user_models import UserRole, ADMIN_ROLES


class Caller(BaseModel):
    """Identity of the authenticated user for the current request."""

    id: str
    role: UserRole
    email: str

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES


def can_create_application(caller: Caller) -> bool:
    return caller.role == UserRole.STUDENT


def can_read_application(caller: Caller, student_id: str) -> bool:
    if caller.is_admin:
        return True
    return caller.role == UserRole.STUDENT and caller.id == str(student_id)


def can_review_application(caller: Caller) -> bool:
    # covers both status changes and remarks
    return caller.is_admin


def can_create_notice(caller: Caller) -> bool:
    return caller.is_admin


def can_modify_notice(caller: Caller, author_id: str) -> bool:
    if caller.role == UserRole.SUPER_ADMIN:
        return True
    return caller.role == UserRole.ADMIN and caller.id == str(author_id)


def can_manage_users(caller: Caller) -> bool:
    return caller.role == UserRole.SUPER_ADMIN


def can_delete_user(caller: Caller, target_id: str) -> bool:
    return can_manage_users(caller) and caller.id != str(target_id)


def can_request_upload(caller: Caller) -> bool:
    # any authenticated role; get_caller has already rejected anonymous requests
    return True


def ensure(allowed: bool, message: str = "Forbidden") -> None:
    if not allowed:
        raise ForbiddenError(message)
