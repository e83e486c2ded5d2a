import logging
from datetime import timedelta

from sqlalchemy.orm import Session
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.core.exceptions import (
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
    UpstreamFailure,
    ValidationError,
)
from app.models.user_models import User, UserRole, FACULTY_ROLES
from app.schemas.backend_schemas.user_schemas import StudentRegisterSchema, FacultyInviteSchema
from app.schemas.backend_schemas.password_update_schemas import PasswordUpdateIn
from app.services import mail_service
from app.services.authorization import Caller, ensure, can_manage_users, can_delete_user
from app.utils.clock import utc_now
from app.utils.hashing import (
    get_password_hash,
    verify_password,
    gen_temp_password,
    gen_reset_token,
)

logger = logging.getLogger(__name__)


def _mask(secret: str) -> str:
    if not secret or len(secret) < 4:
        return "****"
    return "*" * (len(secret) - 4) + secret[-4:]


def _normalize_email(email: str) -> str:
    return str(email).strip().lower()


def _commit_unique(db: Session, message: str) -> None:
    # races between the existence check and the insert end up here
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError(message)


# -------------------------
# REGISTRATION + LOGIN
# -------------------------
def register_student(db: Session, payload: StudentRegisterSchema) -> User:
    email = _normalize_email(payload.email)

    if db.query(User).filter(User.email == email).first():
        raise ValidationError("This email is already registered")

    if db.query(User).filter(User.roll_number == payload.roll_number).first():
        raise ValidationError("This Roll Number is already registered")

    user = User(
        name=payload.name,
        email=email,
        roll_number=payload.roll_number,
        password=get_password_hash(payload.password),
        role=UserRole.STUDENT,
    )
    db.add(user)
    _commit_unique(db, "This email or Roll Number is already registered")
    db.refresh(user)

    logger.info("Student registered id=%s roll_number=%s", user.id, user.roll_number)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter(User.email == _normalize_email(email)).first()
    if not user or not verify_password(password, user.password):
        raise UnauthenticatedError("Invalid email or password")
    return user


def logout(db: Session, user: User) -> None:
    user.token_version += 1
    db.commit()


# -------------------------
# PASSWORDS
# -------------------------
def request_password_reset(db: Session, email: str) -> str | None:
    """Store a reset token and email the link.

    Returns the token (None for unknown emails). The caller answers with
    the same message either way so accounts cannot be enumerated.
    """
    user = db.query(User).filter(User.email == _normalize_email(email)).first()
    if not user:
        logger.info("Password reset requested for unknown email")
        return None

    reset_token = gen_reset_token()
    user.password_reset_token = reset_token
    user.password_reset_token_expires_at = utc_now() + timedelta(
        hours=settings.PASSWORD_RESET_EXPIRE_HOURS
    )
    db.commit()

    logger.info("Generated reset token for user_id=%s (masked=%s)", user.id, _mask(reset_token))

    try:
        mail_service.send_email(
            to=user.email,
            subject="Reset Your Password - Departmental Portal",
            html=mail_service.password_reset_email_html(reset_token),
        )
    except UpstreamFailure:
        logger.warning("Password reset email failed for user_id=%s", user.id)

    return reset_token


def reset_password(db: Session, token: str, new_password: str) -> None:
    user = (
        db.query(User)
        .filter(
            User.password_reset_token == token,
            User.password_reset_token_expires_at >= utc_now(),
        )
        .first()
    )
    if not user:
        raise ValidationError("Invalid or expired reset token")

    user.password = get_password_hash(new_password)
    user.password_reset_token = None
    user.password_reset_token_expires_at = None
    user.token_version += 1
    db.commit()


def change_password(db: Session, user: User, payload: PasswordUpdateIn) -> None:
    if payload.new_password != payload.confirm_new_password:
        raise ValidationError("New passwords do not match")

    if not verify_password(payload.current_password, user.password):
        raise UnauthenticatedError("Current password incorrect")

    user.password = get_password_hash(payload.new_password)
    db.commit()


# -------------------------
# FACULTY MANAGEMENT (SUPER_ADMIN)
# -------------------------
def list_faculty(db: Session, caller: Caller) -> list[User]:
    ensure(can_manage_users(caller))
    return (
        db.query(User)
        .filter(User.role.in_(list(FACULTY_ROLES)))
        .order_by(desc(User.created_at))
        .all()
    )


def invite_faculty(db: Session, caller: Caller, payload: FacultyInviteSchema) -> tuple[User, str]:
    ensure(can_manage_users(caller), "Only HOD can invite new faculty")

    email = _normalize_email(payload.email)
    if db.query(User).filter(User.email == email).first():
        raise ValidationError("A user with this email already exists")

    temp_password = gen_temp_password()
    user = User(
        name=payload.name,
        email=email,
        password=get_password_hash(temp_password),
        role=UserRole(payload.role),
    )
    db.add(user)
    _commit_unique(db, "A user with this email already exists")
    db.refresh(user)

    logger.info("Faculty invited id=%s role=%s by user_id=%s", user.id, user.role.value, caller.id)

    try:
        mail_service.send_email(
            to=user.email,
            subject="Welcome to Departmental Portal - Your Account Details",
            html=mail_service.invitation_email_html(user.email, temp_password, user.role.value),
        )
    except UpstreamFailure:
        # the account exists either way; HOD can re-share credentials
        logger.warning("Invitation email failed for user_id=%s", user.id)

    return user, temp_password


def delete_user(db: Session, caller: Caller, user_id: str) -> None:
    ensure(can_manage_users(caller))
    if not can_delete_user(caller, user_id):
        raise ValidationError("You cannot delete your own account")

    user = db.query(User).filter(User.id == str(user_id)).first()
    if not user:
        raise NotFoundError("User not found")

    if user.role == UserRole.STUDENT:
        raise ForbiddenError("Student accounts cannot be deleted")

    db.delete(user)
    db.commit()
    logger.info("User deleted id=%s by user_id=%s", user_id, caller.id)
