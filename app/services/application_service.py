import logging

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import desc

from app.core.exceptions import NotFoundError
from app.models.application_models import Application, ApplicationStatus
from app.models.remark_models import Remark
from app.schemas.backend_schemas.application_schemas import ApplicationCreate
from app.services.authorization import (
    Caller,
    ensure,
    can_create_application,
    can_read_application,
    can_review_application,
)
from app.utils.clock import utc_now
from app.utils.text import required_text

logger = logging.getLogger(__name__)


def _base_query(db: Session):
    return db.query(Application).options(
        selectinload(Application.student),
        selectinload(Application.remarks).selectinload(Remark.author),
    )


def get_application_or_404(db: Session, application_id: str) -> Application:
    application = _base_query(db).filter(Application.id == str(application_id)).first()
    if not application:
        raise NotFoundError("Application not found")
    return application


# -------------------------
# CREATE (students only)
# -------------------------
def create_application(db: Session, caller: Caller, payload: ApplicationCreate) -> Application:
    ensure(can_create_application(caller), "Only students can submit applications")

    application = Application(
        title=required_text(payload.title, "Title"),
        content=required_text(payload.content, "Content"),
        attachment_url=payload.attachment_url or None,
        status=ApplicationStatus.PENDING,
        student_id=caller.id,
    )
    db.add(application)
    db.commit()
    db.refresh(application)

    logger.info("Application created id=%s student_id=%s", application.id, caller.id)
    return application


# -------------------------
# LIST + GET (scoped)
# -------------------------
def list_applications(db: Session, caller: Caller) -> list[Application]:
    query = _base_query(db)
    if not caller.is_admin:
        query = query.filter(Application.student_id == caller.id)
    return query.order_by(desc(Application.created_at)).all()


def get_application(db: Session, caller: Caller, application_id: str) -> Application:
    application = get_application_or_404(db, application_id)
    ensure(can_read_application(caller, application.student_id))
    return application


# -------------------------
# REVIEW (admin tier)
# -------------------------
def set_application_status(
    db: Session, caller: Caller, application_id: str, new_status: ApplicationStatus
) -> Application:
    ensure(can_review_application(caller), "Only admins can update applications")

    application = get_application_or_404(db, application_id)

    # No transition rules: any status may be set from any other.
    old_status = application.status
    application.status = ApplicationStatus(new_status)
    application.updated_at = utc_now()
    db.commit()
    db.refresh(application)

    logger.info(
        "Application status changed id=%s %s -> %s by user_id=%s",
        application.id,
        getattr(old_status, "value", old_status),
        application.status.value,
        caller.id,
    )
    return application


def add_remark(db: Session, caller: Caller, application_id: str, content: str) -> Remark:
    ensure(can_review_application(caller), "Only admins can add remarks")

    application = get_application_or_404(db, application_id)

    remark = Remark(
        content=required_text(content, "Remark content"),
        author_id=caller.id,
        application_id=application.id,
    )
    db.add(remark)
    db.commit()
    db.refresh(remark)
    return remark
